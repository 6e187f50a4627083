"""
Configuration keys.

A key identifies one configuration document: where it is stored and which
typed shape (if any) the document is bound to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from confcache.core.enums import ConfigFormat


@dataclass(frozen=True)
class ConfigurationKey:
    """
    Immutable identifier of one configuration document.

    The path is made absolute on construction, so equal keys always resolve
    to the same file.
    """

    path: Path
    config_type: Optional[type] = None
    name: str = field(default="")

    def __post_init__(self):
        resolved = Path(self.path).expanduser().resolve()
        object.__setattr__(self, 'path', resolved)
        if not self.name:
            object.__setattr__(self, 'name', resolved.stem)

    @classmethod
    def of(cls, config_type: Optional[type], path: Union[str, Path], name: Optional[str] = None) -> 'ConfigurationKey':
        """Create a key for a typed document stored at `path`."""
        return cls(path=Path(path), config_type=config_type, name=name or "")

    @classmethod
    def in_directory(cls, name: str, directory: Union[str, Path],
                     format: ConfigFormat = ConfigFormat.HOCON,
                     config_type: Optional[type] = None) -> 'ConfigurationKey':
        """Create a key for `<directory>/<name>.<extension>`."""
        return cls(path=Path(directory) / f"{name}.{format.extension}", config_type=config_type, name=name)

    @property
    def type_name(self) -> str:
        if self.config_type is None:
            return "node"
        return getattr(self.config_type, '__name__', repr(self.config_type))

    def __str__(self) -> str:
        return f"{self.name}[{self.type_name}]"
