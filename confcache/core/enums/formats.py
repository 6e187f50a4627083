"""
Serialization format enums.
"""

from enum import Enum


class ConfigFormat(Enum):
    """Supported configuration document formats."""
    JSON = "json"
    HOCON = "hocon"
    YAML = "yaml"

    @property
    def extension(self) -> str:
        """Default file extension for documents in this format."""
        return _EXTENSIONS[self]


_EXTENSIONS = {
    ConfigFormat.JSON: "json",
    ConfigFormat.HOCON: "conf",
    ConfigFormat.YAML: "yaml",
}
