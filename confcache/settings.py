"""
Registry settings.

This module defines the settings object a process builds once and hands to
its ConfigurationRegistry: where documents live, which format new keys use
by default, and how the package logs.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any
from enum import Enum

from confcache.core.enums import ConfigFormat


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class RegistrySettings:
    """
    Settings for a ConfigurationRegistry.

    `missing_ok` fixes the policy for a key whose file does not exist yet:
    when true the initial load yields an empty document, when false it fails
    with LoadFailure (escalated to BootstrapFailure inside the registry).
    """

    config_dir: Path = Path("settings")
    default_format: ConfigFormat = ConfigFormat.HOCON
    encoding: str = "utf-8"
    missing_ok: bool = True

    # Logging
    log_level: str = LogLevel.INFO.value
    json_logs: bool = False

    def __post_init__(self):
        self.config_dir = Path(self.config_dir)
        if isinstance(self.default_format, str):
            self.default_format = ConfigFormat(self.default_format)
        self.log_level = LogLevel(str(self.log_level).upper()).value

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            'config_dir': str(self.config_dir),
            'default_format': self.default_format.value,
            'encoding': self.encoding,
            'missing_ok': self.missing_ok,
            'log_level': self.log_level,
            'json_logs': self.json_logs
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegistrySettings':
        """Create settings from dictionary."""
        settings = cls()

        return cls(
            config_dir=data.get('config_dir', settings.config_dir),
            default_format=data.get('default_format', settings.default_format),
            encoding=data.get('encoding', settings.encoding),
            missing_ok=data.get('missing_ok', settings.missing_ok),
            log_level=data.get('log_level', settings.log_level),
            json_logs=data.get('json_logs', settings.json_logs)
        )


def get_default_settings() -> RegistrySettings:
    """Get default registry settings."""
    return RegistrySettings()


def get_debug_settings(config_dir: str = "settings") -> RegistrySettings:
    """Get settings with debug logging."""
    return RegistrySettings(
        config_dir=Path(config_dir),
        log_level=LogLevel.DEBUG.value
    )
