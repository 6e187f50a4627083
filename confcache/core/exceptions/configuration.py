"""
Configuration lifecycle exceptions.

Each failure kind maps to one step of a configuration's life: first-time
bootstrap, reading, writing, and conversion to or from a typed object.
"""

from .base import ConfigurationError


class BootstrapFailure(ConfigurationError):
    """Raised when a key could not be initialised inside the registry."""

    def __init__(self, config_key: str = None, path: str = None, reason: str = None):
        super().__init__(config_key, path, reason or "bootstrap failed")


class LoadFailure(ConfigurationError):
    """Raised when the backing document could not be read or parsed."""

    def __init__(self, config_key: str = None, path: str = None, reason: str = None):
        super().__init__(config_key, path, reason or "unable to load configuration")


class SaveFailure(ConfigurationError):
    """Raised when the backing document could not be written."""

    def __init__(self, config_key: str = None, path: str = None, reason: str = None):
        super().__init__(config_key, path, reason or "unable to save configuration")


class BindingFailure(ConfigurationError):
    """Raised when a node cannot be converted to or from a typed object."""

    def __init__(self, type_name: str, reason: str = None, config_key: str = None):
        self.type_name = type_name
        super().__init__(config_key, None, f"cannot bind '{type_name}': {reason}" if reason else f"cannot bind '{type_name}'")
