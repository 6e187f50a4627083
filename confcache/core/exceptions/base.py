"""
Base exception classes for the confcache package.
"""


class ConfCacheError(Exception):
    """Base exception for all confcache errors."""
    pass


class ConfigurationError(ConfCacheError):
    """Base exception for configuration errors."""

    def __init__(self, config_key: str = None, path: str = None, reason: str = None):
        self.config_key = config_key
        self.path = path
        self.reason = reason
        message = "Configuration error"
        if config_key:
            message += f" for '{config_key}'"
        if path:
            message += f" at '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
