"""
Core exceptions for the confcache package.

This module provides all exception classes used throughout confcache,
with a single base class so callers can catch everything at once.
"""

# Base exceptions
from .base import (
    ConfCacheError,
    ConfigurationError
)

# Configuration lifecycle exceptions
from .configuration import (
    BootstrapFailure,
    LoadFailure,
    SaveFailure,
    BindingFailure
)

__all__ = [
    # Base exceptions
    'ConfCacheError',
    'ConfigurationError',

    # Lifecycle exceptions
    'BootstrapFailure',
    'LoadFailure',
    'SaveFailure',
    'BindingFailure'
]
