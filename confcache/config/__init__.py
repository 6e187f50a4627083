"""
Configuration cache components.

This module provides the pieces that turn a key into a loaded configuration:
- ConfigurationKey: immutable identifier resolving to a file
- ConfigurationLoader: format-bound read/write of one file
- Loader factories: directory setup plus format selection
- Configuration: one loaded document and its typed view
- ConfigurationRegistry: at-most-once initialising cache of configurations
"""

from .key import ConfigurationKey
from .loader import (
    ConfigurationLoader, JsonConfigurationLoader, HoconConfigurationLoader,
    YamlConfigurationLoader, open_sink
)
from .factory import (
    LoaderFactory, create_loader, loader_factory_for,
    JSON_LOADER, HOCON_LOADER, YAML_LOADER
)
from .binding import bind, unbind
from .configuration import Configuration
from .registry import ConfigurationRegistry

__all__ = [
    # Keys
    'ConfigurationKey',

    # Loaders
    'ConfigurationLoader',
    'JsonConfigurationLoader',
    'HoconConfigurationLoader',
    'YamlConfigurationLoader',
    'open_sink',

    # Factories
    'LoaderFactory',
    'create_loader',
    'loader_factory_for',
    'JSON_LOADER',
    'HOCON_LOADER',
    'YAML_LOADER',

    # Binding
    'bind',
    'unbind',

    # Instances and registry
    'Configuration',
    'ConfigurationRegistry'
]
