from confcache.config import (
    ConfigurationKey, ConfigurationLoader, JsonConfigurationLoader,
    HoconConfigurationLoader, YamlConfigurationLoader, create_loader,
    loader_factory_for, JSON_LOADER, HOCON_LOADER, YAML_LOADER,
    Configuration, ConfigurationRegistry
)
from confcache.core import (
    ConfCacheError, ConfigurationError, BootstrapFailure, LoadFailure,
    SaveFailure, BindingFailure, ConfigFormat
)
from confcache.logger import init_logger
from confcache.settings import RegistrySettings


def create_registry(settings: RegistrySettings = None, configure_logging: bool = False) -> ConfigurationRegistry:
    """
    Create a configuration registry.

    The registry is meant to be built once by whoever bootstraps the process
    and passed to the code that needs it.
    """
    settings = settings or RegistrySettings()
    if configure_logging:
        init_logger(settings)
    return ConfigurationRegistry(settings)


__all__ = [
    'ConfigurationKey',
    'ConfigurationLoader',
    'JsonConfigurationLoader',
    'HoconConfigurationLoader',
    'YamlConfigurationLoader',
    'create_loader',
    'loader_factory_for',
    'JSON_LOADER',
    'HOCON_LOADER',
    'YAML_LOADER',
    'Configuration',
    'ConfigurationRegistry',
    'ConfCacheError',
    'ConfigurationError',
    'BootstrapFailure',
    'LoadFailure',
    'SaveFailure',
    'BindingFailure',
    'ConfigFormat',
    'RegistrySettings',
    'create_registry'
]
