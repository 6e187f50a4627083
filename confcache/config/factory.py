"""
Loader factories.

A loader factory turns a ConfigurationKey into a loader bound to the key's
file. The standard factories share `create_loader`, which prepares the
directory before binding the format-specific loader to the path.
"""

from pathlib import Path
from typing import Callable

from .key import ConfigurationKey
from .loader import (
    ConfigurationLoader, JsonConfigurationLoader, HoconConfigurationLoader,
    YamlConfigurationLoader, LOADERS
)
from confcache.core.enums import ConfigFormat
from confcache.core.exceptions import BootstrapFailure
from confcache.logger import get_confcache_logger

LoaderFactory = Callable[[ConfigurationKey], ConfigurationLoader]

logger = get_confcache_logger(component="LoaderFactory")


def create_loader(key: ConfigurationKey,
                  path_to_loader: Callable[[Path], ConfigurationLoader]) -> ConfigurationLoader:
    """
    Create the parent directories of the key's path and bind a loader to it.

    Args:
        key: Configuration key
        path_to_loader: Builds a format-specific loader for a path

    Returns:
        The loader bound to the key's path

    Raises:
        BootstrapFailure: If the path cannot be resolved or its directory created
    """
    try:
        path = Path(key.path)
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Unable to create configuration directory", key=str(key), error=str(e))
        raise BootstrapFailure(str(key), str(key.path), "unable to create configuration directory") from e

    loader = path_to_loader(path)
    logger.debug("Loader created", key=str(key), loader=type(loader).__name__)
    return loader


def loader_factory_for(format: ConfigFormat, **loader_options) -> LoaderFactory:
    """
    Build a loader factory for a format.

    Args:
        format: Document format
        **loader_options: Passed to the loader (e.g. `encoding`, `missing_ok`)
    """
    loader_cls = LOADERS[format]

    def factory(key: ConfigurationKey) -> ConfigurationLoader:
        return create_loader(key, lambda path: loader_cls(path, **loader_options))

    factory.__name__ = f"{format.name}_LOADER"
    return factory


JSON_LOADER: LoaderFactory = lambda key: create_loader(key, JsonConfigurationLoader)
HOCON_LOADER: LoaderFactory = lambda key: create_loader(key, HoconConfigurationLoader)
YAML_LOADER: LoaderFactory = lambda key: create_loader(key, YamlConfigurationLoader)
