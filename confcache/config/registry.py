"""
Configuration registry.

This module provides the registry that hands out one Configuration per key.
Each key is bootstrapped (directory creation, loader construction and the
initial load) at most once, however many threads ask for it at the same time.
"""

import threading
from typing import Any, Dict, Hashable, List, Optional, Union

from .configuration import Configuration
from .factory import LoaderFactory, loader_factory_for
from .key import ConfigurationKey
from .loader import ConfigurationLoader
from confcache.core.enums import ConfigFormat
from confcache.core.exceptions import BootstrapFailure, ConfigurationError
from confcache.logger import get_confcache_logger
from confcache.settings import RegistrySettings


class _Slot:
    """Per-key bootstrap state shared by the winning thread and its waiters."""

    __slots__ = ('ready', 'owner', 'configuration', 'error')

    def __init__(self):
        self.ready = threading.Event()
        self.owner = threading.get_ident()
        self.configuration: Optional[Configuration] = None
        self.error: Optional[BootstrapFailure] = None


class ConfigurationRegistry:
    """
    Lazily initialising cache of key -> Configuration.

    The registry lock only guards the slot table, so a slow bootstrap for one
    key never blocks callers asking for another. Callers racing on the same
    key wait on that key's slot and receive the winner's instance, or its
    failure. A failed bootstrap leaves nothing behind: the next call for the
    key starts over.
    """

    def __init__(self, settings: Optional[RegistrySettings] = None):
        self.settings = settings or RegistrySettings()
        self.logger = get_confcache_logger(component="ConfigurationRegistry")
        self._lock = threading.Lock()
        self._slots: Dict[Hashable, _Slot] = {}
        self._default_factory = loader_factory_for(
            self.settings.default_format,
            encoding=self.settings.encoding,
            missing_ok=self.settings.missing_ok
        )

        self.logger.info("ConfigurationRegistry initialized",
                         config_dir=str(self.settings.config_dir),
                         default_format=self.settings.default_format.value)

    def key(self, name: str, config_type: Optional[type] = None,
            format: Optional[ConfigFormat] = None) -> ConfigurationKey:
        """Build a key for `name` inside the configured directory."""
        return ConfigurationKey.in_directory(
            name, self.settings.config_dir, format or self.settings.default_format, config_type
        )

    def get_or_create(self, loader_factory: Union[LoaderFactory, ConfigurationLoader],
                      key: ConfigurationKey) -> Configuration:
        """
        Get the configuration for a key, bootstrapping it on first use.

        Args:
            loader_factory: A callable building a loader from the key, or an
                already bound loader (used as is, no directory is created)
            key: Configuration key

        Returns:
            The fully loaded configuration, identical for every caller

        Raises:
            BootstrapFailure: If creating the loader or the initial load failed
        """
        if isinstance(loader_factory, ConfigurationLoader):
            loader = loader_factory
            loader_factory = lambda _key: loader

        with self._lock:
            slot = self._slots.get(key)
            winner = slot is None
            if winner:
                slot = _Slot()
                self._slots[key] = slot

        if winner:
            return self._bootstrap(slot, loader_factory, key)
        return self._await(slot, key)

    def get_or_create_default(self, key: ConfigurationKey) -> Configuration:
        """Get or create a configuration using the default format's loader."""
        return self.get_or_create(self._default_factory, key)

    def get(self, key: Hashable) -> Optional[Configuration]:
        """Return the configuration for a key if it is already loaded."""
        with self._lock:
            slot = self._slots.get(key)
        if slot is None or not slot.ready.is_set():
            return None
        return slot.configuration

    def keys(self) -> List[Hashable]:
        """List keys whose configuration finished loading."""
        with self._lock:
            return [key for key, slot in self._slots.items() if slot.configuration is not None]

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self.keys())

    def _bootstrap(self, slot: _Slot, loader_factory: LoaderFactory, key: Hashable) -> Configuration:
        self.logger.debug("Bootstrapping configuration", key=str(key), path=_path_of(key))
        try:
            configuration = Configuration(key, loader_factory(key))
            configuration.load()
        except BaseException as e:
            if isinstance(e, BootstrapFailure):
                failure = e
            else:
                reason = e.reason if isinstance(e, ConfigurationError) else (str(e) or type(e).__name__)
                failure = BootstrapFailure(str(key), _path_of(key), reason)
                failure.__cause__ = e
            self._abandon(slot, key, failure)
            self.logger.error("Configuration bootstrap failed", key=str(key), error=str(e))
            if failure is e or not isinstance(e, Exception):
                raise
            raise failure from e

        slot.configuration = configuration
        slot.ready.set()
        self.logger.info("Configuration registered", key=str(key), path=_path_of(key))
        return configuration

    def _abandon(self, slot: _Slot, key: Hashable, failure: BootstrapFailure):
        # drop the slot before releasing waiters so a retry cannot observe it
        with self._lock:
            if self._slots.get(key) is slot:
                del self._slots[key]
        slot.error = failure
        slot.ready.set()

    def _await(self, slot: _Slot, key: Hashable) -> Configuration:
        if not slot.ready.is_set() and slot.owner == threading.get_ident():
            raise BootstrapFailure(str(key), _path_of(key), "recursive bootstrap of the same key")

        slot.ready.wait()
        if slot.error is not None:
            raise BootstrapFailure(slot.error.config_key, slot.error.path, slot.error.reason) from slot.error
        return slot.configuration


def _path_of(key: Any) -> Optional[str]:
    path = getattr(key, 'path', None)
    return str(path) if path is not None else None
