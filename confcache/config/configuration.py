"""
Configuration instances.

A Configuration pairs one key with the loader that reads and writes its
file and holds the most recently loaded node, plus the typed object bound
from it when the key carries a type.
"""

from copy import deepcopy
from typing import Any, Dict, Generic, Optional, TypeVar

from .binding import bind, unbind
from .key import ConfigurationKey
from .loader import ConfigurationLoader
from confcache.core.exceptions import LoadFailure, SaveFailure
from confcache.logger import get_confcache_logger

T = TypeVar('T')

_MISSING = object()


class Configuration(Generic[T]):
    """
    One loaded configuration document.

    Instances are not locked: callers sharing an instance must serialize
    their own `load` / `save` calls.
    """

    def __init__(self, key: ConfigurationKey, loader: ConfigurationLoader):
        self._key = key
        self._loader = loader
        self._node: Dict[str, Any] = {}
        self._instance: Optional[T] = None
        self.logger = get_confcache_logger(component="Configuration", config=key.name)

    @property
    def key(self) -> ConfigurationKey:
        return self._key

    @property
    def loader(self) -> ConfigurationLoader:
        return self._loader

    @property
    def node(self) -> Dict[str, Any]:
        """The raw document as last loaded (or as last prepared for saving)."""
        return self._node

    @property
    def instance(self) -> Optional[T]:
        """The typed object bound from the node, or None for untyped keys."""
        return self._instance

    @instance.setter
    def instance(self, value: T):
        self._instance = value

    def load(self) -> None:
        """
        Read the document and replace the held node (and typed object).

        Raises:
            LoadFailure: If the document cannot be read or parsed
            BindingFailure: If the document does not fit the key's type
        """
        try:
            node = self._loader.load()
        except Exception as e:
            self.logger.error("Failed to load configuration", path=str(self._key.path), error=str(e))
            raise LoadFailure(str(self._key), str(self._key.path), str(e) or type(e).__name__) from e

        if node is None:
            node = {}
        if not isinstance(node, dict):
            raise LoadFailure(str(self._key), str(self._key.path),
                              f"document root must be a mapping, got {type(node).__name__}")

        instance = bind(node, self._key.config_type)
        self._node = node
        self._instance = instance
        self.logger.debug("Configuration loaded", path=str(self._key.path))

    def reload(self) -> 'Configuration[T]':
        """Load again from storage and return self."""
        self.load()
        return self

    def save(self) -> None:
        """
        Write the held node back to storage.

        For typed keys the typed object is converted into the node first,
        so changes made to `instance` are what gets written.

        Raises:
            BindingFailure: If the typed object cannot be converted
            SaveFailure: If the document cannot be written
        """
        if self._key.config_type is not None and self._instance is not None:
            self._node = unbind(self._instance, self._key.config_type)

        try:
            self._loader.save(self._node)
        except Exception as e:
            self.logger.error("Failed to save configuration", path=str(self._key.path), error=str(e))
            raise SaveFailure(str(self._key), str(self._key.path), str(e) or type(e).__name__) from e
        self.logger.debug("Configuration saved", path=str(self._key.path))

    def get(self, *path: str, default: Any = None) -> Any:
        """
        Look up a value in the node.

        Example:
            config.get("database", "port", default=5432)
        """
        current: Any = self._node
        for part in path:
            if not isinstance(current, dict):
                return default
            current = current.get(part, _MISSING)
            if current is _MISSING:
                return default
        return current

    def set(self, value: Any, *path: str) -> None:
        """
        Set a value in the node, creating intermediate mappings.

        Typed configurations are edited through `instance`, since `save`
        rebuilds their node from it.

        Raises:
            TypeError: If the key is typed, or the new root is not a mapping
        """
        if self._key.config_type is not None:
            raise TypeError(
                f"configuration '{self._key}' is typed; edit its instance instead of the node"
            )
        if not path:
            if not isinstance(value, dict):
                raise TypeError("the document root must be a mapping")
            self._node = deepcopy(value)
            return

        current = self._node
        for part in path[:-1]:
            child = current.get(part)
            if not isinstance(child, dict):
                child = {}
                current[part] = child
            current = child
        current[path[-1]] = value

    def __repr__(self) -> str:
        return f"Configuration(key={self._key!s}, loader={self._loader!r})"
