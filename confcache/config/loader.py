"""
Format-bound configuration loaders.

This module provides the loader base class and one implementation per
supported format. A loader is bound to a single file and offers two
operations: read the whole document into a node, and replace the whole
document with a node.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, TextIO
import json
import os
import re

import yaml
from pyhocon import ConfigFactory, ConfigTree, HOCONConverter
from pyhocon.config_tree import NoneValue

from confcache.core.enums import ConfigFormat

Node = Dict[str, Any]

# keys that HOCON reads back verbatim without quoting
BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")

# create, truncate, write and synchronous data writes where the platform supports them
SINK_FLAGS = os.O_CREAT | os.O_TRUNC | os.O_WRONLY | getattr(os, 'O_DSYNC', 0)


@contextmanager
def open_sink(path: Path, encoding: str = "utf-8") -> Iterator[TextIO]:
    """
    Open `path` for a whole-file replacement.

    The file is created if absent and truncated otherwise. Data is flushed
    and fsync'ed before the handle is closed.
    """
    fd = os.open(path, SINK_FLAGS, 0o644)
    with os.fdopen(fd, 'w', encoding=encoding) as handle:
        yield handle
        handle.flush()
        os.fsync(handle.fileno())


class ConfigurationLoader(ABC):
    """
    Abstract base class for configuration loaders.

    Subclasses only convert between text and nodes; file handling,
    the missing-file policy and durable writes live here.
    """

    format: ConfigFormat = None

    def __init__(self, path: Path, encoding: str = "utf-8", missing_ok: bool = True):
        self.path = Path(path)
        self.encoding = encoding
        self.missing_ok = missing_ok

    def load(self) -> Node:
        """Read and parse the whole document."""
        try:
            with open(self.path, 'r', encoding=self.encoding) as f:
                text = f.read()
        except FileNotFoundError:
            if self.missing_ok:
                return {}
            raise

        if not text.strip():
            return {}
        return self.parse(text)

    def save(self, node: Node) -> None:
        """Replace the whole document with `node`."""
        text = self.dump(node)
        with open_sink(self.path, self.encoding) as f:
            f.write(text)

    @abstractmethod
    def parse(self, text: str) -> Node:
        """Convert document text into a node."""
        pass

    @abstractmethod
    def dump(self, node: Node) -> str:
        """Convert a node into document text."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self.path)!r})"


class JsonConfigurationLoader(ConfigurationLoader):
    """Loader for JSON documents."""

    format = ConfigFormat.JSON

    def parse(self, text: str) -> Node:
        return json.loads(text)

    def dump(self, node: Node) -> str:
        return json.dumps(node, indent=2, ensure_ascii=False) + "\n"


class YamlConfigurationLoader(ConfigurationLoader):
    """Loader for YAML documents."""

    format = ConfigFormat.YAML

    def parse(self, text: str) -> Node:
        return yaml.safe_load(text) or {}

    def dump(self, node: Node) -> str:
        return yaml.safe_dump(node, default_flow_style=False, indent=2,
                              sort_keys=False, allow_unicode=True)


class HoconConfigurationLoader(ConfigurationLoader):
    """Loader for HOCON documents."""

    format = ConfigFormat.HOCON

    def parse(self, text: str) -> Node:
        return _plain(ConfigFactory.parse_string(text))

    def dump(self, node: Node) -> str:
        return HOCONConverter.to_hocon(_tree(node)) + "\n"


def _quote_key(key: str) -> str:
    """
    Quote a key unless it is a bare identifier.

    Quotes inside the key are written as \\u0022 since pyhocon splits key
    paths on the first closing quote it sees, escaped or not.
    """
    if BARE_KEY.match(key):
        return key
    return '"' + json.dumps(key, ensure_ascii=False)[1:-1].replace('\\"', '\\u0022') + '"'


def _unquote_key(key: str) -> str:
    """Undo `_quote_key` on a key read back by pyhocon."""
    if len(key) >= 2 and key.startswith('"') and key.endswith('"'):
        return json.loads(key)
    # pyhocon strips quotes from keys without path separators but keeps escapes
    if '\\' in key:
        return json.loads('"' + key + '"')
    return key


def _tree(value: Any) -> Any:
    """
    Convert plain dicts and lists into a pyhocon tree.

    Keys are assigned directly rather than through `ConfigTree.put`, which
    would read a dotted key as a path.
    """
    if isinstance(value, dict):
        tree = ConfigTree()
        for key, item in value.items():
            tree[_quote_key(str(key))] = _tree(item)
        return tree
    if isinstance(value, (list, tuple)):
        return [_tree(item) for item in value]
    return value


def _plain(value: Any) -> Any:
    """Convert a pyhocon tree into plain dicts and lists."""
    if isinstance(value, ConfigTree):
        return {_unquote_key(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, NoneValue):
        return None
    return value


LOADERS = {
    ConfigFormat.JSON: JsonConfigurationLoader,
    ConfigFormat.HOCON: HoconConfigurationLoader,
    ConfigFormat.YAML: YamlConfigurationLoader,
}
