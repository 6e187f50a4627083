"""
Test suite for loader factories.
"""

import pytest

from confcache.config import (
    ConfigurationKey, JsonConfigurationLoader, HoconConfigurationLoader,
    YamlConfigurationLoader, JSON_LOADER, HOCON_LOADER, YAML_LOADER,
    create_loader, loader_factory_for
)
from confcache.core.enums import ConfigFormat
from confcache.core.exceptions import BootstrapFailure


@pytest.mark.parametrize("factory, loader_cls", [
    (JSON_LOADER, JsonConfigurationLoader),
    (HOCON_LOADER, HoconConfigurationLoader),
    (YAML_LOADER, YamlConfigurationLoader),
])
def test_standard_factories_bind_loader_to_key_path(tmp_path, factory, loader_cls):
    key = ConfigurationKey.of(None, tmp_path / "a" / "b" / "app.cfg")

    loader = factory(key)

    assert isinstance(loader, loader_cls)
    assert loader.path == key.path
    assert key.path.parent.is_dir()
    assert not key.path.exists()


def test_directory_creation_is_idempotent(tmp_path):
    first = ConfigurationKey.of(None, tmp_path / "shared" / "one.conf")
    second = ConfigurationKey.of(None, tmp_path / "shared" / "two.conf")

    HOCON_LOADER(first)
    HOCON_LOADER(second)
    HOCON_LOADER(first)

    assert (tmp_path / "shared").is_dir()


def test_directory_failure_is_bootstrap_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    key = ConfigurationKey.of(None, blocker / "nested" / "app.json")

    with pytest.raises(BootstrapFailure) as excinfo:
        JSON_LOADER(key)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert str(key.path) in str(excinfo.value)


def test_create_loader_with_custom_constructor(tmp_path):
    seen = []
    key = ConfigurationKey.of(None, tmp_path / "custom" / "app.json")

    def path_to_loader(path):
        seen.append(path)
        return JsonConfigurationLoader(path, encoding="latin-1")

    loader = create_loader(key, path_to_loader)

    assert seen == [key.path]
    assert loader.encoding == "latin-1"


def test_loader_factory_for_forwards_options(tmp_path):
    factory = loader_factory_for(ConfigFormat.YAML, missing_ok=False, encoding="utf-16")

    loader = factory(ConfigurationKey.of(None, tmp_path / "app.yaml"))

    assert isinstance(loader, YamlConfigurationLoader)
    assert loader.missing_ok is False
    assert loader.encoding == "utf-16"
    assert factory.__name__ == "YAML_LOADER"
