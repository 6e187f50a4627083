"""
Shared pytest configuration and fixtures for the confcache tests.
"""

import threading

import pytest

from confcache.config import ConfigurationRegistry, HoconConfigurationLoader, create_loader
from confcache.settings import RegistrySettings


@pytest.fixture
def config_dir(tmp_path):
    """A configuration directory that does not exist yet."""
    return tmp_path / "cfg"


@pytest.fixture
def registry(config_dir):
    """A fresh registry per test, so no cached configuration leaks between tests."""
    return ConfigurationRegistry(RegistrySettings(config_dir=config_dir))


class RecordingHoconLoader(HoconConfigurationLoader):
    """HOCON loader that records every read and can be held open by the test."""

    def __init__(self, path, recorder, **kwargs):
        super().__init__(path, **kwargs)
        self.recorder = recorder

    def load(self):
        self.recorder.reads.append(self.path)
        if self.recorder.gate is not None:
            self.recorder.gate.wait(timeout=5)
        if self.recorder.fail_with is not None:
            raise self.recorder.fail_with
        return super().load()


class LoaderRecorder:
    """Loader factory that counts invocations and reads."""

    def __init__(self):
        self.calls = []
        self.reads = []
        self.gate = None
        self.fail_with = None
        self._lock = threading.Lock()

    def __call__(self, key):
        with self._lock:
            self.calls.append(key)
        return create_loader(key, lambda path: RecordingHoconLoader(path, self))


@pytest.fixture
def recorder():
    return LoaderRecorder()
