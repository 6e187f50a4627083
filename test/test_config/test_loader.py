"""
Test suite for the format loaders.
Tests round trips for every format, the missing-file policy and durable whole-file writes.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import yaml

from confcache.config.loader import (
    JsonConfigurationLoader, HoconConfigurationLoader, YamlConfigurationLoader,
    SINK_FLAGS, open_sink
)


class TestLoaders(unittest.TestCase):
    """Round trips and file handling for the JSON, HOCON and YAML loaders."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)
        self.document = {
            'app': {
                'name': 'demo app',
                'port': 8080,
                'ratio': 0.75,
                'debug': True,
                'tags': ['alpha', 'beta']
            },
            'workers': 4
        }

    def tearDown(self):
        self._tmp.cleanup()

    def test_json_round_trip(self):
        loader = JsonConfigurationLoader(self.directory / "app.json")
        loader.save(self.document)

        self.assertEqual(loader.load(), self.document)
        self.assertEqual(json.loads((self.directory / "app.json").read_text()), self.document)

    def test_yaml_round_trip(self):
        loader = YamlConfigurationLoader(self.directory / "app.yaml")
        loader.save(self.document)

        self.assertEqual(loader.load(), self.document)
        self.assertEqual(yaml.safe_load((self.directory / "app.yaml").read_text()), self.document)

    def test_hocon_round_trip(self):
        loader = HoconConfigurationLoader(self.directory / "app.conf")
        loader.save(self.document)

        loaded = loader.load()

        self.assertEqual(loaded, self.document)
        self.assertIs(type(loaded), dict)
        self.assertIs(type(loaded['app']), dict)

    def test_hocon_unquoted_object(self):
        path = self.directory / "app.conf"
        path.write_text("{a: 1}", encoding="utf-8")

        self.assertEqual(HoconConfigurationLoader(path).load(), {'a': 1})

    def test_hocon_nested_paths(self):
        path = self.directory / "app.conf"
        path.write_text('database.host = "localhost"\ndatabase.port = 5432\n', encoding="utf-8")

        self.assertEqual(
            HoconConfigurationLoader(path).load(),
            {'database': {'host': 'localhost', 'port': 5432}}
        )

    def test_hocon_keeps_keys_that_need_quoting(self):
        loader = HoconConfigurationLoader(self.directory / "keys.conf")
        documents = [
            {'a.b': 1},
            {'k': {'a.b': {'c': 1}}},
            {'a"b': 1},
            {'a\\b': 'x', 'with space': [{'x.y': True}], '1st': None},
        ]

        for document in documents:
            with self.subTest(document=document):
                loader.save(document)

                self.assertEqual(loader.load(), document)

    def test_hocon_quoted_dotted_key_survives_load_then_save(self):
        path = self.directory / "logging.conf"
        path.write_text('"com.example.level" = debug\nroot { level = info }\n', encoding="utf-8")
        loader = HoconConfigurationLoader(path)

        node = loader.load()
        loader.save(node)

        self.assertEqual(node, {'com.example.level': 'debug', 'root': {'level': 'info'}})
        self.assertEqual(loader.load(), node)
        self.assertIn('"com.example.level"', path.read_text(encoding="utf-8"))

    def test_missing_file_is_empty_document_by_default(self):
        for loader_cls in (JsonConfigurationLoader, HoconConfigurationLoader, YamlConfigurationLoader):
            loader = loader_cls(self.directory / "absent")
            self.assertEqual(loader.load(), {})
            self.assertFalse(loader.path.exists())

    def test_missing_file_raises_when_not_allowed(self):
        loader = YamlConfigurationLoader(self.directory / "absent.yaml", missing_ok=False)

        with self.assertRaises(FileNotFoundError):
            loader.load()

    def test_empty_file_is_empty_document(self):
        for name, loader_cls in (("a.json", JsonConfigurationLoader),
                                 ("a.conf", HoconConfigurationLoader),
                                 ("a.yaml", YamlConfigurationLoader)):
            path = self.directory / name
            path.write_text("  \n", encoding="utf-8")
            self.assertEqual(loader_cls(path).load(), {})

    def test_malformed_json_raises(self):
        path = self.directory / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with self.assertRaises(json.JSONDecodeError):
            JsonConfigurationLoader(path).load()

    def test_save_truncates_longer_content(self):
        path = self.directory / "app.json"
        path.write_text(json.dumps({'key': 'x' * 500}), encoding="utf-8")
        loader = JsonConfigurationLoader(path)

        loader.save({'key': 'short'})

        self.assertEqual(loader.load(), {'key': 'short'})

    def test_sink_flags(self):
        self.assertTrue(SINK_FLAGS & os.O_CREAT)
        self.assertTrue(SINK_FLAGS & os.O_TRUNC)
        self.assertTrue(SINK_FLAGS & os.O_WRONLY)
        if hasattr(os, 'O_DSYNC'):
            self.assertTrue(SINK_FLAGS & os.O_DSYNC)

    def test_sink_fsyncs_before_close(self):
        path = self.directory / "durable.txt"

        with patch('confcache.config.loader.os.fsync', wraps=os.fsync) as fsync:
            with open_sink(path) as handle:
                handle.write("payload")

        fsync.assert_called_once()
        self.assertEqual(path.read_text(), "payload")

    def test_save_goes_through_sink(self):
        loader = YamlConfigurationLoader(self.directory / "app.yaml")

        with patch('confcache.config.loader.os.fsync', wraps=os.fsync) as fsync:
            loader.save({'a': 1})

        fsync.assert_called_once()


if __name__ == "__main__":
    unittest.main()
