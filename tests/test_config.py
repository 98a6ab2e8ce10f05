# tests/test_config.py
import unittest
import sys
import os
import tempfile

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.errors import ConfigurationError
from reel_engine.domain.machine.factories.machine_factory import MachineFactory
from reel_engine.infrastructure.config.loaders.yaml_loader import (
    ConfigError, FileNotFoundConfigError, SchemaValidationError, YamlConfigLoader, YamlParseError
)
from reel_engine.infrastructure.config.validators.schema_validator import SchemaValidator
from reel_engine.infrastructure.rng.rng_provider import RNGProvider
from reel_engine.main import DEFAULT_CONFIG_PATH, SCHEMA_PATH


class TestYamlConfigLoader(unittest.TestCase):
    """Test loading and validating game configuration files."""

    def setUp(self):
        self.loader = YamlConfigLoader(SchemaValidator())
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, name, content):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_default_config_is_valid(self):
        config = self.loader.load_file(DEFAULT_CONFIG_PATH, SCHEMA_PATH)

        self.assertEqual(config["machine_id"], "classic_3x3")
        self.assertEqual([s["name"] for s in config["symbols"]],
                         ["Cherry", "Lemon", "Bell", "Star", "Seven"])
        self.assertEqual(config["machine"]["mode"], "animated")
        self.assertIsNone(config["rng"]["seed"])

    def test_machine_from_default_file(self):
        factory = MachineFactory(RNGProvider())
        machine = factory.create_machine_from_file(self.loader, DEFAULT_CONFIG_PATH, schema_path=SCHEMA_PATH)

        self.assertEqual(machine.id, "classic_3x3")
        self.assertEqual(len(machine.reels), 3)
        self.assertEqual(len(machine.spin_grid()), 3)

    def test_missing_file(self):
        missing = os.path.join(self.temp_dir.name, "missing.yaml")
        with self.assertRaises(FileNotFoundConfigError):
            self.loader.load_file(missing)

        self.loader.set_strict_mode(False)
        self.assertEqual(self.loader.load_file(missing, default_config={"a": 1}), {"a": 1})

    def test_parse_error(self):
        path = self.write("broken.yaml", "symbols: [unclosed\n")
        with self.assertRaises(YamlParseError):
            self.loader.load_file(path)

    def test_schema_violation(self):
        path = self.write("negative.yaml", (
            "symbols:\n"
            "  - {name: Cherry, multiplier: 2, weight: -5}\n"
        ))

        with self.assertRaises(SchemaValidationError) as ctx:
            self.loader.load_file(path, SCHEMA_PATH)
        self.assertTrue(ctx.exception.errors)

        self.loader.set_strict_mode(False)
        config = self.loader.load_file(path, SCHEMA_PATH)
        self.assertEqual(config["symbols"][0]["weight"], -5)

    def test_invalid_mode_rejected(self):
        path = self.write("mode.yaml", (
            "symbols:\n"
            "  - {name: Cherry, weight: 1}\n"
            "machine: {mode: turbo}\n"
        ))
        with self.assertRaises(SchemaValidationError):
            self.loader.load_file(path, SCHEMA_PATH)

    def test_empty_file(self):
        path = self.write("empty.yaml", "")
        self.assertEqual(self.loader.load_file(path), {})

    def test_fallbacks(self):
        good = self.write("good.yaml", "symbols:\n  - {name: Bell, weight: 1}\n")
        missing = os.path.join(self.temp_dir.name, "nope.yaml")

        config = self.loader.load_with_fallbacks([missing, good], SCHEMA_PATH)
        self.assertEqual(config["symbols"][0]["name"], "Bell")

        with self.assertRaises(ConfigError):
            self.loader.load_with_fallbacks([missing])

    def test_config_errors_are_configuration_errors(self):
        self.assertTrue(issubclass(ConfigError, ConfigurationError))


class TestSchemaValidator(unittest.TestCase):

    def test_reports_every_error(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {"type": "integer"},
                "b": {"type": "string"},
            },
        }
        is_valid, errors = SchemaValidator().validate({"a": "x", "b": 1}, schema)
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 2)

    def test_valid(self):
        self.assertEqual(SchemaValidator().validate({"a": 1}, {"type": "object"}), (True, []))


if __name__ == "__main__":
    unittest.main()
