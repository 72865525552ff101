"""
Unit tests for configuration loading.
"""

import pytest # pyright: ignore[reportMissingImports]
from pathlib import Path

# Import modules to test
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.config_loader import DEFAULT_CONFIG_PATH, get_nested_config, load_config


class TestLoadConfig:
    """Test YAML loading."""

    def test_load_file(self, tmp_path):
        """A YAML file loads into a dict."""
        path = tmp_path / 'engine.yaml'
        path.write_text('history:\n  max_entries: 10\n')
        assert load_config(path) == {'history': {'max_entries': 10}}

    def test_empty_file(self, tmp_path):
        """An empty file loads as an empty dict."""
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.yaml')

    def test_default_config(self):
        """The bundled configuration loads."""
        assert DEFAULT_CONFIG_PATH.exists()
        config = load_config()
        assert get_nested_config(config, 'history.max_entries') == 50


class TestNestedConfig:
    """Test dot-path lookups."""

    def test_lookup(self):
        """Existing paths resolve; missing paths give the default."""
        config = {'logging': {'level': 'DEBUG'}}
        assert get_nested_config(config, 'logging.level') == 'DEBUG'
        assert get_nested_config(config, 'logging.file', 'none') == 'none'
        assert get_nested_config(config, 'history.max_entries', 50) == 50
