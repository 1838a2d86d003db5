"""
Unit tests for configuration parser.

Tests YAML loading, file discovery, validation and error handling of the
ConfigParser class.
"""

import pytest
import tempfile
import os
import shutil
import yaml
from pathlib import Path
from unittest.mock import patch

from pathfish.config.parser import (
    CONFIG_NAMES,
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    read_yaml_mapping,
    search_locations,
)
from pathfish.models.config import PathfishConfig
from pathfish.models.options import Strategy


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.cwd = os.path.join(self.temp_dir, 'cwd')
        self.home = os.path.join(self.temp_dir, 'home')
        os.makedirs(self.cwd)
        os.makedirs(self.home)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, relative_path, content):
        path = os.path.join(self.temp_dir, relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def _load_discovered(self, parser=None):
        parser = parser or ConfigParser()
        with patch.object(Path, 'cwd', return_value=Path(self.cwd)), \
                patch.object(Path, 'home', return_value=Path(self.home)):
            return parser.load_config()

    def test_init_default(self):
        """Test default initialization."""
        assert ConfigParser().strict_mode is False
        assert ConfigParser(strict_mode=True).strict_mode is True

    def test_config_names(self):
        """Test the file names searched for."""
        assert CONFIG_NAMES == ('.pathfish.yaml', '.pathfish.yml', 'pathfish.yaml', 'pathfish.yml')

    def test_search_locations_order(self):
        """Test that the working directory is searched before home."""
        with patch.object(Path, 'cwd', return_value=Path(self.cwd)), \
                patch.object(Path, 'home', return_value=Path(self.home)):
            locations = list(search_locations())

        assert len(locations) == 12
        assert locations[0] == Path(self.cwd) / '.pathfish.yaml'
        assert locations[4] == Path(self.home) / '.pathfish.yaml'
        assert locations[-1] == Path(self.home) / '.config' / 'pathfish' / 'pathfish.yml'

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        config_data = {
            'strategy': 'both',
            'format': 'list',
            'ignore': {'dirs': ['target']},
        }
        path = self._write('pathfish.yaml', yaml.dump(config_data))

        result = ConfigParser().load_config(path)

        assert isinstance(result, ConfigParseResult)
        assert isinstance(result.config, PathfishConfig)
        assert result.config.strategy == Strategy.BOTH
        assert result.config.ignore.dirs == ['target']
        assert result.config_path == Path(path)
        assert result.is_default is False
        assert result.warnings == []

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config(os.path.join(self.temp_dir, "missing.yaml"))

    def test_load_config_directory_is_not_a_file(self):
        """Test that a directory given as the config path is rejected."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config(self.cwd)

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        path = self._write('bad.yaml', "strategy: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            ConfigParser().load_config(path)

    def test_load_config_non_mapping(self):
        """Test that a YAML list is rejected."""
        path = self._write('list.yaml', "- pattern\n- fuzzy\n")

        with pytest.raises(ConfigurationError, match="must contain a YAML mapping"):
            ConfigParser().load_config(path)

    def test_load_config_empty_file(self):
        """Test that an empty file yields default values."""
        path = self._write('empty.yaml', "")

        result = ConfigParser().load_config(path)

        assert result.config == PathfishConfig()
        assert result.is_default is False

    def test_load_config_comment_only_file(self):
        """Test that a file with only comments yields default values."""
        path = self._write('comments.yaml', "# nothing set yet\n")

        assert ConfigParser().load_config(path).config == PathfishConfig()

    def test_load_config_unknown_key(self):
        """Test that unknown keys are rejected."""
        path = self._write('unknown.yaml', "colour: red\n")

        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            ConfigParser().load_config(path)

    def test_load_config_invalid_value(self):
        """Test that invalid values are rejected."""
        path = self._write('invalid.yaml', "strategy: regex\n")

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            ConfigParser().load_config(path)

    def test_load_config_warnings(self):
        """Test that configuration warnings are returned."""
        path = self._write('warn.yaml', "verify: false\n")

        result = ConfigParser().load_config(path)

        assert len(result.warnings) == 1

    def test_load_config_strict_mode(self):
        """Test that warnings become errors in strict mode."""
        path = self._write('warn.yaml', "verify: false\n")

        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).load_config(path)

    def test_load_config_defaults_when_not_found(self):
        """Test fallback to defaults when no configuration file exists."""
        result = self._load_discovered(ConfigParser(strict_mode=True))

        assert result.is_default is True
        assert result.config_path is None
        assert result.config == PathfishConfig()
        assert result.warnings == []

    def test_load_config_discovery(self):
        """Test discovery of a configuration file in the working directory."""
        path = self._write(os.path.join('cwd', '.pathfish.yaml'), "strategy: fuzzy\n")

        result = self._load_discovered()

        assert result.is_default is False
        assert result.config_path == Path(path)
        assert result.config.strategy == Strategy.FUZZY

    def test_working_directory_wins_over_home(self):
        """Test discovery priority."""
        self._write(os.path.join('home', '.pathfish.yaml'), "strategy: both\n")
        path = self._write(os.path.join('cwd', 'pathfish.yml'), "strategy: fuzzy\n")

        result = self._load_discovered()

        assert result.config_path == Path(path)

    def test_load_config_discovery_in_home_config_dir(self):
        """Test discovery under ~/.config/pathfish."""
        path = self._write(os.path.join('home', '.config', 'pathfish', 'pathfish.yml'), "format: yaml\n")

        result = self._load_discovered()

        assert result.config_path == Path(path)
        assert result.config.format.value == 'yaml'

    def test_discovery_skips_broken_files(self):
        """Test that an unparsable file is skipped during discovery."""
        self._write(os.path.join('cwd', '.pathfish.yaml'), "strategy: [unclosed\n")
        good = self._write(os.path.join('cwd', 'pathfish.yaml'), "strategy: both\n")

        result = self._load_discovered()

        assert result.config_path == Path(good)
        assert result.config.strategy == Strategy.BOTH

    def test_discovered_file_is_validated(self):
        """Test that a discovered file with bad values is an error."""
        self._write(os.path.join('cwd', '.pathfish.yaml'), "format: xml\n")

        with pytest.raises(ConfigurationError, match="Invalid output format"):
            self._load_discovered()


class TestReadYamlMapping:
    """Test cases for read_yaml_mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_mapping(self):
        """Test reading a mapping."""
        path = os.path.join(self.temp_dir, 'config.yaml')
        with open(path, 'w') as f:
            f.write("limits:\n  max_workers: 4\n")

        assert read_yaml_mapping(Path(path)) == {'limits': {'max_workers': 4}}

    def test_unreadable(self):
        """Test that a file that cannot be opened is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot read configuration file"):
            read_yaml_mapping(Path(self.temp_dir) / 'missing.yaml')

    def test_load_config_function(self):
        """Test the load_config convenience function."""
        path = os.path.join(self.temp_dir, 'config.yaml')
        with open(path, 'w') as f:
            f.write("unique: false\n")

        assert load_config(path).config.unique is False
