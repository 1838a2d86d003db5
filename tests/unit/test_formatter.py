"""
Unit tests for the output formatters.
"""

import json

import pytest
import yaml

from pathfish.tools.formatter import OutputFormat, create_formatter


class TestCreateFormatter:
    """Test cases for create_formatter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.paths = ["src/a.ts", "docs/user guide.md"]

    def test_json_pretty(self):
        """Test indented JSON output."""
        output = create_formatter("json")(self.paths)

        assert output == '[\n  "src/a.ts",\n  "docs/user guide.md"\n]'
        assert json.loads(output) == self.paths

    def test_json_compact(self):
        """Test single-line JSON output."""
        assert create_formatter("json", pretty=False)(self.paths) == '["src/a.ts", "docs/user guide.md"]'

    def test_yaml(self):
        """Test YAML list output."""
        output = create_formatter("yaml")(self.paths)

        assert output == "- src/a.ts\n- docs/user guide.md\n"
        assert yaml.safe_load(output) == self.paths

    def test_list(self):
        """Test newline-separated output."""
        assert create_formatter(OutputFormat.LIST)(self.paths) == "src/a.ts\ndocs/user guide.md"

    def test_empty_list(self):
        """Test rendering no paths."""
        assert create_formatter("json")([]) == "[]"
        assert create_formatter("list")([]) == ""

    def test_unknown_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unknown format: xml"):
            create_formatter("xml")
