"""
Unit tests for the extraction option models.
"""

import os

import pytest
from pydantic import ValidationError

from pathfish import ExtractionOptions, PipelineOptions, Strategy
from pathfish.tools.formatter import OutputFormat
from pathfish.tools.ignore import DEFAULT_IGNORE_POLICY


class TestStrategy:
    """Test cases for the Strategy enum."""

    def test_values(self):
        """Test the accepted strategy names."""
        assert [s.value for s in Strategy] == ["pattern", "fuzzy", "both"]

    def test_mechanisms(self):
        """Test which mechanisms each strategy runs."""
        assert Strategy.PATTERN.uses_pattern and not Strategy.PATTERN.uses_fuzzy
        assert Strategy.FUZZY.uses_fuzzy and not Strategy.FUZZY.uses_pattern
        assert Strategy.BOTH.uses_pattern and Strategy.BOTH.uses_fuzzy


class TestExtractionOptions:
    """Test cases for ExtractionOptions."""

    def test_defaults(self):
        """Test default option values."""
        options = ExtractionOptions()

        assert options.strategy == Strategy.PATTERN
        assert options.base_dir == os.getcwd()
        assert options.make_absolute is False
        assert options.dedupe is True
        assert options.ignore == DEFAULT_IGNORE_POLICY
        assert options.max_files is None

    def test_strategy_from_string(self):
        """Test case-insensitive strategy names."""
        assert ExtractionOptions(strategy="BOTH").strategy == Strategy.BOTH
        assert ExtractionOptions(strategy=" fuzzy ").strategy == Strategy.FUZZY

    def test_invalid_strategy(self):
        """Test that unknown strategies are rejected."""
        with pytest.raises(ValidationError, match="Invalid extraction strategy"):
            ExtractionOptions(strategy="regex")

    def test_base_dir_fallback(self):
        """Test that an empty base_dir falls back to the working directory."""
        assert ExtractionOptions(base_dir="").base_dir == os.getcwd()
        assert ExtractionOptions(base_dir=None).base_dir == os.getcwd()

    def test_base_dir_expands_user(self):
        """Test that '~' is expanded."""
        assert ExtractionOptions(base_dir="~").base_dir == os.path.expanduser("~")

    def test_max_files_must_be_positive(self):
        """Test the max_files bound."""
        with pytest.raises(ValidationError):
            ExtractionOptions(max_files=0)

    def test_frozen(self):
        """Test that options are immutable."""
        options = ExtractionOptions()
        with pytest.raises(ValidationError):
            options.dedupe = False

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = ExtractionOptions(strategy="fuzzy", base_dir="/tmp").to_dict()

        assert data == {
            'strategy': 'fuzzy',
            'base_dir': '/tmp',
            'make_absolute': False,
            'dedupe': True,
            'max_files': None,
        }


class TestPipelineOptions:
    """Test cases for PipelineOptions."""

    def test_defaults(self):
        """Test default pipeline values."""
        options = PipelineOptions()

        assert options.verify is True
        assert options.format == OutputFormat.JSON
        assert options.pretty is True
        assert options.max_workers is None

    def test_format_from_string(self):
        """Test format names."""
        assert PipelineOptions(format="YAML").format == OutputFormat.YAML

    def test_invalid_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValidationError, match="Unknown format: xml"):
            PipelineOptions(format="xml")

    def test_to_dict_includes_pipeline_fields(self):
        """Test dictionary conversion."""
        data = PipelineOptions(format="list", verify=False).to_dict()

        assert data['format'] == 'list'
        assert data['verify'] is False
        assert data['strategy'] == 'pattern'
