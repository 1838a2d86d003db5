"""
Extraction option models for pathfish.

This module defines the immutable per-call options consumed by the strategy
combiner and the pipeline runner.
"""

import os
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..tools.formatter import OutputFormat
from ..tools.ignore import DEFAULT_IGNORE_POLICY, IgnorePolicy


class Strategy(Enum):
    """Which extraction mechanism(s) to run."""
    PATTERN = "pattern"
    FUZZY = "fuzzy"
    BOTH = "both"

    @property
    def uses_pattern(self) -> bool:
        return self in (Strategy.PATTERN, Strategy.BOTH)

    @property
    def uses_fuzzy(self) -> bool:
        return self in (Strategy.FUZZY, Strategy.BOTH)


class ExtractionOptions(BaseModel):
    """
    Options for a single extraction call.

    Attributes:
        strategy: Extraction strategy (pattern, fuzzy or both)
        base_dir: Reference directory for the fuzzy walk and absolutization
        make_absolute: Convert every returned path to an absolute path
        dedupe: Drop duplicate path strings, keeping the first occurrence
        ignore: Ignore policy shared by both extractors
        max_files: Cap on files scanned by the fuzzy walk
    """

    model_config = ConfigDict(frozen=True)

    strategy: Strategy = Field(Strategy.PATTERN, description="Extraction strategy")
    base_dir: str = Field(default_factory=os.getcwd, description="Base directory")
    make_absolute: bool = Field(False, description="Convert paths to absolute")
    dedupe: bool = Field(True, description="Remove duplicate paths")
    ignore: IgnorePolicy = Field(DEFAULT_IGNORE_POLICY, description="Ignore policy")
    max_files: Optional[int] = Field(None, gt=0, description="Maximum files scanned by the fuzzy walk")

    @field_validator('strategy', mode='before')
    @classmethod
    def validate_strategy(cls, v) -> Strategy:
        """Validate and convert strategy to enum."""
        if isinstance(v, str):
            try:
                return Strategy(v.strip().lower())
            except ValueError:
                allowed = ", ".join(s.value for s in Strategy)
                raise ValueError(f"Invalid extraction strategy: {v!r} (expected one of: {allowed})")
        return v

    @field_validator('base_dir', mode='before')
    @classmethod
    def validate_base_dir(cls, v) -> str:
        """Fall back to the working directory and expand '~'."""
        if v is None or not str(v).strip():
            return os.getcwd()
        return os.path.expanduser(str(v))

    def with_overrides(self, **overrides: Any) -> 'ExtractionOptions':
        """Return a validated copy with the given fields replaced."""
        if not overrides:
            return self
        return type(self)(**{**dict(self), **overrides})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'strategy': self.strategy.value,
            'base_dir': self.base_dir,
            'make_absolute': self.make_absolute,
            'dedupe': self.dedupe,
            'max_files': self.max_files,
        }


class PipelineOptions(ExtractionOptions):
    """
    Options for the full extract/verify/format pipeline.

    Attributes:
        verify: Keep only paths that exist on disk
        format: Output format
        pretty: Indent JSON output
        max_workers: Thread pool size for verification
    """

    verify: bool = Field(True, description="Filter out paths that do not exist")
    format: OutputFormat = Field(OutputFormat.JSON, description="Output format")
    pretty: bool = Field(True, description="Pretty-print JSON output")
    max_workers: Optional[int] = Field(None, gt=0, description="Verification thread pool size")

    @field_validator('format', mode='before')
    @classmethod
    def validate_format(cls, v) -> OutputFormat:
        """Validate and convert format to enum."""
        if isinstance(v, str):
            try:
                return OutputFormat(v.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown format: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = super().to_dict()
        data.update({
            'verify': self.verify,
            'format': self.format.value,
            'pretty': self.pretty,
            'max_workers': self.max_workers,
        })
        return data
