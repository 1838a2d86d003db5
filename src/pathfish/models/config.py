"""
Configuration data models for pathfish.

This module defines the structure of the YAML configuration file: default
extraction options, extra ignore entries and resource limits.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError, field_validator

from .options import PipelineOptions, Strategy
from ..tools.formatter import OutputFormat
from ..tools.ignore import DEFAULT_IGNORE_POLICY, IgnorePolicy
from ..tools.verifier import DEFAULT_MAX_WORKERS


class IgnoreConfig(BaseModel):
    """
    Extra ignore entries added on top of the built-in table.

    Attributes:
        dirs: Directory names to ignore wherever they appear as a segment
        files: File basenames to ignore
    """

    dirs: List[str] = Field(default_factory=list, description="Extra ignored directory names")
    files: List[str] = Field(default_factory=list, description="Extra ignored file basenames")

    @field_validator('dirs', 'files')
    @classmethod
    def validate_names(cls, v: List[str]) -> List[str]:
        """Entries are plain names: no separators, no wildcards."""
        names = []
        for name in v:
            name = name.strip()
            if not name:
                continue
            if '/' in name or '\\' in name:
                raise ValueError(f"Ignore entries must be plain names, got path: {name}")
            if any(char in name for char in '*?['):
                raise ValueError(f"Ignore entries are matched exactly, wildcards are not supported: {name}")
            names.append(name)
        return names

    def build_policy(self) -> IgnorePolicy:
        """Build the effective ignore policy."""
        if not self.dirs and not self.files:
            return DEFAULT_IGNORE_POLICY
        return DEFAULT_IGNORE_POLICY.with_extra(self.dirs, self.files)


class LimitsConfig(BaseModel):
    """
    Configuration for resource limits.

    Attributes:
        max_workers: Thread pool size for existence checks
        max_files: Maximum number of files scanned by the fuzzy walk
    """

    max_workers: int = Field(DEFAULT_MAX_WORKERS, gt=0, description="Verification thread pool size")
    max_files: int = Field(200000, gt=0, description="Maximum files scanned by the fuzzy walk")


class PathfishConfig(BaseModel):
    """
    Main configuration class for pathfish.

    Attributes:
        strategy: Default extraction strategy
        absolute: Convert paths to absolute by default
        unique: Remove duplicate paths
        verify: Filter out paths that do not exist on disk
        format: Default output format
        pretty: Pretty-print JSON output
        ignore: Extra ignore entries
        limits: Resource limits
    """

    strategy: Strategy = Field(Strategy.PATTERN, description="Extraction strategy")
    absolute: bool = Field(False, description="Convert paths to absolute")
    unique: bool = Field(True, description="Remove duplicate paths")
    verify: bool = Field(True, description="Filter out paths that do not exist")
    format: OutputFormat = Field(OutputFormat.JSON, description="Output format")
    pretty: bool = Field(True, description="Pretty-print JSON output")
    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig, description="Extra ignore entries")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Resource limits")

    @field_validator('strategy', mode='before')
    @classmethod
    def validate_strategy(cls, v) -> Strategy:
        """Validate and convert strategy to enum."""
        if isinstance(v, str):
            try:
                return Strategy(v.strip().lower())
            except ValueError:
                raise ValueError(f"Invalid extraction strategy: {v}")
        return v

    @field_validator('format', mode='before')
    @classmethod
    def validate_format(cls, v) -> OutputFormat:
        """Validate and convert format to enum."""
        if isinstance(v, str):
            try:
                return OutputFormat(v.strip().lower())
            except ValueError:
                raise ValueError(f"Invalid output format: {v}")
        return v

    def to_pipeline_options(self, **overrides: Any) -> PipelineOptions:
        """
        Build pipeline options from this configuration.

        Args:
            **overrides: Values taking precedence over the configuration
                (None values are ignored)

        Returns:
            Validated PipelineOptions
        """
        values = {
            'strategy': self.strategy,
            'make_absolute': self.absolute,
            'dedupe': self.unique,
            'verify': self.verify,
            'format': self.format,
            'pretty': self.pretty,
            'ignore': self.ignore.build_policy(),
            'max_files': self.limits.max_files,
            'max_workers': self.limits.max_workers,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return PipelineOptions(**values)

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but likely unintended.

        Returns:
            List of warning messages
        """
        warnings = []
        if not self.verify and self.strategy is Strategy.PATTERN:
            warnings.append("Verification is disabled: pattern matches are reported without checking the disk")
        if self.limits.max_workers > 64:
            warnings.append(f"Very high max_workers ({self.limits.max_workers}) may exhaust file descriptors")
        if self.limits.max_files > 1000000:
            warnings.append("Very high max_files limit may make fuzzy extraction slow")
        overlap = set(self.ignore.dirs) & DEFAULT_IGNORE_POLICY.dirs
        if overlap:
            warnings.append(f"Ignore dirs already built in: {', '.join(sorted(overlap))}")
        return warnings

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PathfishConfig':
        """Create configuration from dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        return (f"PathfishConfig(strategy={self.strategy.value}, format={self.format.value}, "
                f"verify={self.verify}, absolute={self.absolute})")


KNOWN_KEYS = frozenset(PathfishConfig.model_fields)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a raw configuration dictionary.

    Args:
        config_data: Configuration data as loaded from YAML

    Returns:
        The same data, known to build a PathfishConfig

    Raises:
        ValueError: If keys are unknown or values are invalid
    """
    unknown = sorted(set(config_data) - KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    try:
        PathfishConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(str(e)) from e

    return config_data
