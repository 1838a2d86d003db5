"""
Configuration file loading for pathfish.

Settings come from the first YAML file found in the working directory, the
home directory or ``~/.config/pathfish``. An explicit path skips the search.
When no file exists the built-in defaults are used.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from ..models.config import PathfishConfig, validate_config_dict


logger = logging.getLogger(__name__)

CONFIG_NAMES = (
    '.pathfish.yaml',
    '.pathfish.yml',
    'pathfish.yaml',
    'pathfish.yml',
)


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


@dataclass
class ConfigParseResult:
    """
    A loaded configuration and where it came from.

    Attributes:
        config: The validated configuration
        warnings: Settings that are valid but likely unintended
        config_path: File the settings were read from (None for defaults)
    """
    config: PathfishConfig
    warnings: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None

    @property
    def is_default(self) -> bool:
        return self.config_path is None


def search_locations() -> Iterator[Path]:
    """Yield every file checked during discovery, in priority order."""
    home = Path.home()
    for directory in (Path.cwd(), home, home / '.config' / 'pathfish'):
        for name in CONFIG_NAMES:
            yield directory / name


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """
    Read a YAML file that must hold a mapping.

    Empty and comment-only files count as an empty mapping.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a YAML mapping, got {type(data).__name__}")
    return data


class ConfigParser:
    """
    Locates, reads and validates pathfish configuration files.

    In strict mode, configuration warnings are raised as errors instead of
    being returned.
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def discover(self) -> Tuple[Optional[Path], Dict[str, Any]]:
        """
        Find the first readable configuration file.

        Unparsable files are skipped with a warning so a broken file in the
        home directory does not mask one further down the list.

        Returns:
            Tuple of (path, data), or (None, {}) when nothing was found
        """
        for path in search_locations():
            if not path.is_file():
                continue
            try:
                data = read_yaml_mapping(path)
            except ConfigurationError as e:
                logger.warning(f"Skipping configuration file: {e}")
                continue
            logger.info(f"Using configuration file {path}")
            return path, data

        logger.info("No configuration file found, using defaults")
        return None, {}

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load configuration from config_path, or from the discovered file.

        Args:
            config_path: Explicit configuration file (skips discovery)

        Returns:
            ConfigParseResult with the validated configuration

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid,
                or if strict mode is on and there are warnings
        """
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigurationError(f"Configuration file not found: {path}")
            data = read_yaml_mapping(path)
        else:
            path, data = self.discover()

        try:
            config = PathfishConfig.from_dict(validate_config_dict(data))
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        warnings = config.validate_configuration()
        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        return ConfigParseResult(config=config, warnings=warnings, config_path=path)


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """Load configuration with a one-off ConfigParser."""
    return ConfigParser(strict_mode=strict_mode).load_config(config_path)
