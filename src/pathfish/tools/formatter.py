"""
Output formatters for pathfish.
"""

import json
from enum import Enum
from typing import Callable, List, Union

import yaml


class OutputFormat(Enum):
    """Supported output formats."""
    JSON = "json"
    YAML = "yaml"
    LIST = "list"


def create_formatter(format: Union[str, OutputFormat], pretty: bool = True) -> Callable[[List[str]], str]:
    """
    Create a function that renders a path list in the given format.

    Args:
        format: Output format name or enum
        pretty: Indent JSON output

    Returns:
        Function taking a list of paths and returning a string

    Raises:
        ValueError: If the format is not supported
    """
    try:
        output_format = OutputFormat(format)
    except ValueError:
        raise ValueError(f"Unknown format: {format}") from None

    def render(paths: List[str]) -> str:
        if output_format is OutputFormat.JSON:
            return json.dumps(paths, indent=2 if pretty else None)
        if output_format is OutputFormat.YAML:
            return yaml.safe_dump(paths, default_flow_style=False, sort_keys=False)
        return "\n".join(paths)

    return render
