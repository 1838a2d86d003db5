"""
Pipeline runner for pathfish.

Runs extraction, optional verification and formatting in one call. This is
the engine behind the command-line interface, kept separate so it can be used
programmatically.
"""

import logging
from typing import Any, Optional

from .core import extract_paths, verify_paths
from .models.options import PipelineOptions
from .tools.formatter import create_formatter


logger = logging.getLogger(__name__)


def run_pipeline(text: str, options: Optional[PipelineOptions] = None, **overrides: Any) -> str:
    """
    Execute the full extract, verify and format pipeline.

    Args:
        text: The input text to process
        options: Pipeline options (defaults are used when omitted)
        **overrides: Individual option values, e.g. ``verify=False``

    Returns:
        The formatted path list

    Raises:
        ValueError: If the strategy or the output format is invalid
    """
    if options is None:
        options = PipelineOptions(**overrides)
    else:
        options = options.with_overrides(**overrides)

    # Fail on a bad format before touching the filesystem
    render = create_formatter(options.format, options.pretty)

    paths = extract_paths(text, options.with_overrides(dedupe=True))

    if options.verify:
        paths = verify_paths(paths, options.base_dir, max_workers=options.max_workers)

    logger.info(f"Pipeline produced {len(paths)} paths")
    return render(paths)
