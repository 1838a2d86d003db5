"""
Strategy combiner for pathfish.

``extract_paths`` runs the requested extraction strategies, merges their
output (pattern results first), removes duplicates and optionally converts the
result to absolute paths. ``verify_paths`` filters a path list down to the
entries that exist on disk.
"""

import os
import logging
from typing import Any, List, Optional

from .models.options import ExtractionOptions
from .tools.fs_walker import extract_fuzzy_paths
from .tools.patterns import extract_pattern_paths
from .tools.verifier import verify_paths


logger = logging.getLogger(__name__)

__all__ = ['extract_paths', 'verify_paths', 'dedupe_paths', 'absolutize_paths']


def dedupe_paths(paths: List[str]) -> List[str]:
    """Remove exact duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(paths))


def absolutize_paths(paths: List[str], base_dir: str) -> List[str]:
    """Resolve each path against base_dir; absolute paths are only normalized."""
    root = os.path.abspath(base_dir)
    return [os.path.normpath(os.path.join(root, path)) for path in paths]


def extract_paths(text: str, options: Optional[ExtractionOptions] = None, **overrides: Any) -> List[str]:
    """
    Extract file paths from a blob of text.

    Args:
        text: The text to search within
        options: Extraction options (defaults are used when omitted)
        **overrides: Individual option values, e.g. ``strategy="both"``

    Returns:
        Ordered list of path strings

    Raises:
        ValueError: If an option is invalid, e.g. an unknown strategy
    """
    if options is None:
        options = ExtractionOptions(**overrides)
    else:
        options = options.with_overrides(**overrides)

    strategy = options.strategy

    paths: List[str] = []
    if strategy.uses_pattern:
        paths.extend(extract_pattern_paths(text, ignore=options.ignore))
    if strategy.uses_fuzzy:
        paths.extend(extract_fuzzy_paths(text, options.base_dir,
                                         ignore=options.ignore,
                                         max_files=options.max_files))

    if options.dedupe:
        paths = dedupe_paths(paths)

    if options.make_absolute:
        paths = absolutize_paths(paths, options.base_dir)
        # ``src/a.ts`` and ``./src/a.ts`` resolve to the same absolute path
        if options.dedupe:
            paths = dedupe_paths(paths)

    logger.debug(f"Extracted {len(paths)} paths with strategy '{strategy.value}'")
    return paths
