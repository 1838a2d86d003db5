"""
Existence verification for pathfish.

Checks run concurrently in a thread pool and are gathered in input order, so
the result is a stable filter of the input list.
"""

import os
import stat
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional


logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def resolve_path(path: str, base_dir: str) -> str:
    """Return path unchanged if absolute, else joined to base_dir."""
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def file_exists(path: str) -> bool:
    """
    Check that path names an existing regular file.

    Any error other than a clean answer counts as "does not exist"; checks
    are never retried.
    """
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as e:
        logger.debug(f"Existence check failed for {path}: {e}")
        return False


def verify_paths(paths: List[str], base_dir: Optional[str] = None,
                 max_workers: Optional[int] = None) -> List[str]:
    """
    Keep only the paths that exist on disk.

    Args:
        paths: Candidate paths, relative or absolute
        base_dir: Directory for resolving relative paths (default: cwd)
        max_workers: Thread pool size (default: DEFAULT_MAX_WORKERS)

    Returns:
        The existing paths, in their original order and spelling
    """
    if not paths:
        return []

    base_dir = base_dir or os.getcwd()
    resolved = [resolve_path(path, base_dir) for path in paths]
    workers = min(max_workers or DEFAULT_MAX_WORKERS, len(resolved))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        existence = list(executor.map(file_exists, resolved))

    existing = [path for path, exists in zip(paths, existence) if exists]
    logger.debug(f"Verified {len(existing)} of {len(paths)} paths under {base_dir}")
    return existing
