"""
Ignore policy for pathfish.

This module defines the fixed table of generated and vendored locations that
neither extractor ever reports. Matching is exact per path segment, so
``distribution/file.js`` is kept while ``dist/file.js`` is dropped.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable


DEFAULT_IGNORE_DIRS = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    ".svn",
    ".hg",
    "__pycache__",
    ".pytest_cache",
    ".venv",
})

DEFAULT_IGNORE_FILES = frozenset({
    "package-lock.json",
    "bun.lockb",
})

_SEPARATOR_RE = re.compile(r"[\\/]")


def split_segments(path: str) -> list:
    """Split a path on both forward and back slashes."""
    return _SEPARATOR_RE.split(path)


@dataclass(frozen=True)
class IgnorePolicy:
    """
    Exact-match exclusion rule for generated/vendored paths.

    Attributes:
        dirs: Directory names; any path segment equal to one is ignored
        files: File basenames that are ignored wherever they appear
    """

    dirs: FrozenSet[str] = DEFAULT_IGNORE_DIRS
    files: FrozenSet[str] = DEFAULT_IGNORE_FILES

    def is_ignored(self, path: str) -> bool:
        """
        Check whether a path falls under the ignore table.

        Args:
            path: Relative or absolute path string

        Returns:
            True if any segment is an ignored directory or the basename is an
            ignored file
        """
        segments = split_segments(path)
        if any(segment in self.dirs for segment in segments):
            return True
        return segments[-1] in self.files

    def with_extra(self, dirs: Iterable[str] = (), files: Iterable[str] = ()) -> "IgnorePolicy":
        """Return a new policy extending this one with extra entries."""
        return IgnorePolicy(
            dirs=self.dirs | frozenset(dirs),
            files=self.files | frozenset(files),
        )


DEFAULT_IGNORE_POLICY = IgnorePolicy()


def is_ignored(path: str) -> bool:
    """Check a path against the default ignore table."""
    return DEFAULT_IGNORE_POLICY.is_ignored(path)
