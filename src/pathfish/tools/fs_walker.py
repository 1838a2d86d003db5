"""
Filesystem walker for pathfish.

This module provides the fuzzy extraction strategy: it enumerates the files
under a base directory and reports those whose basename is mentioned in the
text as a whole word. The walk is an explicit work-stack traversal, so deep
trees never hit the recursion limit, and unreadable directories are skipped.
"""

import os
import re
import logging
from typing import Dict, Iterator, List, Optional

from .ignore import DEFAULT_IGNORE_POLICY, IgnorePolicy


logger = logging.getLogger(__name__)


class FSWalker:
    """
    Filesystem walker that matches file basenames against text.

    This class provides:
    - Iterative directory traversal (no recursion)
    - Pruning of ignored directories and files
    - Whole-word basename matching
    - Optional cap on the number of files scanned
    """

    def __init__(self, ignore: IgnorePolicy = DEFAULT_IGNORE_POLICY, max_files: Optional[int] = None):
        """
        Initialize the filesystem walker.

        Args:
            ignore: Ignore policy applied to every relative path
            max_files: Stop after this many files (None for no limit)
        """
        self.ignore = ignore
        self.max_files = max_files
        self._stats = {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
            'files_ignored': 0,
            'errors': 0
        }

    def walk_files(self, base_dir: str) -> Iterator[str]:
        """
        Yield every non-ignored file under base_dir as a relative path.

        Args:
            base_dir: Directory to walk

        Yields:
            Paths relative to base_dir
        """
        stack = [base_dir]
        while stack:
            current_dir = stack.pop()
            try:
                with os.scandir(current_dir) as iterator:
                    entries = list(iterator)
            except OSError as e:
                logger.debug(f"Skipping unreadable directory {current_dir}: {e}")
                self._stats['errors'] += 1
                continue

            self._stats['directories_traversed'] += 1

            for entry in entries:
                relative_path = os.path.relpath(entry.path, base_dir)
                try:
                    if entry.is_dir(follow_symlinks=False):
                        if self.ignore.is_ignored(relative_path):
                            continue
                        stack.append(entry.path)
                        continue
                    if not entry.is_file():
                        continue
                except OSError as e:
                    logger.debug(f"Cannot stat {entry.path}: {e}")
                    self._stats['errors'] += 1
                    continue

                if self.ignore.is_ignored(relative_path):
                    self._stats['files_ignored'] += 1
                    continue

                self._stats['files_scanned'] += 1
                yield relative_path

                if self.max_files is not None and self._stats['files_scanned'] >= self.max_files:
                    logger.warning(f"Reached maximum file limit: {self.max_files}")
                    return

    def find_mentioned_files(self, text: str, base_dir: str) -> List[str]:
        """
        Find files under base_dir whose basename appears in the text.

        Args:
            text: Text to search for basenames
            base_dir: Directory to walk

        Returns:
            Sorted relative paths of the mentioned files
        """
        matches = set()
        for relative_path in self.walk_files(base_dir):
            basename = os.path.basename(relative_path)
            # Cheap substring test before compiling a pattern per file
            if basename not in text:
                continue
            if create_basename_pattern(basename).search(text):
                self._stats['files_matched'] += 1
                matches.add(relative_path)
        return sorted(matches)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walks.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
            'files_ignored': 0,
            'errors': 0
        }


def create_basename_pattern(basename: str) -> re.Pattern:
    """
    Create a whole-word regex for a file basename.

    The basename is escaped and must not touch identifier characters on
    either side, so ``core.ts`` does not match ``score.ts`` or ``core.tsx``.

    Args:
        basename: File name without directories

    Returns:
        Compiled pattern
    """
    return re.compile(rf"(?<![\w$]){re.escape(basename)}(?![\w$])")


def extract_fuzzy_paths(text: str, base_dir: str,
                        ignore: IgnorePolicy = DEFAULT_IGNORE_POLICY,
                        max_files: Optional[int] = None) -> List[str]:
    """
    Extract paths using the fuzzy strategy.

    Args:
        text: Text to search
        base_dir: Directory whose files are candidates
        ignore: Ignore policy
        max_files: Optional cap on files scanned

    Returns:
        Relative paths of files mentioned in the text
    """
    walker = FSWalker(ignore=ignore, max_files=max_files)
    return walker.find_mentioned_files(text, base_dir)
