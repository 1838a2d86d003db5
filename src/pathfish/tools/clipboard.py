"""
Clipboard output for pathfish.

Copying is a convenience side effect: environments without a clipboard
(CI runners, SSH sessions, containers) must not turn it into a failure.
"""

import logging
from typing import List

import pyperclip


logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Returns:
        True if the text was copied, False if no clipboard is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug(f"Clipboard unavailable: {e}")
        return False
    return True


def copy_paths_to_clipboard(paths: List[str]) -> bool:
    """Copy a path list to the clipboard, one path per line."""
    return copy_to_clipboard("\n".join(paths))
