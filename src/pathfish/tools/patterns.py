"""
Pattern-based path extraction for pathfish.

This module scans raw text with an ordered alternation of path shapes, glues
back paths that were split around nested parentheses, cleans each candidate
and drops the ones that look like versions, hashes, emails, method chains or
import specifiers rather than files.

Each heuristic is a small pure function held in an ordered tuple
(``PATH_PATTERNS``, ``CLEANUP_STEPS``, ``NOISE_FILTERS``) so it can be tested
on its own.
"""

import re
import logging
from typing import Callable, List, Optional, Tuple

from .ignore import DEFAULT_IGNORE_POLICY, IgnorePolicy, split_segments


logger = logging.getLogger(__name__)


MAX_PATH_LENGTH = 1024

# Relative path body shared by the two relative alternatives.
_RELATIVE = r"""(?:\.{1,2}[\\/]|[^\s"']+[\\/])[^\s"']+"""

MANIFEST_FILENAMES = (
    "Dockerfile",
    "Makefile",
    "Jenkinsfile",
    "Vagrantfile",
    "Gemfile",
    "Procfile",
    "Rakefile",
)

# Alternatives in priority order; at each position the first one that matches wins.
PATH_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("quoted", r"""(?<!\w)(?:"[^"\n]*[\\/][^"\n]*"|'[^'\n]*[\\/][^'\n]*')"""),
    ("parenthesized", r"\([^,)\n]*[\\/][^,)\n]*\([^)\n]*\)[^,)\n]*\.[a-zA-Z0-9]+\)"),
    ("network_share", r"[\\/]{2}\S+[\\/]\S+"),
    ("drive_absolute", r"\b[a-zA-Z]:[\\/]\S+"),
    ("posix_absolute", r"""/[^\s"']+"""),
    ("relative", r"(?<!\s)" + _RELATIVE),
    ("indented_relative", r"(?<=\s)" + _RELATIVE),
    ("standalone", r"(?<!@)(?<!//)\b[\w.-]+\)?\.[a-zA-Z0-9]+\b(?![\\/])"),
    ("manifest", r"\b(?:" + "|".join(MANIFEST_FILENAMES) + r")\b"),
)

PATH_REGEX = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in PATH_PATTERNS))


def find_candidates(text: str) -> List[str]:
    """
    Find every raw path candidate in the text.

    Args:
        text: Unstructured text to scan

    Returns:
        Raw matched substrings in order of appearance
    """
    candidates = []
    for match in PATH_REGEX.finditer(text):
        logger.debug(f"Matched {match.lastgroup} candidate {match.group(0)!r}")
        candidates.append(match.group(0))
    return candidates


# --- split-path reassembly ---------------------------------------------------

_CLOSING_HALF_RE = re.compile(r"^[^(]*\).*\.[a-zA-Z0-9]+$")
_VARIANT_RE = re.compile(r"\s+\(?\s*([^\s()]+)\)(\.[a-zA-Z0-9]+)$")


def _opens_unbalanced(candidate: str) -> bool:
    if not (candidate.startswith("(") or candidate.endswith("(")):
        return False
    return candidate.count("(") > candidate.count(")")


def _closes_unbalanced(candidate: str) -> bool:
    return bool(_CLOSING_HALF_RE.match(candidate)) and candidate.count(")") > candidate.count("(")


def _is_split_pair(current: str, following: str) -> bool:
    """
    ``(src/Button`` + ``new).tsx`` or, without the outer paren,
    ``src/Button`` + ``new).tsx``.
    """
    if not _CLOSING_HALF_RE.match(following):
        return False
    if _opens_unbalanced(current):
        return True
    if "(" in current or ")" in current:
        return False
    return bool(_SEPARATOR_RE.search(current)) and _closes_unbalanced(following)


def _merge_split(opening: str, closing: str) -> str:
    merged = f"{opening} {closing}"
    if merged.startswith("("):
        merged = merged[1:]
    return _VARIANT_RE.sub(r" (\1)\2", merged)


def reassemble_split_paths(candidates: List[str]) -> List[str]:
    """
    Merge paths that were split around a nested parenthetical.

    ``["(src/components/Button", "new).tsx"]`` becomes
    ``["src/components/Button (new).tsx"]``, and so does
    ``["src/components/Button", "new).tsx"]``. Pairs that do not fit the
    shape pass through unchanged.
    """
    result = []
    i = 0
    while i < len(candidates):
        current = candidates[i]
        if i + 1 < len(candidates) and _is_split_pair(current, candidates[i + 1]):
            merged = _merge_split(current, candidates[i + 1])
            logger.debug(f"Reassembled {current!r} + {candidates[i + 1]!r} -> {merged!r}")
            result.append(merged)
            i += 2
        else:
            result.append(current)
            i += 1
    return result


# --- cleanup chain -----------------------------------------------------------

LEADING_PUNCTUATION = "\"'[<{"
TRAILING_PUNCTUATION = "\"']>.,;:!}"

_LOCATOR_RE = re.compile(r"(?::\d+)+$")
_QUERY_RE = re.compile(r"[?#].*$", re.DOTALL)
_BACKSLASH_RUN_RE = re.compile(r"\\{2,}")
_EXTENSION_RE = re.compile(r"\.[a-zA-Z0-9]+$")
_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^/\\]*")

COMMON_TLDS = (
    "com", "org", "net", "io", "dev", "app", "co", "edu", "gov", "ai", "me",
    "info", "biz", "us", "uk", "de", "fr", "jp", "cn", "ru", "sh", "so",
    "xyz", "cloud", "tech", "page", "site",
)
_DOMAIN_PREFIX_RE = re.compile(
    r"^/(?:[a-zA-Z0-9-]+\.)+(?:" + "|".join(COMMON_TLDS) + r")(?=/)",
    re.IGNORECASE,
)


def _is_quote_wrapped(candidate: str) -> bool:
    return len(candidate) >= 2 and candidate[0] == candidate[-1] and candidate[0] in "\"'"


def _is_paren_wrapped(candidate: str) -> bool:
    """True when the first '(' is closed by the very last character."""
    if len(candidate) < 2 or candidate[0] != "(" or candidate[-1] != ")":
        return False
    depth = 0
    for index, char in enumerate(candidate):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and index < len(candidate) - 1:
                return False
    return depth == 0


def _has_extension(name: str) -> bool:
    return bool(_EXTENSION_RE.search(name))


def trim_locator(candidate: str) -> str:
    """Strip trailing line/column numbers: ``a/b.ts:10:5`` -> ``a/b.ts``."""
    return _LOCATOR_RE.sub("", candidate)


def trim_query(candidate: str) -> str:
    """Drop a query string or fragment."""
    return _QUERY_RE.sub("", candidate)


def unwrap_or_strip(candidate: str) -> str:
    """Remove wrapping quotes, or else surrounding brackets and punctuation."""
    if _is_quote_wrapped(candidate):
        return candidate[1:-1]

    candidate = candidate.lstrip(LEADING_PUNCTUATION).rstrip(TRAILING_PUNCTUATION)
    balance = candidate.count("(") - candidate.count(")")
    if _is_paren_wrapped(candidate):
        return candidate[1:-1]
    if candidate.startswith("(") and balance > 0:
        return candidate[1:]
    if candidate.endswith(")") and balance < 0:
        return candidate[:-1]
    return candidate


def normalize_backslashes(candidate: str) -> str:
    """Collapse runs of backslashes, keeping a leading ``\\\\`` share prefix."""
    if candidate.startswith("\\\\"):
        return "\\\\" + _BACKSLASH_RUN_RE.sub(r"\\", candidate.lstrip("\\"))
    return _BACKSLASH_RUN_RE.sub(r"\\", candidate)


def normalize_double_slash(candidate: str) -> str:
    """
    Decide between a URL-style ``//`` prefix and a network share.

    ``//cdn.host/lib/x.js`` loses one slash; ``//server/share`` is kept.
    """
    if not candidate.startswith("//"):
        return candidate
    segments = [segment for segment in split_segments(candidate) if segment]
    if (segments and _has_extension(segments[-1])) or len(segments) > 2:
        return "/" + candidate.lstrip("/")
    return candidate


def strip_url_scheme(candidate: str) -> str:
    """``https://host/a/b`` -> ``/a/b``."""
    return _URL_SCHEME_RE.sub("", candidate)


def strip_domain_prefix(candidate: str) -> str:
    """``/cdn.example.com/lib/x.js`` -> ``/lib/x.js``."""
    return _DOMAIN_PREFIX_RE.sub("", candidate)


CLEANUP_STEPS: Tuple[Callable[[str], str], ...] = (
    trim_locator,
    trim_query,
    unwrap_or_strip,
    normalize_backslashes,
    normalize_double_slash,
    strip_url_scheme,
    strip_domain_prefix,
)


def _apply_cleanup_steps(candidate: str) -> str:
    for step in CLEANUP_STEPS:
        candidate = step(candidate)
    return candidate


def clean_candidate(candidate: str) -> str:
    """
    Run the cleanup chain until the candidate stops changing.

    Every step only removes characters, so the loop terminates. A candidate
    that is still quote-wrapped after one pass is returned as is for the noise
    filter to reject.

    Args:
        candidate: Raw matched substring

    Returns:
        Cleaned path string (possibly empty)
    """
    while True:
        cleaned = _apply_cleanup_steps(candidate)
        if cleaned == candidate or _is_quote_wrapped(cleaned):
            return cleaned
        candidate = cleaned


# --- noise filter ------------------------------------------------------------

_VERSION_RE = re.compile(r"^[a-zA-Z]?v?\d+(?:\.\d+)*$")
_UUID_RE = re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE)
_HASH_RE = re.compile(r"^[a-f0-9]{7,40}$", re.IGNORECASE)
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_SHORT_SUFFIX_RE = re.compile(r"^[a-zA-Z0-9]{1,10}$")
_SEPARATOR_RE = re.compile(r"[\\/]")
_SEPARATORS_ONLY_RE = re.compile(r"^[\\/]+$")

# Final segments of ``object.member`` chains that are never file extensions.
NON_EXTENSION_SUFFIXES = frozenset({
    "then", "catch", "finally", "prototype", "length", "foreach", "push",
    "exports", "env", "argv", "stdout", "stderr", "tostring", "call",
    "apply", "bind",
})


def is_separator_only(candidate: str) -> bool:
    """A bare ``//`` comment marker or what is left of ``http://host/``."""
    return bool(_SEPARATORS_ONLY_RE.match(candidate))


def is_empty(candidate: str) -> bool:
    return not candidate.strip()


def is_oversized(candidate: str) -> bool:
    return len(candidate) > MAX_PATH_LENGTH or "\n" in candidate


def is_version(candidate: str) -> bool:
    return bool(_VERSION_RE.match(candidate))


def is_uuid(candidate: str) -> bool:
    return bool(_UUID_RE.match(candidate))


def is_hash(candidate: str) -> bool:
    return bool(_HASH_RE.match(candidate))


def is_email(candidate: str) -> bool:
    return bool(_EMAIL_RE.match(candidate))


def is_member_chain(candidate: str) -> bool:
    """Dotted token without a separator whose suffix is not extension-like."""
    if "." not in candidate or _SEPARATOR_RE.search(candidate):
        return False
    suffix = candidate.rsplit(".", 1)[1]
    return not _SHORT_SUFFIX_RE.match(suffix) or suffix.lower() in NON_EXTENSION_SUFFIXES


def is_residual_quoted(candidate: str) -> bool:
    return _is_quote_wrapped(candidate)


def is_unbalanced_fragment(candidate: str) -> bool:
    """Half of a path split around parentheses, e.g. ``new).tsx``."""
    return candidate.count("(") != candidate.count(")")


def is_module_specifier(candidate: str) -> bool:
    """``./utils`` or ``../lib/foo``: an import specifier, not a file."""
    if not candidate.startswith(("./", "../")) or " " in candidate:
        return False
    segments = split_segments(candidate)
    return not _has_extension(segments[-1]) and len(segments) <= 3


NOISE_FILTERS: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("separator_only", is_separator_only),
    ("empty", is_empty),
    ("oversized", is_oversized),
    ("version", is_version),
    ("uuid", is_uuid),
    ("hash", is_hash),
    ("email", is_email),
    ("member_chain", is_member_chain),
    ("residual_quoted", is_residual_quoted),
    ("unbalanced_fragment", is_unbalanced_fragment),
    ("module_specifier", is_module_specifier),
)


def noise_reason(candidate: str, ignore: IgnorePolicy = DEFAULT_IGNORE_POLICY) -> Optional[str]:
    """
    Name the first noise filter that rejects a cleaned candidate.

    Args:
        candidate: Cleaned candidate
        ignore: Ignore policy applied after the shape filters

    Returns:
        Filter name, or None if the candidate should be kept
    """
    for name, predicate in NOISE_FILTERS:
        if predicate(candidate):
            return name
    if ignore.is_ignored(candidate):
        return "ignored"
    return None


def is_noise(candidate: str, ignore: IgnorePolicy = DEFAULT_IGNORE_POLICY) -> bool:
    return noise_reason(candidate, ignore) is not None


def extract_pattern_paths(text: str, ignore: IgnorePolicy = DEFAULT_IGNORE_POLICY) -> List[str]:
    """
    Extract path strings from text using the pattern strategy.

    Args:
        text: Unstructured text (diagnostics, logs, diffs, prose)
        ignore: Ignore policy for generated/vendored locations

    Returns:
        Cleaned path strings in order of appearance, duplicates included
    """
    paths = []
    for candidate in reassemble_split_paths(find_candidates(text)):
        cleaned = clean_candidate(candidate)
        reason = noise_reason(cleaned, ignore)
        if reason:
            logger.debug(f"Dropped candidate {candidate!r} ({reason})")
            continue
        paths.append(cleaned)
    return paths
