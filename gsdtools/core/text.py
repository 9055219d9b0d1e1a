"""
Text normalization for phase identifiers.

Phase directories look like "03-api-layer"; users type "3", "03",
"API Layer" or "03-API Layer". Everything that compares phase names goes
through these helpers so that formatting differences never matter.
"""

import functools
import re
from typing import Optional, Tuple

# Leading phase number: digits, optional letter suffix (3A), optional
# decimal segments (3.1, 3.1.2). The letter must not start a word.
_PHASE_NUMBER_RE = re.compile(r"^(\d+)([A-Za-z](?![A-Za-z]))?((?:\.\d+)*)", re.ASCII)
_SEPARATOR_RUN_RE = re.compile(r"[^a-z0-9]+")

PhaseNumber = Tuple[int, str, Tuple[int, ...]]


def _collapse(text: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', trim '-'."""
    return _SEPARATOR_RUN_RE.sub("-", text.lower()).strip("-")


def parse_phase_number(value) -> Optional[PhaseNumber]:
    """Parse the leading phase number of a value.

    Args:
        value: Phase identifier or directory name ("3", "03-api", "2.1")

    Returns:
        (integer part, upper-case letter suffix or "", decimal segments),
        or None if the value does not start with a phase number
    """
    match = _PHASE_NUMBER_RE.match(str(value).strip())
    if not match:
        return None
    decimals = tuple(int(part) for part in match.group(3).split(".") if part)
    return int(match.group(1)), (match.group(2) or "").upper(), decimals


def format_phase_number(value) -> Optional[str]:
    """Canonical phase number ("3" -> "03", "3a.1" -> "03a.1")."""
    match = _PHASE_NUMBER_RE.match(str(value).strip())
    if not match:
        return None
    return str(int(match.group(1))).zfill(2) + (match.group(2) or "").lower() + match.group(3)


def normalize_phase_name(value) -> str:
    """Canonicalize a phase identifier or directory name.

    Lower-cases, collapses non-alphanumeric runs to single '-' and trims
    separators. A leading phase number is zero-padded to two digits and
    its decimal part kept as-is. Idempotent.

    Examples:
        "3"             -> "03"
        "03-API Layer"  -> "03-api-layer"
        "Widget Builder" -> "widget-builder"
    """
    text = str(value).strip()
    number = format_phase_number(text)
    if number is None:
        return _collapse(text)

    match = _PHASE_NUMBER_RE.match(text)
    rest = _collapse(text[match.end():])
    return f"{number}-{rest}" if rest else number


def generate_slug(text: Optional[str]) -> Optional[str]:
    """Directory-safe slug for a title ("Widget Builder" -> "widget-builder")."""
    if not text:
        return None
    return _collapse(str(text))


def compare_phase_number(a, b) -> int:
    """Order two phase numbers.

    "3" and "03" are equal; 3 < 3.1 < 3.2 < 3A < 3B < 4. Values that do
    not start with a phase number sort after every numeric one and among
    themselves by plain string order.

    Returns:
        Negative if a sorts first, zero if equal, positive otherwise
    """
    pa = parse_phase_number(a)
    pb = parse_phase_number(b)

    if pa is None or pb is None:
        if pa is not None:
            return -1
        if pb is not None:
            return 1
        sa, sb = str(a), str(b)
        return (sa > sb) - (sa < sb)

    # No letter sorts before any letter
    ka = (pa[0], (1, pa[1]) if pa[1] else (0, ""), pa[2])
    kb = (pb[0], (1, pb[1]) if pb[1] else (0, ""), pb[2])
    return (ka > kb) - (ka < kb)


phase_sort_key = functools.cmp_to_key(compare_phase_number)


def escape_regex(text) -> str:
    """Escape a literal for interpolation into a regular expression."""
    return re.escape(str(text))
