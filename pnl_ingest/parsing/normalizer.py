from __future__ import annotations

import logging
import math
import re

from ..models.values import ABSENT, NormalizedValue

"""Value normalizer shared by both extractors.

normalize():          raw cell -> float | ABSENT (never raises)
normalize_percent():  same, then scales whole percentages (|v| > 1) to a decimal fraction
strip_store_prefix(): "01 - Denver" -> "Denver"
"""

__all__ = [
    "PLACEHOLDER_TOKENS",
    "STORE_PREFIX_RE",
    "normalize",
    "normalize_percent",
    "to_percent_fraction",
    "strip_store_prefix",
]

logger = logging.getLogger(__name__)

PLACEHOLDER_TOKENS = frozenset({"-"})

# 通貨・桁区切り・パーセント記号は数値化前に除去
_DECORATION_RE = re.compile(r"[$,%]")

STORE_PREFIX_RE = re.compile(r"^\d+\s*-\s*")


def normalize(raw: str | None) -> NormalizedValue:
    """Convert a raw cell into a finite float or ``ABSENT``.

    Empty, whitespace-only and placeholder (``"-"``) cells are absent. ``$``,
    ``,`` and ``%`` are stripped before parsing; anything that still fails to
    parse (or parses to nan/inf) is absent as well.

    >>> normalize("$12,345")
    12345.0
    >>> normalize("-")
    ABSENT
    """
    if raw is None:
        return ABSENT
    text = raw.strip()
    if not text or text in PLACEHOLDER_TOKENS:
        return ABSENT
    cleaned = _DECORATION_RE.sub("", text).strip()
    try:
        value = float(cleaned)
    except ValueError:
        logger.debug(f"unparseable cell {raw!r} -> ABSENT")
        return ABSENT
    if not math.isfinite(value):
        logger.debug(f"non-finite cell {raw!r} -> ABSENT")
        return ABSENT
    return value


def to_percent_fraction(value: NormalizedValue) -> NormalizedValue:
    """Scale a whole percentage (32.5) to a fraction (0.325); fractions pass through."""
    if value is ABSENT:
        return ABSENT
    if abs(value) > 1:  # type: ignore[arg-type]
        return value / 100  # type: ignore[operator]
    return value


def normalize_percent(raw: str | None) -> NormalizedValue:
    """Normalize a percentage cell. ``"32.5%"`` and ``"32.5"`` both give 0.325."""
    return to_percent_fraction(normalize(raw))


def strip_store_prefix(name: str) -> str:
    return STORE_PREFIX_RE.sub("", name.strip(), count=1).strip()
