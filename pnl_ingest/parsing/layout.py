from __future__ import annotations

import logging

from ..grid.reader import Grid
from ..models.layout import LayoutKind
from .normalizer import STORE_PREFIX_RE

"""Layout classifier: decide whether a grid is vertical or horizontal.

Signals, checked in order:
1. fewer than 3 rows                        -> vertical
2. metric keyword in a row-1 header cell    -> horizontal
3. store-number prefix in row 2, cols 1..4  -> vertical
4. nothing fired                            -> FALLBACK_LAYOUT
"""

__all__ = [
    "FALLBACK_LAYOUT",
    "METRIC_HEADER_KEYWORDS",
    "detect_layout",
]

logger = logging.getLogger(__name__)

# 判定不能時の既定値 (製品判断として vertical を維持)
FALLBACK_LAYOUT = LayoutKind.VERTICAL

METRIC_HEADER_KEYWORDS: tuple[str, ...] = ("cogs", "labor", "prime cost", "sop")

_HEADER_ROW = 1
_STORE_ROW = 2
_PREFIX_PROBE_COLUMNS = 4


def detect_layout(grid: Grid) -> LayoutKind:
    if len(grid) < 3:
        logger.debug(f"layout: only {len(grid)} rows -> {LayoutKind.VERTICAL.value}")
        return LayoutKind.VERTICAL

    for text in grid[_HEADER_ROW]:
        lowered = text.lower()
        if any(k in lowered for k in METRIC_HEADER_KEYWORDS):
            logger.debug(f"layout: metric header {text!r} in row 1 -> horizontal")
            return LayoutKind.HORIZONTAL

    probe = grid[_STORE_ROW][1 : 1 + _PREFIX_PROBE_COLUMNS]
    for text in probe:
        if STORE_PREFIX_RE.match(text):
            logger.debug(f"layout: store prefix {text!r} in row 2 -> vertical")
            return LayoutKind.VERTICAL

    logger.debug(f"layout: no signal fired -> fallback {FALLBACK_LAYOUT.value}")
    return FALLBACK_LAYOUT
