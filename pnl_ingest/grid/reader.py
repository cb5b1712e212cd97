from __future__ import annotations

import csv
import io
import logging

import pandas as pd

from ..errors import MalformedInputError

"""Grid reader: delimited report text -> ragged grid of trimmed string cells.

- 空行 (空白のみ) はスキップ、区切り文字のみの行は空セル行として保持
- Trailing empty cells are dropped, so rows keep their own (ragged) length
- Quoted cells ("$12,345") keep embedded delimiters (pandas tokenizer)
- Unbalanced quotes: the text is re-read with quoting off, so the stray quote
  stays in its cell and only that cell fails to normalize
"""

__all__ = [
    "Grid",
    "parse_grid",
    "cell",
    "DEFAULT_DELIMITER",
]

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","

Grid = tuple[tuple[str, ...], ...]


def _read_frame(body: str, delimiter: str, width: int, quoting: int) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(body),
        sep=delimiter,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        skipinitialspace=True,
        quoting=quoting,
    )


def parse_grid(text: str, delimiter: str = DEFAULT_DELIMITER) -> Grid:
    """Split raw delimited text into a grid of trimmed cells.

    Parameters
    ----------
    text: report contents as one string
    delimiter: field separator (single character)

    Raises
    ------
    MalformedInputError: the text has no non-empty line, or cannot be tokenized
    """
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    lines = [ln for ln in (text or "").splitlines() if ln.strip()]
    if not lines:
        raise MalformedInputError("report contains no non-empty rows")

    # 列数の上限: 引用符内の区切り文字も数えるので実際の列数以上になる
    width = max(ln.count(delimiter) for ln in lines) + 1

    body = "\n".join(lines)
    try:
        df = _read_frame(body, delimiter, width, csv.QUOTE_MINIMAL)
    except pd.errors.ParserError as e:
        logger.debug(f"grid: tokenizer error ({e}); re-reading with quoting off")
        try:
            df = _read_frame(body, delimiter, width, csv.QUOTE_NONE)
        except pd.errors.ParserError as e2:
            raise MalformedInputError(f"report cannot be tokenized: {e2}") from e2

    rows: list[tuple[str, ...]] = []
    for raw in df.itertuples(index=False, name=None):
        cells = ["" if pd.isna(v) else str(v).strip() for v in raw]
        # 末尾の空セルは落とす (パディング分と元の空セルを区別しない)
        while cells and not cells[-1]:
            cells.pop()
        rows.append(tuple(cells))

    logger.debug(f"grid read rows={len(rows)} max_width={max(len(r) for r in rows)}")
    return tuple(rows)


def cell(grid: Grid, row: int, col: int) -> str:
    """Positional lookup that treats a missing row or column as an empty cell."""
    if row < 0 or row >= len(grid):
        return ""
    cells = grid[row]
    if col < 0 or col >= len(cells):
        return ""
    return cells[col]
