from __future__ import annotations
import pytest

from pnl_ingest.errors import MalformedInputError
from pnl_ingest.grid.reader import cell, parse_grid


def test_parse_grid_trims_cells_and_keeps_ragged_rows():
    grid = parse_grid("Title\n  a , b ,c\nx,y\n")
    assert grid == (("Title",), ("a", "b", "c"), ("x", "y"))


def test_parse_grid_skips_blank_lines_but_keeps_delimiter_only_rows():
    grid = parse_grid("Title\n\n   \n,,\nName,1\n")
    assert len(grid) == 3
    # trailing empty cells are dropped, the row itself stays in place
    assert grid[1] == ()
    assert grid[2] == ("Name", "1")


def test_parse_grid_keeps_quoted_delimiters():
    grid = parse_grid('Sales,"$12,345", "$1,000"\n')
    assert grid[0] == ("Sales", "$12,345", "$1,000")


def test_parse_grid_does_not_convert_placeholders():
    grid = parse_grid("Dairy,-,N/A,NaN,\n")
    assert grid[0] == ("Dairy", "-", "N/A", "NaN")


def test_parse_grid_keeps_inner_empty_cells():
    grid = parse_grid("Dairy,,5,,\n")
    assert grid[0] == ("Dairy", "", "5")


def test_parse_grid_custom_delimiter():
    grid = parse_grid("Store;01 - Denver;02 - Omaha\nSales;1,5;2\n", delimiter=";")
    assert grid[0] == ("Store", "01 - Denver", "02 - Omaha")
    assert grid[1] == ("Sales", "1,5", "2")


def test_parse_grid_tab_delimiter():
    grid = parse_grid("a\tb\n1\t2\n", delimiter="\t")
    assert grid == (("a", "b"), ("1", "2"))


@pytest.mark.parametrize("text", ["", "   ", "\n\n  \n"])
def test_parse_grid_without_rows_is_malformed(text: str):
    with pytest.raises(MalformedInputError):
        parse_grid(text)


def test_parse_grid_rejects_multi_char_delimiter():
    with pytest.raises(ValueError):
        parse_grid("a,b", delimiter=",,")


def test_cell_treats_missing_positions_as_empty():
    grid = parse_grid("a,b\nc\n")
    assert cell(grid, 0, 1) == "b"
    assert cell(grid, 1, 1) == ""
    assert cell(grid, 5, 0) == ""
    assert cell(grid, 0, -1) == ""


def test_parse_grid_unbalanced_quote_keeps_stray_quote_in_cell():
    text = 'P&L,,\nStore,01 - Denver,02 - Omaha\nTotal Labor,"1000,2000\n'
    grid = parse_grid(text)
    assert len(grid) == 3
    assert grid[2] == ("Total Labor", '"1000', "2000")
