"""
Cell Tables
===========

A growable 2-D grid of cells. Slots are addressed with 0-based
(row, col) indices. Growing a table appends new empty cells and never
replaces cells already placed.

Architecture Note:
    This module uses dictionaries instead of classes for data structures
    to maintain consistency with the rest of the package.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence, TypedDict, Union

from .cell import Cell, cell


class CellTable(TypedDict):
    """
    Grid of cells.

    Keys:
        grid: List of rows, each a list of Cells
        embedded: Whether the table sits inside another table's cell
    """
    grid: List[List[Cell]]
    embedded: bool


Grid = Union[CellTable, List[List[Any]]]


def _empty_cell() -> Cell:
    return cell("")


def _grid(x: Grid) -> List[List[Any]]:
    if isinstance(x, dict):
        return x["grid"]
    return x


def create_cell_table(rows: int, cols: int, embedded: bool = True) -> CellTable:
    """
    Create a table of empty cells.

    The initial size is not a limit; the table can grow with set_cell,
    add_row and add_col.

    :param rows: Number of rows
    :param cols: Number of columns
    :param embedded: Mark the table as embedded in another table
    :returns: CellTable dictionary
    """
    if rows < 0 or cols < 0:
        raise ValueError(f"Table size must be non-negative, got {rows}x{cols}")
    return {
        "grid": [[_empty_cell() for _ in range(cols)] for _ in range(rows)],
        "embedded": embedded,
    }


def rows(x: Grid) -> int:
    """Number of rows of a CellTable or a list of lists."""
    return len(_grid(x))


def cols(x: Grid) -> int:
    """Number of columns (length of the first row; 0 for an empty grid)."""
    grid = _grid(x)
    if len(grid) >= 1:
        return len(grid[0])
    return 0


def get_cell(table: Grid, row: int, col: int) -> Cell:
    """Cell at (row, col)."""
    return _grid(table)[row][col]


def add_row(table: CellTable, cells: Optional[Sequence[Cell]] = None) -> CellTable:
    """
    Append a row.

    :param table: CellTable to grow
    :param cells: Cells for the new row (default: empty cells); short rows
        are padded to the table's width
    :raises ValueError: If the row is wider than a non-empty table
    :returns: The same table
    """
    new_row = list(cells) if cells is not None else []
    if rows(table) > 0 and len(new_row) > cols(table):
        raise ValueError(
            f"Got {len(new_row)} cells for a table with {cols(table)} columns; "
            f"use add_col or set_cell to widen the table first"
        )
    new_row.extend(_empty_cell() for _ in range(cols(table) - len(new_row)))
    table["grid"].append(new_row)
    return table


def add_col(table: CellTable, cells: Optional[Sequence[Cell]] = None) -> CellTable:
    """
    Append a column.

    :param table: CellTable to grow
    :param cells: One cell per row (default: empty cells)
    :returns: The same table
    """
    cells = list(cells) if cells is not None else []
    for i, row in enumerate(table["grid"]):
        row.append(cells[i] if i < len(cells) else _empty_cell())
    return table


def set_cell(table: CellTable, row: int, col: int, value: Cell) -> CellTable:
    """
    Place a cell at (row, col), growing the table if needed.

    :param table: CellTable to update
    :param row: 0-based row index
    :param col: 0-based column index
    :param value: Cell to place
    :returns: The same table
    """
    if row < 0 or col < 0:
        raise ValueError(f"Cell position must be non-negative, got ({row}, {col})")
    while cols(table) <= col:
        if rows(table) == 0:
            add_row(table)
            table["grid"][0].append(_empty_cell())
        else:
            add_col(table)
    while rows(table) <= row:
        add_row(table)
    table["grid"][row][col] = value
    return table
