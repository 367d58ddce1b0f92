"""
Cell Data Model
===============

A cell is one formatted table entry plus the metadata a renderer needs to
display it. Cells are built once by the constructors in this package and
are not modified afterwards; tables and composite cells hold them by
reference.

Architecture Note:
    This module uses dictionaries instead of classes for data structures
    to maintain consistency with the rest of the package.
    All data containers are plain Python dicts with documented keys.

Well-known attributes:
- aspect: ordered role/style tags, most specific first (e.g. CSS classes)
- units: display units for labels
- names: one label per scalar in value, e.g. "P" for a p-value
- sep: joins multiple scalars when rendered
- reference: reference symbols for footnote/key generation
- row, col, subrow, subcol: logical position used for key generation

Any other keyword given to cell() is kept in ``extra`` for renderers that
know about it.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypedDict, Union

import numpy as np


# =============================================================================
# Enums
# =============================================================================

class CellKind(Enum):
    """Shape of a cell's payload."""
    SCALAR = auto()          # value is a string, number or list of scalars
    COMPOSITE = auto()       # value is a list of sub-cells


# =============================================================================
# Cell TypedDict
# =============================================================================

class Cell(TypedDict):
    """
    A single (possibly composite) table entry.

    Keys:
        kind: SCALAR or COMPOSITE
        value: Payload - string, number, list of scalars, or list of Cells
        aspect: Ordered role tags, most specific first
        units: Optional display units
        names: Optional labels, one per scalar in value
        sep: Optional separator used when joining scalars
        reference: Optional reference-marker symbols
        row, col, subrow, subcol: Optional logical coordinates
        extra: Renderer-specific attributes not modelled above
    """
    kind: CellKind
    value: Any
    aspect: List[str]
    units: Optional[str]
    names: Optional[List[str]]
    sep: Optional[str]
    reference: Optional[List[Any]]
    row: Any
    col: Any
    subrow: Any
    subcol: Any
    extra: Dict[str, Any]


CELL_ATTRIBUTES: Tuple[str, ...] = (
    "aspect", "units", "names", "sep", "reference",
    "row", "col", "subrow", "subcol",
)

Aspect = Union[str, Sequence[str], None]


def _aspects(aspect: Aspect, *tags: str) -> List[str]:
    """Caller aspects first, then the constructor's own tags."""
    if aspect is None:
        head: List[str] = []
    elif isinstance(aspect, str):
        head = [aspect]
    else:
        head = list(aspect)
    return head + list(tags)


def is_cell(x: Any) -> bool:
    """True if ``x`` was built by cell() or one of the constructors."""
    return isinstance(x, dict) and isinstance(x.get("kind"), CellKind) and "aspect" in x


def is_composite(x: Cell) -> bool:
    """True if the cell's value is a list of sub-cells."""
    return x["kind"] == CellKind.COMPOSITE


def _as_values(values: Any) -> List[Any]:
    """Value list of a cell: scalars are wrapped, arrays and Series are raveled."""
    if isinstance(values, (str, bytes, dict)):
        return [values]
    if isinstance(values, (list, tuple)):
        return list(values)
    if np.ndim(values) > 0:
        return np.ravel(values).tolist()
    return [values]


def _kind_of(value: Any) -> CellKind:
    if isinstance(value, list) and value and all(is_cell(v) for v in value):
        return CellKind.COMPOSITE
    return CellKind.SCALAR


# =============================================================================
# Construction primitive
# =============================================================================

def cell(value: Any, **attributes: Any) -> Cell:
    """
    Attach attributes to a value, producing a Cell.

    No attribute names are rejected: the well-known ones fill their own keys
    and everything else goes into ``extra``. If ``value`` is already a Cell,
    a new Cell is returned with the given attributes layered on top; the
    original is left untouched.

    :param value: Payload for the cell
    :param attributes: Cell attributes (aspect, units, names, sep, ...)
    :returns: Cell dictionary

    Example:
        >>> c = cell("12.5", aspect="cell_value", units="mg/dl")
        >>> c["aspect"]
        ['cell_value']
    """
    if is_cell(value):
        base = value
        result: Cell = {**base, "extra": dict(base["extra"])}
    else:
        result = {
            "kind": _kind_of(value),
            "value": value,
            "aspect": [],
            "units": None,
            "names": None,
            "sep": None,
            "reference": None,
            "row": None,
            "col": None,
            "subrow": None,
            "subcol": None,
            "extra": {},
        }

    for key, attr in attributes.items():
        if key == "aspect":
            result["aspect"] = _aspects(attr)
        elif key in CELL_ATTRIBUTES:
            result[key] = attr
        else:
            result["extra"][key] = attr
    return result


def cell_items(c: Cell) -> List[Tuple[Optional[str], Any]]:
    """(name, value) pairs of a scalar cell; names are None when absent."""
    value = c["value"]
    values = _as_values(value)
    names = c["names"] or [None] * len(values)
    return list(zip(names, values))


def summarize_cell(c: Cell) -> str:
    """
    Generate a short debug summary for a cell.

    :param c: Cell dictionary
    :returns: Human-readable summary string
    """
    lines = [f"Cell ({c['kind'].name.lower()}): {', '.join(c['aspect']) or '-'}"]
    if is_composite(c):
        for sub in c["value"]:
            lines.extend("  " + line for line in summarize_cell(sub).splitlines())
    else:
        for name, value in cell_items(c):
            lines.append(f"  {name}={value}" if name else f"  {value}")
    if c["units"]:
        lines.append(f"  Units: {c['units']}")
    if c["extra"]:
        lines.append(f"  Extra: {sorted(c['extra'])}")
    return "\n".join(lines)


# =============================================================================
# Label cells
# =============================================================================

def cell_label(text: Any, units: Optional[str] = None, **attrs: Any) -> Cell:
    """
    Create a label cell, optionally with units.

    :param text: Label text (may contain a subset of LaTeX greek/math)
    :param units: Optional units
    :returns: Cell tagged cell_label

    Example:
        >>> cell_label("Concentration", "mg/dl")["units"]
        'mg/dl'
    """
    aspect = _aspects(attrs.pop("aspect", None), "cell_label")
    return cell(str(text), aspect=aspect,
                units=None if units is None else str(units), **attrs)


def cell_header(text: Any, units: Optional[str] = None, **attrs: Any) -> Cell:
    """Create a column header cell; a header is also a label."""
    aspect = _aspects(attrs.pop("aspect", None), "cell_header", "cell_label")
    return cell(str(text), aspect=aspect,
                units=None if units is None else str(units), **attrs)


def cell_subheader(
    text: Any,
    units: Optional[str] = None,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """Create a subheader cell; a subheader is also a header and a label."""
    return cell(str(text),
                aspect=_aspects(aspect, "cell_subheader", "cell_header", "cell_label"),
                units=None if units is None else str(units), **attrs)


# =============================================================================
# Named values, ranges and estimates
# =============================================================================

def cell_named_values(
    values: Any,
    names: Union[str, Sequence[str], None],
    sep: str = ", ",
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a cell of scalars each paired with a label.

    :param values: Scalar, sequence, numpy array or pandas Series of scalars
    :param names: One label per value (a single string for a single value),
        or None for unlabelled values
    :param sep: Separator used to join the values when rendered
    :param aspect: Additional aspects, placed before cell_value
    :param attrs: Additional cell attributes
    :returns: Cell tagged cell_value

    Example:
        >>> cell_named_values([4.0, 0.004], ["F_{10,20}", "P"])["names"]
        ['F_{10,20}', 'P']
    """
    values = _as_values(values)
    if names is not None:
        names = [names] if isinstance(names, str) else list(names)
        if len(names) != len(values):
            raise ValueError(
                f"Got {len(names)} names for {len(values)} values; "
                f"names and values must have the same length"
            )
    return cell(values, aspect=_aspects(aspect, "cell_value"),
                names=names, sep=sep, **attrs)


def cell_range(
    low: Any,
    high: Any,
    sep: str = ", ",
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """Create a (low, high) interval cell."""
    return cell([low, high], aspect=_aspects(aspect, "cell_range"), sep=sep, **attrs)


def cell_estimate(
    value: Any,
    low: Any,
    high: Any,
    name: Optional[str] = None,
    aspect: Aspect = None,
    sep: str = ", ",
    **attrs: Any,
) -> Cell:
    """
    Create a composite cell holding an estimate and its interval.

    The result's value is ``[named-value cell, range cell]``; ``sep`` applies
    to the range.

    :param value: The estimate
    :param low: Lower end of the interval
    :param high: Upper end of the interval
    :param name: Optional label for the estimate
    :param aspect: Additional aspects, placed before cell_estimate
    :returns: Composite Cell tagged cell_estimate

    Example:
        >>> est = cell_estimate(1.0, 0.5, 1.5, name="OR")
        >>> is_composite(est)
        True
    """
    parts = [
        cell_named_values(value, names=name),
        cell_range(low, high, sep=sep),
    ]
    return cell(parts, aspect=_aspects(aspect, "cell_estimate"), **attrs)
