"""
Statistical Result Cells
========================

Constructors that turn a statistic (or the raw data behind it) into a
named-value Cell. Test statistics are usually passed in already rendered
(see dispatch.py); fractions and quantiles are rendered here.

Aspect tags, most specific first:
- cell_fraction, cell_n, cell_iqr
- cell_fstat, cell_chi2, cell_studentt, cell_spearman, cell_p (+ statistics)
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Optional

from .cell import Aspect, Cell, _aspects, cell, cell_named_values
from .formatting import (
    DEFAULT_FORMAT_P,
    Format,
    format_guess,
    is_missing,
    is_missing_format,
    is_number,
    quantile,
    render_f,
)


def _ratio(numerator: Any, denominator: Any) -> float:
    if denominator == 0:
        return float("nan")
    return numerator / denominator


# =============================================================================
# Counts and fractions
# =============================================================================

def cell_fraction(
    numerator: Any,
    denominator: Any,
    format: Format = 3,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a fraction cell with its ratio and percentage.

    :param numerator: The value of the numerator
    :param denominator: The value of the denominator
    :param format: Digits or printf pattern for ratio and percentage
    :param aspect: Additional aspects
    :returns: Named-value Cell over (numerator, denominator, ratio, percentage)

    Example:
        >>> cell_fraction(1, 4)["value"]
        [1, 4, '0.250', '25.000']
    """
    ratio = _ratio(numerator, denominator)
    return cell_named_values(
        [numerator, denominator, render_f(ratio, format), render_f(100 * ratio, format)],
        ["numerator", "denominator", "ratio", "percentage"],
        aspect=_aspects(aspect, "cell_fraction"),
        **attrs,
    )


def cell_n(n: Any, aspect: Aspect = None, **attrs: Any) -> Cell:
    """Create a sample-size cell labelled N."""
    return cell_named_values(n, "N", aspect=_aspects(aspect, "cell_n"), **attrs)


# =============================================================================
# Quantiles
# =============================================================================

def cell_iqr(
    x: Iterable[Any],
    format: Format = None,
    na_rm: bool = True,
    names: bool = False,
    type: int = 8,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create an interquartile range cell from raw data.

    :param x: Numeric data
    :param format: Digits or printf pattern (None = guess from the quartiles)
    :param na_rm: Drop missing values before computing quartiles
    :param names: Label the quartiles "25%", "50%", "75%"
    :param type: Quantile estimator type (see formatting.quantile)
    :param aspect: Additional aspects
    :returns: Cell whose value is the three rendered quartiles
    """
    q = quantile(x, (0.25, 0.50, 0.75), na_rm=na_rm, type=type)
    if is_missing_format(format):
        format = format_guess(q)
    return cell(
        [render_f(v, format) for v in q],
        aspect=_aspects(aspect, "cell_iqr"),
        names=["25%", "50%", "75%"] if names else None,
        **attrs,
    )


# =============================================================================
# Test statistics
# =============================================================================

def cell_fstat(f: Any, n1: Any, n2: Any, p: Any, aspect: Aspect = None, **attrs: Any) -> Cell:
    """
    Create an F-test cell.

    :param f: The F statistic
    :param n1: Numerator degrees of freedom
    :param n2: Denominator degrees of freedom
    :param p: The p-value
    """
    return cell_named_values(
        [f, p],
        [f"F_{{{n1},{n2}}}", "P"],
        aspect=_aspects(aspect, "cell_fstat", "statistics"),
        **attrs,
    )


def cell_chi2(chi2: Any, df: Any, p: Any, aspect: Aspect = None, **attrs: Any) -> Cell:
    """Create a chi-squared test cell."""
    return cell_named_values(
        [chi2, p],
        [f"χ²_{{{df}}}", "P"],
        aspect=_aspects(aspect, "cell_chi2", "statistics"),
        **attrs,
    )


def cell_studentt(t: Any, df: Any, p: Any, aspect: Aspect = None, **attrs: Any) -> Cell:
    """Create a Student t-test cell."""
    return cell_named_values(
        [t, p],
        [f"t_{{{df}}}", "P"],
        aspect=_aspects(aspect, "cell_studentt", "statistics"),
        **attrs,
    )


def cell_spearman(S: Any, rho: Any, p: Any, aspect: Aspect = None, **attrs: Any) -> Cell:
    """Create a Spearman rank correlation cell."""
    return cell_named_values(
        [S, rho, p],
        ["S", "ρ", "P"],
        aspect=_aspects(aspect, "cell_spearman", "statistics"),
        **attrs,
    )


def _smallest_shown(format: Format) -> Optional[str]:
    """Smallest positive value expressible at a format's precision, rendered."""
    if is_missing_format(format):
        return None
    if isinstance(format, str) and format.startswith("%"):
        match = re.search(r"\.(\d+)", format)
        if match is None:
            return None
        digits = int(match.group(1))
    else:
        digits = int(format)
    return render_f(10.0 ** -digits, format)


def cell_p(
    p: Any,
    format_p: Format = DEFAULT_FORMAT_P,
    include_p: bool = True,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a p-value cell.

    A positive p-value too small to show at the requested precision is
    displayed as "<0.001" (for the default "%1.3f").

    :param p: The p-value
    :param format_p: Digits or printf pattern
    :param include_p: Label the value "P"
    :param aspect: Additional aspects
    """
    text = render_f(p, format_p)
    tiny = is_number(p) and not is_missing(p) and 0 < p < 1
    if tiny and text == render_f(0.0, format_p):
        smallest = _smallest_shown(format_p)
        if smallest is not None:
            text = f"<{smallest}"
    return cell_named_values(
        text,
        "P" if include_p else None,
        aspect=_aspects(aspect, "cell_p", "statistics"),
        **attrs,
    )
