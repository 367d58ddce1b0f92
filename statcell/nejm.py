"""
NEJM Style Cells
================

Presentation variants of the range, fraction and quantile cells following
the New England Journal of Medicine table conventions. Unlike the
structured cells in cells.py, each of these produces one preformatted
string:

- nejm_range:    "1.2—9.8"
- nejm_fraction: " 7/24 (29.2%)"
- nejm_iqr:      "5.1 (3.2—7.7)", optionally followed by " 5.3±1.9"
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np

from .cell import Aspect, Cell, _aspects, cell
from .formatting import (
    EM_DASH,
    PLUS_MINUS,
    Format,
    finite_values,
    format_guess,
    is_missing_format,
    is_number,
    pad_count,
    quantile,
    render_f,
)


def nejm_range(
    x: Iterable[Any],
    format: Format = None,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a min—max range cell in NEJM style.

    :param x: Numeric data; missing values are ignored
    :param format: Digits or printf pattern (None = guess from the data)
    :param aspect: Additional aspects
    :returns: Cell holding "<min>—<max>"
    """
    values = finite_values(x)
    if is_missing_format(format):
        format = format_guess(values)
    if values.size == 0:
        low = high = float("nan")
    else:
        low, high = float(values.min()), float(values.max())

    return cell(
        f"{render_f(low, format)}{EM_DASH}{render_f(high, format)}",
        aspect=_aspects(aspect, "cell_range"),
        **attrs,
    )


def nejm_fraction(
    numerator: Any,
    denominator: Any,
    format: Format = None,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a fraction cell in NEJM style.

    A numeric format is reduced by 2 before rendering the percentage, so a
    3-digit policy shows one decimal place. The numerator is padded to the
    width of the denominator so fractions line up in a column.

    :param numerator: The value of the numerator
    :param denominator: The value of the denominator
    :param format: Digits or printf pattern (None = guess from the percentage)
    :param aspect: Additional aspects
    :returns: Cell holding "<numerator>/<denominator> (<percentage>%)"

    Example:
        >>> nejm_fraction(1, 4, 3)["value"]
        '1/4 (25.0%)'
    """
    percentage = float("nan") if denominator == 0 else 100 * numerator / denominator

    if is_number(format) and not is_missing_format(format):
        format = format - 2
    if is_missing_format(format):
        format = format_guess([percentage])

    width = len(pad_count(denominator, 0))
    return cell(
        f"{pad_count(numerator, width)}/{pad_count(denominator, 0)} "
        f"({render_f(percentage, format)}%)",
        aspect=_aspects(aspect, "cell_fraction"),
        **attrs,
    )


def nejm_iqr(
    x: Iterable[Any],
    format: Format = None,
    na_rm: bool = True,
    names: bool = False,
    type: int = 8,
    msd: bool = False,
    quant: Sequence[float] = (0.25, 0.50, 0.75),
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Create a quantile cell in NEJM style.

    The central quantile is shown first, followed by the lower and upper
    quantiles in parentheses, all joined by em dashes:
    quant=(0.1, 0.25, 0.5, 0.75, 0.9) gives "q50 (q10—q25—q75—q90)".

    :param x: Numeric data
    :param format: Digits or printf pattern (None = guess from the quantiles)
    :param na_rm: Drop missing values; if False, missing data is an error
    :param names: Accepted for call compatibility with cell_iqr; unused
    :param type: Quantile estimator type (see formatting.quantile)
    :param msd: Append " <mean>±<sd>"
    :param quant: Quantile probabilities; must have odd length
    :param aspect: Additional aspects
    :returns: Cell holding the composed string
    """
    quant = list(quant)
    if len(quant) % 2 == 0:
        raise ValueError("nejm_iqr quant argument must be an odd length")

    x = list(x)
    m = len(quant) // 2

    y = quantile(x, quant, na_rm=na_rm, type=type)
    if is_missing_format(format):
        format = format_guess(y)
    ql = [render_f(v, format) for v in y]

    if len(ql) == 1:
        text = ql[0]
    else:
        text = (
            f"{ql[m]} ("
            f"{EM_DASH.join(ql[:m])}{EM_DASH}{EM_DASH.join(ql[m + 1:])})"
        )

    if msd:
        values = finite_values(x) if na_rm else np.array(x, dtype=float)
        mean = float(np.mean(values)) if values.size else float("nan")
        sd = float(np.std(values, ddof=1)) if values.size > 1 else float("nan")
        text = f"{text} {render_f(mean, format)}{PLUS_MINUS}{render_f(sd, format)}"

    return cell(text, aspect=_aspects(aspect, "cell_iqr"), **attrs)
