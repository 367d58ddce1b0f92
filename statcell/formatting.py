"""
Formatting Primitives
=====================

Number-to-text conversion shared by every cell constructor.

Key functions:
- render_f: Render one number with a digit count or a printf pattern
- format_guess: Infer a digit count from data when the caller gives none
- quantile: Sample quantiles with selectable Hyndman-Fan estimator type
- pad_count: Left-pad a count to a fixed character width

Digit counts are decimal places in fixed notation, so ``render_f(25, 1)``
is ``"25.0"`` and ``render_f(0.25, 3)`` is ``"0.250"``.
"""
from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, List, Union

import numpy as np


# =============================================================================
# Display constants
# =============================================================================

EM_DASH = "—"
PLUS_MINUS = "±"
MISSING_MARKER = "NA"
DEFAULT_FORMAT_P = "%1.3f"

Format = Union[int, str, None]

# Hyndman & Fan (1996) sample quantile types -> numpy.quantile methods
_QUANTILE_METHODS = {
    1: "inverted_cdf",
    2: "averaged_inverted_cdf",
    3: "closest_observation",
    4: "interpolated_inverted_cdf",
    5: "hazen",
    6: "weibull",
    7: "linear",
    8: "median_unbiased",
    9: "normal_unbiased",
}


# =============================================================================
# Helpers
# =============================================================================

def is_number(value: Any) -> bool:
    """True for real numbers (python or numpy), excluding booleans."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def is_missing(value: Any) -> bool:
    """True for None and NaN."""
    if value is None:
        return True
    return is_number(value) and math.isnan(value)


def is_missing_format(format: Any) -> bool:
    """A format of None or NaN means 'not given'; the caller should guess one."""
    return format is None or (is_number(format) and math.isnan(format))


def _as_float_array(values: Any) -> np.ndarray:
    if is_number(values) or values is None:
        values = [values]
    return np.array(
        [np.nan if v is None else v for v in values],
        dtype=float,
    )


# =============================================================================
# Rendering
# =============================================================================

def render_f(value: Any, format: Format = None) -> str:
    """
    Render a single value as display text.

    :param value: Number to render. Missing values (None/NaN) give MISSING_MARKER;
        anything non-numeric is returned as ``str(value)``.
    :param format: Decimal places (int, or a string holding an int), a printf
        pattern starting with '%', or None to guess from the value
    :returns: Rendered string

    Example:
        >>> render_f(3.14159, 2)
        '3.14'
        >>> render_f(0.0421, "%1.3f")
        '0.042'
    """
    if is_missing(value):
        return MISSING_MARKER
    if not is_number(value):
        return str(value)

    if is_missing_format(format):
        format = format_guess([value])

    if isinstance(format, str):
        if format.startswith("%"):
            return format % value
        try:
            format = int(format)
        except ValueError:
            raise ValueError(
                f"Format '{format}' is neither a printf pattern nor a digit count"
            ) from None

    digits = max(int(format), 0)
    return f"{float(value):.{digits}f}"


def format_guess(values: Any) -> int:
    """
    Guess a digit count for a numeric vector.

    Integral data gets 0 decimals. Otherwise enough decimals are chosen to
    show three significant digits on the smallest non-zero magnitude.

    :param values: Number or iterable of numbers (missing values ignored)
    :returns: Number of decimal places for render_f
    """
    arr = _as_float_array(values)
    arr = arr[~np.isnan(arr)]
    if arr.size == 0:
        return 0

    finite = arr[np.isfinite(arr)]
    if finite.size == 0 or np.all(finite == np.floor(finite)):
        return 0

    nonzero = np.abs(finite[finite != 0])
    smallest = float(nonzero.min())
    return max(0, 2 - int(math.floor(math.log10(smallest))))


def pad_count(count: Any, width: int) -> str:
    """
    Left-pad a count with spaces to the given character width.

    Integral floats (e.g. 12.0 from a pandas sum) are shown as integers.
    """
    if is_number(count) and not is_missing(count) and float(count).is_integer():
        text = str(int(count))
    else:
        text = str(count)
    return text.rjust(width)


# =============================================================================
# Quantiles
# =============================================================================

def quantile(
    x: Iterable[Any],
    probs: Iterable[float],
    na_rm: bool = True,
    type: int = 8,
) -> List[float]:
    """
    Sample quantiles of ``x``.

    :param x: Numeric data
    :param probs: Probabilities in [0, 1]
    :param na_rm: Drop missing values first; if False, missing data is an error
    :param type: Hyndman-Fan estimator type (1-9, default 8 = median-unbiased)
    :returns: One quantile per probability
    """
    if type not in _QUANTILE_METHODS:
        raise ValueError(f"Quantile type must be an integer 1-9, got {type!r}")

    arr = _as_float_array(list(x))
    missing = np.isnan(arr)
    if missing.any():
        if not na_rm:
            raise ValueError("Missing values are not allowed when na_rm is False")
        arr = arr[~missing]

    probs = [float(p) for p in probs]
    if arr.size == 0:
        return [float("nan")] * len(probs)

    result = np.quantile(arr, probs, method=_QUANTILE_METHODS[type])
    return [float(v) for v in np.atleast_1d(result)]


def finite_values(x: Iterable[Any]) -> np.ndarray:
    """Float array of ``x`` with missing values removed."""
    arr = _as_float_array(list(x))
    return arr[~np.isnan(arr)]


def render_df(df: Any) -> str:
    """Degrees of freedom for a label: integral values without decimals."""
    if is_missing(df) or not is_number(df):
        return render_f(df)
    if float(df).is_integer():
        return str(int(df))
    return render_f(df, 2)
