"""
Hmisc Style Statistic Cells
===========================

Constructors that run a test on raw data and return the rendered cell.
These are the statistic entries of the style bundles: each takes the
variable being summarised and (where relevant) the grouping variable.

- hmisc_fstat:    one-way ANOVA of x by group (statsmodels OLS)
- hmisc_chi2:     chi-squared test of a cross-tabulation (pandas + scipy)
- hmisc_spearman: Spearman rank correlation (scipy)
- hmisc_wilcox:   Kruskal-Wallis / Wilcoxon rank sum test (scipy)
- hmisc_p:        p-value cell
- hmisc_range:    min/max as a structured range cell
"""
from __future__ import annotations

from typing import Any, Sequence

import pandas as pd
import statsmodels.formula.api as smf

from .cell import Aspect, Cell, _aspects, cell_range
from .cells import cell_chi2, cell_p
from .dispatch import cell_from_anova, cell_from_htest
from .formatting import (
    DEFAULT_FORMAT_P,
    Format,
    finite_values,
    format_guess,
    is_missing_format,
    render_df,
    render_f,
)
from .hypothesis import anova_summary_from_model, chi2_test, kruskal_test, spearman_test


hmisc_p = cell_p


def hmisc_range(x: Sequence[Any], format: Format = None, **attrs: Any) -> Cell:
    """Create a structured (min, max) range cell from raw data."""
    values = finite_values(x)
    if is_missing_format(format):
        format = format_guess(values)
    if values.size == 0:
        low = high = float("nan")
    else:
        low, high = float(values.min()), float(values.max())
    return cell_range(render_f(low, format), render_f(high, format), **attrs)


def hmisc_fstat(
    x: Sequence[Any],
    group: Sequence[Any],
    format_p: Format = DEFAULT_FORMAT_P,
    **attrs: Any,
) -> Cell:
    """
    One-way analysis of variance of ``x`` across ``group``.

    :param x: Numeric outcome
    :param group: Group label for each value of x
    :param format_p: Digits or printf pattern for the p-value
    :returns: cell_fstat Cell
    """
    df = pd.DataFrame({
        "y": pd.to_numeric(pd.Series(list(x)), errors="coerce"),
        "group": pd.Series(list(group)).astype("object"),
    }).dropna()
    model = smf.ols("y ~ C(group)", data=df).fit()
    return cell_from_anova(anova_summary_from_model(model), format_p=format_p, **attrs)


def hmisc_chi2(
    x: Sequence[Any],
    y: Sequence[Any],
    format: Format = 2,
    format_p: Format = DEFAULT_FORMAT_P,
    correct: bool = True,
    **attrs: Any,
) -> Cell:
    """
    Chi-squared test of independence between two categorical variables.

    :param x: Categories of the first variable
    :param y: Categories of the second variable
    :param format: Digits or printf pattern for the statistic
    :param format_p: Digits or printf pattern for the p-value
    :param correct: Yates' continuity correction for 2x2 tables
    :returns: cell_chi2 Cell
    """
    table = pd.crosstab(pd.Series(list(x), name="x"), pd.Series(list(y), name="y"))
    return cell_from_htest(chi2_test(table, correct=correct),
                           format=format, format_p=format_p, **attrs)


def hmisc_spearman(
    x: Sequence[Any],
    y: Sequence[Any],
    format: Format = 2,
    format_p: Format = DEFAULT_FORMAT_P,
    **attrs: Any,
) -> Cell:
    """Spearman rank correlation between two numeric variables."""
    return cell_from_htest(spearman_test(x, y), format=format, format_p=format_p, **attrs)


def hmisc_wilcox(
    x: Sequence[Any],
    group: Sequence[Any],
    format: Format = 2,
    format_p: Format = DEFAULT_FORMAT_P,
    aspect: Aspect = None,
    **attrs: Any,
) -> Cell:
    """
    Rank-based comparison of ``x`` across ``group``.

    Runs the Kruskal-Wallis test (the Wilcoxon rank sum test for two
    groups) and shows it as a chi-squared statistic.

    :param x: Numeric outcome
    :param group: Group label for each value of x
    :param format: Digits or printf pattern for the statistic
    :param format_p: Digits or printf pattern for the p-value
    :param aspect: Additional aspects, placed before cell_wilcox
    :returns: cell_chi2 Cell tagged cell_wilcox
    """
    test = kruskal_test(x, group)
    return cell_chi2(
        render_f(test["statistic"], format),
        render_df(test["parameter"][0]),
        render_f(test["p_value"], format_p),
        aspect=_aspects(aspect, "cell_wilcox"),
        **attrs,
    )
