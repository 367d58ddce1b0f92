"""
Cell Dispatch
=============

Turns analysis records (see hypothesis.py) into statistic cells. The
branch is chosen from the record's AnalysisKind, never from its numbers.

Usage:
    from statcell.hypothesis import t_test
    from statcell.dispatch import cell_from_result

    c = cell_from_result(t_test(treated, control))
    c["names"]   # ['t_{17.78}', 'P']
"""
from __future__ import annotations

from typing import Any, Dict
import warnings

from .cell import Cell
from .cells import cell_chi2, cell_fstat, cell_spearman, cell_studentt
from .formatting import DEFAULT_FORMAT_P, Format, render_df, render_f
from .hypothesis import AnalysisKind, AnovaSummary, HypothesisTest, is_loose_student_t


def cell_from_anova(
    summary: AnovaSummary,
    format_p: Format = DEFAULT_FORMAT_P,
    **attrs: Any,
) -> Cell:
    """
    Create an F-statistic cell from an analysis of variance.

    :param summary: AnovaSummary dictionary
    :param format_p: Digits or printf pattern for the p-value
    :param attrs: Additional cell attributes (row, col, aspect, ...)
    :returns: cell_fstat Cell
    """
    return cell_fstat(
        f=render_f(summary["f"], "%.2f"),
        n1=render_df(summary["df_effect"]),
        n2=render_df(summary["df_residual"]),
        p=render_f(summary["p_value"], format_p),
        **attrs,
    )


def cell_from_htest(
    test: HypothesisTest,
    format: Format = 2,
    format_p: Format = DEFAULT_FORMAT_P,
    **attrs: Any,
) -> Cell:
    """
    Create a statistic cell from a hypothesis test.

    Chi-squared tests become cell_chi2, Spearman tests cell_spearman (S with
    no decimals) and everything else cell_studentt. A test that is not a t
    test but lands on the Student t branch raises a UserWarning.

    :param test: HypothesisTest dictionary
    :param format: Digits or printf pattern for the statistic
    :param format_p: Digits or printf pattern for the p-value
    :param attrs: Additional cell attributes
    :returns: Statistic Cell
    """
    kind = test["kind"]
    p = render_f(test["p_value"], format_p)
    df = render_df(test["parameter"][0]) if test["parameter"] else ""

    if kind == AnalysisKind.CHI_SQUARED:
        return cell_chi2(render_f(test["statistic"], format), df, p, **attrs)

    if kind == AnalysisKind.SPEARMAN:
        return cell_spearman(
            render_f(test["statistic"], 0),
            render_f(test["estimate"], format),
            p,
            **attrs,
        )

    if is_loose_student_t(test):
        warnings.warn(
            f"Test '{test['method']}' (statistic '{test['statistic_name']}') is not "
            f"a recognised kind; rendering it as a Student t test.",
            UserWarning,
        )
    return cell_studentt(render_f(test["statistic"], format), df, p, **attrs)


def cell_from_result(result: Dict[str, Any], **kwargs: Any) -> Cell:
    """
    Create a statistic cell from any analysis record.

    :param result: AnovaSummary or HypothesisTest dictionary
    :param kwargs: Passed on to cell_from_anova / cell_from_htest
    :returns: Statistic Cell
    """
    kind = result.get("kind") if isinstance(result, dict) else None
    if kind == AnalysisKind.ANOVA:
        return cell_from_anova(result, **kwargs)
    if isinstance(kind, AnalysisKind):
        return cell_from_htest(result, **kwargs)
    raise TypeError(
        f"Cannot build a cell from {type(result).__name__}; expected an "
        f"AnovaSummary or HypothesisTest record"
    )
