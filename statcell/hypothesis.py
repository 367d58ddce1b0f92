"""
Analysis Result Records
=======================

Adapts results from scipy.stats and statsmodels into the small set of
records the cell dispatchers understand. Each record carries an
AnalysisKind tag decided once, here, when the record is built.

Architecture Note:
    This module uses dictionaries instead of classes for data structures
    to maintain consistency with the rest of the package.

Key functions:
- classify_test: Decide the kind of a hypothesis test from its statistic/method
- create_hypothesis_test, create_anova_summary: Record constructors
- anova_summary_from_table / anova_summary_from_model: statsmodels adapters
- t_test, chi2_test, spearman_test, kruskal_test: scipy test runners
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, TypedDict

import numpy as np
import pandas as pd
from scipy import stats
import statsmodels.api as sm


SPEARMAN_METHOD = "Spearman's rank correlation rho"
CHI_SQUARED_STATISTIC = "X-squared"


# =============================================================================
# Enums
# =============================================================================

class AnalysisKind(Enum):
    """Analysis results this package knows how to turn into cells."""
    ANOVA = auto()           # F test from an analysis of variance table
    CHI_SQUARED = auto()     # Statistic named "X-squared"
    SPEARMAN = auto()        # Spearman's rank correlation
    STUDENT_T = auto()       # Everything else


# =============================================================================
# TypedDicts
# =============================================================================

class HypothesisTest(TypedDict):
    """
    Result of a hypothesis test.

    Keys:
        kind: Classification made at construction
        statistic: Value of the test statistic
        statistic_name: Name of the statistic (e.g. "t", "X-squared", "S")
        parameter: Degrees of freedom (empty when the test has none)
        p_value: The p-value
        method: Description of the test performed
        estimate: Point estimate reported by the test (e.g. rho), if any
    """
    kind: AnalysisKind
    statistic: float
    statistic_name: str
    parameter: List[float]
    p_value: float
    method: str
    estimate: Optional[float]


class AnovaSummary(TypedDict):
    """
    First-term F test of an analysis of variance.

    Keys:
        kind: Always AnalysisKind.ANOVA
        f: F statistic of the first model term
        df_effect: Degrees of freedom of the first term
        df_residual: Degrees of freedom of the second row (residuals
            in a one-way model)
        p_value: p-value of the first term
    """
    kind: AnalysisKind
    f: float
    df_effect: float
    df_residual: float
    p_value: float


def classify_test(statistic_name: str, method: str) -> AnalysisKind:
    """
    Decide which kind of cell a hypothesis test becomes.

    A statistic named "X-squared" is a chi-squared test whatever its method;
    otherwise Spearman's method selects SPEARMAN. Anything else is treated
    as a Student t test; see is_loose_student_t.

    :param statistic_name: Name of the test statistic
    :param method: Description of the test
    :returns: AnalysisKind
    """
    if statistic_name == CHI_SQUARED_STATISTIC:
        return AnalysisKind.CHI_SQUARED
    if method == SPEARMAN_METHOD:
        return AnalysisKind.SPEARMAN
    return AnalysisKind.STUDENT_T


def is_loose_student_t(test: HypothesisTest) -> bool:
    """True if a test fell through to STUDENT_T without being a t test."""
    return test["kind"] == AnalysisKind.STUDENT_T and test["statistic_name"] != "t"


def create_hypothesis_test(
    statistic: float,
    statistic_name: str,
    p_value: float,
    method: str = "",
    parameter: Optional[Sequence[float]] = None,
    estimate: Optional[float] = None,
) -> HypothesisTest:
    """
    Create a HypothesisTest dictionary, classifying it on the way.

    :param statistic: Value of the test statistic
    :param statistic_name: Name of the statistic
    :param p_value: The p-value
    :param method: Description of the test
    :param parameter: Degrees of freedom
    :param estimate: Point estimate (e.g. Spearman's rho)
    :returns: HypothesisTest dictionary
    """
    return {
        "kind": classify_test(statistic_name, method),
        "statistic": float(statistic),
        "statistic_name": statistic_name,
        "parameter": [float(v) for v in parameter] if parameter is not None else [],
        "p_value": float(p_value),
        "method": method,
        "estimate": None if estimate is None else float(estimate),
    }


def create_anova_summary(
    f: float,
    df_effect: float,
    df_residual: float,
    p_value: float,
) -> AnovaSummary:
    """Create an AnovaSummary dictionary."""
    return {
        "kind": AnalysisKind.ANOVA,
        "f": float(f),
        "df_effect": float(df_effect),
        "df_residual": float(df_residual),
        "p_value": float(p_value),
    }


# =============================================================================
# statsmodels adapters
# =============================================================================

def anova_summary_from_table(table: pd.DataFrame) -> AnovaSummary:
    """
    Read the first-term F test from an ANOVA table.

    :param table: Output of statsmodels ``anova_lm`` (columns df, F, PR(>F))
    :returns: AnovaSummary dictionary
    """
    missing = [c for c in ("df", "F", "PR(>F)") if c not in table.columns]
    if missing:
        raise ValueError(f"ANOVA table is missing columns: {missing}")
    if len(table) < 2:
        raise ValueError("ANOVA table needs a model term row and a residual row")

    return create_anova_summary(
        f=table["F"].iloc[0],
        df_effect=table["df"].iloc[0],
        df_residual=table["df"].iloc[1],
        p_value=table["PR(>F)"].iloc[0],
    )


def anova_summary_from_model(model: Any) -> AnovaSummary:
    """
    Summarise a fitted statsmodels linear model by its first-term F test.

    :param model: Fitted OLS results (e.g. ``smf.ols(...).fit()``)
    :returns: AnovaSummary dictionary
    """
    return anova_summary_from_table(sm.stats.anova_lm(model, typ=1))


# =============================================================================
# scipy test runners
# =============================================================================

def _clean(x: Sequence[Any]) -> np.ndarray:
    arr = np.asarray(pd.to_numeric(pd.Series(x), errors="coerce"), dtype=float)
    return arr[~np.isnan(arr)]


def t_test(
    x: Sequence[Any],
    y: Sequence[Any],
    equal_var: bool = False,
) -> HypothesisTest:
    """
    Two-sample t test (Welch by default).

    :param x: First sample; missing values dropped
    :param y: Second sample; missing values dropped
    :param equal_var: Pool variances (classic Student test)
    :returns: HypothesisTest dictionary
    """
    a, b = _clean(x), _clean(y)
    t, p = stats.ttest_ind(a, b, equal_var=equal_var)

    n1, n2 = len(a), len(b)
    if equal_var:
        df = n1 + n2 - 2
        method = " Two Sample t-test"
    else:
        v1, v2 = a.var(ddof=1) / n1, b.var(ddof=1) / n2
        df = (v1 + v2) ** 2 / (v1 ** 2 / (n1 - 1) + v2 ** 2 / (n2 - 1))
        method = "Welch Two Sample t-test"

    return create_hypothesis_test(
        statistic=t,
        statistic_name="t",
        p_value=p,
        method=method,
        parameter=[df],
        estimate=a.mean() - b.mean(),
    )


def chi2_test(table: Any, correct: bool = True) -> HypothesisTest:
    """
    Pearson's chi-squared test of independence.

    :param table: Contingency table (array-like or DataFrame of counts)
    :param correct: Apply Yates' continuity correction to 2x2 tables
    :returns: HypothesisTest dictionary
    """
    counts = np.asarray(table, dtype=float)
    chi2, p, dof, _ = stats.chi2_contingency(counts, correction=correct)

    method = "Pearson's Chi-squared test"
    if correct and dof == 1:
        method += " with Yates' continuity correction"

    return create_hypothesis_test(
        statistic=chi2,
        statistic_name=CHI_SQUARED_STATISTIC,
        p_value=p,
        method=method,
        parameter=[dof],
    )


def spearman_test(x: Sequence[Any], y: Sequence[Any]) -> HypothesisTest:
    """
    Spearman's rank correlation test.

    Pairs with a missing value on either side are dropped. The reported
    statistic is S = (n^3 - n)(1 - rho) / 6.

    :param x: First variable
    :param y: Second variable
    :returns: HypothesisTest dictionary with rho as estimate
    """
    df = pd.DataFrame({
        "x": pd.to_numeric(pd.Series(list(x)), errors="coerce"),
        "y": pd.to_numeric(pd.Series(list(y)), errors="coerce"),
    }).dropna()
    n = len(df)

    rho, p = stats.spearmanr(df["x"], df["y"])
    S = (n ** 3 - n) * (1 - rho) / 6

    return create_hypothesis_test(
        statistic=S,
        statistic_name="S",
        p_value=p,
        method=SPEARMAN_METHOD,
        estimate=rho,
    )


def kruskal_test(x: Sequence[Any], group: Sequence[Any]) -> HypothesisTest:
    """
    Kruskal-Wallis rank sum test of ``x`` across the levels of ``group``.

    For two groups this is the Wilcoxon rank sum test in its chi-squared
    form. Rows with a missing value or group are dropped.

    :param x: Numeric data
    :param group: Group label for each value of x
    :returns: HypothesisTest dictionary (statistic "Kruskal-Wallis chi-squared")
    """
    df = pd.DataFrame({
        "x": pd.to_numeric(pd.Series(list(x)), errors="coerce"),
        "group": pd.Series(list(group)),
    }).dropna()
    samples = [g["x"].values for _, g in df.groupby("group", sort=True)]
    if len(samples) < 2:
        raise ValueError("Kruskal-Wallis test needs at least two groups")

    statistic, p = stats.kruskal(*samples)

    return create_hypothesis_test(
        statistic=statistic,
        statistic_name="Kruskal-Wallis chi-squared",
        p_value=p,
        method="Kruskal-Wallis rank sum test",
        parameter=[len(samples) - 1],
    )


def statistics_summary(result: Dict[str, Any]) -> str:
    """
    Generate a one-line summary for a HypothesisTest or AnovaSummary.

    :param result: Record from this module
    :returns: Human-readable summary string
    """
    if result["kind"] == AnalysisKind.ANOVA:
        return (
            f"ANOVA: F({result['df_effect']:g}, {result['df_residual']:g}) = "
            f"{result['f']:.2f}, p = {result['p_value']:.4g}"
        )
    return (
        f"{result['method'] or result['kind'].name}: "
        f"{result['statistic_name']} = {result['statistic']:.4g}, "
        f"p = {result['p_value']:.4g}"
    )
