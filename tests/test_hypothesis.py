"""Tests for analysis records and the scipy/statsmodels adapters."""

import numpy as np
import pandas as pd
import pytest
from scipy import stats
import statsmodels.formula.api as smf

from statcell.hypothesis import (
    SPEARMAN_METHOD,
    AnalysisKind,
    anova_summary_from_model,
    anova_summary_from_table,
    chi2_test,
    classify_test,
    create_anova_summary,
    create_hypothesis_test,
    is_loose_student_t,
    kruskal_test,
    spearman_test,
    statistics_summary,
    t_test,
)


class TestClassify:
    """Tests for classify_test."""

    def test_chi_squared_wins_over_method(self) -> None:
        assert classify_test("X-squared", SPEARMAN_METHOD) == AnalysisKind.CHI_SQUARED
        assert classify_test("X-squared", "Pearson's Chi-squared test") == AnalysisKind.CHI_SQUARED

    def test_spearman_by_method(self) -> None:
        assert classify_test("S", SPEARMAN_METHOD) == AnalysisKind.SPEARMAN
        assert classify_test("statistic", SPEARMAN_METHOD) == AnalysisKind.SPEARMAN

    def test_fallback(self) -> None:
        assert classify_test("t", "Welch Two Sample t-test") == AnalysisKind.STUDENT_T
        assert classify_test("W", "Wilcoxon rank sum test") == AnalysisKind.STUDENT_T

    def test_loose_student_t(self) -> None:
        assert is_loose_student_t(create_hypothesis_test(10, "W", 0.2, "Wilcoxon rank sum test"))
        assert not is_loose_student_t(create_hypothesis_test(2.0, "t", 0.03, parameter=[8]))


class TestRecords:
    """Tests for record constructors."""

    def test_hypothesis_test(self) -> None:
        test = create_hypothesis_test(np.float64(5.6), "X-squared", 0.06, parameter=[2])
        assert test["kind"] == AnalysisKind.CHI_SQUARED
        assert test["parameter"] == [2.0]
        assert test["estimate"] is None
        assert isinstance(test["statistic"], float)

    def test_anova_summary(self) -> None:
        summary = create_anova_summary(4.5, 2, 27, 0.02)
        assert summary["kind"] == AnalysisKind.ANOVA
        assert summary["df_residual"] == 27.0

    def test_summary_strings(self) -> None:
        text = statistics_summary(create_anova_summary(4.5, 2, 27, 0.02))
        assert text.startswith("ANOVA: F(2, 27) = 4.50")
        text = statistics_summary(create_hypothesis_test(2.0, "t", 0.03, "Welch Two Sample t-test"))
        assert text.startswith("Welch Two Sample t-test: t = 2")


class TestAnova:
    """Tests for the statsmodels ANOVA adapters."""

    def test_from_table(self) -> None:
        table = pd.DataFrame(
            {
                "df": [2.0, 27.0],
                "sum_sq": [9.0, 27.0],
                "mean_sq": [4.5, 1.0],
                "F": [4.5, np.nan],
                "PR(>F)": [0.02, np.nan],
            },
            index=["C(group)", "Residual"],
        )
        summary = anova_summary_from_table(table)
        assert summary["f"] == 4.5
        assert summary["df_effect"] == 2.0
        assert summary["df_residual"] == 27.0
        assert summary["p_value"] == 0.02

    def test_missing_columns(self) -> None:
        with pytest.raises(ValueError, match="missing columns"):
            anova_summary_from_table(pd.DataFrame({"df": [1, 2]}))

    def test_from_model(self, three_groups) -> None:
        x, group = three_groups
        model = smf.ols("y ~ C(group)", data=pd.DataFrame({"y": x, "group": group})).fit()
        summary = anova_summary_from_model(model)

        expected = stats.f_oneway(x[:4], x[4:8], x[8:])
        assert summary["df_effect"] == 2.0
        assert summary["df_residual"] == 9.0
        assert summary["f"] == pytest.approx(expected.statistic)
        assert summary["p_value"] == pytest.approx(expected.pvalue)


class TestRunners:
    """Tests for the scipy test runners."""

    def test_t_test(self) -> None:
        test = t_test([1, 2, 3, 4, 5], [2, 3, 4, 5, 6])
        assert test["kind"] == AnalysisKind.STUDENT_T
        assert test["statistic"] == pytest.approx(-1.0)
        assert test["parameter"] == pytest.approx([8.0])
        assert test["method"] == "Welch Two Sample t-test"

    def test_t_test_pooled_drops_missing(self) -> None:
        test = t_test([1, 2, None, 3, 4, 5], [2, 3, 4, 5, 6], equal_var=True)
        assert test["parameter"] == [8.0]
        assert test["statistic"] == pytest.approx(-1.0)

    def test_chi2(self) -> None:
        test = chi2_test([[10, 20], [20, 10]], correct=False)
        assert test["kind"] == AnalysisKind.CHI_SQUARED
        assert test["statistic"] == pytest.approx(20 / 3)
        assert test["parameter"] == [1.0]
        assert test["method"] == "Pearson's Chi-squared test"

    def test_chi2_yates(self) -> None:
        test = chi2_test([[10, 20], [20, 10]])
        assert test["statistic"] == pytest.approx(5.4)
        assert "Yates" in test["method"]

    def test_spearman(self) -> None:
        test = spearman_test([1, 2, 3, 4, 5], [5, 4, 3, 2, 1])
        assert test["kind"] == AnalysisKind.SPEARMAN
        assert test["estimate"] == pytest.approx(-1.0)
        assert test["statistic"] == pytest.approx(40.0)
        assert test["parameter"] == []

    def test_spearman_drops_incomplete_pairs(self) -> None:
        test = spearman_test([1, 2, 3, 4, 5, None], [5, 6, 7, 8, 10, 3])
        assert test["estimate"] == pytest.approx(1.0)
        assert test["statistic"] == pytest.approx(0.0)

    def test_kruskal(self) -> None:
        test = kruskal_test([1, 2, 3, 4, 5, 6], ["a", "a", "a", "b", "b", "b"])
        assert test["statistic"] == pytest.approx(27 / 7)
        assert test["parameter"] == [1.0]
        assert test["statistic_name"] == "Kruskal-Wallis chi-squared"

    def test_kruskal_single_group(self) -> None:
        with pytest.raises(ValueError, match="two groups"):
            kruskal_test([1, 2, 3], ["a", "a", "a"])
