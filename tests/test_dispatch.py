"""Tests for building statistic cells from analysis records."""

import warnings

import pytest

from statcell.dispatch import cell_from_anova, cell_from_htest, cell_from_result
from statcell.hypothesis import (
    SPEARMAN_METHOD,
    create_anova_summary,
    create_hypothesis_test,
    t_test,
)


@pytest.fixture
def anova():
    return create_anova_summary(4.5, 2, 27, 0.0204)


class TestFromAnova:
    """Tests for cell_from_anova."""

    def test_fstat_cell(self, anova) -> None:
        c = cell_from_anova(anova)
        assert c["value"] == ["4.50", "0.020"]
        assert c["names"] == ["F_{2,27}", "P"]
        assert c["aspect"] == ["cell_fstat", "statistics", "cell_value"]

    def test_p_format(self, anova) -> None:
        assert cell_from_anova(anova, format_p="%.2f")["value"][1] == "0.02"

    def test_attributes_pass_through(self, anova) -> None:
        c = cell_from_anova(anova, row="age", col="arm", subrow=1)
        assert (c["row"], c["col"], c["subrow"]) == ("age", "arm", 1)


class TestFromHtest:
    """Tests for cell_from_htest."""

    def test_chi_squared_regardless_of_method(self) -> None:
        test = create_hypothesis_test(5.6, "X-squared", 0.0608,
                                      method=SPEARMAN_METHOD, parameter=[2])
        c = cell_from_htest(test)
        assert c["names"] == ["χ²_{2}", "P"]
        assert c["value"] == ["5.60", "0.061"]
        assert c["aspect"][0] == "cell_chi2"

    def test_spearman_with_generic_statistic_name(self) -> None:
        test = create_hypothesis_test(20.0, "statistic", 0.05,
                                      method=SPEARMAN_METHOD, estimate=0.2)
        c = cell_from_htest(test)
        assert c["names"] == ["S", "ρ", "P"]
        assert c["value"] == ["20", "0.20", "0.050"]
        assert c["aspect"][0] == "cell_spearman"

    def test_student_t(self) -> None:
        test = create_hypothesis_test(2.0, "t", 0.0296, method="Welch Two Sample t-test",
                                      parameter=[17.776])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            c = cell_from_htest(test)
        assert c["names"] == ["t_{17.78}", "P"]
        assert c["value"] == ["2.00", "0.030"]
        assert c["aspect"] == ["cell_studentt", "statistics", "cell_value"]

    def test_unrecognised_kind_warns(self) -> None:
        test = create_hypothesis_test(31.5, "W", 0.12, method="Wilcoxon rank sum test")
        with pytest.warns(UserWarning, match="Student t"):
            c = cell_from_htest(test)
        assert c["aspect"][0] == "cell_studentt"
        assert c["names"] == ["t_{}", "P"]

    def test_formats(self) -> None:
        test = create_hypothesis_test(2.0, "t", 0.0296, parameter=[8])
        c = cell_from_htest(test, format=1, format_p=2)
        assert c["value"] == ["2.0", "0.03"]
        assert c["names"][0] == "t_{8}"

    def test_from_scipy(self) -> None:
        c = cell_from_htest(t_test([1, 2, 3, 4, 5], [2, 3, 4, 5, 6]))
        assert c["value"][0] == "-1.00"
        assert c["names"][0] == "t_{8}"


class TestFromResult:
    """Tests for cell_from_result."""

    def test_routes_anova(self, anova) -> None:
        assert cell_from_result(anova)["aspect"][0] == "cell_fstat"

    def test_routes_htest(self) -> None:
        test = create_hypothesis_test(5.6, "X-squared", 0.06, parameter=[2])
        assert cell_from_result(test, format_p="%.2f")["value"] == ["5.60", "0.06"]

    def test_rejects_unknown(self) -> None:
        with pytest.raises(TypeError):
            cell_from_result({"statistic": 1.0})
        with pytest.raises(TypeError):
            cell_from_result("t-test")
