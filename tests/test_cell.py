"""Tests for the cell data model and the label/value/range/estimate cells."""

import numpy as np
import pandas as pd
import pytest

from statcell.cell import (
    CellKind,
    cell,
    cell_estimate,
    cell_header,
    cell_items,
    cell_label,
    cell_named_values,
    cell_range,
    cell_subheader,
    is_cell,
    is_composite,
    summarize_cell,
)


class TestCell:
    """Tests for the cell() construction primitive."""

    def test_defaults(self) -> None:
        c = cell("")
        assert c["value"] == ""
        assert c["kind"] == CellKind.SCALAR
        assert c["aspect"] == []
        for key in ("units", "names", "sep", "reference", "row", "col", "subrow", "subcol"):
            assert c[key] is None
        assert c["extra"] == {}

    def test_known_attributes(self) -> None:
        c = cell("12.5", aspect="cell_value", units="mg/dl", row="age", col=2,
                 subrow="a", subcol="b", reference=["*"])
        assert c["aspect"] == ["cell_value"]
        assert c["units"] == "mg/dl"
        assert (c["row"], c["col"], c["subrow"], c["subcol"]) == ("age", 2, "a", "b")
        assert c["reference"] == ["*"]

    def test_unknown_attributes_go_to_extra(self) -> None:
        c = cell("x", css_id="t1", src="model A")
        assert c["extra"] == {"css_id": "t1", "src": "model A"}

    def test_layering_does_not_mutate(self) -> None:
        base = cell("x", aspect="cell_label", note="first")
        layered = cell(base, units="kg", note="second")
        assert layered["units"] == "kg"
        assert layered["aspect"] == ["cell_label"]
        assert layered["extra"]["note"] == "second"
        assert base["units"] is None
        assert base["extra"]["note"] == "first"

    def test_value_not_part_of_attributes(self) -> None:
        a = cell("0.05", aspect="cell_p", names=["P"])
        b = cell("0.05", aspect="cell_value")
        assert a["value"] == b["value"]
        assert a != b

    def test_is_cell(self) -> None:
        assert is_cell(cell(1))
        assert not is_cell({"value": 1})
        assert not is_cell("text")


class TestLabels:
    """Tests for label, header and subheader cells."""

    def test_label(self) -> None:
        c = cell_label("Concentration", "mg/dl")
        assert c["value"] == "Concentration"
        assert c["aspect"] == ["cell_label"]
        assert c["units"] == "mg/dl"

    def test_label_without_units(self) -> None:
        assert cell_label(42)["value"] == "42"
        assert cell_label("Age")["units"] is None

    def test_header(self) -> None:
        c = cell_header("Treatment", subcol="A")
        assert c["aspect"] == ["cell_header", "cell_label"]
        assert c["subcol"] == "A"

    def test_subheader(self) -> None:
        c = cell_subheader("Dose", "mg", aspect="emphasis")
        assert c["aspect"] == ["emphasis", "cell_subheader", "cell_header", "cell_label"]


class TestNamedValues:
    """Tests for cell_named_values."""

    def test_single_value(self) -> None:
        c = cell_named_values(1.0, "one")
        assert c["value"] == [1.0]
        assert c["names"] == ["one"]
        assert c["aspect"] == ["cell_value"]
        assert c["sep"] == ", "

    def test_caller_aspects_first(self) -> None:
        c = cell_named_values([1, 2], ["a", "b"], aspect=["x", "y"], sep="; ")
        assert c["aspect"] == ["x", "y", "cell_value"]
        assert c["sep"] == "; "

    def test_duplicate_aspects_kept(self) -> None:
        c = cell_named_values(1, "a", aspect="cell_value")
        assert c["aspect"] == ["cell_value", "cell_value"]

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="same length"):
            cell_named_values([1, 2], ["a"])

    def test_no_names(self) -> None:
        assert cell_named_values([1, 2], None)["names"] is None

    def test_items(self) -> None:
        c = cell_named_values(["4.00", "0.004"], ["F", "P"])
        assert cell_items(c) == [("F", "4.00"), ("P", "0.004")]

    def test_ndarray_values(self) -> None:
        c = cell_named_values(np.array([1.0, 2.0]), ["a", "b"])
        assert c["value"] == [1.0, 2.0]
        assert c["names"] == ["a", "b"]

    def test_series_values(self) -> None:
        c = cell_named_values(pd.Series([1.0, 2.0]), ["a", "b"])
        assert c["value"] == [1.0, 2.0]

    def test_unnamed_array_is_not_one_value(self) -> None:
        c = cell_named_values(np.array([3, 4, 5]), None)
        assert c["value"] == [3, 4, 5]

    def test_string_stays_scalar(self) -> None:
        assert cell_named_values("abc", "s")["value"] == ["abc"]

    def test_items_of_array_cell(self) -> None:
        c = cell(np.array([0.5, 1.5]), names=["lo", "hi"])
        assert cell_items(c) == [("lo", 0.5), ("hi", 1.5)]


class TestRangeAndEstimate:
    """Tests for cell_range and cell_estimate."""

    def test_range(self) -> None:
        c = cell_range(0.5, 1.5)
        assert c["value"] == [0.5, 1.5]
        assert c["aspect"] == ["cell_range"]
        assert c["sep"] == ", "

    def test_estimate_is_composite(self) -> None:
        c = cell_estimate(1.0, 0.5, 1.5, name="OR", sep="; ", row="age")
        assert is_composite(c)
        assert c["aspect"] == ["cell_estimate"]
        assert c["row"] == "age"

        value, interval = c["value"]
        assert value["names"] == ["OR"]
        assert value["value"] == [1.0]
        assert value["aspect"] == ["cell_value"]
        assert interval["value"] == [0.5, 1.5]
        assert interval["sep"] == "; "

    def test_estimate_aspects(self) -> None:
        c = cell_estimate(1.0, 0.5, 1.5, aspect="hazard")
        assert c["aspect"] == ["hazard", "cell_estimate"]
        assert c["value"][0]["names"] is None

    def test_scalar_lists_are_not_composite(self) -> None:
        assert not is_composite(cell_range(1, 2))
        assert not is_composite(cell([]))

    def test_summary(self) -> None:
        text = summarize_cell(cell_estimate(1.0, 0.5, 1.5, name="OR"))
        assert "composite" in text
        assert "OR=1.0" in text
        assert "cell_range" in text
