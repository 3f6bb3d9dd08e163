from decimal import Decimal

import pytest

from xdb.common.errors import RowFormatError
from xdb.streaming.cursor import FetchedRow
from xdb.streaming.plan import build_column_plan
from xdb.streaming.projector import RowProjector


def _projector(columns):
    return RowProjector(build_column_plan(columns))


def test_interval_bounds_for_scenario_row():
    # Arrange
    projector = _projector(["g", "cnt", "sum", "rel. CI"])

    # Act
    outcome = projector.project(FetchedRow((1, 5, 100, "0.2")))

    # Assert
    assert outcome.line == "1\t5\t100\t0.2\t80\t120\n"
    assert outcome.interval_defined is True


def test_interval_bounds_are_exact_decimals():
    # Arrange
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    # Act
    outcome = projector.project(FetchedRow(("a", 3, 7, Decimal("120.50"), "0.10")))

    # Assert
    assert outcome.line.rstrip("\n").split("\t")[3:] == ["120.50", "0.10", "108.45", "132.55"]


def test_zero_bounds_are_never_negative():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    negative = projector.project(FetchedRow(("a", 1, 1, Decimal("-100"), "1")))
    zero = projector.project(FetchedRow(("b", 1, 1, 0, "1.5")))

    assert negative.line == "a\t1\t1\t-100\t1\t0\t-200\n"
    assert zero.line == "b\t1\t1\t0\t1.5\t0\t0\n"


def test_large_estimates_are_not_rounded():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(
        FetchedRow(("a", 1, 1, Decimal("12345678901234567890.5"), Decimal("0.1")))
    )

    fields = outcome.line.rstrip("\n").split("\t")
    assert fields[5] == "11111111011111111101.45"
    assert fields[6] == "13580246791358024679.55"


def test_float_values_use_their_shortest_repr():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(FetchedRow(("a", 1, 1, 100.0, 0.25)))

    assert outcome.line.rstrip("\n").split("\t")[3:] == ["100.0", "0.25", "75", "125"]


def test_nan_half_width_emits_nan_triple():
    # Arrange
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    # Act
    outcome = projector.project(FetchedRow(("a", 1, 1, 42, "NaN")))

    # Assert
    assert outcome.line == "a\t1\t1\t42\tNaN\tNaN\tNaN\n"
    assert outcome.interval_defined is False


def test_decimal_nan_from_driver_is_undefined():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(FetchedRow(("a", 1, 1, Decimal("42"), Decimal("NaN"))))

    assert outcome.line.endswith("\tNaN\tNaN\tNaN\n")
    assert outcome.interval_defined is False


def test_any_defined_interval_marks_the_row():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI", "avg", "rel. CI"])

    outcome = projector.project(FetchedRow(("a", 1, 1, 10, "NaN", 4, "0.5")))

    assert outcome.line == "a\t1\t1\t10\tNaN\tNaN\tNaN\t4\t0.5\t2\t6\n"
    assert outcome.interval_defined is True


def test_group_padding_row_is_skipped():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(FetchedRow((None, None, None, None, None)))

    assert outcome.is_skip


def test_plan_optimization_row_is_skipped():
    # Arrange
    projector = _projector(["plan no.", "g", "cnt", "n", "sum", "rel. CI"])

    # Act
    outcome = projector.project(FetchedRow((2, "rewrite", 0, 0, None, None)))

    # Assert
    assert outcome.is_skip


def test_plan_marker_column_is_dropped_from_output():
    projector = _projector(["plan no.", "g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(FetchedRow((1, "x", 2, 3, 50, "0.1")))

    assert outcome.line == "x\t2\t3\t50\t0.1\t45\t55\n"


def test_reserved_characters_in_values_are_normalized():
    projector = _projector(["g", "cnt", "n", "label"])

    outcome = projector.project(FetchedRow(("a\tb", 1, None, "line1\nline2")))

    assert outcome.line == "a b\t1\t\tline1 line2\n"


def test_missing_estimate_leaves_interval_undefined():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    outcome = projector.project(FetchedRow(("a", 1, 1, None, "0.1")))

    assert outcome.line.endswith("\tNaN\tNaN\tNaN\n")
    assert outcome.interval_defined is False


def test_non_numeric_estimate_raises():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    with pytest.raises(RowFormatError):
        projector.project(FetchedRow(("a", 1, 1, "lots", "0.1")))


def test_short_row_raises():
    projector = _projector(["g", "cnt", "n", "sum", "rel. CI"])

    with pytest.raises(RowFormatError):
        projector.project(FetchedRow(("a", 1, 1)))
