"""
Tests for input validation utilities.
"""

import numpy as np
import pytest

from pycollinear.core.exceptions import DimensionError, InvalidInputError, ValidationError
from pycollinear.core.validation import (
    check_1d,
    check_array,
    check_column,
    check_consistent_length,
    check_finite,
    check_min_samples,
    check_positive_int,
    check_unique_names,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_strings(self):
        with pytest.raises(InvalidInputError, match="non-numeric dtype"):
            check_array(["a", "b"], "X")

    def test_rejects_bool(self):
        with pytest.raises(InvalidInputError, match="non-numeric dtype"):
            check_array([True, False], "X")

    def test_name_in_message(self):
        with pytest.raises(InvalidInputError, match="my_column"):
            check_array(["a"], "my_column")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / check_1d / check_min_samples
# ═══════════════════════════════════════════════════════════════════════


class TestShapeAndValues:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "X")

    def test_nan_rejected(self):
        with pytest.raises(InvalidInputError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "X")

    def test_inf_rejected(self):
        with pytest.raises(InvalidInputError, match="1 Inf"):
            check_finite(np.array([np.inf, 1.0]), "X")

    def test_1d_passes(self):
        check_1d(np.zeros(3), "X")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError, match="must be 1D"):
            check_1d(np.zeros((3, 2)), "X")

    def test_min_samples(self):
        check_min_samples(2, 2, "X")
        with pytest.raises(InvalidInputError, match="at least 2"):
            check_min_samples(1, 2, "X")

    def test_column_read_only_copy(self):
        source = np.array([1, 2, 3])
        column = check_column(source, "X")
        assert column.dtype == np.float64
        assert not column.flags.writeable
        source[0] = 9
        assert column[0] == 1.0

    def test_column_rejects_nan(self):
        with pytest.raises(InvalidInputError, match="X"):
            check_column([1.0, np.nan], "X")


# ═══════════════════════════════════════════════════════════════════════
# check_consistent_length
# ═══════════════════════════════════════════════════════════════════════


class TestConsistentLength:

    def test_equal_lengths(self):
        assert check_consistent_length({"a": np.zeros(3), "b": np.ones(3)}) == 3

    def test_mismatch(self):
        with pytest.raises(DimensionError, match="a=3, b=4"):
            check_consistent_length({"a": np.zeros(3), "b": np.ones(4)})

    def test_single_column(self):
        assert check_consistent_length({"a": np.zeros(5)}) == 5


# ═══════════════════════════════════════════════════════════════════════
# check_unique_names / check_positive_int
# ═══════════════════════════════════════════════════════════════════════


class TestNames:

    def test_returns_tuple_in_order(self):
        assert check_unique_names(["b", "a"], "terms") == ("b", "a")

    def test_accepts_generator(self):
        assert check_unique_names((n for n in ["x"]), "terms") == ("x",)

    def test_duplicates(self):
        with pytest.raises(InvalidInputError, match=r"duplicate names \['a'\]"):
            check_unique_names(["a", "b", "a", "a"], "terms")

    def test_non_string(self):
        with pytest.raises(InvalidInputError, match="must be strings"):
            check_unique_names(["a", 1], "terms")


class TestPositiveInt:

    def test_passes(self):
        assert check_positive_int(5, "n") == 5
        assert check_positive_int(np.int64(3), "n") == 3

    def test_minimum(self):
        with pytest.raises(InvalidInputError, match=">= 2"):
            check_positive_int(1, "n", minimum=2)

    @pytest.mark.parametrize("value", [True, 2.0, "3", None])
    def test_rejects_non_int(self, value):
        with pytest.raises(InvalidInputError, match="expected an integer"):
            check_positive_int(value, "n")
