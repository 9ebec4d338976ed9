import pytest
import os
import sys
import numpy as np
import pandas as pd
from scipy import sparse as sp

# Add the src directory to Python path to import local sparse_matrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_matrix import (SparseMatrix, DimensionMismatchError, OutOfRangeError, InvalidDimensionsError,
                           SparseMatrixError)
from test_utils import random_sparse_matrix, validate_against_dense


def build(rows, cols, entries):
    matrix = SparseMatrix(rows, cols)
    for (r, c), v in entries.items():
        matrix.set_element(r, c, v)
    return matrix


@pytest.fixture
def matrix_a() -> SparseMatrix:
    return build(2, 2, {(0, 0): 1, (1, 1): 2})


@pytest.fixture
def matrix_b() -> SparseMatrix:
    return build(2, 2, {(0, 0): 3, (0, 1): 4})


class TestConstruction:

    def test_empty_matrix(self):
        matrix = SparseMatrix(3, 4)
        assert matrix.shape == (3, 4)
        assert matrix.rows == 3
        assert matrix.cols == 4
        assert matrix.nnz == 0
        assert len(matrix) == 0

    def test_zero_sized_dimensions_allowed(self):
        assert SparseMatrix(0, 0).shape == (0, 0)

    @pytest.mark.parametrize("rows, cols", [(-1, 2), (2, -1), (1.5, 2), ("2", 2), (True, 2)])
    def test_invalid_dimensions(self, rows, cols):
        with pytest.raises(InvalidDimensionsError):
            SparseMatrix(rows, cols)

    def test_numpy_integer_dimensions(self):
        assert SparseMatrix(np.int64(2), np.int32(3)).shape == (2, 3)

    def test_dimensions_are_read_only(self):
        matrix = SparseMatrix(2, 2)
        with pytest.raises(AttributeError):
            matrix.rows = 5


class TestElementAccess:

    def test_set_then_get(self):
        matrix = SparseMatrix(3, 3)
        matrix.set_element(2, 1, 7.5)
        assert matrix.get_element(2, 1) == 7.5
        matrix.set_element(2, 1, 0)
        assert matrix.get_element(2, 1) == 0
        assert matrix.nnz == 0

    def test_unset_element_is_zero(self):
        assert SparseMatrix(3, 3).get_element(1, 1) == 0

    def test_out_of_range_is_permissive_by_default(self):
        matrix = SparseMatrix(2, 2)
        assert matrix.get_element(10, 10) == 0
        matrix.set_element(5, 7, 3)
        assert matrix.get_element(5, 7) == 3

    def test_check_bounds(self):
        matrix = SparseMatrix(2, 3, check_bounds=True)
        matrix.set_element(1, 2, 4)
        with pytest.raises(OutOfRangeError) as exc_info:
            matrix.set_element(2, 0, 1)
        assert exc_info.value.shape == (2, 3)
        with pytest.raises(OutOfRangeError):
            matrix.get_element(0, 3)
        with pytest.raises(OutOfRangeError):
            matrix.get_element(-1, 0)

    def test_item_syntax(self):
        matrix = SparseMatrix(2, 2)
        matrix[0, 1] = 9
        assert matrix[0, 1] == 9
        with pytest.raises(KeyError):
            matrix[0]

    def test_entries_row_major(self):
        matrix = build(3, 3, {(2, 2): 1, (0, 2): 2, (1, 0): 3, (0, 0): 4})
        assert list(matrix.entries()) == [(0, 0, 4), (0, 2, 2), (1, 0, 3), (2, 2, 1)]


class TestAddition:

    def test_concrete_scenario(self, matrix_a, matrix_b):
        result = matrix_a.add(matrix_b)
        assert result.shape == (2, 2)
        assert list(result.entries()) == [(0, 0, 4), (0, 1, 4), (1, 1, 2)]

    def test_operands_unchanged(self, matrix_a, matrix_b):
        matrix_a.add(matrix_b)
        assert list(matrix_a.entries()) == [(0, 0, 1), (1, 1, 2)]
        assert list(matrix_b.entries()) == [(0, 0, 3), (0, 1, 4)]

    def test_cancelling_entries_are_dropped(self):
        a = build(2, 2, {(0, 0): 5, (1, 0): 1})
        b = build(2, 2, {(0, 0): -5})
        result = a.add(b)
        assert list(result.entries()) == [(1, 0, 1)]

    def test_matches_dense(self):
        a, dense_a = random_sparse_matrix(6, 5, seed=1)
        b, dense_b = random_sparse_matrix(6, 5, seed=2)
        validate_against_dense(a.add(b), dense_a + dense_b)
        validate_against_dense(a + b, dense_a + dense_b)

    def test_float_values(self):
        a, dense_a = random_sparse_matrix(4, 4, seed=3, integer=False)
        b, dense_b = random_sparse_matrix(4, 4, seed=4, integer=False)
        validate_against_dense(a.add(b), dense_a + dense_b)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            SparseMatrix(2, 2).add(SparseMatrix(2, 3))
        assert exc_info.value.lhs_shape == (2, 2)
        assert exc_info.value.rhs_shape == (2, 3)
        with pytest.raises(DimensionMismatchError):
            SparseMatrix(3, 2).add(SparseMatrix(2, 2))


class TestSubtraction:

    def test_concrete_scenario(self, matrix_a, matrix_b):
        result = matrix_a.subtract(matrix_b)
        assert list(result.entries()) == [(0, 0, -2), (0, 1, -4), (1, 1, 2)]

    def test_self_difference_is_empty(self, matrix_a):
        result = matrix_a.subtract(matrix_a)
        assert result.nnz == 0
        assert result.shape == matrix_a.shape

    def test_matches_dense(self):
        a, dense_a = random_sparse_matrix(5, 7, seed=5)
        b, dense_b = random_sparse_matrix(5, 7, seed=6)
        validate_against_dense(a.subtract(b), dense_a - dense_b)
        validate_against_dense(a - b, dense_a - dense_b)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            SparseMatrix(2, 2).subtract(SparseMatrix(1, 2))


class TestMultiplication:

    def test_concrete_scenario(self):
        a = build(1, 2, {(0, 0): 2, (0, 1): 3})
        b = build(2, 1, {(0, 0): 4, (1, 0): 5})
        result = a.multiply(b)
        assert result.shape == (1, 1)
        assert result.get_element(0, 0) == 23
        assert list(result.entries()) == [(0, 0, 23)]

    def test_result_shape(self):
        assert SparseMatrix(3, 4).multiply(SparseMatrix(4, 2)).shape == (3, 2)

    def test_matches_dense(self):
        a, dense_a = random_sparse_matrix(4, 6, seed=7)
        b, dense_b = random_sparse_matrix(6, 3, seed=8)
        validate_against_dense(a.multiply(b), dense_a @ dense_b)
        validate_against_dense(a @ b, dense_a @ dense_b)

    def test_float_matches_dense(self):
        a, dense_a = random_sparse_matrix(5, 5, density=0.5, seed=9, integer=False)
        b, dense_b = random_sparse_matrix(5, 5, density=0.5, seed=10, integer=False)
        validate_against_dense(a.multiply(b), dense_a @ dense_b)

    def test_cancellation_drops_entry(self):
        a = build(1, 2, {(0, 0): 1, (0, 1): 1})
        b = build(2, 1, {(0, 0): 2, (1, 0): -2})
        assert a.multiply(b).nnz == 0

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            SparseMatrix(2, 3).multiply(SparseMatrix(2, 3))
        assert isinstance(exc_info.value, SparseMatrixError)

    def test_results_inherit_check_bounds(self):
        a = SparseMatrix(2, 2, check_bounds=True)
        b = SparseMatrix(2, 2)
        assert a.multiply(b).check_bounds
        assert not b.add(a).check_bounds


class TestEqualityAndCopy:

    def test_equality(self, matrix_a):
        same = build(2, 2, {(1, 1): 2, (0, 0): 1})
        assert matrix_a == same
        assert matrix_a != build(2, 2, {(0, 0): 1})
        assert matrix_a != build(3, 2, {(0, 0): 1, (1, 1): 2})

    def test_copy(self, matrix_a):
        other = matrix_a.copy()
        other.set_element(0, 0, 10)
        assert matrix_a.get_element(0, 0) == 1
        assert other.shape == matrix_a.shape

    def test_repr_and_str(self, matrix_a):
        assert repr(matrix_a) == "SparseMatrix(2x2, nnz=2)"
        assert str(matrix_a) == "rows=2\ncols=2\n(0, 0, 1)\n(1, 1, 2)\n"

    def test_operators_reject_other_types(self, matrix_a):
        with pytest.raises(TypeError):
            matrix_a + 1


class TestConversions:

    def test_dense_round_trip(self):
        dense = np.array([[0, 1.5, 0], [2, 0, 0]])
        matrix = SparseMatrix.from_dense(dense)
        assert list(matrix.entries()) == [(0, 1, 1.5), (1, 0, 2.0)]
        np.testing.assert_array_equal(matrix.to_dense(), dense)

    def test_to_dense_integer_dtype(self, matrix_a):
        dense = matrix_a.to_dense()
        assert dense.dtype == np.int64
        np.testing.assert_array_equal(dense, np.array([[1, 0], [0, 2]]))

    def test_from_dense_rejects_non_2d(self):
        with pytest.raises(ValueError):
            SparseMatrix.from_dense(np.zeros(3))

    def test_to_dense_keeps_large_integers_exact(self):
        matrix = SparseMatrix.from_text("rows=1\ncols=2\n(0, 0, 99999999999999999999)\n(0, 1, 3)")
        dense = matrix.to_dense()
        assert dense.dtype == object
        assert dense[0, 0] == 99999999999999999999
        assert dense[0, 1] == 3

    def test_from_dense_object_array(self):
        matrix = SparseMatrix.from_dense([[1, 0, 2**70]])
        assert list(matrix.entries()) == [(0, 0, 1), (0, 2, 2**70)]
        assert isinstance(matrix.get_element(0, 2), int)

    def test_to_dense_rejects_out_of_shape_entries(self):
        matrix = SparseMatrix(2, 2)
        matrix.set_element(3, 3, 1)
        with pytest.raises(OutOfRangeError):
            matrix.to_dense()

    def test_scipy_round_trip(self):
        a, dense_a = random_sparse_matrix(5, 4, seed=11)
        coo = a.to_scipy()
        assert isinstance(coo, sp.coo_matrix)
        np.testing.assert_array_equal(coo.toarray(), dense_a)
        assert SparseMatrix.from_scipy(coo) == a

    def test_from_scipy_sums_duplicates(self):
        coo = sp.coo_matrix((np.array([1, 2]), (np.array([0, 0]), np.array([1, 1]))), shape=(2, 2))
        assert list(SparseMatrix.from_scipy(coo).entries()) == [(0, 1, 3)]

    def test_frame_round_trip(self, matrix_b):
        df = matrix_b.to_frame()
        assert list(df.columns) == ['row', 'col', 'value']
        assert df['value'].tolist() == [3, 4]
        assert SparseMatrix.from_frame(df, 2, 2) == matrix_b

    def test_empty_frame(self):
        df = SparseMatrix(2, 2).to_frame()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0
