import logging
import numpy as np
import pandas as pd
from scipy import sparse as sp
from typing import Iterator, Optional

from .constants import Operation
from .matrix_errors import DimensionMismatchError, InvalidDimensionsError, OutOfRangeError
from .sparse_store import Number, SparseStore


logger = logging.getLogger(__name__)


def _as_dimension(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return None
    if value < 0:
        return None
    return int(value)


class SparseMatrix:
    """
    Matrix that stores only its non-zero elements.

    Entries live in a SparseStore keyed by (row, col). The declared shape is fixed at
    construction. By default get/set do not check coordinates against the shape; pass
    ``check_bounds=True`` to get an OutOfRangeError for coordinates outside
    ``[0, rows) x [0, cols)``.

    Iteration over entries is row-major ascending, so arithmetic results are reproducible.
    """

    def __init__(self, rows: int, cols: int, check_bounds: bool = False):
        """
        Initialize an empty SparseMatrix

        Args:
            rows: Number of rows, a non-negative integer.
            cols: Number of columns, a non-negative integer.
            check_bounds: Whether get_element/set_element reject coordinates outside the shape.
        """
        n_rows = _as_dimension(rows)
        n_cols = _as_dimension(cols)
        if n_rows is None or n_cols is None:
            raise InvalidDimensionsError(rows, cols)
        self._rows = n_rows
        self._cols = n_cols
        self.check_bounds = check_bounds
        self._store = SparseStore()

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def nnz(self) -> int:
        """Number of stored non-zero elements."""
        return len(self._store)

    def _check_coordinate(self, row, col) -> None:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise OutOfRangeError(row, col, self.shape)

    def get_element(self, row: int, col: int) -> Number:
        """Get the value at (row, col), 0 for any coordinate without an entry."""
        if self.check_bounds:
            self._check_coordinate(row, col)
        return self._store.get(row, col)

    def set_element(self, row: int, col: int, value: Number) -> None:
        """Set the value at (row, col). Setting 0 removes the entry."""
        if self.check_bounds:
            self._check_coordinate(row, col)
        self._store.set(row, col, value)

    def entries(self) -> Iterator[tuple[int, int, Number]]:
        """Yields (row, col, value) for every non-zero element in row-major order."""
        return self._store.entries()

    def _check_same_shape(self, other: 'SparseMatrix', operation: str) -> None:
        if self._rows != other.rows or self._cols != other.cols:
            raise DimensionMismatchError(operation, self.shape, other.shape)

    def add(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Elementwise sum over the union of both operands' non-zero coordinates.

        Args:
            other: Matrix with the same shape.

        Returns:
            New SparseMatrix holding self + other.

        Raises:
            DimensionMismatchError: if the shapes differ.
        """
        self._check_same_shape(other, Operation.ADD)
        result = SparseMatrix(self._rows, self._cols, check_bounds=self.check_bounds)

        for row, col, value in self._store.entries():
            result._store.set(row, col, value + other._store.get(row, col))

        # entries only present in other
        for row, col, value in other._store.entries():
            if (row, col) not in self._store:
                result._store.set(row, col, value + self._store.get(row, col))

        logger.debug("added %s matrices: %d + %d entries -> %d", self.shape, self.nnz, other.nnz, result.nnz)
        return result

    def subtract(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Elementwise difference over the union of both operands' non-zero coordinates.

        Args:
            other: Matrix with the same shape.

        Returns:
            New SparseMatrix holding self - other.

        Raises:
            DimensionMismatchError: if the shapes differ.
        """
        self._check_same_shape(other, Operation.SUBTRACT)
        result = SparseMatrix(self._rows, self._cols, check_bounds=self.check_bounds)

        for row, col, value in self._store.entries():
            result._store.set(row, col, value - other._store.get(row, col))

        for row, col, value in other._store.entries():
            if (row, col) not in self._store:
                result._store.set(row, col, -value + self._store.get(row, col))

        logger.debug("subtracted %s matrices: %d - %d entries -> %d", self.shape, self.nnz, other.nnz, result.nnz)
        return result

    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Matrix product self x other.

        For every non-zero (row_a, col_a, value_a) of self, scans every column of other
        and accumulates value_a * other[col_a, col_b] into result[row_a, col_b].

        Args:
            other: Matrix whose row count equals self.cols.

        Returns:
            New SparseMatrix of shape (self.rows, other.cols).

        Raises:
            DimensionMismatchError: if self.cols != other.rows.
        """
        if self._cols != other.rows:
            raise DimensionMismatchError(Operation.MULTIPLY, self.shape, other.shape)
        result = SparseMatrix(self._rows, other.cols, check_bounds=self.check_bounds)

        for row_a, col_a, value_a in self._store.entries():
            for col_b in range(other.cols):
                value_b = other._store.get(col_a, col_b)
                if value_b != 0:
                    current = result._store.get(row_a, col_b)
                    result._store.set(row_a, col_b, current + value_a * value_b)

        logger.debug("multiplied %s x %s -> %s with %d entries", self.shape, other.shape, result.shape, result.nnz)
        return result

    def __getitem__(self, key) -> Number:
        if isinstance(key, tuple) and len(key) == 2:
            return self.get_element(*key)
        raise KeyError("SparseMatrix indices must be a tuple of length 2")

    def __setitem__(self, key, value: Number) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            self.set_element(key[0], key[1], value)
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")

    def __add__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.multiply(other)

    def __len__(self) -> int:
        return self.nnz

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and list(self.entries()) == list(other.entries())

    __hash__ = None

    def __repr__(self) -> str:
        return f"SparseMatrix({self._rows}x{self._cols}, nnz={self.nnz})"

    def __str__(self) -> str:
        from .matrix_codec import format_matrix
        return format_matrix(self)

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix."""
        result = SparseMatrix(self._rows, self._cols, check_bounds=self.check_bounds)
        result._store = self._store.copy()
        return result

    # ************************************
    # text format
    # ************************************
    @classmethod
    def from_text(cls, text: str, check_bounds: bool = False) -> 'SparseMatrix':
        from .matrix_codec import parse_matrix
        return parse_matrix(text, check_bounds=check_bounds)

    @classmethod
    def from_file(cls, path, check_bounds: bool = False) -> 'SparseMatrix':
        from .matrix_codec import read_matrix_file
        return read_matrix_file(path, check_bounds=check_bounds)

    # ************************************
    # numpy / scipy / pandas conversions
    # ************************************
    def _require_entries_in_bounds(self) -> None:
        for row, col, _ in self._store.entries():
            self._check_coordinate(row, col)

    def to_dense(self) -> np.ndarray:
        """Returns a dense numpy array of the matrix.

        Raises:
            OutOfRangeError: if an entry was written outside the declared shape.
        """
        self._require_entries_in_bounds()
        values = [v for _, _, v in self._store.entries()]
        int64_info = np.iinfo(np.int64)
        if any(isinstance(v, int) and not int64_info.min <= v <= int64_info.max for v in values):
            # Python ints beyond int64 are kept exact
            dtype = object
        elif any(isinstance(v, float) for v in values):
            dtype = np.float64
        else:
            dtype = np.int64
        dense = np.zeros(self.shape, dtype=dtype)
        for row, col, value in self._store.entries():
            dense[row, col] = value
        return dense

    @classmethod
    def from_dense(cls, array, check_bounds: bool = False) -> 'SparseMatrix':
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"from_dense expects a 2D array, got shape {array.shape}")
        result = cls(array.shape[0], array.shape[1], check_bounds=check_bounds)
        for row, col in zip(*np.nonzero(array)):
            value = array[row, col]
            value = value.item() if isinstance(value, np.generic) else value
            result._store.set(int(row), int(col), value)
        return result

    def to_scipy(self) -> sp.coo_matrix:
        """Returns the matrix as a scipy COO matrix."""
        self._require_entries_in_bounds()
        entries = list(self._store.entries())
        rows = np.array([e[0] for e in entries], dtype=np.int64)
        cols = np.array([e[1] for e in entries], dtype=np.int64)
        vals = np.array([e[2] for e in entries])
        return sp.coo_matrix((vals, (rows, cols)), shape=self.shape)

    @classmethod
    def from_scipy(cls, matrix, check_bounds: bool = False) -> 'SparseMatrix':
        coo = sp.coo_matrix(matrix, copy=True)
        coo.sum_duplicates()
        result = cls(coo.shape[0], coo.shape[1], check_bounds=check_bounds)
        for row, col, value in zip(coo.row, coo.col, coo.data):
            result._store.set(int(row), int(col), value.item())
        return result

    def to_frame(self) -> pd.DataFrame:
        """Returns the non-zero entries as a DataFrame with columns row, col, value."""
        entries = list(self._store.entries())
        if not entries:
            return pd.DataFrame(columns=['row', 'col', 'value'])
        return pd.DataFrame(entries, columns=['row', 'col', 'value'])

    @classmethod
    def from_frame(cls, df: pd.DataFrame, rows: int, cols: int, check_bounds: bool = False) -> 'SparseMatrix':
        for col in ['row', 'col', 'value']:
            assert col in df.columns, f"Column \"{col}\" not found in df"
        result = cls(rows, cols, check_bounds=check_bounds)
        for row, col, value in df[['row', 'col', 'value']].itertuples(index=False):
            value = value.item() if isinstance(value, np.generic) else value
            result.set_element(int(row), int(col), value)
        return result
