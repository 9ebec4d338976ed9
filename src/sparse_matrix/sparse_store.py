from dataclasses import dataclass, field
from typing import Iterator, Union

from .coordinate import CoordinateKey


Number = Union[int, float]


@dataclass
class SparseStore:
    data_store: dict[CoordinateKey, Number] = field(default_factory=dict)

    def get(self, row: int, col: int) -> Number:
        """Get the value at position (row, col), or 0 if absent."""
        return self.data_store.get(CoordinateKey(row, col), 0)

    def set(self, row: int, col: int, value: Number) -> None:
        """Set the value at position (row, col).

        A zero value removes the entry so that only non-zero values are ever stored.
        """
        key = CoordinateKey(row, col)
        if value == 0:
            # Remove zero values to maintain sparsity
            self.data_store.pop(key, None)
        else:
            self.data_store[key] = value

    def has(self, key: CoordinateKey) -> bool:
        """Checks if a key holds a non-zero entry."""
        return key in self.data_store

    def __getitem__(self, key) -> Number:
        """Returns the value at position (row, col).

        Args:
            key: Either a CoordinateKey or a tuple (row, col)

        Returns:
            The value at position (row, col), or 0 if not found.
        """
        row, col = self._unpack(key)
        return self.get(row, col)

    def __setitem__(self, key, value: Number) -> None:
        """Sets the value at position (row, col).

        Args:
            key: Either a CoordinateKey or a tuple (row, col)
            value: The value to set.
        """
        row, col = self._unpack(key)
        self.set(row, col, value)

    def __contains__(self, key) -> bool:
        """Checks if position (row, col) holds a non-zero value.

        Args:
            key: Either a CoordinateKey or a tuple (row, col)

        Returns:
            True if the position exists (and has non-zero value), False otherwise.
        """
        if isinstance(key, CoordinateKey):
            return key in self.data_store
        if isinstance(key, tuple) and len(key) == 2:
            return CoordinateKey(*key) in self.data_store
        return False

    def __len__(self) -> int:
        """Returns the number of non-zero elements."""
        return len(self.data_store)

    def __iter__(self) -> Iterator[tuple[int, int, Number]]:
        return self.entries()

    def entries(self) -> Iterator[tuple[int, int, Number]]:
        """Yields (row, col, value) triples in row-major order.

        Each call sorts the current keys, so the sequence is restartable and
        stable for a given store.
        """
        for key in sorted(self.data_store):
            yield key.row, key.col, self.data_store[key]

    def keys(self) -> list[CoordinateKey]:
        """Returns the keys of non-zero elements in row-major order."""
        return sorted(self.data_store)

    def __repr__(self) -> str:
        """String representation of the store."""
        if not self.data_store:
            return "SparseStore({})"
        items_str = ", ".join(f"({r}, {c}): {v}" for r, c, v in self.entries())
        return f"SparseStore({{{items_str}}})"

    def clear(self) -> None:
        """Removes all elements from the store."""
        self.data_store.clear()

    def copy(self) -> 'SparseStore':
        """Returns a copy of the store."""
        result = SparseStore()
        result.data_store = self.data_store.copy()
        return result

    @staticmethod
    def _unpack(key) -> tuple[int, int]:
        if isinstance(key, CoordinateKey):
            return key.row, key.col
        if isinstance(key, tuple) and len(key) == 2:
            return key
        raise KeyError("SparseStore indices must be a CoordinateKey or a tuple of length 2")
