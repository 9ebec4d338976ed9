from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class CoordinateKey:
    """Immutable (row, col) pair used to key non-zero entries.

    Ordering is row-major: keys compare by row first, then by column.
    The key does not know the matrix shape, bounds are checked by the matrix.
    """
    row: int
    col: int

    def __iter__(self):
        """Allows unpacking as ``row, col = key``."""
        yield self.row
        yield self.col

    def __repr__(self) -> str:
        return f"CoordinateKey({self.row}, {self.col})"
