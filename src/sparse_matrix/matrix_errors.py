
class SparseMatrixError(ValueError):
    """Base class for sparse matrix errors."""
    pass

class PipelineConfigError(ValueError):
    """Base class for pipeline configuration errors."""
    pass



class FormatError(SparseMatrixError):
    """Raised when matrix text does not follow the rows=/cols=/(row, col, value) format."""

    MESSAGE = "Input file has wrong format"

    def __init__(self):
        super().__init__(self.MESSAGE)


class DimensionMismatchError(SparseMatrixError):
    """Raised when two operands have incompatible shapes for an operation."""

    def __init__(self, operation: str, lhs_shape: tuple[int, int], rhs_shape: tuple[int, int]):
        self.operation = operation
        self.lhs_shape = lhs_shape
        self.rhs_shape = rhs_shape
        message = f"Matrix dimensions must match for {operation}: {lhs_shape} vs {rhs_shape}"
        super().__init__(message)


class OutOfRangeError(SparseMatrixError):
    """Raised when a bounds checked matrix is accessed outside its declared shape."""

    def __init__(self, row, col, shape: tuple[int, int]):
        self.row = row
        self.col = col
        self.shape = shape
        message = f"Coordinate ({row}, {col}) is outside a {shape[0]}x{shape[1]} matrix"
        super().__init__(message)


class InvalidDimensionsError(SparseMatrixError):
    """Raised when a matrix is constructed with negative or non-integer dimensions."""

    def __init__(self, rows, cols):
        self.rows = rows
        self.cols = cols
        message = f"Matrix dimensions must be non-negative integers, got rows={rows!r}, cols={cols!r}"
        super().__init__(message)


class MissingPathError(PipelineConfigError):
    """Raised when a required pipeline path is empty."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        message = f"{field_name} cannot be empty"
        super().__init__(message)
