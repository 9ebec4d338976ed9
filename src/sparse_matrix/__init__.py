"""
Sparse matrices that store only their non-zero elements.

Supports element access, addition, subtraction and multiplication, and a plain
text format of ``rows=``/``cols=`` headers followed by ``(row, col, value)`` lines.
"""

__version__ = "0.1.0"

from .coordinate import CoordinateKey
from .sparse_store import SparseStore
from .matrix import SparseMatrix
from .matrix_codec import parse_matrix, format_matrix, read_matrix_file, write_matrix_file
from .matrix_errors import (SparseMatrixError, FormatError, DimensionMismatchError, OutOfRangeError,
                            InvalidDimensionsError, PipelineConfigError, MissingPathError)
from .config import PipelineConfig
from .pipeline import MatrixPipeline, StageResult, parse_stage, validate_stage, compute_stage, serialize_stage

__all__ = [
    "CoordinateKey",
    "SparseStore",
    "SparseMatrix",
    "parse_matrix",
    "format_matrix",
    "read_matrix_file",
    "write_matrix_file",
    "SparseMatrixError",
    "FormatError",
    "DimensionMismatchError",
    "OutOfRangeError",
    "InvalidDimensionsError",
    "PipelineConfigError",
    "MissingPathError",
    "PipelineConfig",
    "MatrixPipeline",
    "StageResult",
    "parse_stage",
    "validate_stage",
    "compute_stage",
    "serialize_stage",
]
