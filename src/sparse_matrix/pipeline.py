import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .config import PipelineConfig
from .constants import DEFAULT_ENCODING, Operation
from .matrix import SparseMatrix
from .matrix_codec import read_matrix_file, write_matrix_file
from .matrix_errors import DimensionMismatchError, SparseMatrixError


logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    stage: str  # name of the stage that produced this result
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


_OPERATIONS = {
    Operation.ADD: SparseMatrix.add,
    Operation.SUBTRACT: SparseMatrix.subtract,
    Operation.MULTIPLY: SparseMatrix.multiply,
}


def parse_stage(path: Union[str, Path], check_bounds: bool = False, encoding: str = DEFAULT_ENCODING) -> StageResult:
    """Read and parse a matrix file."""
    try:
        matrix = read_matrix_file(path, check_bounds=check_bounds, encoding=encoding)
    except (SparseMatrixError, OSError, LookupError) as e:
        # LookupError: unknown encoding name
        return StageResult(stage='parse', error=e)
    return StageResult(stage='parse', value=matrix)


def validate_stage(a: SparseMatrix, b: SparseMatrix, operation: str) -> StageResult:
    """Check that a and b have compatible shapes for the operation.

    The value of a successful result is the shape of the output matrix.
    """
    if operation not in _OPERATIONS:
        raise ValueError(f"operation must be one of: {list(_OPERATIONS)}")
    if operation == Operation.MULTIPLY:
        if a.cols != b.rows:
            return StageResult(stage='validate', error=DimensionMismatchError(operation, a.shape, b.shape))
        return StageResult(stage='validate', value=(a.rows, b.cols))
    if a.shape != b.shape:
        return StageResult(stage='validate', error=DimensionMismatchError(operation, a.shape, b.shape))
    return StageResult(stage='validate', value=a.shape)


def compute_stage(a: SparseMatrix, b: SparseMatrix, operation: str) -> StageResult:
    if operation not in _OPERATIONS:
        raise ValueError(f"operation must be one of: {list(_OPERATIONS)}")
    try:
        result = _OPERATIONS[operation](a, b)
    except SparseMatrixError as e:
        return StageResult(stage='compute', error=e)
    return StageResult(stage='compute', value=result)


def serialize_stage(matrix: SparseMatrix, path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> StageResult:
    """Write a matrix file. The value of a successful result is the written path."""
    try:
        write_matrix_file(matrix, path, encoding=encoding)
    except (OSError, LookupError, UnicodeEncodeError) as e:
        return StageResult(stage='serialize', error=e)
    return StageResult(stage='serialize', value=Path(path))


class MatrixPipeline:
    """
    Reads two matrices, then computes and writes their sum, difference and
    optionally their product.

    Each output runs validate -> compute -> serialize. The first failed stage stops the
    run; outputs written before it are left in place.
    """

    def __init__(self, config: PipelineConfig):
        """
        Initialize the MatrixPipeline

        Args:
            config: PipelineConfig naming the input and output files
        """
        self.config = config
        self.config.validate()
        self.matrix_a = None
        self.matrix_b = None
        self.outputs: dict[str, SparseMatrix] = {}

    def _planned_outputs(self) -> list[tuple[str, str]]:
        plan = [(Operation.ADD, self.config.sum_path),
                (Operation.SUBTRACT, self.config.difference_path)]
        if self.config.product_path is not None:
            plan.append((Operation.MULTIPLY, self.config.product_path))
        return plan

    def run(self) -> StageResult:
        """
        Run every stage in order.

        Returns:
            The first failed StageResult, or the result of the last serialize stage.
        """
        start_time = time.time()
        logger.info("=== Running sparse matrix pipeline ===")

        parsed = []
        for path in [self.config.matrix_a_path, self.config.matrix_b_path]:
            result = parse_stage(path, check_bounds=self.config.check_bounds, encoding=self.config.encoding)
            if not result.ok:
                logger.debug("parse of %s failed: %s", path, result.error)
                return result
            parsed.append(result.value)
        self.matrix_a, self.matrix_b = parsed

        result = StageResult(stage='parse', value=parsed)
        for operation, out_path in self._planned_outputs():
            result = validate_stage(self.matrix_a, self.matrix_b, operation)
            if not result.ok:
                return result
            result = compute_stage(self.matrix_a, self.matrix_b, operation)
            if not result.ok:
                return result
            self.outputs[operation] = result.value
            result = serialize_stage(result.value, out_path, encoding=self.config.encoding)
            if not result.ok:
                return result

        logger.info("Pipeline finished in %.4fs", time.time() - start_time)
        return result
