from typing import Optional
from dataclasses import dataclass

from .constants import DEFAULT_ENCODING
from .matrix_errors import MissingPathError


@dataclass
class PipelineConfig:
    """
    Configuration for the read-compute-write matrix pipeline.

    Two input matrices are read, their sum and difference are written, and
    optionally their product.
    """

    matrix_a_path: str
    """Path of the left operand matrix file."""

    matrix_b_path: str
    """Path of the right operand matrix file."""

    sum_path: str
    """Output path for A + B."""

    difference_path: str
    """Output path for A - B."""

    product_path: Optional[str] = None
    """Output path for A x B. If None, the product is not computed."""

    check_bounds: bool = False
    """Whether parsed matrices reject entries outside their declared shape."""

    encoding: str = DEFAULT_ENCODING
    """Text encoding of input and output files."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        REQUIRED_PATHS = ['matrix_a_path', 'matrix_b_path', 'sum_path', 'difference_path']

        for name in REQUIRED_PATHS:
            if not getattr(self, name):
                raise MissingPathError(name)
        if self.product_path is not None and not self.product_path:
            raise MissingPathError('product_path')
