import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import PipelineConfig
from .constants import DEFAULT_ENCODING
from .matrix_errors import PipelineConfigError
from .pipeline import MatrixPipeline


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparse-matrix",
        description="Add and subtract two sparse matrix files, optionally multiply them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write A + B and A - B
  sparse-matrix matrixA.txt matrixB.txt --sum sumMatrix.txt --difference diffMatrix.txt

  # Also write A x B
  sparse-matrix matrixA.txt matrixB.txt --sum sum.txt --difference diff.txt --product prod.txt
        """
    )

    parser.add_argument('matrix_a', help='Left operand matrix file')
    parser.add_argument('matrix_b', help='Right operand matrix file')

    parser.add_argument('--sum', default='sumMatrix.txt', help='Output file for A + B')
    parser.add_argument('--difference', default='diffMatrix.txt', help='Output file for A - B')
    parser.add_argument('--product', default=None, help='Output file for A x B (skipped if omitted)')

    parser.add_argument('--check-bounds', action='store_true', help='Reject entries outside the declared shape')
    parser.add_argument('--encoding', default=DEFAULT_ENCODING, help='Encoding of input and output files')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line driver. Returns 0 on success and 1 on any failure."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(levelname)s: %(message)s')

    config = PipelineConfig(
        matrix_a_path=args.matrix_a,
        matrix_b_path=args.matrix_b,
        sum_path=args.sum,
        difference_path=args.difference,
        product_path=args.product,
        check_bounds=args.check_bounds,
        encoding=args.encoding,
    )
    try:
        pipeline = MatrixPipeline(config)
    except PipelineConfigError as e:
        logger.error(str(e))
        return 1

    result = pipeline.run()
    if not result.ok:
        logger.error(str(result.error))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
