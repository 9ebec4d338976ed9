"""
Text format for sparse matrices.

    rows=<integer>
    cols=<integer>
    (<row>, <col>, <value>)
    ...

Blank lines are ignored. Only non-zero entries are written, in row-major order.
"""

import logging
import math
from pathlib import Path
from typing import Union

from .constants import (COLS_HEADER, DEFAULT_ENCODING, ENTRY_CLOSE, ENTRY_FIELD_COUNT, ENTRY_OPEN,
                        ENTRY_SEPARATOR, HEADER_SEPARATOR, ROWS_HEADER)
from .matrix import SparseMatrix
from .matrix_errors import FormatError, InvalidDimensionsError, OutOfRangeError
from .sparse_store import Number


logger = logging.getLogger(__name__)


def _parse_number(field: str) -> Number:
    field = field.strip()
    # int()/float() also take digit separators and non-ASCII digits
    if not field.isascii() or "_" in field:
        raise FormatError()
    try:
        return int(field)
    except ValueError:
        pass
    try:
        value = float(field)
    except ValueError:
        raise FormatError() from None
    if math.isnan(value):
        raise FormatError()
    return value


def _parse_index(field: str) -> int:
    value = _parse_number(field)
    if isinstance(value, float):
        if not value.is_integer():
            raise FormatError()
        return int(value)
    return value


def _parse_header(line: str) -> int:
    # only the text after the first '=' matters, the name before it is not checked
    parts = line.split(HEADER_SEPARATOR, 1)
    if len(parts) != 2:
        raise FormatError()
    value = parts[1].strip()
    if not value.isascii() or "_" in value:
        raise FormatError()
    try:
        return int(value)
    except ValueError:
        raise FormatError() from None


def _parse_entry(line: str) -> tuple[int, int, Number]:
    if not (line.startswith(ENTRY_OPEN) and line.endswith(ENTRY_CLOSE)):
        raise FormatError()
    fields = line[len(ENTRY_OPEN):-len(ENTRY_CLOSE)].split(ENTRY_SEPARATOR)
    if len(fields) != ENTRY_FIELD_COUNT:
        raise FormatError()
    row_field, col_field, value_field = fields
    return _parse_index(row_field), _parse_index(col_field), _parse_number(value_field)


def parse_matrix(text: str, check_bounds: bool = False) -> SparseMatrix:
    """Parse matrix text into a SparseMatrix.

    Args:
        text: Matrix in the rows=/cols=/(row, col, value) format.
        check_bounds: Passed to the resulting matrix. Entries outside the declared
            shape are then rejected as a format error.

    Returns:
        The populated SparseMatrix.

    Raises:
        FormatError: on any malformed header or data line.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise FormatError()

    rows = _parse_header(lines[0])
    cols = _parse_header(lines[1])
    try:
        matrix = SparseMatrix(rows, cols, check_bounds=check_bounds)
    except InvalidDimensionsError as e:
        raise FormatError() from e

    for line in lines[2:]:
        row, col, value = _parse_entry(line)
        try:
            matrix.set_element(row, col, value)
        except OutOfRangeError as e:
            raise FormatError() from e

    logger.debug("parsed %dx%d matrix with %d non-zero entries", rows, cols, matrix.nnz)
    return matrix


def format_value(value: Number) -> str:
    """Format a value the way it is written to file, integral floats lose their '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    return str(value)


def format_matrix(matrix: SparseMatrix) -> str:
    lines = [f"{ROWS_HEADER}{HEADER_SEPARATOR}{matrix.rows}",
             f"{COLS_HEADER}{HEADER_SEPARATOR}{matrix.cols}"]
    for row, col, value in matrix.entries():
        lines.append(f"{ENTRY_OPEN}{row}{ENTRY_SEPARATOR} {col}{ENTRY_SEPARATOR} {format_value(value)}{ENTRY_CLOSE}")
    return "\n".join(lines) + "\n"


def read_matrix_file(path: Union[str, Path], check_bounds: bool = False, encoding: str = DEFAULT_ENCODING) -> SparseMatrix:
    """Read a matrix file.

    OSError from the file system propagates unchanged, undecodable bytes raise FormatError.
    """
    path = Path(path)
    logger.info("Reading matrix from %s", path)
    try:
        text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise FormatError() from e
    return parse_matrix(text, check_bounds=check_bounds)


def write_matrix_file(matrix: SparseMatrix, path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> None:
    path = Path(path)
    logger.info("Writing %dx%d matrix (%d entries) to %s", matrix.rows, matrix.cols, matrix.nnz, path)
    path.write_text(format_matrix(matrix), encoding=encoding)
