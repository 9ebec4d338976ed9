ROWS_HEADER = "rows"
COLS_HEADER = "cols"
HEADER_SEPARATOR = "="  # rows=<int>, cols=<int>

ENTRY_OPEN = "("
ENTRY_CLOSE = ")"
ENTRY_SEPARATOR = ","
ENTRY_FIELD_COUNT = 3

DEFAULT_ENCODING = "utf-8"

class Operation:
    ADD = "addition"
    SUBTRACT = "subtraction"
    MULTIPLY = "multiplication"
