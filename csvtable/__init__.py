"""
csvtable - an editable in-memory CSV table

This module parses delimited text into a mutable grid of cell values, supports
structural edits (insert, remove, swap, resize and trim of rows and columns)
and sorting, and renders the grid back to CSV or to aligned text.
"""

from .errors import (
    CsvTableError,
    CsvRangeError,
    CsvValidationError,
)
from .parser import (
    CellValue,
    parse_source,
    parse_line,
    parse_field,
    render_field,
    parse_string,
    count_rows,
)
from .row import CsvRow
from .table import CsvTable
from .io import (
    parse_file,
    write_file,
    MAX_FILE_SIZE,
)

__version__ = '0.1.0'
__all__ = [
    'CsvTable',
    'CsvRow',
    'CellValue',
    'parse_source',
    'parse_line',
    'parse_field',
    'render_field',
    'parse_string',
    'count_rows',
    'parse_file',
    'write_file',
    'CsvTableError',
    'CsvRangeError',
    'CsvValidationError',
    'MAX_FILE_SIZE',
]
