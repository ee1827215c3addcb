"""
Exception types raised by csvtable.
"""


class CsvTableError(Exception):
    """Base exception for csvtable errors."""
    pass


class CsvRangeError(CsvTableError, IndexError):
    """Raised when a row or column index is outside its valid range.

    Attributes:
        kind: ``'Row'`` or ``'Column'``.
        index: The rejected index.
        size: Number of valid positions; the valid range is ``[0, size - 1]``.
    """

    def __init__(self, kind: str, index: int, size: int):
        self.kind = kind
        self.index = index
        self.size = size
        super().__init__(f"{kind} {index} is out of bounds [0, {size - 1}]")


class CsvValidationError(CsvTableError, ValueError):
    """Raised when a configuration value or input path is rejected."""
    pass
