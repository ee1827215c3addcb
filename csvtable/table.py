"""
Mutable CSV table model.
"""

import functools
import logging
from typing import Any, Callable, Iterator, List, Optional

from .errors import CsvRangeError, CsvValidationError
from .parser import (
    DEFAULT_DELIMITER,
    parse_line,
    parse_source,
    validate_delimiter,
)
from .row import CsvRow

logger = logging.getLogger(__name__)


def _default_key(row: CsvRow):
    # Absent cells sort before present ones.
    return [(v is not None, v or '') for v in row]


class CsvTable:
    """
    A grid of cell values parsed from, and rendered back to, CSV text.

    Row 0 is treated as the header by ``header()`` and ``sort()``. The table
    tracks a nominal column count that rows are reconciled to by
    ``resize_table``, ``insert_column`` and ``remove_column``; until then a row
    may be shorter or longer than it.

    Example:
        >>> table = CsvTable('name,age\\nJohn,30')
        >>> table.get_row(1).get(0)
        'John'
        >>> table.insert_column(1)
        >>> str(table)
        'name,,age\\nJohn,,30'
    """

    def __init__(self, source: str = '', delimiter: str = DEFAULT_DELIMITER):
        """
        Args:
            source: CSV text to parse; empty for an empty table.
            delimiter: Field delimiter character (default: ',').

        Raises:
            CsvValidationError: If the delimiter is invalid
        """
        self._delimiter = validate_delimiter(delimiter)
        self._rows: List[CsvRow] = []
        self._columns = 0

        if source:
            for record in parse_source(source):
                row = CsvRow(self, parse_line(record, delimiter))
                self._columns = max(self._columns, len(row))
                self._rows.append(row)
            logger.debug("Parsed %d rows x %d columns", len(self._rows), self._columns)

    # Properties

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        """The nominal column count, independent of any single row's length."""
        return self._columns

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @delimiter.setter
    def delimiter(self, delimiter: str) -> None:
        self._delimiter = validate_delimiter(delimiter)

    # Rows

    def header(self) -> CsvRow:
        """Return row 0."""
        return self.get_row(0)

    def get_row(self, row_index: int) -> CsvRow:
        """
        Return the row at ``row_index``.

        Raises:
            CsvRangeError: If the row index is out of range
        """
        self._check_row_range(row_index)
        return self._rows[row_index]

    def rows(self) -> List[CsvRow]:
        """Return a list of the rows, in order."""
        return list(self._rows)

    def insert_row(self, row_index: int) -> CsvRow:
        """
        Insert a row of ``column_count`` absent cells before ``row_index``.

        ``row_index`` may equal ``row_count`` to append.

        Raises:
            CsvRangeError: If the row index is out of range
        """
        if row_index < 0 or row_index > len(self._rows):
            raise CsvRangeError('Row', row_index, len(self._rows) + 1)
        row = CsvRow(self)
        self._rows.insert(row_index, row)
        return row

    def add_row(self) -> CsvRow:
        """Append a row of ``column_count`` absent cells and return it."""
        row = CsvRow(self)
        self._rows.append(row)
        return row

    def remove_row(self, row_index: int) -> CsvRow:
        """
        Remove and return the row at ``row_index``.

        Raises:
            CsvRangeError: If the row index is out of range
        """
        self._check_row_range(row_index)
        return self._rows.pop(row_index)

    def swap_rows(self, row_index1: int, row_index2: int) -> None:
        """
        Swap two rows. Both indices are validated, even when equal.

        Raises:
            CsvRangeError: If either row index is out of range
        """
        self._check_row_range(row_index1)
        self._check_row_range(row_index2)
        rows = self._rows
        rows[row_index1], rows[row_index2] = rows[row_index2], rows[row_index1]

    def clear_rows(self) -> None:
        """Mark every cell of every row as absent."""
        for row in self._rows:
            row.clear()

    # Columns

    def insert_column(self, column_index: int) -> None:
        """
        Insert an absent column before ``column_index`` in every row.

        Only existing column indices are accepted; to append a column use
        ``resize_table(column_count + 1)``. Rows shorter than
        ``column_index`` are padded first so the new cell lands in place.

        Raises:
            CsvRangeError: If the column index is out of range
        """
        self._check_column_range(column_index)
        for row in self._rows:
            if len(row) < column_index:
                row.resize(column_index)
            row.insert(column_index)
        self._columns += 1

    def remove_column(self, column_index: int) -> None:
        """
        Remove the column at ``column_index`` from every row.

        Every row is then resized to the new column count.

        Raises:
            CsvRangeError: If the column index is out of range
        """
        self._check_column_range(column_index)
        for row in self._rows:
            if column_index < len(row):
                row.remove(column_index)
        self.resize_table(self._columns - 1)

    def swap_columns(self, column_index1: int, column_index2: int) -> None:
        """
        Swap two columns in every row.

        Equal indices are a no-op and are not validated. Otherwise both
        indices are checked against every row before anything is swapped.

        Raises:
            CsvRangeError: If either index is out of range for some row
        """
        if column_index1 == column_index2:
            return
        for row in self._rows:
            row.check_index(column_index1)
            row.check_index(column_index2)
        for row in self._rows:
            row.swap(column_index1, column_index2)

    def resize_table(self, column_count: int) -> None:
        """
        Set the column count and truncate or pad every row to it.

        Raises:
            CsvValidationError: If ``column_count`` is negative
        """
        if column_count < 0:
            raise CsvValidationError(
                f"Column count {column_count} must be greater than -1"
            )
        self._columns = column_count
        for row in self._rows:
            row.resize(column_count)
        logger.debug("Resized table to %d columns", column_count)

    # Trimming

    def trim_left(self) -> None:
        """Remove leading columns that are absent in every row."""
        removed = 0
        while self._columns > 0 and self._column_is_absent(0):
            self.remove_column(0)
            removed += 1
        if removed:
            logger.debug("Trimmed %d empty columns from the left", removed)

    def trim_right(self) -> None:
        """Remove trailing columns that are absent in every row."""
        removed = 0
        while self._columns > 0 and self._column_is_absent(self._columns - 1):
            self.remove_column(self._columns - 1)
            removed += 1
        if removed:
            logger.debug("Trimmed %d empty columns from the right", removed)

    def trim(self) -> None:
        """Remove empty columns from both sides of the table."""
        self.trim_left()
        self.trim_right()

    def _column_is_absent(self, column_index: int) -> bool:
        for row in self._rows:
            if column_index < len(row) and row.get(column_index) is not None:
                return False
        return True

    # Sorting

    def sort(
        self,
        key: Optional[Callable[[CsvRow], Any]] = None,
        *,
        comparator: Optional[Callable[[CsvRow, CsvRow], int]] = None,
        affect_header: bool = False,
        reverse: bool = False,
    ) -> None:
        """
        Stable-sort the rows.

        Args:
            key: Function computing a sort key from a row. Defaults to the row
                values, absent cells first.
            comparator: Old-style ``cmp(a, b)`` function, used instead of
                ``key`` when given.
            affect_header: If False (default), row 0 stays in place.
            reverse: Sort in descending order.
        """
        if comparator is not None:
            if key is not None:
                raise TypeError("Pass either key or comparator, not both")
            key = functools.cmp_to_key(comparator)
        elif key is None:
            key = _default_key

        if affect_header:
            self._rows.sort(key=key, reverse=reverse)
        elif self._rows:
            header = self._rows[0]
            body = sorted(self._rows[1:], key=key, reverse=reverse)
            self._rows = [header] + body

    # Rendering

    def to_string(self) -> str:
        """Render the table as CSV, rows joined by ``\\n`` without a trailing one."""
        return '\n'.join(row.to_string() for row in self._rows)

    def to_aligned_string(self) -> str:
        """
        Render the table with every column padded to its widest field.

        Meant for display; the padding becomes field content if re-parsed.
        """
        delimiter = self._delimiter
        widths: List[int] = [0] * max([self._columns] + [len(row) for row in self._rows])
        for row in self._rows:
            for column in range(len(row)):
                widths[column] = max(widths[column], len(row.render(column, delimiter)))
        return '\n'.join(row.to_aligned_string(widths) for row in self._rows)

    def _check_row_range(self, row_index: int) -> None:
        if row_index < 0 or row_index >= len(self._rows):
            raise CsvRangeError('Row', row_index, len(self._rows))

    def _check_column_range(self, column_index: int) -> None:
        if column_index < 0 or column_index >= self._columns:
            raise CsvRangeError('Column', column_index, self._columns)

    # Container protocol

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[CsvRow]:
        return iter(list(self._rows))

    def __getitem__(self, row_index: int) -> CsvRow:
        return self.get_row(row_index)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"CsvTable(rows={len(self._rows)}, columns={self._columns}, "
            f"delimiter={self._delimiter!r})"
        )
