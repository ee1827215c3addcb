"""
A single row of a ``CsvTable``.
"""

import weakref
from typing import Any, Iterator, List, Optional, Sequence, TYPE_CHECKING

from .errors import CsvRangeError, CsvTableError, CsvValidationError
from .parser import DEFAULT_DELIMITER, CellValue, render_field

if TYPE_CHECKING:
    from .table import CsvTable


def _to_cell(value: Any) -> CellValue:
    if value is None:
        return None
    return str(value)


class CsvRow:
    """
    One row of cell values, owned by a ``CsvTable``.

    Rows are created by their table (``CsvTable.add_row``, ``insert_row`` or
    parsing). A row only keeps a weak reference to its table; it uses it to
    look up the delimiter and to resize the whole table from ``add``.

    A row kept after its table is gone can still be read and rendered (with
    the default delimiter); ``table`` and ``add`` raise ``CsvTableError``.
    """

    __slots__ = ('_table_ref', '_values')

    def __init__(self, table: 'CsvTable', values: Optional[Sequence[CellValue]] = None):
        self._table_ref = weakref.ref(table)
        if values is None:
            self._values: List[CellValue] = [None] * table.column_count
        else:
            self._values = [_to_cell(v) for v in values]

    # Access

    def get(self, column_index: int) -> CellValue:
        """Return the value in ``column_index``, ``None`` if absent."""
        self.check_index(column_index)
        return self._values[column_index]

    def set(self, column_index: int, value: Any) -> None:
        """
        Set the value in ``column_index``.

        ``None`` marks the cell absent; anything else is stored as ``str``.

        Raises:
            CsvRangeError: If the column index is out of range
        """
        self.check_index(column_index)
        self._values[column_index] = _to_cell(value)

    def first(self) -> CellValue:
        return self.get(0)

    def last(self) -> CellValue:
        return self.get(len(self._values) - 1)

    def values(self) -> List[CellValue]:
        """Return a copy of the row's cell values."""
        return list(self._values)

    @property
    def column_count(self) -> int:
        return len(self._values)

    @property
    def table(self) -> 'CsvTable':
        """The table this row belongs to."""
        table = self._table_ref()
        if table is None:
            raise CsvTableError("The table owning this row no longer exists")
        return table

    # Editing

    def add(self, value: Any) -> None:
        """
        Append a cell holding ``value``.

        The owning table is resized to this row's new length, so every other
        row is padded or truncated to match.
        """
        table = self.table
        self._values = self._values + [_to_cell(value)]
        table.resize_table(len(self._values))

    def swap(self, column_index1: int, column_index2: int) -> None:
        """
        Swap two cells.

        Equal indices are a no-op and are not validated.

        Raises:
            CsvRangeError: If either column index is out of range
        """
        if column_index1 == column_index2:
            return
        self.check_index(column_index1)
        self.check_index(column_index2)
        values = self._values
        values[column_index1], values[column_index2] = values[column_index2], values[column_index1]

    def clear(self, column_index: Optional[int] = None) -> None:
        """Mark one cell, or every cell when no index is given, as absent."""
        if column_index is None:
            self._values = [None] * len(self._values)
            return
        self.check_index(column_index)
        self._values[column_index] = None

    # Structural edits driven by the table. These never resize the table.

    def insert(self, column_index: int) -> None:
        """Insert an absent cell before ``column_index`` (``len`` appends)."""
        if column_index < 0 or column_index > len(self._values):
            raise CsvRangeError('Column', column_index, len(self._values) + 1)
        self._values = self._values[:column_index] + [None] + self._values[column_index:]

    def remove(self, column_index: int) -> None:
        """Drop the cell at ``column_index``, keeping the length with an absent last cell."""
        self.check_index(column_index)
        self._values = self._values[:column_index] + self._values[column_index + 1:] + [None]

    def resize(self, column_count: int) -> None:
        """
        Truncate, or pad with absent cells, to ``column_count`` cells.

        Raises:
            CsvValidationError: If ``column_count`` is negative
        """
        if column_count < 0:
            raise CsvValidationError(
                f"Column count {column_count} must be greater than -1"
            )
        values = self._values[:column_count]
        self._values = values + [None] * (column_count - len(values))

    # Rendering

    def render(self, column_index: int, delimiter: Optional[str] = None) -> str:
        """Return the CSV field text of one cell."""
        self.check_index(column_index)
        if delimiter is None:
            delimiter = self._delimiter()
        return render_field(self._values[column_index], delimiter)

    def to_string(self) -> str:
        delimiter = self._delimiter()
        return delimiter.join(render_field(v, delimiter) for v in self._values)

    def to_aligned_string(self, widths: Sequence[int]) -> str:
        """Render the row with each cell right-padded to ``widths[column]``."""
        delimiter = self._delimiter()
        return delimiter.join(
            render_field(v, delimiter).ljust(widths[column])
            for column, v in enumerate(self._values)
        )

    def _delimiter(self) -> str:
        table = self._table_ref()
        if table is None:
            return DEFAULT_DELIMITER
        return table.delimiter

    def check_index(self, column_index: int) -> None:
        """Raise ``CsvRangeError`` unless ``column_index`` is a cell of this row."""
        if column_index < 0 or column_index >= len(self._values):
            raise CsvRangeError('Column', column_index, len(self._values))

    # Container protocol

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[CellValue]:
        return iter(list(self._values))

    def __getitem__(self, column_index: int) -> CellValue:
        return self.get(column_index)

    def __setitem__(self, column_index: int, value: Any) -> None:
        self.set(column_index, value)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"CsvRow({self._values!r})"
