"""Tests for CsvRow."""

import pytest

from csvtable import CsvRangeError, CsvTable, CsvTableError, CsvValidationError


@pytest.fixture
def table():
    return CsvTable("a,b,c\n1,2,3")


class TestAccess:
    """Tests for reading and writing cells."""

    def test_get(self, table):
        """Test reading cells."""
        row = table.get_row(1)
        assert row.get(0) == "1"
        assert row[2] == "3"

    def test_get_out_of_range(self, table):
        """Test that reads are range-checked against the row."""
        row = table.get_row(0)
        with pytest.raises(CsvRangeError) as exc_info:
            row.get(3)
        assert exc_info.value.index == 3
        assert str(exc_info.value) == "Column 3 is out of bounds [0, 2]"

    def test_negative_index_rejected(self, table):
        """Test that negative indices are not wrapped around."""
        with pytest.raises(IndexError):
            table.get_row(0).get(-1)

    def test_set(self, table):
        """Test writing cells."""
        row = table.get_row(1)
        row.set(0, "x")
        row[1] = 42
        assert row.values() == ["x", "42", "3"]

    def test_set_none_marks_absent(self, table):
        """Test that setting None makes the cell absent."""
        row = table.get_row(1)
        row.set(1, None)
        assert row.get(1) is None

    def test_set_out_of_range(self, table):
        """Test that writes are range-checked."""
        with pytest.raises(CsvRangeError):
            table.get_row(1).set(5, "x")

    def test_first_last(self, table):
        """Test first and last cells."""
        row = table.get_row(0)
        assert row.first() == "a"
        assert row.last() == "c"

    def test_first_on_empty_row(self):
        """Test first() on a row without cells."""
        row = CsvTable().add_row()
        with pytest.raises(CsvRangeError):
            row.first()

    def test_table_reference(self, table):
        """Test that a row knows its table."""
        assert table.get_row(0).table is table

    def test_iteration(self, table):
        """Test iterating over a row."""
        assert list(table.get_row(0)) == ["a", "b", "c"]
        assert len(table.get_row(0)) == 3
        assert table.get_row(0).column_count == 3


class TestEditing:
    """Tests for row-level edits."""

    def test_add_resizes_table(self):
        """Test that adding a cell to one row widens every row."""
        table = CsvTable("a,b\n1,2")
        table.get_row(0).add("c")
        assert table.column_count == 3
        assert table.get_row(0).values() == ["a", "b", "c"]
        assert table.get_row(1).values() == ["1", "2", None]

    def test_add_on_short_row_shrinks_table(self):
        """Test that add() resizes the table to the row's new length."""
        table = CsvTable("a,b,c\n1")
        table.get_row(1).add("2")
        assert table.column_count == 2
        assert table.get_row(0).values() == ["a", "b"]

    def test_swap(self, table):
        """Test swapping two cells."""
        row = table.get_row(0)
        row.swap(0, 2)
        assert row.values() == ["c", "b", "a"]

    def test_swap_same_index_unchecked(self, table):
        """Test that swapping a cell with itself skips validation."""
        table.get_row(0).swap(7, 7)

    def test_swap_out_of_range(self, table):
        """Test that swap validates both indices."""
        row = table.get_row(0)
        with pytest.raises(CsvRangeError):
            row.swap(0, 3)
        assert row.values() == ["a", "b", "c"]

    def test_clear_one(self, table):
        """Test clearing one cell."""
        row = table.get_row(0)
        row.clear(1)
        assert row.values() == ["a", None, "c"]

    def test_clear_all(self, table):
        """Test clearing every cell."""
        row = table.get_row(0)
        row.clear()
        assert row.values() == [None, None, None]

    def test_insert_and_remove(self, table):
        """Test the row-local structural edits."""
        row = table.get_row(0)
        row.insert(1)
        assert row.values() == ["a", None, "b", "c"]
        row.remove(0)
        assert row.values() == [None, "b", "c", None]
        row.resize(2)
        assert row.values() == [None, "b"]
        # Row-local edits leave the table's column count alone.
        assert table.column_count == 3

    def test_insert_at_end(self, table):
        """Test that a row accepts an insert at its length."""
        row = table.get_row(0)
        row.insert(3)
        assert row.values() == ["a", "b", "c", None]

    def test_detached_table(self):
        """Test a row whose table has been garbage collected."""
        row = CsvTable("a,b").get_row(0)
        with pytest.raises(CsvTableError):
            row.table

    def test_detached_row_still_readable(self):
        """Test that a retained row renders with the default delimiter."""
        table = CsvTable("a;\"b,c\"", delimiter=";")
        row = table.header()
        del table
        assert row.values() == ["a", "b,c"]
        assert str(row) == 'a,"b,c"'
        assert row.render(0) == "a"
        with pytest.raises(CsvTableError):
            row.add("d")
        assert row.values() == ["a", "b,c"]

    def test_resize_negative(self, table):
        """Test that a negative size is rejected without touching the row."""
        row = table.get_row(0)
        with pytest.raises(CsvValidationError):
            row.resize(-1)
        assert row.values() == ["a", "b", "c"]

    def test_resize_grow(self, table):
        """Test padding a row with absent cells."""
        row = table.get_row(1)
        row.resize(5)
        assert row.values() == ["1", "2", "3", None, None]

    def test_check_index(self, table):
        """Test the public index check."""
        row = table.get_row(0)
        row.check_index(2)
        with pytest.raises(CsvRangeError) as exc_info:
            row.check_index(3)
        assert exc_info.value.size == 3


class TestRendering:
    """Tests for row rendering."""

    def test_to_string(self):
        """Test CSV rendering with quoting."""
        table = CsvTable('x,"a,b",,"q""q"')
        assert str(table.get_row(0)) == 'x,"a,b",,"q""q"'

    def test_uses_table_delimiter(self):
        """Test that rendering follows the table's delimiter."""
        table = CsvTable("a;b,c", delimiter=";")
        assert table.get_row(0).to_string() == 'a;b,c'
        table.delimiter = ","
        assert table.get_row(0).to_string() == 'a,"b,c"'

    def test_render_cell(self):
        """Test rendering a single cell."""
        table = CsvTable('"a,b",,c')
        row = table.get_row(0)
        assert row.render(0) == '"a,b"'
        assert row.render(0, ";") == "a,b"
        assert row.render(1) == ""

    def test_aligned(self, table):
        """Test padding cells to given widths."""
        assert table.get_row(0).to_aligned_string([3, 1, 2]) == "a  ,b,c "
