"""
CSV text parsing and field rendering.

Parsing happens in two passes: ``parse_source`` splits the document into
records and ``parse_line`` splits one record into typed fields. Both are
permissive: an unterminated quote consumes the rest of the input instead of
raising.
"""

from typing import List, Optional

from .errors import CsvValidationError

CellValue = Optional[str]

QUOTE = '"'
DEFAULT_DELIMITER = ','

# Characters that force a rendered field to be quoted, besides the delimiter.
_SPECIAL_CHARS = ('\n', '\r', QUOTE)

# Control characters and space; other Unicode whitespace such as NBSP is content.
_TRIM_CHARS = ''.join(chr(c) for c in range(0x21))


def validate_delimiter(delimiter: str) -> str:
    """
    Check that ``delimiter`` can separate fields.

    Raises:
        CsvValidationError: If the delimiter is not a single character, or is
            the quote character or a line terminator.
    """
    if not isinstance(delimiter, str) or not delimiter:
        raise CsvValidationError("Delimiter cannot be empty")
    if len(delimiter) > 1:
        raise CsvValidationError(
            f"Delimiter must be a single character, got '{delimiter}' "
            f"(length {len(delimiter)})."
        )
    if delimiter == QUOTE:
        raise CsvValidationError(
            f"Delimiter and quote character cannot be the same ('{delimiter}')"
        )
    if delimiter in ('\n', '\r'):
        raise CsvValidationError("Delimiter cannot be a line terminator")
    return delimiter


def parse_source(source: str) -> List[str]:
    """
    Split CSV text into records.

    A record ends at ``\\n``, or at ``\\r`` not followed by ``\\n``, unless the
    terminator is inside quotes, in which case it is kept as record content.
    Escaped quotes (``""``) are kept verbatim; they are unescaped per field by
    ``parse_line``. Blank and whitespace-only records are dropped.

    Args:
        source: The whole CSV document.

    Returns:
        List of raw record strings.
    """
    records = []
    buf = []
    quotes = False
    length = len(source)
    i = 0
    while i < length:
        c = source[i]
        if c == QUOTE:
            if quotes and i + 1 < length and source[i + 1] == QUOTE:
                buf.append('""')
                i += 1
            else:
                quotes = not quotes
                buf.append(c)
        elif c == '\n' or (c == '\r' and (i + 1 >= length or source[i + 1] != '\n')):
            if quotes:
                buf.append(c)
            else:
                record = ''.join(buf)
                if record.strip(_TRIM_CHARS):
                    records.append(record)
                buf = []
        else:
            buf.append(c)
        i += 1

    record = ''.join(buf)
    if record.strip(_TRIM_CHARS):
        records.append(record)
    return records


def parse_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[CellValue]:
    """
    Split one record into field values.

    The last field is always emitted, so ``'a,'`` yields two fields.

    Args:
        line: A record produced by ``parse_source``.
        delimiter: Field delimiter character.

    Returns:
        List of cell values, ``None`` for absent fields.
    """
    fields = []
    buf = []
    quotes = False
    length = len(line)
    i = 0
    while i < length:
        c = line[i]
        if quotes:
            if c == QUOTE:
                if i + 1 < length and line[i + 1] == QUOTE:
                    buf.append('""')
                    i += 1
                else:
                    quotes = False
                    buf.append(c)
            else:
                buf.append(c)
        elif c == QUOTE:
            quotes = True
            buf.append(c)
        elif c == delimiter:
            fields.append(parse_field(''.join(buf)))
            buf = []
        else:
            buf.append(c)
        i += 1

    fields.append(parse_field(''.join(buf)))
    return fields


def parse_field(raw: str) -> CellValue:
    """
    Classify the raw text of one field.

    A field wrapped in quotes is always present, even when empty. An unquoted
    blank field is absent (``None``). Anything else is stripped. Stripping
    removes spaces and control characters only; NBSP and other Unicode
    whitespace count as content.

    Args:
        raw: Field text as it appeared in the record, quotes included.

    Returns:
        The field value, or ``None`` if the field is absent.
    """
    text = raw.strip(_TRIM_CHARS)
    if len(text) >= 2 and text.startswith(QUOTE) and text.endswith(QUOTE):
        return text[1:-1].replace('""', QUOTE)

    content = _unquote(text).strip(_TRIM_CHARS)
    if not content:
        return None
    return content


def _unquote(text: str) -> str:
    """Drop quote syntax from a field that is not fully wrapped in quotes."""
    out = []
    quotes = False
    length = len(text)
    i = 0
    while i < length:
        c = text[i]
        if c == QUOTE:
            if quotes and i + 1 < length and text[i + 1] == QUOTE:
                out.append(QUOTE)
                i += 1
            else:
                quotes = not quotes
        else:
            out.append(c)
        i += 1
    return ''.join(out)


def render_field(value: CellValue, delimiter: str = DEFAULT_DELIMITER) -> str:
    """
    Render a cell value as CSV field text.

    Values containing the delimiter, a line terminator or a quote are wrapped
    in quotes with inner quotes doubled. Absent values render as ``''``.

    Empty and whitespace-only strings are written unquoted, so they parse back
    as absent: they are the one case where present/absent does not survive a
    round trip. Leading and trailing spaces of other values are likewise
    trimmed on re-parse.
    """
    if value is None:
        return ''
    text = str(value)
    if delimiter in text or any(c in text for c in _SPECIAL_CHARS):
        return QUOTE + text.replace(QUOTE, '""') + QUOTE
    return text


def parse_string(content: str, delimiter: str = DEFAULT_DELIMITER) -> List[List[CellValue]]:
    """
    Parse a CSV string and return all rows.

    Args:
        content: CSV content as a string
        delimiter: Field delimiter character (default: ',')

    Returns:
        List of rows, where each row is a list of cell values.

    Raises:
        CsvValidationError: If the delimiter is invalid

    Example:
        >>> import csvtable
        >>> csvtable.parse_string('a,b\\n"x, y",')
        [['a', 'b'], ['x, y', None]]
    """
    validate_delimiter(delimiter)
    return [parse_line(record, delimiter) for record in parse_source(content)]


def count_rows(content: str) -> int:
    """Count the non-blank records in a CSV string without splitting fields."""
    return len(parse_source(content))
