"""
Loading tables from, and saving them to, files.

The table model itself never touches the filesystem; these helpers read the
whole document into memory and hand it to ``CsvTable``.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Union

from .errors import CsvValidationError
from .parser import DEFAULT_DELIMITER, validate_delimiter
from .table import CsvTable

logger = logging.getLogger(__name__)

# Maximum file size to load (default 10GB)
MAX_FILE_SIZE = 10 * 1024 * 1024 * 1024

PathLike = Union[str, os.PathLike]


def _validate_file_path(path: PathLike, max_file_size: int) -> Path:
    """
    Validate a file path before reading it.

    Checks for:
    - Missing files
    - Device files (/dev/zero, /dev/random, etc.), FIFOs and sockets
    - File size limits
    """
    file_path = Path(path)

    if not file_path.exists():
        raise CsvValidationError(f"File not found: {path}")

    # Resolve symlinks and get the real path
    real_path = file_path.resolve()

    try:
        file_stat = real_path.stat()
    except OSError as e:
        raise CsvValidationError(f"Cannot access file {path}: {e}") from e

    if stat.S_ISBLK(file_stat.st_mode) or stat.S_ISCHR(file_stat.st_mode):
        raise CsvValidationError(f"Cannot parse device file: {path}")
    if stat.S_ISFIFO(file_stat.st_mode):
        raise CsvValidationError(f"Cannot parse FIFO/pipe: {path}")
    if stat.S_ISSOCK(file_stat.st_mode):
        raise CsvValidationError(f"Cannot parse socket: {path}")
    if not stat.S_ISREG(file_stat.st_mode):
        raise CsvValidationError(f"Path is not a regular file: {path}")

    if file_stat.st_size > max_file_size:
        raise CsvValidationError(
            f"File too large: {file_stat.st_size} bytes "
            f"(max {max_file_size} bytes). "
            f"Increase max_file_size if this is intentional."
        )

    return real_path


def parse_file(
    path: PathLike,
    delimiter: str = DEFAULT_DELIMITER,
    *,
    encoding: str = 'utf-8',
    max_file_size: int = MAX_FILE_SIZE,
    validate_path: bool = True,
) -> CsvTable:
    """
    Read a CSV file into a table.

    Args:
        path: Path to the CSV file
        delimiter: Field delimiter character (default: ',')
        encoding: Text encoding of the file
        max_file_size: Largest file size accepted, in bytes
        validate_path: If True (default), validates the file path first.
                      Set to False only if you've already validated the path.

    Returns:
        The parsed ``CsvTable``.

    Raises:
        CsvValidationError: If the delimiter or the path is rejected
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid in ``encoding``
    """
    validate_delimiter(delimiter)
    if validate_path:
        path = _validate_file_path(path, max_file_size)

    # newline='' keeps \r\n and bare \r for the parser to interpret
    with open(path, 'r', encoding=encoding, newline='') as f:
        content = f.read()

    table = CsvTable(content, delimiter)
    logger.debug(
        "Loaded %s: %d characters, %d rows", path, len(content), table.row_count
    )
    return table


def write_file(table: CsvTable, path: PathLike, *, encoding: str = 'utf-8') -> None:
    """
    Write ``table.to_string()`` to ``path``.

    The file is written to a temporary sibling first and then moved into
    place, so readers never see a partial file. Parent directories are
    created as needed.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(f"{target.name}.tmp")

    content = table.to_string()
    try:
        with open(tmp, 'w', encoding=encoding, newline='') as f:
            f.write(content)
        os.replace(tmp, target)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %s: %d characters", target, len(content))
