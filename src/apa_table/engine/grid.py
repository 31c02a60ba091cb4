"""Split raw delimiter-separated text into a rectangular grid of trimmed cells.

There is no quoting support: a delimiter inside a logical field is treated as
a field separator.  Body rows whose width differs from the header are dropped
rather than padded or truncated, since hand-edited input is often ragged.
"""

import logging

from apa_table.engine.schema import Grid
from apa_table.errors import EmptyDataError

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text on newlines, dropping lines that are blank after trimming."""
    return [line for line in text.strip().split("\n") if line.strip() != ""]


def split_row(line: str, delimiter: str) -> list[str]:
    """Split one line on the literal delimiter and trim every cell."""
    return [cell.strip() for cell in line.split(delimiter)]


def parse_grid(text: str, delimiter: str) -> Grid:
    """Parse raw text into a Grid whose header (row 0) fixes the column count.

    Raises EmptyDataError if no non-blank line remains.
    """
    lines = split_lines(text)
    if not lines:
        raise EmptyDataError()

    data = [split_row(line, delimiter) for line in lines]
    header = data[0]
    num_columns = len(header)

    rows: list[list[str]] = []
    for i, row in enumerate(data[1:], start=1):
        if len(row) != num_columns:
            logger.debug("Dropping row %d: %d cells, expected %d", i, len(row), num_columns)
            continue
        rows.append(row)

    logger.debug("Parsed grid: %d columns, %d body rows (%d dropped)", num_columns, len(rows), len(data) - 1 - len(rows))
    return Grid(header=header, rows=rows)
