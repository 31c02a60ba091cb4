"""Comma-vs-tab delimiter selection.

Pasted text is classified by counting separators; uploaded files are
classified by their extension alone.
"""

import logging

from apa_table.engine.constants import COMMA, TAB, TSV_SUFFIX

logger = logging.getLogger(__name__)


def detect_delimiter(text: str) -> str:
    """Return TAB if the text holds more tabs than commas, else COMMA (ties go to comma)."""
    comma_count = text.count(COMMA)
    tab_count = text.count(TAB)
    delimiter = TAB if tab_count > comma_count else COMMA
    logger.debug("Delimiter detection: %d commas, %d tabs -> %r", comma_count, tab_count, delimiter)
    return delimiter


def delimiter_for_filename(filename: str) -> str:
    """Return TAB for ``*.tsv`` uploads and COMMA for anything else."""
    return TAB if filename.endswith(TSV_SUFFIX) else COMMA
