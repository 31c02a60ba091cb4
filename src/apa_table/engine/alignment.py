"""Resolve the free-text column alignment field against the grid width.

The field is typed by hand and goes stale whenever the data changes, so a
token count that does not match the column count falls back silently to the
default policy instead of failing the render.
"""

import logging

from apa_table.engine.constants import ALIGNMENT_SEPARATOR, CENTER, LEFT, VALID_ALIGNMENTS

logger = logging.getLogger(__name__)


def parse_alignment_tokens(raw: str) -> list[str]:
    """Lower-case, comma-split, and trim the field, keeping only recognised tokens in order."""
    tokens = (token.strip() for token in raw.lower().split(ALIGNMENT_SEPARATOR))
    return [token for token in tokens if token in VALID_ALIGNMENTS]


def default_alignment(num_columns: int) -> list[str]:
    """First column left, every other column centred."""
    if num_columns <= 0:
        return []
    return [LEFT] + [CENTER] * (num_columns - 1)


def resolve_alignment(raw: str, num_columns: int) -> list[str]:
    """Return exactly ``num_columns`` alignments, using the default unless the field fits."""
    tokens = parse_alignment_tokens(raw)
    if len(tokens) == num_columns:
        return tokens
    if raw.strip():
        logger.debug("Alignment spec has %d valid tokens for %d columns; using default", len(tokens), num_columns)
    return default_alignment(num_columns)
