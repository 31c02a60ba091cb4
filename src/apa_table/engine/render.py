"""HTML markup synthesis for APA tables.

Output order is fixed: optional caption paragraph, the table (one header row,
then body rows), optional note paragraph.  The same inputs always produce
byte-identical markup.
"""

from html import escape

from apa_table.engine.constants import NO_DATA_HTML, NOTE_PREFIX, TABLE_CLASS, TABLE_ID
from apa_table.engine.schema import CaptionBlock, Grid, NoteBlock, StyleSpec


# ─── Style Attributes ────────────────────────────────────────────────────────


def table_style(style: StyleSpec) -> str:
    """Top-level table style; cell text inherits font and colour from here."""
    return (
        f"font-family: '{escape(style.font_family)}'; font-size: {escape(style.font_size)}; "
        f"color: {escape(style.text_color)}; --apa-border-color: {escape(style.border_color)};"
    )


def text_style(style: StyleSpec) -> str:
    """Style for the caption and note paragraphs."""
    return f"color: {escape(style.text_color)}; font-family: '{escape(style.font_family)}'; font-size: {escape(style.font_size)};"


# ─── Blocks ──────────────────────────────────────────────────────────────────


def render_caption(caption: CaptionBlock, style: StyleSpec) -> str:
    """Bold number with its trailing period, then the italic title."""
    return (
        f'<p class="apa-caption" style="{text_style(style)}">'
        f"<strong>{escape(caption.number, quote=False)}.</strong> "
        f'<span style="font-style: italic;">{escape(caption.title, quote=False)}</span>'
        "</p>"
    )


def render_note(note: NoteBlock, style: StyleSpec) -> str:
    """Note paragraph with the fixed "Note. " prefix."""
    return f'<p class="apa-note" style="{text_style(style)}">{NOTE_PREFIX}{escape(note.text, quote=False)}</p>'


def render_cell(text: str, alignment: str, tag: str) -> str:
    """Render one th/td cell; header cells also allow normal line wrapping."""
    cell_style = f"text-align: {alignment};"
    if tag == "th":
        cell_style += " white-space: normal;"
    return f'<{tag} style="{cell_style}">{escape(text, quote=False)}</{tag}>'


def render_row(cells: list[str], alignment: list[str], tag: str) -> str:
    """One table row, each cell aligned by its column."""
    return "<tr>" + "".join(render_cell(cell, alignment[i], tag) for i, cell in enumerate(cells)) + "</tr>"


def render_no_data() -> str:
    """Placeholder shown instead of a table when the input has no usable rows."""
    return NO_DATA_HTML


# ─── Table ───────────────────────────────────────────────────────────────────


def render_table(
    grid: Grid,
    alignment: list[str],
    caption: CaptionBlock | None,
    note: NoteBlock | None,
    style: StyleSpec,
) -> str:
    """Build the caption, table, and note markup.

    ``alignment`` must already be resolved to one entry per column.  Cell,
    caption, and note text is HTML-escaped, so "<" in the data appears as
    "&lt;" in the markup.
    """
    parts: list[str] = []

    if caption is not None:
        parts.append(render_caption(caption, style))

    parts.append(f'<table class="{TABLE_CLASS}" id="{TABLE_ID}" style="{table_style(style)}">')
    parts.append("<thead>" + render_row(grid.header, alignment, "th") + "</thead>")
    parts.append("<tbody>" + "".join(render_row(row, alignment, "td") for row in grid.rows) + "</tbody>")
    parts.append("</table>")

    if note is not None:
        parts.append(render_note(note, style))

    return "".join(parts)
