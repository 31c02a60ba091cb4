"""Acquisition helpers, state transitions, and the recompute() entry point.

The host (web UI) holds an EngineState and calls:

  acquire_raw_text / acquire_file  -- turn pasted text or an upload into RawInput
  load_data                        -- install new data (locks the font controls)
  apply_change                     -- record an edit to one input field
  recompute                        -- re-render from scratch after any change

Nothing here performs I/O or keeps state between calls.
"""

import logging

from apa_table.engine.alignment import resolve_alignment
from apa_table.engine.caption import compose_caption, compose_note
from apa_table.engine.constants import FONT_FIELDS
from apa_table.engine.delimiter import delimiter_for_filename, detect_delimiter
from apa_table.engine.grid import parse_grid
from apa_table.engine.render import render_no_data, render_table
from apa_table.engine.schema import EngineState, RawInput, RenderedTable, StyleSpec
from apa_table.errors import AcquisitionError, EmptyDataError

logger = logging.getLogger(__name__)

# Fields stored on the StyleSpec vs. directly on the EngineState
STYLE_FIELDS = ("font_family", "font_size", "text_color", "border_color")
TEXT_FIELDS = ("caption", "note", "alignment")


# ─── Acquisition ─────────────────────────────────────────────────────────────


def acquire_raw_text(text: str) -> RawInput | None:
    """Wrap pasted text with its detected delimiter; None for blank text (no-op)."""
    if not text.strip():
        logger.debug("Ignoring blank pasted text")
        return None
    return RawInput(text=text, delimiter=detect_delimiter(text))


def acquire_file(filename: str, content: bytes, encoding: str = "utf-8") -> RawInput:
    """Decode an uploaded file; the delimiter comes from the extension, not the content."""
    codec = "utf-8-sig" if encoding.lower().replace("_", "-") in ("utf-8", "utf8") else encoding
    try:
        text = content.decode(codec)
    except (UnicodeDecodeError, LookupError) as exc:
        logger.error("Could not decode %s as %s: %s", filename, encoding, exc)
        raise AcquisitionError(source=filename) from exc
    logger.info("Read %s (%d bytes)", filename, len(content))
    return RawInput(text=text, delimiter=delimiter_for_filename(filename))


# ─── State Transitions ───────────────────────────────────────────────────────


def load_data(state: EngineState, raw: RawInput) -> EngineState:
    """Replace the current data wholesale and lock the font controls."""
    return state.model_copy(update={"raw": raw, "font_locked": True})


def apply_change(state: EngineState, field: str, value: str) -> EngineState:
    """Return a new state with one input field updated.

    Font edits are ignored once data is loaded (the state is returned as-is).
    """
    if field in FONT_FIELDS and state.font_locked:
        logger.debug("Font controls locked; ignoring change to %s", field)
        return state
    if field in STYLE_FIELDS:
        return state.model_copy(update={"style": state.style.model_copy(update={field: value})})
    if field in TEXT_FIELDS:
        return state.model_copy(update={field: value})
    raise ValueError(f"Unknown input field: {field}")


# ─── Rendering ───────────────────────────────────────────────────────────────


def generate_table(
    raw_text: str,
    delimiter: str,
    *,
    caption: str = "",
    note: str = "",
    alignment: str = "",
    style: StyleSpec | None = None,
) -> RenderedTable:
    """Run parse -> resolve -> compose -> render on one self-contained input bundle."""
    style = style or StyleSpec()
    try:
        grid = parse_grid(raw_text, delimiter)
    except EmptyDataError:
        logger.debug("No usable rows; rendering placeholder")
        return RenderedTable(markup=render_no_data(), style=style)

    effective_alignment = resolve_alignment(alignment, grid.num_columns)
    caption_block = compose_caption(caption)
    note_block = compose_note(note)
    markup = render_table(grid, effective_alignment, caption_block, note_block, style)
    return RenderedTable(
        markup=markup,
        grid=grid,
        alignment=effective_alignment,
        caption=caption_block,
        note=note_block,
        style=style,
    )


def recompute(state: EngineState, changed_field: str | None = None) -> RenderedTable | None:
    """Re-render the current table from scratch.

    Returns None when there is nothing to draw: no data loaded yet, or the
    change was to a locked font control.
    """
    if changed_field in FONT_FIELDS and state.font_locked:
        return None
    if state.raw is None or not state.raw.text:
        return None
    return generate_table(
        state.raw.text,
        state.raw.delimiter,
        caption=state.caption,
        note=state.note,
        alignment=state.alignment,
        style=state.style,
    )
