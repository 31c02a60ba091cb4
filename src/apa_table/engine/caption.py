"""Caption and note composition."""

from apa_table.engine.constants import CAPTION_SEPARATOR
from apa_table.engine.schema import CaptionBlock, NoteBlock


def compose_caption(raw: str) -> CaptionBlock | None:
    """Split "Table 1. My Title" into number and title on the first ".".

    Further dots stay in the title ("T1. A. B" -> title "A. B").  Returns None
    when the number part is blank, even if a title was given.
    """
    if not raw:
        return None
    parts = raw.split(CAPTION_SEPARATOR)
    number = parts[0].strip()
    title = CAPTION_SEPARATOR.join(parts[1:]).strip()
    if not number:
        return None
    return CaptionBlock(number=number, title=title)


def compose_note(raw: str) -> NoteBlock | None:
    """Return the note verbatim, or None if the field is empty."""
    if not raw:
        return None
    return NoteBlock(text=raw)
