"""Word-compatible document export.

Word opens HTML saved with a ``.doc`` extension when the Office namespaces are
declared, so the export is the rendered markup wrapped in a minimal document
shell.  The on-screen border rules come from a CSS variable Word ignores, so
explicit APA rules in the chosen border colour are substituted here.
"""

import logging

from apa_table.engine.constants import TABLE_CLASS, WORD_FILENAME
from apa_table.engine.schema import RenderedTable
from apa_table.errors import ExportPreconditionError

logger = logging.getLogger(__name__)

_DOCUMENT_TEMPLATE = """\
<html xmlns:o='urn:schemas-microsoft-com:office:office' xmlns:w='urn:schemas-microsoft-com:office:word' \
xmlns='http://www.w3.org/TR/REC-html40'>
<head><meta charset='utf-8'></head>
<body>
<style>
.apa-table {{ border-collapse: collapse; width: 100%; border: none; line-height: 1.5; color: {text_color}; }}
.apa-table th, .apa-table td {{ border: none; padding: 4px 10px; }}
.apa-table thead {{ border-top: {heavy_border}; border-bottom: {thin_border}; }}
.apa-table tbody tr:last-child {{ border-bottom: {heavy_border}; }}
.apa-caption {{ color: {text_color}; }}
.apa-caption strong {{ font-weight: bold; display: block; }}
.apa-caption span {{ font-style: italic; display: block; }}
.apa-note {{ color: {text_color}; font-style: normal; }}
</style>
{content}
</body>
</html>
"""


def border_rules(border_color: str) -> tuple[str, str]:
    """Return the (heavy, thin) border declarations for the APA top/bottom and header rules."""
    return f"2pt solid {border_color}", f"1pt solid {border_color}"


def build_word_document(markup: str, border_color: str, text_color: str) -> str:
    """Wrap table markup in a Word-compatible HTML document."""
    if TABLE_CLASS not in markup:
        raise ExportPreconditionError()
    heavy_border, thin_border = border_rules(border_color)
    return _DOCUMENT_TEMPLATE.format(
        text_color=text_color,
        heavy_border=heavy_border,
        thin_border=thin_border,
        content=markup,
    )


def export_word(rendered: RenderedTable | None) -> tuple[str, bytes]:
    """Return (filename, UTF-8 bytes) for the Word download."""
    if rendered is None or not rendered.has_table:
        raise ExportPreconditionError()
    document = build_word_document(rendered.markup, rendered.style.border_color, rendered.style.text_color)
    payload = document.encode("utf-8")
    logger.info("Built Word export %s (%d bytes)", WORD_FILENAME, len(payload))
    return WORD_FILENAME, payload
