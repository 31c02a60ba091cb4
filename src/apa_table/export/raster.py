"""PNG export of a rendered APA table.

Draws the table with Pillow from the parts a RenderedTable was built from:
caption (bold number line, italic title line), the three APA rules (heavy top,
thin under the header, heavy bottom) in the border colour, aligned cells, and
the note.  The image is drawn at 2x on a white background.
"""

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from apa_table.config import get_settings
from apa_table.engine.constants import CENTER, NOTE_PREFIX, PNG_FILENAME, RIGHT
from apa_table.engine.schema import RenderedTable
from apa_table.errors import ExportPreconditionError, ExportTransportError

logger = logging.getLogger(__name__)

BACKGROUND = "#ffffff"
DEFAULT_SCALE = 2

# CSS px per pt
_PX_PER_PT = 96 / 72
_FONT_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(pt|px)?\s*$", re.IGNORECASE)
_DEFAULT_FONT_PX = 16

# Font files tried per family and face; Pillow also searches the system font directories
_SERIF_FILES = {
    "regular": ["LiberationSerif-Regular.ttf", "DejaVuSerif.ttf"],
    "bold": ["LiberationSerif-Bold.ttf", "DejaVuSerif-Bold.ttf"],
    "italic": ["LiberationSerif-Italic.ttf", "DejaVuSerif-Italic.ttf"],
}
_SANS_FILES = {
    "regular": ["LiberationSans-Regular.ttf", "DejaVuSans.ttf"],
    "bold": ["LiberationSans-Bold.ttf", "DejaVuSans-Bold.ttf"],
    "italic": ["LiberationSans-Italic.ttf", "DejaVuSans-Oblique.ttf"],
}
_FAMILY_FILES = {
    "times new roman": {"regular": ["times.ttf"], "bold": ["timesbd.ttf"], "italic": ["timesi.ttf"]},
    "arial": {"regular": ["arial.ttf"], "bold": ["arialbd.ttf"], "italic": ["ariali.ttf"]},
    "calibri": {"regular": ["calibri.ttf", "Carlito-Regular.ttf"], "bold": ["calibrib.ttf", "Carlito-Bold.ttf"],
                "italic": ["calibrii.ttf", "Carlito-Italic.ttf"]},
    "georgia": {"regular": ["georgia.ttf"], "bold": ["georgiab.ttf"], "italic": ["georgiai.ttf"]},
}
_SERIF_FAMILIES = ("times new roman", "georgia", "serif")


@dataclass
class RasterLayout:
    """Spacing in CSS pixels, multiplied by the scale before drawing."""

    margin: int = 12
    pad_x: int = 10
    pad_y: int = 4
    block_gap: int = 8
    heavy_rule: int = 2
    thin_rule: int = 1


# ─── Style Helpers ───────────────────────────────────────────────────────────


def font_size_px(font_size: str) -> float:
    """Convert a CSS size token such as "12pt" or "16px" to pixels (default 16px)."""
    match = _FONT_SIZE_RE.match(font_size or "")
    if not match:
        logger.debug("Unrecognised font size %r; using %dpx", font_size, _DEFAULT_FONT_PX)
        return _DEFAULT_FONT_PX
    value = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    return value * _PX_PER_PT if unit == "pt" else value


def parse_color(color: str, fallback: str = "#000000") -> tuple[int, int, int]:
    """Parse a CSS colour, falling back to black for anything Pillow cannot read."""
    try:
        return ImageColor.getrgb(color)[:3]
    except (ValueError, AttributeError):
        logger.debug("Unrecognised colour %r; using %s", color, fallback)
        return ImageColor.getrgb(fallback)[:3]


def font_candidates(family: str, face: str) -> list[str]:
    """Font file names to try for a family and face ("regular", "bold", "italic")."""
    key = family.strip().strip("'\"").lower()
    generic = _SERIF_FILES if key in _SERIF_FAMILIES else _SANS_FILES
    names = list(_FAMILY_FILES.get(key, {}).get(face, [])) + generic[face]
    font_dir = get_settings().font_dir
    if font_dir is not None:
        names = [str(Path(font_dir) / name) for name in names] + names
    return names


def load_font(family: str, face: str, size: int):
    """Load the first available TrueType font for the family, else Pillow's default font."""
    for name in font_candidates(family, face):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    logger.debug("No TrueType font found for %r (%s); using Pillow default", family, face)
    return ImageFont.load_default(size=size)


# ─── Measurement ─────────────────────────────────────────────────────────────


def _text_width(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    if not text:
        return 0
    x0, _, x1, _ = draw.textbbox((0, 0), text, font=font)
    return int(x1 - x0)


def _line_height(draw: ImageDraw.ImageDraw, font) -> int:
    _, y0, _, y1 = draw.textbbox((0, 0), "Ag", font=font)
    return int(y1 - y0) + 2


def _aligned_x(x: int, width: int, text_width: int, alignment: str, pad_x: int) -> int:
    """Left edge for text inside a cell starting at x with the given width."""
    if alignment == CENTER:
        return x + (width - text_width) // 2
    if alignment == RIGHT:
        return x + width - pad_x - text_width
    return x + pad_x


# ─── Rendering ───────────────────────────────────────────────────────────────


def rasterize_table(rendered: RenderedTable | None, scale: int = DEFAULT_SCALE, layout: RasterLayout | None = None) -> Image.Image:
    """Draw the rendered table as an RGB image at ``scale`` times CSS size."""
    if rendered is None or not rendered.has_table:
        raise ExportPreconditionError()
    layout = layout or RasterLayout()
    grid = rendered.grid
    style = rendered.style

    size = max(1, round(font_size_px(style.font_size) * scale))
    regular = load_font(style.font_family, "regular", size)
    bold = load_font(style.font_family, "bold", size)
    italic = load_font(style.font_family, "italic", size)
    text_rgb = parse_color(style.text_color)
    border_rgb = parse_color(style.border_color)

    margin = layout.margin * scale
    pad_x = layout.pad_x * scale
    pad_y = layout.pad_y * scale
    gap = layout.block_gap * scale
    heavy = max(1, layout.heavy_rule * scale)
    thin = max(1, layout.thin_rule * scale)

    # Measure on a throwaway canvas
    mdraw = ImageDraw.Draw(Image.new("RGB", (4, 4), BACKGROUND))
    line_h = _line_height(mdraw, regular)
    row_h = line_h + pad_y * 2

    col_widths = []
    for j in range(grid.num_columns):
        widest = _text_width(mdraw, grid.header[j], regular)
        for row in grid.rows:
            widest = max(widest, _text_width(mdraw, row[j], regular))
        col_widths.append(widest + pad_x * 2)
    table_w = sum(col_widths)

    caption_lines: list[tuple[str, object]] = []
    if rendered.caption is not None:
        caption_lines.append((f"{rendered.caption.number}.", bold))
        if rendered.caption.title:
            caption_lines.append((rendered.caption.title, italic))
    note_text = f"{NOTE_PREFIX}{rendered.note.text}" if rendered.note is not None else ""
    note_lines = note_text.split("\n") if note_text else []

    content_w = max(
        [table_w] + [_text_width(mdraw, line, regular) for line in note_lines] + [_text_width(mdraw, text, font) for text, font in caption_lines]
    )
    caption_h = len(caption_lines) * line_h + (gap if caption_lines else 0)
    table_h = heavy + row_h + thin + row_h * len(grid.rows) + heavy
    note_h = gap + line_h * len(note_lines) if note_lines else 0
    img_w = int(margin * 2 + content_w)
    img_h = int(margin * 2 + caption_h + table_h + note_h)

    image = Image.new("RGB", (img_w, img_h), BACKGROUND)
    draw = ImageDraw.Draw(image)

    y = margin
    for text, font in caption_lines:
        draw.text((margin, y), text, font=font, fill=text_rgb)
        y += line_h
    if caption_lines:
        y += gap

    # Heavy rule above the header
    draw.rectangle([margin, y, margin + table_w - 1, y + heavy - 1], fill=border_rgb)
    y += heavy

    def draw_row(cells: list[str], top: int) -> None:
        x = margin
        for j, cell in enumerate(cells):
            width = col_widths[j]
            tx = _aligned_x(x, width, _text_width(draw, cell, regular), rendered.alignment[j], pad_x)
            draw.text((tx, top + pad_y), cell, font=regular, fill=text_rgb)
            x += width

    draw_row(grid.header, y)
    y += row_h

    # Thin rule under the header
    draw.rectangle([margin, y, margin + table_w - 1, y + thin - 1], fill=border_rgb)
    y += thin

    for row in grid.rows:
        draw_row(row, y)
        y += row_h

    # Heavy rule closing the table
    draw.rectangle([margin, y, margin + table_w - 1, y + heavy - 1], fill=border_rgb)
    y += heavy

    if note_lines:
        y += gap
        for line in note_lines:
            draw.text((margin, y), line, font=regular, fill=text_rgb)
            y += line_h

    return image


def export_png(rendered: RenderedTable | None, scale: int = DEFAULT_SCALE) -> tuple[str, bytes]:
    """Return (filename, PNG bytes) for download or a clipboard hand-off."""
    if rendered is None or not rendered.has_table:
        raise ExportPreconditionError()
    try:
        image = rasterize_table(rendered, scale=scale)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        logger.error("PNG rasterisation failed: %s", exc)
        raise ExportTransportError(f"Failed to render table image: {exc}") from exc
    payload = buffer.getvalue()
    logger.info("Built PNG export %s (%dx%d, %d bytes)", PNG_FILENAME, image.width, image.height, len(payload))
    return PNG_FILENAME, payload
