"""Constants shared by the table engine and its exporters."""

# ─── Delimiters ──────────────────────────────────────────────────────────────

COMMA = ","
TAB = "\t"

# Uploaded files with this suffix are tab-separated; everything else is CSV
TSV_SUFFIX = ".tsv"


# ─── Alignment ───────────────────────────────────────────────────────────────

LEFT = "left"
CENTER = "center"
RIGHT = "right"

# Tokens accepted in the free-text alignment field, in no particular order
VALID_ALIGNMENTS = (LEFT, CENTER, RIGHT)

# Separator between tokens in the alignment field, e.g. "left, center, right"
ALIGNMENT_SEPARATOR = ","


# ─── Caption / Note ──────────────────────────────────────────────────────────

# The first "." in a caption separates the number ("Table 1") from the title
CAPTION_SEPARATOR = "."

NOTE_PREFIX = "Note. "


# ─── Placeholders & Export Names ─────────────────────────────────────────────

NO_DATA_HTML = "<p>No data found.</p>"

# Marker that every rendered table carries; exports require it
TABLE_CLASS = "apa-table"
TABLE_ID = "apaTable"

WORD_FILENAME = "APA_Table.doc"
WORD_MEDIA_TYPE = "application/msword;charset=utf-8;"
PNG_FILENAME = "APA_Table.png"
PNG_MEDIA_TYPE = "image/png"


# ─── Style Defaults ──────────────────────────────────────────────────────────

DEFAULT_FONT_FAMILY = "Times New Roman"
DEFAULT_FONT_SIZE = "12pt"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_BORDER_COLOR = "#000000"

# Font fields are frozen once data is loaded
FONT_FIELDS = ("font_family", "font_size")
