"""Pydantic models passed between the engine stages.

Every model is frozen: a new upload, paste, or field edit produces a new
instance rather than mutating the old one.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from apa_table.engine.constants import (
    DEFAULT_BORDER_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    TABLE_CLASS,
)


class RawInput(BaseModel):
    """Text acquired from an upload or paste, with the delimiter to split it on."""

    model_config = ConfigDict(frozen=True)

    text: str
    delimiter: str = Field(min_length=1, max_length=1)


class Grid(BaseModel):
    """Parsed table data: one header row plus body rows of the same width."""

    model_config = ConfigDict(frozen=True)

    header: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_row_widths(self) -> "Grid":
        """Ensure every body row has exactly len(header) cells."""
        n_cols = len(self.header)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching header)")
        return self

    @property
    def num_columns(self) -> int:
        return len(self.header)


class StyleSpec(BaseModel):
    """Presentation attributes applied uniformly to every rendered element.

    Values are passed through to the markup without validation.
    """

    model_config = ConfigDict(frozen=True)

    font_family: str = DEFAULT_FONT_FAMILY
    font_size: str = DEFAULT_FONT_SIZE
    text_color: str = DEFAULT_TEXT_COLOR
    border_color: str = DEFAULT_BORDER_COLOR


class CaptionBlock(BaseModel):
    """Caption split into its bold number ("Table 1") and italic title."""

    model_config = ConfigDict(frozen=True)

    number: str
    title: str = ""


class NoteBlock(BaseModel):
    """Note text shown under the table after the fixed "Note. " prefix."""

    model_config = ConfigDict(frozen=True)

    text: str


class RenderedTable(BaseModel):
    """Rendered markup plus the parts it was built from.

    ``grid`` is None when the input held no usable rows and ``markup`` is the
    no-data placeholder.
    """

    model_config = ConfigDict(frozen=True)

    markup: str
    grid: Grid | None = None
    alignment: list[str] = Field(default_factory=list)
    caption: CaptionBlock | None = None
    note: NoteBlock | None = None
    style: StyleSpec = Field(default_factory=StyleSpec)

    @property
    def has_table(self) -> bool:
        return self.grid is not None and TABLE_CLASS in self.markup


class EngineState(BaseModel):
    """Everything needed to re-render the current table.

    Callers hold the current state and hand it to each pipeline step; steps
    return a new state instead of touching shared variables.
    """

    model_config = ConfigDict(frozen=True)

    raw: RawInput | None = None
    style: StyleSpec = Field(default_factory=StyleSpec)
    caption: str = ""
    note: str = ""
    alignment: str = ""
    font_locked: bool = False
