from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class RowAlignment(str, Enum):
    """Vertical alignment of cell content."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class TextLength(str, Enum):
    """Whether long cell text is summarised or shown in full."""

    CONCISE = "concise"
    EXTEND = "extend"


class ToolbarPreferences(BaseModel):
    """
    Snapshot of the table toolbar's display toggles, handed to the host on change.
    """

    model_config = ConfigDict(frozen=True)

    alignment: RowAlignment = Field(RowAlignment.CENTER, description="Cell alignment")
    text_wrap: bool = Field(False, description="Wrap text instead of overflowing")
    text_length: TextLength = Field(TextLength.CONCISE, description="Text length mode")
