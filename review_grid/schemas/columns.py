from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class ColumnType(str, Enum):
    """
    Column kinds understood by the filter bar. The type only drives the icon
    shown next to a column; matching is identical for every type.
    """

    FILE = "file"
    TEXT = "text"
    SELECTION = "selection"
    DATE = "date"


class FilterableColumn(BaseModel):
    """
    A column the user can build a filter on.
    Supplied by the host and treated as read-only for a filtering session.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique column identifier")
    header: str = Field(..., description="Display label shown in menus and chips")
    type: ColumnType = Field(ColumnType.TEXT, description="Kind of column")
    values: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Ordered domain of values offered in the value menu. May be empty.",
    )


class DisplayColumn(BaseModel):
    """
    One entry of the table's display configuration.
    Fixed columns are pinned ahead of sortable ones and never move.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique column identifier")
    header: str = Field(..., description="Display label")
    visible: bool = Field(True, description="Whether the column is rendered")
    fixed: Optional[bool] = Field(
        False, description="Pinned column, excluded from reordering"
    )

    @property
    def is_fixed(self) -> bool:
        return bool(self.fixed)
