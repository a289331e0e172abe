from enum import Enum
from typing import Generic, Tuple, TypeVar
from pydantic import BaseModel, ConfigDict, Field

from .columns import ColumnType

T = TypeVar("T")


class FilterCondition(str, Enum):
    """How the selected values of a filter constrain a row."""

    IS_ANY_OF = "is_any_of"
    IS_NONE_OF = "is_none_of"


class ActiveFilter(BaseModel):
    """
    A committed filter on one column.

    `column_header` and `column_type` are copies taken from the Column Registry
    when the filter is created or re-targeted; they are not live references.
    An empty `values` tuple places no constraint on rows.
    """

    model_config = ConfigDict(frozen=True)

    column_id: str = Field(..., description="Id of the filtered column")
    column_header: str = Field(..., description="Header copied from the column")
    column_type: ColumnType = Field(..., description="Type copied from the column")
    condition: FilterCondition = Field(
        FilterCondition.IS_ANY_OF, description="Inclusion or exclusion of values"
    )
    values: Tuple[str, ...] = Field(
        default_factory=tuple, description="Selected values, in selection order"
    )


class SearchResult(BaseModel, Generic[T]):
    """
    Result of a case-insensitive substring search over columns or values.
    An empty result is reported through `no_results`, never raised.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    items: Tuple[T, ...] = ()
    empty_message: str = Field("", description="Text shown when nothing matched")

    @property
    def no_results(self) -> bool:
        return len(self.items) == 0
