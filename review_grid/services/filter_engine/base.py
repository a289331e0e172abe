from typing import Any, Dict, Iterable, Iterator, List, Optional

from review_grid.schemas.columns import FilterableColumn


class FilterEngineError(Exception):
    """Raised internally when an operation targets an invalid engine state."""

    def __init__(self, message: str, context: Any = None):
        if context:
            super().__init__(f"{message} (Context: {context})")
        else:
            super().__init__(message)
        self.context = context


class ReorderRejected(FilterEngineError):
    """Raised when a proposed column order is not a permutation of the current one."""


class ColumnRegistry:
    """Read-only lookup over the filterable columns supplied by the host."""

    def __init__(self, columns: Iterable[FilterableColumn] = ()):
        self._columns: List[FilterableColumn] = list(columns)
        self._by_id: Dict[str, FilterableColumn] = {}
        for column in self._columns:
            if column.id in self._by_id:
                raise ValueError(f"Duplicate filterable column id '{column.id}'")
            self._by_id[column.id] = column

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._by_id

    def __iter__(self) -> Iterator[FilterableColumn]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def get(self, column_id: str) -> Optional[FilterableColumn]:
        return self._by_id.get(column_id)

    @property
    def columns(self) -> List[FilterableColumn]:
        return list(self._columns)
