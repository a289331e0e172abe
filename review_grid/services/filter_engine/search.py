from typing import Iterable

from review_grid.core.constants import NO_COLUMNS_FOUND, NO_VALUES_FOUND
from review_grid.schemas.columns import FilterableColumn
from review_grid.schemas.filters import SearchResult


def _contains(text: str, query: str) -> bool:
    return query.lower() in text.lower()


def search_columns(columns: Iterable[FilterableColumn], query: str = "") -> SearchResult:
    """
    Case-insensitive substring match on column headers.
    An empty query returns every column in its original order.
    """
    query = query or ""
    items = tuple(col for col in columns if _contains(col.header, query))
    return SearchResult(query=query, items=items, empty_message=NO_COLUMNS_FOUND)


def search_values(column: FilterableColumn, query: str = "") -> SearchResult:
    """Case-insensitive substring match over one column's value domain."""
    query = query or ""
    items = tuple(value for value in column.values if _contains(value, query))
    return SearchResult(query=query, items=items, empty_message=NO_VALUES_FOUND)


class SearchMixin:
    """Column and value search bound to the engine's registry."""

    def search_columns(self, query: str = "") -> SearchResult:
        return search_columns(self.registry, query)

    def search_values(self, column_id: str, query: str = "") -> SearchResult:
        column = self.registry.get(column_id)
        if column is None:
            return SearchResult(query=query or "", empty_message=NO_VALUES_FOUND)
        return search_values(column, query)
