from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from review_grid.schemas.columns import DisplayColumn, FilterableColumn
from review_grid.schemas.filters import ActiveFilter
from review_grid.services.display.order import DisplayOrderState
from review_grid.services.display.reorder import DragDropBackend, ReorderEngine
from review_grid.services.filter_engine.service import FilterEngine
from review_grid.services.row_matcher import filter_rows
from review_grid.services.toolbar import TableToolbarState


class TableView:
    """
    Host-side wiring for a review table: keeps the rendered rows and column ids
    in step with the filter bar and display options through their callbacks.
    """

    def __init__(
        self,
        rows: Iterable[Mapping[str, Any]],
        columns: Iterable[FilterableColumn],
        display_columns: Iterable[DisplayColumn] = (),
        backend: Optional[DragDropBackend] = None,
    ):
        self.rows: List[Mapping[str, Any]] = list(rows)
        self.visible_rows: List[Mapping[str, Any]] = list(self.rows)
        self.visible_column_ids: List[str] = []
        self.changed_columns: List[str] = []

        self.filters = FilterEngine(
            columns,
            on_filters_change=self._on_filters_change,
            on_column_filter=self.changed_columns.append,
        )
        self.display = DisplayOrderState(
            display_columns,
            on_toggle_column_visibility=self._on_display_change,
            on_reorder_columns=self._on_display_change,
        )
        self.reorder = ReorderEngine(self.display, backend=backend)
        self.toolbar = TableToolbarState()
        self.visible_column_ids = self.display.visible_columns

    def set_rows(self, rows: Iterable[Mapping[str, Any]]):
        self.rows = list(rows)
        self.visible_rows = filter_rows(self.rows, self.filters.filters)

    def summary(self) -> Dict[str, Any]:
        return {
            "total_rows": len(self.rows),
            "visible_rows": len(self.visible_rows),
            "filters": len(self.filters.filters),
            "columns": list(self.visible_column_ids),
        }

    def _on_filters_change(self, active_filters: Tuple[ActiveFilter, ...]):
        self.visible_rows = filter_rows(self.rows, active_filters)

    def _on_display_change(self, _payload: Any):
        self.visible_column_ids = self.display.visible_columns
