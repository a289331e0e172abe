import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from review_grid.core.config import get_settings
from review_grid.core.constants import (
    ALL_VALUES_LABEL,
    CONDITION_LABELS,
    SELECTED_COUNT_LABEL,
)
from review_grid.core.logger import log_rejected, logger
from review_grid.schemas.columns import FilterableColumn
from review_grid.schemas.filters import ActiveFilter, FilterCondition
from .base import ColumnRegistry
from .pending import PendingSelectionCache
from .search import SearchMixin

FiltersCallback = Callable[[Tuple[ActiveFilter, ...]], Any]
ColumnCallback = Callable[[str], Any]


def condition_label(condition: Union[FilterCondition, str]) -> str:
    """Human readable form of a condition, as shown on a filter chip."""
    return CONDITION_LABELS[FilterCondition(condition).value]


def describe_values(active_filter: ActiveFilter) -> str:
    """Value segment of a filter chip: 'All values', the single value, or a count."""
    if not active_filter.values:
        return ALL_VALUES_LABEL
    if len(active_filter.values) == 1:
        return active_filter.values[0]
    return SELECTED_COUNT_LABEL.format(count=len(active_filter.values))


class FilterEngine(SearchMixin):
    """
    Owns the Active Filter Set and the Pending Selection Cache behind the filter bar.

    Every accepted mutation ends by emitting the full ordered filter set to
    `on_filters_change` and the affected column id to `on_column_filter`.
    Operations on unknown columns or absent filters are logged and ignored;
    they leave state untouched and emit nothing.
    """

    def __init__(
        self,
        columns: Iterable[FilterableColumn] = (),
        on_filters_change: Optional[FiltersCallback] = None,
        on_column_filter: Optional[ColumnCallback] = None,
    ):
        self.registry = ColumnRegistry(columns)
        self.pending = PendingSelectionCache()
        self.on_filters_change = on_filters_change
        self.on_column_filter = on_column_filter
        self._filters: List[ActiveFilter] = []
        self._default_condition = FilterCondition(
            get_settings().DEFAULT_FILTER_CONDITION
        )

    # ─── Reads ─────────────────────────────────────────────────────────────

    @property
    def filters(self) -> Tuple[ActiveFilter, ...]:
        return tuple(self._filters)

    @property
    def has_filters(self) -> bool:
        return len(self._filters) > 0

    def get_filter(self, column_id: str) -> Optional[ActiveFilter]:
        index = self._index_of(column_id)
        return self._filters[index] if index is not None else None

    def selected_values(self, column_id: str) -> Tuple[str, ...]:
        """Current selection for a column: the active filter wins over the pending cache."""
        active = self.get_filter(column_id)
        if active is not None:
            return active.values
        return self.pending.get(column_id)

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the whole engine state."""
        return {
            "filters": [f.model_dump(mode="json") for f in self._filters],
            "pending": {k: list(v) for k, v in self.pending.snapshot().items()},
        }

    # ─── Mutations ─────────────────────────────────────────────────────────

    def toggle_value(self, column_id: str, value: str):
        """Flip `value` in the column's selection, creating the filter on first use."""
        column = self.registry.get(column_id)
        if column is None:
            log_rejected(logger, "toggle_value", "unknown column", column_id=column_id)
            return
        if value not in column.values:
            log_rejected(
                logger, "toggle_value", "value outside column domain", column_id=column_id, value=value
            )
            return

        current = self.selected_values(column_id)
        if value in current:
            selection = tuple(v for v in current if v != value)
        else:
            selection = current + (value,)

        self.pending.set(column_id, selection)

        index = self._index_of(column_id)
        if index is not None:
            self._filters[index] = self._filters[index].model_copy(
                update={"values": selection}
            )
        else:
            self._filters.append(
                ActiveFilter(
                    column_id=column.id,
                    column_header=column.header,
                    column_type=column.type,
                    condition=self._default_condition,
                    values=selection,
                )
            )
            logger.info(f"created filter on column '{column_id}'")

        self._emit(column_id)

    def set_condition(self, column_id: str, condition: Union[FilterCondition, str]):
        index = self._index_of(column_id)
        if index is None:
            log_rejected(logger, "set_condition", "no filter", column_id=column_id)
            return
        try:
            condition = FilterCondition(condition)
        except ValueError:
            log_rejected(
                logger, "set_condition", "unknown condition", logging.WARNING,
                column_id=column_id, condition=condition,
            )
            return

        self._filters[index] = self._filters[index].model_copy(
            update={"condition": condition}
        )
        self._emit(column_id)

    def remove_filter(self, column_id: str):
        index = self._index_of(column_id)
        if index is None:
            log_rejected(logger, "remove_filter", "no filter", column_id=column_id)
            return

        del self._filters[index]
        self.pending.discard(column_id)
        logger.info(f"removed filter on column '{column_id}'")
        self._emit(column_id)

    def change_column(self, old_column_id: str, new_column_id: str):
        """
        Re-target an existing filter to another column, keeping its position and
        condition. The selection is reset and header/type are re-read from the registry.
        """
        index = self._index_of(old_column_id)
        new_column = self.registry.get(new_column_id)
        if index is None or new_column is None:
            log_rejected(
                logger, "change_column", "no filter or unknown target",
                column_id=old_column_id, target=new_column_id,
            )
            return
        if new_column_id != old_column_id and self._index_of(new_column_id) is not None:
            log_rejected(
                logger, "change_column", "target already filtered",
                column_id=old_column_id, target=new_column_id,
            )
            return

        self._filters[index] = self._filters[index].model_copy(
            update={
                "column_id": new_column.id,
                "column_header": new_column.header,
                "column_type": new_column.type,
                "values": (),
            }
        )
        self.pending.move(old_column_id, new_column_id)
        logger.info(f"moved filter from '{old_column_id}' to '{new_column_id}'")
        if new_column_id == old_column_id:
            self._emit(new_column_id)
        else:
            self._emit(old_column_id, new_column_id)

    def clear_filters(self):
        if not self._filters:
            return
        removed = [f.column_id for f in self._filters]
        self._filters.clear()
        self.pending.clear()
        logger.info(f"cleared {len(removed)} filter(s)")
        self._emit(*removed)

    def set_columns(self, columns: Iterable[FilterableColumn]):
        """
        Replace the Column Registry. Filters whose column disappeared are dropped;
        the rest get their header/type copies refreshed and lose any selected
        value the column no longer offers.
        """
        registry = ColumnRegistry(columns)
        before = list(self._filters)

        kept: List[ActiveFilter] = []
        for active in self._filters:
            column = registry.get(active.column_id)
            if column is None:
                self.pending.discard(active.column_id)
                continue
            values = tuple(v for v in active.values if v in column.values)
            kept.append(
                active.model_copy(
                    update={
                        "column_header": column.header,
                        "column_type": column.type,
                        "values": values,
                    }
                )
            )

        for column_id, values in self.pending.snapshot().items():
            column = registry.get(column_id)
            if column is None:
                self.pending.discard(column_id)
            else:
                self.pending.set(column_id, tuple(v for v in values if v in column.values))

        self.registry = registry
        self._filters = kept

        if kept != before:
            changed = [f.column_id for f in before if f not in kept]
            logger.info(f"column registry replaced, {len(changed)} filter(s) affected")
            self._emit(*changed)

    # ─── Internals ─────────────────────────────────────────────────────────

    def _index_of(self, column_id: str) -> Optional[int]:
        for index, active in enumerate(self._filters):
            if active.column_id == column_id:
                return index
        return None

    def _emit(self, *column_ids: str):
        snapshot = self.filters
        if self.on_filters_change is not None:
            self.on_filters_change(snapshot)
        if self.on_column_filter is not None:
            for column_id in column_ids:
                self.on_column_filter(column_id)
