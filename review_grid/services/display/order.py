from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple
import logging

from review_grid.core.logger import log_rejected
from review_grid.schemas.columns import DisplayColumn
from review_grid.services.filter_engine.base import ReorderRejected

logger = logging.getLogger(__name__)

VisibilityCallback = Callable[[str], Any]
ReorderCallback = Callable[[Tuple[DisplayColumn, ...]], Any]


class DisplayOrderState:
    """
    Ordered display columns with visibility flags.

    The list is always `fixed ++ sortable`. Only the sortable partition can be
    permuted, and toggling visibility never moves a column.
    """

    def __init__(
        self,
        display_columns: Iterable[DisplayColumn] = (),
        on_toggle_column_visibility: Optional[VisibilityCallback] = None,
        on_reorder_columns: Optional[ReorderCallback] = None,
    ):
        columns = list(display_columns)
        seen = set()
        for col in columns:
            if col.id in seen:
                raise ValueError(f"Duplicate display column id '{col.id}'")
            seen.add(col.id)

        fixed = [col for col in columns if col.is_fixed]
        sortable = [col for col in columns if not col.is_fixed]
        if fixed + sortable != columns:
            logger.warning("fixed display columns were interleaved, moved ahead of sortable ones")

        self._fixed: List[DisplayColumn] = fixed
        self._sortable: List[DisplayColumn] = sortable
        self.on_toggle_column_visibility = on_toggle_column_visibility
        self.on_reorder_columns = on_reorder_columns

    @property
    def columns(self) -> Tuple[DisplayColumn, ...]:
        return tuple(self._fixed + self._sortable)

    @property
    def fixed_columns(self) -> Tuple[DisplayColumn, ...]:
        return tuple(self._fixed)

    @property
    def sortable_columns(self) -> Tuple[DisplayColumn, ...]:
        return tuple(self._sortable)

    @property
    def sortable_ids(self) -> List[str]:
        return [col.id for col in self._sortable]

    @property
    def visible_columns(self) -> List[str]:
        return [col.id for col in self.columns if col.visible]

    def toggle_visibility(self, column_id: str):
        for partition in (self._fixed, self._sortable):
            for index, col in enumerate(partition):
                if col.id == column_id:
                    partition[index] = col.model_copy(update={"visible": not col.visible})
                    logger.debug(f"column '{column_id}' visible={not col.visible}")
                    if self.on_toggle_column_visibility is not None:
                        self.on_toggle_column_visibility(column_id)
                    return
        log_rejected(logger, "toggle_visibility", "unknown column", column_id=column_id)

    def set_all_visible(self, visible: bool):
        """Show or hide every sortable column; reports each column that flipped."""
        for col in list(self._sortable):
            if col.visible != visible:
                self.toggle_visibility(col.id)

    def reorder(self, new_sortable_order: Sequence[str]):
        """Replace the sortable partition's order. Anything but a permutation is ignored."""
        try:
            new_order = self._validate_permutation(new_sortable_order)
        except ReorderRejected as e:
            log_rejected(logger, "reorder", str(e), logging.WARNING, proposed=e.context)
            return

        by_id = {col.id: col for col in self._sortable}
        self._sortable = [by_id[column_id] for column_id in new_order]
        logger.info(f"sortable columns reordered: {new_order}")
        if self.on_reorder_columns is not None:
            self.on_reorder_columns(self.columns)

    def _validate_permutation(self, new_sortable_order: Sequence[str]) -> List[str]:
        current = self.sortable_ids
        try:
            proposed = list(new_sortable_order)
            unique = set(proposed)
        except TypeError as e:
            raise ReorderRejected("Order is not a list of column ids", context=str(e))
        if len(proposed) != len(current):
            raise ReorderRejected(
                "Order length differs from sortable columns",
                context={"expected": len(current), "got": len(proposed)},
            )
        if unique != set(current) or len(unique) != len(proposed):
            raise ReorderRejected(
                "Order is not a permutation of sortable columns", context=proposed
            )
        return proposed
