from typing import Dict, Tuple


class PendingSelectionCache:
    """
    Working value selections keyed by column id.

    Entries exist independently of active filters so a value menu can show the
    user's picks while it is open. The filter engine keeps each entry equal to
    the matching filter's values.
    """

    def __init__(self):
        self._selections: Dict[str, Tuple[str, ...]] = {}

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._selections

    def get(self, column_id: str) -> Tuple[str, ...]:
        return self._selections.get(column_id, ())

    def set(self, column_id: str, values: Tuple[str, ...]):
        self._selections[column_id] = tuple(values)

    def discard(self, column_id: str):
        self._selections.pop(column_id, None)

    def move(self, old_column_id: str, new_column_id: str):
        """Re-key an entry, emptying it in the process."""
        self._selections.pop(old_column_id, None)
        self._selections[new_column_id] = ()

    def clear(self):
        self._selections.clear()

    def snapshot(self) -> Dict[str, Tuple[str, ...]]:
        return dict(self._selections)
