"""
Drag and keyboard reordering of the sortable display columns.

The pointer/keyboard mechanics live behind `DragDropBackend` so the engine can
be driven by any sensor library, or by a fake in tests. Intermediate drag
positions only update the gesture; committed order changes exactly once, when
the gesture ends over a different column.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, NamedTuple, Optional, Sequence, TypeVar
import logging
import math

from review_grid.core.config import get_settings
from .order import DisplayOrderState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)


def array_move(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Remove the element at `from_index` and insert it at `to_index`."""
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


class DragDropBackend(ABC):
    """Capability consumed by the reorder engine."""

    @abstractmethod
    def detect_target(self, pointer: Point, targets: Mapping[str, Rect]) -> Optional[str]:
        """Return the id of the drop target under `pointer`, or None."""

    @abstractmethod
    def move_within_list(self, items: Sequence[T], from_index: int, to_index: int) -> List[T]:
        """Return a copy of `items` with one element moved."""


class ClosestCenterBackend(DragDropBackend):
    """Picks the target whose centre is nearest the pointer; ties go to the earlier target."""

    def detect_target(self, pointer: Point, targets: Mapping[str, Rect]) -> Optional[str]:
        best_id, best_distance = None, math.inf
        for target_id, rect in targets.items():
            center = rect.center
            distance = math.hypot(pointer[0] - center.x, pointer[1] - center.y)
            if distance < best_distance:
                best_id, best_distance = target_id, distance
        return best_id

    def move_within_list(self, items: Sequence[T], from_index: int, to_index: int) -> List[T]:
        return array_move(items, from_index, to_index)


@dataclass
class DragGesture:
    """In-flight gesture. Purely visual until it ends."""

    active_id: str
    source: str  # "pointer" | "keyboard"
    origin: Optional[Point] = None
    over_id: Optional[str] = None
    activated: bool = False


class ReorderEngine:
    """Turns completed drag or keyboard gestures into `DisplayOrderState.reorder` calls."""

    def __init__(
        self,
        display: DisplayOrderState,
        backend: Optional[DragDropBackend] = None,
        activation_distance: Optional[float] = None,
        keyboard_enabled: Optional[bool] = None,
    ):
        settings = get_settings()
        self.display = display
        self.backend = backend or ClosestCenterBackend()
        self.activation_distance = (
            settings.DRAG_ACTIVATION_DISTANCE
            if activation_distance is None
            else activation_distance
        )
        self.keyboard_enabled = (
            settings.KEYBOARD_REORDER_ENABLED if keyboard_enabled is None else keyboard_enabled
        )
        self.gesture: Optional[DragGesture] = None

    @property
    def is_dragging(self) -> bool:
        return self.gesture is not None and self.gesture.activated

    def _can_start(self, column_id: str) -> bool:
        if self.gesture is not None:
            logger.debug(f"gesture already in progress, ignoring start on '{column_id}'")
            return False
        if column_id not in self.display.sortable_ids:
            logger.debug(f"'{column_id}' is not a sortable column")
            return False
        return True

    # ─── Pointer ───────────────────────────────────────────────────────────

    def pointer_down(self, column_id: str, pointer: Point):
        if self._can_start(column_id):
            self.gesture = DragGesture(
                active_id=column_id, source="pointer", origin=Point(*pointer)
            )

    def pointer_move(self, pointer: Point, targets: Mapping[str, Rect]):
        gesture = self.gesture
        if gesture is None or gesture.source != "pointer":
            return
        if not gesture.activated:
            travelled = math.hypot(
                pointer[0] - gesture.origin.x, pointer[1] - gesture.origin.y
            )
            if travelled < self.activation_distance:
                return
            gesture.activated = True
            logger.debug(f"drag started on '{gesture.active_id}'")

        sortable = set(self.display.sortable_ids)
        candidates = {k: v for k, v in targets.items() if k in sortable}
        gesture.over_id = self.backend.detect_target(Point(*pointer), candidates)

    def pointer_up(self):
        gesture = self.gesture
        if gesture is None or gesture.source != "pointer":
            return
        self.gesture = None
        if not gesture.activated:
            # Released before the activation distance: a click, not a drag
            return
        self.commit(gesture.active_id, gesture.over_id)

    # ─── Keyboard ──────────────────────────────────────────────────────────

    def key_pick_up(self, column_id: str):
        if not self.keyboard_enabled:
            return
        if self._can_start(column_id):
            self.gesture = DragGesture(
                active_id=column_id, source="keyboard", over_id=column_id, activated=True
            )

    def key_move(self, step: int):
        gesture = self.gesture
        if gesture is None or gesture.source != "keyboard" or step == 0:
            return
        ids = self.display.sortable_ids
        if gesture.over_id not in ids:
            return
        index = ids.index(gesture.over_id) + step
        gesture.over_id = ids[max(0, min(index, len(ids) - 1))]

    def key_drop(self):
        gesture = self.gesture
        if gesture is None or gesture.source != "keyboard":
            return
        self.gesture = None
        self.commit(gesture.active_id, gesture.over_id)

    # ─── Shared ────────────────────────────────────────────────────────────

    def cancel(self):
        if self.gesture is not None:
            logger.debug(f"gesture on '{self.gesture.active_id}' cancelled")
        self.gesture = None

    def commit(self, active_id: str, over_id: Optional[str]) -> bool:
        """
        Apply a finished gesture. Returns True if the display order changed.
        Dropping onto nothing or onto the dragged column itself is a no-op.
        """
        if over_id is None or active_id == over_id:
            return False
        ids = self.display.sortable_ids
        if active_id not in ids or over_id not in ids:
            logger.debug(f"commit ignored, '{active_id}' -> '{over_id}' not sortable")
            return False

        new_order = self.backend.move_within_list(ids, ids.index(active_id), ids.index(over_id))
        self.display.reorder(new_order)
        return True
