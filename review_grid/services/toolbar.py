from typing import Any, Callable, Optional, Union
import logging

from review_grid.schemas.toolbar import RowAlignment, TextLength, ToolbarPreferences

logger = logging.getLogger(__name__)

PreferencesCallback = Callable[[ToolbarPreferences], Any]


class TableToolbarState:
    """Alignment, wrapping and text-length toggles of the review table toolbar."""

    def __init__(
        self,
        preferences: Optional[ToolbarPreferences] = None,
        on_preferences_change: Optional[PreferencesCallback] = None,
    ):
        self.preferences = preferences or ToolbarPreferences()
        self.on_preferences_change = on_preferences_change

    def set_alignment(self, alignment: Union[RowAlignment, str]):
        try:
            alignment = RowAlignment(alignment)
        except ValueError:
            logger.warning(f"unknown alignment '{alignment}' ignored")
            return
        self._update(alignment=alignment)

    def set_text_wrap(self, wrap: bool):
        self._update(text_wrap=bool(wrap))

    def set_text_length(self, text_length: Union[TextLength, str]):
        try:
            text_length = TextLength(text_length)
        except ValueError:
            logger.warning(f"unknown text length '{text_length}' ignored")
            return
        self._update(text_length=text_length)

    def _update(self, **changes):
        updated = self.preferences.model_copy(update=changes)
        if updated == self.preferences:
            return
        self.preferences = updated
        if self.on_preferences_change is not None:
            self.on_preferences_change(updated)
