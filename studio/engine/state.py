"""Hovered and selected element state."""

from typing import List, Optional

from studio.models import ElementMetadata
from studio.observable import Observable


class EditorElementState(Observable):
    """Holds the hovered element and the selection, in click order."""

    def __init__(self):
        super().__init__()
        self._hovered: Optional[ElementMetadata] = None
        self._selected: List[ElementMetadata] = []

    @property
    def hovered_element(self) -> Optional[ElementMetadata]:
        return self._hovered

    @property
    def selected(self) -> List[ElementMetadata]:
        return list(self._selected)

    def set_hovered_element(self, element: ElementMetadata) -> None:
        self._hovered = element
        self._notify()

    def clear_hovered_element(self) -> None:
        self._hovered = None
        self._notify()

    def add_selected_element(self, element: ElementMetadata) -> None:
        self._selected.append(element)
        self._notify()

    def clear_selected_elements(self) -> None:
        self._selected = []
        self._notify()

    def clear(self) -> None:
        self._hovered = None
        self._selected = []
        self._notify()
