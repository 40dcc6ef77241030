"""
Editor Engine - single entry point for everything the host UI does.

The engine coordinates:
- Interaction events from the rendering surface (mouseover, click, scroll)
- Element state and overlay geometry
- Dispatch of actions to the live page, and their undo

All methods run on the host UI's event loop. The only suspension points are
the surface queries issued by refresh_clicked_elements(); their results are
tagged with the selection epoch current at the time of the request and are
dropped if the selection has moved on by the time they arrive.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Set

from studio.actions import UPDATE_STYLE, Action
from studio.engine.code import CodeManager
from studio.engine.constants import WebviewChannels
from studio.engine.overlay import OverlayManager
from studio.engine.state import EditorElementState
from studio.engine.surface import RenderingSurface
from studio.engine.webviews import WebviewManager
from studio.history import History
from studio.models import ElementMetadata

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    DESIGN = 'Design'
    INTERACT = 'Interact'


@dataclass(frozen=True)
class HistoryApi:
    """The slice of history the host UI is allowed to drive."""
    start_transaction: Callable[[], None]
    commit_transaction: Callable[[], None]
    undo: Callable[[], None]


class EditorEngine:
    """Owns editor state and turns UI events and actions into surface updates."""

    def __init__(self, history_limit: Optional[int] = None,
                 mode: EditorMode = EditorMode.DESIGN):
        self._element_state = EditorElementState()
        self._overlay_manager = OverlayManager()
        self._webview_manager = WebviewManager()
        self._code_manager = CodeManager(self._webview_manager)
        self._history_manager = History(max_size=history_limit)
        self._editor_mode = mode
        self._selection_epoch = 0
        self._pending_refreshes: Set[asyncio.Task] = set()

    @property
    def state(self) -> EditorElementState:
        return self._element_state

    @property
    def overlay(self) -> OverlayManager:
        return self._overlay_manager

    @property
    def webviews(self) -> WebviewManager:
        return self._webview_manager

    @property
    def code(self) -> CodeManager:
        return self._code_manager

    @property
    def history(self) -> HistoryApi:
        return HistoryApi(
            start_transaction=self._start_transaction,
            commit_transaction=self._commit_transaction,
            undo=self._undo,
        )

    @property
    def mode(self) -> EditorMode:
        return self._editor_mode

    @mode.setter
    def mode(self, mode: EditorMode) -> None:
        self.clear()
        self._editor_mode = mode
        logger.info(f"Editor mode set to {mode.value}")

    # --- Actions ---

    def run_action(self, action: Action) -> None:
        """Record the action, then apply it. Recording happens even if dispatch does nothing."""
        self._history_manager.push(action)
        self.dispatch_action(action)

    def dispatch_action(self, action: Action) -> None:
        if action.type == UPDATE_STYLE:
            self._update_style(action.targets, action.style, action.change.updated)
        else:
            logger.debug(f"No dispatch handler for action type {action.type!r}")

    def _update_style(self, targets, style: str, value: str) -> None:
        for target in targets:
            webview = self.webviews.get(target.webview_id)
            if webview is None:
                logger.debug(f"Skipping style update for missing webview {target.webview_id}")
                continue

            try:
                webview.send(WebviewChannels.UPDATE_STYLE, {
                    'selector': target.selector,
                    'style': style,
                    'value': value,
                })
            except Exception as e:
                logger.warning(f"Failed to send style update to {target.webview_id}: {e}")
                continue

            self.code.apply_style(target, style, value)

    def _start_transaction(self) -> None:
        self._history_manager.start_transaction()

    def _commit_transaction(self) -> None:
        self._history_manager.commit_transaction()

    def _undo(self) -> None:
        actions = self._history_manager.undo()
        if actions is None:
            return

        for action in actions:
            self.dispatch_action(action)

    # --- Interaction events ---

    def mouseover(self, elements: List[ElementMetadata], webview: RenderingSurface) -> None:
        if not elements:
            self.overlay.remove_hover_rect()
            self.state.clear_hovered_element()
            return

        element = elements[0]
        adjusted_rect = self.overlay.adapt_rect_from_source_element(element.rect, webview)
        self.overlay.update_hover_rect(adjusted_rect)
        self.state.set_hovered_element(element)

    def click(self, elements: List[ElementMetadata], webview: RenderingSurface) -> None:
        self.overlay.remove_clicked_rects()
        self.state.clear_selected_elements()
        self._selection_epoch += 1

        for element in elements:
            adjusted_rect = self.overlay.adapt_rect_from_source_element(element.rect, webview)
            self.overlay.add_click_rect(adjusted_rect, element.computed_style)
            self.state.add_selected_element(element)

    def scroll(self, webview: RenderingSurface) -> Optional[asyncio.Future]:
        return self.refresh_clicked_elements(webview)

    def handle_style_updated(self, webview: RenderingSurface) -> Optional[asyncio.Future]:
        return self.refresh_clicked_elements(webview)

    def refresh_clicked_elements(self, webview: RenderingSurface) -> Optional[asyncio.Future]:
        """
        Re-query every selected element and rebuild the click overlay.

        Queries run concurrently, so click rects may be appended in a
        different order than the selection. Returns a future that resolves
        when all queries have settled, or None if no event loop is running.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("refresh_clicked_elements called without a running event loop")
            return None

        self.overlay.clear()
        self._selection_epoch += 1
        epoch = self._selection_epoch

        tasks = []
        for element in self.state.selected:
            task = loop.create_task(self._refresh_element(element, webview, epoch))
            self._pending_refreshes.add(task)
            task.add_done_callback(self._pending_refreshes.discard)
            tasks.append(task)

        return asyncio.gather(*tasks)

    async def _refresh_element(self, element: ElementMetadata, webview: RenderingSurface,
                               epoch: int) -> None:
        try:
            rect = await self.overlay.get_bounding_rect(element.selector, webview)
            computed_style = await self.overlay.get_computed_style(element.selector, webview)
        except Exception as e:
            logger.warning(f"Failed to refresh {element.selector} in {webview.webview_id}: {e}")
            return

        if epoch != self._selection_epoch:
            logger.debug(f"Discarding stale refresh of {element.selector} (epoch {epoch})")
            return
        if rect is None:
            return

        adjusted_rect = self.overlay.adapt_rect_from_source_element(rect, webview)
        self.overlay.add_click_rect(adjusted_rect, computed_style or {})

    # --- Lifecycle ---

    def dispose(self) -> None:
        self.clear()
        self.webviews.deregister_all()
        logger.info("Editor engine disposed")

    def clear(self) -> None:
        self.overlay.clear()
        self.state.clear()
        self._selection_epoch += 1
