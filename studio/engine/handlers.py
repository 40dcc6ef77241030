"""
Editor Handlers - Event handlers wiring the NiceGUI page to the EditorEngine

This module keeps the bridge-event plumbing out of app.py so the main
application file stays focused on layout.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from nicegui import ui

from studio.actions import Change, UpdateStyleAction
from studio.engine.constants import (
    EVENT_CLICK,
    EVENT_MOUSEOVER,
    EVENT_SCROLL,
    EVENT_STYLE_UPDATED,
)
from studio.engine.code import CodeManager
from studio.engine.engine import EditorEngine, EditorMode
from studio.models import ActionTarget, ElementMetadata

logger = logging.getLogger(__name__)


def parse_elements(payload: Any) -> List[ElementMetadata]:
    """Turn a bridge payload ({'elements': [...]}, or a bare list) into element snapshots."""
    if isinstance(payload, dict):
        raw = payload.get('elements', [])
    elif isinstance(payload, (list, tuple)):
        raw = payload
    else:
        return []
    return [ElementMetadata.from_dict(item) for item in raw if isinstance(item, dict)]


def current_style_value(code: CodeManager, element: ElementMetadata, style: str) -> str:
    """
    Value of a style property as currently applied to an element.

    Overrides already dispatched by the engine win over the click-time
    snapshot, which goes stale after the first edit.
    """
    overrides = code.get_overrides(element.webview_id).get(element.selector, {})
    if style in overrides:
        return overrides[style]
    return element.computed_style.get(style, '')


def build_style_actions(elements: List[ElementMetadata], style: str, value: str,
                        code: CodeManager) -> List[UpdateStyleAction]:
    """
    Build the update-style actions that set `value` on every selected element.

    Targets are grouped by their current value so that undo restores each
    element to its own original. One action per group, in selection order.
    """
    groups: Dict[str, List[ActionTarget]] = {}
    for el in elements:
        original = current_style_value(code, el, style)
        groups.setdefault(original, []).append(ActionTarget.from_element(el))

    return [
        UpdateStyleAction(targets=tuple(targets), style=style,
                          change=Change(updated=value, original=original))
        for original, targets in groups.items()
    ]


def setup_editor_handlers(engine: EditorEngine, on_selection_change: Optional[Callable] = None):
    """
    Set up all editor event handlers.

    Args:
        engine: EditorEngine instance with its webviews registered
        on_selection_change: Called after a click or Escape changes the selection

    Returns:
        Dict with handler functions for binding to UI events
    """

    def _webview_for(payload: Any):
        webview_id = payload.get('webviewId') if isinstance(payload, dict) else None
        webview = engine.webviews.get(webview_id) if webview_id else None
        if webview is None:
            logger.debug(f"Ignoring event from unknown webview {webview_id}")
        return webview

    def handle_mouseover(event):
        """Update the hover overlay from a bridge mouseover."""
        if engine.mode is not EditorMode.DESIGN:
            return
        payload = event.args if hasattr(event, 'args') else event
        webview = _webview_for(payload)
        if webview is None:
            return
        engine.mouseover(parse_elements(payload), webview)

    def handle_click(event):
        """Replace the selection from a bridge click."""
        if engine.mode is not EditorMode.DESIGN:
            return
        payload = event.args if hasattr(event, 'args') else event
        webview = _webview_for(payload)
        if webview is None:
            return
        engine.click(parse_elements(payload), webview)
        if on_selection_change:
            on_selection_change()

    async def handle_scroll(event):
        payload = event.args if hasattr(event, 'args') else event
        webview = _webview_for(payload)
        if webview is None:
            return
        pending = engine.scroll(webview)
        if pending is not None:
            await pending

    async def handle_style_updated(event):
        payload = event.args if hasattr(event, 'args') else event
        webview = _webview_for(payload)
        if webview is None:
            return
        pending = engine.handle_style_updated(webview)
        if pending is not None:
            await pending

    def _clear_surface_selections():
        for webview in engine.webviews.get_all():
            if hasattr(webview, 'clear_selection'):
                webview.clear_selection()

    def handle_keyboard(e):
        """Ctrl/Cmd+Z undoes, Escape drops the selection."""
        if not e.action.keydown:
            return
        if e.key == 'z' and (e.modifiers.ctrl or e.modifiers.meta):
            engine.history.undo()
        elif e.key == 'Escape':
            engine.clear()
            _clear_surface_selections()
            if on_selection_change:
                on_selection_change()

    # True between begin_style_edit and end_style_edit
    edit = {'open': False}

    def apply_style(style: str, value: str):
        """Apply a style value to every selected element."""
        actions = build_style_actions(engine.state.selected, style, value, engine.code)
        if not actions:
            return
        # A mixed selection becomes several actions; keep them one undo step
        batch = len(actions) > 1 and not edit['open']
        if batch:
            engine.history.start_transaction()
        try:
            for action in actions:
                engine.run_action(action)
        except Exception as e:
            logger.error(f"Style update failed: {e}")
            ui.notify(f'Style update failed: {e}', type='negative', position='bottom')
        finally:
            if batch:
                engine.history.commit_transaction()

    def begin_style_edit():
        """Group the keystrokes of one edit into a single undo step."""
        edit['open'] = True
        engine.history.start_transaction()

    def end_style_edit():
        edit['open'] = False
        engine.history.commit_transaction()

    def set_mode(mode: EditorMode):
        engine.mode = mode
        for webview in engine.webviews.get_all():
            if hasattr(webview, 'set_design_mode'):
                webview.set_design_mode(mode is EditorMode.DESIGN)
        ui.notify(f'{mode.value} mode', position='bottom', timeout=500, color='info')

    ui.on(EVENT_MOUSEOVER, handle_mouseover)
    ui.on(EVENT_CLICK, handle_click)
    ui.on(EVENT_SCROLL, handle_scroll)
    ui.on(EVENT_STYLE_UPDATED, handle_style_updated)

    return {
        'handle_mouseover': handle_mouseover,
        'handle_click': handle_click,
        'handle_scroll': handle_scroll,
        'handle_style_updated': handle_style_updated,
        'handle_keyboard': handle_keyboard,
        'apply_style': apply_style,
        'begin_style_edit': begin_style_edit,
        'end_style_edit': end_style_edit,
        'set_mode': set_mode,
    }
