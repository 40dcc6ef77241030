"""
Overlay Layer Component

Absolute-positioned HTML boxes drawn over the rendering surface. The layer
subscribes to the OverlayManager and redraws itself whenever hover or click
rects change. It never intercepts pointer events.
"""

from nicegui import ui

from studio.engine.constants import CLICK_COLOR, HOVER_COLOR
from studio.engine.overlay import OverlayManager
from studio.models import Rect


def _box_style(rect: Rect, color: str, width: int) -> str:
    return (
        f'position: absolute; top: {rect.top}px; left: {rect.left}px; '
        f'width: {rect.width}px; height: {rect.height}px; '
        f'border: {width}px solid {color}; box-sizing: border-box; pointer-events: none;'
    )


def render_overlay_layer(overlay: OverlayManager) -> dict:
    """
    Render the overlay container and bind it to the overlay manager.

    Must be called inside the same positioned container as the webview so
    both share an origin.

    Returns:
        Dict with 'container' element and 'unsubscribe' function
    """
    container = ui.element('div').style(
        'position: absolute; inset: 0; pointer-events: none; z-index: 10; overflow: hidden;'
    )

    def redraw(_=None):
        container.clear()
        with container:
            if overlay.hover_rect is not None:
                ui.element('div').style(_box_style(overlay.hover_rect, HOVER_COLOR, 1))

            for click_rect in overlay.click_rects:
                rect = click_rect.rect
                with ui.element('div').style(_box_style(rect, CLICK_COLOR, 2)):
                    ui.label(f'{round(rect.width)} × {round(rect.height)}').style(
                        f'position: absolute; top: -18px; left: -2px; font-size: 10px; '
                        f'background: {CLICK_COLOR}; color: white; padding: 0 4px; '
                        f'border-radius: 2px; white-space: nowrap;'
                    )

    unsubscribe = overlay.subscribe(redraw)
    redraw()

    return {'container': container, 'unsubscribe': unsubscribe}
