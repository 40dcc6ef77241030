"""
Overlay Manager - visual projection of hover and selection.

The overlay lives in the host UI's coordinate space. Geometry reported by a
rendering surface is in the surface's own space and MUST go through
adapt_rect_from_source_element() before it is stored here.

The query helpers (get_bounding_rect / get_computed_style) ask the surface
directly. Their answers may be stale by the time they arrive: the page can
change between the request and the response.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from studio.engine.surface import RenderingSurface, SurfacePlacement
from studio.models import Rect
from studio.observable import Observable

logger = logging.getLogger(__name__)

# Query scripts evaluated inside the surface. {selector} is a JSON string literal.
BOUNDING_RECT_SCRIPT = '''(() => {{
    const el = document.querySelector({selector});
    if (!el) return null;
    const r = el.getBoundingClientRect();
    return {{top: r.top, left: r.left, width: r.width, height: r.height}};
}})()'''

COMPUTED_STYLE_SCRIPT = '''(() => {{
    const el = document.querySelector({selector});
    if (!el) return null;
    const style = window.getComputedStyle(el);
    const result = {{}};
    for (let i = 0; i < style.length; i++) {{
        const name = style[i];
        result[name] = style.getPropertyValue(name);
    }}
    return result;
}})()'''


def adapt_rect(rect: Rect, placement: SurfacePlacement) -> Rect:
    """Map a rect from surface space into host-UI space."""
    return Rect(
        top=placement.top + rect.top * placement.scale,
        left=placement.left + rect.left * placement.scale,
        width=rect.width * placement.scale,
        height=rect.height * placement.scale,
    )


@dataclass
class ClickRect:
    """One selection box with the style snapshot it was drawn from."""
    rect: Rect
    computed_style: Dict[str, str] = field(default_factory=dict)


class OverlayManager(Observable):
    """Stores the hover rect and the per-selection click rects."""

    def __init__(self):
        super().__init__()
        self._hover_rect: Optional[Rect] = None
        self._click_rects: List[ClickRect] = []

    @property
    def hover_rect(self) -> Optional[Rect]:
        return self._hover_rect

    @property
    def click_rects(self) -> List[ClickRect]:
        return list(self._click_rects)

    def adapt_rect_from_source_element(self, rect: Rect, webview: RenderingSurface) -> Rect:
        return adapt_rect(rect, webview.placement)

    def update_hover_rect(self, rect: Rect) -> None:
        self._hover_rect = rect
        self._notify()

    def remove_hover_rect(self) -> None:
        self._hover_rect = None
        self._notify()

    def add_click_rect(self, rect: Rect, style: Dict[str, str]) -> None:
        self._click_rects.append(ClickRect(rect=rect, computed_style=dict(style or {})))
        self._notify()

    def remove_clicked_rects(self) -> None:
        self._click_rects = []
        self._notify()

    def clear(self) -> None:
        self._hover_rect = None
        self._click_rects = []
        self._notify()

    async def get_bounding_rect(self, selector: str, webview: RenderingSurface) -> Optional[Rect]:
        """Current rect of selector in surface space, or None if it is gone."""
        result = await webview.execute_javascript(
            BOUNDING_RECT_SCRIPT.format(selector=json.dumps(selector))
        )
        if not result:
            logger.debug(f"No bounding rect for {selector} in {webview.webview_id}")
            return None
        return Rect.from_dict(result)

    async def get_computed_style(self, selector: str, webview: RenderingSurface) -> Optional[Dict[str, str]]:
        """Resolved style of selector, or None if it is gone."""
        result = await webview.execute_javascript(
            COMPUTED_STYLE_SCRIPT.format(selector=json.dumps(selector))
        )
        if result is None:
            logger.debug(f"No computed style for {selector} in {webview.webview_id}")
            return None
        return {str(k): str(v) for k, v in result.items()}
