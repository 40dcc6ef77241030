"""
IFrame Webview Component

A NiceGUI rendering surface for the editor engine:
- Renders the edited page in an <iframe> (must be same-origin)
- Injects a bridge script that reports mouseover/click/scroll to Python
- Applies one-way style messages posted by the engine
- Evaluates query scripts inside the page for the overlay manager

IMPORTANT: rects reported by the bridge are in the iframe's viewport space.
The overlay container is positioned on the iframe's origin, so placement only
carries the zoom factor.
"""

import json
import logging
import uuid
from typing import Any, Dict, Optional

from nicegui import ui

from studio.engine.constants import (
    EVENT_CLICK,
    EVENT_MOUSEOVER,
    EVENT_SCROLL,
    EVENT_STYLE_UPDATED,
    WebviewChannels,
)
from studio.engine.surface import SurfacePlacement

logger = logging.getLogger(__name__)

# Style properties shipped with every element snapshot. Full styles are
# fetched on demand through the overlay manager.
SNAPSHOT_STYLES = [
    'color', 'background-color', 'font-size', 'font-weight',
    'margin', 'padding', 'border-radius', 'display', 'width', 'height',
]

BRIDGE_SCRIPT = '''
(() => {{
    if (window.__studioBridge) return;
    window.__studioBridge = true;
    window.__studioDesign = {design};
    window.__studioSelection = [];

    const WEBVIEW_ID = {webview_id};
    const STYLES = {styles};
    const emit = (name, payload) => window.parent.emitEvent(name, payload);

    function cssPath(el) {{
        if (el.id) return '#' + CSS.escape(el.id);
        const parts = [];
        while (el && el.nodeType === 1 && el !== document.documentElement) {{
            let part = el.tagName.toLowerCase();
            const parent = el.parentElement;
            if (parent) {{
                const same = Array.from(parent.children).filter(c => c.tagName === el.tagName);
                if (same.length > 1) part += ':nth-of-type(' + (same.indexOf(el) + 1) + ')';
            }}
            parts.unshift(part);
            if (parent && parent.id) {{
                parts.unshift('#' + CSS.escape(parent.id));
                break;
            }}
            el = parent;
        }}
        return parts.join(' > ') || 'html';
    }}

    function describe(el) {{
        const r = el.getBoundingClientRect();
        const s = window.getComputedStyle(el);
        const computedStyle = {{}};
        STYLES.forEach(name => computedStyle[name] = s.getPropertyValue(name));
        return {{
            webviewId: WEBVIEW_ID,
            selector: cssPath(el),
            rect: {{top: r.top, left: r.left, width: r.width, height: r.height}},
            computedStyle: computedStyle,
        }};
    }}

    document.addEventListener('mouseover', (e) => {{
        if (!window.__studioDesign) return;
        emit({ev_mouseover}, {{webviewId: WEBVIEW_ID, elements: [describe(e.target)]}});
    }}, true);

    document.documentElement.addEventListener('mouseleave', () => {{
        emit({ev_mouseover}, {{webviewId: WEBVIEW_ID, elements: []}});
    }});

    document.addEventListener('click', (e) => {{
        if (!window.__studioDesign) return;
        e.preventDefault();
        e.stopPropagation();
        const selector = cssPath(e.target);
        if (e.shiftKey) {{
            if (!window.__studioSelection.includes(selector)) window.__studioSelection.push(selector);
        }} else {{
            window.__studioSelection = [selector];
        }}
        const elements = window.__studioSelection
            .map(sel => document.querySelector(sel))
            .filter(el => el)
            .map(describe);
        emit({ev_click}, {{webviewId: WEBVIEW_ID, elements: elements}});
    }}, true);

    window.addEventListener('scroll', () => {{
        emit({ev_scroll}, {{webviewId: WEBVIEW_ID}});
    }}, true);

    window.addEventListener('message', (e) => {{
        const msg = e.data || {{}};
        if (msg.channel !== {ch_update_style}) return;
        const el = document.querySelector(msg.payload.selector);
        if (!el) return;
        el.style.setProperty(msg.payload.style, msg.payload.value);
        emit({ev_style_updated}, {{webviewId: WEBVIEW_ID}});
    }});
}})()
'''


class IFrameWebview:
    """
    Rendering surface backed by an <iframe> in the current NiceGUI page.

    Conforms to studio.engine.surface.RenderingSurface.
    """

    def __init__(self, url: str, webview_id: Optional[str] = None, timeout: float = 2.0,
                 design: bool = True):
        """Create the iframe element. Must be called inside a NiceGUI container."""
        self._webview_id = webview_id or f"webview-{uuid.uuid4().hex[:8]}"
        self._placement = SurfacePlacement()
        self._timeout = timeout
        self._design = design

        self.iframe = ui.element('iframe').props(f'src="{url}"').classes('w-full h-full border-0')
        self.iframe.style('transform-origin: 0 0')
        self.iframe.on('load', self.inject_bridge)

    @property
    def webview_id(self) -> str:
        return self._webview_id

    @property
    def placement(self) -> SurfacePlacement:
        return self._placement

    @property
    def dom_id(self) -> str:
        return f'c{self.iframe.id}'

    def _window_expr(self) -> str:
        return f"document.getElementById('{self.dom_id}').contentWindow"

    def inject_bridge(self) -> None:
        """(Re)install the bridge after every page load."""
        script = BRIDGE_SCRIPT.format(
            design='true' if self._design else 'false',
            webview_id=json.dumps(self._webview_id),
            styles=json.dumps(SNAPSHOT_STYLES),
            ev_mouseover=json.dumps(EVENT_MOUSEOVER),
            ev_click=json.dumps(EVENT_CLICK),
            ev_scroll=json.dumps(EVENT_SCROLL),
            ev_style_updated=json.dumps(EVENT_STYLE_UPDATED),
            ch_update_style=json.dumps(WebviewChannels.UPDATE_STYLE),
        )
        self.iframe.client.run_javascript(f"{self._window_expr()}.eval({json.dumps(script)})")
        logger.debug(f"Injected bridge into {self._webview_id}")

    def set_design_mode(self, design: bool) -> None:
        """Design mode intercepts clicks; interact mode lets the page handle them."""
        self._design = design
        flag = 'true' if design else 'false'
        self.iframe.client.run_javascript(f"{self._window_expr()}.__studioDesign = {flag}")
        self.clear_selection()

    def clear_selection(self) -> None:
        """Forget the page-side selection so the next shift-click starts fresh."""
        self.iframe.client.run_javascript(f"{self._window_expr()}.__studioSelection = []")

    def set_scale(self, scale: float) -> None:
        self._placement.scale = scale
        self.iframe.style(f'transform: scale({scale}); transform-origin: 0 0')

    def send(self, channel: str, payload: Dict[str, Any]) -> None:
        message = json.dumps({'channel': channel, 'payload': payload})
        self.iframe.client.run_javascript(f"{self._window_expr()}.postMessage({message}, '*')")

    async def execute_javascript(self, code: str) -> Any:
        return await self.iframe.client.run_javascript(
            f"{self._window_expr()}.eval({json.dumps(code)})",
            timeout=self._timeout,
        )
