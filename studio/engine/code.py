"""
Code Manager - turns dispatched style changes into stylesheet source.

Every style the engine sends to a surface is also recorded here as an
override for (webview_id, selector, property). Undo replays flow through the
same path, so the overrides always describe what is currently applied.
"""

import logging
from typing import Dict

from studio.engine.webviews import WebviewManager

logger = logging.getLogger(__name__)


class CodeManager:

    def __init__(self, webviews: WebviewManager):
        self.webviews = webviews
        # webview_id -> selector -> property -> value
        self._overrides: Dict[str, Dict[str, Dict[str, str]]] = {}

    def apply_style(self, target, style: str, value: str) -> None:
        """Record one property for a target. An empty value drops the override."""
        selectors = self._overrides.setdefault(target.webview_id, {})
        styles = selectors.setdefault(target.selector, {})

        if value:
            styles[style] = value
        else:
            styles.pop(style, None)
            if not styles:
                del selectors[target.selector]

    def get_overrides(self, webview_id: str) -> Dict[str, Dict[str, str]]:
        return {
            selector: dict(styles)
            for selector, styles in self._overrides.get(webview_id, {}).items()
        }

    def generate_stylesheet(self, webview_id: str) -> str:
        """Render the overrides of one surface as CSS text."""
        blocks = []
        for selector, styles in self._overrides.get(webview_id, {}).items():
            if not styles:
                continue
            body = '\n'.join(f'  {prop}: {value};' for prop, value in styles.items())
            blocks.append(f'{selector} {{\n{body}\n}}')

        if webview_id not in self.webviews:
            logger.debug(f"Generating stylesheet for unregistered webview {webview_id}")
        return '\n\n'.join(blocks)

    def clear(self) -> None:
        self._overrides.clear()
