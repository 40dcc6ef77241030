"""Registry of live rendering surfaces, keyed by webview id."""

import logging
from typing import Dict, List, Optional

from studio.engine.surface import RenderingSurface

logger = logging.getLogger(__name__)


class WebviewManager:

    def __init__(self):
        self._webviews: Dict[str, RenderingSurface] = {}

    def get(self, webview_id: str) -> Optional[RenderingSurface]:
        """Return the surface registered under webview_id, or None."""
        return self._webviews.get(webview_id)

    def get_all(self) -> List[RenderingSurface]:
        return list(self._webviews.values())

    def register(self, webview: RenderingSurface) -> None:
        if webview.webview_id in self._webviews:
            logger.debug(f"Replacing registered webview {webview.webview_id}")
        self._webviews[webview.webview_id] = webview
        logger.info(f"Registered webview {webview.webview_id}")

    def deregister(self, webview: RenderingSurface) -> None:
        if self._webviews.get(webview.webview_id) is webview:
            del self._webviews[webview.webview_id]
            logger.info(f"Deregistered webview {webview.webview_id}")

    def deregister_all(self) -> None:
        self._webviews.clear()

    def __contains__(self, webview_id: str) -> bool:
        return webview_id in self._webviews

    def __len__(self) -> int:
        return len(self._webviews)
