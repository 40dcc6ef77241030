"""
RenderingSurface Protocol Definition.

This module defines the interface the editor engine expects from an embedded
rendering surface (the live page being edited). The NiceGUI IFrameWebview
conforms to it, and so do the fakes used in tests.
"""

from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable


@dataclass
class SurfacePlacement:
    """
    Where a surface sits inside the host UI.

    left/top are the offset of the surface's origin relative to the overlay
    container; scale is the zoom applied to the surface's content.
    """
    left: float = 0.0
    top: float = 0.0
    scale: float = 1.0


@runtime_checkable
class RenderingSurface(Protocol):
    """
    Abstract protocol for rendering surfaces.

    All surfaces must provide a stable identifier, their current placement,
    a one-way message channel and a way to evaluate query scripts.
    """

    @property
    def webview_id(self) -> str:
        """Identifier the surface is registered under in the WebviewManager."""
        ...

    @property
    def placement(self) -> SurfacePlacement:
        """Current offset/scale of the surface within the host UI."""
        ...

    def send(self, channel: str, payload: Dict[str, Any]) -> None:
        """
        Fire-and-forget a message to the page.

        Args:
            channel: One of WebviewChannels
            payload: JSON-serializable message body
        """
        ...

    async def execute_javascript(self, code: str) -> Any:
        """
        Evaluate an expression inside the page and return its JSON result.

        May raise on transport failure (timeout, disconnected client).
        """
        ...
