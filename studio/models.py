"""
Core data models shared by the editor engine.

Elements are identified by the rendering surface that owns them (webview_id)
and a selector that locates them inside that surface's document. Geometry is
always captured in the surface's own coordinate space; the overlay manager
translates it before anything is drawn.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, in whichever coordinate space the owner says."""
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Rect':
        """Build from a DOMRect-like mapping (top/left or x/y)."""
        return cls(
            top=float(data.get('top', data.get('y', 0)) or 0),
            left=float(data.get('left', data.get('x', 0)) or 0),
            width=float(data.get('width', 0) or 0),
            height=float(data.get('height', 0) or 0),
        )


@dataclass(frozen=True)
class ElementMetadata:
    """Immutable snapshot of one element inside one rendering surface."""
    webview_id: str
    selector: str
    rect: Rect = field(default_factory=Rect)
    computed_style: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ElementMetadata':
        """Parse the payload emitted by the in-page bridge script."""
        return cls(
            webview_id=str(data.get('webviewId', data.get('webview_id', ''))),
            selector=str(data.get('selector', '')),
            rect=Rect.from_dict(data.get('rect') or {}),
            computed_style=dict(data.get('computedStyle', data.get('computed_style')) or {}),
        )


@dataclass(frozen=True)
class ActionTarget:
    """The part of an element an action needs: where it lives and how to find it."""
    webview_id: str
    selector: str

    @classmethod
    def from_element(cls, element: ElementMetadata) -> 'ActionTarget':
        return cls(webview_id=element.webview_id, selector=element.selector)
