"""
Editor engine for the studio visual editor.

This package provides the direct-manipulation core:
- EditorEngine: orchestration, mode state machine and action dispatch
- EditorElementState: hovered and selected elements
- OverlayManager: host-UI geometry for hover/selection boxes
- WebviewManager: registry of rendering surfaces
- CodeManager: stylesheet source for dispatched style changes
- setup_editor_handlers: event handlers for app.py integration

Usage:
    from studio.engine import EditorEngine, EditorMode
    from studio.engine.handlers import setup_editor_handlers
"""

from studio.engine.constants import WebviewChannels
from studio.engine.surface import RenderingSurface, SurfacePlacement
from studio.engine.state import EditorElementState
from studio.engine.overlay import OverlayManager, ClickRect, adapt_rect
from studio.engine.webviews import WebviewManager
from studio.engine.code import CodeManager
from studio.engine.engine import EditorEngine, EditorMode, HistoryApi

__all__ = [
    'EditorEngine',
    'EditorMode',
    'HistoryApi',
    'EditorElementState',
    'OverlayManager',
    'ClickRect',
    'adapt_rect',
    'WebviewManager',
    'CodeManager',
    'RenderingSurface',
    'SurfacePlacement',
    'WebviewChannels',
]
