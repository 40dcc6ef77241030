"""
Reusable UI Components
"""

from .webview import IFrameWebview
from .overlay_layer import render_overlay_layer

__all__ = ['IFrameWebview', 'render_overlay_layer']
