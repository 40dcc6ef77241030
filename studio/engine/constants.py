"""
Shared constants for the editor engine.

Channel names are used by both Python (EditorEngine) and the JavaScript
bridge injected into the rendering surface. Keep them in sync!
"""


class WebviewChannels:
    """Message channels understood by the in-page bridge."""
    UPDATE_STYLE = 'update-style'


# Events the bridge reports back to Python (NiceGUI emitEvent names)
EVENT_MOUSEOVER = 'studio_mouseover'
EVENT_CLICK = 'studio_click'
EVENT_SCROLL = 'studio_scroll'
EVENT_STYLE_UPDATED = 'studio_style_updated'

# Overlay colors
HOVER_COLOR = '#38bdf8'  # sky-400
CLICK_COLOR = '#f472b6'  # pink-400
