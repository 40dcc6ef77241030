"""
Tests for overlay geometry and rendering-surface queries.
"""

import asyncio
import json

import pytest

from studio.engine.overlay import ClickRect, OverlayManager, adapt_rect
from studio.engine.surface import RenderingSurface, SurfacePlacement
from studio.models import Rect


class FakeWebview:
    """Answers overlay query scripts from canned per-selector data."""

    def __init__(self, webview_id='w1', placement=None, rects=None, styles=None):
        self.webview_id = webview_id
        self.placement = placement or SurfacePlacement()
        self.rects = rects or {}
        self.styles = styles or {}
        self.scripts = []

    def send(self, channel, payload):
        pass

    async def execute_javascript(self, code):
        self.scripts.append(code)
        table = self.rects if 'getBoundingClientRect' in code else self.styles
        for selector, value in table.items():
            if json.dumps(selector) in code:
                return value
        return None


@pytest.fixture
def overlay():
    return OverlayManager()


class TestAdaptRect:

    def test_identity_placement(self):
        rect = Rect(10, 20, 30, 40)
        assert adapt_rect(rect, SurfacePlacement()) == rect

    def test_offset_and_scale(self):
        rect = Rect(top=10, left=20, width=100, height=50)
        placement = SurfacePlacement(left=5, top=7, scale=2)

        assert adapt_rect(rect, placement) == Rect(top=27, left=45, width=200, height=100)

    def test_manager_uses_surface_placement(self, overlay):
        webview = FakeWebview(placement=SurfacePlacement(left=100, top=0, scale=0.5))
        adjusted = overlay.adapt_rect_from_source_element(Rect(0, 10, 40, 40), webview)
        assert adjusted == Rect(top=0, left=105, width=20, height=20)

    def test_fake_conforms_to_surface_protocol(self):
        assert isinstance(FakeWebview(), RenderingSurface)


class TestOverlayState:

    def test_hover_rect(self, overlay):
        overlay.update_hover_rect(Rect(1, 2, 3, 4))
        assert overlay.hover_rect == Rect(1, 2, 3, 4)
        overlay.remove_hover_rect()
        assert overlay.hover_rect is None

    def test_click_rects_append_in_order(self, overlay):
        overlay.add_click_rect(Rect(1, 1, 1, 1), {'color': 'red'})
        overlay.add_click_rect(Rect(2, 2, 2, 2), {})

        assert overlay.click_rects == [
            ClickRect(Rect(1, 1, 1, 1), {'color': 'red'}),
            ClickRect(Rect(2, 2, 2, 2), {}),
        ]

    def test_remove_clicked_rects_keeps_hover(self, overlay):
        overlay.update_hover_rect(Rect(1, 2, 3, 4))
        overlay.add_click_rect(Rect(), {})

        overlay.remove_clicked_rects()
        assert overlay.click_rects == []
        assert overlay.hover_rect is not None

    def test_clear_drops_everything(self, overlay):
        overlay.update_hover_rect(Rect(1, 2, 3, 4))
        overlay.add_click_rect(Rect(), {})

        overlay.clear()
        assert overlay.click_rects == []
        assert overlay.hover_rect is None

    def test_subscribers_notified(self, overlay):
        events = []
        overlay.subscribe(lambda o: events.append((o.hover_rect, len(o.click_rects))))

        overlay.update_hover_rect(Rect(1, 1, 1, 1))
        overlay.add_click_rect(Rect(), {})
        overlay.clear()

        assert events == [(Rect(1, 1, 1, 1), 0), (Rect(1, 1, 1, 1), 1), (None, 0)]


class TestSurfaceQueries:

    def test_get_bounding_rect(self, overlay):
        webview = FakeWebview(rects={'#a': {'top': 5, 'left': 6, 'width': 7, 'height': 8}})

        rect = asyncio.run(overlay.get_bounding_rect('#a', webview))

        assert rect == Rect(5, 6, 7, 8)
        assert 'document.querySelector("#a")' in webview.scripts[0]

    def test_get_bounding_rect_missing_element(self, overlay):
        assert asyncio.run(overlay.get_bounding_rect('#gone', FakeWebview())) is None

    def test_get_computed_style(self, overlay):
        webview = FakeWebview(styles={'.b': {'color': 'red', 'opacity': 1}})

        style = asyncio.run(overlay.get_computed_style('.b', webview))

        assert style == {'color': 'red', 'opacity': '1'}
        assert 'getComputedStyle' in webview.scripts[0]

    def test_selector_is_escaped_into_script(self, overlay):
        selector = 'a[href="x"]'
        webview = FakeWebview(rects={selector: {'top': 0, 'left': 0, 'width': 1, 'height': 1}})

        asyncio.run(overlay.get_bounding_rect(selector, webview))

        assert json.dumps(selector) in webview.scripts[0]
