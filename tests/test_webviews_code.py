"""
Tests for the webview registry and the code manager.
"""

from studio.engine.code import CodeManager
from studio.engine.surface import SurfacePlacement
from studio.engine.webviews import WebviewManager
from studio.models import ActionTarget


class DummyWebview:
    def __init__(self, webview_id):
        self.webview_id = webview_id
        self.placement = SurfacePlacement()

    def send(self, channel, payload):
        pass

    async def execute_javascript(self, code):
        return None


class TestWebviewManager:

    def test_get_unknown_returns_none(self):
        assert WebviewManager().get('nope') is None

    def test_register_and_get(self):
        manager = WebviewManager()
        w1 = DummyWebview('w1')
        manager.register(w1)

        assert manager.get('w1') is w1
        assert 'w1' in manager
        assert len(manager) == 1

    def test_reregister_replaces(self):
        manager = WebviewManager()
        old, new = DummyWebview('w1'), DummyWebview('w1')
        manager.register(old)
        manager.register(new)

        assert manager.get('w1') is new
        assert manager.get_all() == [new]

    def test_deregister_only_removes_same_handle(self):
        manager = WebviewManager()
        old, new = DummyWebview('w1'), DummyWebview('w1')
        manager.register(new)

        manager.deregister(old)
        assert manager.get('w1') is new

        manager.deregister(new)
        assert manager.get('w1') is None

    def test_deregister_all(self):
        manager = WebviewManager()
        manager.register(DummyWebview('w1'))
        manager.register(DummyWebview('w2'))

        manager.deregister_all()
        assert len(manager) == 0
        assert manager.get('w2') is None


class TestCodeManager:

    def test_stylesheet_from_overrides(self):
        code = CodeManager(WebviewManager())
        code.apply_style(ActionTarget('w1', '#a'), 'color', 'red')
        code.apply_style(ActionTarget('w1', '#a'), 'font-size', '18px')
        code.apply_style(ActionTarget('w1', '.card'), 'padding', '4px')
        code.apply_style(ActionTarget('w2', '#other'), 'color', 'blue')

        assert code.generate_stylesheet('w1') == (
            '#a {\n  color: red;\n  font-size: 18px;\n}\n\n'
            '.card {\n  padding: 4px;\n}'
        )
        assert code.get_overrides('w2') == {'#other': {'color': 'blue'}}

    def test_later_value_wins(self):
        code = CodeManager(WebviewManager())
        code.apply_style(ActionTarget('w1', '#a'), 'color', 'red')
        code.apply_style(ActionTarget('w1', '#a'), 'color', 'blue')

        assert code.get_overrides('w1') == {'#a': {'color': 'blue'}}

    def test_empty_value_removes_override(self):
        code = CodeManager(WebviewManager())
        code.apply_style(ActionTarget('w1', '#a'), 'color', 'red')
        code.apply_style(ActionTarget('w1', '#a'), 'color', '')

        assert code.get_overrides('w1') == {}
        assert code.generate_stylesheet('w1') == ''

    def test_unknown_webview_has_no_stylesheet(self):
        code = CodeManager(WebviewManager())
        assert code.generate_stylesheet('missing') == ''

    def test_clear(self):
        code = CodeManager(WebviewManager())
        code.apply_style(ActionTarget('w1', '#a'), 'color', 'red')
        code.clear()
        assert code.get_overrides('w1') == {}
