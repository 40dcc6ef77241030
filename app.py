"""
Main NiceGUI application for the studio visual editor.

Embeds the page being edited in an iframe, draws the hover/selection overlay
on top of it, and provides a toolbar (mode, zoom, undo) and a style panel
that edits the current selection through the EditorEngine.
"""

import logging
import sys

from dotenv import load_dotenv
from nicegui import app, ui

load_dotenv()

from studio.config import (
    get_default_mode,
    get_history_limit,
    get_log_level,
    get_port,
    get_start_url,
)
from studio.paths import get_sample_dir
from studio.components import IFrameWebview, render_overlay_layer
from studio.engine import EditorEngine, EditorMode
from studio.engine.handlers import setup_editor_handlers

logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

if get_sample_dir().exists():
    app.add_static_files('/sample', str(get_sample_dir()))

# Properties offered in the style panel
EDITABLE_STYLES = ['color', 'background-color', 'font-size', 'font-weight', 'padding', 'margin', 'border-radius']


@ui.page('/')
def index():
    engine = EditorEngine(
        history_limit=get_history_limit(),
        mode=EditorMode(get_default_mode()),
    )
    state = {'style_inputs': {}, 'syncing': False}

    def refresh_style_panel():
        """Show the first selected element's styles without recording edits."""
        selected = engine.state.selected
        first = selected[0] if selected else None
        state['selection_label'].set_text(
            ', '.join(el.selector for el in selected) if selected else 'Nothing selected'
        )
        state['syncing'] = True
        try:
            for name, field in state['style_inputs'].items():
                field.set_value(first.computed_style.get(name, '') if first else '')
                field.set_enabled(first is not None)
        finally:
            state['syncing'] = False

    handlers = setup_editor_handlers(engine, on_selection_change=refresh_style_panel)

    def on_style_input(style, value):
        if state['syncing'] or value is None:
            return
        handlers['apply_style'](style, value)

    with ui.header().classes('items-center gap-4 bg-slate-900'):
        ui.label('Studio').classes('text-lg font-bold')
        mode_toggle = ui.toggle([m.value for m in EditorMode], value=engine.mode.value)
        ui.label('Zoom').classes('text-xs text-gray-400')
        zoom = ui.slider(min=0.25, max=2.0, step=0.05, value=1.0).classes('w-40')
        undo_button = ui.button(icon='undo').props('flat dense color=white').tooltip('Undo (Ctrl+Z)')
        export_button = ui.button('Export CSS').props('flat dense color=white')

    with ui.row().classes('w-full h-[calc(100vh-80px)] no-wrap gap-0'):
        with ui.element('div').classes('relative flex-grow h-full overflow-hidden bg-white'):
            webview = IFrameWebview(get_start_url(), design=engine.mode is EditorMode.DESIGN)
            render_overlay_layer(engine.overlay)

        with ui.column().classes('w-80 h-full p-4 gap-2 bg-slate-900 overflow-y-auto'):
            ui.label('Selection').classes('text-xs text-gray-400')
            state['selection_label'] = ui.label('Nothing selected').classes('text-sm break-all')
            ui.separator()
            for name in EDITABLE_STYLES:
                field = ui.input(name).props('dense outlined').classes('w-full')
                field.on('focus', handlers['begin_style_edit'])
                field.on('blur', handlers['end_style_edit'])
                field.on('keydown.enter', handlers['end_style_edit'])
                field.on_value_change(lambda e, style=name: on_style_input(style, e.value))
                state['style_inputs'][name] = field

    engine.webviews.register(webview)
    refresh_style_panel()

    def on_mode_change(e):
        handlers['set_mode'](EditorMode(e.value))
        refresh_style_panel()

    async def on_zoom_change(e):
        webview.set_scale(e.value)
        pending = engine.refresh_clicked_elements(webview)
        if pending is not None:
            await pending

    def export_css():
        css = engine.code.generate_stylesheet(webview.webview_id)
        if not css:
            ui.notify('No style changes yet', position='bottom')
            return
        with ui.dialog() as dialog, ui.card().classes('w-[32rem]'):
            ui.code(css, language='css').classes('w-full')
            ui.button('Close', on_click=dialog.close)
        dialog.open()

    def undo():
        engine.history.undo()
        refresh_style_panel()

    mode_toggle.on_value_change(on_mode_change)
    zoom.on_value_change(on_zoom_change)
    undo_button.on_click(undo)
    export_button.on_click(export_css)
    ui.keyboard(on_key=handlers['handle_keyboard'])

    def on_disconnect():
        engine.dispose()
        logger.info('Client disconnected, editor disposed')

    ui.context.client.on_disconnect(on_disconnect)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Studio',
        port=get_port(),
        reload=not getattr(sys, 'frozen', False),
        dark=True,
    )
