"""
Grid View Test for the album dashboard.
Opens the dashboard on the sample album in a throwaway store.
"""
import sys
import os
import tempfile

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

import dearpygui.dearpygui as dpg
from core.persistence import ProgressStore
from core.router import ViewRouter, ZoomedView
from core.state import AlbumState
from core.test_data import create_sample_album
from ui.theme import apply_dashboard_theme
from ui.views.GridView import GridView
from ui.views.SongDetailView import SongDetailView
from ui.widgets.StageEditDialog import StageEditDialog


render_pending = True


def request_render(*_):
    global render_pending
    render_pending = True


def render():
    """Show the grid or the zoomed song."""
    global render_pending
    render_pending = False

    album = app_state.get_album()
    view = router.current(album)
    print(f"=== RENDER {view!r} ===")

    if isinstance(view, ZoomedView):
        detail_view.show_song(album.get_song(view.song_id))
        grid_view.hide()
        detail_view.show()
        dpg.set_primary_window(detail_view._window_tag, True)
    else:
        grid_view.refresh()
        detail_view.hide()
        grid_view.show()
        dpg.set_primary_window(grid_view._window_tag, True)


def main():
    """Main entry point for grid view test."""
    global app_state, router, grid_view, detail_view

    temp_dir = tempfile.mkdtemp(prefix="album_dashboard_")
    store = ProgressStore(os.path.join(temp_dir, "albumProgress_v3.msgpack"))
    album = create_sample_album()
    store.save(album.songs, album.title, album.target)
    print(f"Sample album stored in: {store.path}")

    app_state = AlbumState.load(store)
    router = ViewRouter()

    # Initialize DearPyGui
    dpg.create_context()

    stage_dialog = StageEditDialog()
    grid_view = GridView(app_state, stage_dialog, on_zoom=router.zoom, columns=3)
    detail_view = SongDetailView(app_state, stage_dialog, on_back=router.back)
    grid_view.create()
    detail_view.create()

    app_state.add_listener(request_render)
    router.add_listener(request_render)

    apply_dashboard_theme()

    # Setup viewport
    dpg.create_viewport(title=app_state.get_title(), width=1300, height=900)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    # Main render loop
    while dpg.is_dearpygui_running():
        if render_pending:
            render()
        grid_view.update()
        dpg.render_dearpygui_frame()

        if dpg.is_key_pressed(dpg.mvKey_Escape):
            router.back()

    # Cleanup
    grid_view.destroy()
    detail_view.destroy()
    dpg.destroy_context()


if __name__ == "__main__":
    print("=== Album Dashboard Grid Test ===")
    print("Controls:")
    print("  - Click a stage bar to edit its name and progress")
    print("  - 'x' removes a stage, '+' adds one")
    print("  - 'Zoom' opens a song, Escape or 'Back to Grid' returns")
    print("  - Export / Import / Reset only touch the temporary store")
    print("-" * 50)
    main()
