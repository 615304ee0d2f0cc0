"""
Album Dashboard - production progress tracker
Main entry point
"""
import dearpygui.dearpygui as dpg
from core.models import Album
from core.persistence import ProgressStore
from core.router import GridView as GridMode, ZoomedView, ViewRouter
from core.settings import load_settings
from core.state import AlbumState
from ui.theme import apply_dashboard_theme, apply_ui_scale
from ui.views.GridView import GridView
from ui.views.SongDetailView import SongDetailView
from ui.widgets.StageEditDialog import StageEditDialog


# Module-level variables (accessed by callbacks)
app_state = None
router = None
grid_view = None
detail_view = None
_render_pending = True


def main():
    """Launch the album dashboard."""
    global app_state, router, grid_view, detail_view

    print("=== Album Dashboard ===")
    print("Initializing...")

    settings = load_settings()
    general = settings["general"]
    video = settings["video"]

    # Load album state (once)
    store = ProgressStore(general.get("storage_path"))
    app_state = AlbumState.load(store)
    print(f"[STATE] Loaded '{app_state.get_title()}' from {store.path}")

    router = ViewRouter()

    # Initialize DearPyGui
    dpg.create_context()

    apply_ui_scale(video.get("ui_scale", 1.0))

    stage_dialog = StageEditDialog()

    grid_view = GridView(
        app_state=app_state,
        stage_dialog=stage_dialog,
        on_zoom=router.zoom,
        columns=video.get("grid_columns", 5),
        eligible_threshold=general.get("eligible_threshold", 75)
    )
    detail_view = SongDetailView(
        app_state=app_state,
        stage_dialog=stage_dialog,
        on_back=router.back
    )

    # Create windows
    grid_view.create()
    detail_view.create()

    # Re-render on every album edit and every navigation
    app_state.add_listener(on_album_changed)
    router.add_listener(on_navigation)

    apply_dashboard_theme()

    # Setup viewport
    dpg.create_viewport(title=app_state.get_title(),
                        width=video.get("viewport_width", 1920),
                        height=video.get("viewport_height", 1080))
    dpg.setup_dearpygui()
    dpg.show_viewport()

    print("Ready!")

    # Main render loop
    while dpg.is_dearpygui_running():
        if _render_pending:
            render()

        # Push countdown text from the timer thread
        grid_view.update()

        dpg.render_dearpygui_frame()

        # Escape returns to the grid from a zoomed song
        if dpg.is_key_pressed(dpg.mvKey_Escape):
            router.back()

    # Cleanup
    grid_view.destroy()
    detail_view.destroy()
    dpg.destroy_context()
    print("Album Dashboard closed.")


def render():
    """Show the view the router derives from the current album."""
    global _render_pending
    _render_pending = False

    album = app_state.get_album()
    view = router.current(album)

    if isinstance(view, ZoomedView):
        detail_view.show_song(album.get_song(view.song_id))
        grid_view.hide()
        detail_view.show()
        dpg.set_primary_window(detail_view._window_tag, True)
    else:
        if not isinstance(view, GridMode):
            print(f"[NAV] Unknown view {view!r}, showing grid")
        grid_view.refresh()
        detail_view.hide()
        grid_view.show()
        dpg.set_primary_window(grid_view._window_tag, True)


def on_album_changed(album: Album):
    """Album edited (or reloaded): re-render on the next frame."""
    global _render_pending
    _render_pending = True
    dpg.set_viewport_title(album.title)


def on_navigation(token: str):
    """Navigation token changed: re-render on the next frame."""
    global _render_pending
    _render_pending = True


if __name__ == "__main__":
    main()
