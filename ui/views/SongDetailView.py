"""
Song Detail View for the album dashboard.
A single song, enlarged and centered on a black background.
"""
import dearpygui.dearpygui as dpg
from typing import Optional, Callable

from core.models import Song
from core.state import AlbumState
from ui.theme import create_zoom_window_theme
from ui.widgets.SongCard import SongCard
from ui.widgets.StageEditDialog import StageEditDialog


class SongDetailView:
    """Zoomed view of one song."""

    def __init__(self,
                 app_state: AlbumState,
                 stage_dialog: StageEditDialog,
                 on_back: Callable[[], None]):
        """
        Args:
            app_state: Album state to edit
            stage_dialog: Shared stage edit dialog
            on_back: Callback for Back to Grid
        """
        self.app_state = app_state
        self.stage_dialog = stage_dialog
        self.on_back = on_back

        self._window_tag = "song_detail_window"
        self._center_tag = "song_detail_center"
        self.card: Optional[SongCard] = None

    def create(self) -> str:
        """
        Create the (empty) detail window.

        Returns:
            Window tag
        """
        with dpg.window(label="Song",
                        tag=self._window_tag,
                        no_title_bar=True,
                        no_resize=True,
                        no_move=True,
                        no_scrollbar=True,
                        show=False):
            with dpg.group(tag=self._center_tag):
                pass

        dpg.bind_item_theme(self._window_tag, create_zoom_window_theme())
        return self._window_tag

    def show_song(self, song: Song):
        """Rebuild the view for a song."""
        if self.card:
            self.card.destroy()

        # Center the card in the viewport
        viewport_w = dpg.get_viewport_client_width() or 1920
        viewport_h = dpg.get_viewport_client_height() or 1080
        size = SongCard.SIZES[True]
        dpg.set_item_pos(self._center_tag, [
            max(0, (viewport_w - size["width"]) // 2),
            max(0, (viewport_h - size["height"]) // 2),
        ])

        self.card = SongCard(song, self.app_state, self.stage_dialog, large=True, on_back=self.on_back)
        self.card.create(parent=self._center_tag)

    # Window Management

    def show(self):
        """Show the detail window."""
        if dpg.does_item_exist(self._window_tag):
            dpg.show_item(self._window_tag)

    def hide(self):
        """Hide the detail window."""
        if dpg.does_item_exist(self._window_tag):
            dpg.hide_item(self._window_tag)

    def destroy(self):
        """Destroy the detail window."""
        if self.card:
            self.card.destroy()
            self.card = None
        if dpg.does_item_exist(self._window_tag):
            dpg.delete_item(self._window_tag)
