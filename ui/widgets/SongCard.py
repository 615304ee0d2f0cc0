"""
Song Card Widget for the album dashboard.

One card per song, used both in the grid (compact) and in the zoomed view
(large):

┌──────────────────────────────┐
│ Song title            [Zoom] │  ← editable title, Zoom/Back button
│ ▓▓▓▓▓▓▓▓▓▓ 42% ░░░░░░░░░░░░░ │  ← derived song progress
│ ▓▓▓▓ Demo ░░░░░░░░░░░░   [×] │  ← stage bars (click to edit)
│ ▓▓ Basic Track ░░░░░░░   [×] │
│ ...                          │
│                          [+] │  ← add stage
└──────────────────────────────┘
"""
import dearpygui.dearpygui as dpg
from typing import Optional, Callable, List

from core.models import Song
from core.progress import song_completion
from core.state import AlbumState
from ui.theme import get_progress_theme
from ui.widgets.StageEditDialog import StageEditDialog


class SongCard:
    """
    Card showing one song and its stages.

    The card is a snapshot: it is rebuilt from the album after every edit
    and never edits its own widgets in place.
    """

    # Compact (grid) and large (zoomed) layouts
    SIZES = {
        False: {"width": 370, "height": 232, "title_bar": 20, "stage_bar": 16, "gap": 2},
        True: {"width": 740, "height": 724, "title_bar": 36, "stage_bar": 32, "gap": 8},
    }

    def __init__(self,
                 song: Song,
                 app_state: AlbumState,
                 stage_dialog: StageEditDialog,
                 large: bool = False,
                 on_zoom: Optional[Callable[[int], None]] = None,
                 on_back: Optional[Callable[[], None]] = None):
        """
        Args:
            song: Song to show
            app_state: Album state that receives edits
            stage_dialog: Shared stage edit dialog
            large: True for the zoomed layout
            on_zoom: Callback for the Zoom button: (song_id: int) -> None
            on_back: Callback for the Back to Grid button (large layout)
        """
        self.song = song
        self.app_state = app_state
        self.stage_dialog = stage_dialog
        self.large = large
        self.on_zoom = on_zoom
        self.on_back = on_back

        self._size = self.SIZES[large]
        self._card_tag = f"song_card_{'large' if large else 'grid'}_{song.id}"
        self._handler_registries: List[int] = []

    def create(self, parent: Optional[int] = None) -> str:
        """
        Create the card UI.

        Args:
            parent: Parent container (optional)

        Returns:
            Card tag
        """
        song = self.song
        avg = song_completion(song)

        kwargs = {"parent": parent} if parent is not None else {}
        with dpg.child_window(tag=self._card_tag, width=self._size["width"],
                              height=self._size["height"], border=True,
                              no_scrollbar=True, **kwargs):
            # Title row
            with dpg.group(horizontal=True):
                dpg.add_input_text(
                    default_value=song.title,
                    width=self._size["width"] - (170 if self.large else 90),
                    on_enter=True,
                    callback=self._on_title_entered
                )
                if self.large:
                    dpg.add_button(label="Back to Grid", width=130, callback=self._on_back_clicked)
                else:
                    dpg.add_button(label="Zoom", width=50, callback=self._on_zoom_clicked)

            # Overall song progress (derived)
            song_bar = dpg.add_progress_bar(
                default_value=avg / 100.0,
                overlay=f"{avg}%",
                width=-1,
                height=self._size["title_bar"]
            )
            dpg.bind_item_theme(song_bar, get_progress_theme(avg >= 100))

            # Stages (scroll inside the card when there are many)
            footer = 44 if self.large else 30
            with dpg.child_window(height=-footer, border=False):
                for index, stage in enumerate(song.stages):
                    self._create_stage_row(index, stage.name, stage.value)

            with dpg.group(horizontal=True):
                dpg.add_spacer(width=self._size["width"] - (70 if self.large else 50))
                dpg.add_button(
                    label="+",
                    width=36 if self.large else 20,
                    height=36 if self.large else 20,
                    callback=self._on_add_stage
                )

        return self._card_tag

    def _create_stage_row(self, index: int, name: str, value: int):
        """One stage: labelled bar (click to edit) plus remove button."""
        with dpg.group(horizontal=True):
            bar = dpg.add_progress_bar(
                default_value=value / 100.0,
                overlay=name,
                width=-32,
                height=self._size["stage_bar"]
            )
            dpg.bind_item_theme(bar, get_progress_theme(value >= 100))

            with dpg.item_handler_registry() as handlers:
                dpg.add_item_clicked_handler(callback=self._on_stage_clicked, user_data=index)
            dpg.bind_item_handler_registry(bar, handlers)
            self._handler_registries.append(handlers)

            dpg.add_button(label="x", width=24, callback=self._on_remove_stage, user_data=index)

        if self._size["gap"]:
            dpg.add_spacer(height=self._size["gap"])

    # Callbacks

    def _on_title_entered(self, sender, app_data):
        if not self.app_state.rename_song(self.song.id, app_data):
            dpg.set_value(sender, self.song.title)

    def _on_zoom_clicked(self):
        if self.on_zoom:
            self.on_zoom(self.song.id)

    def _on_back_clicked(self):
        if self.on_back:
            self.on_back()

    def _on_stage_clicked(self, sender, app_data, user_data):
        index = user_data
        if not 0 <= index < len(self.song.stages):
            return
        stage = self.song.stages[index]
        song_id = self.song.id
        self.stage_dialog.open(
            stage.name,
            stage.value,
            on_save=lambda name, value: self.app_state.update_stage(song_id, index, name=name, value=value)
        )

    def _on_remove_stage(self, sender, app_data, user_data):
        self.app_state.remove_stage(self.song.id, user_data)

    def _on_add_stage(self):
        self.app_state.add_stage(self.song.id)

    def destroy(self):
        """Destroy the card and its click handlers."""
        for handlers in self._handler_registries:
            if dpg.does_item_exist(handlers):
                dpg.delete_item(handlers)
        self._handler_registries = []

        if dpg.does_item_exist(self._card_tag):
            dpg.delete_item(self._card_tag)
