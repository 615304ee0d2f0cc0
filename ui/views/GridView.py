"""
Grid View for the album dashboard.

Layout:
- Header: album title, eligible songs, countdown to the deadline,
  Export / Import / Reset
- Album progress bar
- Grid of song cards
"""
import dearpygui.dearpygui as dpg
from datetime import datetime
from pathlib import Path
from typing import Optional, Callable, List

from core.constants import ELIGIBLE_THRESHOLD, EXPORT_FILENAME
from core.countdown import CountdownTimer, format_remaining, time_remaining
from core.persistence import SnapshotError
from core.progress import album_completion, eligible_count
from core.state import AlbumState
from ui.theme import NeutralDark, create_error_button_theme, get_progress_theme
from ui.widgets.MessageDialog import show_confirm, show_message
from ui.widgets.SongCard import SongCard
from ui.widgets.StageEditDialog import StageEditDialog


class GridView:
    """
    Aggregate view: every song as a card.

    Owns the countdown timer; destroy() stops it.
    """

    def __init__(self,
                 app_state: AlbumState,
                 stage_dialog: StageEditDialog,
                 on_zoom: Callable[[int], None],
                 columns: int = 5,
                 eligible_threshold: int = ELIGIBLE_THRESHOLD):
        """
        Args:
            app_state: Album state to show and edit
            stage_dialog: Shared stage edit dialog
            on_zoom: Callback when a card's Zoom button is clicked: (song_id) -> None
            columns: Cards per row
            eligible_threshold: Completion a song needs to count as eligible
        """
        self.app_state = app_state
        self.stage_dialog = stage_dialog
        self.on_zoom = on_zoom
        self.columns = max(1, columns)
        self.eligible_threshold = eligible_threshold

        self._window_tag = "grid_view_window"
        self._title_tag = "grid_album_title"
        self._eligible_tag = "grid_eligible_count"
        self._countdown_tag = "grid_countdown"
        self._target_tag = "grid_target_label"
        self._deadline_input_tag = "grid_deadline_input"
        self._album_bar_tag = "grid_album_progress"
        self._cards_tag = "grid_cards_container"

        self.cards: List[SongCard] = []

        # Countdown text is produced on the timer thread and pushed to the
        # UI from update() on the render thread
        self._countdown_text = ""
        self._shown_countdown_text: Optional[str] = None
        self.countdown_timer = CountdownTimer(self._tick_countdown, interval=1.0)

    def create(self) -> str:
        """
        Create the grid window.

        Returns:
            Window tag
        """
        with dpg.window(label="Album Dashboard",
                        tag=self._window_tag,
                        no_title_bar=True,
                        no_resize=True,
                        no_move=True,
                        no_scrollbar=True):

            # === HEADER ===
            with dpg.group(horizontal=True):
                dpg.add_input_text(
                    tag=self._title_tag,
                    default_value=self.app_state.get_title(),
                    hint="Album Title",
                    width=520,
                    on_enter=True,
                    callback=self._on_title_entered
                )
                dpg.add_spacer(width=200)
                dpg.add_text("", tag=self._eligible_tag)
                dpg.add_spacer(width=200)

                with dpg.group():
                    dpg.add_text("TIME TO GOAL", color=NeutralDark.TEXT_SECONDARY)
                    dpg.add_text("", tag=self._countdown_tag)
                    with dpg.group(horizontal=True):
                        dpg.add_text("", tag=self._target_tag, color=NeutralDark.TEXT_MUTED)
                        dpg.add_button(label="Edit", small=True, callback=self._on_edit_deadline)
                    dpg.add_input_text(
                        tag=self._deadline_input_tag,
                        hint="YYYY-MM-DD HH:MM",
                        width=200,
                        show=False,
                        on_enter=True,
                        callback=self._on_deadline_entered
                    )

                dpg.add_spacer(width=20)
                dpg.add_button(label="Export", callback=self._show_export_dialog)
                dpg.add_button(label="Import", callback=self._show_import_dialog)
                reset_btn = dpg.add_button(label="Reset", callback=self._on_reset)
                dpg.bind_item_theme(reset_btn, create_error_button_theme())

            dpg.add_spacer(height=4)

            # === ALBUM PROGRESS ===
            dpg.add_progress_bar(tag=self._album_bar_tag, default_value=0.0, width=-1, height=36)

            dpg.add_spacer(height=4)

            # === SONG GRID ===
            with dpg.child_window(tag=self._cards_tag, border=False):
                pass

        self.refresh()
        self._tick_countdown()
        self.countdown_timer.start()
        return self._window_tag

    def refresh(self):
        """Rebuild header values and cards from the current album."""
        songs = self.app_state.get_songs()

        dpg.set_value(self._title_tag, self.app_state.get_title())
        dpg.set_value(self._eligible_tag,
                      f"{eligible_count(songs, self.eligible_threshold)}/{len(songs)}")

        avg = album_completion(songs)
        dpg.configure_item(self._album_bar_tag, default_value=avg / 100.0, overlay=f"{avg}%")
        dpg.bind_item_theme(self._album_bar_tag, get_progress_theme(avg >= 100))

        local_target = self.app_state.get_target().astimezone()
        dpg.set_value(self._target_tag, f"Target: {local_target.strftime('%Y-%m-%d %H:%M')}")
        self._tick_countdown()

        for card in self.cards:
            card.destroy()
        self.cards = []

        with dpg.table(header_row=False, parent=self._cards_tag,
                       policy=dpg.mvTable_SizingFixedFit) as table:
            for _ in range(self.columns):
                dpg.add_table_column()

            for row_start in range(0, len(songs), self.columns):
                with dpg.table_row():
                    for song in songs[row_start:row_start + self.columns]:
                        card = SongCard(song, self.app_state, self.stage_dialog, on_zoom=self.on_zoom)
                        card.create()
                        self.cards.append(card)

        # Only the newest table stays
        for child in dpg.get_item_children(self._cards_tag, 1) or []:
            if child != table:
                dpg.delete_item(child)

    def update(self):
        """Called every frame: push the latest countdown text."""
        text = self._countdown_text
        if text != self._shown_countdown_text and dpg.does_item_exist(self._countdown_tag):
            dpg.set_value(self._countdown_tag, text)
            self._shown_countdown_text = text

    def _tick_countdown(self):
        """Timer callback: recompute time left (no UI calls here)."""
        remaining = time_remaining(self.app_state.get_target())
        self._countdown_text = format_remaining(remaining)

    # Header callbacks

    def _on_title_entered(self, sender, app_data):
        if not self.app_state.rename_album(app_data):
            dpg.set_value(self._title_tag, self.app_state.get_title())

    def _on_edit_deadline(self):
        local_target = self.app_state.get_target().astimezone()
        dpg.set_value(self._deadline_input_tag, local_target.strftime("%Y-%m-%d %H:%M"))
        dpg.show_item(self._deadline_input_tag)
        dpg.focus_item(self._deadline_input_tag)

    def _on_deadline_entered(self, sender, app_data):
        dpg.hide_item(self._deadline_input_tag)
        text = (app_data or "").strip()
        if not text:
            return
        # Date-picker style input is local wall time
        try:
            value = datetime.strptime(text, "%Y-%m-%d %H:%M")
        except ValueError:
            value = text
        if not self.app_state.set_deadline(value):
            show_message("Invalid date", f"Could not read '{text}' as a date and time.")

    # Export / Import / Reset

    def _show_export_dialog(self):
        """Show file dialog for exporting a JSON snapshot."""
        if not dpg.does_item_exist("export_album_dialog"):
            with dpg.file_dialog(
                directory_selector=False,
                show=False,
                callback=self._handle_export,
                tag="export_album_dialog",
                width=700,
                height=400,
                default_path=str(Path.home() / "Documents"),
                default_filename=Path(EXPORT_FILENAME).stem
            ):
                dpg.add_file_extension(".json", color=(5, 150, 105, 255))
        dpg.show_item("export_album_dialog")

    def _handle_export(self, sender, app_data):
        """Write the snapshot to the chosen file (cancel = nothing)."""
        file_path = app_data.get('file_path_name')
        if not file_path:
            return

        store = self.app_state.get_store()
        blob = store.export_snapshot(self.app_state.get_songs(), self.app_state.get_title())
        try:
            written = store.write_snapshot(file_path, blob)
            print(f"[EXPORT] Album exported: {written}")
        except IOError as e:
            print(f"[ERROR] {e}")
            show_message("Export failed", str(e))

    def _show_import_dialog(self):
        """Show file dialog for importing a JSON snapshot."""
        if not dpg.does_item_exist("import_album_dialog"):
            with dpg.file_dialog(
                directory_selector=False,
                show=False,
                callback=self._handle_import,
                tag="import_album_dialog",
                width=700,
                height=400,
                default_path=str(Path.home() / "Documents")
            ):
                dpg.add_file_extension(".json", color=(5, 150, 105, 255))
                dpg.add_file_extension(".*")
        dpg.show_item("import_album_dialog")

    def _handle_import(self, sender, app_data):
        """Install the chosen snapshot and reload, or report why not."""
        selections = app_data.get('selections', {})
        if not selections:
            return
        file_path = list(selections.values())[0]

        try:
            self.app_state.get_store().read_snapshot(file_path)
        except SnapshotError as e:
            print(f"[IMPORT] {e}")
            show_message("Import failed", "Invalid JSON file")
            return

        self.app_state.reload()

    def _on_reset(self):
        def _reset():
            self.app_state.get_store().reset_to_defaults()
            self.app_state.reload()

        show_confirm("Reset", "Reset all data to defaults?", _reset)

    # Window Management

    def show(self):
        """Show the grid window."""
        if dpg.does_item_exist(self._window_tag):
            dpg.show_item(self._window_tag)

    def hide(self):
        """Hide the grid window."""
        if dpg.does_item_exist(self._window_tag):
            dpg.hide_item(self._window_tag)

    def destroy(self):
        """Stop the countdown and destroy the grid window."""
        self.countdown_timer.stop()
        for card in self.cards:
            card.destroy()
        self.cards = []
        if dpg.does_item_exist(self._window_tag):
            dpg.delete_item(self._window_tag)
