"""
Stage Edit Dialog for the album dashboard.

Modal popup opened by clicking a stage bar:
- Name input
- Progress slider (0-100)
- Cancel / Save (Save commits name and value together)
"""
import dearpygui.dearpygui as dpg
from typing import Optional, Callable

from core.constants import clamp_percent
from ui.theme import NeutralDark, create_success_button_theme


class StageEditDialog:
    """
    Shared modal for editing one stage.

    Only one stage is edited at a time, so a single window is created on
    first use and reused afterwards.
    """

    def __init__(self):
        self._window_tag = "stage_edit_dialog"
        self._name_tag = "stage_edit_name"
        self._value_tag = "stage_edit_value"
        self._initial_name = ""
        self._on_save: Optional[Callable[[str, int], None]] = None

    def open(self, name: str, value: int, on_save: Callable[[str, int], None]):
        """
        Show the dialog for a stage.

        Args:
            name: Current stage name
            value: Current stage value (0-100)
            on_save: Called with (name, value) when Save is clicked
        """
        self._initial_name = name
        self._on_save = on_save

        if not dpg.does_item_exist(self._window_tag):
            self._create()

        dpg.set_value(self._name_tag, name)
        dpg.set_value(self._value_tag, clamp_percent(int(value)))
        dpg.show_item(self._window_tag)

    def _create(self):
        with dpg.window(
            label="Edit bit",
            modal=True,
            show=False,
            tag=self._window_tag,
            pos=[740, 400],
            width=440,
            height=210,
            no_resize=True,
            no_collapse=True,
            on_close=self._cancel
        ):
            dpg.add_text("Name", color=NeutralDark.TEXT_SECONDARY)
            dpg.add_input_text(tag=self._name_tag, width=-1, on_enter=True, callback=self._save)
            dpg.add_spacer(height=8)

            dpg.add_text("Progress", color=NeutralDark.TEXT_SECONDARY)
            dpg.add_slider_int(
                tag=self._value_tag,
                min_value=0,
                max_value=100,
                width=-1,
                format="%d%%"
            )
            dpg.add_spacer(height=12)

            with dpg.group(horizontal=True):
                dpg.add_spacer(width=200)
                dpg.add_button(label="Cancel", width=100, callback=self._cancel)
                save_btn = dpg.add_button(label="Save", width=100, callback=self._save)
                dpg.bind_item_theme(save_btn, create_success_button_theme())

    def _save(self):
        name = (dpg.get_value(self._name_tag) or "").strip() or self._initial_name
        value = clamp_percent(int(dpg.get_value(self._value_tag) or 0))
        callback = self._on_save
        self._close()
        if callback:
            callback(name, value)

    def _cancel(self):
        self._close()

    def _close(self):
        self._on_save = None
        if dpg.does_item_exist(self._window_tag):
            dpg.hide_item(self._window_tag)

    def destroy(self):
        """Destroy the dialog window."""
        if dpg.does_item_exist(self._window_tag):
            dpg.delete_item(self._window_tag)
