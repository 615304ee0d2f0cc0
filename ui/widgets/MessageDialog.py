"""
Message and confirmation popups for the album dashboard.
"""
import dearpygui.dearpygui as dpg
from typing import Callable

from ui.theme import create_error_button_theme


_confirm_button_theme = None


def get_confirm_button_theme() -> int:
    """Red theme for the Yes button, created once and reused."""
    global _confirm_button_theme
    if _confirm_button_theme is None or not dpg.does_item_exist(_confirm_button_theme):
        _confirm_button_theme = create_error_button_theme()
    return _confirm_button_theme


def show_message(title: str, message: str):
    """Show a modal message with an OK button."""
    dialog_tag = "message_dialog"

    if dpg.does_item_exist(dialog_tag):
        dpg.delete_item(dialog_tag)

    with dpg.window(
        label=title,
        modal=True,
        tag=dialog_tag,
        pos=[710, 420],
        width=500,
        height=150,
        no_resize=True,
        no_collapse=True
    ):
        dpg.add_text(message, wrap=460)
        dpg.add_spacer(height=20)
        dpg.add_button(label="OK", width=120, callback=lambda: dpg.hide_item(dialog_tag))


def show_confirm(title: str, message: str, on_confirm: Callable[[], None]):
    """Ask a yes/no question; `on_confirm` runs only on Yes."""
    dialog_tag = "confirm_dialog"

    if dpg.does_item_exist(dialog_tag):
        dpg.delete_item(dialog_tag)

    def _confirm():
        dpg.hide_item(dialog_tag)
        on_confirm()

    with dpg.window(
        label=title,
        modal=True,
        tag=dialog_tag,
        pos=[710, 420],
        width=450,
        height=150,
        no_resize=True,
        no_collapse=True
    ):
        dpg.add_text(message)
        dpg.add_spacer(height=20)

        with dpg.group(horizontal=True):
            yes_btn = dpg.add_button(label="Yes", width=120, callback=_confirm)
            dpg.bind_item_theme(yes_btn, get_confirm_button_theme())
            dpg.add_spacer(width=10)
            dpg.add_button(label="Cancel", width=120, callback=lambda: dpg.hide_item(dialog_tag))
