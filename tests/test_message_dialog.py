import dearpygui.dearpygui as dpg
import pytest

from ui.widgets.MessageDialog import get_confirm_button_theme, show_confirm


@pytest.fixture
def dpg_context():
    dpg.create_context()
    yield
    dpg.destroy_context()


def count_themes():
    return sum(1 for item in dpg.get_all_items()
               if dpg.get_item_type(item) == "mvAppItemType::mvTheme")


def test_confirm_theme_is_created_once(dpg_context):
    first = get_confirm_button_theme()
    assert get_confirm_button_theme() == first
    assert dpg.does_item_exist(first)


def test_reopening_confirm_does_not_add_themes(dpg_context):
    show_confirm("Reset", "Reset all data to defaults?", lambda: None)
    themes = count_themes()

    for _ in range(5):
        show_confirm("Reset", "Reset all data to defaults?", lambda: None)

    assert count_themes() == themes
