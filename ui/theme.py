"""
Dark theme for the album dashboard.
Provides color palette and DearPyGui theme configuration.
"""
import dearpygui.dearpygui as dpg


class NeutralDark:
    """Neutral dark color constants."""

    # Background colors
    BG_PAGE = (10, 10, 10, 255)            # #0A0A0A - Page background
    BG_ZOOM = (0, 0, 0, 255)               # #000000 - Zoomed view background
    BG_CARD = (23, 23, 23, 255)            # #171717 - Song card
    BG_INPUT = (38, 38, 38, 255)           # #262626 - Input fields, bar track
    BG_HOVER = (64, 64, 64, 255)           # #404040 - Hover state

    # Border colors
    BORDER = (38, 38, 38, 255)             # #262626 - Card borders
    BORDER_INPUT = (64, 64, 64, 255)       # #404040 - Input borders

    # Text colors
    TEXT_PRIMARY = (245, 245, 245, 255)    # #F5F5F5 - Primary text
    TEXT_SECONDARY = (163, 163, 163, 255)  # #A3A3A3 - Labels
    TEXT_MUTED = (115, 115, 115, 255)      # #737373 - Hints

    # Progress colors
    BAR_IN_PROGRESS = (180, 83, 9, 255)    # #B45309 - Amber, under 100%
    BAR_COMPLETE = (4, 120, 87, 255)       # #047857 - Emerald, at 100%

    # Status colors
    SUCCESS = (5, 150, 105, 255)           # #059669 - Save
    ERROR = (220, 80, 80, 255)             # #DC5050 - Reset/remove

    BUTTON_NORMAL = (38, 38, 38, 255)      # Normal button
    BUTTON_HOVER = (64, 64, 64, 255)       # Hovered button
    BUTTON_ACTIVE = (82, 82, 82, 255)      # Pressed button

    # Spacing
    FRAME_PADDING = (8, 4)                 # Padding inside widgets
    ITEM_SPACING = (6, 4)                  # Space between widgets
    WINDOW_PADDING = (16, 16)              # Padding inside windows


def apply_dashboard_theme() -> None:
    """
    Apply the dark theme to DearPyGui.
    Call this once during application initialization.
    """
    with dpg.theme() as global_theme:
        with dpg.theme_component(dpg.mvAll):
            # Window/frame colors
            dpg.add_theme_color(dpg.mvThemeCol_WindowBg, NeutralDark.BG_PAGE)
            dpg.add_theme_color(dpg.mvThemeCol_ChildBg, NeutralDark.BG_CARD)
            dpg.add_theme_color(dpg.mvThemeCol_PopupBg, NeutralDark.BG_CARD)
            dpg.add_theme_color(dpg.mvThemeCol_Border, NeutralDark.BORDER)
            dpg.add_theme_color(dpg.mvThemeCol_FrameBg, NeutralDark.BG_INPUT)
            dpg.add_theme_color(dpg.mvThemeCol_FrameBgHovered, NeutralDark.BG_HOVER)
            dpg.add_theme_color(dpg.mvThemeCol_FrameBgActive, NeutralDark.BG_HOVER)

            # Text colors
            dpg.add_theme_color(dpg.mvThemeCol_Text, NeutralDark.TEXT_PRIMARY)
            dpg.add_theme_color(dpg.mvThemeCol_TextDisabled, NeutralDark.TEXT_MUTED)

            # Button colors
            dpg.add_theme_color(dpg.mvThemeCol_Button, NeutralDark.BUTTON_NORMAL)
            dpg.add_theme_color(dpg.mvThemeCol_ButtonHovered, NeutralDark.BUTTON_HOVER)
            dpg.add_theme_color(dpg.mvThemeCol_ButtonActive, NeutralDark.BUTTON_ACTIVE)

            # Progress bars and sliders
            dpg.add_theme_color(dpg.mvThemeCol_PlotHistogram, NeutralDark.BAR_IN_PROGRESS)
            dpg.add_theme_color(dpg.mvThemeCol_SliderGrab, NeutralDark.BAR_IN_PROGRESS)
            dpg.add_theme_color(dpg.mvThemeCol_SliderGrabActive, NeutralDark.BAR_COMPLETE)

            # Spacing
            dpg.add_theme_style(dpg.mvStyleVar_FramePadding, NeutralDark.FRAME_PADDING[0], NeutralDark.FRAME_PADDING[1])
            dpg.add_theme_style(dpg.mvStyleVar_ItemSpacing, NeutralDark.ITEM_SPACING[0], NeutralDark.ITEM_SPACING[1])
            dpg.add_theme_style(dpg.mvStyleVar_WindowPadding, NeutralDark.WINDOW_PADDING[0], NeutralDark.WINDOW_PADDING[1])
            dpg.add_theme_style(dpg.mvStyleVar_FrameRounding, 8)
            dpg.add_theme_style(dpg.mvStyleVar_ChildRounding, 16)
            dpg.add_theme_style(dpg.mvStyleVar_GrabRounding, 8)

    dpg.bind_theme(global_theme)


def apply_ui_scale(scale: float) -> None:
    """
    Scale all text and widgets.

    Args:
        scale: Font scale (0.5 - 2.0)
    """
    dpg.set_global_font_scale(max(0.5, min(2.0, scale)))


_progress_themes = {}


def get_progress_theme(complete: bool) -> int:
    """
    Theme for a progress bar: emerald at 100%, amber below.

    Themes are created once and shared between bars.

    Returns:
        Theme id that can be bound to progress bars
    """
    if complete not in _progress_themes:
        color = NeutralDark.BAR_COMPLETE if complete else NeutralDark.BAR_IN_PROGRESS
        with dpg.theme() as progress_theme:
            with dpg.theme_component(dpg.mvProgressBar):
                dpg.add_theme_color(dpg.mvThemeCol_PlotHistogram, color)
                dpg.add_theme_color(dpg.mvThemeCol_FrameBg, NeutralDark.BG_INPUT)
        _progress_themes[complete] = progress_theme
    return _progress_themes[complete]


def create_success_button_theme() -> int:
    """
    Create success/save button theme (green).

    Returns:
        Theme id that can be bound to buttons
    """
    with dpg.theme() as success_theme:
        with dpg.theme_component(dpg.mvButton):
            dpg.add_theme_color(dpg.mvThemeCol_Button, NeutralDark.SUCCESS)
            dpg.add_theme_color(dpg.mvThemeCol_ButtonHovered, (16, 185, 129, 255))
            dpg.add_theme_color(dpg.mvThemeCol_ButtonActive, (4, 120, 87, 255))
            dpg.add_theme_color(dpg.mvThemeCol_Text, (255, 255, 255, 255))

    return success_theme


def create_error_button_theme() -> int:
    """
    Create error/reset button theme (red).

    Returns:
        Theme id that can be bound to buttons
    """
    with dpg.theme() as error_theme:
        with dpg.theme_component(dpg.mvButton):
            dpg.add_theme_color(dpg.mvThemeCol_Button, NeutralDark.ERROR)
            dpg.add_theme_color(dpg.mvThemeCol_ButtonHovered, (230, 90, 90, 255))
            dpg.add_theme_color(dpg.mvThemeCol_ButtonActive, (200, 70, 70, 255))
            dpg.add_theme_color(dpg.mvThemeCol_Text, (255, 255, 255, 255))

    return error_theme


def create_zoom_window_theme() -> int:
    """
    Create theme for the zoomed song window (pure black background).

    Returns:
        Theme id that can be bound to a window
    """
    with dpg.theme() as zoom_theme:
        with dpg.theme_component(dpg.mvWindowAppItem):
            dpg.add_theme_color(dpg.mvThemeCol_WindowBg, NeutralDark.BG_ZOOM)

    return zoom_theme
