"""
Settings menus - the main settings list and the interface sub-list.
"""

from typing import Any, Callable, Dict

from tenfoot.config.settings import save_settings
from tenfoot.services.activation import CallbackAction, CommandAction
from tenfoot.ui.screens.menu_list_view import MenuListView

INTERFACE_SETTINGS_ID = "interface-settings"


def _on_off(value: bool) -> str:
    return "On" if value else "Off"


def populate_settings_list(
    menu: MenuListView,
    views,
    settings: Dict[str, Any],
    on_exit: Callable[[], None],
) -> None:
    """
    Fill the main settings list.

    Args:
        menu: Empty list to fill
        views: ViewStateMachine used for navigation entries
        settings: Settings dictionary (control-centre commands)
        on_exit: Called by the "Exit Interface" entry
    """
    menu.set_on_back(views.back)
    menu.add_item("back", "Back", CallbackAction(views.back))
    menu.add_item(
        INTERFACE_SETTINGS_ID,
        "Interface Settings",
        CallbackAction(lambda: views.show_sub_list(INTERFACE_SETTINGS_ID)),
    )
    menu.add_item(
        "display-settings",
        "Display Settings",
        CommandAction(settings["display_settings_command"]),
    )
    menu.add_item(
        "audio-settings",
        "Audio Settings",
        CommandAction(settings["audio_settings_command"]),
    )
    menu.add_item("exit", "Exit Interface", CallbackAction(on_exit))


def populate_interface_list(
    menu: MenuListView,
    views,
    settings: Dict[str, Any],
    feedback,
    grid,
) -> None:
    """
    Fill the interface-settings sub-list.

    Toggles apply at once and are saved to the settings file.
    """
    menu.set_on_back(views.back)
    menu.add_item("back", "Back", CallbackAction(views.back))

    def toggle_click_sounds() -> None:
        settings["click_sounds"] = not settings.get("click_sounds", True)
        feedback.enabled = settings["click_sounds"]
        save_settings(settings)

    def toggle_pad_with_spacing() -> None:
        settings["pad_with_spacing"] = not settings.get("pad_with_spacing", False)
        grid.set_pad_with_spacing(settings["pad_with_spacing"])
        save_settings(settings)

    menu.add_item(
        "click-sounds",
        "Click Sounds",
        CallbackAction(toggle_click_sounds),
        secondary=lambda: _on_off(settings.get("click_sounds", True)),
    )
    menu.add_item(
        "grid-padding",
        "Grid Spacing Padding",
        CallbackAction(toggle_pad_with_spacing),
        secondary=lambda: _on_off(settings.get("pad_with_spacing", False)),
    )
