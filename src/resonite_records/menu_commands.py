"""Main menu configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MenuEntry:
    """Declarative main menu entry."""

    key: str
    label: str


class MenuOption(Enum):
    """Enum of main menu options (single source of truth)."""

    MANAGE_SCREENS = MenuEntry("1", "Manage Screens Records (RadiantDash)")
    REVIEW_MESSAGE_ITEMS = MenuEntry("2", "Review Message Items")
    SEARCH = MenuEntry("3", "Search Records")
    DISPLAY_TOKEN = MenuEntry("4", "Display Auth Token")
    EDIT_PROFILE = MenuEntry("5", "Edit Profile")
    EXIT = MenuEntry("6", "Exit")


def menu_lines() -> list[str]:
    """Return the menu formatted for display."""
    return [f"{option.value.key}. {option.value.label}" for option in MenuOption]


def parse_menu_choice(raw: str | None) -> MenuOption | None:
    """Return the option selected by ``raw``, or None if invalid."""
    cleaned = (raw or "").strip()
    for option in MenuOption:
        if option.value.key == cleaned:
            return option
    return None
