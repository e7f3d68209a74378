# --- START OF FILE database/models/menu_button.py ---
from dataclasses import dataclass
from typing import Any, Dict, Optional

from telegram import InlineKeyboardButton


@dataclass(frozen=True)
class MenuButton:
    """A labelled button that either navigates to a menu action or opens a link."""
    label: str
    target: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self):
        if (self.target is None) == (self.url is None):
            raise ValueError("A menu button needs exactly one of 'target' or 'url'.")

    @classmethod
    def navigate(cls, label: str, target: str) -> "MenuButton":
        return cls(label=label, target=target)

    @classmethod
    def open_link(cls, label: str, url: str) -> "MenuButton":
        return cls(label=label, url=url)

    def to_inline(self) -> InlineKeyboardButton:
        if self.url:
            return InlineKeyboardButton(self.label, url=self.url)
        return InlineKeyboardButton(self.label, callback_data=self.target)


@dataclass(frozen=True)
class StoredMenuButton:
    """An admin-managed link button shown on the main menu."""
    code: str
    label: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "label": self.label, "url": self.url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredMenuButton":
        return cls(code=data["code"], label=data["label"], url=data["url"])

    def as_menu_button(self) -> MenuButton:
        return MenuButton.open_link(self.label, self.url)

# --- END OF FILE database/models/menu_button.py ---
