# FILE: shared/keyboards.py

from typing import Iterable, List, Optional, Sequence, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from database.models.menu_button import MenuButton, StoredMenuButton
from shared.callback_types import (
    GuideMenu, MainMenu, PriceMenu, ShowGuideStep, ShowPriceCategory, SupportMenu
)
from shared.navigator import StepPosition
from shared.translator import _


def _in_pairs(buttons: Iterable[InlineKeyboardButton]) -> List[List[InlineKeyboardButton]]:
    rows = []
    it = iter(buttons)
    for first in it:
        row = [first]
        try:
            row.append(next(it))
        except StopIteration:
            pass
        rows.append(row)
    return rows


def build_grid(rows: Sequence[Sequence[MenuButton]]) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[button.to_inline() for button in row] for row in rows if row])


def back_to_main_button() -> MenuButton:
    return MenuButton.navigate(_("keyboards.back_to_main_menu"), MainMenu().to_string())


# =============================================================================
#  Main menu
# =============================================================================

def get_main_menu_keyboard(extra_buttons: Sequence[StoredMenuButton] = ()) -> InlineKeyboardMarkup:
    rows = [
        [MenuButton.navigate(_("keyboards.main_menu.guides"), GuideMenu().to_string())],
        [
            MenuButton.navigate(_("keyboards.main_menu.prices"), PriceMenu().to_string()),
            MenuButton.navigate(_("keyboards.main_menu.support"), SupportMenu().to_string()),
        ],
    ]
    keyboard = [[button.to_inline() for button in row] for row in rows]
    keyboard.extend(_in_pairs(stored.as_menu_button().to_inline() for stored in extra_buttons))
    return InlineKeyboardMarkup(keyboard)


# =============================================================================
#  Guides
# =============================================================================

def get_guide_menu_keyboard(groups: Sequence[Tuple[str, str, int]]) -> InlineKeyboardMarkup:
    """groups: (group_code, display_name, first_step) per guide."""
    keyboard = _in_pairs(
        InlineKeyboardButton(display_name, callback_data=ShowGuideStep(code, first_step).to_string())
        for code, display_name, first_step in groups
    )
    keyboard.append([back_to_main_button().to_inline()])
    return InlineKeyboardMarkup(keyboard)


def get_guide_step_keyboard(group_code: str, position: StepPosition,
                            download_link: Optional[str] = None) -> InlineKeyboardMarkup:
    rows: List[List[MenuButton]] = []
    if download_link:
        rows.append([MenuButton.open_link(_("keyboards.guides.download"), download_link)])

    nav_row = []
    if position.previous is not None:
        nav_row.append(MenuButton.navigate(
            _("keyboards.guides.previous"), ShowGuideStep(group_code, position.previous).to_string()
        ))
    if position.next is not None:
        nav_row.append(MenuButton.navigate(
            _("keyboards.guides.next"), ShowGuideStep(group_code, position.next).to_string()
        ))
    rows.append(nav_row)

    rows.append([
        MenuButton.navigate(_("keyboards.guides.back_to_guides"), GuideMenu().to_string()),
        back_to_main_button(),
    ])
    return build_grid(rows)


def get_view_step_keyboard(group_code: str, step_number: int) -> InlineKeyboardMarkup:
    return build_grid([[
        MenuButton.navigate(_("keyboards.guides.preview"), ShowGuideStep(group_code, step_number).to_string())
    ]])


# =============================================================================
#  Prices
# =============================================================================

def get_price_menu_keyboard(item_types: Sequence[str]) -> InlineKeyboardMarkup:
    keyboard = _in_pairs(
        InlineKeyboardButton(item_type, callback_data=ShowPriceCategory(item_type).to_string())
        for item_type in item_types
    )
    keyboard.append([back_to_main_button().to_inline()])
    return InlineKeyboardMarkup(keyboard)


def get_price_category_keyboard() -> InlineKeyboardMarkup:
    return build_grid([[
        MenuButton.navigate(_("keyboards.prices.back_to_categories"), PriceMenu().to_string()),
        back_to_main_button(),
    ]])


# =============================================================================
#  Support
# =============================================================================

def get_support_keyboard(admin_username: Optional[str], group_link: Optional[str]) -> InlineKeyboardMarkup:
    rows: List[List[MenuButton]] = []
    if admin_username:
        rows.append([MenuButton.open_link(
            _("keyboards.support.contact_admin"), f"https://t.me/{admin_username.lstrip('@')}"
        )])
    if group_link:
        rows.append([MenuButton.open_link(_("keyboards.support.join_group"), group_link)])
    rows.append([back_to_main_button()])
    return build_grid(rows)
