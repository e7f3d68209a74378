# FILE: modules/menu_buttons/handler.py

from shared.dispatcher import Dispatcher
from .actions import add_menu_button, delete_menu_button, list_menu_buttons


def register(dispatcher: Dispatcher) -> None:
    """Admin commands for the extra link buttons on the main menu."""
    dispatcher.add_command('/addmenubutton', add_menu_button)
    dispatcher.add_command('/delmenubutton', delete_menu_button)
    dispatcher.add_command('/listmenubuttons', list_menu_buttons)
