# FILE: modules/general/handler.py

from shared.callback_types import MainMenu, SupportMenu
from shared.dispatcher import (
    BotMention, Dispatcher, FreeText, MembershipChange, PhotoMessage,
    UnknownCommand, UnknownMenuAction
)
from .actions import (
    start,
    show_help,
    show_my_id,
    unknown_command,
    handle_free_text,
    handle_photo,
    handle_mention,
    handle_membership_change,
    show_main_menu,
    show_support,
    unknown_menu_action,
)


def register(dispatcher: Dispatcher) -> None:
    dispatcher.add_command('/start', start)
    dispatcher.add_command('/menu', start)
    dispatcher.add_command('/help', show_help)
    dispatcher.add_command('/myid', show_my_id)

    dispatcher.add_action(MainMenu, show_main_menu)
    dispatcher.add_action(SupportMenu, show_support)

    dispatcher.on(UnknownCommand, unknown_command)
    dispatcher.on(FreeText, handle_free_text)
    dispatcher.on(PhotoMessage, handle_photo)
    dispatcher.on(BotMention, handle_mention)
    dispatcher.on(MembershipChange, handle_membership_change)
    dispatcher.on(UnknownMenuAction, unknown_menu_action)
