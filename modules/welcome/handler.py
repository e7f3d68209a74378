# FILE: modules/welcome/handler.py

from shared.dispatcher import Dispatcher
from .actions import set_welcome, delete_welcome


def register(dispatcher: Dispatcher) -> None:
    dispatcher.add_command('/setwelcome', set_welcome)
    dispatcher.add_command('/deletewelcome', delete_welcome)
