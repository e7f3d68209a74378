# FILE: modules/guides/handler.py

from shared.callback_types import GuideMenu, ShowGuideStep
from shared.dispatcher import Dispatcher
from .actions import (
    add_guide_step,
    add_guide_download,
    delete_guide_step,
    delete_guide_group,
    list_guides,
    show_guide_menu,
    show_guide_step,
)


def register(dispatcher: Dispatcher) -> None:
    """Registers guide authoring commands and the public guide browser."""
    dispatcher.add_command('/addguidestep', add_guide_step)
    dispatcher.add_command('/addguidedownload', add_guide_download)
    dispatcher.add_command('/delguidestep', delete_guide_step)
    dispatcher.add_command('/delguidegroup', delete_guide_group)
    dispatcher.add_command('/listguides', list_guides)

    dispatcher.add_action(GuideMenu, show_guide_menu)
    dispatcher.add_action(ShowGuideStep, show_guide_step)
