# FILE: modules/prices/handler.py

from shared.callback_types import PriceMenu, ShowPriceCategory
from shared.dispatcher import Dispatcher
from .actions import (
    add_price,
    delete_price,
    list_prices,
    show_price_menu,
    show_price_category,
)


def register(dispatcher: Dispatcher) -> None:
    dispatcher.add_command('/addprice', add_price)
    dispatcher.add_command('/delprice', delete_price)
    dispatcher.add_command('/listprices', list_prices)

    dispatcher.add_action(PriceMenu, show_price_menu)
    dispatcher.add_action(ShowPriceCategory, show_price_category)
