import asyncio

import pytest

from bot import build_dispatcher
from conftest import ADMIN_ID, make_callback_update, make_message_update
from database.crud import menu_button as crud_menu_button
from database.crud import product_price as crud_price
from database.crud import welcome as crud_welcome
from shared.translator import _


@pytest.fixture(scope="module")
def dispatcher():
    return build_dispatcher()


def _admin(dispatcher, context, text, **kwargs):
    asyncio.run(dispatcher.dispatch(make_message_update(text, user_id=ADMIN_ID, **kwargs), context))


def _last_text(context):
    return context.bot.calls_to("send_message")[-1]["text"]


def _keyboard_data(markup):
    return [button.callback_data or button.url for row in markup.inline_keyboard for button in row]


# --- welcome ---

def test_start_uses_default_welcome(dispatcher, kv_db, context):
    asyncio.run(dispatcher.dispatch(make_message_update("/start"), context))
    sent = context.bot.calls_to("send_message")[0]
    assert sent["text"] == _("general.welcome_default", first_name="Alice")
    assert _keyboard_data(sent["reply_markup"]) == ["gm", "pm", "sp"]


def test_custom_welcome_with_photo_and_extra_buttons(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/setwelcome "Hello <b>friends</b>" "AgAC-welcome"')
    _admin(dispatcher, context, '/addmenubutton site "Our site" "https://example.com"')
    context.bot.calls.clear()

    asyncio.run(dispatcher.dispatch(make_message_update("/menu"), context))
    photo = context.bot.calls_to("send_photo")[0]
    assert photo["photo"] == "AgAC-welcome"
    assert photo["caption"] == "Hello <b>friends</b>"
    assert _keyboard_data(photo["reply_markup"])[-1] == "https://example.com"


def test_main_menu_callback_from_photo_screen_is_replaced(dispatcher, kv_db, context):
    asyncio.run(dispatcher.dispatch(make_callback_update("mm", with_photo=True), context))
    assert context.bot.methods() == ["answer_callback_query", "delete_message", "send_message"]


def test_delete_welcome_restores_default(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/setwelcome "Custom"')
    assert asyncio.run(crud_welcome.get_welcome()).text == "Custom"

    _admin(dispatcher, context, "/deletewelcome")
    assert _last_text(context) == _("welcome.deleted")
    assert asyncio.run(crud_welcome.get_welcome()) is None


def test_setwelcome_needs_quoted_text(dispatcher, kv_db, context):
    _admin(dispatcher, context, "/setwelcome Hello there")
    assert "/setwelcome" in _last_text(context)
    assert asyncio.run(crud_welcome.get_welcome()) is None


# --- menu buttons ---

def test_menu_button_lifecycle(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addmenubutton channel "Our channel" "https://t.me/example"')
    buttons = asyncio.run(crud_menu_button.list_menu_buttons())
    assert [(b.code, b.label, b.url) for b in buttons] == [("CHANNEL", "Our channel", "https://t.me/example")]

    _admin(dispatcher, context, "/listmenubuttons")
    assert "CHANNEL" in _last_text(context)

    _admin(dispatcher, context, "/delmenubutton channel")
    assert _last_text(context) == _("menu_buttons.deleted", code="CHANNEL")
    assert asyncio.run(crud_menu_button.list_menu_buttons()) == []

    _admin(dispatcher, context, "/delmenubutton channel")
    assert _last_text(context) == _("menu_buttons.missing", code="CHANNEL")


def test_menu_button_needs_a_link(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addmenubutton channel "Our channel" "t.me/example"')
    assert "/addmenubutton" in _last_text(context)
    assert asyncio.run(crud_menu_button.list_menu_buttons()) == []


# --- prices ---

def test_price_lifecycle(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addprice vpn m1 3,000 "1 month" "Unlimited traffic"')
    _admin(dispatcher, context, '/addprice vpn m3 8000 "3 months"')
    _admin(dispatcher, context, '/addprice game uc60 1500 "60 UC"')

    assert asyncio.run(crud_price.list_item_types()) == ["GAME", "VPN"]
    vpn = asyncio.run(crud_price.list_prices("vpn"))
    assert [(p.product_id, p.price, p.description) for p in vpn] == [
        ("m1", 3000, "Unlimited traffic"),
        ("m3", 8000, None),
    ]

    _admin(dispatcher, context, "/listprices VPN")
    assert "3,000" in _last_text(context) and "60 UC" not in _last_text(context)

    _admin(dispatcher, context, "/delprice VPN m1")
    assert _last_text(context) == _("prices.deleted", item_type="VPN", product_id="m1")
    assert [p.product_id for p in asyncio.run(crud_price.list_prices())] == ["uc60", "m3"]


def test_price_must_be_a_number(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addprice vpn m1 cheap "1 month"')
    assert "/addprice" in _last_text(context)
    assert asyncio.run(crud_price.list_prices()) == []


def test_price_menu_and_category(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addprice vpn m1 3000 "1 month"')
    context.bot.calls.clear()

    asyncio.run(dispatcher.dispatch(make_callback_update("pm"), context))
    menu = context.bot.calls_to("edit_message_text")[0]
    assert _keyboard_data(menu["reply_markup"]) == ["pc:VPN", "mm"]

    asyncio.run(dispatcher.dispatch(make_callback_update("pc:VPN"), context))
    category = context.bot.calls_to("edit_message_text")[1]
    assert "1 month" in category["text"] and "3,000" in category["text"]
    assert _keyboard_data(category["reply_markup"]) == ["pm", "mm"]


def test_price_menu_without_prices_answers_with_alert(dispatcher, kv_db, context):
    asyncio.run(dispatcher.dispatch(make_callback_update("pm"), context))
    assert context.bot.calls_to("answer_callback_query")[0]["text"] == _("prices.no_prices")


# --- general ---

def test_help_shows_admin_section_only_to_admins(dispatcher, kv_db, context):
    asyncio.run(dispatcher.dispatch(make_message_update("/help"), context))
    _admin(dispatcher, context, "/help")
    public, admin = [s["text"] for s in context.bot.calls_to("send_message")]
    assert "/addguidestep" not in public
    assert "/addguidestep" in admin


def test_admin_photo_gets_media_id(dispatcher, kv_db, context):
    _admin(dispatcher, context, None, photo_id="AgAC-file")
    assert "AgAC-file" in _last_text(context)

    asyncio.run(dispatcher.dispatch(make_message_update(photo_id="AgAC-file"), context))
    assert _last_text(context) == _("general.photo_not_expected")


def test_support_screen(dispatcher, kv_db, context, monkeypatch):
    from config import config

    monkeypatch.setattr(config, "SUPPORT_USERNAME", "@helpdesk")
    monkeypatch.setattr(config, "SUPPORT_GROUP_LINK", "https://t.me/helpgroup")
    asyncio.run(dispatcher.dispatch(make_callback_update("sp"), context))

    edit = context.bot.calls_to("edit_message_text")[0]
    assert "@helpdesk" in edit["text"]
    assert _keyboard_data(edit["reply_markup"]) == ["https://t.me/helpdesk", "https://t.me/helpgroup", "mm"]
