import asyncio

import pytest

from bot import build_dispatcher
from conftest import ADMIN_ID, USER_ID, make_callback_update, make_message_update
from database.crud import guide as crud_guide
from database.models.guide import GuideStep
from shared.translator import _


@pytest.fixture(scope="module")
def dispatcher():
    return build_dispatcher()


def _admin(dispatcher, context, text, **kwargs):
    asyncio.run(dispatcher.dispatch(make_message_update(text, user_id=ADMIN_ID, **kwargs), context))


def _seed(*steps):
    async def scenario():
        for step in steps:
            await crud_guide.put_step(step)
    asyncio.run(scenario())


def _keyboard_data(markup):
    return [button.callback_data or button.url for row in markup.inline_keyboard for button in row]


def test_add_step_with_only_a_body(dispatcher, kv_db, context):
    _admin(dispatcher, context, '/addguidestep FOO 1 "hello"')

    step = asyncio.run(crud_guide.get_step("FOO", 1))
    assert step.text == "hello"
    assert step.media_ref is None
    assert step.download_link is None
    assert step.display_name == "FOO"
    reply = context.bot.calls_to("send_message")[-1]
    assert "FOO" in reply["text"]
    assert _keyboard_data(reply["reply_markup"]) == ["gs:FOO:1"]


def test_add_step_with_every_field(dispatcher, kv_db, context):
    _admin(dispatcher, context,
           '/addguidestep netmod 2 "Tap <b>Import</b>" "AgAC-2" "NetMod Syna" "https://example.com/netmod.apk"')

    step = asyncio.run(crud_guide.get_step("NETMOD", 2))
    assert step.text == "Tap <b>Import</b>"
    assert step.media_ref == "AgAC-2"
    assert step.display_name == "NetMod Syna"
    assert step.download_link == "https://example.com/netmod.apk"


def test_add_step_from_photo_caption_uses_the_photo(dispatcher, kv_db, context):
    _admin(dispatcher, context, None, caption='/addguidestep FOO 3 "with picture"', photo_id="AgAC-attached")
    assert asyncio.run(crud_guide.get_step("FOO", 3)).media_ref == "AgAC-attached"


@pytest.mark.parametrize("text", [
    '/addguidestep FOO "hello"',
    '/addguidestep FOO x "hello"',
    '/addguidestep FOO 0 "hello"',
    '/addguidestep FOO 1',
    '/addguidestep FOO 1 "hello',
    '/addguidestep FO:O 1 "hello"',
    '/addguidestep FOO 1 "hello" "" "" "not-a-link"',
])
def test_bad_arguments_get_usage_and_write_nothing(dispatcher, kv_db, context, text):
    _admin(dispatcher, context, text)

    reply = context.bot.calls_to("send_message")[-1]["text"]
    assert "/addguidestep" in reply
    assert asyncio.run(crud_guide.list_groups()) == {}


def test_add_download_link(dispatcher, kv_db, context):
    _seed(GuideStep("NETMOD", 1, "one", media_ref="AgAC"))
    _admin(dispatcher, context, "/addguidedownload netmod 1 https://dl.example.com/app.apk")

    step = asyncio.run(crud_guide.get_step("NETMOD", 1))
    assert step.download_link == "https://dl.example.com/app.apk"
    assert step.media_ref == "AgAC"


def test_add_download_link_to_missing_step(dispatcher, kv_db, context):
    _admin(dispatcher, context, "/addguidedownload NETMOD 4 https://dl.example.com/app.apk")
    assert context.bot.calls_to("send_message")[-1]["text"] == _("guides.step_missing", code="NETMOD", step=4)


def test_delete_step_and_group(dispatcher, kv_db, context):
    _seed(*(GuideStep("NETMOD", n, "x") for n in (1, 3, 5)), GuideStep("V2BOX", 1, "y"))

    _admin(dispatcher, context, "/delguidestep NETMOD 3")
    assert asyncio.run(crud_guide.list_step_numbers("NETMOD")) == [1, 5]

    _admin(dispatcher, context, "/delguidegroup netmod")
    assert context.bot.calls_to("send_message")[-1]["text"] == _("guides.group_deleted", code="NETMOD", count=2)
    assert asyncio.run(crud_guide.list_groups()) == {"V2BOX": [1]}

    _admin(dispatcher, context, "/delguidegroup netmod")
    assert context.bot.calls_to("send_message")[-1]["text"] == _("guides.group_missing", code="NETMOD")


def test_list_guides(dispatcher, kv_db, context):
    _seed(GuideStep("NETMOD", 3, "x", display_name="NetMod"), GuideStep("NETMOD", 1, "x", display_name="NetMod"))
    _admin(dispatcher, context, "/listguides")
    text = context.bot.calls_to("send_message")[-1]["text"]
    assert "NETMOD" in text and "1, 3" in text


# --- browsing ---

def test_guide_menu_lists_groups_with_first_step(dispatcher, kv_db, context):
    _seed(GuideStep("NETMOD", 3, "x", display_name="NetMod"), GuideStep("NETMOD", 2, "x", display_name="NetMod"),
          GuideStep("V2BOX", 1, "y"))
    asyncio.run(dispatcher.dispatch(make_callback_update("gm"), context))

    edit = context.bot.calls_to("edit_message_text")[0]
    data = _keyboard_data(edit["reply_markup"])
    assert data[:2] == ["gs:NETMOD:2", "gs:V2BOX:1"]
    assert data[-1] == "mm"


def test_guide_menu_without_guides_answers_with_alert(dispatcher, kv_db, context):
    asyncio.run(dispatcher.dispatch(make_callback_update("gm"), context))
    assert context.bot.methods() == ["answer_callback_query"]
    assert context.bot.calls_to("answer_callback_query")[0]["show_alert"] is True


def test_browsing_a_sparse_group(dispatcher, kv_db, context):
    _seed(*(GuideStep("NETMOD", n, f"step {n}") for n in (1, 3, 5)))
    asyncio.run(dispatcher.dispatch(make_callback_update("gs:NETMOD:3"), context))

    edit = context.bot.calls_to("edit_message_text")[0]
    assert "step 3" in edit["text"]
    assert "2" in edit["text"] and "3" in edit["text"]
    data = _keyboard_data(edit["reply_markup"])
    assert "gs:NETMOD:1" in data
    assert "gs:NETMOD:5" in data
    assert "gm" in data


def test_step_with_photo_replaces_the_text_screen(dispatcher, kv_db, context):
    _seed(GuideStep("NETMOD", 1, "look", media_ref="AgAC-1", download_link="https://dl.example.com"))
    asyncio.run(dispatcher.dispatch(make_callback_update("gs:NETMOD:1"), context))

    assert context.bot.methods() == ["answer_callback_query", "delete_message", "send_photo"]
    photo = context.bot.calls_to("send_photo")[0]
    assert photo["photo"] == "AgAC-1"
    assert "https://dl.example.com" in _keyboard_data(photo["reply_markup"])


def test_text_step_after_photo_step_is_not_edited(dispatcher, kv_db, context):
    _seed(GuideStep("NETMOD", 2, "text only"))
    asyncio.run(dispatcher.dispatch(make_callback_update("gs:NETMOD:2", with_photo=True), context))

    assert "edit_message_text" not in context.bot.methods()
    assert context.bot.methods()[-2:] == ["delete_message", "send_message"]


def test_deleted_step_is_not_found(dispatcher, kv_db, context):
    _seed(*(GuideStep("NETMOD", n, "x") for n in (1, 3, 5)))
    _admin(dispatcher, context, "/delguidestep NETMOD 3")

    asyncio.run(dispatcher.dispatch(make_callback_update("gs:NETMOD:3", user_id=USER_ID), context))
    answer = context.bot.calls_to("answer_callback_query")[-1]
    assert answer["text"] == _("guides.step_not_found")
    assert answer["show_alert"] is True
    assert "edit_message_text" not in context.bot.methods()
