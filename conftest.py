from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# config.py reads the environment at import time.
os.environ["TELEGRAM_BOT_TOKEN"] = "123456:TEST-TOKEN"
os.environ["AUTHORIZED_USER_IDS"] = "1001"
os.environ["KV_NAMESPACES"] = "GUIDE_DATA,SALES_DATA"
os.environ.pop("DATABASE_URL", None)

from telegram import CallbackQuery, Chat, Message, PhotoSize, Update, User  # noqa: E402
from telegram.error import BadRequest  # noqa: E402

from database import engine as db_engine  # noqa: E402
from shared import bot_identity  # noqa: E402

ADMIN_ID = 1001
USER_ID = 2002
BOT_USERNAME = "GuideTestBot"


class FakeBot:
    """Records every outbound call. Set `failures[method] = exc` to make a call raise."""

    def __init__(self, username: str = BOT_USERNAME) -> None:
        self.username = username
        self.calls = []
        self.failures = {}
        self._next_message_id = 500

    def _record(self, method, **kwargs):
        self.calls.append((method, kwargs))
        failure = self.failures.get(method)
        if failure is not None:
            raise failure

    def _message(self, chat_id, text=None, caption=None, photo=None):
        self._next_message_id += 1
        return Message(
            message_id=self._next_message_id,
            date=datetime.now(timezone.utc),
            chat=Chat(id=chat_id, type=Chat.PRIVATE),
            text=text,
            caption=caption,
            photo=[PhotoSize(photo, photo, 90, 90)] if photo else None,
        )

    def methods(self):
        return [method for method, _kwargs in self.calls]

    def calls_to(self, method):
        return [kwargs for name, kwargs in self.calls if name == method]

    async def get_me(self):
        self._record("get_me")
        return User(id=42, first_name="Guide", is_bot=True, username=self.username)

    async def send_message(self, chat_id, text, **kwargs):
        self._record("send_message", chat_id=chat_id, text=text, **kwargs)
        return self._message(chat_id, text=text)

    async def send_photo(self, chat_id, photo, caption=None, **kwargs):
        self._record("send_photo", chat_id=chat_id, photo=photo, caption=caption, **kwargs)
        return self._message(chat_id, caption=caption, photo=photo)

    async def edit_message_text(self, text, chat_id=None, message_id=None, **kwargs):
        self._record("edit_message_text", chat_id=chat_id, message_id=message_id, text=text, **kwargs)
        return self._message(chat_id, text=text)

    async def delete_message(self, chat_id, message_id, **kwargs):
        self._record("delete_message", chat_id=chat_id, message_id=message_id)
        return True

    async def answer_callback_query(self, callback_query_id, text=None, show_alert=False, **kwargs):
        self._record("answer_callback_query", callback_query_id=callback_query_id, text=text, show_alert=show_alert)
        return True


class FakeContext:
    def __init__(self, bot: FakeBot) -> None:
        self.bot = bot


def make_user(user_id: int = USER_ID, first_name: str = "Alice") -> User:
    return User(id=user_id, first_name=first_name, is_bot=False)


def make_message_update(text=None, user_id=USER_ID, chat_type=Chat.PRIVATE, chat_id=None,
                        photo_id=None, caption=None, update_id=1) -> Update:
    chat_id = chat_id if chat_id is not None else (user_id if chat_type == Chat.PRIVATE else -100500)
    message = Message(
        message_id=10,
        date=datetime.now(timezone.utc),
        chat=Chat(id=chat_id, type=chat_type),
        from_user=make_user(user_id),
        text=text,
        caption=caption,
        photo=[PhotoSize(photo_id, photo_id, 90, 90)] if photo_id else None,
    )
    return Update(update_id=update_id, message=message)


def make_callback_update(data, user_id=USER_ID, message_id=77, with_photo=False, update_id=2) -> Update:
    message = Message(
        message_id=message_id,
        date=datetime.now(timezone.utc),
        chat=Chat(id=user_id, type=Chat.PRIVATE),
        text=None if with_photo else "previous screen",
        photo=[PhotoSize("old-photo", "old-photo-u", 90, 90)] if with_photo else None,
    )
    query = CallbackQuery(
        id="cbq-1",
        from_user=make_user(user_id),
        chat_instance="chat-instance",
        data=data,
        message=message,
    )
    return Update(update_id=update_id, callback_query=query)


def not_found_error() -> BadRequest:
    return BadRequest("Message to delete not found")


@pytest.fixture(autouse=True)
def _forget_bot_identity():
    bot_identity.forget()
    yield
    bot_identity.forget()


@pytest.fixture
def fake_bot() -> FakeBot:
    return FakeBot()


@pytest.fixture
def context(fake_bot) -> FakeContext:
    return FakeContext(fake_bot)


@pytest.fixture
def kv_db(tmp_path):
    """A fresh SQLite database (through aiosqlite) for each test."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}"
    asyncio.run(db_engine.init_db(url))
    yield url
    asyncio.run(db_engine.close_db())
