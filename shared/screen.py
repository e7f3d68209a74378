# FILE: shared/screen.py

"""
Screen rendering.

A "screen" is the message a menu currently lives in. Telegram cannot edit a
photo message into a text message (or back), so a change of media shape
means delete + resend; text-to-text transitions are edited in place to keep
the chat tidy.
"""

import enum
import html
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from telegram import CallbackQuery, InlineKeyboardMarkup, LinkPreviewOptions, Message
from telegram.constants import ParseMode
from telegram.error import BadRequest, TelegramError

LOGGER = logging.getLogger(__name__)

NO_PREVIEW = LinkPreviewOptions(is_disabled=True)
MAX_MESSAGE_LENGTH = 4000

_TAG_RE = re.compile(r"<[^>]*>")


class RenderStrategy(str, enum.Enum):
    EDIT = "edit"
    REPLACE = "replace"
    FRESH = "fresh"


@dataclass(frozen=True)
class Screen:
    chat_id: int
    message_id: Optional[int] = None
    has_media: bool = False

    @classmethod
    def for_chat(cls, chat_id: int) -> "Screen":
        """A screen with nothing on it yet, e.g. for a typed command."""
        return cls(chat_id=chat_id)

    @classmethod
    def from_callback(cls, query: CallbackQuery) -> "Screen":
        message = query.message
        if isinstance(message, Message):
            return cls(chat_id=message.chat_id, message_id=message.message_id, has_media=bool(message.photo))
        if message is not None:
            # Too old to touch: the content is unknown, so send a new one.
            return cls(chat_id=message.chat.id)
        return cls(chat_id=query.from_user.id)


@dataclass(frozen=True)
class ScreenContent:
    text: str
    media: Optional[str] = None
    buttons: Optional[InlineKeyboardMarkup] = None
    parse_mode: str = ParseMode.HTML


@dataclass(frozen=True)
class RenderResult:
    strategy: RenderStrategy
    message: Optional[Message]
    delivered: bool = True


def choose_strategy(screen: Screen, content: ScreenContent) -> RenderStrategy:
    if screen.message_id is None:
        return RenderStrategy.FRESH
    if screen.has_media or content.media:
        return RenderStrategy.REPLACE
    return RenderStrategy.EDIT


async def delete_quietly(bot, chat_id: int, message_id: int) -> bool:
    """Deletes a message; a message that is already gone counts as deleted."""
    try:
        await bot.delete_message(chat_id=chat_id, message_id=message_id)
        return True
    except BadRequest as e:
        if "not found" in str(e).lower():
            LOGGER.debug(f"Message {message_id} in chat {chat_id} was already gone.")
            return True
        LOGGER.warning(f"Could not delete message {message_id} in chat {chat_id}: {e}")
        return False
    except TelegramError as e:
        LOGGER.warning(f"Could not delete message {message_id} in chat {chat_id}: {e}")
        return False


async def _send(bot, chat_id: int, content: ScreenContent) -> Message:
    if content.media:
        return await bot.send_photo(
            chat_id=chat_id,
            photo=content.media,
            caption=content.text,
            parse_mode=content.parse_mode,
            reply_markup=content.buttons,
        )
    return await bot.send_message(
        chat_id=chat_id,
        text=content.text,
        parse_mode=content.parse_mode,
        reply_markup=content.buttons,
        link_preview_options=NO_PREVIEW,
    )


def plain_text(html_text: str) -> str:
    """Markup-free version of an HTML message, cut to fit one message."""
    return html.unescape(_TAG_RE.sub("", html_text))[:MAX_MESSAGE_LENGTH]


async def render_screen(bot, screen: Screen, content: ScreenContent) -> RenderResult:
    """Shows content on the screen using exactly one strategy, with one fallback send on failure."""
    strategy = choose_strategy(screen, content)

    if strategy is RenderStrategy.EDIT:
        try:
            message = await bot.edit_message_text(
                chat_id=screen.chat_id,
                message_id=screen.message_id,
                text=content.text,
                parse_mode=content.parse_mode,
                reply_markup=content.buttons,
                link_preview_options=NO_PREVIEW,
            )
            return RenderResult(strategy, message)
        except BadRequest as e:
            if "message is not modified" in str(e).lower():
                return RenderResult(strategy, None)
            LOGGER.warning(f"Edit failed in chat {screen.chat_id}, replacing the message instead: {e}")
        except TelegramError as e:
            LOGGER.warning(f"Edit failed in chat {screen.chat_id}, replacing the message instead: {e}")
        strategy = RenderStrategy.REPLACE

    if strategy is RenderStrategy.REPLACE:
        await delete_quietly(bot, screen.chat_id, screen.message_id)

    try:
        message = await _send(bot, screen.chat_id, content)
        return RenderResult(strategy, message)
    except TelegramError as e:
        LOGGER.error(f"Sending screen to chat {screen.chat_id} failed ({strategy.value}): {e}")

    # Last try: plain text, no media, no markup.
    try:
        message = await bot.send_message(
            chat_id=screen.chat_id,
            text=plain_text(content.text) if content.parse_mode == ParseMode.HTML else content.text,
            parse_mode=None,
            reply_markup=content.buttons,
            link_preview_options=NO_PREVIEW,
        )
        return RenderResult(RenderStrategy.FRESH, message)
    except TelegramError as e:
        LOGGER.error(f"Fallback send to chat {screen.chat_id} failed as well: {e}", exc_info=True)
        return RenderResult(strategy, None, delivered=False)


# =============================================================================
#  Plain replies
# =============================================================================

def split_text(text: str, chunk_size: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Splits on line boundaries so each chunk fits in one Telegram message. Overlong lines are cut."""
    chunks = []
    current = ""
    for line in text.split("\n"):
        while len(line) > chunk_size:
            if current.strip():
                chunks.append(current.strip())
            current = ""
            chunks.append(line[:chunk_size])
            line = line[chunk_size:]
        if current and len(current) + len(line) + 1 > chunk_size:
            chunks.append(current.strip())
            current = ""
        current += line + "\n"
    if current.strip():
        chunks.append(current.strip())
    return chunks


async def send_text(bot, chat_id: int, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None,
                    parse_mode: str = ParseMode.HTML) -> Optional[Message]:
    """Sends a reply, split into several messages if needed. The keyboard goes on the last one."""
    chunks = split_text(text) or [text]
    message = None
    for i, chunk in enumerate(chunks):
        message = await bot.send_message(
            chat_id=chat_id,
            text=chunk,
            parse_mode=parse_mode,
            reply_markup=reply_markup if i == len(chunks) - 1 else None,
            link_preview_options=NO_PREVIEW,
        )
    return message


async def answer_quietly(bot, query: CallbackQuery, text: Optional[str] = None, show_alert: bool = False) -> bool:
    """Answers a callback query; an expired query is logged, not raised."""
    try:
        await bot.answer_callback_query(query.id, text=text, show_alert=show_alert)
        return True
    except TelegramError as e:
        LOGGER.warning(f"Could not answer callback query {query.id}: {e}")
        return False
