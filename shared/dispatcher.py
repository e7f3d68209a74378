# FILE: shared/dispatcher.py

"""
Update dispatcher.

Every inbound update is first classified into exactly one event variant
(command, free text, photo, mention, menu action, membership change, ...)
and only then routed. Classification holds all the chat-scope rules; the
handlers never have to re-check where a message came from.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional, Type

from telegram import Update
from telegram.constants import ChatType
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from shared.auth import is_admin
from shared.bot_identity import get_or_fetch_username
from shared.callback_types import CALLBACK_REGISTRY, CallbackData, parse_callback_data
from shared.translator import _

LOGGER = logging.getLogger(__name__)

GROUP_CHAT_TYPES = (ChatType.GROUP, ChatType.SUPERGROUP)


# =============================================================================
#  Event variants
# =============================================================================

@dataclass(frozen=True)
class CommandMessage:
    command: str
    args_text: str


@dataclass(frozen=True)
class UnknownCommand:
    text: str


@dataclass(frozen=True)
class FreeText:
    text: str


@dataclass(frozen=True)
class PhotoMessage:
    file_id: str
    caption: Optional[str] = None


@dataclass(frozen=True)
class BotMention:
    text: str


@dataclass(frozen=True)
class MenuAction:
    action: CallbackData


@dataclass(frozen=True)
class UnknownMenuAction:
    data: Optional[str]


@dataclass(frozen=True)
class MembershipChange:
    chat_id: int
    old_status: Optional[str]
    new_status: Optional[str]


@dataclass(frozen=True)
class Ignored:
    reason: str


EVENT_TYPES = (
    CommandMessage, UnknownCommand, FreeText, PhotoMessage, BotMention,
    MenuAction, UnknownMenuAction, MembershipChange, Ignored,
)

# Routed through their own tables instead of a per-type handler.
_TABLE_ROUTED = (CommandMessage, MenuAction, Ignored)

EventHandler = Callable[..., Awaitable[None]]


def _at_token_boundary(text: str, end: int) -> bool:
    return end == len(text) or text[end].isspace() or text[end] == '@'


class Dispatcher:
    def __init__(self):
        self._commands: Dict[str, EventHandler] = {}
        self._actions: Dict[Type[CallbackData], EventHandler] = {}
        self._handlers: Dict[type, EventHandler] = {}

    # --- Registration ---

    def add_command(self, token: str, handler: EventHandler) -> None:
        token = token.strip().lower()
        if token in self._commands:
            raise ValueError(f"Command '{token}' is already registered.")
        self._commands[token] = handler

    def add_action(self, callback_cls: Type[CallbackData], handler: EventHandler) -> None:
        if callback_cls in self._actions:
            raise ValueError(f"Menu action '{callback_cls.__name__}' is already registered.")
        self._actions[callback_cls] = handler

    def on(self, event_type: type, handler: EventHandler) -> None:
        if event_type in _TABLE_ROUTED or event_type not in EVENT_TYPES:
            raise ValueError(f"'{event_type.__name__}' cannot take a direct handler.")
        self._handlers[event_type] = handler

    def check_complete(self) -> None:
        """Fails at startup if any event variant or callback verb has nowhere to go."""
        missing = [t.__name__ for t in EVENT_TYPES if t not in _TABLE_ROUTED and t not in self._handlers]
        missing += [cls.__name__ for cls in CALLBACK_REGISTRY.values() if cls not in self._actions]
        if missing:
            raise RuntimeError(f"Dispatcher has no handler for: {', '.join(missing)}")

    @property
    def commands(self) -> tuple:
        return tuple(sorted(self._commands))

    # --- Classification ---

    def match_command(self, text: str) -> Optional[tuple]:
        """
        Returns (token, rest) for the longest registered command that the text
        starts with, or None. The match must end at a token boundary so that
        '/addguidestep' never matches '/addguidestepx'.
        """
        stripped = text.strip()
        lowered = stripped.lower()
        best = None
        for token in self._commands:
            if lowered.startswith(token) and _at_token_boundary(lowered, len(token)):
                if best is None or len(token) > len(best):
                    best = token
        if best is None:
            return None
        return best, stripped[len(best):]

    async def classify(self, update: Update, bot) -> object:
        query = update.callback_query
        if query:
            action = parse_callback_data(query.data)
            return MenuAction(action) if action else UnknownMenuAction(query.data)

        member_update = update.my_chat_member or update.chat_member
        if member_update:
            return MembershipChange(
                chat_id=member_update.chat.id,
                old_status=member_update.old_chat_member.status if member_update.old_chat_member else None,
                new_status=member_update.new_chat_member.status if member_update.new_chat_member else None,
            )

        message = update.message
        if message is None:
            return Ignored("unsupported update type")

        text = message.text or message.caption or ""
        is_private = message.chat.type == ChatType.PRIVATE
        sender_is_admin = bool(message.from_user) and is_admin(message.from_user.id)

        username = None
        if not is_private:
            username = await get_or_fetch_username(bot)
        mentioned = bool(username) and f"@{username.lower()}" in text.lower()

        if message.chat.type in GROUP_CHAT_TYPES and not (text.startswith('/') or mentioned or sender_is_admin):
            return Ignored("unaddressed message in group chat")

        matched = self.match_command(text)
        if matched:
            token, rest = matched
            if rest.startswith('@'):
                addressee, _sep, rest = rest[1:].partition(' ')
                if username and addressee.lower() != username.lower():
                    return Ignored("command addressed to another bot")
            return CommandMessage(command=token, args_text=rest.strip())

        if text.startswith('/') and len(text.strip()) > 1:
            _command, _sep, addressee = text.split()[0].partition('@')
            if addressee and username and addressee.lower() != username.lower():
                return Ignored("command addressed to another bot")
            return UnknownCommand(text.split()[0])

        if not is_private:
            if mentioned:
                return BotMention(text)
            return Ignored("free text outside private chat")

        if message.photo:
            return PhotoMessage(file_id=message.photo[-1].file_id, caption=message.caption)
        if message.text:
            return FreeText(message.text)
        return Ignored("unsupported message content")

    # --- Routing ---

    async def route(self, event, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if isinstance(event, Ignored):
            LOGGER.debug(f"[dispatch] Ignoring update {update.update_id}: {event.reason}")
            return

        if isinstance(event, CommandMessage):
            handler = self._commands[event.command]
        elif isinstance(event, MenuAction):
            handler = self._actions.get(type(event.action))
            if handler is None:
                event = UnknownMenuAction(event.action.to_string())
                handler = self._handlers[UnknownMenuAction]
        else:
            handler = self._handlers[type(event)]

        await handler(update, context, event)

    async def dispatch(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Entry point for python-telegram-bot: classify, route, and never let an error escape."""
        try:
            event = await self.classify(update, context.bot)
            LOGGER.info(f"[dispatch] Update {update.update_id} -> {event}")
            await self.route(event, update, context)
        except Exception as e:
            LOGGER.error(f"[dispatch] Unhandled error while handling update {update.update_id}: {e}", exc_info=True)
            await self._notify_failure(update, context)

    async def _notify_failure(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        text = _("errors.generic_failure")
        try:
            if update.callback_query:
                await context.bot.answer_callback_query(update.callback_query.id, text=text, show_alert=True)
            elif update.effective_chat:
                await context.bot.send_message(chat_id=update.effective_chat.id, text=text)
        except TelegramError as e:
            LOGGER.error(f"[dispatch] Could not deliver failure notice: {e}")
