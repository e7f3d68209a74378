# FILE: shared/auth.py

from functools import wraps
import logging
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from config import config
from shared.translator import _

LOGGER = logging.getLogger(__name__)


def is_admin(user_id) -> bool:
    """A simple, reusable check if a user is an admin."""
    return user_id in config.AUTHORIZED_USER_IDS


async def deny(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Answers with the one fixed denial text, whatever the reason was."""
    try:
        if update.callback_query:
            await context.bot.answer_callback_query(update.callback_query.id, text=_("errors.admin_only"), show_alert=True)
        elif update.effective_chat:
            await context.bot.send_message(chat_id=update.effective_chat.id, text=_("errors.admin_only"))
    except TelegramError as e:
        LOGGER.error(f"Could not deliver the denial message: {e}")


def admin_only(func):
    """Lets the handler run only for users in AUTHORIZED_USER_IDS."""
    @wraps(func)
    async def wrapped(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user or not is_admin(user.id):
            LOGGER.warning(f"Unauthorized access denied for {user.id if user else 'Unknown'} in '{func.__name__}'.")
            await deny(update, context)
            return
        return await func(update, context, *args, **kwargs)
    return wrapped
