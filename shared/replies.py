# FILE: shared/replies.py

import html
import logging
from typing import Optional

from telegram import InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes

from shared.screen import send_text
from shared.translator import _

LOGGER = logging.getLogger(__name__)


async def reply(update: Update, context: ContextTypes.DEFAULT_TYPE, text: str,
                reply_markup: Optional[InlineKeyboardMarkup] = None) -> None:
    await send_text(context.bot, update.effective_chat.id, text, reply_markup=reply_markup)


async def reply_usage(update: Update, context: ContextTypes.DEFAULT_TYPE, usage_key: str, error: Exception) -> None:
    """Answers a malformed command with the reason and the expected grammar. Nothing is written."""
    LOGGER.info(f"Rejected command from {update.effective_user.id if update.effective_user else 'Unknown'}: {error}")
    await reply(update, context, _("errors.usage_prefix", reason=html.escape(str(error)), usage=_(usage_key)))


def attached_photo_id(update: Update) -> Optional[str]:
    """The file id of a photo the command was sent as a caption of, if any."""
    message = update.message
    if message and message.photo:
        return message.photo[-1].file_id
    return None


async def reply_storage_failure(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await reply(update, context, _("errors.storage_failure"))
