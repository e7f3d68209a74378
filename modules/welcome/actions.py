# --- START OF FILE modules/welcome/actions.py ---
import logging

from telegram import Update
from telegram.ext import ContextTypes

from database.crud import welcome as crud_welcome
from database.models.welcome import WelcomeConfig
from shared.auth import admin_only
from shared.command_args import CommandSyntaxError, parse_args
from shared.replies import attached_photo_id, reply, reply_storage_failure, reply_usage
from shared.translator import _

LOGGER = logging.getLogger(__name__)


@admin_only
async def set_welcome(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if args.positional:
            raise CommandSyntaxError("The welcome text must be given in quotes.")
        if not args.quoted_at(0):
            raise CommandSyntaxError("The welcome text cannot be empty.")
    except CommandSyntaxError as e:
        await reply_usage(update, context, "welcome.usage_set", e)
        return

    welcome = WelcomeConfig(text=args.quoted_at(0), media_ref=args.quoted_at(1) or attached_photo_id(update))
    if not await crud_welcome.set_welcome(welcome):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} updated the welcome message (media: {bool(welcome.media_ref)}).")
    await reply(update, context, _("welcome.saved"))


@admin_only
async def delete_welcome(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    if not await crud_welcome.delete_welcome():
        await reply_storage_failure(update, context)
        return
    LOGGER.info(f"Admin {update.effective_user.id} removed the custom welcome message.")
    await reply(update, context, _("welcome.deleted"))
