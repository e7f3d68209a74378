# --- START OF FILE modules/menu_buttons/actions.py ---
import html
import logging

from telegram import Update
from telegram.ext import ContextTypes

from database import keyspace
from database.crud import menu_button as crud_menu_button
from database.keyspace import InvalidKeyPart
from database.models.menu_button import StoredMenuButton
from shared.auth import admin_only
from shared.command_args import CommandSyntaxError, parse_args, require_url
from shared.replies import reply, reply_storage_failure, reply_usage
from shared.translator import _

LOGGER = logging.getLogger(__name__)


@admin_only
async def add_menu_button(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 1 or len(args.quoted) != 2:
            raise CommandSyntaxError("Expected a code, a quoted label and a quoted link.")
        code = keyspace.normalize_button_code(args.positional[0])
        label = args.quoted_at(0)
        if not label:
            raise CommandSyntaxError("The button label cannot be empty.")
        url = require_url(args.quoted_at(1))
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "menu_buttons.usage_add", e)
        return

    if not await crud_menu_button.put_menu_button(StoredMenuButton(code=code, label=label, url=url)):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} saved menu button {code}.")
    await reply(update, context, _("menu_buttons.saved", code=html.escape(code)))


@admin_only
async def delete_menu_button(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 1 or args.quoted:
            raise CommandSyntaxError("Expected exactly one button code.")
        code = keyspace.normalize_button_code(args.positional[0])
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "menu_buttons.usage_delete", e)
        return

    if await crud_menu_button.get_menu_button(code) is None:
        await reply(update, context, _("menu_buttons.missing", code=html.escape(code)))
        return
    if not await crud_menu_button.delete_menu_button(code):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} deleted menu button {code}.")
    await reply(update, context, _("menu_buttons.deleted", code=html.escape(code)))


@admin_only
async def list_menu_buttons(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    buttons = await crud_menu_button.list_menu_buttons()
    if not buttons:
        await reply(update, context, _("menu_buttons.list_empty"))
        return

    lines = [_("menu_buttons.list_title")]
    lines += [
        _("menu_buttons.list_line", code=html.escape(b.code), label=html.escape(b.label), url=html.escape(b.url))
        for b in buttons
    ]
    await reply(update, context, "\n".join(lines))
