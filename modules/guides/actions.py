# --- START OF FILE modules/guides/actions.py ---
import html
import logging

from telegram import Update
from telegram.ext import ContextTypes

from database import keyspace
from database.crud import guide as crud_guide
from database.keyspace import InvalidKeyPart
from database.models.guide import GuideStep
from shared.auth import admin_only
from shared.command_args import (
    CommandSyntaxError, parse_args, parse_positive_int, require_url
)
from shared.keyboards import (
    get_guide_menu_keyboard, get_guide_step_keyboard, get_view_step_keyboard
)
from shared.navigator import locate_step
from shared.replies import attached_photo_id, reply, reply_storage_failure, reply_usage
from shared.screen import Screen, ScreenContent, answer_quietly, render_screen
from shared.translator import _

LOGGER = logging.getLogger(__name__)


def _code_and_step(positional: list) -> tuple:
    return keyspace.normalize_group_code(positional[0]), parse_positive_int(positional[1])


# =============================================================================
#  Admin commands
# =============================================================================

@admin_only
async def add_guide_step(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 2:
            raise CommandSyntaxError("Expected a group code and a step number.")
        if not args.quoted_at(0):
            raise CommandSyntaxError("The step text must be given in quotes.")
        code, step_number = _code_and_step(args.positional)
        download_link = args.quoted_at(3)
        if download_link:
            require_url(download_link)
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "guides.usage_add", e)
        return

    step = GuideStep(
        group_code=code,
        step_number=step_number,
        text=args.quoted_at(0),
        media_ref=args.quoted_at(1) or attached_photo_id(update),
        display_name=args.quoted_at(2),
        download_link=download_link,
    )
    if not await crud_guide.put_step(step):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} saved guide step {code}/{step_number}.")
    await reply(
        update, context,
        _("guides.step_saved", code=html.escape(code), step=step_number),
        reply_markup=get_view_step_keyboard(code, step_number),
    )


@admin_only
async def add_guide_download(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 3 or args.quoted:
            raise CommandSyntaxError("Expected a group code, a step number and a link.")
        code, step_number = _code_and_step(args.positional)
        url = require_url(args.positional[2])
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "guides.usage_add_download", e)
        return

    step = await crud_guide.set_download_link(code, step_number, url)
    if step is None:
        await reply(update, context, _("guides.step_missing", code=html.escape(code), step=step_number))
        return

    LOGGER.info(f"Admin {update.effective_user.id} set the download link of {code}/{step_number}.")
    await reply(
        update, context,
        _("guides.download_saved", code=html.escape(code), step=step_number),
        reply_markup=get_view_step_keyboard(code, step_number),
    )


@admin_only
async def delete_guide_step(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 2 or args.quoted:
            raise CommandSyntaxError("Expected a group code and a step number.")
        code, step_number = _code_and_step(args.positional)
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "guides.usage_delete_step", e)
        return

    if await crud_guide.get_step(code, step_number) is None:
        await reply(update, context, _("guides.step_missing", code=html.escape(code), step=step_number))
        return
    if not await crud_guide.delete_step(code, step_number):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} deleted guide step {code}/{step_number}.")
    await reply(update, context, _("guides.step_deleted", code=html.escape(code), step=step_number))


@admin_only
async def delete_guide_group(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 1 or args.quoted:
            raise CommandSyntaxError("Expected exactly one group code.")
        code = keyspace.normalize_group_code(args.positional[0])
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "guides.usage_delete_group", e)
        return

    count = await crud_guide.delete_group(code)
    if count == 0:
        await reply(update, context, _("guides.group_missing", code=html.escape(code)))
        return

    LOGGER.info(f"Admin {update.effective_user.id} deleted {count} step(s) of guide {code}.")
    await reply(update, context, _("guides.group_deleted", code=html.escape(code), count=count))


@admin_only
async def list_guides(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    groups = await crud_guide.list_groups()
    if not groups:
        await reply(update, context, _("guides.list_empty"))
        return

    lines = [_("guides.list_title")]
    for code, steps in groups.items():
        first = await crud_guide.get_step(code, steps[0])
        name = first.display_name if first else code
        lines.append(_(
            "guides.list_line",
            code=html.escape(code),
            name=html.escape(name),
            steps=", ".join(str(n) for n in steps),
        ))
    await reply(update, context, "\n".join(lines))


# =============================================================================
#  Public browsing
# =============================================================================

async def show_guide_menu(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    groups = await crud_guide.list_groups()
    if not groups:
        await answer_quietly(context.bot, query, _("guides.no_guides"), show_alert=True)
        return

    entries = []
    for code, steps in groups.items():
        first = await crud_guide.get_step(code, steps[0])
        entries.append((code, first.display_name if first else code, steps[0]))

    await answer_quietly(context.bot, query)
    content = ScreenContent(text=_("guides.menu_title"), buttons=get_guide_menu_keyboard(entries))
    await render_screen(context.bot, Screen.from_callback(query), content)


async def show_guide_step(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    action = event.action
    code = action.group_code

    position = locate_step(await crud_guide.list_step_numbers(code), action.step_number)
    step = await crud_guide.get_step(code, action.step_number) if position else None
    if step is None:
        LOGGER.info(f"Guide step {code}/{action.step_number} requested by {query.from_user.id} was not found.")
        await answer_quietly(context.bot, query, _("guides.step_not_found"), show_alert=True)
        return

    await answer_quietly(context.bot, query)
    content = ScreenContent(
        text=_(
            "guides.step_caption",
            name=html.escape(step.display_name),
            ordinal=position.ordinal,
            total=position.total_count,
            text=step.text,
        ),
        media=step.media_ref,
        buttons=get_guide_step_keyboard(code, position, step.download_link),
    )
    result = await render_screen(context.bot, Screen.from_callback(query), content)
    if not result.delivered:
        LOGGER.error(f"Guide step {code}/{step.step_number} could not be shown to user {query.from_user.id}.")
