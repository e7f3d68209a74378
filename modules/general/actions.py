# --- START OF FILE modules/general/actions.py ---
import html
import logging

from telegram import Update
from telegram.ext import ContextTypes

from config import config
from database.crud import menu_button as crud_menu_button
from database.crud import welcome as crud_welcome
from shared.auth import is_admin
from shared.keyboards import get_main_menu_keyboard, get_support_keyboard
from shared.replies import reply
from shared.screen import Screen, ScreenContent, answer_quietly, render_screen
from shared.translator import _

LOGGER = logging.getLogger(__name__)


async def build_main_menu(update: Update) -> ScreenContent:
    """The welcome text (stored or default) with the main menu and any extra link buttons."""
    user = update.effective_user
    welcome = await crud_welcome.get_welcome()
    if welcome:
        text, media = welcome.text, welcome.media_ref
    else:
        first_name = html.escape(user.first_name) if user and user.first_name else ""
        text, media = _("general.welcome_default", first_name=first_name), None

    extra_buttons = await crud_menu_button.list_menu_buttons()
    return ScreenContent(text=text, media=media, buttons=get_main_menu_keyboard(extra_buttons))


# =============================================================================
#  Commands
# =============================================================================

async def start(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    user = update.effective_user
    LOGGER.info(f"User {user.id if user else 'Unknown'} opened the main menu with {event.command}.")
    content = await build_main_menu(update)
    await render_screen(context.bot, Screen.for_chat(update.effective_chat.id), content)


async def show_help(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    text = _("general.help_public")
    user = update.effective_user
    if user and is_admin(user.id):
        text += _("general.help_admin")
    await reply(update, context, text)


async def show_my_id(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    await reply(update, context, _("general.your_telegram_id", user_id=update.effective_user.id))


async def unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    LOGGER.info(f"Unknown command '{event.text}' in chat {update.effective_chat.id}.")
    await reply(update, context, _("errors.unknown_command"))


# =============================================================================
#  Plain messages
# =============================================================================

async def handle_free_text(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    await reply(update, context, _("general.free_text_hint"))


async def handle_photo(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    """Admins get the media id back so they can use it in guide steps and the welcome message."""
    user = update.effective_user
    if user and is_admin(user.id):
        await reply(update, context, _("general.photo_file_id", file_id=html.escape(event.file_id)))
    else:
        await reply(update, context, _("general.photo_not_expected"))


async def handle_mention(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    await reply(update, context, _("general.mention_reply"))


async def handle_membership_change(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    LOGGER.info(f"Bot membership in chat {event.chat_id} changed: {event.old_status} -> {event.new_status}.")


# =============================================================================
#  Menu actions
# =============================================================================

async def show_main_menu(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    await answer_quietly(context.bot, query)
    content = await build_main_menu(update)
    await render_screen(context.bot, Screen.from_callback(query), content)


async def show_support(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    await answer_quietly(context.bot, query)

    text = _("general.support_title")
    if config.SUPPORT_USERNAME:
        text += _("general.support_admin_line", username=html.escape(config.SUPPORT_USERNAME.lstrip('@')))
    if config.SUPPORT_GROUP_LINK:
        text += _("general.support_group_line", link=html.escape(config.SUPPORT_GROUP_LINK, quote=True))
    if not config.SUPPORT_USERNAME and not config.SUPPORT_GROUP_LINK:
        text += _("general.support_unavailable")

    content = ScreenContent(
        text=text,
        buttons=get_support_keyboard(config.SUPPORT_USERNAME, config.SUPPORT_GROUP_LINK),
    )
    await render_screen(context.bot, Screen.from_callback(query), content)


async def unknown_menu_action(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    LOGGER.warning(f"Unhandled callback data: {event.data!r}")
    await answer_quietly(context.bot, update.callback_query, _("errors.unknown_action"))
