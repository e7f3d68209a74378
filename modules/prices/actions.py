# --- START OF FILE modules/prices/actions.py ---
import html
import logging
from typing import List

from telegram import Update
from telegram.ext import ContextTypes

from database import keyspace
from database.crud import product_price as crud_price
from database.keyspace import InvalidKeyPart
from database.models.product_price import ProductPrice
from shared.auth import admin_only
from shared.command_args import CommandSyntaxError, parse_args, parse_non_negative_int
from shared.keyboards import get_price_category_keyboard, get_price_menu_keyboard
from shared.replies import reply, reply_storage_failure, reply_usage
from shared.screen import Screen, ScreenContent, answer_quietly, render_screen
from shared.translator import _

LOGGER = logging.getLogger(__name__)


def format_price(price: int) -> str:
    return f"{price:,}"


def _category_lines(products: List[ProductPrice]) -> List[str]:
    lines = []
    for product in products:
        lines.append(_("prices.item_line", name=html.escape(product.name), price=format_price(product.price)))
        if product.description:
            lines.append(_("prices.item_description", description=html.escape(product.description)))
    return lines


# =============================================================================
#  Admin commands
# =============================================================================

@admin_only
async def add_price(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 3:
            raise CommandSyntaxError("Expected a type, a product id and a price.")
        name = args.quoted_at(0)
        if not name:
            raise CommandSyntaxError("The product name must be given in quotes.")
        product = ProductPrice(
            item_type=keyspace.normalize_item_type(args.positional[0]),
            product_id=keyspace.normalize_product_id(args.positional[1]),
            price=parse_non_negative_int(args.positional[2]),
            name=name,
            description=args.quoted_at(1),
        )
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "prices.usage_add", e)
        return

    if not await crud_price.put_price(product):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} set price {product.item_type}/{product.product_id} = {product.price}.")
    await reply(update, context, _(
        "prices.saved",
        name=html.escape(product.name),
        item_type=html.escape(product.item_type),
        product_id=html.escape(product.product_id),
        price=format_price(product.price),
    ))


@admin_only
async def delete_price(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) != 2 or args.quoted:
            raise CommandSyntaxError("Expected a type and a product id.")
        item_type = keyspace.normalize_item_type(args.positional[0])
        product_id = keyspace.normalize_product_id(args.positional[1])
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "prices.usage_delete", e)
        return

    names = {"item_type": html.escape(item_type), "product_id": html.escape(product_id)}
    if await crud_price.get_price(item_type, product_id) is None:
        await reply(update, context, _("prices.missing", **names))
        return
    if not await crud_price.delete_price(item_type, product_id):
        await reply_storage_failure(update, context)
        return

    LOGGER.info(f"Admin {update.effective_user.id} deleted price {item_type}/{product_id}.")
    await reply(update, context, _("prices.deleted", **names))


@admin_only
async def list_prices(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    try:
        args = parse_args(event.args_text)
        if len(args.positional) > 1 or args.quoted:
            raise CommandSyntaxError("Expected at most one type.")
        item_type = keyspace.normalize_item_type(args.positional[0]) if args.positional else None
    except (CommandSyntaxError, InvalidKeyPart) as e:
        await reply_usage(update, context, "prices.usage_list", e)
        return

    products = await crud_price.list_prices(item_type)
    if not products:
        await reply(update, context, _("prices.list_empty"))
        return

    lines = [_("prices.list_title")]
    lines += [
        _(
            "prices.list_line",
            item_type=html.escape(p.item_type),
            product_id=html.escape(p.product_id),
            name=html.escape(p.name),
            price=format_price(p.price),
        )
        for p in products
    ]
    await reply(update, context, "\n".join(lines))


# =============================================================================
#  Public browsing
# =============================================================================

async def show_price_menu(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    item_types = await crud_price.list_item_types()
    if not item_types:
        await answer_quietly(context.bot, query, _("prices.no_prices"), show_alert=True)
        return

    await answer_quietly(context.bot, query)
    content = ScreenContent(text=_("prices.menu_title"), buttons=get_price_menu_keyboard(item_types))
    await render_screen(context.bot, Screen.from_callback(query), content)


async def show_price_category(update: Update, context: ContextTypes.DEFAULT_TYPE, event) -> None:
    query = update.callback_query
    item_type = event.action.item_type
    try:
        products = await crud_price.list_prices(item_type)
    except InvalidKeyPart:
        LOGGER.warning(f"Price category callback carried an invalid type: {item_type!r}")
        products = []

    await answer_quietly(context.bot, query)
    lines = [_("prices.category_title", item_type=html.escape(item_type))]
    lines += _category_lines(products) or [_("prices.category_empty")]
    content = ScreenContent(text="\n".join(lines), buttons=get_price_category_keyboard())
    await render_screen(context.bot, Screen.from_callback(query), content)
