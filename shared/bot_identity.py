# FILE: shared/bot_identity.py

import logging
from typing import Optional

from telegram.error import TelegramError

LOGGER = logging.getLogger(__name__)

# Best-effort memo. Every caller must cope with it being empty.
_cached_username: Optional[str] = None


def forget() -> None:
    global _cached_username
    _cached_username = None


async def get_or_fetch_username(bot) -> Optional[str]:
    """Returns the bot's @username (without '@'), or None if it cannot be fetched."""
    global _cached_username
    if _cached_username:
        return _cached_username
    try:
        me = await bot.get_me()
    except TelegramError as e:
        LOGGER.error(f"Failed to get bot info: {e}")
        return None
    _cached_username = me.username if me else None
    return _cached_username
