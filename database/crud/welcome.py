# --- START OF FILE database/crud/welcome.py ---
import logging
from typing import Optional

from .. import keyspace
from ..keyspace import SALES_NAMESPACE
from ..models.welcome import WelcomeConfig
from . import kv_store

LOGGER = logging.getLogger(__name__)


async def get_welcome() -> Optional[WelcomeConfig]:
    data = await kv_store.get(SALES_NAMESPACE, keyspace.welcome_key())
    if not isinstance(data, dict) or not data.get("text"):
        return None
    return WelcomeConfig.from_dict(data)


async def set_welcome(welcome: WelcomeConfig) -> bool:
    return await kv_store.put(SALES_NAMESPACE, keyspace.welcome_key(), welcome.to_dict())


async def delete_welcome() -> bool:
    return await kv_store.delete(SALES_NAMESPACE, keyspace.welcome_key())

# --- END OF FILE database/crud/welcome.py ---
