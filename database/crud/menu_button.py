# --- START OF FILE database/crud/menu_button.py ---
import logging
from typing import List, Optional

from .. import keyspace
from ..keyspace import SALES_NAMESPACE
from ..models.menu_button import StoredMenuButton
from . import kv_store

LOGGER = logging.getLogger(__name__)


async def put_menu_button(button: StoredMenuButton) -> bool:
    return await kv_store.put(SALES_NAMESPACE, keyspace.menu_button_key(button.code), button.to_dict())


async def get_menu_button(code: str) -> Optional[StoredMenuButton]:
    data = await kv_store.get(SALES_NAMESPACE, keyspace.menu_button_key(code))
    if not isinstance(data, dict):
        return None
    try:
        return StoredMenuButton.from_dict(data)
    except KeyError as e:
        LOGGER.warning(f"Menu button '{code}' is missing field {e}. Ignoring it.")
        return None


async def delete_menu_button(code: str) -> bool:
    return await kv_store.delete(SALES_NAMESPACE, keyspace.menu_button_key(code))


async def list_menu_buttons() -> List[StoredMenuButton]:
    """Returns all stored menu buttons ordered by code."""
    buttons = []
    for key in await kv_store.list_keys(SALES_NAMESPACE, keyspace.menu_button_prefix()):
        parts = keyspace.split_key(key)
        if len(parts) != 2:
            continue
        button = await get_menu_button(parts[1])
        if button:
            buttons.append(button)
    buttons.sort(key=lambda b: b.code)
    return buttons

# --- END OF FILE database/crud/menu_button.py ---
