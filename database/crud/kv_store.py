# --- START OF FILE database/crud/kv_store.py ---
"""
Namespaced key-value storage over the kv_records table.

Every function catches its own failures: a storage problem becomes False,
None or an empty list plus a log line, never an exception. A namespace that
is not listed in KV_NAMESPACES behaves like an empty store.
"""
import json
import logging
from typing import Any, List, Optional

from sqlalchemy import delete as sa_delete, select

from config import config
from ..engine import get_session
from ..models.kv_record import KVRecord

LOGGER = logging.getLogger(__name__)

LIST_PAGE_SIZE = 100


def _is_bound(namespace: str, action: str) -> bool:
    if namespace in config.KV_NAMESPACES:
        return True
    LOGGER.error(f"[{action}] KV namespace '{namespace}' is not bound. Treating it as empty.")
    return False


async def put(namespace: str, key: str, value: Any) -> bool:
    """Stores a JSON-serializable value, overwriting any existing one."""
    if not _is_bound(namespace, "put"):
        return False
    try:
        payload = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        LOGGER.error(f"[put] Value for '{namespace}/{key}' is not JSON-serializable: {e}")
        return False

    try:
        async with get_session() as session:
            record = await session.get(KVRecord, (namespace, key))
            if record:
                record.value = payload
            else:
                session.add(KVRecord(namespace=namespace, key=key, value=payload))
            await session.commit()
    except Exception as e:
        LOGGER.error(f"[put] Failed to store '{namespace}/{key}': {e}", exc_info=True)
        return False

    LOGGER.debug(f"[put] Stored '{namespace}/{key}'.")
    return True


async def get(namespace: str, key: str) -> Optional[Any]:
    if not _is_bound(namespace, "get"):
        return None
    try:
        async with get_session() as session:
            record = await session.get(KVRecord, (namespace, key))
            if record is None:
                return None
            return json.loads(record.value)
    except json.JSONDecodeError as e:
        LOGGER.error(f"[get] Corrupt JSON stored under '{namespace}/{key}': {e}")
        return None
    except Exception as e:
        LOGGER.error(f"[get] Failed to read '{namespace}/{key}': {e}", exc_info=True)
        return None


async def delete(namespace: str, key: str) -> bool:
    """Deletes a key. A key that is already gone counts as deleted."""
    if not _is_bound(namespace, "delete"):
        return False
    try:
        async with get_session() as session:
            stmt = sa_delete(KVRecord).where(KVRecord.namespace == namespace, KVRecord.key == key)
            result = await session.execute(stmt)
            await session.commit()
    except Exception as e:
        LOGGER.error(f"[delete] Failed to delete '{namespace}/{key}': {e}", exc_info=True)
        return False

    if not result.rowcount:
        LOGGER.debug(f"[delete] '{namespace}/{key}' did not exist.")
    return True


async def list_keys(namespace: str, prefix: str = "") -> List[str]:
    """Returns every key in the namespace starting with prefix, sorted, across all pages."""
    if not _is_bound(namespace, "list_keys"):
        return []

    keys: List[str] = []
    cursor: Optional[str] = None
    try:
        async with get_session() as session:
            while True:
                stmt = select(KVRecord.key).where(KVRecord.namespace == namespace)
                if prefix:
                    stmt = stmt.where(KVRecord.key.startswith(prefix, autoescape=True))
                if cursor is not None:
                    stmt = stmt.where(KVRecord.key > cursor)
                stmt = stmt.order_by(KVRecord.key.asc()).limit(LIST_PAGE_SIZE)

                page = list((await session.execute(stmt)).scalars().all())
                # LIKE ignores case on SQLite; the prefix match must be exact.
                keys.extend(key for key in page if key.startswith(prefix))
                if len(page) < LIST_PAGE_SIZE:
                    break
                cursor = page[-1]
    except Exception as e:
        LOGGER.error(f"[list_keys] Failed to list '{namespace}' with prefix '{prefix}': {e}", exc_info=True)
        return []

    LOGGER.debug(f"[list_keys] Found {len(keys)} keys in '{namespace}' with prefix '{prefix}'.")
    return keys

# --- END OF FILE database/crud/kv_store.py ---
