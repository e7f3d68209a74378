# --- START OF FILE database/crud/guide.py ---
import logging
from typing import Dict, List, Optional

from .. import keyspace
from ..keyspace import GUIDE_NAMESPACE
from ..models.guide import GuideStep
from . import kv_store

LOGGER = logging.getLogger(__name__)


def _parse_step_key(key: str) -> Optional[tuple]:
    """Returns (group_code, step_number) for guide:{GROUP}:{n}, or None for malformed keys."""
    parts = keyspace.split_key(key)
    if len(parts) != 3 or parts[0] != keyspace.GUIDE_KIND or not parts[1]:
        return None
    try:
        step_number = int(parts[2])
    except ValueError:
        return None
    if step_number <= 0:
        return None
    return parts[1], step_number


async def put_step(step: GuideStep) -> bool:
    """Creates or overwrites a step. Last writer wins."""
    key = keyspace.guide_step_key(step.group_code, step.step_number)
    return await kv_store.put(GUIDE_NAMESPACE, key, step.to_dict())


async def get_step(group_code: str, step_number: int) -> Optional[GuideStep]:
    code = keyspace.normalize_group_code(group_code)
    data = await kv_store.get(GUIDE_NAMESPACE, keyspace.guide_step_key(code, step_number))
    if not isinstance(data, dict):
        return None
    return GuideStep.from_dict(code, step_number, data)


async def delete_step(group_code: str, step_number: int) -> bool:
    return await kv_store.delete(GUIDE_NAMESPACE, keyspace.guide_step_key(group_code, step_number))


async def delete_group(group_code: str) -> int:
    """Deletes every key of a group and returns how many deletions succeeded."""
    keys = await kv_store.list_keys(GUIDE_NAMESPACE, keyspace.guide_prefix(group_code))
    deleted = 0
    for key in keys:
        if await kv_store.delete(GUIDE_NAMESPACE, key):
            deleted += 1
        else:
            LOGGER.warning(f"Could not delete guide key '{key}' while deleting group '{group_code}'.")
    return deleted


async def list_groups() -> Dict[str, List[int]]:
    """Maps each group code to its ascending step numbers using a single scan."""
    groups: Dict[str, set] = {}
    for key in await kv_store.list_keys(GUIDE_NAMESPACE, keyspace.guide_prefix()):
        parsed = _parse_step_key(key)
        if parsed is None:
            LOGGER.debug(f"Skipping malformed guide key '{key}'.")
            continue
        code, step_number = parsed
        groups.setdefault(code, set()).add(step_number)
    return {code: sorted(steps) for code, steps in sorted(groups.items())}


async def list_group_codes() -> List[str]:
    codes = set()
    for key in await kv_store.list_keys(GUIDE_NAMESPACE, keyspace.guide_prefix()):
        parts = keyspace.split_key(key)
        if len(parts) >= 2 and parts[1]:
            codes.add(parts[1])
    return sorted(codes)


async def list_step_numbers(group_code: str) -> List[int]:
    code = keyspace.normalize_group_code(group_code)
    steps = set()
    for key in await kv_store.list_keys(GUIDE_NAMESPACE, keyspace.guide_prefix(code)):
        parsed = _parse_step_key(key)
        if parsed and parsed[0] == code:
            steps.add(parsed[1])
    return sorted(steps)


async def set_download_link(group_code: str, step_number: int, url: str) -> Optional[GuideStep]:
    """Read-modify-write of an existing step's download link. Concurrent edits race (last writer wins)."""
    step = await get_step(group_code, step_number)
    if step is None:
        return None
    step.download_link = url
    if not await put_step(step):
        return None
    return step

# --- END OF FILE database/crud/guide.py ---
