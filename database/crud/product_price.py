# --- START OF FILE database/crud/product_price.py ---
import logging
from typing import List, Optional

from .. import keyspace
from ..keyspace import SALES_NAMESPACE
from ..models.product_price import ProductPrice
from . import kv_store

LOGGER = logging.getLogger(__name__)


async def put_price(product: ProductPrice) -> bool:
    key = keyspace.product_price_key(product.item_type, product.product_id)
    return await kv_store.put(SALES_NAMESPACE, key, product.to_dict())


async def delete_price(item_type: str, product_id: str) -> bool:
    return await kv_store.delete(SALES_NAMESPACE, keyspace.product_price_key(item_type, product_id))


async def get_price(item_type: str, product_id: str) -> Optional[ProductPrice]:
    data = await kv_store.get(SALES_NAMESPACE, keyspace.product_price_key(item_type, product_id))
    if not isinstance(data, dict):
        return None
    try:
        return ProductPrice.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        LOGGER.warning(f"Price record {item_type}/{product_id} is malformed: {e}")
        return None


async def list_item_types() -> List[str]:
    types = set()
    for key in await kv_store.list_keys(SALES_NAMESPACE, keyspace.product_price_prefix()):
        parts = keyspace.split_key(key)
        if len(parts) == 3:
            types.add(parts[1])
    return sorted(types)


async def list_prices(item_type: Optional[str] = None) -> List[ProductPrice]:
    """Lists prices, optionally for one item type, sorted by type then name."""
    products = []
    for key in await kv_store.list_keys(SALES_NAMESPACE, keyspace.product_price_prefix(item_type)):
        parts = keyspace.split_key(key)
        if len(parts) != 3:
            continue
        product = await get_price(parts[1], parts[2])
        if product:
            products.append(product)
    products.sort(key=lambda p: (p.item_type, p.name.lower()))
    return products

# --- END OF FILE database/crud/product_price.py ---
