# FILE: database/keyspace.py

"""
Key construction for every entity kind stored in the key-value store.

Keys follow "<kind>:<identity parts joined by ':'>". Every scan prefix ends
with the ':' delimiter and identity parts may not contain ':', so a prefix
scan for one kind (or one guide group) never returns keys of another.
Nothing outside this module should format a raw key.
"""

from typing import List, Optional

# --- Namespaces ---
GUIDE_NAMESPACE = "GUIDE_DATA"
SALES_NAMESPACE = "SALES_DATA"

# --- Entity kinds ---
GUIDE_KIND = "guide"
WELCOME_KIND = "welcome"
MENU_BUTTON_KIND = "menu_button"
PRODUCT_PRICE_KIND = "product_price"

DELIMITER = ":"


class InvalidKeyPart(ValueError):
    """Raised when an identity part cannot be used inside a key."""


def _clean_part(part: str, upper: bool = False) -> str:
    cleaned = str(part).strip()
    if upper:
        cleaned = cleaned.upper()
    if not cleaned:
        raise InvalidKeyPart("Key parts cannot be empty.")
    if DELIMITER in cleaned or any(ch.isspace() for ch in cleaned):
        raise InvalidKeyPart(f"Key part '{cleaned}' cannot contain ':' or whitespace.")
    return cleaned


def _join(*parts: str) -> str:
    return DELIMITER.join(parts)


def split_key(key: str) -> List[str]:
    return key.split(DELIMITER)


# --- Guides ---

def normalize_group_code(group_code: str) -> str:
    """Group codes are case-insensitive and stored upper-cased."""
    return _clean_part(group_code, upper=True)


def guide_step_key(group_code: str, step_number: int) -> str:
    return _join(GUIDE_KIND, normalize_group_code(group_code), str(int(step_number)))


def guide_prefix(group_code: Optional[str] = None) -> str:
    if group_code is None:
        return GUIDE_KIND + DELIMITER
    return _join(GUIDE_KIND, normalize_group_code(group_code)) + DELIMITER


# --- Welcome ---

def welcome_key() -> str:
    return _join(WELCOME_KIND, "config")


# --- Menu buttons ---

def normalize_button_code(code: str) -> str:
    return _clean_part(code, upper=True)


def menu_button_key(code: str) -> str:
    return _join(MENU_BUTTON_KIND, normalize_button_code(code))


def menu_button_prefix() -> str:
    return MENU_BUTTON_KIND + DELIMITER


# --- Product prices ---

def normalize_item_type(item_type: str) -> str:
    return _clean_part(item_type, upper=True)


def normalize_product_id(product_id: str) -> str:
    return _clean_part(product_id)


def product_price_key(item_type: str, product_id: str) -> str:
    return _join(PRODUCT_PRICE_KIND, normalize_item_type(item_type), normalize_product_id(product_id))


def product_price_prefix(item_type: Optional[str] = None) -> str:
    if item_type is None:
        return PRODUCT_PRICE_KIND + DELIMITER
    return _join(PRODUCT_PRICE_KIND, normalize_item_type(item_type)) + DELIMITER
