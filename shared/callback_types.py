# FILE: shared/callback_types.py

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Optional, Type

from database import keyspace

"""
Structured callback data for inline buttons.

Each class owns one callback verb: it builds the token for a button and
parses it back. Parsing never raises; a token with the wrong number of
segments or a bad number simply does not parse.

Prefixes are kept short to respect Telegram's 64-byte limit for callback data.
"""

# A registry to hold all callback classes for easy lookup
CALLBACK_REGISTRY: dict[str, Type[CallbackData]] = {}

SEPARATOR = ":"


class CallbackData(ABC):
    """Abstract base class for all callback data types."""
    PREFIX: str

    def __init_subclass__(cls, **kwargs):
        """Registers every concrete subclass under its prefix."""
        super().__init_subclass__(**kwargs)
        if 'PREFIX' in cls.__dict__:
            if cls.PREFIX in CALLBACK_REGISTRY:
                raise ValueError(f"Duplicate PREFIX '{cls.PREFIX}' found for class {cls.__name__}")
            CALLBACK_REGISTRY[cls.PREFIX] = cls

    @classmethod
    @abstractmethod
    def from_string(cls, data: str) -> Optional[CallbackData]:
        """Parses a callback string and returns an instance of the class if it matches."""
        raise NotImplementedError

    @abstractmethod
    def to_string(self) -> str:
        """Converts the instance to its string representation for callback data."""
        raise NotImplementedError

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.to_string() == other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.to_string()}'>"


class ExactCallback(CallbackData):
    """A callback without parameters: the token is the prefix itself."""

    @classmethod
    def from_string(cls, data: str) -> Optional[ExactCallback]:
        return cls() if data == cls.PREFIX else None

    def to_string(self) -> str:
        return self.PREFIX


def parse_callback_data(data: Optional[str]) -> Optional[CallbackData]:
    """
    Takes a raw callback string and returns the matching CallbackData object,
    or None when the verb is unknown or the token is malformed.
    """
    if not data:
        return None

    prefix = data.split(SEPARATOR, 1)[0]
    cls = CALLBACK_REGISTRY.get(prefix)
    if cls:
        return cls.from_string(data)
    return None


def _key_part(segment: str, normalize: Callable[[str], str]) -> Optional[str]:
    """A segment only parses when it is already a valid key part, so tokens round-trip."""
    try:
        normalized = normalize(segment)
    except keyspace.InvalidKeyPart:
        return None
    return normalized if normalized == segment.upper() else None


# --- Menus ---

class MainMenu(ExactCallback):
    PREFIX = "mm"


class GuideMenu(ExactCallback):
    PREFIX = "gm"


class SupportMenu(ExactCallback):
    PREFIX = "sp"


class PriceMenu(ExactCallback):
    PREFIX = "pm"


# --- Parameterised actions ---

class ShowGuideStep(CallbackData):
    """Shows one step of a guide group: gs:{GROUP}:{step}."""
    PREFIX = "gs"

    def __init__(self, group_code: str, step_number: int):
        self.group_code = group_code
        self.step_number = step_number

    @classmethod
    def from_string(cls, data: str) -> Optional[ShowGuideStep]:
        parts = data.split(SEPARATOR)
        if len(parts) != 3 or parts[0] != cls.PREFIX or not (parts[2].isascii() and parts[2].isdigit()):
            return None
        group_code = _key_part(parts[1], keyspace.normalize_group_code)
        step_number = int(parts[2])
        if group_code is None or step_number <= 0:
            return None
        return cls(group_code=group_code, step_number=step_number)

    def to_string(self) -> str:
        return f"{self.PREFIX}{SEPARATOR}{self.group_code}{SEPARATOR}{self.step_number}"


class ShowPriceCategory(CallbackData):
    """Lists the prices of one item type: pc:{ITEMTYPE}."""
    PREFIX = "pc"

    def __init__(self, item_type: str):
        self.item_type = item_type

    @classmethod
    def from_string(cls, data: str) -> Optional[ShowPriceCategory]:
        parts = data.split(SEPARATOR)
        if len(parts) != 2 or parts[0] != cls.PREFIX:
            return None
        item_type = _key_part(parts[1], keyspace.normalize_item_type)
        if item_type is None:
            return None
        return cls(item_type=item_type)

    def to_string(self) -> str:
        return f"{self.PREFIX}{SEPARATOR}{self.item_type}"
