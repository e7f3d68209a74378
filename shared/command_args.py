# FILE: shared/command_args.py

import logging
from dataclasses import dataclass, field
from typing import List, Optional

LOGGER = logging.getLogger(__name__)

# Phone keyboards like to "smarten" quotes.
_QUOTE_TRANSLATION = str.maketrans({'“': '"', '”': '"', '„': '"', '«': '"', '»': '"'})


class CommandSyntaxError(ValueError):
    """Raised when command arguments do not follow the command grammar."""


@dataclass
class CommandArgs:
    positional: List[str] = field(default_factory=list)
    quoted: List[str] = field(default_factory=list)

    def quoted_at(self, index: int) -> Optional[str]:
        """Returns the quoted segment at index, or None if it is missing or blank."""
        if index < len(self.quoted):
            value = self.quoted[index].strip()
            return value or None
        return None


def parse_args(args_text: str) -> CommandArgs:
    """
    Splits command arguments into positional tokens and quoted segments.

    Grammar: plain tokens first, then any number of "..." segments. Quoted
    segments are found by pairing quote characters, so they may contain
    spaces. Text after the first quote that is not inside a pair is an error.

        parse_args('FOO 1 "hello world" "AgAC..."')
        -> positional=['FOO', '1'], quoted=['hello world', 'AgAC...']
    """
    text = (args_text or "").translate(_QUOTE_TRANSLATION)

    first_quote = text.find('"')
    head = text if first_quote == -1 else text[:first_quote]
    result = CommandArgs(positional=head.split())
    if first_quote == -1:
        return result

    position = first_quote
    while position < len(text):
        if text[position].isspace():
            position += 1
            continue
        if text[position] != '"':
            raise CommandSyntaxError("Unexpected text outside quotes.")
        closing = text.find('"', position + 1)
        if closing == -1:
            raise CommandSyntaxError("Unbalanced quotes.")
        result.quoted.append(text[position + 1:closing])
        position = closing + 1

    return result


def parse_positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise CommandSyntaxError(f"'{raw}' is not a number.")
    if value <= 0:
        raise CommandSyntaxError(f"'{raw}' must be a positive number.")
    return value


def parse_non_negative_int(raw: str) -> int:
    try:
        value = int(raw.replace(',', ''))
    except (AttributeError, TypeError, ValueError):
        raise CommandSyntaxError(f"'{raw}' is not a number.")
    if value < 0:
        raise CommandSyntaxError(f"'{raw}' cannot be negative.")
    return value


def require_url(raw: Optional[str]) -> str:
    if not raw or not raw.startswith(('http://', 'https://')):
        raise CommandSyntaxError(f"'{raw}' is not an http(s) link.")
    return raw
