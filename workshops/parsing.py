"""Helpers to parse the free-text cells found in registration sheets."""

from __future__ import annotations

from typing import NamedTuple

from .errors import InvalidWorkshopFormatError
from .schema import DEFAULT_WORKSHOP_FORMAT


class ParsedWorkshop(NamedTuple):
    name: str
    leader: str
    well_formed: bool


def parse_workshop_cell(
    value: str, *, strict: bool = False, expected_format: str = DEFAULT_WORKSHOP_FORMAT
) -> ParsedWorkshop:
    """Split ``"Workshop Name (Leader Name)"`` into its name and leader.

    The last complete parenthesised group is taken as the leader, so titles
    such as ``"Knots (Advanced) (Ann Lee)"`` keep their own parentheses and an
    unclosed trailing ``"("`` is ignored. Without a group the whole text is the
    workshop name and the leader is blank, unless ``strict`` is set.
    """
    text = value.strip()
    closing = text.rfind(")")
    opening = text.rfind("(", 0, closing) if closing >= 0 else -1

    if opening < 0 or closing < 0:
        if strict:
            raise InvalidWorkshopFormatError(value, expected_format)
        return ParsedWorkshop(name=text, leader="", well_formed=False)

    return ParsedWorkshop(
        name=text[:opening].strip(),
        leader=text[opening + 1 : closing].strip(),
        well_formed=True,
    )


def fallback_identifier(first_name: str, last_name: str) -> str:
    return "".join(f"{first_name}{last_name}".split())


def to_proper(text: str) -> str:
    return " ".join(word[0].upper() + word[1:].lower() for word in text.split())


def split_full_name(full_name: str) -> tuple[str, str]:
    parts = full_name.split(None, 1)
    if not parts:
        return "", ""
    first = to_proper(parts[0])
    last = to_proper(parts[1]) if len(parts) > 1 else ""
    return first, last
