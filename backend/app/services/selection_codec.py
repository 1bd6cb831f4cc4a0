"""
Navigation selection codec.

A selection is the path a user has clicked through the tree: at most one
root, one first-level and one second-level category. It travels entirely in
the request (query parameters), so nothing about it is kept on the server.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from app.models.category import MAX_ID

RawId = Union[str, int, None]

_DIGITS = re.compile(r"[0-9]+")

QUERY_PARAM_NAMES = ("rootId", "firstId", "secondId")


@dataclass(frozen=True)
class Selection:
    """Currently selected root / first-level / second-level category ids."""

    root_id: Optional[int] = None
    first_id: Optional[int] = None
    second_id: Optional[int] = None


def parse_id(raw: RawId) -> Optional[int]:
    """
    Parse one raw selector.

    Anything that is not an unsigned integer no larger than MAX_ID is None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if 0 <= raw <= MAX_ID else None
    text = str(raw).strip()
    if not _DIGITS.fullmatch(text):
        return None
    digits = text.lstrip("0") or "0"
    # Checked before int() so huge inputs never reach the conversion limit
    if len(digits) > len(str(MAX_ID)):
        return None
    value = int(digits)
    return value if value <= MAX_ID else None


def decode(raw_root: RawId = None, raw_first: RawId = None, raw_second: RawId = None) -> Selection:
    """Build a Selection from raw selectors. Never raises."""
    return Selection(
        root_id=parse_id(raw_root),
        first_id=parse_id(raw_first),
        second_id=parse_id(raw_second),
    )


def encode(selection: Selection) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Inverse of decode: one decimal string (or None) per level."""
    return (
        _encode_id(selection.root_id),
        _encode_id(selection.first_id),
        _encode_id(selection.second_id),
    )


def to_query_params(selection: Selection) -> Dict[str, str]:
    """Query parameters for a shareable link; unset levels are left out."""
    return {
        key: value
        for key, value in zip(QUERY_PARAM_NAMES, encode(selection))
        if value is not None
    }


def _encode_id(value: Optional[int]) -> Optional[str]:
    return None if value is None else str(value)
