"""
JSON parsing shared by the codec and the comparator.

Uses the stdlib parser so that syntax errors surface as
``json.JSONDecodeError`` with the parser's own message and position. They
are never wrapped.
"""

import json
from decimal import Decimal
from typing import Any


def _as_text(data: bytes | bytearray | str) -> str:
    if isinstance(data, str):
        return data
    raw = bytes(data)
    # Undecodable bytes become U+FFFD: kept inside string literals, a syntax
    # error anywhere else
    return raw.decode(json.detect_encoding(raw), "replace")


def parse_json(data: bytes | bytearray | str, *, exact_numbers: bool = False) -> Any:
    """
    Parse exactly one JSON document.

    Args:
        data: Raw document (UTF-8/16/32 bytes or text)
        exact_numbers: Parse every number as ``decimal.Decimal`` so that
                       numbers compare by exact value (``1 == 1.0``)

    Returns:
        Parsed document: dicts, lists, str, bool, None and numbers

    Raises:
        json.JSONDecodeError: Malformed JSON, trailing data, or the
                              non-standard constants NaN/Infinity/-Infinity
    """
    text = _as_text(data)

    def reject_constant(name: str) -> Any:
        # The scanner does not report where the constant started
        raise json.JSONDecodeError(f"Invalid JSON constant {name!r}", text, text.find(name))

    if exact_numbers:
        return json.loads(
            text, parse_int=Decimal, parse_float=Decimal, parse_constant=reject_constant
        )
    return json.loads(text, parse_constant=reject_constant)
