"""
JSON Canonicalization for policy documents.

Two documents are semantically equal (same keys and values, any key order,
any whitespace, ``1`` vs ``1.0``) exactly when they canonicalize to
byte-for-byte identical output.

This is what makes these possible:
- Content fingerprints (hash-based drift detection between desired and actual)
- Stable storage and diff output

Numbers are kept as exact ``Decimal`` values and written from their digits,
never through ``int`` or ``float``, so huge exponents neither overflow nor
collide. Containers are walked with explicit work stacks, so nesting depth is
limited only by the parser that produced the document.
"""

import hashlib
import json
from decimal import Decimal
from typing import Any

from iampolicy.codec.parser import parse_json
from iampolicy.core.config import settings

# Integers longer than this are written in exponent form (1E+21)
_MAX_PLAIN_INTEGER_DIGITS = 21


class _Text(str):
    """Literal output queued on the render stack."""


def canonicalize_json(obj: Any) -> dict | list | Any:
    """
    Produce a deterministic, canonical representation of a JSON object.

    This function ensures:
    - All dictionary keys are sorted alphabetically
    - Nested structures are canonicalized at every level
    - Numbers become exact ``Decimal`` values without trailing zeros
      (``1.0`` -> ``Decimal('1')``, ``-0`` -> ``Decimal('0')``)

    Args:
        obj: Python object (dict, list, or primitive) to canonicalize

    Returns:
        Canonicalized version with sorted keys and normalized numbers at all levels

    Raises:
        ValueError: If a number is NaN or infinite

    Example:
        >>> original = {"z": 1.0, "a": {"c": 2, "b": Decimal("3.50")}}
        >>> canonicalize_json(original)
        {'a': {'b': Decimal('3.5'), 'c': Decimal('2')}, 'z': Decimal('1')}

    Note:
        Array order is significant in policy documents and is preserved.
    """
    root: list[Any] = [None]
    pending: list[tuple[Any, Any, Any]] = [(obj, root, 0)]
    while pending:
        value, parent, slot = pending.pop()

        if isinstance(value, dict):
            # Keys go in now, in sorted order; values are filled in as they are reached
            copy = dict.fromkeys(sorted(value))
            parent[slot] = copy
            pending.extend((value[key], copy, key) for key in copy)

        elif isinstance(value, (list, tuple)):
            copy = [None] * len(value)
            parent[slot] = copy
            pending.extend((item, copy, index) for index, item in enumerate(value))

        elif isinstance(value, bool):
            parent[slot] = value

        elif isinstance(value, (int, float, Decimal)):
            parent[slot] = _canonical_number(value)

        else:
            # str and None pass through unchanged
            parent[slot] = value

    return root[0]


def _canonical_number(value: int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    else:
        number = Decimal(repr(value))

    if not number.is_finite():
        raise ValueError(f"Out of range number is not JSON compliant: {value!r}")
    if number.is_zero():
        return Decimal(0)

    # Strip trailing zeros by hand: Decimal.normalize() rounds to the context precision
    sign, digits, exponent = number.as_tuple()
    end = len(digits)
    while digits[end - 1] == 0:
        end -= 1
    return Decimal((sign, digits[:end], exponent + len(digits) - end))


def _number_text(number: Decimal) -> str:
    _, digits, exponent = number.as_tuple()
    if exponent >= 0 and len(digits) + exponent <= _MAX_PLAIN_INTEGER_DIGITS:
        return format(number, "f")
    return str(number)


def _scalar_text(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, Decimal):
        return _number_text(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _render(canonical: Any, indent: int | None) -> str:
    """Write an already canonical value as JSON text."""
    key_separator = ":" if indent is None else ": "

    def newline(depth: int) -> str:
        return "" if indent is None else "\n" + " " * (indent * depth)

    out: list[str] = []
    pending: list[tuple[Any, int]] = [(canonical, 0)]
    while pending:
        value, depth = pending.pop()

        if isinstance(value, _Text):
            out.append(value)

        elif isinstance(value, dict) and value:
            items: list[tuple[Any, int]] = [(_Text("{"), depth)]
            for index, (key, item) in enumerate(value.items()):
                prefix = ("," if index else "") + newline(depth + 1)
                key_text = json.dumps(key, ensure_ascii=False)
                items.append((_Text(prefix + key_text + key_separator), depth))
                items.append((item, depth + 1))
            items.append((_Text(newline(depth) + "}"), depth))
            pending.extend(reversed(items))

        elif isinstance(value, list) and value:
            items = [(_Text("["), depth)]
            for index, item in enumerate(value):
                items.append((_Text(("," if index else "") + newline(depth + 1)), depth))
                items.append((item, depth + 1))
            items.append((_Text(newline(depth) + "]"), depth))
            pending.extend(reversed(items))

        elif isinstance(value, dict):
            out.append("{}")

        elif isinstance(value, list):
            out.append("[]")

        else:
            out.append(_scalar_text(value))

    return "".join(out)


def to_canonical_json_string(obj: Any) -> str:
    """
    Convert a Python object to a canonical JSON string.

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string with sorted keys and no extra whitespace

    Example:
        >>> to_canonical_json_string({"Version": "2012-10-17", "Statement": []})
        '{"Statement":[],"Version":"2012-10-17"}'
    """
    return _render(canonicalize_json(obj), indent=None)


def to_canonical_json_pretty(obj: Any) -> str:
    """
    Convert a Python object to a pretty-printed canonical JSON string.

    Useful for human-readable output in logs or when showing a policy diff.

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string with sorted keys and indentation
    """
    return _render(canonicalize_json(obj), indent=2)


def canonical_bytes(data: bytes | bytearray | str) -> bytes:
    """
    Parse a JSON document and return its canonical UTF-8 encoding.

    Raises:
        json.JSONDecodeError: If the document is not valid JSON
    """
    document = parse_json(data, exact_numbers=True)
    return to_canonical_json_string(document).encode("utf-8")


def fingerprint(data: bytes | bytearray | str) -> str:
    """
    Content fingerprint of a JSON document, independent of key order and formatting.

    Uses ``settings.fingerprint_algorithm`` (sha256 by default).

    Returns:
        Fingerprint in format: <algorithm>:<lowercase-hex>

    Raises:
        json.JSONDecodeError: If the document is not valid JSON
    """
    algorithm = settings.fingerprint_algorithm
    digest = hashlib.new(algorithm, canonical_bytes(data)).hexdigest()
    return f"{algorithm}:{digest}"
