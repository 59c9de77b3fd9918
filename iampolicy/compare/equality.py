"""
Semantic equality between two JSON documents.

Two independently serialized policies that mean the same thing can differ in
key order, whitespace and number formatting. Comparing bytes would flag them
as different; these functions compare parsed structure instead.

Comparison rules:
- object vs. object: same key set, recursively equal values (key order ignored)
- array vs. array: same length, pairwise equal in order
- numbers: exact decimal value (``1``, ``1.0`` and ``1e0`` are equal)
- kinds never cross: ``true`` is not ``1``, ``"1"`` is not ``1``, ``null``
  equals only ``null``

Error policy: the first document is parsed first. If it is malformed its
``json.JSONDecodeError`` is raised without looking at the second, so the
same pair of inputs always reports the same error.

Both walks keep an explicit work stack rather than recursing, so any
document the parser accepts can be compared whatever its nesting depth.
"""

import json
from dataclasses import dataclass
from typing import Any

from iampolicy.codec.parser import parse_json
from iampolicy.core.observability import get_logger, record_comparison
from iampolicy.domain.enums import DifferenceKind, JsonKind
from iampolicy.domain.paths import child_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class JsonDifference:
    """
    One point where two JSON documents diverge.

    ``left`` is the value in the first document and ``right`` the value in
    the second; the side that does not exist (ADDED/REMOVED) is None.
    """

    path: str
    kind: DifferenceKind
    left: Any = None
    right: Any = None


def equal(a: bytes | bytearray | str, b: bytes | bytearray | str) -> bool:
    """
    Compare two JSON documents for semantic equality.

    Args:
        a: First JSON document
        b: Second JSON document

    Returns:
        True if both documents hold the same structure and values

    Raises:
        json.JSONDecodeError: From ``a`` if it is malformed, otherwise from ``b``

    Example:
        >>> equal(b'{"a": 1, "b": 2}', b'{"b":2,"a":1.0}')
        True
    """
    left, right = _parse_pair(a, b)
    result = values_equal(left, right)

    record_comparison("equal" if result else "different")
    logger.debug("Compared JSON documents", extra={"equal": result})
    return result


def differences(a: bytes | bytearray | str, b: bytes | bytearray | str) -> list[JsonDifference]:
    """
    List every path at which two JSON documents diverge.

    Uses the same parsing, comparison rules and error policy as equal(); the
    result is empty exactly when ``equal(a, b)`` is True. Object keys are
    visited in sorted order so the output is deterministic.

    Example:
        >>> found = differences(b'{"Effect": "Allow"}', b'{"Effect": "Deny"}')
        >>> [(d.path, d.kind.value) for d in found]
        [('$.Effect', 'CHANGED')]
    """
    left, right = _parse_pair(a, b)
    found = _collect_differences(left, right)

    record_comparison("different" if found else "equal")
    logger.debug("Diffed JSON documents", extra={"difference_count": len(found)})
    return found


def values_equal(left: Any, right: Any) -> bool:
    """Deep semantic equality of two parsed JSON values."""
    pending = [(left, right)]
    while pending:
        left, right = pending.pop()
        kind = JsonKind.of(left)
        if kind is not JsonKind.of(right):
            return False

        if kind is JsonKind.OBJECT:
            if left.keys() != right.keys():
                return False
            pending.extend((value, right[key]) for key, value in left.items())
        elif kind is JsonKind.ARRAY:
            if len(left) != len(right):
                return False
            pending.extend(zip(left, right))
        elif left != right:
            return False

    return True


def _parse_pair(a: bytes | bytearray | str, b: bytes | bytearray | str) -> tuple[Any, Any]:
    try:
        left = parse_json(a, exact_numbers=True)
        right = parse_json(b, exact_numbers=True)
    except json.JSONDecodeError:
        record_comparison("error")
        raise
    return left, right


def _collect_differences(left: Any, right: Any) -> list[JsonDifference]:
    # Work items are (left, right, path) pairs still to walk, or differences
    # already found; popping in order keeps the output depth-first and sorted
    found: list[JsonDifference] = []
    pending: list[tuple[Any, Any, str] | JsonDifference] = [(left, right, "$")]
    while pending:
        item = pending.pop()
        if isinstance(item, JsonDifference):
            found.append(item)
            continue

        left, right, path = item
        kind = JsonKind.of(left)
        if kind is not JsonKind.of(right):
            found.append(JsonDifference(path, DifferenceKind.KIND_CHANGED, left, right))
            continue

        children: list[tuple[Any, Any, str] | JsonDifference] = []
        if kind is JsonKind.OBJECT:
            for key in sorted(left.keys() | right.keys()):
                child = child_path(path, key)
                if key not in right:
                    children.append(JsonDifference(child, DifferenceKind.REMOVED, left=left[key]))
                elif key not in left:
                    children.append(JsonDifference(child, DifferenceKind.ADDED, right=right[key]))
                else:
                    children.append((left[key], right[key], child))

        elif kind is JsonKind.ARRAY:
            for index in range(max(len(left), len(right))):
                child = child_path(path, index)
                if index >= len(right):
                    children.append(
                        JsonDifference(child, DifferenceKind.REMOVED, left=left[index])
                    )
                elif index >= len(left):
                    children.append(
                        JsonDifference(child, DifferenceKind.ADDED, right=right[index])
                    )
                else:
                    children.append((left[index], right[index], child))

        elif left != right:
            found.append(JsonDifference(path, DifferenceKind.CHANGED, left, right))

        pending.extend(reversed(children))

    return found
