"""
Domain enums shared by the flexible field, the codec and the comparator.

JsonKind names are the vocabulary of every "expected vs. actual" message,
so they follow JSON terminology rather than Python type names.
"""

from decimal import Decimal
from enum import Enum
from typing import Any


class Cardinality(str, Enum):
    """How many values a StrOrList holds; decides its wire shape."""

    EMPTY = "EMPTY"
    SINGLE = "SINGLE"  # Only this one is rendered as a bare string
    MULTIPLE = "MULTIPLE"

    @classmethod
    def for_count(cls, count: int) -> "Cardinality":
        if count == 0:
            return cls.EMPTY
        if count == 1:
            return cls.SINGLE
        return cls.MULTIPLE


class JsonKind(str, Enum):
    """Kind of a parsed JSON value."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @classmethod
    def of(cls, value: Any) -> "JsonKind":
        """
        Classify a value produced by a JSON parser.

        bool is checked before the numeric types because it subclasses int.

        Raises:
            TypeError: If the value is not something a JSON parser yields
        """
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float, Decimal)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (list, tuple)):
            return cls.ARRAY
        if isinstance(value, dict):
            return cls.OBJECT
        raise TypeError(f"{type(value).__name__} is not a JSON value")

    @classmethod
    def describe(cls, value: Any) -> str:
        """Kind name for error messages; falls back to the Python type name."""
        try:
            return cls.of(value).value
        except TypeError:
            return type(value).__name__


class DifferenceKind(str, Enum):
    """How a value differs between two JSON documents."""

    ADDED = "ADDED"  # Only in the second document
    REMOVED = "REMOVED"  # Only in the first document
    CHANGED = "CHANGED"  # Same kind, different scalar value
    KIND_CHANGED = "KIND_CHANGED"
