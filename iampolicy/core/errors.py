"""
Domain-specific exceptions for the IAM policy library.

Syntax errors from the JSON parser are not part of this hierarchy: they are
raised as ``json.JSONDecodeError`` exactly as the parser produced them.
"""

from typing import Any


class PolicyError(Exception):
    """Base exception for all policy library errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class TypeMismatchError(PolicyError):
    """
    Raised when a JSON document does not have the shape a field expects.

    Examples:
    - An object where a string or array of strings is expected
    - An array containing a number in an Action list
    - A string where the Statement array is expected

    Details:
    - path: JSON path of the first offending value (e.g. ``$.Statement[0].Action``)
    - expected: kind the field accepts
    - actual: kind that was found
    - errors: every mismatch found, each with path/expected/actual
    """

    @property
    def path(self) -> str:
        return self.details.get("path", "$")

    @property
    def expected(self) -> str | None:
        return self.details.get("expected")

    @property
    def actual(self) -> str | None:
        return self.details.get("actual")


class EncodeError(PolicyError):
    """
    Raised when a value has no JSON representation.

    Examples:
    - A set or arbitrary object nested inside a Condition block
    - A mapping with non-string keys that cannot be rendered
    """

    pass
