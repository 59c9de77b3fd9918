"""
Flexible "string or list of strings" field.

IAM-style policy documents allow many attributes (Action, Resource, principal
values, ...) to be written either as a bare string or as an array of strings.
StrOrList is the single place that rule lives:

- Wire shape depends only on the element count: exactly one element is
  rendered as a bare JSON string, every other count (including zero) as an
  array.
- Decoding accepts a bare string (one element) or an array whose elements
  are all strings. Anything else is a type mismatch.

The type plugs into pydantic through ``__get_pydantic_core_schema__``, so
every model field declared as StrOrList shares the same validation and
serialization.

Example:
    >>> StrOrList(["iam:*"]).to_wire()
    'iam:*'
    >>> StrOrList(["s3:GetObject", "s3:PutObject"]).to_wire()
    ['s3:GetObject', 's3:PutObject']
    >>> StrOrList().to_wire()
    []
"""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import PydanticCustomError, core_schema

from iampolicy.domain.enums import Cardinality, JsonKind

EXPECTED_KIND = "string or array of strings"

ERROR_TYPE = "str_or_list_type"


class StrOrList(Sequence[str]):
    """
    Immutable ordered sequence of strings with a cardinality-driven wire form.

    Construct from a bare string or any iterable of strings:

        StrOrList("sts:AssumeRole")          # one element
        StrOrList(["res1", "res2"])          # two elements
        StrOrList()                          # empty

    Compares equal to another StrOrList, list or tuple holding the same
    strings in the same order.
    """

    __slots__ = ("_values",)

    def __init__(self, values: str | Iterable[str] = ()) -> None:
        if isinstance(values, str):
            values = (values,)
        items = tuple(values)
        for item in items:
            if not isinstance(item, str):
                raise TypeError(f"StrOrList elements must be str, got {type(item).__name__}")
        self._values: tuple[str, ...] = items

    @property
    def values(self) -> tuple[str, ...]:
        return self._values

    @property
    def cardinality(self) -> Cardinality:
        return Cardinality.for_count(len(self._values))

    def to_wire(self) -> str | list[str]:
        """Return the JSON-ready form: a bare string for one element, else a list."""
        if self.cardinality is Cardinality.SINGLE:
            return self._values[0]
        return list(self._values)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> "StrOrList": ...

    def __getitem__(self, index: int | slice) -> "str | StrOrList":
        if isinstance(index, slice):
            return StrOrList(self._values[index])
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StrOrList):
            return self._values == other._values
        if isinstance(other, (list, tuple)):
            return self._values == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"StrOrList({list(self._values)!r})"

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def _validate(cls, value: Any) -> "StrOrList":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls((value,))
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if not isinstance(item, str):
                    raise PydanticCustomError(
                        ERROR_TYPE,
                        "Input should be a string or an array of strings, "
                        "got an array containing {actual} at index {index}",
                        {"expected": "string", "actual": JsonKind.describe(item), "index": index},
                    )
            return cls(value)
        raise PydanticCustomError(
            ERROR_TYPE,
            "Input should be a {expected}, got {actual}",
            {"expected": EXPECTED_KIND, "actual": JsonKind.describe(value)},
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_wire, info_arg=False
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "anyOf": [
                {"type": "string"},
                {"type": "array", "items": {"type": "string"}},
            ]
        }
