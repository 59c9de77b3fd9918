"""
Encode/decode between Python values and policy JSON.

encode() renders compact JSON (no insignificant whitespace) so output is
byte-for-byte predictable: ``Policy(version="12")`` always encodes to
``{"Version":"12","Statement":null}``.

decode() parses with the stdlib parser, then builds the requested shape with
pydantic. The two failure modes stay distinct:

- Syntax errors: ``json.JSONDecodeError``, propagated unmodified
- Shape errors: ``TypeMismatchError`` naming the JSON path plus the
  expected and actual kinds
"""

import json
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from iampolicy.codec.parser import parse_json
from iampolicy.core.errors import EncodeError, TypeMismatchError
from iampolicy.core.observability import get_logger, record_decode, record_encode
from iampolicy.domain.enums import JsonKind
from iampolicy.domain.paths import child_path
from iampolicy.domain.str_or_list import StrOrList

logger = get_logger(__name__)

T = TypeVar("T")

# pydantic error type -> JSON kind the field expected
_EXPECTED_KIND_BY_ERROR_TYPE = {
    "string_type": JsonKind.STRING.value,
    "list_type": JsonKind.ARRAY.value,
    "dict_type": JsonKind.OBJECT.value,
    "model_type": JsonKind.OBJECT.value,
    "model_attributes_type": JsonKind.OBJECT.value,
}


def encode(value: Any) -> bytes:
    """
    Serialize a record, StrOrList or plain JSON-compatible value.

    Args:
        value: Policy, Statement, StrOrList, or dicts/lists/scalars that may
               contain them

    Returns:
        UTF-8 encoded compact JSON

    Raises:
        EncodeError: If the value (or something nested in it) has no JSON
                     representation, including NaN and infinities

    Example:
        >>> encode(StrOrList(["iam:*"]))
        b'"iam:*"'
    """
    try:
        wire = _to_wire(value)
        encoded = json.dumps(wire, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        record_encode("error")
        raise EncodeError(
            f"Cannot encode {type(value).__name__} as JSON: {e}",
            details={"type": type(value).__name__},
        ) from e

    record_encode("ok")
    return encoded.encode("utf-8")


def _to_wire(value: Any) -> Any:
    """Replace records and StrOrList values with their JSON-ready forms."""
    if isinstance(value, BaseModel):
        return _to_wire(value.model_dump(by_alias=True))
    if isinstance(value, StrOrList):
        return value.to_wire()
    if isinstance(value, dict):
        return {key: _to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value


@lru_cache(maxsize=128)
def _adapter_for(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def decode(data: bytes | bytearray | str, shape: type[T]) -> T:
    """
    Parse a JSON document into the requested shape.

    Args:
        data: Raw JSON document
        shape: Target type, e.g. ``Policy``, ``Statement``, ``StrOrList`` or
               ``dict[str, StrOrList]``

    Returns:
        An instance of ``shape``

    Raises:
        json.JSONDecodeError: If the document is not valid JSON
        TypeMismatchError: If the document's structure does not fit ``shape``

    Example:
        >>> decode(b'"x"', StrOrList)
        StrOrList(['x'])
    """
    try:
        document = parse_json(data)
    except json.JSONDecodeError:
        record_decode("syntax_error")
        raise

    try:
        value = _adapter_for(shape).validate_python(document)
    except PydanticValidationError as e:
        record_decode("type_mismatch")
        error = _type_mismatch(e)
        logger.debug(
            "Decode failed: %s",
            error.message,
            extra={
                "shape": getattr(shape, "__name__", str(shape)),
                "errors": error.details["errors"],
            },
        )
        raise error from e

    record_decode("ok")
    return value


def _type_mismatch(exc: PydanticValidationError) -> TypeMismatchError:
    mismatches = [_describe_error(error) for error in exc.errors(include_url=False)]
    first = mismatches[0]
    return TypeMismatchError(
        f"Cannot decode {first['actual']} into {first['path']}: expected {first['expected']}",
        details={**first, "errors": mismatches},
    )


def _describe_error(error: Any) -> dict[str, str]:
    ctx = error.get("ctx") or {}
    path = _json_path(error["loc"])
    if "index" in ctx:
        path = child_path(path, ctx["index"])
    expected = ctx.get("expected") or _EXPECTED_KIND_BY_ERROR_TYPE.get(error["type"], error["msg"])
    actual = ctx.get("actual") or JsonKind.describe(error["input"])
    return {"path": path, "expected": str(expected), "actual": str(actual)}


def _json_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location: ("Statement", 0, "Action") -> $.Statement[0].Action"""
    path = "$"
    for part in loc:
        path = child_path(path, part)
    return path
