from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FieldSerializationInfo,
    JsonValue,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_serializer,
)

from iampolicy.domain.str_or_list import StrOrList

# Attributes left out of the wire form when they hold nothing
_OMIT_WHEN_EMPTY = (
    "sid",
    "action",
    "not_action",
    "resource",
    "not_resource",
    "principal",
    "not_principal",
    "condition",
)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, StrOrList)):
        return len(value) == 0
    return False


class _PolicyRecord(BaseModel):
    """Shared configuration for policy records: wire names plus Python field names."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def null_means_absent(cls, v: Any, info: ValidationInfo) -> Any:
        """A JSON null leaves the attribute at its default, as if the key were missing."""
        if v is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v


class Statement(_PolicyRecord):
    """
    One rule within a policy.

    No semantic checks happen here: Effect is any string, and an "X" and its
    "NotX" counterpart may both be set. Evaluating a statement is the job of
    a policy engine, not of this record.
    """

    sid: str | None = Field(default=None, alias="Sid")
    effect: str = Field(default="", alias="Effect")
    action: StrOrList = Field(default_factory=StrOrList, alias="Action")
    not_action: StrOrList = Field(default_factory=StrOrList, alias="NotAction")
    resource: StrOrList = Field(default_factory=StrOrList, alias="Resource")
    not_resource: StrOrList = Field(default_factory=StrOrList, alias="NotResource")
    principal: dict[str, StrOrList] = Field(default_factory=dict, alias="Principal")
    not_principal: dict[str, StrOrList] = Field(default_factory=dict, alias="NotPrincipal")
    condition: JsonValue = Field(default=None, alias="Condition")

    @field_serializer("principal", "not_principal", mode="wrap")
    def sort_principal_types(
        self,
        value: dict[str, StrOrList],
        handler: SerializerFunctionWrapHandler,
        info: FieldSerializationInfo,
    ) -> dict[str, Any]:
        return dict(sorted(handler(value).items()))

    @model_serializer(mode="wrap")
    def omit_empty_attributes(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in _OMIT_WHEN_EMPTY:
            if _is_empty(getattr(self, name)):
                data.pop(name, None)
                data.pop(type(self).model_fields[name].alias, None)
        return data


class Policy(_PolicyRecord):
    """
    A policy document: a version string and an ordered list of statements.

    Both keys are always emitted. An unset statement list is rendered as
    ``null``, not as an empty array.
    """

    version: str = Field(default="", alias="Version")
    statements: list[Statement] | None = Field(default=None, alias="Statement")
