#!/usr/bin/env python3
"""
Purpose:
    The FieldDescriptor model: one named field of a metadata schema, authored
    with flat type-specific keys that are packed into a typed `spec`.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_serializer,
    model_validator,
)

from wonzimer.core import constants as C
from wonzimer.core.schema.field_specs import FieldSpec, rebuild_specs
from wonzimer.core.schema.field_type import FieldType
from wonzimer.core.utils import is_valid_fieldname_pattern


# Flat authoring keys owned by each field type. For lists, `fields` is
# shorthand for an `item` of type dict.
TYPE_KEYS: Dict[FieldType, frozenset[str]] = {
    FieldType.STRING: frozenset({"pattern"}),
    FieldType.NUMBER: frozenset(),
    FieldType.INTEGER: frozenset(),
    FieldType.BOOLEAN: frozenset(),
    FieldType.ENUM: frozenset({"options"}),
    FieldType.DICT: frozenset({"fields", "additional_properties"}),
    FieldType.LIST: frozenset({"item", "fields"}),
}
_ANY_TYPE_KEYS = frozenset().union(*TYPE_KEYS.values())


class FieldDescriptor(BaseModel):
    """
    One field in a metadata schema.

    Authored keys:
      - every type:  fieldname, fieldtype (default string), required (default true), description
      - string:      pattern
      - enum:        options
      - dict:        fields, additional_properties
      - list:        item, or `fields` for a list of dicts; list[str] when neither is given

    The type-specific keys end up in `spec` (see `field_specs`); `model_dump`
    gives the flat authored shape back.
    """

    model_config = ConfigDict(extra="forbid")
    _path: str = PrivateAttr(default="")  # "/"-joined location inside the schema; set by MetadataSchema

    fieldname: str = Field(..., description="Name of the field (JSON key).")
    fieldtype: FieldType = Field(default=FieldType.STRING, description="Field type.")
    required: bool = Field(default=True, description="Whether this field is required.")
    description: str | None = Field(default=None, description="Human-readable description.")
    spec: FieldSpec | None = Field(default=None, description="Type-specific parameters, built from the flat keys.")

    @model_validator(mode="before")
    @classmethod
    def _pack_flat_spec(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "spec" in data:
            raise ValueError("'spec' is derived; author type-specific keys at the top level")

        ft = FieldType.parse(data.get("fieldtype", FieldType.STRING))
        own = TYPE_KEYS.get(ft)
        if own is None:
            return data  # reported as an unknown fieldtype below

        foreign = sorted((data.keys() - own) & _ANY_TYPE_KEYS)
        if foreign:
            allowed = ", ".join(repr(k) for k in sorted(own))
            raise ValueError(f"Unexpected key(s) for fieldtype {ft.value!r}: {foreign}. Allowed: [{allowed}]")

        flat = {k: data[k] for k in own if k in data}
        if ft == FieldType.LIST:
            flat = {"item": _list_item(data.get("fieldname"), flat)}

        packed = {k: v for k, v in data.items() if k not in own}
        packed["spec"] = {"kind": ft.value, **flat}
        return packed

    @field_validator("fieldtype", mode="before")
    @classmethod
    def _parse_fieldtype(cls, v: Any) -> FieldType:
        return FieldType.parse(v)

    @field_validator("fieldname", mode="before")
    @classmethod
    def _normalize_and_validate_fieldname(cls, v: Any) -> str:
        """Strip whitespace and enforce FIELDNAME_ALLOWED_RE."""
        s = "" if v is None else str(v).strip()
        if not s:
            raise ValueError("The 'fieldname' key is not set")
        if not is_valid_fieldname_pattern(s):
            raise ValueError(
                f"The fieldname {s!r} must match the pattern {C.FIELDNAME_ALLOWED_RE.pattern!r}"
            )
        return s

    @model_validator(mode="after")
    def _check_type(self) -> "FieldDescriptor":
        if self.fieldtype == FieldType.INVALID or self.spec is None:
            valid = ", ".join(ft.value for ft in TYPE_KEYS)
            raise ValueError(f"Unknown fieldtype; valid types are: {valid}")
        if self.fieldtype == FieldType.ENUM:
            opts = self.spec.options  # type: ignore[union-attr]
            if any(not o.strip() for o in opts):
                raise ValueError("ENUM 'options' must not contain empty strings")
            if len(set(opts)) != len(opts):
                raise ValueError("ENUM 'options' contain duplicates")
        return self

    @model_serializer(mode="plain")
    def _dump_flat(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "fieldname": self.fieldname,
            "fieldtype": self.fieldtype.value,
            "required": self.required,
        }
        if self.description is not None:
            out["description"] = self.description

        if self.fieldtype == FieldType.LIST:
            item = self.spec.item._dump_flat()  # type: ignore[union-attr]
            del item["fieldname"]
            if item != _DEFAULT_ITEM_DUMP:
                out["item"] = item
        elif self.fieldtype == FieldType.DICT:
            out["fields"] = [fd._dump_flat() for fd in self.children]
            if self.spec.additional_properties:  # type: ignore[union-attr]
                out["additional_properties"] = True
        else:
            out.update(self.spec.model_dump(exclude={"kind"}, exclude_none=True))  # type: ignore[union-attr]
        return out

    @property
    def children(self) -> list["FieldDescriptor"]:
        """Direct nested descriptors: dict fields, or the single list item."""
        if self.fieldtype == FieldType.DICT:
            return list(self.spec.fields)  # type: ignore[union-attr]
        if self.fieldtype == FieldType.LIST:
            return [self.spec.item]  # type: ignore[union-attr]
        return []


_DEFAULT_ITEM_DUMP = {"fieldtype": FieldType.STRING.value, "required": True}


def _list_item(parent: Any, flat: Dict[str, Any]) -> Any:
    """Element descriptor for a list, named `<parent>_item` unless it has a name."""
    if "item" in flat:
        item = flat["item"]
    elif "fields" in flat:
        item = {"fieldtype": FieldType.DICT.value, "fields": flat["fields"]}
    else:
        item = {"fieldtype": FieldType.STRING.value}
    if isinstance(item, dict) and "fieldname" not in item:
        item = {**item, "fieldname": f"{parent or 'item'}_item"}
    return item


FieldDescriptor.model_rebuild()
rebuild_specs(FieldDescriptor)
