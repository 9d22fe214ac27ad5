#!/usr/bin/env python3
"""
Purpose:
    Compiles a static MetadataSchema into a runtime-generated Pydantic
    model/TypeAdapter that validates metadata documents, with caching keyed
    by a schema fingerprint.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, Literal, Optional, TYPE_CHECKING

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    TypeAdapter,
    create_model,
)
from pydantic.types import AllowInfNan, Strict, StringConstraints

from wonzimer.core.schema.field_descriptor import FieldDescriptor
from wonzimer.core.schema.field_specs import DictSpec, EnumSpec, ListSpec, StringSpec
from wonzimer.core.schema.field_type import FieldType

if TYPE_CHECKING:
    from wonzimer.core.schema.metadata_schema import MetadataSchema


# --- Adapter cache --- #

_ADAPTER_CACHE: Dict[str, TypeAdapter] = {}


def build_metadata_adapter(schema: "MetadataSchema") -> TypeAdapter:
    """
    Build (or fetch from cache) a Pydantic TypeAdapter that validates a
    metadata document for the given MetadataSchema.

    Behavior:
        - Compiles a model mirroring the schema's field types with JSON-style
          strictness: no coercion between strings, numbers and booleans, and
          `null` is never accepted (optional fields are omitted instead).
        - Unknown keys are rejected unless the (nested) schema sets
          `additional_properties`.
        - Field names are bound as aliases, so any JSON key that passes the
          fieldname pattern is usable (including names Pydantic reserves).

    Example:
        adapter = build_metadata_adapter(schema)
        adapter.validate_python(document)  # raises ValidationError if invalid
    """
    key = _schema_fingerprint(schema)
    if key in _ADAPTER_CACHE:
        return _ADAPTER_CACHE[key]

    model_name = f"{schema.namespace}_{schema.calendar_version}_Metadata"
    model = _model_for_fields(schema.structure, model_name, allow_extra=schema.additional_properties)
    adapter = TypeAdapter(model)
    _ADAPTER_CACHE[key] = adapter
    return adapter


# --- Internals --- #

def _schema_fingerprint(schema: "MetadataSchema") -> str:
    """
    Stable cache key over structure + schema identity.

    Incorporates canonical paths, field types, required flags and
    type-specific knobs (pattern, enum options, additional properties).
    """
    parts: list[str] = [str(schema.version_identifier), f"extra:{schema.additional_properties}"]
    for fd in _walk(schema.structure):
        parts.append(fd._path)
        parts.append(fd.fieldtype.value)
        parts.append("req" if fd.required else "opt")
        if fd.fieldtype == FieldType.STRING:
            pat = _string_pattern(fd)
            if pat:
                parts.append(f"pat:{pat}")
        elif fd.fieldtype == FieldType.ENUM:
            for o in _enum_options(fd):
                parts.append(f"opt:{o}")
        elif fd.fieldtype == FieldType.DICT:
            parts.append(f"extra:{_dict_spec(fd).additional_properties}")
    return "|".join(parts)


def _walk(fields: Iterable[FieldDescriptor]) -> Iterable[FieldDescriptor]:
    """Depth-first walk over FieldDescriptors, descending into dict/list children."""
    for fd in fields:
        yield fd
        yield from _walk(fd.children)


class _MetadataModel(BaseModel):
    """Base for generated models; aliases carry the JSON keys."""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)


class _OpenMetadataModel(_MetadataModel):
    model_config = ConfigDict(extra="allow")


def _model_for_fields(fields: list[FieldDescriptor], model_name: str, *, allow_extra: bool) -> type[BaseModel]:
    """
    Create a Pydantic model class for an object with the given FieldDescriptors.

    Internal attribute names are positional (`f0`, `f1`, ...); the declared
    fieldname is the alias used for validation and error locations.
    """
    field_defs: Dict[str, Any] = {}
    for i, fd in enumerate(fields):
        t = _py_type_for(fd)
        # Optional fields may be omitted; the default is not validated, so an explicit null still fails
        default = ... if fd.required else None
        field_defs[f"f{i}"] = (t, Field(default, alias=fd.fieldname))
    base = _OpenMetadataModel if allow_extra else _MetadataModel
    return create_model(model_name, __base__=base, **field_defs)


def _py_type_for(fd: FieldDescriptor) -> Any:
    """
    Map a FieldDescriptor to a typing object (or generated Pydantic model)
    describing the expected JSON value.
    """
    ft = fd.fieldtype

    if ft == FieldType.STRING:
        pat = _string_pattern(fd)
        return Annotated[str, StringConstraints(strict=True, pattern=pat)]

    if ft == FieldType.NUMBER:
        # ints are accepted; bools, numeric strings and nan/inf are not
        return Annotated[float, Strict(), AllowInfNan(False)]

    if ft == FieldType.INTEGER:
        return StrictInt

    if ft == FieldType.BOOLEAN:
        return StrictBool

    if ft == FieldType.ENUM:
        return Literal[tuple(_enum_options(fd))]  # type: ignore[misc,valid-type]

    if ft == FieldType.DICT:
        spec = _dict_spec(fd)
        name = f"{fd.fieldname[:1].upper()}{fd.fieldname[1:]}Obj"
        return _model_for_fields(spec.fields, name, allow_extra=spec.additional_properties)

    if ft == FieldType.LIST:
        elem_type = _py_type_for(_list_item(fd))
        # only real lists; tuples and sets have no single JSON form
        return Annotated[list[elem_type], Strict()]  # type: ignore[valid-type]

    # Fallback (should not occur with prior schema validation)
    return Any


# --- Spec Accessors --- #

def _string_pattern(fd: FieldDescriptor) -> Optional[str]:
    spec: StringSpec = fd.spec  # type: ignore[assignment]
    return spec.pattern if fd.fieldtype == FieldType.STRING else None


def _enum_options(fd: FieldDescriptor) -> list[str]:
    spec: EnumSpec = fd.spec  # type: ignore[assignment]
    return list(spec.options) if fd.fieldtype == FieldType.ENUM else []


def _dict_spec(fd: FieldDescriptor) -> DictSpec:
    spec: DictSpec = fd.spec  # type: ignore[assignment]
    return spec


def _list_item(fd: FieldDescriptor) -> FieldDescriptor:
    spec: ListSpec = fd.spec  # type: ignore[assignment]
    return spec.item
