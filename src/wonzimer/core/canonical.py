#!/usr/bin/env python3
"""
Canonical serialization of metadata documents.

The canonical form is minimal JSON (no insignificant whitespace, UTF-8,
non-ASCII left unescaped) with object keys in the schema's declared field
order, so logically identical documents always produce identical bytes.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from wonzimer.core.constants import DEFAULT_TEXT_ENCODING
from wonzimer.core.schema.field_descriptor import FieldDescriptor
from wonzimer.core.schema.field_type import FieldType
from wonzimer.core.schema.metadata_schema import MetadataSchema, descriptors_by_name

_SEPARATORS = (",", ":")


# --- Public API --- #

def serialize(document: Mapping[str, Any], schema: MetadataSchema) -> bytes:
    """
    Render `document` as canonical bytes using `schema` for key order.

    No validation happens here. Declared keys come first in declared order
    (recursively for nested dicts and list items); undeclared keys follow
    in sorted order; absent fields are simply left out.
    """
    return _dumps(order_document(document, schema.structure))


def canonical_json(value: Any) -> bytes:
    """Schema-less canonical bytes: same minimal rendering with sorted keys."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=_SEPARATORS,
        ensure_ascii=False,
        allow_nan=False,
    ).encode(DEFAULT_TEXT_ENCODING)


def order_document(document: Mapping[str, Any], fields: Iterable[FieldDescriptor]) -> dict[str, Any]:
    """Return a new dict whose key order follows `fields`."""
    fields = list(fields)
    declared = descriptors_by_name(fields)
    out: dict[str, Any] = {}
    for fd in fields:
        if fd.fieldname in document:
            out[fd.fieldname] = _order_value(document[fd.fieldname], fd)
    for key in sorted((k for k in document if k not in declared), key=str):
        out[key] = _sorted_value(document[key])
    return out


# --- Internals --- #

def _order_value(value: Any, fd: FieldDescriptor) -> Any:
    if fd.fieldtype == FieldType.DICT and isinstance(value, Mapping):
        return order_document(value, fd.children)
    if fd.fieldtype == FieldType.LIST and isinstance(value, list):
        item = fd.children[0]
        return [_order_value(v, item) for v in value]
    return _sorted_value(value)


def _sorted_value(value: Any) -> Any:
    """Sort keys of undeclared nested objects so pass-through data stays deterministic."""
    if isinstance(value, Mapping):
        return {k: _sorted_value(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_sorted_value(v) for v in value]
    return value


def _dumps(value: Any) -> bytes:
    return json.dumps(
        value,
        separators=_SEPARATORS,
        ensure_ascii=False,
        allow_nan=False,
    ).encode(DEFAULT_TEXT_ENCODING)
