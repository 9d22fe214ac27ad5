#!/usr/bin/env python3
"""
Purpose:
    Generates YAML field templates from a MetadataSchema, so authors can fill
    in a metadata document before running `generate`.
"""

from __future__ import annotations

from typing import Any

import yaml

from wonzimer.core.schema.field_descriptor import FieldDescriptor
from wonzimer.core.schema.field_type import FieldType
from wonzimer.core.schema.metadata_schema import MetadataSchema


# --- Public API --- #

def build_template(schema: MetadataSchema, *, include_optional: bool = True) -> dict[str, Any]:
    """
    Return a placeholder document in declared field order.

    Strings get `<required>`/`<optional>` markers, numbers 0, booleans false,
    enums their first option; a `version` string field is pre-filled with the
    schema's own version identifier.
    """
    out: dict[str, Any] = {}
    for fd in schema.structure:
        if not fd.required and not include_optional:
            continue
        if fd.fieldname == "version" and fd.fieldtype == FieldType.STRING:
            out[fd.fieldname] = str(schema.version_identifier)
            continue
        out[fd.fieldname] = _placeholder(fd, include_optional)
    return out


def render_yaml_template(schema: MetadataSchema, *, include_optional: bool = True) -> str:
    """YAML text for `build_template`, headed by a comment naming the version."""
    header = f"# {schema.version_identifier}"
    if schema.metadata.title:
        header += f" - {schema.metadata.title}"
    body = yaml.safe_dump(
        build_template(schema, include_optional=include_optional),
        sort_keys=False,
        allow_unicode=True,
    )
    return f"{header}\n{body}"


# --- Internal Helpers --- #

def _placeholder(fd: FieldDescriptor, include_optional: bool) -> Any:
    ft = fd.fieldtype
    if ft == FieldType.DICT:
        return {
            child.fieldname: _placeholder(child, include_optional)
            for child in fd.children
            if child.required or include_optional
        }
    if ft == FieldType.LIST:
        return [_placeholder(fd.children[0], include_optional)]
    if ft == FieldType.ENUM:
        return fd.spec.options[0]  # type: ignore[union-attr]
    if ft == FieldType.BOOLEAN:
        return False
    if ft.is_numeric():
        return 0
    return "<required>" if fd.required else "<optional>"
