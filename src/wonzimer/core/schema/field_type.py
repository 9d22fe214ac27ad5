#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldType enumeration for Wonzimer metadata schemas, along
    with helpers for parsing and introspection of field types.
"""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """
    Supported field types in a metadata schema.

    - string  : textual scalar
    - number  : numeric scalar (int or float, never bool)
    - integer : whole-number scalar (int, never bool)
    - boolean : true/false scalar
    - enum    : string constrained to a fixed set of options
    - list    : homogeneous list with one item schema
    - dict    : object with named nested fields
    - invalid : unrecognized/unsupported type (returned by `parse`)
    """

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    LIST = "list"
    DICT = "dict"
    INVALID = "invalid"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | FieldType | None) -> FieldType:
        """
        Coerce arbitrary input to a `FieldType`.

        - `FieldType` instance → returned as-is
        - `None` or unknown strings → `FieldType.INVALID`
        - strings are trimmed and lowercased before lookup; the JSON-Schema
          spellings `object` and `array` are accepted as `dict` and `list`

        Examples
        --------
        >>> FieldType.parse(" String ")
        <FieldType.STRING: 'string'>
        >>> FieldType.parse("object")
        <FieldType.DICT: 'dict'>
        >>> FieldType.parse("foo")
        <FieldType.INVALID: 'invalid'>
        """
        if isinstance(value, FieldType):
            return value
        if value is None:
            return cls.INVALID
        s = str(value).strip().lower()
        s = _JSON_SCHEMA_ALIASES.get(s, s)
        try:
            return cls(s)
        except ValueError:
            return cls.INVALID

    def is_numeric(self) -> bool:
        """True for `number` and `integer`."""
        return self in {FieldType.NUMBER, FieldType.INTEGER}


_JSON_SCHEMA_ALIASES = {"object": "dict", "array": "list"}
