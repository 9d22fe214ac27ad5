#!/usr/bin/env python3
"""
Purpose:
    Defines Pydantic specification models for each supported metadata field
    type, including nested structure and constraint details.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union, List, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .field_descriptor import FieldDescriptor


# --- Per-type spec models --- #

class _Spec(BaseModel):
    model_config = ConfigDict(extra="forbid")


class StringSpec(_Spec):
    """Specification for a string field (optional regex constraint)."""
    kind: Literal["string"] = "string"
    pattern: Optional[str] = Field(
        default=None,
        description="Regex searched in string values (anchor with ^...$ for a full match).",
    )


class NumberSpec(_Spec):
    kind: Literal["number"] = "number"


class IntegerSpec(_Spec):
    kind: Literal["integer"] = "integer"


class BooleanSpec(_Spec):
    kind: Literal["boolean"] = "boolean"


class EnumSpec(_Spec):
    """Specification for an enum field (string constrained to fixed options)."""
    kind: Literal["enum"] = "enum"
    options: List[str] = Field(
        min_length=1,
        description="Allowed enum values (non-empty list).",
    )


class DictSpec(_Spec):
    """Specification for an object with named nested fields."""
    kind: Literal["dict"] = "dict"
    fields: List["FieldDescriptor"] = Field(
        min_length=1,
        description="Nested named fields (at least one), in canonical order.",
    )
    additional_properties: bool = Field(
        default=False,
        description="Accept keys not declared in `fields`.",
    )


class ListSpec(_Spec):
    """Specification for a homogeneous list of items, with one element schema."""
    kind: Literal["list"] = "list"
    item: "FieldDescriptor" = Field(
        ...,
        description="Schema describing each list element.",
    )


# --- Discriminated union of all per-type specs --- #
# Used by FieldDescriptor to accept/validate the correct spec model
# based on the 'kind' field.

FieldSpec = Annotated[
    Union[StringSpec, NumberSpec, IntegerSpec, BooleanSpec, EnumSpec, DictSpec, ListSpec],
    Field(discriminator="kind"),
]


# --- Forward-Ref Rebuild Utility --- #

def rebuild_specs(FieldDescriptor: type) -> None:
    """
    Resolve forward references to FieldDescriptor after it is defined.

    Must be called by the module that defines FieldDescriptor, once the class exists.
    """
    globals()["FieldDescriptor"] = FieldDescriptor
    for cls in (DictSpec, ListSpec):
        cls.model_rebuild()
