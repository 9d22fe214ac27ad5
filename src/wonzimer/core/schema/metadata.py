#!/usr/bin/env python3
"""
Pydantic model for the metadata block of a Wonzimer metadata schema file.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from wonzimer.core.utils import is_valid_namespace, is_valid_calendar_version


# --- Normalizers --- #

def _normalize_namespace(v) -> str:
    """
    Normalize a namespace token:
    - convert to str, strip whitespace, lowercase
    - validate against NAMESPACE_ALLOWED_RE
    """
    s = "" if v is None else str(v).strip().lower()
    if not s:
        raise ValueError("Invalid namespace: must be a non-empty string")
    if not is_valid_namespace(s):
        raise ValueError("Invalid namespace: allowed characters are [a-z0-9._-]")
    return s


def _normalize_calendar_version(v) -> str:
    s = "" if v is None else str(v).strip()
    if not is_valid_calendar_version(s):
        raise ValueError(f"Invalid calendar version {s!r}: expected 8 digits (e.g. 20210101)")
    return s


def _normalize_optional_text(v) -> Optional[str]:
    """None stays None; whitespace is trimmed; empty string -> None."""
    if v is None:
        return None
    s = str(v).strip()
    return s if s != "" else None


Namespace = Annotated[str, BeforeValidator(_normalize_namespace)]
CalendarVersion = Annotated[str, BeforeValidator(_normalize_calendar_version)]
OptionalText = Annotated[Optional[str], BeforeValidator(_normalize_optional_text)]


# --- Model --- #

class SchemaMetadata(BaseModel):
    """
    Metadata attached to a metadata schema file.

    Fields
    ------
    namespace:
        Project-scoped prefix the schema belongs to (lowercased, validated).
    calendar_version:
        8-digit date-shaped revision token.
    title / description:
        Optional human-readable labels.
    additional_properties:
        Whether documents may carry top-level keys the schema does not declare.

    Example
    -------
    >>> md = SchemaMetadata(namespace=" Wonzimer ", calendar_version="20210101")
    >>> md.namespace
    'wonzimer'
    >>> md.additional_properties
    False
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    namespace: Namespace = Field(..., description="Schema namespace (lowercased, validated).")
    calendar_version: CalendarVersion = Field(..., description="8-digit calendar version.")
    title: OptionalText = Field(default=None, description="Human-readable schema title.")
    description: OptionalText = Field(default=None, description="What documents of this version describe.")
    additional_properties: bool = Field(
        default=False,
        description="Accept top-level keys not declared in `structure`.",
    )
