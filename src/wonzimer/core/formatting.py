#!/usr/bin/env python3
"""
Formatting helpers for validation errors.

- One line per violated constraint, `path: message`, with JSON-style paths.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

# Pydantic error types that describe a wrong JSON type; the offending type is appended
_TYPE_ERRORS = frozenset({
    "string_type", "int_type", "float_type", "bool_type", "list_type",
    "model_type", "dict_type", "literal_error", "model_attributes_type",
})


# --- Public API --- #

def format_validation_errors(exc: Exception) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    Examples:
        version: Field required
        additionalProperty: Extra inputs are not permitted
        name: Input should be a valid string (got int)

    Falls back to the first line of str(exc) if `exc.errors()` isn't available.
    """
    errors: Sequence[dict[str, Any]] | None = None

    if callable(getattr(exc, "errors", None)):
        try:
            errors = exc.errors()  # type: ignore[attr-defined]
        except (TypeError, ValueError, AttributeError):
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]]

    msgs: List[str] = []
    for err in errors:
        path = format_error_loc(err.get("loc", ()))
        msg = err.get("msg", "Validation error")
        if err.get("type") in _TYPE_ERRORS and "input" in err:
            msg = f"{msg} (got {_json_type_name(err['input'])})"
        msgs.append(f"{path}: {msg}")
    return msgs


def format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('artist', 'name')     -> "artist.name"
        ('credits', 1, 'role') -> "credits[1].role"
        ()                     -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"


# --- Internals --- #

def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__
