#!/usr/bin/env python3
"""
Purpose:
    Common helpers: identifier pattern checks, dictionary merge, and
    JSON file loading for the Wonzimer toolkit.
"""

import json
from pathlib import Path
from typing import Dict, Any

from wonzimer.core.constants import (
    CALENDAR_VERSION_RE, NAMESPACE_ALLOWED_RE,
    FIELDNAME_ALLOWED_RE, DEFAULT_TEXT_ENCODING
)


# --- Validation Helpers --- #

def is_valid_namespace(namespace: str) -> bool:
    """Return True if the namespace token is non-empty and uses [a-z0-9._-] only."""
    return bool(NAMESPACE_ALLOWED_RE.fullmatch(namespace))


def is_valid_calendar_version(version: str) -> bool:
    """Return True if the calendar version is an 8-digit token (e.g., '20210101')."""
    return bool(CALENDAR_VERSION_RE.fullmatch(version))


def is_valid_fieldname_pattern(name: str) -> bool:
    """Return True if the field name fully matches the allowed pattern."""
    return bool(FIELDNAME_ALLOWED_RE.fullmatch(name))


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
