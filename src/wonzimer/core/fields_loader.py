#!/usr/bin/env python3
"""
Purpose:
    Reads metadata field payloads authored as JSON or YAML files.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml

from wonzimer.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_FIELDS_EXT


def load_fields_file(path: Union[str, Path]) -> Any:
    """
    Load a field payload from `.json`, `.yml` or `.yaml`.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the extension is unsupported or the content does not parse
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"The file {str(p)!r} does not exist")
    suffix = p.suffix.lower()
    if suffix not in SUPPORTED_FIELDS_EXT:
        raise ValueError(
            f"Invalid fields file extension for {p.name!r}; expected one of {sorted(SUPPORTED_FIELDS_EXT)}"
        )

    text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {str(p)!r}: {e.msg} (line {e.lineno}, col {e.colno})") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {str(p)!r}: {e}") from e
