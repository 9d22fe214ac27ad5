#!/usr/bin/env python3
"""
Core constants used across the Wonzimer metadata toolkit.

- Schema files: bundled location, supported extensions and text encoding.
- Identifiers: namespace and calendar-version shapes.
- Hashing: digest length and streaming chunk size.
- Fetching: default request timeout.
"""

import re
from pathlib import Path
from typing import Final

# --- Schema files --- #

# Schemas shipped with the package; always the first registry root
BUNDLED_SCHEMA_ROOT: Final[Path] = Path(__file__).resolve().parent.parent / "schemas"

# Supported schema file extensions
SUPPORTED_SCHEMA_EXT: Final[frozenset[str]] = frozenset({".json"})

# Supported field files for the CLI (JSON or YAML payloads)
SUPPORTED_FIELDS_EXT: Final[frozenset[str]] = frozenset({".json", ".yml", ".yaml"})

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"


# --- Hashing --- #

SHA256_HEX_LENGTH: Final[int] = 64

HASH_CHUNK_SIZE: Final[int] = 64 * 1024


# --- Fetching --- #

DEFAULT_FETCH_TIMEOUT: Final[float] = 30.0


# --- Regular Expressions --- #

# Namespace token: lowercase letters, digits, dot, underscore, hyphen
NAMESPACE_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[a-z0-9._-]+$")

# Calendar version: 8 digits (e.g. 20210101)
CALENDAR_VERSION_RE: re.Pattern[str] = re.compile(r"^\d{8}$")

# Either half of a version identifier as written by a caller: any run of non-whitespace
VERSION_TOKEN_RE: re.Pattern[str] = re.compile(r"^\S+$")

# Field names: leading letter/underscore, then letters/numbers/underscores (camelCase allowed)
FIELDNAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Lowercase hex digest (SHA-256)
CONTENT_DIGEST_RE: re.Pattern[str] = re.compile(r"^[0-9a-f]{64}$")
