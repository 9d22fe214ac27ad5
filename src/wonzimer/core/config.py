#!/usr/bin/env python3
"""
Wonzimer toolkit configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final, List

from wonzimer.core.constants import DEFAULT_FETCH_TIMEOUT
from wonzimer.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "schema_paths": [],
    "address_book": None,
    "fetch": {"timeout": DEFAULT_FETCH_TIMEOUT},
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "wonzimer" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "wonzimer.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/wonzimer/config.json)
        3. Project config (./wonzimer.json)
        4. Environment overrides:
           - WONZIMER_SCHEMA_PATHS (pathsep-separated list of extra schema roots)
           - WONZIMER_ADDRESS_BOOK (path to an address-book JSON file)
           - WONZIMER_FETCH_TIMEOUT (seconds)
           - WONZIMER_LOG_LEVEL

    Bundled schemas are always loaded; `schema_paths` only adds roots.

    Raises:
        ValueError: if a config file holds invalid JSON or the timeout is not a number
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    project_path = Path.cwd() / PROJECT_CONFIG_NAME
    config = merge_dicts(config, load_json_file(project_path))

    schema_paths_env = os.getenv("WONZIMER_SCHEMA_PATHS")
    if schema_paths_env:
        config["schema_paths"] = _split_paths_env(schema_paths_env)

    address_book_env = os.getenv("WONZIMER_ADDRESS_BOOK")
    if address_book_env:
        config["address_book"] = str(Path(address_book_env).expanduser())

    timeout_env = os.getenv("WONZIMER_FETCH_TIMEOUT")
    if timeout_env:
        config.setdefault("fetch", {})["timeout"] = _parse_timeout(timeout_env)

    log_level_env = os.getenv("WONZIMER_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"WONZIMER_FETCH_TIMEOUT must be a number of seconds, got {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"WONZIMER_FETCH_TIMEOUT must be positive, got {value!r}")
    return timeout
