#!/usr/bin/env python3
"""
Purpose:
    Wires together the application context: merged configuration, the schema
    registry, and the metadata engine with its HTTP fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from wonzimer.core.addresses import AddressBook
from wonzimer.core.config import load_config
from wonzimer.core.constants import DEFAULT_FETCH_TIMEOUT
from wonzimer.core.engine import MetadataEngine
from wonzimer.core.fetch import HttpFetcher
from wonzimer.core.schema.registry import SchemaRegistry


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, registry and engine."""
    config: Dict[str, Any]
    schemas: SchemaRegistry
    engine: MetadataEngine

    def address_book(self) -> AddressBook:
        """
        Load the address book named by `config['address_book']`.

        Raises:
            LookupError: if no address book is configured
        """
        path = self.config.get("address_book")
        if not path:
            raise LookupError("No address book configured (set 'address_book' or WONZIMER_ADDRESS_BOOK)")
        return AddressBook.from_file(path)


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    schema_roots: Optional[Iterable[Path]] = None,
    fetcher: Any = None,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        schema_roots:
            Optional override for extra schema roots. Defaults to `config['schema_paths']`.
            Bundled schemas are always included.
        fetcher:
            Optional content fetcher; defaults to an `HttpFetcher` using `config['fetch']['timeout']`.

    Returns:
        AppContext: immutable bundle of config, schema registry and engine.
    """
    cfg = config or load_config()

    schema_paths = [Path(p) for p in (schema_roots or cfg.get("schema_paths", []))]
    registry = SchemaRegistry(schema_paths)

    if fetcher is None:
        timeout = float((cfg.get("fetch") or {}).get("timeout", DEFAULT_FETCH_TIMEOUT))
        fetcher = HttpFetcher(timeout=timeout)

    return AppContext(config=cfg, schemas=registry, engine=MetadataEngine(registry, fetcher))
