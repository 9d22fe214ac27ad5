#!/usr/bin/env python3
"""
Purpose:
    Implements the SchemaRegistry, which discovers and loads calendar-versioned
    metadata schemas from the bundled schema directory plus any extra roots,
    and resolves version identifiers to exactly one schema.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from wonzimer.core.constants import BUNDLED_SCHEMA_ROOT, SUPPORTED_SCHEMA_EXT
from wonzimer.core.errors import UnknownCalendarVersion, UnknownNamespace
from wonzimer.core.runtime_model import build_metadata_adapter
from wonzimer.core.schema.metadata_schema import MetadataSchema
from wonzimer.core.schema.version import VersionIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaEntry:
    """
    Record for a schema file discovered on disk.
    - name: version identifier for valid entries; filename stem otherwise
    - path: absolute path to the JSON file
    - valid: whether this is the selected, usable schema
    - schema: the loaded schema (None for unparseable files)
    - reason: diagnostic text for invalid entries (parse error, duplicate dropped)
    """
    name: str
    path: Path
    valid: bool
    schema: Optional[MetadataSchema] = None
    reason: Optional[str] = None

    @property
    def namespace(self) -> Optional[str]:
        return self.schema.namespace if self.schema else None

    @property
    def calendar_version(self) -> Optional[str]:
        return self.schema.calendar_version if self.schema else None


class SchemaRegistry:
    """
    Read-only table of metadata schemas keyed by (namespace, calendar_version).

    Roots are scanned once at construction, bundled schemas first. When two
    files declare the same version, the first one scanned wins and the other
    is recorded as an invalid `duplicate-dropped` entry.
    """

    def __init__(self, roots: Iterable[Union[str, Path]] = (), *, include_bundled: bool = True):
        extra = [Path(r) for r in roots]
        self._roots: List[Path] = ([BUNDLED_SCHEMA_ROOT] if include_bundled else []) + extra
        self._schemas: Dict[str, Dict[str, SchemaEntry]] = {}   # namespace -> calendar_version -> entry
        self._entries: List[SchemaEntry] = []                   # all scanned results (valid + invalid)
        self._load()

    @classmethod
    def bundled(cls) -> "SchemaRegistry":
        """Registry holding only the schemas shipped with the package."""
        return cls()

    # --- Query API --- #

    def resolve(self, version: Union[str, VersionIdentifier]) -> SchemaEntry:
        """
        Resolve a version identifier to its schema entry (exact match only).

        Raises:
            InvalidVersionIdentifier: if the identifier cannot be split into namespace and calendar version
            UnknownNamespace: if no schema is registered under the namespace
            UnknownCalendarVersion: if the namespace has no such calendar version
        """
        vid = VersionIdentifier.parse(version)
        versions = self._schemas.get(vid.namespace)
        if not versions:
            raise UnknownNamespace(vid.namespace)
        entry = versions.get(vid.calendar_version)
        if entry is None:
            raise UnknownCalendarVersion(vid.namespace, vid.calendar_version)
        return entry

    def get(self, version: Union[str, VersionIdentifier]) -> Optional[SchemaEntry]:
        """Return the entry for a version identifier, or None when it is not registered."""
        try:
            return self.resolve(version)
        except LookupError:
            return None

    def namespaces(self) -> list[str]:
        """Sorted namespaces with at least one valid schema."""
        return sorted(self._schemas.keys())

    def versions(self, namespace: str) -> list[str]:
        """Sorted calendar versions registered under a namespace (empty if unknown)."""
        return sorted(self._schemas.get(namespace, {}).keys())

    def supported_versions(self) -> list[str]:
        """All resolvable version identifiers, sorted."""
        return [f"{ns}-{cv}" for ns in self.namespaces() for cv in self.versions(ns)]

    def entries(self) -> List[SchemaEntry]:
        """All scanned entries (valid + invalid)."""
        return list(self._entries)

    def valid_entries(self) -> List[SchemaEntry]:
        return [e for e in self._entries if e.valid]

    def invalid_entries(self) -> List[SchemaEntry]:
        """Only invalid entries (parse errors, duplicates dropped)."""
        return [e for e in self._entries if not e.valid]

    @property
    def roots(self) -> List[Path]:
        """Roots scanned by this registry, bundled root first."""
        return list(self._roots)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (str, VersionIdentifier)):
            return False
        try:
            return self.get(version) is not None
        except ValueError:
            return False

    def __len__(self) -> int:
        return sum(len(v) for v in self._schemas.values())

    # --- Loading Helpers --- #

    def _load(self) -> None:
        for p in self._iter_schema_files():
            schema, err = self._parse_schema_file(p)
            if err:
                self._record_invalid(p.stem, p, err)
                continue
            self._add(schema, p)
        logger.debug("Loaded %d schema(s) from %d root(s)", len(self), len(self._roots))

    def _iter_schema_files(self) -> Iterator[Path]:
        for root in self._roots:
            if not root.exists():
                logger.debug("Schema root %s does not exist; skipping", root)
                continue
            for p in sorted(root.rglob("*")):
                if p.is_file() and p.suffix.lower() in SUPPORTED_SCHEMA_EXT:
                    yield p.resolve()

    def _parse_schema_file(self, path: Path) -> Tuple[Optional[MetadataSchema], Optional[str]]:
        try:
            return MetadataSchema.from_file(path), None
        except (OSError, ValueError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
            return None, str(e)

    def _record_invalid(self, name: str, path: Path, reason: str, schema: Optional[MetadataSchema] = None) -> None:
        logger.warning("Ignoring schema file %s: %s", path, reason.splitlines()[0])
        self._entries.append(SchemaEntry(name=name, path=path, valid=False, schema=schema, reason=reason))

    def _add(self, schema: MetadataSchema, path: Path) -> None:
        name = str(schema.version_identifier)
        versions = self._schemas.setdefault(schema.namespace, {})
        if schema.calendar_version in versions:
            winner = versions[schema.calendar_version]
            self._record_invalid(name, path, f"duplicate-dropped (already loaded from {winner.path})", schema)
            return
        entry = SchemaEntry(name=name, path=path, valid=True, schema=schema, reason="kept")
        versions[schema.calendar_version] = entry
        self._entries.append(entry)
        # Warm adapter cache
        build_metadata_adapter(schema)
