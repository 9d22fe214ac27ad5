#!/usr/bin/env python3
"""
Purpose:
    Defines the MetadataSchema model, the structural description of one
    calendar-versioned metadata document shape within a namespace.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Iterable, Union, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wonzimer.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_SCHEMA_EXT
from wonzimer.core.schema.field_descriptor import FieldDescriptor
from wonzimer.core.schema.field_type import FieldType
from wonzimer.core.schema.metadata import SchemaMetadata
from wonzimer.core.schema.version import VersionIdentifier


# --- Model --- #

class MetadataSchema(BaseModel):
    """
    Structural description of a metadata document version.

    Fields:
    -------
    metadata:
        is validated by `SchemaMetadata` (namespace, calendar_version, ...)
    structure:
        is an ordered list of `FieldDescriptor` entries (nested via specs);
        the order is the canonical key order used for serialization.

    Notes:
    ------
    On construction we:
        1) assign a canonical private `_path` to all nodes (used for fingerprints)
        2) validate there are no duplicate `fieldname` values among siblings (recursively)
    """

    model_config = ConfigDict(extra="forbid")

    metadata: SchemaMetadata = Field(...)
    structure: list[FieldDescriptor] = Field(default_factory=list)

    # --- Convenience --- #

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def calendar_version(self) -> str:
        return self.metadata.calendar_version

    @property
    def version_identifier(self) -> VersionIdentifier:
        return VersionIdentifier(self.namespace, self.calendar_version)

    @property
    def additional_properties(self) -> bool:
        return self.metadata.additional_properties

    @property
    def field_order(self) -> list[str]:
        """Top-level field names in declared (canonical) order."""
        return [fd.fieldname for fd in self.structure]

    @property
    def required_fields(self) -> list[str]:
        return [fd.fieldname for fd in self.structure if fd.required]

    # --- Normalization / Validation --- #

    @model_validator(mode="after")
    def _post_init(self) -> "MetadataSchema":
        self._assign_paths(self.structure, parent_path="")
        self._check_no_duplicates(self.structure, at_path="structure")
        return self

    @classmethod
    def _assign_paths(cls, fds: Iterable[FieldDescriptor], parent_path: str) -> None:
        """
        Assign canonical `_path` to each FieldDescriptor and recurse into
        dict/list children held within their `spec`.
        """
        for fd in fds:
            fd._path = f"{parent_path}/{fd.fieldname}" if parent_path else fd.fieldname

            if fd.fieldtype == FieldType.DICT:
                cls._assign_paths(fd.children, parent_path=fd._path)

            # '[]' marks the element so it never collides with the list node itself
            if fd.fieldtype == FieldType.LIST:
                cls._assign_paths(fd.children, parent_path=f"{fd._path}[]")

    @classmethod
    def _check_no_duplicates(cls, fds: Iterable[FieldDescriptor], at_path: str) -> None:
        """Ensure no duplicate fieldnames among siblings, recursing into dict/list specs."""
        fds = list(fds)
        details = cls._dup_details(fd.fieldname for fd in fds)
        if details:
            raise ValueError(f"Duplicate field names at {at_path!r}: {details}")

        for fd in fds:
            if fd.fieldtype == FieldType.LIST:
                cls._check_no_duplicates(fd.children, f"{at_path}.{fd.fieldname}[]")
            elif fd.fieldtype == FieldType.DICT:
                cls._check_no_duplicates(fd.children, f"{at_path}.{fd.fieldname}")

    @staticmethod
    def _dup_details(names: Iterable[str]) -> str | None:
        counts = Counter(names)
        dups = [(n, c) for n, c in sorted(counts.items()) if c > 1]
        if not dups:
            return None
        return ", ".join(f"{n} ×{c}" for n, c in dups)

    # --- File IO --- #

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "MetadataSchema":
        """
        Load a MetadataSchema from a JSON file.

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the file extension is not supported
            ValidationError: if the payload fails model validation
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"The file {str(p)!r} does not exist")
        if p.suffix.lower() not in SUPPORTED_SCHEMA_EXT:
            raise ValueError(
                f"Invalid schema file extension for {p.name!r}; expected one of {sorted(SUPPORTED_SCHEMA_EXT)}"
            )
        data = json.loads(p.read_text(encoding=DEFAULT_TEXT_ENCODING))
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Flat authoring shape, suitable for writing back to a schema file."""
        return {
            "metadata": self.metadata.model_dump(exclude_none=True),
            "structure": [fd.model_dump() for fd in self.structure],
        }


def descriptors_by_name(fields: List[FieldDescriptor]) -> dict[str, FieldDescriptor]:
    return {fd.fieldname: fd for fd in fields}
