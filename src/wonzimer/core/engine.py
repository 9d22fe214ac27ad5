#!/usr/bin/env python3
"""
Purpose:
    The MetadataEngine façade: generate, parse and validate metadata
    documents against calendar-versioned schemas, and verify fetched
    off-chain content against hashes recorded on-chain.
"""
from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from wonzimer.core.canonical import canonical_json, serialize
from wonzimer.core.constants import DEFAULT_TEXT_ENCODING
from wonzimer.core.errors import FetchError, SchemaValidationError
from wonzimer.core.formatting import format_validation_errors
from wonzimer.core.hashing import sha256_from_buffer
from wonzimer.core.media import MediaData
from wonzimer.core.runtime_model import build_metadata_adapter
from wonzimer.core.schema.registry import SchemaEntry, SchemaRegistry
from wonzimer.core.schema.version import VersionIdentifier

logger = logging.getLogger(__name__)

Version = Union[str, VersionIdentifier]


def _reject_constant(token: str) -> Any:
    """`json.loads` hook: NaN and Infinity are Python extensions, not JSON."""
    raise ValueError(f"{token} is not a valid JSON value")


# --- Verification results --- #

class VerificationStatus(str, Enum):
    """Outcome of checking one URI against its recorded hash."""
    VERIFIED = "verified"
    MISMATCHED = "mismatched"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ItemVerification:
    uri: str
    declared_digest: str
    status: VerificationStatus
    actual_digest: Optional[str] = None
    error: Optional[str] = None

    @property
    def verified(self) -> bool:
        return self.status is VerificationStatus.VERIFIED


@dataclass(frozen=True)
class MediaVerification:
    """Result for a media item: its content and its metadata document."""
    content: ItemVerification
    metadata: ItemVerification

    @property
    def verified(self) -> bool:
        """True only if both the content and the metadata match their recorded hashes."""
        return self.content.verified and self.metadata.verified


# --- Engine --- #

class MetadataEngine:
    """
    Coordinates the schema registry, validation and canonical serialization.

    Every metadata operation first resolves the version identifier; the
    registry's `InvalidVersionIdentifier`, `UnknownNamespace` and
    `UnknownCalendarVersion` propagate unchanged.

    `fetcher` is any object with `fetch(uri) -> bytes` that raises
    `FetchError` (or an `OSError`) on failure; it is only needed for
    `verify_media`/`is_verified_media`.

    Example:
        >>> engine = MetadataEngine(SchemaRegistry.bundled())
        >>> engine.generate("wonzimer-20210101", {
        ...     "name": "wonzimer whitepaper", "description": "internet renaissance",
        ...     "version": "wonzimer-20210101", "mimeType": "application/json"})
        '{"description":"internet renaissance","mimeType":"application/json","name":"wonzimer whitepaper","version":"wonzimer-20210101"}'
    """

    def __init__(self, registry: SchemaRegistry, fetcher: Any = None):
        self.registry = registry
        self.fetcher = fetcher

    # --- Metadata operations --- #

    def generate(self, version: Version, fields: Mapping[str, Any]) -> str:
        """
        Validate `fields` and return their canonical JSON text.

        Raises:
            SchemaValidationError: listing every violated constraint
        """
        entry = self.registry.resolve(version)
        self._raise_if_invalid(entry, fields)
        return serialize(fields, entry.schema).decode(DEFAULT_TEXT_ENCODING)

    def parse(self, version: Version, raw: Union[str, bytes]) -> Any:
        """
        Deserialize raw JSON text, validate it, and return the parsed object
        unchanged (not re-serialized).

        Raises:
            SchemaValidationError: if the text is not JSON or fails the schema
        """
        entry = self.registry.resolve(version)
        try:
            document = json.loads(raw, parse_constant=_reject_constant)
        except (TypeError, ValueError) as e:
            raise SchemaValidationError(entry.name, [f"<root>: Invalid JSON ({e})"]) from e
        self._raise_if_invalid(entry, document)
        return document

    def validate(self, version: Version, candidate: Any) -> bool:
        """True iff `candidate` conforms exactly to the resolved schema; never raises for mismatches."""
        entry = self.registry.resolve(version)
        return not self._errors(entry, candidate)

    def errors(self, version: Version, candidate: Any) -> List[str]:
        """Return the `path: message` violations for `candidate` (empty when valid)."""
        return self._errors(self.registry.resolve(version), candidate)

    # --- Content verification --- #

    def verify_content(self, declared_digest: str, fetched: bytes) -> bool:
        """Case-sensitive comparison of `declared_digest` with the SHA-256 of `fetched`."""
        if not isinstance(declared_digest, str):
            return False
        return sha256_from_buffer(fetched) == declared_digest

    def verify_uri(self, uri: str, declared_digest: str) -> ItemVerification:
        """Fetch `uri` and compare it with `declared_digest`; fetch failures are reported, not raised."""
        if self.fetcher is None:
            raise RuntimeError("verify_uri requires an engine constructed with a fetcher")
        try:
            data = self.fetcher.fetch(uri)
        except (FetchError, OSError) as e:
            logger.warning("Could not retrieve %s: %s", uri, e)
            return ItemVerification(uri, declared_digest, VerificationStatus.UNREACHABLE, error=str(e))

        actual = sha256_from_buffer(data)
        if self.verify_content(declared_digest, data):
            return ItemVerification(uri, declared_digest, VerificationStatus.VERIFIED, actual_digest=actual)
        logger.warning("Hash mismatch for %s: recorded %s, fetched %s", uri, declared_digest, actual)
        return ItemVerification(uri, declared_digest, VerificationStatus.MISMATCHED, actual_digest=actual)

    def verify_media(self, media: MediaData) -> MediaVerification:
        """
        Verify a media item's content and metadata document.

        The two fetches are independent reads and run concurrently.
        """
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="wonzimer-verify") as pool:
            content = pool.submit(self.verify_uri, media.token_uri, media.content_hash)
            metadata = pool.submit(self.verify_uri, media.metadata_uri, media.metadata_hash)
            return MediaVerification(content=content.result(), metadata=metadata.result())

    def is_verified_media(self, media: MediaData) -> bool:
        return self.verify_media(media).verified

    # --- Internals --- #

    @staticmethod
    def _errors(entry: SchemaEntry, candidate: Any) -> List[str]:
        if not isinstance(candidate, Mapping):
            kind = "null" if candidate is None else type(candidate).__name__
            return [f"<root>: Input should be an object (got {kind})"]
        adapter = build_metadata_adapter(entry.schema)
        try:
            adapter.validate_python(dict(candidate))
        except ValidationError as e:
            return format_validation_errors(e)
        # undeclared keys of open schemas are not type-checked above
        try:
            canonical_json(dict(candidate))
        except (TypeError, ValueError) as e:
            return [f"<root>: Not representable as JSON ({e})"]
        return []

    def _raise_if_invalid(self, entry: SchemaEntry, candidate: Any) -> None:
        errors = self._errors(entry, candidate)
        if errors:
            raise SchemaValidationError(entry.name, errors)
