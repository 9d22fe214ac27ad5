#!/usr/bin/env python3
"""
Exception types raised by the Wonzimer metadata toolkit.

Resolution failures are `LookupError`s, payload failures are `ValueError`s,
so callers may catch either the specific class or the builtin family.
"""
from __future__ import annotations

from typing import Iterable, List


class WonzimerError(Exception):
    """Base class for all toolkit errors."""


class InvalidVersionIdentifier(WonzimerError, ValueError):
    """The identifier cannot be split into a `<namespace>-<calendarVersion>` pair."""

    def __init__(self, identifier: object, reason: str):
        self.identifier = identifier
        super().__init__(f"Invalid version identifier {identifier!r}: {reason}")


class UnknownNamespace(WonzimerError, LookupError):
    """No schemas are registered under the namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"There are no versions with the {namespace} project name")


class UnknownCalendarVersion(WonzimerError, LookupError):
    """The namespace is known but the calendar version is not registered."""

    def __init__(self, namespace: str, calendar_version: str):
        self.namespace = namespace
        self.calendar_version = calendar_version
        super().__init__(
            f"There are no versions in the {namespace} namespace "
            f"with the {calendar_version} calendar version"
        )


class SchemaValidationError(WonzimerError, ValueError):
    """
    A metadata payload failed validation against its resolved schema.

    `errors` holds one `path: message` line per violated constraint.
    """

    def __init__(self, version: str, errors: Iterable[str]):
        self.version = version
        self.errors: List[str] = list(errors)
        detail = "; ".join(self.errors) if self.errors else "unknown error"
        super().__init__(f"Metadata does not conform to {version}: {detail}")


class FetchError(WonzimerError):
    """Content could not be retrieved from a URI (transport error or non-200)."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to fetch {uri!r}: {reason}")
