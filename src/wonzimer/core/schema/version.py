#!/usr/bin/env python3
"""
Purpose:
    Parses and renders `<namespace>-<calendarVersion>` version identifiers
    (e.g. `wonzimer-20210101`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from wonzimer.core.constants import VERSION_TOKEN_RE
from wonzimer.core.errors import InvalidVersionIdentifier


@dataclass(frozen=True, order=True)
class VersionIdentifier:
    """
    A schema revision selector: namespace plus calendar version.

    The split happens on the last hyphen, so namespaces may themselves
    contain hyphens. Both halves are kept verbatim; whether they name a
    registered schema is decided by `SchemaRegistry.resolve`, which reports
    `UnknownNamespace` or `UnknownCalendarVersion`.

    >>> VersionIdentifier.parse("my-project-20210101")
    VersionIdentifier(namespace='my-project', calendar_version='20210101')
    >>> VersionIdentifier.parse("wonzimer-2021")
    VersionIdentifier(namespace='wonzimer', calendar_version='2021')
    """
    namespace: str
    calendar_version: str

    def __post_init__(self):
        for label, part in (("namespace", self.namespace), ("calendar version", self.calendar_version)):
            if not isinstance(part, str) or not VERSION_TOKEN_RE.fullmatch(part):
                raise InvalidVersionIdentifier(str(self), f"{label} must be non-empty and contain no whitespace")

    def __str__(self) -> str:
        return f"{self.namespace}-{self.calendar_version}"

    @classmethod
    def parse(cls, value: Union[str, "VersionIdentifier"]) -> "VersionIdentifier":
        """
        Parse a version identifier string.

        Raises:
            InvalidVersionIdentifier: if the value has no hyphen, or either
                side of the last hyphen is empty or contains whitespace.
        """
        if isinstance(value, VersionIdentifier):
            return value
        if not isinstance(value, str):
            raise InvalidVersionIdentifier(value, "expected a string")
        namespace, sep, calendar_version = value.strip().rpartition("-")
        if not sep:
            raise InvalidVersionIdentifier(value, "expected '<namespace>-<calendar version>'")
        return cls(namespace, calendar_version)
