#!/usr/bin/env python3
"""
Purpose:
    HTTP retrieval of off-chain content (media and metadata documents) for
    hash verification. One timeout-bound GET per call; no retries.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from wonzimer.core.constants import DEFAULT_FETCH_TIMEOUT
from wonzimer.core.errors import FetchError

logger = logging.getLogger(__name__)


class HttpFetcher:
    """
    Fetch raw bytes for a URI.

    Only a `200 OK` response counts as success; any other status, and any
    transport failure (DNS, connection, timeout), raises `FetchError`.

    Example:
        >>> fetcher = HttpFetcher(timeout=10)
        >>> data = fetcher.fetch("https://ipfs.io/ipfs/<cid>")  # doctest: +SKIP
    """

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT, session: Optional[requests.Session] = None):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, uri: str) -> bytes:
        """Return the response body for `uri`; raise `FetchError` otherwise."""
        logger.debug("Fetching %s (timeout=%ss)", uri, self.timeout)
        try:
            response = self.session.get(uri, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(uri, str(e)) from e

        if response.status_code != 200:
            raise FetchError(uri, f"unexpected status {response.status_code}")
        return response.content

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
