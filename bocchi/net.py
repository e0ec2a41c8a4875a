"""The shared HTTP client."""

from __future__ import annotations

from functools import lru_cache

import httpx

HTTP_TIMEOUT = 600.0


@lru_cache(maxsize=None)
def http_client() -> httpx.AsyncClient:
    """One client for the whole process, following redirects, with a long timeout."""
    return httpx.AsyncClient(timeout=HTTP_TIMEOUT, follow_redirects=True)