"""Async client for the random-fact HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

__all__ = ["FactClient", "NetworkError", "extract_text"]

logger = logging.getLogger(__name__)

_USER_AGENT = "tele-fun-facts/1.0 (+https://core.telegram.org/bots)"


class NetworkError(RuntimeError):
    """A single fact request failed (transport, status or payload)."""


def extract_text(data: Any, field: str = "text") -> str:
    """Pull the fact text out of a decoded JSON body.

    Raises:
        NetworkError: If the body is not an object or the field is missing,
            empty or not a string.
    """
    if not isinstance(data, dict):
        raise NetworkError(f"unexpected payload type: {type(data).__name__}")
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise NetworkError(f"missing or empty {field!r} field")
    return value.strip()


class FactClient:
    """Single-attempt fetcher for one fact endpoint."""

    def __init__(
        self,
        url: str,
        field: str = "text",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.field = field
        self.timeout = timeout
        self._transport = transport

    async def fetch_fact(self) -> str:
        """Fetch one fact.

        Returns:
            The fact text, stripped but not lowercased.

        Raises:
            NetworkError: On any transport, status or parse failure.
        """
        headers = {"User-Agent": _USER_AGENT, "Accept": "application/json"}
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            try:
                resp = await client.get(self.url, headers=headers)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise NetworkError(f"fact request failed: {e}") from e

        if not resp.is_success:
            snippet = resp.text[:200].replace("\n", " ")
            raise NetworkError(f"fact API HTTP {resp.status_code}: {snippet}")
        try:
            data = resp.json()
        except ValueError as e:
            raise NetworkError(f"fact API returned invalid JSON: {e}") from e
        return extract_text(data, self.field)
