"""
Client for the remote banned/restricted lookup.

Ban lists change over time, so per-card restrictions are answered by the
backend rather than hardcoded. One request per deck and format:

    GET {base_url}/decks/{deck_id}/legality?format=<format>

Failures surface as RestrictionLookupError subclasses so the caller can
turn them into issue strings.
"""

from typing import Any, Protocol

import httpx

from lotusflare.config import settings
from lotusflare.models.restriction import RestrictedCard, RestrictionReport


class RestrictionLookupError(Exception):
    """Raised when the restriction lookup cannot produce a report."""

    pass


class RestrictionServerError(RestrictionLookupError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class RestrictionNetworkError(RestrictionLookupError):
    """The service could not be reached or did not answer in time."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class RestrictionLookup(Protocol):
    """Anything that can answer a per-deck restriction lookup."""

    async def fetch_restrictions(self, deck_id: str, format_name: str) -> RestrictionReport: ...


def _error_message(response: httpx.Response) -> str:
    """Pull a human-readable message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if isinstance(body, dict):
        message = body.get("message") or body.get("details")
        if message:
            return str(message)
    return f"API Error: {response.status_code}"


def parse_restriction_report(data: dict[str, Any]) -> RestrictionReport:
    """
    Parse a lookup response body.

    Accepts "scryfall_id" or "printing_id" for the printing and "status"
    or "legality" for the restriction status.
    """
    illegal_cards: list[RestrictedCard] = []
    raw_cards = data.get("illegal_cards") or []
    if isinstance(raw_cards, list):
        for entry in raw_cards:
            if not isinstance(entry, dict):
                continue
            illegal_cards.append(
                RestrictedCard(
                    name=str(entry.get("name", "")),
                    printing_id=str(entry.get("scryfall_id") or entry.get("printing_id") or ""),
                    status=str(entry.get("status") or entry.get("legality") or "illegal"),
                )
            )

    return RestrictionReport(
        is_legal=bool(data.get("is_legal", not illegal_cards)),
        illegal_cards=tuple(illegal_cards),
    )


class RestrictionClient:
    """
    httpx-backed restriction lookup.

    Pass an existing AsyncClient to share a connection pool; otherwise a
    client is opened per request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.restriction_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.restriction_timeout_seconds
        self._client = client

    def _url(self, deck_id: str) -> str:
        return f"{self.base_url}/decks/{deck_id}/legality"

    async def fetch_restrictions(self, deck_id: str, format_name: str) -> RestrictionReport:
        """
        Ask the service which cards in a saved deck are banned or restricted.

        Args:
            deck_id: Persisted deck identifier
            format_name: Target format

        Returns:
            RestrictionReport for the deck

        Raises:
            RestrictionServerError: Non-2xx response
            RestrictionNetworkError: Connection failure or timeout
        """
        params = {"format": format_name}
        try:
            if self._client is not None:
                response = await self._client.get(
                    self._url(deck_id), params=params, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self._url(deck_id), params=params)
        except httpx.TimeoutException as e:
            raise RestrictionNetworkError(f"timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise RestrictionNetworkError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise RestrictionServerError(response.status_code, _error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise RestrictionServerError(response.status_code, "Malformed response body") from e
        if not isinstance(data, dict):
            raise RestrictionServerError(response.status_code, "Malformed response body")

        return parse_restriction_report(data)
