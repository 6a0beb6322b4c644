"""
FeedClient: shared HTTP plumbing for the upstream market data services.

Availability failures (connection errors, timeouts, HTTP error statuses,
non-JSON bodies) are logged and turned into an empty result so one dead
feed never aborts a run. A payload with the wrong shape raises
FeedFormatError instead.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

logger = logging.getLogger("tez_market.feeds")

RecordT = TypeVar("RecordT", bound=BaseModel)


class FeedError(Exception):
    """Base error for upstream feed problems."""
    pass


class FeedUnavailable(FeedError):
    """The feed could not be reached or answered with an error status."""
    pass


class FeedFormatError(FeedError, ValueError):
    """The feed answered, but the payload does not have the expected shape."""
    pass


class FeedClient:
    """
    Base class for a read-only JSON feed.

    Args:
        api_url:   base URL of the service
        timeout:   per-request timeout in seconds
        transport: optional httpx transport (e.g. httpx.MockTransport in tests)
    """

    name = "feed"

    def __init__(
        self,
        api_url: str,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api = api_url.rstrip("/")
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def fetch_json(self, path: str) -> Any:
        """
        GET ``path`` and return the decoded JSON body.

        Raises:
            FeedUnavailable: on transport errors, timeouts, error statuses or
                             a body that is not JSON
        """
        url = f"{self._api}{path}"
        try:
            resp = self._http.get(url)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise FeedUnavailable(f"Error fetching {url}: {e}") from e
        except ValueError as e:
            raise FeedUnavailable(f"Invalid JSON from {url}: {e}") from e

    def _get_json(self, path: str) -> Any | None:
        try:
            return self.fetch_json(path)
        except FeedUnavailable as e:
            logger.error(f"{self.name} unavailable, using empty result. {e}")
            return None

    def _get_records(self, path: str, model: type[RecordT]) -> list[RecordT]:
        """Fetch a JSON array and validate every item as ``model``."""
        data = self._get_json(path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise FeedFormatError(
                f"{self.name}: expected a JSON array from {path}, got {type(data).__name__}"
            )
        try:
            records = [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise FeedFormatError(f"{self.name}: malformed {model.__name__} record: {e}") from e
        logger.debug(f"{self.name}: {len(records)} {model.__name__} records from {path}")
        return records

    def _get_record(self, path: str, model: type[RecordT]) -> RecordT | None:
        """Fetch a JSON object and validate it as ``model``."""
        data = self._get_json(path)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise FeedFormatError(
                f"{self.name}: expected a JSON object from {path}, got {type(data).__name__}"
            )
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FeedFormatError(f"{self.name}: malformed {model.__name__}: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()
