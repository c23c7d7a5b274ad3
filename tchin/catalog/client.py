"""Upstream bar API client: bars and events reads, booking creation."""
from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..booking.models import BookingRequest
from ..core.errors import MSG_BOOKING_DEFAULT_ERROR, BookingError
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Bar, Event

logger = logging.getLogger(__name__)

_BARS = TypeAdapter(list[Bar])
_EVENTS = TypeAdapter(list[Event])


class CatalogClient:
    """Talks to the upstream API. Reads degrade to empty; booking raises."""

    def __init__(
        self,
        config: CatalogConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or DEFAULT_CATALOG_CONFIG
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self._config.timeout, transport=self._transport)

    def _get_collection(self, path: str, adapter: TypeAdapter) -> list[Any]:
        url = self._config.url(path)
        started = time.perf_counter()
        try:
            with self._client() as c:
                r = c.get(url)
                r.raise_for_status()
                items = adapter.validate_python(r.json())
        except (httpx.HTTPError, ValueError, ValidationError):
            logger.warning("Catalog read %s failed, using an empty collection", url, exc_info=True)
            return []
        elapsed = (time.perf_counter() - started) * 1000
        logger.info("Catalog read %s items=%d latency=%.1fms", url, len(items), elapsed)
        return items

    def fetch_bars(self) -> list[Bar]:
        return self._get_collection(self._config.bars_path, _BARS)

    def fetch_events(self) -> list[Event]:
        return self._get_collection(self._config.events_path, _EVENTS)

    def create_booking(self, request: BookingRequest) -> dict[str, Any]:
        """
        POST a booking request upstream.

        Raises :class:`BookingError` on transport failure, an unparseable body,
        or any non-success status. The upstream ``error`` string, when present,
        becomes the exception message.
        """
        url = self._config.url(self._config.bookings_path)
        try:
            with self._client() as c:
                r = c.post(url, json=request.model_dump(by_alias=True))
        except httpx.HTTPError as exc:
            raise BookingError(str(exc) or MSG_BOOKING_DEFAULT_ERROR) from exc

        try:
            body = r.json()
        except ValueError as exc:
            raise BookingError(MSG_BOOKING_DEFAULT_ERROR, r.status_code) from exc

        if not r.is_success:
            error = body.get("error") if isinstance(body, dict) else None
            raise BookingError(str(error) if error else MSG_BOOKING_DEFAULT_ERROR, r.status_code)

        return body if isinstance(body, dict) else {"result": body}
