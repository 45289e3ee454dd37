"""HTTP client for the directions provider (Google Directions API format)."""

from __future__ import annotations

import logging
import math
import time

import httpx

from ...config import settings
from ...exceptions import RoutingError
from .models import RouteMetrics

logger = logging.getLogger(__name__)


def _retryable_status(code: int) -> bool:
    return code == 429 or code >= 500


class DirectionsClient:
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.directions_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.directions_api_key
        self.language = language or settings.directions_language
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.directions_max_retries
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None else settings.directions_backoff_seconds
        )
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            transport=self._transport,
        )

    def _request(self, params: dict) -> dict:
        url = f"{self.base_url}/directions/json"
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as exc:
                    code = exc.response.status_code
                    attempt += 1
                    if not _retryable_status(code) or attempt > self.max_retries:
                        raise RoutingError(f"Directions API HTTP {code}") from exc
                    logger.debug(f"Directions HTTP {code}, retrying (attempt {attempt}/{self.max_retries})")
                    time.sleep(self.backoff_seconds * attempt)
                except httpx.TimeoutException as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Directions request timed out after {attempt} attempt(s): {exc}")
                        raise RoutingError(f"Directions API timed out after {self.timeout:.0f}s") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except httpx.TransportError as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingError(
                            f"Failed to connect to directions service at {self.base_url}: {exc}"
                        ) from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {exc}")
                    time.sleep(wait_time)
                except ValueError as exc:
                    # Body was not JSON; retrying will not help.
                    raise RoutingError(f"Directions API returned a malformed payload: {exc}") from exc
                except httpx.HTTPError as exc:
                    # Redirect loops, invalid URLs and the like.
                    raise RoutingError(f"Directions request failed: {exc}") from exc
        finally:
            client.close()

    def route_metrics(self, origin: str, destination: str) -> RouteMetrics:
        """Distance (whole km, at least 1) and duration (hours) of the best route.

        Raises:
            RoutingError: no API key, HTTP failure, malformed payload or no route.
        """
        if not self.api_key:
            raise RoutingError("Directions API key is not configured (FQ_DIRECTIONS_API_KEY).")

        params = {
            "origin": origin,
            "destination": destination,
            "units": "metric",
            "language": self.language,
            "key": self.api_key,
        }
        data = self._request(params)
        return parse_route_metrics(data)


def parse_route_metrics(data: object) -> RouteMetrics:
    """Sum the legs of the first route into a ``RouteMetrics``."""
    if not isinstance(data, dict):
        raise RoutingError("Directions API returned a malformed payload.")

    status = data.get("status")
    routes = data.get("routes") or []
    legs = routes[0].get("legs") if routes and isinstance(routes[0], dict) else None
    if status != "OK" or not legs:
        raise RoutingError(f"Directions API error: {status or 'no route'}")

    meters = 0.0
    seconds = 0.0
    try:
        for leg in legs:
            meters += float((leg.get("distance") or {}).get("value") or 0)
            seconds += float((leg.get("duration") or {}).get("value") or 0)
    except (AttributeError, TypeError, ValueError) as exc:
        raise RoutingError(f"Directions API returned malformed legs: {exc}") from exc

    return RouteMetrics(
        # Half-up rounding to whole kilometers, never below 1 km.
        distance_km=max(1, math.floor(meters / 1000 + 0.5)),
        duration_hours=seconds / 3600.0,
    )


def check_health(client: DirectionsClient | None = None) -> bool:
    """Check that the directions provider is configured and answers.

    Uses a short fixed route; any failure reports unhealthy instead of raising.
    """
    directions = client or DirectionsClient(timeout=5.0, max_retries=0)
    try:
        directions.route_metrics("Amsterdam, NL", "Utrecht, NL")
        return True
    except RoutingError as exc:
        logger.info(f"Directions health check failed: {exc}")
        return False
