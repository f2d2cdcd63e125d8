import httpx
import logging
import math
from typing import Optional
from delivery_quote.core.config import settings
from delivery_quote.core.metrics import track_distance_lookup

logger = logging.getLogger(__name__)


class DistanceLookupError(Exception):
    """Base class for distance provider failures."""


class MapsNotConfiguredError(DistanceLookupError):
    pass


class RouteNotFoundError(DistanceLookupError):
    pass


class DistanceProviderError(DistanceLookupError):
    pass


class DistanceMatrixClient:
    """Driving distance between two addresses via the Google Distance Matrix API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        self.url = url or settings.DISTANCE_MATRIX_URL
        self.timeout = timeout or settings.DISTANCE_TIMEOUT
        self.transport = transport

    @track_distance_lookup
    async def get_distance_km(self, origin: str, destination: str) -> float:
        if not self.api_key:
            raise MapsNotConfiguredError("Maps API key is not configured")

        params = {
            "origins": origin,
            "destinations": destination,
            "key": self.api_key,
            "units": "metric",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Distance lookup failed for '{origin}' -> '{destination}': {e}")
            raise DistanceProviderError(str(e)) from e
        except ValueError as e:
            logger.error(f"Distance provider returned invalid JSON: {e}")
            raise DistanceProviderError("invalid response from distance provider") from e

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            logger.warning(
                f"No route in distance response for '{origin}' -> '{destination}': "
                f"status {data.get('status') if isinstance(data, dict) else None}"
            )
            raise RouteNotFoundError("no route between addresses")

        if not isinstance(element, dict):
            logger.error(f"Distance provider returned a malformed element: {element!r}")
            raise DistanceProviderError("malformed element in provider response")

        if element.get("status") != "OK":
            logger.warning(
                f"Distance element status {element.get('status')} for '{origin}' -> '{destination}'"
            )
            raise RouteNotFoundError("no route between addresses")

        try:
            meters = float(element["distance"]["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise DistanceProviderError("distance missing from provider response") from e

        if not math.isfinite(meters) or meters < 0:
            logger.error(f"Distance provider returned an invalid distance: {meters}")
            raise DistanceProviderError("invalid distance in provider response")

        distance_km = meters / 1000
        logger.info(f"Distance '{origin}' -> '{destination}': {distance_km} km")
        return distance_km


def get_distance_client() -> DistanceMatrixClient:
    return DistanceMatrixClient()
