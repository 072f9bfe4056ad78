"""Async HTTP client for the geocoding, weather and search providers.

This module wraps httpx.AsyncClient and maps every transport failure,
non-success status and empty result onto a ToolError with a provider-specific
code. The client is created once at startup and reused.
"""

import logging
from typing import Any

import httpx

from local_assistant.config import AssistantSettings
from local_assistant.services.types import SearchResult
from local_assistant.tools.errors import ToolError, ToolErrorCode

logger = logging.getLogger(__name__)


class ApiService:
    """Client for Nominatim, Open-Meteo and a SearxNG-compatible search API.

    Attributes:
        settings: Provider URLs and units
        _client: The underlying httpx.AsyncClient instance
    """

    def __init__(
        self,
        settings: AssistantSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API service.

        Args:
            settings: Application settings holding the provider URLs
            transport: Optional httpx transport, used to stub providers in tests
        """
        self.settings = settings
        self._client = httpx.AsyncClient(
            timeout=settings.http_timeout,
            headers={"User-Agent": settings.user_agent},
            transport=transport,
        )
        logger.info("ApiService initialized")

    async def _get_json(
        self, url: str, params: dict[str, Any], error_code: ToolErrorCode
    ) -> Any:
        """GET a URL and decode the JSON body.

        Args:
            url: The endpoint URL
            params: Query string parameters
            error_code: Code used for any failure of this request

        Returns:
            The decoded JSON body

        Raises:
            ToolError: On transport failure, non-2xx status or invalid JSON
        """
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ToolError(f"Failed to fetch data: {e}", error_code) from e

        if not response.is_success:
            logger.error(f"Request to {url} returned status {response.status_code}")
            raise ToolError(
                f"API request failed with status {response.status_code}", error_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ToolError(f"Failed to decode response: {e}", error_code) from e

    async def geocode(self, city: str) -> tuple[str, str]:
        """Get latitude and longitude for a city.

        Args:
            city: Free-form place name

        Returns:
            tuple: (latitude, longitude) as strings

        Raises:
            ToolError: GEOCODING_ERROR or CITY_NOT_FOUND
        """
        data = await self._get_json(
            f"{self.settings.geocoding_base_url}/search",
            {"q": city, "format": "json"},
            ToolErrorCode.GEOCODING_ERROR,
        )
        if not isinstance(data, list) or not data:
            raise ToolError(
                f"No coordinates found for city: {city}", ToolErrorCode.CITY_NOT_FOUND
            )

        first = data[0]
        logger.debug(f"Geocoded {city} to {first.get('lat')}, {first.get('lon')}")
        return str(first["lat"]), str(first["lon"])

    async def reverse_geocode(self, latitude: str, longitude: str) -> str:
        """Get a display name for a pair of coordinates.

        Raises:
            ToolError: REVERSE_GEOCODING_ERROR or LOCATION_NOT_FOUND
        """
        data = await self._get_json(
            f"{self.settings.geocoding_base_url}/reverse",
            {"lat": latitude, "lon": longitude, "format": "json"},
            ToolErrorCode.REVERSE_GEOCODING_ERROR,
        )
        display_name = data.get("display_name") if isinstance(data, dict) else None
        if not display_name:
            raise ToolError(
                f"No location found for coordinates: {latitude}, {longitude}",
                ToolErrorCode.LOCATION_NOT_FOUND,
            )
        return display_name

    async def get_current_temperature(self, latitude: str, longitude: str) -> float:
        """Get the current temperature at a pair of coordinates.

        The unit follows settings.temperature_unit.

        Raises:
            ToolError: WEATHER_ERROR
        """
        data = await self._get_json(
            self.settings.weather_base_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "current": "temperature_2m",
                "temperature_unit": self.settings.temperature_unit,
                "wind_speed_unit": self.settings.wind_speed_unit,
                "forecast_days": self.settings.forecast_days,
            },
            ToolErrorCode.WEATHER_ERROR,
        )
        try:
            return float(data["current"]["temperature_2m"])
        except (KeyError, TypeError, ValueError) as e:
            raise ToolError(
                f"Unexpected weather response: {e}", ToolErrorCode.WEATHER_ERROR
            ) from e

    async def search(self, query: str) -> SearchResult:
        """Run a web search and return the top result.

        Raises:
            ToolError: SEARCH_ERROR or NO_SEARCH_RESULTS
        """
        data = await self._get_json(
            f"{self.settings.search_base_url}/search",
            {"q": query, "format": "json"},
            ToolErrorCode.SEARCH_ERROR,
        )
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise ToolError(
                f"No results found for query: {query}", ToolErrorCode.NO_SEARCH_RESULTS
            )

        top = results[0]
        return SearchResult(title=top.get("title", ""), content=top.get("content", ""))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("ApiService closed")
