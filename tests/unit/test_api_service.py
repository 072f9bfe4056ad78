"""Unit tests for ApiService using an in-memory httpx transport."""

import httpx
import pytest

from local_assistant.services import ApiService
from local_assistant.tools import ToolError, ToolErrorCode


def make_service(test_settings, handler):
    return ApiService(test_settings, transport=httpx.MockTransport(handler))


class TestGeocode:
    """Tests for forward geocoding."""

    @pytest.mark.asyncio
    async def test_geocode(self, test_settings):
        """Test that the first match's coordinates are returned as strings."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(
                200,
                json=[
                    {"lat": "51.5073219", "lon": "-0.1276474"},
                    {"lat": "42.98", "lon": "-81.24"},
                ],
            )

        service = make_service(test_settings, handler)
        assert await service.geocode("London") == ("51.5073219", "-0.1276474")
        await service.close()

        request = requests[0]
        assert request.url.host == "geo.test"
        assert request.url.path == "/search"
        assert request.url.params["q"] == "London"
        assert request.url.params["format"] == "json"
        assert request.headers["User-Agent"] == test_settings.user_agent

    @pytest.mark.asyncio
    async def test_geocode_no_results(self, test_settings):
        """Test that an empty result list raises CITY_NOT_FOUND."""
        service = make_service(test_settings, lambda request: httpx.Response(200, json=[]))

        with pytest.raises(ToolError) as exc_info:
            await service.geocode("Atlantis")

        assert exc_info.value.code == ToolErrorCode.CITY_NOT_FOUND
        assert exc_info.value.message == "No coordinates found for city: Atlantis"

    @pytest.mark.asyncio
    async def test_geocode_http_error(self, test_settings):
        """Test that a non-success status raises GEOCODING_ERROR."""
        service = make_service(test_settings, lambda request: httpx.Response(503))

        with pytest.raises(ToolError) as exc_info:
            await service.geocode("London")

        assert exc_info.value.code == ToolErrorCode.GEOCODING_ERROR
        assert exc_info.value.message == "API request failed with status 503"

    @pytest.mark.asyncio
    async def test_geocode_transport_error(self, test_settings):
        """Test that a connection failure raises GEOCODING_ERROR."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(test_settings, handler)

        with pytest.raises(ToolError) as exc_info:
            await service.geocode("London")

        assert exc_info.value.code == ToolErrorCode.GEOCODING_ERROR
        assert exc_info.value.message.startswith("Failed to fetch data:")


class TestReverseGeocode:
    """Tests for reverse geocoding."""

    @pytest.mark.asyncio
    async def test_reverse_geocode(self, test_settings):
        """Test that the display name is returned."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"display_name": "Chicago, Cook County, Illinois"})

        service = make_service(test_settings, handler)

        assert await service.reverse_geocode("41.88", "-87.64") == "Chicago, Cook County, Illinois"
        assert requests[0].url.path == "/reverse"
        assert requests[0].url.params["lat"] == "41.88"
        assert requests[0].url.params["lon"] == "-87.64"

    @pytest.mark.asyncio
    async def test_reverse_geocode_not_found(self, test_settings):
        """Test that a response without display_name raises LOCATION_NOT_FOUND."""
        service = make_service(
            test_settings, lambda request: httpx.Response(200, json={"error": "Unable to geocode"})
        )

        with pytest.raises(ToolError) as exc_info:
            await service.reverse_geocode("0.0", "0.0")

        assert exc_info.value.code == ToolErrorCode.LOCATION_NOT_FOUND

    @pytest.mark.asyncio
    async def test_reverse_geocode_http_error(self, test_settings):
        """Test that a non-success status raises REVERSE_GEOCODING_ERROR."""
        service = make_service(test_settings, lambda request: httpx.Response(500))

        with pytest.raises(ToolError) as exc_info:
            await service.reverse_geocode("0.0", "0.0")

        assert exc_info.value.code == ToolErrorCode.REVERSE_GEOCODING_ERROR


class TestCurrentTemperature:
    """Tests for the weather lookup."""

    @pytest.mark.asyncio
    async def test_current_temperature(self, test_settings):
        """Test the request parameters and the parsed temperature."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"current": {"temperature_2m": 58.3}})

        service = make_service(test_settings, handler)

        assert await service.get_current_temperature("51.50", "-0.12") == 58.3

        params = requests[0].url.params
        assert requests[0].url.host == "weather.test"
        assert params["latitude"] == "51.50"
        assert params["longitude"] == "-0.12"
        assert params["current"] == "temperature_2m"
        assert params["temperature_unit"] == "fahrenheit"
        assert params["wind_speed_unit"] == "mph"
        assert params["forecast_days"] == "1"

    @pytest.mark.asyncio
    async def test_current_temperature_unexpected_body(self, test_settings):
        """Test that a body without current.temperature_2m raises WEATHER_ERROR."""
        service = make_service(test_settings, lambda request: httpx.Response(200, json={}))

        with pytest.raises(ToolError) as exc_info:
            await service.get_current_temperature("0", "0")

        assert exc_info.value.code == ToolErrorCode.WEATHER_ERROR

    @pytest.mark.asyncio
    async def test_current_temperature_invalid_json(self, test_settings):
        """Test that a non-JSON body raises WEATHER_ERROR."""
        service = make_service(test_settings, lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ToolError) as exc_info:
            await service.get_current_temperature("0", "0")

        assert exc_info.value.code == ToolErrorCode.WEATHER_ERROR


class TestSearch:
    """Tests for web search."""

    @pytest.mark.asyncio
    async def test_search_returns_top_result(self, test_settings):
        """Test that only the first result is used."""
        body = {
            "results": [
                {"title": "Tesla, Inc.", "content": "Elon Musk is the CEO.", "url": "x"},
                {"title": "Other", "content": "Ignored"},
            ]
        }
        service = make_service(test_settings, lambda request: httpx.Response(200, json=body))

        result = await service.search("Who is the CEO of Tesla?")

        assert result.title == "Tesla, Inc."
        assert result.content == "Elon Musk is the CEO."

    @pytest.mark.asyncio
    async def test_search_no_results(self, test_settings):
        """Test that an empty result list raises NO_SEARCH_RESULTS."""
        service = make_service(
            test_settings, lambda request: httpx.Response(200, json={"results": []})
        )

        with pytest.raises(ToolError) as exc_info:
            await service.search("zzzz")

        assert exc_info.value.code == ToolErrorCode.NO_SEARCH_RESULTS

    @pytest.mark.asyncio
    async def test_search_http_error(self, test_settings):
        """Test that a non-success status raises SEARCH_ERROR."""
        service = make_service(test_settings, lambda request: httpx.Response(429))

        with pytest.raises(ToolError) as exc_info:
            await service.search("anything")

        assert exc_info.value.code == ToolErrorCode.SEARCH_ERROR
        assert exc_info.value.message == "API request failed with status 429"
