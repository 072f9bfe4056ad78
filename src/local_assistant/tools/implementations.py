"""Implementations of the built-in tools.

Each tool resolves its own parameters and delegates the lookup to the API
capability. build_default_registry() binds the implementations to a concrete
API object so that every registered callable has the uniform signature
``(parameters) -> str``.
"""

import asyncio
import logging
from functools import partial
from pathlib import Path

from local_assistant.config import AssistantSettings
from local_assistant.services.types import ApiCapability
from local_assistant.tools.definitions import (
    LAT_LON_TO_CITY,
    READ_FILE,
    WEATHER_FROM_LAT_LON,
    WEATHER_FROM_LOCATION,
    WEB_SEARCH,
)
from local_assistant.tools.errors import ToolError, ToolErrorCode
from local_assistant.tools.parameters import resolve_parameter
from local_assistant.tools.registry import ToolRegistry
from local_assistant.tools.types import CallParameter

logger = logging.getLogger(__name__)


def format_temperature(temperature: float, unit: str) -> str:
    """Format a temperature the way it is shown to the user.

    Whole numbers drop the trailing ".0", e.g. ``72 degrees Fahrenheit``.
    """
    value = int(temperature) if float(temperature).is_integer() else temperature
    return f"{value} degrees {unit.capitalize()}"


async def weather_from_location(
    api: ApiCapability, unit: str, parameters: list[CallParameter]
) -> str:
    location = resolve_parameter("location", parameters)
    latitude, longitude = await api.geocode(location)
    temperature = await api.get_current_temperature(latitude, longitude)
    return format_temperature(temperature, unit)


async def weather_from_lat_lon(
    api: ApiCapability, unit: str, parameters: list[CallParameter]
) -> str:
    latitude = resolve_parameter("latitude", parameters)
    longitude = resolve_parameter("longitude", parameters)
    temperature = await api.get_current_temperature(latitude, longitude)
    return format_temperature(temperature, unit)


async def lat_lon_to_city(api: ApiCapability, parameters: list[CallParameter]) -> str:
    latitude = resolve_parameter("latitude", parameters)
    longitude = resolve_parameter("longitude", parameters)
    return await api.reverse_geocode(latitude, longitude)


async def web_search(api: ApiCapability, parameters: list[CallParameter]) -> str:
    query = resolve_parameter("query", parameters)
    result = await api.search(query)
    return f"{result.title}\n{result.content}"


async def read_file(root: Path, parameters: list[CallParameter]) -> str:
    """Read a text file located under ``root``.

    Paths are resolved relative to ``root`` and anything that escapes it is
    refused, so the model cannot read arbitrary files.

    Raises:
        ToolError: FILE_READ_ERROR if the path is outside root or unreadable
    """
    raw_path = resolve_parameter("path", parameters)
    try:
        path = (root / raw_path).resolve()
    except (OSError, ValueError) as e:
        raise ToolError(
            f"Failed to read file: {e}", ToolErrorCode.FILE_READ_ERROR
        ) from e

    if not path.is_relative_to(root):
        raise ToolError(
            f"Failed to read file: {raw_path} is outside {root}",
            ToolErrorCode.FILE_READ_ERROR,
        )

    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, ValueError) as e:
        logger.warning(f"ReadFile failed for {path}: {e}")
        raise ToolError(
            f"Failed to read file: {e}", ToolErrorCode.FILE_READ_ERROR
        ) from e


def build_default_registry(
    api: ApiCapability, settings: AssistantSettings
) -> ToolRegistry:
    """Create a registry holding all built-in tools bound to ``api``.

    Args:
        api: The geocoding/weather/search capability
        settings: Application settings (temperature unit, ReadFile root)

    Returns:
        ToolRegistry: Registry with the built-in tools in a fixed order
    """
    unit = settings.temperature_unit
    registry = ToolRegistry()
    registry.register(WEATHER_FROM_LOCATION, partial(weather_from_location, api, unit))
    registry.register(WEATHER_FROM_LAT_LON, partial(weather_from_lat_lon, api, unit))
    registry.register(LAT_LON_TO_CITY, partial(lat_lon_to_city, api))
    registry.register(WEB_SEARCH, partial(web_search, api))
    registry.register(READ_FILE, partial(read_file, settings.resolved_read_file_root))
    return registry
