"""Descriptors of the built-in tools."""

from local_assistant.tools.types import ParameterSpec, ToolDescriptor, ToolName

_LATITUDE = ParameterSpec(name="latitude", description="The latitude of the location")
_LONGITUDE = ParameterSpec(name="longitude", description="The longitude of the location")

WEATHER_FROM_LOCATION = ToolDescriptor(
    name=ToolName.WEATHER_FROM_LOCATION.value,
    description="Get the weather for a location",
    parameters=(
        ParameterSpec(
            name="location", description="The location to get the weather for"
        ),
    ),
)

WEATHER_FROM_LAT_LON = ToolDescriptor(
    name=ToolName.WEATHER_FROM_LAT_LON.value,
    description="Get the weather for a location using coordinates",
    parameters=(_LATITUDE, _LONGITUDE),
)

LAT_LON_TO_CITY = ToolDescriptor(
    name=ToolName.LAT_LON_TO_CITY.value,
    description="Get the city name for given coordinates",
    parameters=(_LATITUDE, _LONGITUDE),
)

WEB_SEARCH = ToolDescriptor(
    name=ToolName.WEB_SEARCH.value,
    description="Search the web for a query",
    parameters=(ParameterSpec(name="query", description="The query to search for"),),
)

READ_FILE = ToolDescriptor(
    name=ToolName.READ_FILE.value,
    description="Read contents of a file at the specified path",
    parameters=(ParameterSpec(name="path", description="Path to the file to read"),),
)

BUILTIN_TOOLS: tuple[ToolDescriptor, ...] = (
    WEATHER_FROM_LOCATION,
    WEATHER_FROM_LAT_LON,
    LAT_LON_TO_CITY,
    WEB_SEARCH,
    READ_FILE,
)
