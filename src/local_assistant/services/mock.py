"""Offline stand-ins for the model runtime and the HTTP providers.

The mock model picks a tool with simple keyword matching and answers in the
same formats a real model is asked for: a bare JSON call descriptor for
generate(), and free text with a delimited call for chat_stream(). Its output
therefore goes through the real extractor and dispatcher.
"""

import json
import logging
import re
from typing import Any, AsyncIterator

from local_assistant.services.types import SearchResult
from local_assistant.tools.types import CallDescriptor, CallParameter, ToolName

logger = logging.getLogger(__name__)

DEFAULT_LATITUDE = "41.881832"
DEFAULT_LONGITUDE = "-87.640406"
MOCK_TEMPERATURE = 72.5

_DECIMAL_PATTERN = re.compile(r"\b\d+\.\d+\b")
_COORDINATES_PATTERN = re.compile(r"(-?\d+\.\d+)\s*,\s*(-?\d+\.\d+)")
_LOCATION_PATTERN = re.compile(r"weather in ([a-zA-Z\s]+)", re.IGNORECASE)
_TOOL_KEYWORDS = ("weather", "located at", "city", "search", "who", "what")


def _coordinates(prompt: str) -> list[CallParameter]:
    match = _COORDINATES_PATTERN.search(prompt)
    latitude, longitude = (
        match.groups() if match else (DEFAULT_LATITUDE, DEFAULT_LONGITUDE)
    )
    return [
        CallParameter(parameter_name="latitude", parameter_value=latitude),
        CallParameter(parameter_name="longitude", parameter_value=longitude),
    ]


def select_mock_call(prompt: str) -> CallDescriptor:
    """Pick a tool call for a prompt by keyword matching.

    Args:
        prompt: The user prompt

    Returns:
        CallDescriptor: The call a model would plausibly have chosen
    """
    lower = prompt.lower()
    has_decimal = _DECIMAL_PATTERN.search(lower) is not None

    if "weather" in lower and ("latitude" in lower or "longitude" in lower or has_decimal):
        return CallDescriptor(ToolName.WEATHER_FROM_LAT_LON.value, _coordinates(prompt))

    if "weather" in lower:
        match = _LOCATION_PATTERN.search(prompt)
        location = match.group(1).strip() if match else "London"
        return CallDescriptor(
            ToolName.WEATHER_FROM_LOCATION.value,
            [CallParameter(parameter_name="location", parameter_value=location)],
        )

    if "located at" in lower or ("city" in lower and has_decimal):
        return CallDescriptor(ToolName.LAT_LON_TO_CITY.value, _coordinates(prompt))

    return CallDescriptor(
        ToolName.WEB_SEARCH.value,
        [CallParameter(parameter_name="query", parameter_value=prompt)],
    )


class MockModelClient:
    """Model capability that answers without contacting Ollama.

    Attributes:
        start_marker: Marker opening an embedded call in chat replies
        end_marker: Marker closing an embedded call in chat replies
    """

    def __init__(self, start_marker: str, end_marker: str) -> None:
        self.start_marker = start_marker
        self.end_marker = end_marker
        logger.info("MockModelClient initialized")

    async def check_connection(self) -> bool:
        return True

    async def generate(self, model: str, system: str, prompt: str) -> str:
        call = select_mock_call(prompt)
        logger.debug(f"Mock model selected {call.function_name}")
        return json.dumps(call.to_dict())

    async def chat_stream(
        self, model: str, messages: list[dict[str, Any]]
    ) -> AsyncIterator[str]:
        prompt = next(
            (m["content"] for m in reversed(messages) if m["role"] == "user"), ""
        )

        if any(keyword in prompt.lower() for keyword in _TOOL_KEYWORDS):
            call = select_mock_call(prompt)
            reply = (
                f"Let me use {call.function_name} for that.\n"
                f"{self.start_marker}{json.dumps(call.to_dict())}{self.end_marker}"
            )
        else:
            reply = f"(mock) You said: {prompt}"

        # Split on spaces to imitate token-sized deltas
        for piece in re.split(r"(?<= )", reply):
            if piece:
                yield piece

    async def close(self) -> None:
        logger.debug("MockModelClient closed")


class MockApiService:
    """API capability returning canned values."""

    async def geocode(self, city: str) -> tuple[str, str]:
        return DEFAULT_LATITUDE, DEFAULT_LONGITUDE

    async def reverse_geocode(self, latitude: str, longitude: str) -> str:
        return "Chicago, IL, USA"

    async def get_current_temperature(self, latitude: str, longitude: str) -> float:
        return MOCK_TEMPERATURE

    async def search(self, query: str) -> SearchResult:
        return SearchResult(
            title="Mock Search Result",
            content=(
                f'Here is some information about "{query}" '
                "that would normally come from a web search."
            ),
        )

    async def close(self) -> None:
        logger.debug("MockApiService closed")
