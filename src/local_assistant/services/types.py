"""Interfaces of the external capabilities the assistant depends on.

The model runtime and the HTTP APIs are consumed through these protocols so
that the real adapters (OllamaClient, ApiService) and the offline mocks are
interchangeable.
"""

from dataclasses import dataclass
from typing import Any, AsyncIterator, Protocol


@dataclass
class SearchResult:
    """The top hit of a web search."""

    title: str
    content: str


class ApiCapability(Protocol):
    """Geocoding, weather and search lookups used by the built-in tools."""

    async def geocode(self, city: str) -> tuple[str, str]: ...

    async def reverse_geocode(self, latitude: str, longitude: str) -> str: ...

    async def get_current_temperature(self, latitude: str, longitude: str) -> float: ...

    async def search(self, query: str) -> SearchResult: ...

    async def close(self) -> None: ...


class ModelCapability(Protocol):
    """One-shot and streamed text generation by a language model."""

    async def check_connection(self) -> bool: ...

    async def generate(self, model: str, system: str, prompt: str) -> str: ...

    def chat_stream(
        self, model: str, messages: list[dict[str, Any]]
    ) -> AsyncIterator[str]: ...

    async def close(self) -> None: ...
