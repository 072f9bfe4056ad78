"""External capability adapters for local-assistant.

This package contains the HTTP client for the geocoding, weather and search
providers, the capability interfaces, and offline mocks for both the model
and the providers.
"""

from local_assistant.services.api import ApiService
from local_assistant.services.mock import MockApiService, MockModelClient
from local_assistant.services.types import (
    ApiCapability,
    ModelCapability,
    SearchResult,
)

__all__ = [
    "ApiService",
    "ApiCapability",
    "MockApiService",
    "MockModelClient",
    "ModelCapability",
    "SearchResult",
]
