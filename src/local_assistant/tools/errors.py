"""Error types raised by tools, the response extractor and the model adapter."""

from enum import Enum


class ToolErrorCode(str, Enum):
    """Machine-readable codes carried by ToolError."""

    MISSING_PARAMETER = "MISSING_PARAMETER"
    UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"
    GEOCODING_ERROR = "GEOCODING_ERROR"
    REVERSE_GEOCODING_ERROR = "REVERSE_GEOCODING_ERROR"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    WEATHER_ERROR = "WEATHER_ERROR"
    SEARCH_ERROR = "SEARCH_ERROR"
    NO_SEARCH_RESULTS = "NO_SEARCH_RESULTS"
    FILE_READ_ERROR = "FILE_READ_ERROR"


class ToolError(Exception):
    """A tool failed in a way the user should be told about.

    Attributes:
        message: Human-readable description of the failure
        code: The ToolErrorCode used for branching on the failure kind
    """

    def __init__(self, message: str, code: ToolErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ResponseParseError(Exception):
    """The model produced output that is not a valid call descriptor."""


class ModelUnavailableError(Exception):
    """The model runtime could not be reached at all."""


class ModelRequestError(Exception):
    """A request to the model runtime failed after the connection was made."""
