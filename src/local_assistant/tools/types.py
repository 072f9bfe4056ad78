"""Data types for tool descriptors and tool calls.

This module defines the structures advertised to the model (ToolDescriptor,
ParameterSpec) and the structures produced when a call is requested
(CallDescriptor, CallParameter).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable


class ToolName(str, Enum):
    """Names of the built-in tools."""

    WEATHER_FROM_LOCATION = "WeatherFromLocation"
    WEATHER_FROM_LAT_LON = "WeatherFromLatLon"
    LAT_LON_TO_CITY = "LatLonToCity"
    WEB_SEARCH = "WebSearch"
    READ_FILE = "ReadFile"


@dataclass(frozen=True)
class ParameterSpec:
    """A single parameter accepted by a tool."""

    name: str
    description: str
    type: str = "string"
    required: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field order advertised to the model."""
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "required": self.required,
        }


@dataclass(frozen=True)
class ToolDescriptor:
    """Metadata describing a tool to the model and to the user."""

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = ()

    def __post_init__(self) -> None:
        """Validate that parameter names are unique."""
        names = [parameter.name for parameter in self.parameters]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(
                f"Tool '{self.name}' declares duplicate parameters: {', '.join(duplicates)}"
            )

    @property
    def required_parameters(self) -> list[str]:
        """Names of the parameters a call must supply."""
        return [parameter.name for parameter in self.parameters if parameter.required]

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field order advertised to the model."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
        }


@dataclass
class CallParameter:
    """A named string value passed to a tool."""

    parameter_name: str
    parameter_value: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the wire shape."""
        return {
            "parameterName": self.parameter_name,
            "parameterValue": self.parameter_value,
        }


@dataclass
class CallDescriptor:
    """A request to run one tool, as emitted by the model or the user."""

    function_name: str
    parameters: list[CallParameter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        return {
            "functionName": self.function_name,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
        }


# Uniform signature shared by every tool implementation
ToolImplementation = Callable[[list[CallParameter]], Awaitable[str]]
