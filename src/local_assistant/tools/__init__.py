"""Tool registry, dispatch and built-in tool layer.

This package provides the tool descriptors advertised to the model, the
registry and dispatcher that execute calls by name, and the implementations
of the weather, geocoding, search and file tools.
"""

from local_assistant.tools.dispatcher import ToolDispatcher
from local_assistant.tools.errors import (
    ModelRequestError,
    ModelUnavailableError,
    ResponseParseError,
    ToolError,
    ToolErrorCode,
)
from local_assistant.tools.implementations import build_default_registry
from local_assistant.tools.parameters import resolve_parameter
from local_assistant.tools.registry import ToolRegistry
from local_assistant.tools.types import (
    CallDescriptor,
    CallParameter,
    ParameterSpec,
    ToolDescriptor,
    ToolImplementation,
    ToolName,
)

__all__ = [
    # Core classes
    "ToolRegistry",
    "ToolDispatcher",
    "build_default_registry",
    "resolve_parameter",
    # Types
    "CallDescriptor",
    "CallParameter",
    "ParameterSpec",
    "ToolDescriptor",
    "ToolImplementation",
    "ToolName",
    # Errors
    "ToolError",
    "ToolErrorCode",
    "ResponseParseError",
    "ModelRequestError",
    "ModelUnavailableError",
]
