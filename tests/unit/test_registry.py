"""Unit tests for the tool registry and dispatcher."""

import json
from unittest.mock import AsyncMock

import pytest

from local_assistant.tools import (
    CallParameter,
    ParameterSpec,
    ToolDescriptor,
    ToolDispatcher,
    ToolError,
    ToolErrorCode,
    ToolRegistry,
)

ECHO = ToolDescriptor(
    name="Echo",
    description="Repeat the input",
    parameters=(ParameterSpec(name="text", description="Text to repeat"),),
)
UPPER = ToolDescriptor(name="Upper", description="Uppercase the input")


async def echo(parameters):
    return parameters[0].parameter_value


class TestToolRegistry:
    """Tests for registering and listing tools."""

    def test_register_and_lookup(self):
        """Test that a registered implementation can be looked up."""
        registry = ToolRegistry()
        registry.register(ECHO, echo)

        assert registry.lookup("Echo") is echo
        assert registry.get_descriptor("Echo") == ECHO
        assert [d.name for d in registry.list_descriptors()] == ["Echo"]

    def test_lookup_unknown(self):
        """Test that unknown names return None."""
        registry = ToolRegistry()

        assert registry.lookup("Missing") is None
        assert registry.get_descriptor("Missing") is None

    def test_list_descriptors_keeps_registration_order(self):
        """Test that descriptors are listed in registration order."""
        registry = ToolRegistry()
        registry.register(UPPER, echo)
        registry.register(ECHO, echo)

        assert [d.name for d in registry.list_descriptors()] == ["Upper", "Echo"]

    def test_reregister_overwrites_in_place(self):
        """Test that re-registering replaces the entry but keeps its position."""
        registry = ToolRegistry()
        replacement = AsyncMock(return_value="new")
        registry.register(ECHO, echo)
        registry.register(UPPER, echo)

        registry.register(ECHO, replacement)

        assert registry.lookup("Echo") is replacement
        assert [d.name for d in registry.list_descriptors()] == ["Echo", "Upper"]

    def test_to_json_shape_and_field_order(self):
        """Test the serialized tool list format."""
        registry = ToolRegistry()
        registry.register(ECHO, echo)

        document = registry.to_json()
        data = json.loads(document)

        assert data == {
            "tools": [
                {
                    "name": "Echo",
                    "description": "Repeat the input",
                    "parameters": [
                        {
                            "name": "text",
                            "description": "Text to repeat",
                            "type": "string",
                            "required": True,
                        }
                    ],
                }
            ]
        }
        assert list(data["tools"][0]) == ["name", "description", "parameters"]
        assert list(data["tools"][0]["parameters"][0]) == [
            "name",
            "description",
            "type",
            "required",
        ]

    def test_to_json_is_deterministic(self, registry):
        """Test that serializing twice gives identical output."""
        assert registry.to_json() == registry.to_json()

    def test_builtin_tools_registered(self, registry):
        """Test that the default registry holds the built-in tools in order."""
        assert [d.name for d in registry.list_descriptors()] == [
            "WeatherFromLocation",
            "WeatherFromLatLon",
            "LatLonToCity",
            "WebSearch",
            "ReadFile",
        ]


def test_descriptor_rejects_duplicate_parameters():
    """Test that parameter names must be unique within a tool."""
    with pytest.raises(ValueError, match="duplicate parameters: text"):
        ToolDescriptor(
            name="Bad",
            description="",
            parameters=(
                ParameterSpec(name="text", description="a"),
                ParameterSpec(name="text", description="b"),
            ),
        )


class TestToolDispatcher:
    """Tests for executing tools by name."""

    @pytest.mark.asyncio
    async def test_execute_invokes_implementation(self):
        """Test that the implementation receives the parameter list."""
        registry = ToolRegistry()
        implementation = AsyncMock(return_value="done")
        registry.register(ECHO, implementation)
        parameters = [CallParameter(parameter_name="text", parameter_value="hi")]

        result = await ToolDispatcher(registry).execute("Echo", parameters)

        assert result == "done"
        implementation.assert_awaited_once_with(parameters)

    @pytest.mark.asyncio
    async def test_execute_unknown_function(self):
        """Test that unknown names fail without invoking anything."""
        registry = ToolRegistry()
        implementation = AsyncMock(return_value="done")
        registry.register(ECHO, implementation)

        with pytest.raises(ToolError) as exc_info:
            await ToolDispatcher(registry).execute("UnknownTool", [])

        assert exc_info.value.code == ToolErrorCode.UNKNOWN_FUNCTION
        assert exc_info.value.message == "Unknown function: UnknownTool"
        implementation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_execute_propagates_tool_errors(self):
        """Test that tool-specific errors reach the caller unchanged."""
        registry = ToolRegistry()
        error = ToolError("No coordinates found for city: Atlantis", ToolErrorCode.CITY_NOT_FOUND)
        registry.register(ECHO, AsyncMock(side_effect=error))

        with pytest.raises(ToolError) as exc_info:
            await ToolDispatcher(registry).execute("Echo", [])

        assert exc_info.value is error
