"""Lookup of named values in a tool call's parameter list."""

from local_assistant.tools.errors import ToolError, ToolErrorCode
from local_assistant.tools.types import CallParameter


def resolve_parameter(name: str, parameters: list[CallParameter]) -> str:
    """Return the value of the first parameter called ``name``.

    Matching is exact and case-sensitive. Values are returned as strings;
    interpreting them is left to the tool.

    Args:
        name: The parameter name to look for
        parameters: The call's parameters, in the order they were given

    Returns:
        The parameter value

    Raises:
        ToolError: MISSING_PARAMETER if no parameter has that name
    """
    for parameter in parameters:
        if parameter.parameter_name == name:
            return parameter.parameter_value

    raise ToolError(
        f"Required parameter '{name}' not found", ToolErrorCode.MISSING_PARAMETER
    )
