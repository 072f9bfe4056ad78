"""Parsing of interactive session commands.

Explicit tool invocations use the form::

    /tool WeatherFromLocation location="New York"

where each argument is ``key=value`` and the value is either a double-quoted
string (which may contain spaces) or a run of non-whitespace characters.
"""

import logging
import re

from local_assistant.tools.types import CallDescriptor, CallParameter, ToolDescriptor

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit"})

_ARGUMENT_PATTERN = re.compile(r'(?<!\S)(\w+)=(?:"([^"]*)"|(\S+))')

HELP_TEXT = """[accent]Chat Commands:[/accent]
  /help             Show this help message
  /clear            Clear chat history
  /model \\[name]     Show or change the current model
  /tools            List available tools
  /tool <name> k="v" ...
                    Run a tool directly, e.g. /tool WeatherFromLocation location="New York"
  exit, quit        End the session

Anything else is sent to the model. Tool use is detected from its reply."""


def parse_key_value_arguments(text: str) -> list[CallParameter]:
    """Parse ``key=value`` and ``key="quoted value"`` pairs, in order.

    Tokens that are not key=value pairs are ignored.
    """
    parameters: list[CallParameter] = []
    for match in _ARGUMENT_PATTERN.finditer(text):
        name, quoted, bare = match.groups()
        value = quoted if quoted is not None else bare
        parameters.append(CallParameter(parameter_name=name, parameter_value=value))

    leftover = _ARGUMENT_PATTERN.sub("", text).strip()
    if leftover:
        logger.debug(f"Ignoring tool arguments without a key: {leftover!r}")

    return parameters


def parse_tool_command(arguments: str) -> CallDescriptor:
    """Parse the text following ``/tool`` into a call descriptor.

    Args:
        arguments: Tool name followed by key=value arguments

    Returns:
        CallDescriptor: The requested call

    Raises:
        ValueError: If no tool name is given
    """
    tokens = arguments.strip().split(maxsplit=1)
    if not tokens:
        raise ValueError('Usage: /tool <ToolName> key="value" ...')

    function_name = tokens[0]
    rest = tokens[1] if len(tokens) > 1 else ""
    return CallDescriptor(
        function_name=function_name, parameters=parse_key_value_arguments(rest)
    )


def missing_required_parameters(
    descriptor: ToolDescriptor, parameters: list[CallParameter]
) -> list[str]:
    """Return the required parameter names absent from ``parameters``."""
    supplied = {parameter.parameter_name for parameter in parameters}
    return [name for name in descriptor.required_parameters if name not in supplied]
