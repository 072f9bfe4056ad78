"""Execution of tool calls by name."""

import logging

from local_assistant.tools.errors import ToolError, ToolErrorCode
from local_assistant.tools.registry import ToolRegistry
from local_assistant.tools.types import CallParameter

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Resolves a function name against the registry and invokes it.

    The dispatcher neither validates parameters nor retries; implementations
    resolve their own parameters and raise their own ToolErrors, which are
    passed through unchanged.

    Attributes:
        registry: The registry implementations are looked up in
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    async def execute(self, function_name: str, parameters: list[CallParameter]) -> str:
        """Run the tool registered under ``function_name``.

        Args:
            function_name: Name of the tool to run
            parameters: Parameters to hand to the implementation

        Returns:
            The tool's formatted result

        Raises:
            ToolError: UNKNOWN_FUNCTION if nothing is registered under the name,
                or whatever the implementation raises
        """
        implementation = self.registry.lookup(function_name)
        if implementation is None:
            raise ToolError(
                f"Unknown function: {function_name}", ToolErrorCode.UNKNOWN_FUNCTION
            )

        logger.info(f"Executing tool {function_name} with {len(parameters)} parameters")
        result = await implementation(parameters)
        logger.debug(f"Tool {function_name} returned {len(result)} characters")
        return result
