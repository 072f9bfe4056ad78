"""Registry holding tool descriptors and their implementations."""

import json
import logging

from local_assistant.tools.types import ToolDescriptor, ToolImplementation

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Single source of truth for the tools advertised to the model.

    Descriptors are kept in registration order so that the serialized tool
    list is identical from run to run.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ToolDescriptor] = {}
        self._implementations: dict[str, ToolImplementation] = {}

    def register(
        self, descriptor: ToolDescriptor, implementation: ToolImplementation
    ) -> None:
        """Register a tool under its descriptor's name.

        Registering a name twice replaces the earlier entry but keeps its
        position in the listing.

        Args:
            descriptor: The tool metadata
            implementation: Async callable taking the call parameters
        """
        if descriptor.name in self._descriptors:
            logger.warning(f"Tool '{descriptor.name}' registered twice, replacing it")

        self._descriptors[descriptor.name] = descriptor
        self._implementations[descriptor.name] = implementation
        logger.debug(f"Registered tool: {descriptor.name}")

    def list_descriptors(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        return list(self._descriptors.values())

    def lookup(self, name: str) -> ToolImplementation | None:
        """Return the implementation registered under ``name``, if any."""
        return self._implementations.get(name)

    def get_descriptor(self, name: str) -> ToolDescriptor | None:
        """Return the descriptor registered under ``name``, if any."""
        return self._descriptors.get(name)

    def to_json(self) -> str:
        """Serialize the descriptor set for embedding in model instructions.

        Returns:
            JSON document of the form {"tools": [...]}
        """
        return json.dumps(
            {"tools": [descriptor.to_dict() for descriptor in self.list_descriptors()]},
            indent=2,
        )
