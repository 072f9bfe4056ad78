"""Data types for conversation history and orchestration results."""

from dataclasses import dataclass
from enum import Enum

from local_assistant.tools.errors import ToolError
from local_assistant.tools.types import CallDescriptor


class Role(str, Enum):
    """Author of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ConversationTurn:
    """A single message in the conversation history."""

    role: Role
    content: str

    def to_ollama(self) -> dict[str, str]:
        """Convert to the message format of the Ollama chat API."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class ConversationRound:
    """Outcome of one conversational exchange with the model.

    Attributes:
        text: The full streamed response
        call: The tool call found in the response, if any
        tool_result: The tool's output when the call succeeded
        tool_error: The error raised by the tool when the call failed
    """

    text: str
    call: CallDescriptor | None = None
    tool_result: str | None = None
    tool_error: ToolError | None = None
