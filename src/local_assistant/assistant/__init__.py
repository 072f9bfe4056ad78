"""Tool-calling orchestration for local-assistant.

This package provides the response extractor, the prompt orchestrator and the
interactive session state machine.
"""

from local_assistant.assistant.extractor import extract_embedded, extract_strict
from local_assistant.assistant.orchestrator import PromptOrchestrator
from local_assistant.assistant.session import ChatSession, SessionConfig, SessionState
from local_assistant.assistant.types import ConversationRound, ConversationTurn, Role

__all__ = [
    # Core classes
    "ChatSession",
    "PromptOrchestrator",
    "SessionConfig",
    "SessionState",
    # Extraction
    "extract_embedded",
    "extract_strict",
    # Types
    "ConversationRound",
    "ConversationTurn",
    "Role",
]
