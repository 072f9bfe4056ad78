"""Interactive chat session.

This module provides the ChatSession class which handles:
- Reading input lines and classifying them as commands, explicit tool
  invocations or prompts for the model
- Maintaining the ordered conversation history for one run
- Session-scoped configuration such as the active model
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from rich.console import Console
from rich.markup import escape

from local_assistant.assistant.commands import (
    EXIT_COMMANDS,
    HELP_TEXT,
    missing_required_parameters,
    parse_tool_command,
)
from local_assistant.assistant.orchestrator import PromptOrchestrator
from local_assistant.assistant.types import ConversationTurn, Role
from local_assistant.console import print_plain, print_tool_error, print_tool_list
from local_assistant.tools.dispatcher import ToolDispatcher
from local_assistant.tools.errors import ToolError, ToolErrorCode
from local_assistant.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

INPUT_PROMPT = "\n[accent]You:[/accent] "


class SessionState(str, Enum):
    """States of the interactive loop."""

    AWAITING_INPUT = "awaiting_input"
    CLASSIFYING = "classifying"
    HANDLING_COMMAND = "handling_command"
    HANDLING_EXPLICIT_TOOL = "handling_explicit_tool"
    HANDLING_PROMPT = "handling_prompt"
    ENDED = "ended"


@dataclass
class SessionConfig:
    """Configuration owned by one session.

    Attributes:
        model: Model used for prompts; changed by /model
        retain_tool_results: Append tool results to the history so the model
            sees them on the next turn
        verbose: Print extra diagnostics after each round
    """

    model: str
    retain_tool_results: bool = True
    verbose: bool = False


def _format_tool_result(function_name: str, result: str) -> str:
    return f"[{function_name}] {result}"


class ChatSession:
    """State machine driving one interactive conversation.

    The history starts with a system turn holding the chat instruction and
    lives until the session ends; /clear resets it to that system turn.
    """

    def __init__(
        self,
        orchestrator: PromptOrchestrator,
        dispatcher: ToolDispatcher,
        registry: ToolRegistry,
        config: SessionConfig,
        console: Console,
        read_line: Callable[[str], str] | None = None,
    ):
        """Initialize a ChatSession.

        Args:
            orchestrator: Runs prompts through the model
            dispatcher: Runs explicit /tool invocations
            registry: Tool descriptors used to validate /tool arguments
            config: Session-scoped configuration
            console: Output console
            read_line: Blocking line reader taking a prompt; defaults to the
                console's input(). Must raise EOFError when input is exhausted.
        """
        self.orchestrator = orchestrator
        self.dispatcher = dispatcher
        self.registry = registry
        self.config = config
        self.console = console
        self._read_line = read_line or console.input

        self.state = SessionState.AWAITING_INPUT
        self._system_turn = ConversationTurn(
            Role.SYSTEM, orchestrator.chat_system_prompt()
        )
        self.history: list[ConversationTurn] = []
        self.clear_history()

    def clear_history(self) -> None:
        """Reset the history to just the system turn."""
        self.history = [self._system_turn]
        logger.debug("Conversation history cleared")

    def end(self) -> None:
        """Move to the terminal state."""
        self.state = SessionState.ENDED
        logger.info("Chat session ended")

    async def handle_line(self, line: str) -> bool:
        """Process one line of user input.

        Args:
            line: The raw input line

        Returns:
            False once the session has ended, True otherwise
        """
        text = line.strip()
        if not text:
            return True

        self.state = SessionState.CLASSIFYING

        if text.lower() in EXIT_COMMANDS:
            self.end()
            return False

        try:
            if text.startswith("/"):
                parts = text.split(maxsplit=1)
                command = parts[0].lower()
                argument = parts[1] if len(parts) > 1 else ""

                if command == "/tool":
                    self.state = SessionState.HANDLING_EXPLICIT_TOOL
                    await self._handle_tool_command(text, argument)
                else:
                    self.state = SessionState.HANDLING_COMMAND
                    self._handle_command(command, argument)
            else:
                self.state = SessionState.HANDLING_PROMPT
                await self._handle_prompt(text)
        finally:
            self.state = SessionState.AWAITING_INPUT

        return True

    def _handle_command(self, command: str, argument: str) -> None:
        if command == "/help":
            self.console.print(HELP_TEXT)
        elif command == "/clear":
            self.clear_history()
            self.console.print("[success]Chat history cleared.[/success]")
        elif command == "/model":
            if argument:
                self.config.model = argument.strip()
                logger.info(f"Model changed to {self.config.model}")
                self.console.print(
                    f"[success]Model set to {escape(self.config.model)}[/success]"
                )
            else:
                self.console.print(f"Current model: [accent]{escape(self.config.model)}[/accent]")
        elif command == "/tools":
            print_tool_list(self.console, self.registry.list_descriptors())
        else:
            self.console.print(
                f"[warning]Unknown command: {escape(command)}.[/warning] Type /help for a list of commands."
            )

    async def _handle_tool_command(self, raw: str, argument: str) -> None:
        """Run a tool named by the user, bypassing the model."""
        try:
            call = parse_tool_command(argument)
        except ValueError as e:
            self.console.print(f"[warning]{escape(str(e))}[/warning]")
            return

        descriptor = self.registry.get_descriptor(call.function_name)
        if descriptor is None:
            print_tool_error(
                self.console,
                ToolError(
                    f"Unknown function: {call.function_name}",
                    ToolErrorCode.UNKNOWN_FUNCTION,
                ),
            )
            return

        missing = missing_required_parameters(descriptor, call.parameters)
        if missing:
            self.console.print(
                f"[error]Missing required parameters:[/error] {escape(', '.join(missing))}"
            )
            return

        try:
            result = await self.dispatcher.execute(call.function_name, call.parameters)
        except ToolError as e:
            print_tool_error(self.console, e)
            return

        print_plain(self.console, result)
        self.history.append(ConversationTurn(Role.USER, raw))
        self.history.append(
            ConversationTurn(Role.ASSISTANT, _format_tool_result(call.function_name, result))
        )

    async def _handle_prompt(self, text: str) -> None:
        """Send a freeform prompt to the model and record the exchange."""
        conversation_round = await self.orchestrator.run_conversation(
            self.history, text, self.config.model
        )
        if conversation_round is None:
            return

        self.history.append(ConversationTurn(Role.USER, text))
        self.history.append(ConversationTurn(Role.ASSISTANT, conversation_round.text))

        if conversation_round.call is None:
            if self.config.verbose:
                self.console.print("[muted]No tool call detected.[/muted]")
            return

        if self.config.retain_tool_results and conversation_round.tool_result is not None:
            self.history.append(
                ConversationTurn(
                    Role.ASSISTANT,
                    _format_tool_result(
                        conversation_round.call.function_name,
                        conversation_round.tool_result,
                    ),
                )
            )

    async def run(self) -> None:
        """Read and handle lines until the user exits or input ends."""
        self.console.print(
            f"[accent]LocalAssistant chat[/accent] (model: {escape(self.config.model)})\n"
            "Type /help for commands, exit to quit."
        )

        while self.state is not SessionState.ENDED:
            try:
                line = await asyncio.to_thread(self._read_line, INPUT_PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                self.end()
                break

            await self.handle_line(line)

        self.console.print("[muted]Goodbye![/muted]")
