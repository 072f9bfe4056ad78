"""Prompt orchestration: one round of model interaction plus tool execution.

The orchestrator drives a single exchange with the model in one of two modes:

- direct: one-shot generation in JSON format, parsed strictly, then the
  selected tool is run and its result returned;
- conversational: streamed chat over the session history, printed as it
  arrives, then scanned for an embedded tool call which is run as an extra
  step.

Tool errors, parse failures and failed model requests are reported on the console
and end the round without raising. Only ModelUnavailableError propagates.
"""

import json
import logging

import ollama
from rich.console import Console
from rich.markup import escape

from local_assistant.assistant.extractor import extract_embedded, extract_strict
from local_assistant.assistant.prompts import (
    build_chat_system_prompt,
    build_direct_system_prompt,
)
from local_assistant.assistant.types import ConversationRound, ConversationTurn, Role
from local_assistant.config import AssistantSettings
from local_assistant.console import print_plain, print_tool_error
from local_assistant.services.types import ModelCapability
from local_assistant.tools.dispatcher import ToolDispatcher
from local_assistant.tools.errors import ModelRequestError, ResponseParseError, ToolError
from local_assistant.tools.registry import ToolRegistry
from local_assistant.tools.types import CallDescriptor

logger = logging.getLogger(__name__)


class PromptOrchestrator:
    """Runs prompts through the model and executes the tools it selects.

    Attributes:
        model_client: The model capability (Ollama or mock)
        dispatcher: Executes tool calls by name
        registry: Source of the tool list embedded in the instructions
        console: Where responses, results and errors are printed
        settings: Delimiter markers and extraction options
    """

    def __init__(
        self,
        model_client: ModelCapability,
        dispatcher: ToolDispatcher,
        registry: ToolRegistry,
        console: Console,
        settings: AssistantSettings,
    ) -> None:
        self.model_client = model_client
        self.dispatcher = dispatcher
        self.registry = registry
        self.console = console
        self.settings = settings

    def direct_system_prompt(self) -> str:
        """Instruction for one-shot, JSON-only responses."""
        return build_direct_system_prompt(self.registry.to_json())

    def chat_system_prompt(self) -> str:
        """Instruction for conversational responses with embedded calls."""
        return build_chat_system_prompt(
            self.registry.to_json(),
            self.settings.call_start_marker,
            self.settings.call_end_marker,
        )

    async def _execute(self, call: CallDescriptor) -> str:
        """Dispatch a call and print its result.

        Raises:
            ToolError: Whatever the dispatcher raises
        """
        self.console.print(f"\n[tool]Using tool {escape(call.function_name)}[/tool]")
        logger.debug(
            f"Call parameters: {json.dumps([p.to_dict() for p in call.parameters])}"
        )

        result = await self.dispatcher.execute(call.function_name, call.parameters)
        print_plain(self.console, result)
        return result

    def _report_model_error(self, error: ollama.ResponseError | ModelRequestError) -> None:
        logger.error(f"Model request failed: {error}")
        self.console.print(f"[error]Model error:[/error] {escape(str(error))}")

    async def run_direct(self, prompt: str, model: str) -> str | None:
        """Run a prompt in one-shot mode and execute the selected tool.

        Args:
            prompt: The user prompt
            model: The model to ask

        Returns:
            The tool result, or None if the round failed

        Raises:
            ModelUnavailableError: If the model runtime cannot be reached
        """
        self.console.print(f"\n[muted]Processing prompt:[/muted] {escape(prompt)}")

        try:
            response = await self.model_client.generate(
                model, self.direct_system_prompt(), prompt
            )
        except (ollama.ResponseError, ModelRequestError) as e:
            self._report_model_error(e)
            return None

        logger.debug(f"Raw model response: {response}")

        try:
            call = extract_strict(response)
        except ResponseParseError as e:
            logger.warning(f"Unparseable model response: {response!r}")
            self.console.print(f"[error]Failed to parse AI response:[/error] {escape(str(e))}")
            return None

        try:
            return await self._execute(call)
        except ToolError as e:
            print_tool_error(self.console, e)
            return None

    async def run_conversation(
        self, history: list[ConversationTurn], prompt: str, model: str
    ) -> ConversationRound | None:
        """Run one conversational turn with streamed output.

        Each chunk is printed as soon as it arrives. After the stream ends the
        full text is scanned for an embedded call, which is executed and its
        result printed. The result is not sent back to the model.

        Args:
            history: Prior turns; when empty the chat instruction is used
            prompt: The new user message
            model: The model to chat with

        Returns:
            ConversationRound, or None if the model request failed

        Raises:
            ModelUnavailableError: If the model runtime cannot be reached
        """
        if history:
            messages = [turn.to_ollama() for turn in history]
        else:
            messages = [
                ConversationTurn(Role.SYSTEM, self.chat_system_prompt()).to_ollama()
            ]
        messages.append(ConversationTurn(Role.USER, prompt).to_ollama())

        logger.info(f"Sending {len(messages)} messages to model {model}")

        parts: list[str] = []
        try:
            async for text in self.model_client.chat_stream(model, messages):
                print_plain(self.console, text, end="")
                parts.append(text)
        except (ollama.ResponseError, ModelRequestError) as e:
            if parts:
                self.console.print()
            self._report_model_error(e)
            return None

        self.console.print()
        full_text = "".join(parts)
        logger.info(f"Received complete response: {len(full_text)} characters")

        call = extract_embedded(
            full_text,
            self.settings.call_start_marker,
            self.settings.call_end_marker,
            allow_brace_fallback=self.settings.brace_fallback_enabled,
        )
        conversation_round = ConversationRound(text=full_text, call=call)
        if call is None:
            return conversation_round

        try:
            conversation_round.tool_result = await self._execute(call)
        except ToolError as e:
            print_tool_error(self.console, e)
            conversation_round.tool_error = e

        return conversation_round
