"""CLI entry point for local-assistant.

This module provides the command-line interface. It can be invoked as
`local-assistant` (via the script entry point) or `python -m local_assistant`.
Without a prompt (or with --chat) it starts an interactive session; with a
prompt it runs a single one-shot tool call.
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.markup import escape

from local_assistant import __version__
from local_assistant.assistant import ChatSession, PromptOrchestrator, SessionConfig
from local_assistant.config import AssistantSettings
from local_assistant.console import make_console, print_tool_list
from local_assistant.ollama import OllamaClient
from local_assistant.services import ApiService, MockApiService, MockModelClient
from local_assistant.services.types import ApiCapability, ModelCapability
from local_assistant.tools import (
    ModelUnavailableError,
    ToolDispatcher,
    build_default_registry,
)
from local_assistant.tools.definitions import BUILTIN_TOOLS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the local-assistant CLI."""
    parser = argparse.ArgumentParser(
        prog="local-assistant",
        description="Let a local Ollama model call weather, geocoding and search tools",
        epilog=(
            "Running without a prompt starts an interactive chat session. "
            'Example: local-assistant "What is the weather in London?"'
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"local-assistant {__version__}",
    )

    parser.add_argument(
        "-m",
        "--model",
        type=str,
        default=None,
        help="Model to use (default: llama3.2, can be set via LOCAL_ASSISTANT_MODEL)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )

    parser.add_argument(
        "-l",
        "--list-tools",
        action="store_true",
        help="List available tools and exit",
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned model and API responses instead of Ollama and the web",
    )

    parser.add_argument(
        "-c",
        "--chat",
        action="store_true",
        help="Force chat mode even if a prompt is provided",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via LOCAL_ASSISTANT_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING, can be set via LOCAL_ASSISTANT_LOG_LEVEL)",
    )

    parser.add_argument(
        "prompt",
        nargs="*",
        help="Prompt to run in one-shot mode",
    )

    return parser


async def run(
    args: argparse.Namespace, settings: AssistantSettings, console: Console
) -> int:
    """Wire up the collaborators and run one-shot or chat mode.

    Returns:
        int: Process exit code
    """
    model_client: ModelCapability
    api: ApiCapability
    if args.mock:
        model_client = MockModelClient(settings.call_start_marker, settings.call_end_marker)
        api = MockApiService()
    else:
        model_client = OllamaClient(host=settings.ollama_host)
        api = ApiService(settings)

    registry = build_default_registry(api, settings)
    dispatcher = ToolDispatcher(registry)
    orchestrator = PromptOrchestrator(model_client, dispatcher, registry, console, settings)
    prompt = " ".join(args.prompt).strip()

    try:
        if not await model_client.check_connection():
            raise ModelUnavailableError(
                f"Could not reach Ollama at {settings.ollama_host}"
            )

        if args.chat or not prompt:
            session = ChatSession(
                orchestrator=orchestrator,
                dispatcher=dispatcher,
                registry=registry,
                config=SessionConfig(
                    model=settings.model,
                    retain_tool_results=settings.retain_tool_results,
                    verbose=args.verbose,
                ),
                console=console,
            )
            await session.run()
        else:
            await orchestrator.run_direct(prompt, settings.model)
        return 0
    except ModelUnavailableError as e:
        logger.error(f"Fatal error: {e}")
        console.print(f"[error]Fatal error:[/error] {escape(str(e))}")
        return 1
    finally:
        await model_client.close()
        await api.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the local-assistant CLI.

    Parses command-line arguments, configures logging and runs the assistant.
    """
    args = build_parser().parse_args(argv)

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.model is not None:
        settings_kwargs["model"] = args.model
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level
    if args.verbose:
        settings_kwargs["log_level"] = "DEBUG"

    settings = AssistantSettings(**settings_kwargs)

    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    console = make_console(no_color=args.no_color)

    if args.list_tools:
        print_tool_list(console, list(BUILTIN_TOOLS))
        return 0

    if args.verbose:
        console.print("[muted]Verbose mode enabled[/muted]")
        console.print(f"[muted]Using model: {escape(settings.model)}[/muted]")
        if args.mock:
            console.print("[muted]Mock mode: no requests leave this machine[/muted]")

    try:
        return asyncio.run(run(args, settings, console))
    except KeyboardInterrupt:
        console.print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
