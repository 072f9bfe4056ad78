"""Console utilities for the CLI."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from local_assistant.tools.errors import ToolError
from local_assistant.tools.types import ToolDescriptor

ASSISTANT_THEME = Theme(
    {
        "info": "white",
        "accent": "cyan",
        "muted": "grey70",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "tool": "magenta",
    }
)


def make_console(no_color: bool = False) -> Console:
    """Create a Rich console with the assistant theme.

    Args:
        no_color: Disable colors even on a color terminal
    """
    return Console(theme=ASSISTANT_THEME, no_color=no_color, highlight=False)


def print_tool_error(console: Console, error: ToolError) -> None:
    """Report a ToolError as ``Tool Error (CODE): message``."""
    console.print(
        f"[error]Tool Error ({error.code.value}):[/error] {escape(error.message)}"
    )


def print_plain(console: Console, text: str, end: str = "\n") -> None:
    """Print untrusted text (model output, tool results) without markup."""
    console.print(
        text, end=end, markup=False, highlight=False, emoji=False, soft_wrap=True
    )


def print_tool_list(console: Console, descriptors: list[ToolDescriptor]) -> None:
    """Print each tool with its parameters."""
    console.print("[accent]Available Tools:[/accent]")
    console.print("----------------")

    for descriptor in descriptors:
        console.print(f"\n[tool]{escape(descriptor.name)}[/tool]: {escape(descriptor.description)}")
        console.print("Parameters:")
        for parameter in descriptor.parameters:
            required = " \\[required]" if parameter.required else ""
            console.print(
                f"  - {escape(parameter.name)} ({escape(parameter.type)}){required}: "
                f"{escape(parameter.description)}"
            )
