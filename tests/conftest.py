"""Pytest configuration and shared fixtures for local-assistant tests.

This module provides common fixtures used across all test modules,
including isolated settings, a captured console and a stubbed API.
"""

import io
from unittest.mock import AsyncMock

import pytest
from rich.console import Console

from local_assistant.assistant.orchestrator import PromptOrchestrator
from local_assistant.config import AssistantSettings
from local_assistant.console import ASSISTANT_THEME
from local_assistant.services.types import SearchResult
from local_assistant.tools import ToolDispatcher, build_default_registry


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with an isolated ReadFile root.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        AssistantSettings: Settings instance configured for testing.
    """
    return AssistantSettings(
        ollama_host="http://localhost:11434",
        model="llama3.2",
        geocoding_base_url="https://geo.test",
        weather_base_url="https://weather.test/v1/forecast",
        search_base_url="https://search.test",
        read_file_root=str(tmp_path),
        log_level="DEBUG",
    )


@pytest.fixture
def console():
    """Create a console that records output in memory without colors."""
    return Console(
        file=io.StringIO(),
        theme=ASSISTANT_THEME,
        width=200,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )


@pytest.fixture
def output(console):
    """Return a callable giving everything printed to the console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def fake_api():
    """Create a stubbed API capability with fixed answers."""
    api = AsyncMock()
    api.geocode.return_value = ("51.5073219", "-0.1276474")
    api.reverse_geocode.return_value = "London, Greater London, England, United Kingdom"
    api.get_current_temperature.return_value = 58.3
    api.search.return_value = SearchResult(
        title="Tesla, Inc.", content="Tesla is led by its CEO."
    )
    return api


@pytest.fixture
def registry(fake_api, test_settings):
    """Create the built-in tool registry bound to the stubbed API."""
    return build_default_registry(fake_api, test_settings)


@pytest.fixture
def dispatcher(registry):
    """Create a dispatcher over the built-in registry."""
    return ToolDispatcher(registry)


@pytest.fixture
def model_client():
    """Create a mock model capability."""
    return AsyncMock()


@pytest.fixture
def orchestrator(model_client, dispatcher, registry, console, test_settings):
    """Create a PromptOrchestrator wired to the mocks."""
    return PromptOrchestrator(model_client, dispatcher, registry, console, test_settings)


@pytest.fixture
def make_stream():
    """Return a factory building chat_stream replacements from text chunks."""

    def factory(*chunks, error=None):
        calls = []

        async def chat_stream(model, messages):
            calls.append({"model": model, "messages": messages})
            for chunk in chunks:
                yield chunk
            if error is not None:
                raise error

        chat_stream.calls = calls
        return chat_stream

    return factory
