"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that isolate the
CLI from the environment and stub the network providers.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Clear LOCAL_ASSISTANT_ variables and run from a temporary directory."""
    for name in (
        "MODEL",
        "OLLAMA_HOST",
        "LOG_LEVEL",
        "READ_FILE_ROOT",
        "RETAIN_TOOL_RESULTS",
        "BRACE_FALLBACK_ENABLED",
    ):
        monkeypatch.delenv(f"LOCAL_ASSISTANT_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_ollama_client():
    """Patch the OllamaClient used by the CLI.

    The CLI creates its client inside run(), so the class is replaced before
    main() is called.
    """
    with patch("local_assistant.__main__.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.check_connection.return_value = True
        mock_client_class.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def scripted_input(monkeypatch):
    """Replace input() with a script of lines followed by end of input."""

    def install(*lines):
        remaining = list(lines)

        def fake_input(prompt=""):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)

    return install


@pytest.fixture
def provider_transport():
    """Create an httpx.MockTransport answering like the real providers.

    Requests are recorded on the transport's ``requests`` attribute.
    """
    requests = []

    def handler(request):
        requests.append(request)
        if request.url.host == "geo.test" and request.url.path == "/search":
            return httpx.Response(200, json=[{"lat": "51.5073219", "lon": "-0.1276474"}])
        if request.url.host == "geo.test" and request.url.path == "/reverse":
            return httpx.Response(200, json={"display_name": "London, England"})
        if request.url.host == "weather.test":
            return httpx.Response(200, json={"current": {"temperature_2m": 58.3}})
        if request.url.host == "search.test":
            return httpx.Response(
                200, json={"results": [{"title": "Result", "content": "Body"}]}
            )
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
