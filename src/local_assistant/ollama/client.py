"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient exposing
the two operations the assistant needs: one-shot JSON generation and streamed
chat. The client is designed to be created once at startup and reused.
"""

import logging
from typing import Any, AsyncIterator

import httpx
import ollama

from local_assistant.tools.errors import ModelRequestError, ModelUnavailableError

logger = logging.getLogger(__name__)


def _get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from either a response object or a plain dict."""
    if hasattr(obj, key):
        return getattr(obj, key, default)
    elif isinstance(obj, dict):
        return obj.get(key, default)
    return default


class OllamaClient:
    """Async client for interacting with the Ollama API.

    Connection failures are raised as ModelUnavailableError; errors reported
    by the server itself (unknown model, bad request) surface as
    ollama.ResponseError.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def generate(self, model: str, system: str, prompt: str) -> str:
        """Generate a single non-streamed JSON response.

        Args:
            model: The model name to use
            system: System instruction sent with the prompt
            prompt: The user prompt

        Returns:
            str: The trimmed response text

        Raises:
            ModelUnavailableError: If the Ollama server cannot be reached
            ModelRequestError: If the connection fails during the request
            ollama.ResponseError: If the server rejects the request
        """
        logger.debug(f"Generating with model: {model}")
        try:
            response = await self._client.generate(
                model=model,
                system=system,
                prompt=prompt,
                stream=False,
                format="json",
            )
        except (ConnectionError, httpx.ConnectError) as e:
            logger.error(f"Could not reach Ollama at {self.host}: {e}")
            raise ModelUnavailableError(
                f"Could not reach Ollama at {self.host}: {e}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Request to Ollama failed: {e}")
            raise ModelRequestError(f"Request to Ollama failed: {e}") from e

        text = _get_value(response, "response", "") or ""
        logger.debug(f"Generated {len(text)} characters")
        return text.strip()

    async def chat_stream(
        self, model: str, messages: list[dict[str, Any]]
    ) -> AsyncIterator[str]:
        """Stream chat content from Ollama.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format:
                      [{"role": "user", "content": "..."}, ...]

        Yields:
            str: Each content delta as it arrives (empty deltas are skipped)

        Raises:
            ModelUnavailableError: If the Ollama server cannot be reached
            ModelRequestError: If the connection fails during the request
            ollama.ResponseError: If the server rejects the request

        Example:
            >>> async for text in client.chat_stream(
            ...     model="llama3.2",
            ...     messages=[{"role": "user", "content": "Hello"}]
            ... ):
            ...     print(text, end="")
        """
        logger.debug(f"Starting chat stream with model: {model}")
        logger.debug(f"Message count: {len(messages)}")

        try:
            async for chunk in await self._client.chat(
                model=model,
                messages=messages,
                stream=True,
            ):
                message = _get_value(chunk, "message", {})
                content = _get_value(message, "content", "") or ""
                if content:
                    yield content
        except (ConnectionError, httpx.ConnectError) as e:
            logger.error(f"Could not reach Ollama at {self.host}: {e}")
            raise ModelUnavailableError(
                f"Could not reach Ollama at {self.host}: {e}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Request to Ollama failed: {e}")
            raise ModelRequestError(f"Request to Ollama failed: {e}") from e

        logger.debug("Chat stream completed")

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient keeps an httpx client internally; it is closed
        here when the installed version exposes it.
        """
        inner = getattr(self._client, "_client", None)
        if isinstance(inner, httpx.AsyncClient):
            await inner.aclose()
        logger.debug("OllamaClient closed")
