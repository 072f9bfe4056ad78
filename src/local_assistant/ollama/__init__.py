"""Ollama client wrapper and integration layer.

This package provides the async client wrapper for communicating with the
Ollama API, used for both one-shot and streamed generation.
"""

from local_assistant.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
