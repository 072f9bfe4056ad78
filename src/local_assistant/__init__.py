"""local-assistant: Tool calling for locally hosted LLMs via Ollama.

This package lets a local model invoke weather, geocoding, web search and file
tools by emitting a structured call description, either as a one-shot JSON
response or embedded in a streamed chat reply.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
