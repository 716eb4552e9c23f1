"""API clients for external services."""

from .gemini import DocumentGenerator, GeminiClient, GenerationError
from .examples import ExampleClient

__all__ = ["DocumentGenerator", "GeminiClient", "GenerationError", "ExampleClient"]
