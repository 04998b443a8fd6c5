"""AI provider module."""

from npcsim.services.ai.base import AIProvider
from npcsim.services.ai.factory import get_ai_provider
from npcsim.services.ai.gemini import GeminiProvider
from npcsim.services.ai.mock import MockProvider

__all__ = [
    "AIProvider",
    "GeminiProvider",
    "MockProvider",
    "get_ai_provider",
]
