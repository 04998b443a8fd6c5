"""Factory for creating AI provider instances."""

from typing import Optional

from npcsim.config import settings
from npcsim.core.logging import get_logger
from npcsim.services.ai.base import AIProvider
from npcsim.services.ai.gemini import GeminiProvider
from npcsim.services.ai.mock import MockProvider

logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


def get_ai_provider(
    provider_name: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> AIProvider:
    """Get an AI provider instance.

    Args:
        provider_name: Provider name; defaults to AI_PROVIDER from config.
        api_key: API key override; defaults to AI_API_KEY.
        model: Model override; defaults to AI_MODEL.

    Returns:
        An AIProvider instance. Unknown or unconfigured providers
        fall back to MockProvider, so dialogue requests always have one.
    """
    name = (provider_name or settings.AI_PROVIDER).lower()
    key = api_key or settings.AI_API_KEY

    if name == "mock":
        logger.debug("Using MockProvider")
        return MockProvider()

    if name == "gemini":
        if not key:
            logger.warning("AI_API_KEY not set, falling back to MockProvider")
            return MockProvider()
        chosen = model or settings.AI_MODEL or DEFAULT_GEMINI_MODEL
        logger.debug("Using GeminiProvider with model: %s", chosen)
        return GeminiProvider(api_key=key, model=chosen)

    logger.warning("Unknown provider '%s', falling back to MockProvider", name)
    return MockProvider()
