"""Mock AI provider for testing and fallback."""

from typing import Any, Optional

from npcsim.services.ai.base import AIProvider

MOCK_NPC_LINES = (
    "NPC: [Mock] The road past the ruins is quiet today, keep your torch lit.",
    "NPC: [Mock] Save me a seat at the tavern when you are back.",
)


class MockProvider(AIProvider):
    """Mock AI provider that returns static NPC lines.

    Used for testing and as a fallback when no API key is configured.
    """

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1000,
        context: Optional[dict[str, Any]] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Return two canned "NPC:" prefixed lines, one per line."""
        return "\n".join(MOCK_NPC_LINES)
