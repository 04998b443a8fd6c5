"""Gemini AI provider implementation."""

from typing import Any, Optional

import google.generativeai as genai

from npcsim.core.logging import get_logger
from npcsim.services.ai.base import AIProvider

logger = get_logger(__name__)


def render_context(context: Optional[dict[str, Any]]) -> str:
    """Flatten a context dict into a single "Context:" line."""
    if not context:
        return ""
    parts = [f"{key}: {value}" for key, value in context.items() if value not in (None, "")]
    return "Context: " + "; ".join(parts) if parts else ""


class GeminiProvider(AIProvider):
    """AI provider using Google Gemini API."""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash") -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Google API key for Gemini.
            model: Model name to use.
        """
        self._api_key = api_key
        self._model_name = model
        self._model = None

        if self._api_key:
            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(self._model_name)
            logger.info("GeminiProvider initialized with model: %s", self._model_name)

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "gemini"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return bool(self._api_key) and self._model is not None

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1000,
        context: Optional[dict[str, Any]] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate text using Gemini API.

        The context dict is prepended to the prompt as one line.

        Raises:
            RuntimeError: If API call fails or provider is not available.
        """
        if not self.is_available():
            raise RuntimeError("GeminiProvider is not available. Check API key.")

        assert self._model is not None

        # Rebuild model with system instruction if provided
        model = self._model
        if system_prompt:
            model = genai.GenerativeModel(
                self._model_name,
                system_instruction=system_prompt,
            )

        generation_config = genai.types.GenerationConfig(
            max_output_tokens=max_tokens,
            temperature=temperature,
        )
        context_line = render_context(context)
        full_prompt = f"{context_line}\n\n{prompt}" if context_line else prompt

        try:
            response = model.generate_content(
                full_prompt,
                generation_config=generation_config,
            )
            result: str = response.text.strip()
            return result
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise RuntimeError(f"Gemini API error: {e}") from e
