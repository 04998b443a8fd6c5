"""Tests for AI provider module."""

from unittest.mock import MagicMock, patch

import pytest

from npcsim.services.ai import AIProvider, GeminiProvider, MockProvider, get_ai_provider
from npcsim.services.ai.gemini import render_context


class TestMockProvider:
    """Tests for MockProvider class."""

    def test_mock_provider_name(self):
        """Test that MockProvider name is 'mock'."""
        provider = MockProvider()
        assert provider.name == "mock"

    def test_mock_provider_is_available(self):
        """Test that MockProvider is always available."""
        assert MockProvider().is_available() is True

    def test_mock_provider_generate(self):
        """Test that MockProvider returns two NPC-prefixed lines."""
        result = MockProvider().generate("test prompt", temperature=0.8)

        lines = result.splitlines()
        assert len(lines) == 2
        assert all(line.startswith("NPC: [Mock]") for line in lines)


class TestGeminiProvider:
    """Tests for GeminiProvider class."""

    @patch("npcsim.services.ai.gemini.genai")
    def test_gemini_provider_name(self, mock_genai: MagicMock):
        """Test that GeminiProvider name is 'gemini'."""
        provider = GeminiProvider(api_key="test_key")
        assert provider.name == "gemini"

    @patch("npcsim.services.ai.gemini.genai")
    def test_gemini_provider_not_available_without_key(self, mock_genai: MagicMock):
        """Test that GeminiProvider is not available without API key."""
        provider = GeminiProvider(api_key="")
        assert provider.is_available() is False
        with pytest.raises(RuntimeError):
            provider.generate("hello")

    @patch("npcsim.services.ai.gemini.genai")
    def test_gemini_generate_passes_context_and_temperature(self, mock_genai: MagicMock):
        """Test that context is prepended and temperature forwarded."""
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.return_value.text = "  NPC: Hello there.  "
        provider = GeminiProvider(api_key="test_key")

        result = provider.generate("Say hi", context={"npc": "Mood: calm"}, temperature=0.8)

        assert result == "NPC: Hello there."
        prompt = model.generate_content.call_args.args[0]
        assert prompt.startswith("Context: npc: Mood: calm")
        assert prompt.endswith("Say hi")
        config_kwargs = mock_genai.types.GenerationConfig.call_args.kwargs
        assert config_kwargs["temperature"] == 0.8

    @patch("npcsim.services.ai.gemini.genai")
    def test_gemini_api_error_raises_runtime_error(self, mock_genai: MagicMock):
        """Test that API failures surface as RuntimeError."""
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.side_effect = ValueError("quota")
        provider = GeminiProvider(api_key="test_key")

        with pytest.raises(RuntimeError, match="quota"):
            provider.generate("Say hi")

    def test_render_context(self):
        assert render_context(None) == ""
        assert render_context({"a": 1, "b": None, "c": ""}) == "Context: a: 1"


class TestAIProviderFactory:
    """Tests for AI provider factory."""

    def test_factory_returns_mock_by_default(self):
        """Test that factory returns MockProvider by default."""
        provider = get_ai_provider()

        assert isinstance(provider, AIProvider)
        assert isinstance(provider, MockProvider)

    @patch("npcsim.services.ai.factory.settings")
    @patch("npcsim.services.ai.gemini.genai")
    def test_factory_returns_gemini_with_config(
        self, mock_genai: MagicMock, mock_settings: MagicMock
    ):
        """Test that factory returns GeminiProvider when configured."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = "test_key"
        mock_settings.AI_MODEL = None

        provider = get_ai_provider()

        assert isinstance(provider, GeminiProvider)
        mock_genai.GenerativeModel.assert_called_with("gemini-2.0-flash")

    @patch("npcsim.services.ai.factory.settings")
    def test_factory_fallback_without_key(self, mock_settings: MagicMock):
        """Test that factory falls back to MockProvider without API key."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = None

        provider = get_ai_provider()

        assert isinstance(provider, MockProvider)

    def test_factory_unknown_provider(self):
        """Test that unknown provider names fall back to MockProvider."""
        assert isinstance(get_ai_provider("openai-ish"), MockProvider)
