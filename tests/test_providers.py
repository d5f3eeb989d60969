"""
Tests for AI model providers.
"""

import pytest
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

from claimcheck.providers import get_provider
from claimcheck.providers.base import (
    ModelResponse, ProviderError, RateLimitError, AuthenticationError,
)
from claimcheck.providers.claude import ClaudeProvider
from claimcheck.providers.openai import OpenAIProvider
from claimcheck.providers.mock import MockProvider, generate_mock_quiz


class TestMockProvider:
    """Tests for MockProvider."""

    @pytest.mark.asyncio
    async def test_basic_generate(self):
        """Test basic response generation."""
        provider = MockProvider(fixed_response="Hello, world!")
        response = await provider.generate("Test prompt")

        assert response.content == "Hello, world!"
        assert response.provider == "mock"
        assert response.model == "mock-model-v1"

    @pytest.mark.asyncio
    async def test_custom_response_generator(self):
        """Test custom response generator."""
        def my_generator(prompt: str) -> str:
            return f"Response to: {prompt}"

        provider = MockProvider(response_generator=my_generator)
        response = await provider.generate("Hello")

        assert response.content == "Response to: Hello"

    @pytest.mark.asyncio
    async def test_quiz_detection(self):
        """Test quiz payloads get a quiz back."""
        provider = MockProvider()
        response = await provider.generate(
            json.dumps({"features": ["Color: blue", "Brand: Acme"], "objectType": None})
        )

        data = json.loads(response.content)
        assert [q["id"] for q in data["questions"]] == ["q1", "q2"]

    @pytest.mark.asyncio
    async def test_generic_response(self):
        provider = MockProvider()
        response = await provider.generate("Not a quiz request")

        assert "message" in json.loads(response.content)

    @pytest.mark.asyncio
    async def test_simulated_failure(self):
        """Test simulated failures."""
        provider = MockProvider(fail_rate=1.0)  # Always fail

        with pytest.raises(ProviderError):
            await provider.generate("Test")

    @pytest.mark.asyncio
    async def test_usage_tracking(self):
        """Test token usage tracking."""
        provider = MockProvider(token_count=150)
        response = await provider.generate("Some test prompt here")

        assert response.output_tokens == 150
        assert response.input_tokens > 0
        assert response.total_tokens > 150

    def test_needs_no_credentials(self):
        assert MockProvider().has_credentials is True


class TestMockQuiz:
    """Tests for the mock quiz helper."""

    def test_covers_every_feature(self):
        """Test the mock is not bounded like local synthesis."""
        quiz = generate_mock_quiz(["a", "b", "c", "d", "e"])

        assert len(quiz["questions"]) == 5


class TestModelResponse:
    """Tests for ModelResponse dataclass."""

    def test_token_properties(self):
        """Test token count properties."""
        response = ModelResponse(
            content="Test",
            model="test-model",
            provider="test",
            usage={"input_tokens": 100, "output_tokens": 50},
        )

        assert response.input_tokens == 100
        assert response.output_tokens == 50
        assert response.total_tokens == 150

    def test_empty_usage(self):
        """Test with no usage data."""
        response = ModelResponse(
            content="Test",
            model="test-model",
            provider="test",
        )

        assert response.total_tokens == 0


class TestGetProvider:
    """Tests for the provider factory."""

    def test_known_providers(self):
        assert isinstance(get_provider("openai", api_key="k"), OpenAIProvider)
        assert isinstance(get_provider("claude", api_key="k"), ClaudeProvider)
        assert isinstance(get_provider("mock"), MockProvider)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_provider("nope")


class TestOpenAIProvider:
    """Tests for OpenAIProvider with a stubbed client."""

    def _completion(self, content: str):
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
            usage=SimpleNamespace(prompt_tokens=12, completion_tokens=34),
            model="gpt-4.1-mini",
        )

    @pytest.mark.asyncio
    async def test_generate(self):
        provider = OpenAIProvider(api_key="sk-test")
        create = AsyncMock(return_value=self._completion('{"questions": []}'))
        provider._client = SimpleNamespace(
            chat=SimpleNamespace(completions=SimpleNamespace(create=create))
        )

        response = await provider.generate("payload", system="instructions")

        assert response.content == '{"questions": []}'
        assert response.input_tokens == 12
        assert response.output_tokens == 34
        messages = create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "instructions"}
        assert messages[1] == {"role": "user", "content": "payload"}

    @pytest.mark.asyncio
    async def test_rate_limit_mapped(self):
        provider = OpenAIProvider(api_key="sk-test")
        create = AsyncMock(side_effect=Exception("Error code: 429 - rate limited"))
        provider._client = SimpleNamespace(
            chat=SimpleNamespace(completions=SimpleNamespace(create=create))
        )

        with pytest.raises(RateLimitError):
            await provider.generate("payload")

    @pytest.mark.asyncio
    async def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = OpenAIProvider()

        assert provider.has_credentials is False
        with pytest.raises(AuthenticationError):
            await provider.generate("payload")


class TestClaudeProvider:
    """Tests for ClaudeProvider with a stubbed client."""

    @pytest.mark.asyncio
    async def test_generate(self):
        provider = ClaudeProvider(api_key="test-key")
        message = SimpleNamespace(
            content=[SimpleNamespace(type="text", text='{"questions": []}')],
            usage=SimpleNamespace(input_tokens=5, output_tokens=7),
            model="claude-sonnet-4-20250514",
        )
        create = AsyncMock(return_value=message)
        provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))

        response = await provider.generate("payload", system="instructions", temperature=1.5)

        assert response.content == '{"questions": []}'
        assert response.total_tokens == 12
        assert create.call_args.kwargs["system"] == "instructions"
        assert create.call_args.kwargs["temperature"] == 1.0

    @pytest.mark.asyncio
    async def test_auth_error_mapped(self):
        provider = ClaudeProvider(api_key="bad-key")
        create = AsyncMock(side_effect=Exception("401 invalid x-api-key"))
        provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))

        with pytest.raises(AuthenticationError):
            await provider.generate("payload")
