"""
Claude (Anthropic) provider implementation

Uses the Anthropic SDK for Claude API access.
"""

import os
from typing import Optional

from .base import (
    ModelProvider, ModelResponse, ProviderError, AuthenticationError,
    classify_provider_error,
)


class ClaudeProvider(ModelProvider):
    """
    Anthropic Claude provider.

    Uses the anthropic SDK. API key is read from:
    1. Constructor argument
    2. ANTHROPIC_API_KEY environment variable
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "claude-sonnet-4-20250514",
        timeout: Optional[float] = None,
    ):
        """
        Initialize Claude provider.

        Args:
            api_key: Anthropic API key (falls back to env var)
            default_model: Default model to use
            timeout: Per-request timeout in seconds
        """
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self._default_model = default_model
        self._timeout = timeout
        self._client = None

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No Anthropic API key provided. Set ANTHROPIC_API_KEY or pass api_key to constructor."
                )
            try:
                import anthropic
            except ImportError:
                raise ProviderError("anthropic package not installed. Run: pip install anthropic")

            client_kwargs = {"api_key": self._api_key, "max_retries": 0}
            if self._timeout:
                client_kwargs["timeout"] = self._timeout
            self._client = anthropic.AsyncAnthropic(**client_kwargs)
        return self._client

    @property
    def name(self) -> str:
        return "claude"

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key)

    async def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
        **kwargs
    ) -> ModelResponse:
        """Generate a response using Claude."""
        client = self._get_client()
        model = model or self._default_model

        # Build message request
        request_kwargs = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        if system:
            request_kwargs["system"] = system

        # Temperature (Claude uses 0-1 scale)
        if temperature is not None:
            request_kwargs["temperature"] = min(1.0, max(0.0, temperature))

        try:
            response = await client.messages.create(**request_kwargs)
        except Exception as e:
            raise classify_provider_error("Claude", e) from e

        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

        return ModelResponse(
            content=content,
            model=response.model,
            provider=self.name,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            raw_response=response,
        )
