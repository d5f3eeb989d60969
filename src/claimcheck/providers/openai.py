"""
OpenAI provider implementation

Uses the openai SDK's async chat completions API.
"""

import os
from typing import Optional

from .base import (
    ModelProvider, ModelResponse, ProviderError, AuthenticationError,
    classify_provider_error,
)


class OpenAIProvider(ModelProvider):
    """
    OpenAI provider.

    API key is read from:
    1. Constructor argument
    2. OPENAI_API_KEY environment variable
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gpt-4.1-mini",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (falls back to env var)
            default_model: Default model to use
            base_url: API base URL (defaults to OpenAI's API)
            timeout: Per-request timeout in seconds
        """
        self._api_key = api_key or os.getenv("OPENAI_API_KEY")
        self._default_model = default_model
        self._base_url = base_url
        self._timeout = timeout
        self._client = None

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No OpenAI API key provided. Set OPENAI_API_KEY or pass api_key to constructor."
                )
            try:
                from openai import AsyncOpenAI
            except ImportError:
                raise ProviderError("openai package not installed. Run: pip install openai")

            client_kwargs = {"api_key": self._api_key, "max_retries": 0}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            if self._timeout:
                client_kwargs["timeout"] = self._timeout
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    @property
    def name(self) -> str:
        return "openai"

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
        """Generate a response using OpenAI."""
        client = self._get_client()
        model = model or self._default_model

        try:
            # Build messages
            messages = []
            if system:
                messages.append({"role": "system", "content": system})
            messages.append({"role": "user", "content": prompt})

            response = await client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            raise classify_provider_error("OpenAI", e) from e

        # Extract content
        content = ""
        if response.choices and response.choices[0].message:
            content = response.choices[0].message.content or ""

        # Extract usage
        usage = {}
        if response.usage:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
            }

        return ModelResponse(
            content=content,
            model=response.model,
            provider=self.name,
            usage=usage,
            raw_response=response,
        )
