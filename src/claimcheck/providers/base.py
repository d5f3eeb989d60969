"""
Base protocol for AI model providers

Defines the interface all providers must implement for quiz generation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any


class ProviderError(Exception):
    """Base exception for provider errors."""
    pass


class RateLimitError(ProviderError):
    """Rate limit exceeded."""
    pass


class AuthenticationError(ProviderError):
    """Authentication failed."""
    pass


@dataclass
class ModelResponse:
    """Response from an AI model."""
    content: str
    model: str
    provider: str
    usage: dict = field(default_factory=dict)
    raw_response: Optional[Any] = None

    @property
    def input_tokens(self) -> int:
        """Number of input tokens used."""
        return self.usage.get("input_tokens", 0)

    @property
    def output_tokens(self) -> int:
        """Number of output tokens used."""
        return self.usage.get("output_tokens", 0)

    @property
    def total_tokens(self) -> int:
        """Total tokens used."""
        return self.input_tokens + self.output_tokens


class ModelProvider(ABC):
    """
    Abstract base class for AI model providers.

    Providers implement generate() for a single system + user prompt pair.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'openai', 'claude')."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default model ID for this provider."""
        pass

    @property
    def has_credentials(self) -> bool:
        """Whether the provider has what it needs to make a call."""
        return True

    @abstractmethod
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
        """
        Generate a response from the model.

        Args:
            prompt: The user prompt
            system: Optional system prompt
            model: Model ID (uses default if not specified)
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            **kwargs: Provider-specific options

        Returns:
            ModelResponse with generated content

        Raises:
            ProviderError: On API errors
            RateLimitError: When rate limited
            AuthenticationError: On auth failures
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.default_model!r})"


def classify_provider_error(provider: str, error: Exception) -> ProviderError:
    """Map an SDK exception onto the provider error hierarchy."""
    error_str = str(error).lower()

    # Handle rate limiting
    if "rate" in error_str or "429" in error_str:
        return RateLimitError(f"{provider} rate limit exceeded: {error}")

    # Handle auth errors
    if "auth" in error_str or "401" in error_str or "api key" in error_str:
        return AuthenticationError(f"{provider} authentication failed: {error}")

    # Generic error
    return ProviderError(f"{provider} API error: {error}")
