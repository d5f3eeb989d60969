"""
Mock provider for testing

Returns configurable responses without making API calls.
"""

import asyncio
import json
import random
from dataclasses import dataclass
from typing import Optional, Callable

from .base import ModelProvider, ModelResponse, ProviderError


def generate_mock_quiz(features: list[str]) -> dict:
    """
    Generate a mock quiz payload for a feature list.

    Unlike local synthesis this covers every feature, the way a remote model
    is free to.

    Args:
        features: Identifying features

    Returns:
        Dict in the {"questions": [...]} shape the generator expects
    """
    from ..quiz.classifier import classify

    return {"questions": [classify(f, i).to_dict() for i, f in enumerate(features)]}


@dataclass
class MockProvider(ModelProvider):
    """
    Mock provider for testing.

    Can be configured with custom response generators or fixed responses.
    """

    _name: str = "mock"
    _default_model: str = "mock-model-v1"
    fixed_response: Optional[str] = None
    response_generator: Optional[Callable[[str], str]] = None
    delay_seconds: float = 0.0
    fail_rate: float = 0.0  # Probability of raising an error
    token_count: int = 100

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_model(self) -> str:
        return self._default_model

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
        """Generate a mock response."""
        # Simulate delay
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        # Simulate failures
        if self.fail_rate > 0 and random.random() < self.fail_rate:
            raise ProviderError("Simulated mock provider failure")

        # Generate response
        if self.fixed_response is not None:
            content = self.fixed_response
        elif self.response_generator is not None:
            content = self.response_generator(prompt)
        else:
            content = self._default_response(prompt)

        return ModelResponse(
            content=content,
            model=model or self._default_model,
            provider=self.name,
            usage={
                "input_tokens": len(prompt.split()) * 2,
                "output_tokens": self.token_count,
            },
        )

    def _default_response(self, prompt: str) -> str:
        """
        Answer a quiz generation request.

        The prompt is the JSON {"features", "objectType"} payload; anything
        else gets a generic response.
        """
        try:
            payload = json.loads(prompt)
        except json.JSONDecodeError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get("features"), list):
            return json.dumps(generate_mock_quiz(payload["features"]), indent=2)

        return json.dumps({
            "message": "Mock response generated",
            "prompt_length": len(prompt),
        }, indent=2)
