"""
External quiz generator

Asks a remote model for a quiz and accepts the reply only if it parses into
questions that hold up to the same checks as locally synthesized ones.
"""

import asyncio
import json
import logging
import re
from typing import Optional, Sequence

from ..errors import ConfigurationError, GenerationParseError, GenerationRequestError
from ..providers.base import ModelProvider, ProviderError
from .prompts import QUIZ_GENERATION_PROMPT, format_generation_payload
from .schema import Question, validate_question

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class QuizGenerator:
    """
    Generates quizzes with an AI model provider.

    Used instead of local synthesis when a generation credential is
    configured. Failures are surfaced, never papered over with local rules.
    """

    def __init__(
        self,
        provider: ModelProvider,
        model: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize generator.

        Args:
            provider: AI model provider
            model: Optional model override
            timeout_seconds: Upper bound on one generation call
        """
        self.provider = provider
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def generate(
        self,
        features: Sequence[str],
        object_type: Optional[str] = None,
    ) -> list[Question]:
        """
        Generate quiz questions for a feature list.

        Args:
            features: All identifying features
            object_type: Optional kind of item (e.g. "backpack")

        Returns:
            Validated questions, in the order the model returned them

        Raises:
            ConfigurationError: If the provider has no credential
            GenerationRequestError: If the provider call fails or times out
            GenerationParseError: If the reply is not a valid quiz payload
        """
        if not self.provider.has_credentials:
            raise ConfigurationError(
                f"No credential configured for the {self.provider.name} provider"
            )

        prompt = format_generation_payload(list(features), object_type)

        try:
            response = await asyncio.wait_for(
                self.provider.generate(
                    prompt=prompt,
                    system=QUIZ_GENERATION_PROMPT,
                    model=self.model,
                    max_tokens=2048,
                    temperature=0.7,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Quiz generation timed out after {self.timeout_seconds}s")
            raise GenerationRequestError(
                f"{self.provider.name} did not respond within {self.timeout_seconds}s"
            ) from e
        except ProviderError as e:
            logger.warning(f"Quiz generation failed: {e}")
            raise GenerationRequestError(str(e)) from e

        logger.debug(
            f"Generation used {response.total_tokens} tokens "
            f"({response.input_tokens} in / {response.output_tokens} out)"
        )

        return self._parse_questions(response.content)

    def _parse_questions(self, content: str) -> list[Question]:
        """Parse and validate questions from a model reply."""
        data = self._extract_json(content)

        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise GenerationParseError("Model reply has no 'questions' array")

        errors = []
        for q_data in raw_questions:
            _, question_errors = validate_question(q_data)
            errors.extend(question_errors)

        if errors:
            raise GenerationParseError("Model returned invalid questions: " + "; ".join(errors))

        questions = [Question.from_dict(q_data) for q_data in raw_questions]

        ids = [q.id for q in questions]
        if len(set(ids)) != len(ids):
            raise GenerationParseError(f"Model returned duplicate question ids: {ids}")

        return questions

    def _extract_json(self, content: str) -> dict:
        """Find the JSON object in free-form model text."""
        candidates = [content.strip()]

        # Replies often wrap the payload in prose or a code fence
        json_match = re.search(r'\{[\s\S]*\}', content)
        if json_match:
            candidates.append(json_match.group())

        for candidate in candidates:
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                return data

        raise GenerationParseError("Model reply is not a JSON object")
