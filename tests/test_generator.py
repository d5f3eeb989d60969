"""
Tests for external quiz generation.
"""

import pytest
import json

from claimcheck.errors import (
    ConfigurationError,
    GenerationError,
    GenerationParseError,
    GenerationRequestError,
)
from claimcheck.providers.mock import MockProvider
from claimcheck.providers.openai import OpenAIProvider
from claimcheck.quiz.generator import QuizGenerator
from claimcheck.quiz.prompts import QUIZ_GENERATION_PROMPT, format_generation_payload


VALID_REPLY = json.dumps({
    "questions": [
        {
            "id": "q1",
            "text": "What brand is the item?",
            "choices": [
                {"id": "a", "text": "Adidas"},
                {"id": "b", "text": "Nike"},
                {"id": "c", "text": "Puma"},
                {"id": "d", "text": "Reebok"},
            ],
            "correctChoiceId": "b",
        },
        {
            "id": "q2",
            "text": "Where is the scratch?",
            "choices": [{"id": "a", "text": "Left strap"}, {"id": "b", "text": "Right strap"}],
            "correctChoiceId": "b",
        },
    ]
})


class TestPayload:
    """Tests for the request payload."""

    def test_format_generation_payload(self):
        payload = json.loads(format_generation_payload(["Brand: Nike"], "backpack"))

        assert payload == {"features": ["Brand: Nike"], "objectType": "backpack"}

    def test_prompt_describes_shape(self):
        assert "correctChoiceId" in QUIZ_GENERATION_PROMPT


class TestQuizGenerator:
    """Tests for QuizGenerator."""

    @pytest.mark.asyncio
    async def test_generate_valid(self):
        """Test a well-formed reply is accepted as-is."""
        generator = QuizGenerator(MockProvider(fixed_response=VALID_REPLY))
        questions = await generator.generate(["Brand: Nike", "Scratch on right strap"], "backpack")

        assert [q.id for q in questions] == ["q1", "q2"]
        assert questions[0].correct_choice.text == "Nike"

    @pytest.mark.asyncio
    async def test_sends_features_and_prompt(self):
        """Test the provider sees the JSON payload and instruction prompt."""
        seen = {}

        def capture(prompt: str) -> str:
            seen["prompt"] = prompt
            return VALID_REPLY

        generator = QuizGenerator(MockProvider(response_generator=capture))
        await generator.generate(["Brand: Nike"], None)

        assert json.loads(seen["prompt"]) == {"features": ["Brand: Nike"], "objectType": None}

    @pytest.mark.asyncio
    async def test_unbounded_count(self):
        """Test the external path may return more than three questions."""
        generator = QuizGenerator(MockProvider())
        questions = await generator.generate(["a", "b", "c", "d", "e"])

        assert len(questions) == 5

    @pytest.mark.asyncio
    async def test_fenced_reply(self):
        """Test JSON wrapped in prose and a code fence is found."""
        reply = f"Here is your quiz:\n```json\n{VALID_REPLY}\n```"
        generator = QuizGenerator(MockProvider(fixed_response=reply))

        questions = await generator.generate(["Brand: Nike"])
        assert len(questions) == 2

    @pytest.mark.asyncio
    async def test_missing_credential(self, monkeypatch):
        """Test no call is made without a credential."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        generator = QuizGenerator(OpenAIProvider())

        with pytest.raises(ConfigurationError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        generator = QuizGenerator(MockProvider(fail_rate=1.0))

        with pytest.raises(GenerationRequestError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_timeout(self):
        generator = QuizGenerator(
            MockProvider(fixed_response=VALID_REPLY, delay_seconds=0.5),
            timeout_seconds=0.01,
        )

        with pytest.raises(GenerationRequestError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_not_json(self):
        """Test unparsable replies are distinct from request failures."""
        generator = QuizGenerator(MockProvider(fixed_response="Sorry, I can't help with that."))

        with pytest.raises(GenerationParseError) as excinfo:
            await generator.generate(["Brand: Nike"])
        assert not isinstance(excinfo.value, GenerationRequestError)
        assert isinstance(excinfo.value, GenerationError)

    @pytest.mark.asyncio
    async def test_no_questions(self):
        generator = QuizGenerator(MockProvider(fixed_response='{"questions": []}'))

        with pytest.raises(GenerationParseError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_correct_choice_not_in_choices(self):
        data = json.loads(VALID_REPLY)
        data["questions"][0]["correctChoiceId"] = "z"
        generator = QuizGenerator(MockProvider(fixed_response=json.dumps(data)))

        with pytest.raises(GenerationParseError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_gapped_choice_ids(self):
        data = json.loads(VALID_REPLY)
        data["questions"][1]["choices"][1]["id"] = "c"
        data["questions"][1]["correctChoiceId"] = "c"
        generator = QuizGenerator(MockProvider(fixed_response=json.dumps(data)))

        with pytest.raises(GenerationParseError):
            await generator.generate(["Brand: Nike"])

    @pytest.mark.asyncio
    async def test_duplicate_question_ids(self):
        data = json.loads(VALID_REPLY)
        data["questions"][1]["id"] = "q1"
        generator = QuizGenerator(MockProvider(fixed_response=json.dumps(data)))

        with pytest.raises(GenerationParseError):
            await generator.generate(["Brand: Nike"])
