"""
Quiz schema and data structures

Defines questions, choices, stored quiz records and verification verdicts,
plus validation for question payloads that come from untrusted sources.
"""

import string
import time
from dataclasses import dataclass, field
from typing import Any, Optional


QUIZ_SOURCES = ("image", "manual")


def choice_id(index: int) -> str:
    """Letter id for the choice at `index` ('a' for 0)."""
    return string.ascii_lowercase[index]


@dataclass(frozen=True)
class Choice:
    """One selectable option within a question."""
    id: str
    text: str

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> "Choice":
        return cls(id=data["id"], text=data["text"])


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question derived from one feature."""
    id: str
    text: str
    choices: tuple[Choice, ...]
    correct_choice_id: str

    @classmethod
    def build(cls, id: str, text: str, choice_texts: list[str]) -> "Question":
        """
        Build a question whose first listed choice is the correct one.

        Choice ids are assigned in listed order starting at 'a'.
        """
        choices = tuple(Choice(id=choice_id(i), text=t) for i, t in enumerate(choice_texts))
        return cls(id=id, text=text, choices=choices, correct_choice_id=choices[0].id)

    @property
    def correct_choice(self) -> Choice:
        return next(c for c in self.choices if c.id == self.correct_choice_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "choices": [c.to_dict() for c in self.choices],
            "correctChoiceId": self.correct_choice_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            id=data["id"],
            text=data["text"],
            choices=tuple(Choice.from_dict(c) for c in data["choices"]),
            correct_choice_id=data["correctChoiceId"],
        )


@dataclass(frozen=True)
class QuizRecord:
    """
    The immutable bundle of features and generated questions.

    Created once at quiz-creation time and never mutated afterwards.
    """
    quiz_id: str
    features: tuple[str, ...]
    questions: tuple[Question, ...]
    object_type: Optional[str] = None
    source: Optional[str] = None
    created_at: float = field(default_factory=time.monotonic)

    def to_dict(self) -> dict:
        result = {"quizId": self.quiz_id}
        if self.object_type is not None:
            result["objectType"] = self.object_type
        result["features"] = list(self.features)
        result["questions"] = [q.to_dict() for q in self.questions]
        return result


@dataclass(frozen=True)
class VerificationVerdict:
    """Outcome of checking an answer submission against a stored quiz."""
    score: int
    total: int

    @property
    def correct(self) -> bool:
        return self.score == self.total

    @property
    def message(self) -> str:
        """Respondent-facing result text."""
        if self.correct:
            return "The item is yours."
        return f"Maybe not yours. You scored {self.score} out of {self.total} questions."

    def to_dict(self) -> dict:
        return {"correct": self.correct, "score": self.score, "total": self.total}


def validate_question(data: Any) -> tuple[bool, list[str]]:
    """
    Validate an untrusted question payload.

    Checks the shape of the dict, that choice ids run 'a', 'b', ... in
    presentation order, and that correctChoiceId names one of its choices.

    Args:
        data: Candidate question, usually decoded from model output

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not isinstance(data, dict):
        return (False, ["question must be an object"])

    errors = []
    label = data.get("id") if isinstance(data.get("id"), str) else "?"

    for key in ("id", "text"):
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"question {label}: '{key}' must be a non-empty string")

    choices = data.get("choices")
    if not isinstance(choices, list) or len(choices) < 2:
        errors.append(f"question {label}: needs at least 2 choices")
        return (False, errors)

    if len(choices) > len(string.ascii_lowercase):
        errors.append(f"question {label}: too many choices ({len(choices)})")
        return (False, errors)

    ids = []
    for index, choice in enumerate(choices):
        if not isinstance(choice, dict):
            errors.append(f"question {label}: choice {index} must be an object")
            continue
        expected = choice_id(index)
        if choice.get("id") != expected:
            errors.append(
                f"question {label}: choice {index} has id {choice.get('id')!r}, expected {expected!r}"
            )
        if not isinstance(choice.get("text"), str):
            errors.append(f"question {label}: choice {index} text must be a string")
        ids.append(choice.get("id"))

    if data.get("correctChoiceId") not in ids:
        errors.append(
            f"question {label}: correctChoiceId {data.get('correctChoiceId')!r} is not one of its choices"
        )

    return (len(errors) == 0, errors)
