"""
Answer verification

Scores a respondent's choices against the stored correct answers.
"""

import logging
from typing import Mapping, Sequence

from .errors import NotFoundError
from .quiz.schema import Question, VerificationVerdict
from .store import QuizStore

logger = logging.getLogger(__name__)


def score_answers(questions: Sequence[Question], answers: Mapping[str, str]) -> VerificationVerdict:
    """
    Count the questions whose submitted choice is the correct one.

    Unanswered questions count as misses; answers to unknown question ids
    are ignored.
    """
    score = sum(1 for q in questions if answers.get(q.id) == q.correct_choice_id)
    return VerificationVerdict(score=score, total=len(questions))


class VerificationService:
    """Resolves answer submissions against stored quizzes."""

    def __init__(self, store: QuizStore):
        self.store = store

    def verify(self, quiz_id: str, answers: Mapping[str, str]) -> VerificationVerdict:
        """
        Verify a submission.

        Args:
            quiz_id: Quiz to check against
            answers: Mapping of question id to selected choice id

        Returns:
            VerificationVerdict with score, total and correct

        Raises:
            NotFoundError: If the quiz is unknown or expired
        """
        record = self.store.get(quiz_id)
        if record is None:
            raise NotFoundError(f"Quiz {quiz_id} not found")

        verdict = score_answers(record.questions, answers)
        logger.info(f"Verified quiz {quiz_id}: {verdict.score}/{verdict.total} correct={verdict.correct}")
        return verdict
