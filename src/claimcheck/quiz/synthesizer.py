"""
Local question synthesis

Classifies the first few features into a bounded quiz without any model call.
"""

import logging
from typing import Optional, Sequence

from ..errors import ValidationError
from .classifier import FeatureClassifier
from .schema import Question

logger = logging.getLogger(__name__)

# Features past this point are ignored by the local path
MAX_LOCAL_QUESTIONS = 3


class QuestionSynthesizer:
    """Builds a quiz from the first features using the rule classifier."""

    def __init__(
        self,
        classifier: Optional[FeatureClassifier] = None,
        max_questions: int = MAX_LOCAL_QUESTIONS,
    ):
        self.classifier = classifier or FeatureClassifier()
        self.max_questions = max_questions

    def synthesize(self, features: Sequence[str]) -> list[Question]:
        """
        Synthesize questions for a feature list.

        Args:
            features: Identifying features, in the order supplied

        Returns:
            One question per feature for at most `max_questions` features

        Raises:
            ValidationError: If no features were supplied
        """
        if not features:
            raise ValidationError("features array is required")

        selected = list(features)[: self.max_questions]
        if len(features) > len(selected):
            logger.debug(f"Ignoring {len(features) - len(selected)} features past the first {self.max_questions}")

        return [self.classifier.classify(feature, i) for i, feature in enumerate(selected)]
