"""
Quiz system for claimcheck

Turns identifying features into ownership quizzes, locally or with an AI model.
"""

from .schema import (
    Choice,
    Question,
    QuizRecord,
    VerificationVerdict,
    validate_question,
)
from .classifier import FeatureClassifier, MatchRule, RULES, classify
from .synthesizer import QuestionSynthesizer, MAX_LOCAL_QUESTIONS
from .generator import QuizGenerator
from .features import build_manual_features

__all__ = [
    "Choice",
    "Question",
    "QuizRecord",
    "VerificationVerdict",
    "validate_question",
    "FeatureClassifier",
    "MatchRule",
    "RULES",
    "classify",
    "QuestionSynthesizer",
    "MAX_LOCAL_QUESTIONS",
    "QuizGenerator",
    "build_manual_features",
]
