"""
claimcheck: ownership quizzes for found items.

Turns a few identifying features of an object into a short multiple-choice
quiz, then checks whether a claimant's answers match.
"""

__version__ = "0.1.0"

from .config import config
from .errors import (
    ClaimCheckError,
    ValidationError,
    ConfigurationError,
    GenerationError,
    GenerationRequestError,
    GenerationParseError,
    NotFoundError,
)
from .quiz import (
    Choice,
    Question,
    QuizRecord,
    VerificationVerdict,
    FeatureClassifier,
    QuestionSynthesizer,
    QuizGenerator,
    build_manual_features,
    classify,
)
from .store import QuizStore
from .verification import VerificationService, score_answers
from .service import QuizService

__all__ = [
    # Config
    "config",
    # Errors
    "ClaimCheckError",
    "ValidationError",
    "ConfigurationError",
    "GenerationError",
    "GenerationRequestError",
    "GenerationParseError",
    "NotFoundError",
    # Quiz
    "Choice",
    "Question",
    "QuizRecord",
    "VerificationVerdict",
    "FeatureClassifier",
    "QuestionSynthesizer",
    "QuizGenerator",
    "build_manual_features",
    "classify",
    # Storage and verification
    "QuizStore",
    "VerificationService",
    "score_answers",
    "QuizService",
]
