"""
Quiz service

The layer behind the HTTP endpoints:
1. Validate the caller's feature list
2. Pick local synthesis or external generation from configuration
3. Store the finished record
4. Verify answer submissions against it

A record is stored only once synthesis has succeeded.
"""

import logging
from typing import Any, Optional

from .config import Config, GenerationConfig, config as default_config
from .errors import ValidationError, NotFoundError
from .providers import get_provider
from .providers.mock import MockProvider
from .quiz.generator import QuizGenerator
from .quiz.schema import QUIZ_SOURCES, QuizRecord, VerificationVerdict
from .quiz.synthesizer import QuestionSynthesizer
from .store import QuizStore
from .verification import VerificationService

logger = logging.getLogger(__name__)


def build_generator(generation: GenerationConfig) -> QuizGenerator:
    """Create a generator for the configured provider."""
    if generation.provider == "mock":
        provider = MockProvider()
    else:
        api_key = generation.credential or None
        provider = get_provider(
            generation.provider,
            api_key=api_key,
            default_model=generation.get_model(),
            timeout=generation.timeout_seconds,
        )
    return QuizGenerator(provider, timeout_seconds=generation.timeout_seconds)


def build_store(cfg: Config) -> QuizStore:
    """Create a store with the configured retention policy."""
    return QuizStore(ttl_seconds=cfg.store.ttl_seconds, max_records=cfg.store.max_records)


class QuizService:
    """
    Creates, serves and checks ownership quizzes.

    Local synthesis is used when USE_MOCK_AI is set or no credential is
    configured; otherwise the external generator runs and its failures are
    returned to the caller as they are.
    """

    def __init__(
        self,
        store: Optional[QuizStore] = None,
        synthesizer: Optional[QuestionSynthesizer] = None,
        generator: Optional[QuizGenerator] = None,
        use_mock: Optional[bool] = None,
        cfg: Optional[Config] = None,
    ):
        """
        Initialize service.

        Args:
            store: Quiz store (built from config if not given)
            synthesizer: Local question synthesizer
            generator: External quiz generator (built from config if needed)
            use_mock: Force local synthesis (True) or external generation
                (False); None decides from configuration
            cfg: Configuration (defaults to the module singleton)
        """
        self.config = cfg or default_config
        self.store = store if store is not None else build_store(self.config)
        self.synthesizer = synthesizer or QuestionSynthesizer()
        self._generator = generator
        self.verifier = VerificationService(self.store)

        if use_mock is None:
            use_mock = self.config.generation.use_local_synthesis
        self.use_mock = use_mock

    @property
    def generator(self) -> QuizGenerator:
        if self._generator is None:
            self._generator = build_generator(self.config.generation)
        return self._generator

    async def create_quiz(
        self,
        features: Any,
        object_type: Optional[str] = None,
        source: Optional[str] = None,
    ) -> QuizRecord:
        """
        Build and store a quiz for a feature list.

        Args:
            features: Non-empty list of feature strings
            object_type: Optional kind of item
            source: "image" or "manual"

        Returns:
            The stored QuizRecord

        Raises:
            ValidationError: On a missing, empty or malformed feature list
            ConfigurationError: If external generation has no credential
            GenerationError: If external generation fails
        """
        features = self._validate_features(features)

        if source is not None and source not in QUIZ_SOURCES:
            raise ValidationError(f"source must be one of {list(QUIZ_SOURCES)}")
        if object_type is not None and not isinstance(object_type, str):
            raise ValidationError("objectType must be a string")

        if self.use_mock:
            path = "local"
            questions = self.synthesizer.synthesize(features)
        else:
            path = self.generator.provider.name
            questions = await self.generator.generate(features, object_type)

        quiz_id = self.store.create(
            features=features,
            questions=questions,
            object_type=object_type,
            source=source,
        )
        logger.info(f"Created quiz {quiz_id} with {len(questions)} questions via {path}")

        return self.store.get(quiz_id)

    def get_quiz(self, quiz_id: Any) -> QuizRecord:
        """
        Fetch a stored quiz.

        Raises:
            ValidationError: If quiz_id is missing
            NotFoundError: If the quiz is unknown or expired
        """
        quiz_id = self._validate_quiz_id(quiz_id)
        record = self.store.get(quiz_id)
        if record is None:
            raise NotFoundError(f"Quiz {quiz_id} not found")
        return record

    def check_quiz(self, quiz_id: Any, answers: Any) -> VerificationVerdict:
        """
        Verify an answer submission.

        Raises:
            ValidationError: If quiz_id is missing or answers is not an object
            NotFoundError: If the quiz is unknown or expired
        """
        quiz_id = self._validate_quiz_id(quiz_id)
        if not isinstance(answers, dict):
            raise ValidationError("answers object is required")
        return self.verifier.verify(quiz_id, answers)

    def _validate_features(self, features: Any) -> list[str]:
        if not isinstance(features, (list, tuple)) or len(features) == 0:
            raise ValidationError("features array is required")
        if not all(isinstance(f, str) for f in features):
            raise ValidationError("features must be strings")
        return list(features)

    def _validate_quiz_id(self, quiz_id: Any) -> str:
        if not isinstance(quiz_id, str) or not quiz_id.strip():
            raise ValidationError("quizId is required")
        return quiz_id
