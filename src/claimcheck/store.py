"""
Quiz record store

Write-once, read-many storage of quiz records for the life of the process.
Records expire after a TTL and the oldest are evicted once the store is full.
"""

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Sequence

from .quiz.schema import Question, QuizRecord

logger = logging.getLogger(__name__)

# Attempts at a fresh id before giving up on a misbehaving id factory
MAX_ID_ATTEMPTS = 5


def random_quiz_id() -> str:
    """128-bit random identifier."""
    return str(uuid.uuid4())


class QuizStore:
    """
    In-memory keyed store of quiz records.

    Only create() and get() are exposed; there is no update or delete path.
    Insertion happens under a lock so a reader never sees a record before it
    is complete, and two creations never share an id.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = random_quiz_id,
        ttl_seconds: float = 0,
        max_records: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize store.

        Args:
            id_factory: Source of fresh quiz ids
            ttl_seconds: Record lifetime; 0 keeps records for the process lifetime
            max_records: Capacity; 0 means unbounded
            clock: Monotonic time source
        """
        self._id_factory = id_factory
        self._ttl_seconds = ttl_seconds
        self._max_records = max_records
        self._clock = clock
        self._records: OrderedDict[str, QuizRecord] = OrderedDict()
        self._lock = threading.Lock()

    def create(
        self,
        features: Sequence[str],
        questions: Sequence[Question],
        object_type: Optional[str] = None,
        source: Optional[str] = None,
    ) -> str:
        """
        Store a new quiz record under a fresh id.

        Returns:
            The new quiz id

        Raises:
            RuntimeError: If the id factory keeps returning ids already in use
        """
        with self._lock:
            self._purge_expired()

            for _ in range(MAX_ID_ATTEMPTS):
                quiz_id = self._id_factory()
                if quiz_id not in self._records:
                    break
                logger.warning(f"Quiz id collision on {quiz_id}, regenerating")
            else:
                raise RuntimeError(f"Could not generate a unique quiz id in {MAX_ID_ATTEMPTS} attempts")

            if self._max_records and len(self._records) >= self._max_records:
                evicted_id, _ = self._records.popitem(last=False)
                logger.info(f"Store full, evicted quiz {evicted_id}")

            self._records[quiz_id] = QuizRecord(
                quiz_id=quiz_id,
                features=tuple(features),
                questions=tuple(questions),
                object_type=object_type,
                source=source,
                created_at=self._clock(),
            )

        return quiz_id

    def get(self, quiz_id: str) -> Optional[QuizRecord]:
        """Look up a record; None if unknown or expired."""
        with self._lock:
            record = self._records.get(quiz_id)
        if record is None or self._is_expired(record):
            return None
        return record

    def _is_expired(self, record: QuizRecord) -> bool:
        return bool(self._ttl_seconds) and self._clock() - record.created_at >= self._ttl_seconds

    def _purge_expired(self):
        """Drop expired records. Caller holds the lock."""
        if not self._ttl_seconds:
            return
        # Insertion order is creation order, so expired records lead
        while self._records:
            quiz_id, record = next(iter(self._records.items()))
            if not self._is_expired(record):
                break
            del self._records[quiz_id]
            logger.debug(f"Expired quiz {quiz_id}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, quiz_id: str) -> bool:
        return self.get(quiz_id) is not None
