"""
Practice Service — Application layer orchestrator.

Ties the scheduling core to the state repository: picks due cards, applies
answers, records history and manages the day counter and the card set.
"""

import logging
import threading
import time
from collections.abc import Callable

from leitner.application.scheduler import get_hint, practice, to_bucket_sets, update
from leitner.application.stats.service import ProgressService
from leitner.domain.constants import NEW_CARD_BUCKET, NO_BUCKET
from leitner.domain.errors import CardNotFoundError, DuplicateCardError
from leitner.domain.models import (
    AnswerDifficulty,
    Flashcard,
    PracticeRecord,
    PracticeSession,
    ProgressStats,
)
from leitner.domain.ports import StateRepository

logger = logging.getLogger(__name__)


class PracticeService:
    """
    Application service for practice sessions.

    Every read-modify-write on the repository happens under one lock, so a
    single service can be shared by concurrent request handlers.
    """

    def __init__(
        self,
        state_repo: StateRepository,
        progress_service: ProgressService | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            state_repo: The repository (port) holding day, buckets and history.
            progress_service: Optional custom progress service.
            clock: Source of epoch seconds for history timestamps.
        """
        self._repo = state_repo
        self._progress = progress_service or ProgressService(state_repo)
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def repository(self) -> StateRepository:
        return self._repo

    def get_practice_session(self) -> PracticeSession:
        """Cards due today, ordered by front then back."""
        with self._lock:
            day = self._repo.get_current_day()
            due = practice(to_bucket_sets(self._repo.get_buckets()), day)

        cards = sorted(due, key=lambda c: c.key)
        logger.info(f"Day {day}: practice {len(cards)} cards")
        return PracticeSession(cards=cards, day=day)

    def record_answer(
        self, front: str, back: str, difficulty: AnswerDifficulty
    ) -> PracticeRecord:
        """
        Move a card according to the answer and append it to the history.

        Raises:
            CardNotFoundError: If no bucket holds a card with this front and back.
        """
        with self._lock:
            card = self._repo.find_card(front, back)
            if card is None:
                raise CardNotFoundError(front, back)

            previous_bucket = self._repo.find_card_bucket(card)
            self._repo.set_buckets(update(self._repo.get_buckets(), card, difficulty))
            new_bucket = self._repo.find_card_bucket(card)

            record = PracticeRecord(
                card_front=card.front,
                card_back=card.back,
                timestamp=int(self._clock() * 1000),
                difficulty=difficulty,
                previous_bucket=NO_BUCKET if previous_bucket is None else previous_bucket,
                new_bucket=NO_BUCKET if new_bucket is None else new_bucket,
            )
            self._repo.add_history_record(record)

        logger.info(
            f'Updated card "{card.front}": Difficulty {difficulty.name}, '
            f"Bucket {record.previous_bucket} -> {record.new_bucket}"
        )
        return record

    def get_hint(self, front: str, back: str) -> str:
        """
        Raises:
            CardNotFoundError: If the card is unknown.
        """
        with self._lock:
            card = self._repo.find_card(front, back)
        if card is None:
            raise CardNotFoundError(front, back)

        hint = get_hint(card)
        logger.info(f'Hint requested for "{card.front}": {hint}')
        return hint

    def get_progress(self) -> ProgressStats:
        with self._lock:
            return self._progress.get_progress()

    def advance_day(self) -> int:
        with self._lock:
            self._repo.increment_day()
            day = self._repo.get_current_day()
        logger.info(f"Advanced to Day {day}")
        return day

    def add_card(self, card: Flashcard) -> Flashcard:
        """
        Put a new card into bucket 0.

        Raises:
            DuplicateCardError: If a card with the same front and back exists.
        """
        with self._lock:
            if self._repo.find_card(card.front, card.back) is not None:
                raise DuplicateCardError(card.front, card.back)

            buckets = {num: set(cards) for num, cards in self._repo.get_buckets().items()}
            buckets.setdefault(NEW_CARD_BUCKET, set()).add(card)
            self._repo.set_buckets(buckets)

        logger.info(f'Added new card: "{card.front}"')
        return card

    def list_cards(self) -> list[tuple[int, Flashcard]]:
        """Every card with its bucket, ordered by bucket then front."""
        with self._lock:
            buckets = self._repo.get_buckets()
            entries = [(num, card) for num, cards in buckets.items() for card in cards]
        return sorted(entries, key=lambda entry: (entry[0], entry[1].key))

    def get_history(self) -> list[PracticeRecord]:
        with self._lock:
            return self._repo.get_history()
