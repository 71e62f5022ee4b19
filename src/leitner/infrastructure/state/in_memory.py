"""
In-Memory State Repository — Infrastructure adapter for process-local state.

Implements StateRepository with plain Python containers. Nothing survives a restart.
"""

import logging
from collections.abc import Iterable

from leitner.application.scheduler import find_bucket
from leitner.domain.constants import NEW_CARD_BUCKET
from leitner.domain.models import BucketMap, Flashcard, PracticeRecord
from leitner.domain.ports import StateRepository

logger = logging.getLogger(__name__)


class InMemoryStateRepository(StateRepository):
    """
    Holds the day counter, the current bucket snapshot and the practice history.

    Not synchronized; callers that share one instance across threads must
    serialize writes themselves (see PracticeService).
    """

    def __init__(self, initial_cards: Iterable[Flashcard] = (), start_day: int = 0):
        self._buckets: BucketMap = {NEW_CARD_BUCKET: set(initial_cards)}
        self._history: list[PracticeRecord] = []
        self._day = start_day
        logger.info(
            f"State initialized: {len(self._buckets[NEW_CARD_BUCKET])} cards, day {self._day}"
        )

    def get_current_day(self) -> int:
        return self._day

    def increment_day(self) -> None:
        self._day += 1

    def get_buckets(self) -> BucketMap:
        return self._buckets

    def set_buckets(self, buckets: BucketMap) -> None:
        self._buckets = buckets

    def find_card(self, front: str, back: str) -> Flashcard | None:
        for cards in self._buckets.values():
            for card in cards:
                if card.front == front and card.back == back:
                    return card
        return None

    def find_card_bucket(self, card: Flashcard) -> int | None:
        return find_bucket(self._buckets, card)

    def get_history(self) -> list[PracticeRecord]:
        return list(self._history)

    def add_history_record(self, record: PracticeRecord) -> None:
        self._history.append(record)
