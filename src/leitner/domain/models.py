"""
Domain models for Leitner scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class AnswerDifficulty(IntEnum):
    """
    How well a card was recalled.

    Wrong sends the card back to bucket 0, Hard keeps it where it is and
    every other grade promotes it by one bucket.
    """

    Wrong = 0
    Easy = 1
    Medium = 2
    Hard = 3


@dataclass(frozen=True)
class Flashcard:
    """
    A flashcard.

    Attributes:
        front: Prompt side. Together with ``back`` forms the card's identity.
        back: Answer side.
        hint: Optional hint shown on request.
        tags: Free-form labels, in the order they were given.
    """

    front: str
    back: str
    hint: str | None = field(default=None, compare=False)
    tags: tuple[str, ...] = field(default=(), compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.front, self.back)

    def to_dict(self) -> dict[str, Any]:
        return {
            "front": self.front,
            "back": self.back,
            "hint": self.hint,
            "tags": list(self.tags),
        }


# Bucket number -> cards in that bucket. Bucket 0 holds new and failed cards.
BucketMap = dict[int, set[Flashcard]]


@dataclass(frozen=True)
class PracticeRecord:
    """
    A single answer in the practice history.

    Attributes:
        card_front: Front of the practiced card.
        card_back: Back of the practiced card.
        timestamp: Epoch milliseconds of the answer.
        difficulty: Grade given.
        previous_bucket: Bucket before the answer (-1 if the card had none).
        new_bucket: Bucket after the answer.
    """

    card_front: str
    card_back: str
    timestamp: int
    difficulty: AnswerDifficulty
    previous_bucket: int
    new_bucket: int

    @property
    def card_key(self) -> tuple[str, str]:
        return (self.card_front, self.card_back)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cardFront": self.card_front,
            "cardBack": self.card_back,
            "timestamp": self.timestamp,
            "difficulty": int(self.difficulty),
            "previousBucket": self.previous_bucket,
            "newBucket": self.new_bucket,
        }


@dataclass
class ProgressStats:
    """
    Snapshot of learning progress, derived from buckets and history.
    """

    total_cards: int
    cards_by_bucket: dict[int, int]
    success_rate: float  # Percentage, 0-100
    average_moves_per_card: float
    total_practice_events: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCards": self.total_cards,
            "cardsByBucket": dict(self.cards_by_bucket),
            "successRate": self.success_rate,
            "averageMovesPerCard": self.average_moves_per_card,
            "totalPracticeEvents": self.total_practice_events,
        }


@dataclass
class PracticeSession:
    """Cards due on a given day."""

    cards: list[Flashcard]
    day: int
