# Domain Package
from .errors import CardNotFoundError, DeckFileError, DuplicateCardError, LeitnerError
from .models import (
    AnswerDifficulty,
    BucketMap,
    Flashcard,
    PracticeRecord,
    PracticeSession,
    ProgressStats,
)
from .ports import StateRepository

__all__ = [
    "AnswerDifficulty",
    "BucketMap",
    "CardNotFoundError",
    "DeckFileError",
    "DuplicateCardError",
    "Flashcard",
    "LeitnerError",
    "PracticeRecord",
    "PracticeSession",
    "ProgressStats",
    "StateRepository",
]
