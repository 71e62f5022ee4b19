"""
Ports (interfaces) for scheduling state.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import BucketMap, Flashcard, PracticeRecord


class StateRepository(ABC):
    """
    Port for the day counter, bucket snapshot and practice history.

    Implementations:
        - InMemoryStateRepository: Process-local state, lost on restart.

    Snapshots handed out by ``get_buckets`` must not be mutated by callers;
    a new snapshot is swapped in with ``set_buckets``.
    """

    @abstractmethod
    def get_current_day(self) -> int:
        pass

    @abstractmethod
    def increment_day(self) -> None:
        pass

    @abstractmethod
    def get_buckets(self) -> BucketMap:
        pass

    @abstractmethod
    def set_buckets(self, buckets: BucketMap) -> None:
        pass

    @abstractmethod
    def find_card(self, front: str, back: str) -> Flashcard | None:
        """
        Resolve a card by its natural key.

        Returns:
            The stored card, or None if no bucket holds it.
        """
        pass

    @abstractmethod
    def find_card_bucket(self, card: Flashcard) -> int | None:
        pass

    @abstractmethod
    def get_history(self) -> list[PracticeRecord]:
        """Practice history, oldest first."""
        pass

    @abstractmethod
    def add_history_record(self, record: PracticeRecord) -> None:
        pass
