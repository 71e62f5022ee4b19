"""
Progress calculator for deriving learning statistics from buckets and history.

This is a pure computation module with no I/O.
"""

from collections import Counter

from leitner.domain.constants import NEW_CARD_BUCKET
from leitner.domain.models import AnswerDifficulty, BucketMap, PracticeRecord, ProgressStats

# Grades counted as a successful recall. Hard counts, Medium does not.
SUCCESS_GRADES = frozenset({AnswerDifficulty.Easy, AnswerDifficulty.Hard})


class ProgressCalculator:
    """
    Computes ProgressStats from a bucket snapshot and the practice history.

    Stateless and side-effect free. Everything is recomputed on each call.
    """

    def compute(self, buckets: BucketMap, history: list[PracticeRecord]) -> ProgressStats:
        return ProgressStats(
            total_cards=sum(len(cards) for cards in buckets.values()),
            cards_by_bucket=self._count_by_bucket(buckets),
            success_rate=self._compute_success_rate(history),
            average_moves_per_card=self._compute_average_moves(history),
            total_practice_events=len(history),
        )

    def _count_by_bucket(self, buckets: BucketMap) -> dict[int, int]:
        """
        Card count per bucket, zero-filled from bucket 0 to the highest key.
        """
        max_bucket = max(buckets.keys(), default=NEW_CARD_BUCKET)
        counts = {bucket_num: 0 for bucket_num in range(max_bucket + 1)}
        for bucket_num, cards in buckets.items():
            counts[bucket_num] = len(cards)
        return counts

    def _compute_success_rate(self, history: list[PracticeRecord]) -> float:
        """
        Percentage of answers graded Easy or Hard.
        """
        if not history:
            return 0.0
        successes = sum(1 for record in history if record.difficulty in SUCCESS_GRADES)
        return successes / len(history) * 100

    def _compute_average_moves(self, history: list[PracticeRecord]) -> float:
        """
        Mean number of history entries per distinct card seen in the history.
        """
        moves = Counter(record.card_key for record in history)
        if not moves:
            return 0.0
        return sum(moves.values()) / len(moves)


def compute_progress(buckets: BucketMap, history: list[PracticeRecord]) -> ProgressStats:
    """Compute progress statistics with the default calculator."""
    return ProgressCalculator().compute(buckets, history)
