"""
Leitner scheduling core.

Converts bucket assignments into a dense per-bucket view, picks the cards
due on a given day and moves cards between buckets after an answer.

Every function here is total and side-effect free: inputs are never
mutated and new bucket snapshots are returned instead.
"""

from leitner.domain.constants import NEW_CARD_BUCKET, NO_HINT_MESSAGE
from leitner.domain.models import AnswerDifficulty, BucketMap, Flashcard


def to_bucket_sets(buckets: BucketMap) -> list[set[Flashcard]]:
    """
    Convert a bucket map into a list of sets indexed by bucket number.

    Buckets below the highest occupied number that are missing from the map
    become empty sets, so the list never has holes. An empty map yields a
    single empty bucket 0.
    """
    max_bucket = max(buckets.keys(), default=NEW_CARD_BUCKET)

    result: list[set[Flashcard]] = [set() for _ in range(max_bucket + 1)]
    for bucket_num, cards in buckets.items():
        result[bucket_num] = set(cards)

    return result


def is_bucket_due(bucket_num: int, day: int) -> bool:
    """Bucket 0 is due every day; bucket n is due when day is a multiple of 2**n."""
    if bucket_num == NEW_CARD_BUCKET:
        return True
    return day % (2**bucket_num) == 0


def practice(bucket_sets: list[set[Flashcard]], day: int) -> set[Flashcard]:
    """
    Determine which cards should be practiced on a given day.

    Day 0 is the first session, so every bucket is due on it.

    Args:
        bucket_sets: Dense bucket view, as built by ``to_bucket_sets``.
        day: Simulated day number.

    Returns:
        Union of the cards in every due bucket.
    """
    due: set[Flashcard] = set()
    for bucket_num, cards in enumerate(bucket_sets):
        if is_bucket_due(bucket_num, day):
            due.update(cards)
    return due


def find_bucket(buckets: BucketMap, card: Flashcard) -> int | None:
    """Return the bucket holding ``card``, or None. Linear in deck size."""
    for bucket_num, cards in buckets.items():
        if card in cards:
            return bucket_num
    return None


def next_bucket(current_bucket: int | None, difficulty: AnswerDifficulty) -> int:
    """
    Destination bucket for an answer.

    A card with no bucket is treated as sitting just below bucket 0, so a
    promotion lands it in bucket 1 and Hard leaves it in bucket 0.
    """
    if difficulty == AnswerDifficulty.Wrong:
        return NEW_CARD_BUCKET
    if difficulty == AnswerDifficulty.Hard:
        return NEW_CARD_BUCKET if current_bucket is None else current_bucket
    # Easy, Medium
    if current_bucket is None:
        return NEW_CARD_BUCKET + 1
    return current_bucket + 1


def update(buckets: BucketMap, card: Flashcard, difficulty: AnswerDifficulty) -> BucketMap:
    """
    Move a card to its next bucket based on the answer difficulty.

    Args:
        buckets: Current bucket snapshot. Left untouched.
        card: The answered card. It need not be in any bucket.
        difficulty: Grade given for the answer.

    Returns:
        A new bucket map in which ``card`` sits in exactly one bucket.
    """
    new_buckets: BucketMap = {num: set(cards) for num, cards in buckets.items()}

    current_bucket = find_bucket(new_buckets, card)
    if current_bucket is None:
        new_buckets.setdefault(NEW_CARD_BUCKET, set())
    else:
        new_buckets[current_bucket].discard(card)

    destination = next_bucket(current_bucket, difficulty)
    new_buckets.setdefault(destination, set()).add(card)

    return new_buckets


def get_hint(card: Flashcard) -> str:
    """Return the card's hint, or a fixed message when it has none."""
    if card.hint:
        return card.hint
    return NO_HINT_MESSAGE
