from leitner.domain.models import (
    AnswerDifficulty,
    Flashcard,
    PracticeRecord,
    ProgressStats,
)


def test_flashcard_identity_is_front_and_back():
    a = Flashcard("Front", "Back", hint="one", tags=("x",))
    b = Flashcard("Front", "Back", hint="two")

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert Flashcard("Front", "Other") != a


def test_flashcard_to_dict():
    card = Flashcard("Q", "A", tags=("geo", "eu"))
    assert card.to_dict() == {"front": "Q", "back": "A", "hint": None, "tags": ["geo", "eu"]}


def test_difficulty_values():
    assert [d.value for d in AnswerDifficulty] == [0, 1, 2, 3]
    assert AnswerDifficulty(3) is AnswerDifficulty.Hard


def test_practice_record_to_dict_uses_camel_case():
    record = PracticeRecord("Q", "A", 1000, AnswerDifficulty.Easy, 0, 1)

    assert record.card_key == ("Q", "A")
    assert record.to_dict() == {
        "cardFront": "Q",
        "cardBack": "A",
        "timestamp": 1000,
        "difficulty": 1,
        "previousBucket": 0,
        "newBucket": 1,
    }


def test_progress_stats_to_dict():
    stats = ProgressStats(2, {0: 1, 1: 1}, 50.0, 1.5, 4)
    assert stats.to_dict() == {
        "totalCards": 2,
        "cardsByBucket": {0: 1, 1: 1},
        "successRate": 50.0,
        "averageMovesPerCard": 1.5,
        "totalPracticeEvents": 4,
    }
