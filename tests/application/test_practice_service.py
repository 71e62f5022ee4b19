import threading

import pytest

from leitner.application.practice_service import PracticeService
from leitner.domain.errors import CardNotFoundError, DuplicateCardError
from leitner.domain.models import AnswerDifficulty, Flashcard
from leitner.infrastructure.state import InMemoryStateRepository


@pytest.fixture
def repo(card_a, card_b):
    return InMemoryStateRepository(initial_cards=[card_a, card_b])


@pytest.fixture
def service(repo):
    return PracticeService(repo, clock=lambda: 12.5)


def test_practice_session_day_zero(service, card_a, card_b):
    session = service.get_practice_session()
    assert session.day == 0
    assert session.cards == [card_a, card_b]


def test_record_answer_moves_card_and_logs(service, repo, card_a):
    record = service.record_answer("Front 1", "Back 1", AnswerDifficulty.Easy)

    assert record.previous_bucket == 0
    assert record.new_bucket == 1
    assert record.timestamp == 12_500
    assert repo.find_card_bucket(card_a) == 1
    assert repo.get_history() == [record]


def test_record_answer_unknown_card(service, repo):
    with pytest.raises(CardNotFoundError):
        service.record_answer("nope", "nope", AnswerDifficulty.Easy)
    assert repo.get_history() == []


def test_record_answer_keeps_previous_snapshot(service, repo, card_a):
    before = repo.get_buckets()
    service.record_answer("Front 1", "Back 1", AnswerDifficulty.Easy)

    assert card_a in before[0]
    assert repo.get_buckets() is not before


def test_promoted_card_follows_interval(service, card_a, card_b):
    service.record_answer("Front 1", "Back 1", AnswerDifficulty.Easy)  # -> bucket 1
    service.advance_day()  # day 1

    assert service.get_practice_session().cards == [card_b]

    service.advance_day()  # day 2
    assert service.get_practice_session().cards == [card_a, card_b]


def test_get_hint(service):
    assert service.get_hint("Front 1", "Back 1") == "Hint 1"
    assert service.get_hint("Front 2", "Back 2") == "No hint available for this card."
    with pytest.raises(CardNotFoundError):
        service.get_hint("x", "y")


def test_progress(service):
    service.record_answer("Front 1", "Back 1", AnswerDifficulty.Easy)
    service.record_answer("Front 2", "Back 2", AnswerDifficulty.Wrong)

    stats = service.get_progress()
    assert stats.total_cards == 2
    assert stats.cards_by_bucket == {0: 1, 1: 1}
    assert stats.success_rate == 50.0
    assert stats.total_practice_events == 2


def test_advance_day(service):
    assert service.advance_day() == 1
    assert service.advance_day() == 2


def test_add_card(service, repo):
    card = Flashcard("New", "Card", tags=("t",))
    service.add_card(card)

    assert repo.find_card_bucket(card) == 0
    with pytest.raises(DuplicateCardError):
        service.add_card(Flashcard("New", "Card"))


def test_add_card_without_bucket_zero(card_a):
    repo = InMemoryStateRepository()
    repo.set_buckets({2: {card_a}})
    service = PracticeService(repo)

    card = Flashcard("New", "Card")
    service.add_card(card)
    assert repo.get_buckets() == {0: {card}, 2: {card_a}}


def test_list_cards(service, card_a, card_b):
    service.record_answer("Front 2", "Back 2", AnswerDifficulty.Easy)
    assert service.list_cards() == [(0, card_a), (1, card_b)]


def test_concurrent_answers_keep_every_card(repo):
    cards = [Flashcard(f"q{i}", f"a{i}") for i in range(50)]
    service = PracticeService(InMemoryStateRepository(initial_cards=cards))

    threads = [
        threading.Thread(
            target=service.record_answer, args=(c.front, c.back, AnswerDifficulty.Easy)
        )
        for c in cards
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stats = service.get_progress()
    assert stats.total_cards == 50
    assert stats.cards_by_bucket == {0: 0, 1: 50}
    assert len(service.get_history()) == 50
