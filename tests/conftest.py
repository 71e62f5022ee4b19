import pytest

from leitner.domain.models import Flashcard


@pytest.fixture
def card_a():
    return Flashcard("Front 1", "Back 1", "Hint 1")


@pytest.fixture
def card_b():
    return Flashcard("Front 2", "Back 2")


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config
    monkeypatch.setenv("HOME", str(home))
    for var in ("LEITNER_HOST", "LEITNER_PORT", "LEITNER_DECK_FILE", "LEITNER_START_DAY"):
        monkeypatch.delenv(var, raising=False)
    return home
