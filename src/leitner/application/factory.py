"""
Service Factory
Centralizes wiring of the state repository and practice service from config.
"""

import logging

from leitner.application.config import AppConfig
from leitner.application.practice_service import PracticeService
from leitner.domain.ports import StateRepository
from leitner.infrastructure.deck_loader import load_deck
from leitner.infrastructure.state import InMemoryStateRepository

logger = logging.getLogger(__name__)


def get_state_repository(config: AppConfig) -> StateRepository:
    """
    Returns an in-memory repository, seeded from the configured deck file if any.

    Raises:
        DeckFileError: If the deck file is unreadable or invalid.
    """
    cards = load_deck(config.deck_file) if config.deck_file else []
    return InMemoryStateRepository(initial_cards=cards, start_day=config.start_day)


def get_practice_service(config: AppConfig) -> PracticeService:
    return PracticeService(get_state_repository(config))
