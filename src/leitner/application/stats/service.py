"""
Progress Stats Service — Application layer orchestrator.

Reads the current snapshot from the state repository and hands it to the calculator.
"""

import logging

from leitner.domain.models import ProgressStats
from leitner.domain.ports import StateRepository

from .progress_calculator import ProgressCalculator

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Application service for learning progress.

    Follows Dependency Inversion: depends on the StateRepository abstraction,
    not a concrete state store.
    """

    def __init__(
        self,
        state_repo: StateRepository,
        calculator: ProgressCalculator | None = None,
    ):
        """
        Args:
            state_repo: The repository (port) holding buckets and history.
            calculator: Optional custom calculator; uses default if not provided.
        """
        self._repo = state_repo
        self._calc = calculator or ProgressCalculator()

    def get_progress(self) -> ProgressStats:
        stats = self._calc.compute(self._repo.get_buckets(), self._repo.get_history())
        logger.debug(
            f"Progress: {stats.total_cards} cards, {stats.total_practice_events} events"
        )
        return stats
