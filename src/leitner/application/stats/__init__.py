# Application Stats Package
from .progress_calculator import ProgressCalculator, compute_progress
from .service import ProgressService

__all__ = ["ProgressCalculator", "ProgressService", "compute_progress"]
