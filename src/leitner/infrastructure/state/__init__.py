# Infrastructure State Adapters Package
from .in_memory import InMemoryStateRepository

__all__ = ["InMemoryStateRepository"]
