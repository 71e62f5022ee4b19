"""Exceptions raised at the boundary around the scheduling core."""


class LeitnerError(Exception):
    """Base class for all application errors."""


class CardNotFoundError(LeitnerError):
    def __init__(self, front: str, back: str):
        self.front = front
        self.back = back
        super().__init__("Card not found")


class DuplicateCardError(LeitnerError):
    def __init__(self, front: str, back: str):
        self.front = front
        self.back = back
        super().__init__(f"Card already exists: {front!r}")


class DeckFileError(LeitnerError):
    """A deck file could not be read or is malformed."""
