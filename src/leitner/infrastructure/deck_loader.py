"""
Deck loader for seeding the card store from YAML files.

A deck is either a top-level list of cards or a mapping with a ``cards`` list:

    deck: Capitals
    cards:
      - front: Capital of France?
        back: Paris
        hint: Starts with P
        tags: [geo, europe]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from leitner.domain.errors import DeckFileError
from leitner.domain.models import Flashcard

logger = logging.getLogger(__name__)


@dataclass
class DeckCheckResult:
    """Outcome of parsing a deck: the valid cards and every problem found."""

    cards: list[Flashcard] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def check_deck_text(text: str) -> DeckCheckResult:
    """
    Parse deck YAML and collect problems instead of stopping at the first one.
    """
    result = DeckCheckResult()

    # Fix tabs (common user error)
    if "\t" in text:
        text = text.replace("\t", "  ")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        result.errors.append(f"Invalid YAML: {e}")
        return result

    if data is None:
        return result

    if isinstance(data, dict):
        raw_cards = data.get("cards", [])
    else:
        raw_cards = data

    if not isinstance(raw_cards, list):
        result.errors.append("'cards' must be a list")
        return result

    seen: set[tuple[str, str]] = set()
    for index, raw in enumerate(raw_cards, start=1):
        card = _parse_card(raw, index, result.errors)
        if card is None:
            continue
        if card.key in seen:
            result.errors.append(f"Card {index}: duplicate card {card.front!r}")
            continue
        seen.add(card.key)
        result.cards.append(card)

    return result


def _parse_card(raw: Any, index: int, errors: list[str]) -> Flashcard | None:
    if not isinstance(raw, dict):
        errors.append(f"Card {index}: expected a mapping, got {type(raw).__name__}")
        return None

    front = raw.get("front")
    back = raw.get("back")
    if not isinstance(front, str) or not front.strip():
        errors.append(f"Card {index}: 'front' is required")
        return None
    if not isinstance(back, str) or not back.strip():
        errors.append(f"Card {index}: 'back' is required")
        return None

    hint = raw.get("hint")
    if hint is not None and not isinstance(hint, str):
        errors.append(f"Card {index}: 'hint' must be a string")
        return None

    tags = raw.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        errors.append(f"Card {index}: 'tags' must be a list of strings")
        return None

    return Flashcard(front=front, back=back, hint=hint, tags=tuple(tags))


def check_deck(path: Path) -> DeckCheckResult:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return DeckCheckResult(errors=[f"Cannot read {path}: {e}"])
    return check_deck_text(text)


def load_deck(path: Path) -> list[Flashcard]:
    """
    Load every card from a deck file.

    Raises:
        DeckFileError: If the file is unreadable or contains any invalid card.
    """
    result = check_deck(path)
    if not result.ok:
        raise DeckFileError(f"{path}: " + "; ".join(result.errors))

    logger.info(f"Loaded {len(result.cards)} cards from {path}")
    return result.cards
