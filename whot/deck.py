"""Deck creation utilities for Whot!."""

from __future__ import annotations

import uuid
from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Shape, WHOT_RANK

SHAPE_RANKS: dict[Shape, tuple[int, ...]] = {
    Shape.CIRCLE: (1, 2, 3, 4, 5, 7, 8, 10, 11, 12, 13, 14),
    Shape.TRIANGLE: (1, 2, 3, 4, 5, 7, 8, 10, 11, 12, 13, 14),
    Shape.CROSS: (1, 2, 3, 5, 7, 10, 11, 13, 14),
    Shape.SQUARE: (1, 2, 3, 5, 7, 10, 11, 13, 14),
    Shape.STAR: (1, 2, 3, 4, 5, 7, 8),
}
WHOT_CARD_COUNT = 5


def build_catalog() -> List[Tuple[Shape, int]]:
    """Return the fixed (shape, rank) catalog in printed order."""
    catalog = [(shape, rank) for shape, ranks in SHAPE_RANKS.items() for rank in ranks]
    catalog.extend((Shape.WHOT, WHOT_RANK) for _ in range(WHOT_CARD_COUNT))
    return catalog


DECK_SIZE = len(build_catalog())


def build_deck() -> List[Card]:
    """Return a fresh, ordered deck instance.

    Every call mints new uids, so decks of concurrently running games never
    share card identities.
    """
    return [
        Card(uid=uuid.uuid4().hex, shape=shape, rank=rank, catalog_id=index)
        for index, (shape, rank) in enumerate(build_catalog(), start=1)
    ]


def shuffle(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``; the input is left untouched."""
    shuffled = list(cards)
    (rng or Random()).shuffle(shuffled)
    return shuffled


def new_shuffled_deck(rng: Optional[Random] = None) -> List[Card]:
    return shuffle(build_deck(), rng)


def validate_deck(cards: Sequence[Card]) -> None:
    """Check that an injected deck ordering is a complete deck instance."""
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")
    if len({card.uid for card in cards}) != DECK_SIZE:
        raise ValueError("Deck card uids must be unique.")
    composition = sorted((card.shape.value, card.rank) for card in cards)
    expected = sorted((shape.value, rank) for shape, rank in build_catalog())
    if composition != expected:
        raise ValueError("Deck does not match the Whot! catalog.")


def _starter_pack() -> Tuple[Card, ...]:
    entries = [
        (1, Shape.CIRCLE, 5),
        (2, Shape.TRIANGLE, 8),
        (3, Shape.CROSS, 2),
        (4, Shape.SQUARE, 10),
        (5, Shape.STAR, 1),
        (6, Shape.STAR, 4),
        (50, Shape.WHOT, WHOT_RANK),
        (8, Shape.TRIANGLE, 11),
    ]
    return tuple(
        Card(uid=f"starter-{position}", shape=shape, rank=rank, catalog_id=catalog_id)
        for position, (catalog_id, shape, rank) in enumerate(entries, start=1)
    )


# Cards granted to new accounts; display-only, never dealt into a game.
STARTER_PACK: Tuple[Card, ...] = _starter_pack()
