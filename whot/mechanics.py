"""Legal move evaluation for Whot!."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, Shape


def is_legal(candidate: Card, top_card: Card, requested_shape: Optional[Shape] = None) -> bool:
    """Return True if ``candidate`` may be played onto ``top_card``.

    A whot card is always playable. While a shape is requested, only that
    shape (or another whot) is accepted and rank is ignored.
    """
    if candidate.is_wild:
        return True
    if requested_shape is not None:
        return candidate.shape is requested_shape
    return candidate.shape is top_card.shape or candidate.rank == top_card.rank


def legal_moves(hand: Iterable[Card], top_card: Card, requested_shape: Optional[Shape] = None) -> List[Card]:
    """Return the cards in ``hand`` that are legal, in hand order."""
    return [card for card in hand if is_legal(card, top_card, requested_shape)]
