"""Common bot strategy interfaces."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from whot.cards import Card, REQUESTABLE_SHAPES, Shape
from whot.service import MoveDecision


def choose_shape(hand: Sequence[Card]) -> Shape:
    """Return the non-wild shape the hand holds most of (circle on ties or an all-whot hand)."""
    counts = Counter(card.shape for card in hand if not card.is_wild)
    return max(REQUESTABLE_SHAPES, key=lambda shape: (counts[shape], -REQUESTABLE_SHAPES.index(shape)))


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def choose_move(
        self,
        hand: Sequence[Card],
        legal_moves: Sequence[Card],
        top_card: Card,
        requested_shape: Optional[Shape],
    ) -> MoveDecision:
        """Return the card to play, or a decision without a card to draw."""
        if not legal_moves:
            return MoveDecision()
        return self.decide(legal_moves[0], hand)

    def decide(self, card: Card, hand: Sequence[Card]) -> MoveDecision:
        if not card.is_wild:
            return MoveDecision(card=card)
        remaining = [other for other in hand if other.uid != card.uid]
        return MoveDecision(card=card, requested_shape=choose_shape(remaining))
