"""Baseline greedy bot."""

from __future__ import annotations

from typing import Optional, Sequence

from whot.cards import Card, GENERAL_MARKET, HOLD_ON, PICK_THREE, PICK_TWO, SUSPENSION, Shape
from whot.service import MoveDecision

from .base import BotStrategy

# Higher is played first; ranks missing here fall back to face value.
SPECIAL_PRIORITY = {
    PICK_THREE: 4,
    PICK_TWO: 3,
    SUSPENSION: 2,
    GENERAL_MARKET: 2,
    HOLD_ON: 1,
}


def _priority(card: Card) -> tuple[int, int, int]:
    if card.is_wild:
        return (0, 0, 0)
    return (1, SPECIAL_PRIORITY.get(card.rank, 0), card.rank)


class GreedyBot(BotStrategy):
    """Dump disruptive specials first, then high numbers; hold whot cards back."""

    name = "Greedy"

    def choose_move(
        self,
        hand: Sequence[Card],
        legal_moves: Sequence[Card],
        top_card: Card,
        requested_shape: Optional[Shape],
    ) -> MoveDecision:
        if not legal_moves:
            return MoveDecision()
        best = max(legal_moves, key=_priority)
        return self.decide(best, hand)
