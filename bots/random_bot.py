"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from whot.cards import Card, REQUESTABLE_SHAPES, Shape
from whot.service import MoveDecision

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(
        self,
        hand: Sequence[Card],
        legal_moves: Sequence[Card],
        top_card: Card,
        requested_shape: Optional[Shape],
    ) -> MoveDecision:
        if not legal_moves:
            return MoveDecision()
        card = self._rng.choice(list(legal_moves))
        if card.is_wild:
            return MoveDecision(card=card, requested_shape=self._rng.choice(REQUESTABLE_SHAPES))
        return MoveDecision(card=card)
