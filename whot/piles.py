"""Draw and discard pile handling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .cards import Card, Hand
from .deck import shuffle

logger = logging.getLogger(__name__)


class PileError(RuntimeError):
    """Raised when pile operations violate the table layout."""


@dataclass
class Piles:
    """The face-down draw pile and the face-up discard pile.

    The draw pile is consumed from the front; the last discard is the top card.
    """

    draw_pile: List[Card]
    discard_pile: List[Card] = field(default_factory=list)
    rng: Random = field(default_factory=Random)

    def __post_init__(self) -> None:
        self.draw_pile = list(self.draw_pile)
        self.discard_pile = list(self.discard_pile)

    @property
    def top_card(self) -> Card:
        if not self.discard_pile:
            raise PileError("Discard pile is empty.")
        return self.discard_pile[-1]

    def discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def recycle(self) -> bool:
        """Shuffle every discard except the top card back into the draw pile.

        Returns False when there is nothing underneath the top card.
        """
        if len(self.discard_pile) <= 1:
            return False
        top = self.discard_pile.pop()
        recycled = shuffle(self.discard_pile, self.rng)
        self.draw_pile.extend(recycled)
        self.discard_pile = [top]
        logger.debug("Recycled %d discards into the draw pile", len(recycled))
        return True

    def draw_one(self) -> Optional[Card]:
        if not self.draw_pile and not self.recycle():
            return None
        return self.draw_pile.pop(0)

    def draw_into(self, hand: Hand, count: int) -> List[Card]:
        """Move up to ``count`` cards into ``hand``.

        Stops early once both piles are exhausted; a short draw is not an error.
        """
        drawn: List[Card] = []
        for _ in range(count):
            card = self.draw_one()
            if card is None:
                logger.info("Short draw: delivered %d of %d cards", len(drawn), count)
                break
            hand.add(card)
            drawn.append(card)
        return drawn

    def take_starter(self, excluded_ranks: Sequence[int] | frozenset[int]) -> Card:
        """Remove the first draw-pile card whose rank is not excluded.

        Cards scanned past keep their relative order. If every remaining card
        is excluded, the remainder is reshuffled and its top card taken anyway.
        """
        for index, card in enumerate(self.draw_pile):
            if card.rank not in excluded_ranks:
                return self.draw_pile.pop(index)
        if not self.draw_pile:
            raise PileError("No cards left to start the discard pile.")
        self.draw_pile = shuffle(self.draw_pile, self.rng)
        return self.draw_pile.pop()

    def card_count(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)
