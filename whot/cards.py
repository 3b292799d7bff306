"""Card-related data structures and helpers for Whot!."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional


class Shape(Enum):
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    CROSS = "cross"
    SQUARE = "square"
    STAR = "star"
    WHOT = "whot"

    def __str__(self) -> str:
        return self.value


# Shapes a player may name after a whot card.
REQUESTABLE_SHAPES: tuple[Shape, ...] = (
    Shape.CIRCLE,
    Shape.TRIANGLE,
    Shape.CROSS,
    Shape.SQUARE,
    Shape.STAR,
)

WHOT_RANK = 20

HOLD_ON = 1
PICK_TWO = 2
PICK_THREE = 5
SUSPENSION = 8
GENERAL_MARKET = 14

# Ranks that trigger a side effect; never used to seed the discard pile.
SPECIAL_RANKS: frozenset[int] = frozenset(
    {HOLD_ON, PICK_TWO, PICK_THREE, SUSPENSION, GENERAL_MARKET, WHOT_RANK}
)


@dataclass(frozen=True)
class Card:
    """Immutable card instance.

    ``uid`` identifies this physical card within a deck instance; two whot
    cards share shape and rank but never a uid. ``catalog_id`` is the card's
    fixed position in the printed catalog.
    """

    uid: str
    shape: Shape
    rank: int
    catalog_id: int = 0

    @property
    def is_wild(self) -> bool:
        return self.shape is Shape.WHOT


def parse_shape(value: "Shape | str | None") -> Optional[Shape]:
    """Accept a Shape, its lowercase name, or None."""
    if value is None or isinstance(value, Shape):
        return value
    try:
        return Shape(value.lower())
    except ValueError as exc:
        raise ValueError(f"Unknown shape: {value!r}") from exc


def serialize_card(card: Card) -> dict[str, object]:
    return {
        "uid": card.uid,
        "id": card.catalog_id,
        "shape": card.shape.value,
        "number": card.rank,
    }


def deserialize_card(payload: Mapping[str, object]) -> Card:
    shape = parse_shape(str(payload["shape"]))
    if shape is None:
        raise ValueError("Card payload is missing a shape.")
    return Card(
        uid=str(payload["uid"]),
        shape=shape,
        rank=int(payload["number"]),  # type: ignore[arg-type]
        catalog_id=int(payload.get("id", 0)),  # type: ignore[arg-type]
    )


def card_label(card: Card) -> str:
    if card.is_wild:
        return "Whot 20"
    return f"{card.shape.value.title()} {card.rank}"


class Hand:
    """Cards held by one participant, keyed by uid.

    Iteration follows the order cards were received.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: Dict[str, Card] = {}
        for card in cards:
            self.add(card)

    def add(self, card: Card) -> None:
        if card.uid in self._cards:
            raise ValueError(f"Card {card.uid} is already in hand.")
        self._cards[card.uid] = card

    def remove(self, uid: str) -> Card:
        return self._cards.pop(uid)

    def get(self, uid: str) -> Optional[Card]:
        return self._cards.get(uid)

    def cards(self) -> List[Card]:
        return list(self._cards.values())

    def __contains__(self, uid: object) -> bool:
        return uid in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards.values()))

    def __len__(self) -> int:
        return len(self._cards)
