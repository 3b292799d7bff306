"""Game state management for Whot!."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Mapping, Optional, Sequence

from .cards import Card, Hand, Shape, card_label
from .effects import Effect, check_requested_shape, resolve_effect
from .errors import AlreadyTerminal, CardNotOwned, IllegalMove, WrongTurn
from .mechanics import is_legal, legal_moves
from .piles import Piles
from .turns import TurnScheduler

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    IN_PROGRESS = auto()
    TERMINAL = auto()


@dataclass(frozen=True)
class MoveRecord:
    participant: str
    action: str
    card: Optional[Card] = None
    cards_drawn: int = 0
    effect: Optional[Effect] = None


@dataclass
class GameState:
    participants: Sequence[str]
    hands: Dict[str, Hand]
    piles: Piles
    turns: TurnScheduler = field(init=False)
    requested_shape: Optional[Shape] = None
    winner: Optional[str] = None
    last_move_message: Optional[str] = None
    history: List[MoveRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.participants = tuple(self.participants)
        if set(self.hands) != set(self.participants):
            raise ValueError("Every participant needs exactly one hand.")
        self.turns = TurnScheduler(self.participants)

    # Queries -----------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return GamePhase.TERMINAL if self.winner is not None else GamePhase.IN_PROGRESS

    @property
    def current_player(self) -> str:
        return self.turns.current()

    @property
    def top_card(self) -> Card:
        return self.piles.top_card

    def hand(self, player: str) -> Hand:
        try:
            return self.hands[player]
        except KeyError as exc:
            raise WrongTurn(f"{player} is not part of this game.") from exc

    def available_moves(self, player: str) -> List[Card]:
        if player != self.current_player:
            raise WrongTurn("Not this player's turn.")
        return legal_moves(self.hand(player), self.top_card, self.requested_shape)

    def is_finished(self) -> bool:
        return self.winner is not None

    def hand_sizes(self) -> Dict[str, int]:
        return {player: len(self.hands[player]) for player in self.participants}

    def total_cards(self) -> int:
        return sum(len(hand) for hand in self.hands.values()) + self.piles.card_count()

    # Moves -------------------------------------------------------------

    def play_card(self, player: str, card_uid: str, requested_shape: "Shape | str | None" = None) -> None:
        """Play ``card_uid`` from ``player``'s hand.

        Every check runs before the first mutation, so a rejected play leaves
        the state unchanged.
        """
        self._ensure_turn(player)
        hand = self.hands[player]
        card = hand.get(card_uid)
        if card is None:
            raise CardNotOwned("Card not in hand.")
        top = self.top_card
        if not is_legal(card, top, self.requested_shape):
            if self.requested_shape is not None:
                raise IllegalMove(f"Invalid move. {self.requested_shape} was requested, not {card_label(card)}.")
            raise IllegalMove(f"Invalid move. You can't play a {card_label(card)} on a {card_label(top)}.")
        shape = check_requested_shape(card, requested_shape)

        hand.remove(card.uid)
        self.piles.discard(card)
        self.requested_shape = None
        message = f"{player} played a {card_label(card)}."

        if not hand:
            self.winner = player
            self.last_move_message = f"{player} has won the game!"
            self.history.append(MoveRecord(player, "play", card=card))
            logger.info("%s won after playing %s", player, card_label(card))
            return

        outcome = resolve_effect(
            card,
            actor=player,
            hands=self.hands,
            piles=self.piles,
            turns=self.turns,
            requested_shape=shape,
        )
        self.requested_shape = outcome.requested_shape
        self.last_move_message = message + outcome.message
        self.history.append(MoveRecord(player, "play", card=card, effect=outcome.effect))

    def draw_card(self, player: str) -> List[Card]:
        """Draw one card and pass the turn. Drawing never grants a replay."""
        self._ensure_turn(player)
        drawn = self.piles.draw_into(self.hands[player], 1)
        self.turns.advance()
        if drawn:
            self.last_move_message = f"{player} drew a card."
        else:
            self.last_move_message = f"{player} could not draw; the market is empty."
        self.history.append(MoveRecord(player, "draw", cards_drawn=len(drawn)))
        return drawn

    def _ensure_turn(self, player: str) -> None:
        if self.winner is not None:
            raise AlreadyTerminal("Game has already ended.")
        if player != self.current_player:
            raise WrongTurn("Not your turn.")


def deal_state(
    participants: Sequence[str],
    hands: Mapping[str, Sequence[Card]],
    piles: Piles,
) -> GameState:
    return GameState(
        participants=participants,
        hands={player: Hand(hands[player]) for player in participants},
        piles=piles,
    )
