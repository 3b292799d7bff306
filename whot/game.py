"""Session creation and read-only snapshots for Whot!."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, SPECIAL_RANKS, Shape
from .deck import DECK_SIZE, new_shuffled_deck, validate_deck
from .piles import Piles
from .state import GamePhase, GameState, deal_state

logger = logging.getLogger(__name__)

DEFAULT_HAND_SIZE = 5
MIN_PARTICIPANTS = 2


class GameMode(Enum):
    PRACTICE = "practice"
    FREE = "free"
    STAKED = "staked"


def parse_mode(value: "GameMode | str") -> GameMode:
    if isinstance(value, GameMode):
        return value
    try:
        return GameMode(value.lower())
    except ValueError as exc:
        raise ValueError(f"Unknown game mode: {value!r}") from exc


def max_participants(hand_size: int = DEFAULT_HAND_SIZE) -> int:
    # One card must remain to start the discard pile.
    return (DECK_SIZE - 1) // hand_size


@dataclass(frozen=True)
class ParticipantView:
    participant_id: str
    hand_size: int
    hand: Optional[Tuple[Card, ...]]


@dataclass(frozen=True)
class SessionSnapshot:
    session_id: str
    mode: GameMode
    phase: GamePhase
    participants: Tuple[ParticipantView, ...]
    draw_pile_count: int
    discard_pile_count: int
    discard_top: Card
    active_participant: str
    requested_shape: Optional[Shape]
    winner: Optional[str]
    last_move_message: Optional[str]
    legal_moves: Tuple[Card, ...] = ()

    def participant(self, participant_id: str) -> ParticipantView:
        for view in self.participants:
            if view.participant_id == participant_id:
                return view
        raise KeyError(participant_id)


@dataclass
class GameSession:
    """One match: its state plus the bookkeeping around it."""

    session_id: str
    mode: GameMode
    state: GameState
    rng: Random = field(default_factory=Random)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.updated_at = time.time()

    def snapshot(self, perspective: Optional[str] = None) -> SessionSnapshot:
        """Project the session for ``perspective``.

        Only the perspective participant's hand is revealed; with no
        perspective every hand is.
        """
        state = self.state
        views = tuple(
            ParticipantView(
                participant_id=player,
                hand_size=len(state.hands[player]),
                hand=tuple(state.hands[player]) if perspective in (None, player) else None,
            )
            for player in state.participants
        )
        moves: Tuple[Card, ...] = ()
        if perspective is not None and not state.is_finished() and state.current_player == perspective:
            moves = tuple(state.available_moves(perspective))
        return SessionSnapshot(
            session_id=self.session_id,
            mode=self.mode,
            phase=state.phase,
            participants=views,
            draw_pile_count=len(state.piles.draw_pile),
            discard_pile_count=len(state.piles.discard_pile),
            discard_top=state.top_card,
            active_participant=state.current_player,
            requested_shape=state.requested_shape,
            winner=state.winner,
            last_move_message=state.last_move_message,
            legal_moves=moves,
        )


def create_session(
    participant_ids: Sequence[str],
    mode: "GameMode | str" = GameMode.PRACTICE,
    *,
    rng: Optional[Random] = None,
    seed: Optional[int] = None,
    deck: Optional[Sequence[Card]] = None,
    hand_size: int = DEFAULT_HAND_SIZE,
    session_id: Optional[str] = None,
) -> GameSession:
    """Shuffle, deal and seed the discard pile for a new match.

    ``deck`` fixes the card order instead of shuffling; hands are dealt from
    its front in participant order. The first participant acts first.
    """
    players = list(participant_ids)
    game_mode = parse_mode(mode)
    if len(players) < MIN_PARTICIPANTS:
        raise ValueError(f"A game needs at least {MIN_PARTICIPANTS} participants.")
    if len(set(players)) != len(players):
        raise ValueError("Participant ids must be unique.")
    if len(players) > max_participants(hand_size):
        raise ValueError(f"At most {max_participants(hand_size)} participants can be dealt {hand_size} cards.")

    if rng is None:
        rng = Random(seed)
    if deck is not None:
        cards = list(deck)
        validate_deck(cards)
    else:
        cards = new_shuffled_deck(rng)

    hands: Dict[str, List[Card]] = {}
    for index, player in enumerate(players):
        hands[player] = cards[index * hand_size : (index + 1) * hand_size]
    piles = Piles(draw_pile=cards[len(players) * hand_size :], rng=rng)
    piles.discard(piles.take_starter(SPECIAL_RANKS))

    state = deal_state(players, hands, piles)
    state.last_move_message = "Game started."
    session = GameSession(
        session_id=session_id or uuid.uuid4().hex,
        mode=game_mode,
        state=state,
        rng=rng,
    )
    logger.info(
        "Created %s session %s for %s",
        game_mode.value,
        session.session_id,
        ", ".join(players),
    )
    return session
