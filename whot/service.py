"""Convenience service layer for request handlers and agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .cards import Card, Shape, card_label, serialize_card
from .config import EngineSettings
from .game import GameMode, SessionSnapshot, parse_mode
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveDecision:
    """A policy's answer: a card to play, or None to draw."""

    card: Optional[Card] = None
    requested_shape: Optional[Shape] = None

    @property
    def draws(self) -> bool:
        return self.card is None


class MovePolicy(Protocol):
    def choose_move(
        self,
        hand: Sequence[Card],
        legal_moves: Sequence[Card],
        top_card: Card,
        requested_shape: Optional[Shape],
    ) -> MoveDecision:
        ...


@dataclass
class ParticipantSummary:
    participant_id: str
    hand_size: int


@dataclass
class SessionView:
    session_id: str
    mode: str
    phase: str
    active_participant: str
    requested_shape: Optional[str]
    winner: Optional[str]
    message: Optional[str]
    draw_pile_count: int
    discard_top: dict
    discard_top_label: str
    participants: list[ParticipantSummary]
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]


def build_view(snapshot: SessionSnapshot, perspective: Optional[str] = None) -> SessionView:
    visible: List[Card] = []
    for view in snapshot.participants:
        if view.participant_id == perspective:
            visible = list(view.hand or ())
    return SessionView(
        session_id=snapshot.session_id,
        mode=snapshot.mode.value,
        phase=snapshot.phase.name.lower(),
        active_participant=snapshot.active_participant,
        requested_shape=snapshot.requested_shape.value if snapshot.requested_shape else None,
        winner=snapshot.winner,
        message=snapshot.last_move_message,
        draw_pile_count=snapshot.draw_pile_count,
        discard_top=serialize_card(snapshot.discard_top),
        discard_top_label=card_label(snapshot.discard_top),
        participants=[
            ParticipantSummary(participant_id=view.participant_id, hand_size=view.hand_size)
            for view in snapshot.participants
        ],
        hand=[serialize_card(card) for card in visible],
        hand_labels=[card_label(card) for card in visible],
        legal_moves=[serialize_card(card) for card in snapshot.legal_moves],
        legal_move_labels=[card_label(card) for card in snapshot.legal_moves],
    )


class GameService:
    """Facade around SessionRegistry for HTTP handlers and bots."""

    def __init__(self, registry: Optional[SessionRegistry] = None, settings: Optional[EngineSettings] = None) -> None:
        self.registry = registry or SessionRegistry()
        self.settings = settings or EngineSettings()

    # Session lifecycle -------------------------------------------------

    def start_session(
        self,
        participant_ids: Optional[Sequence[str]] = None,
        mode: "GameMode | str" = GameMode.PRACTICE,
        *,
        seed: Optional[int] = None,
        perspective: Optional[str] = None,
    ) -> SessionView:
        game_mode = parse_mode(mode)
        if not participant_ids:
            if game_mode is not GameMode.PRACTICE:
                raise ValueError(f"{game_mode.value} games need participant ids.")
            participant_ids = [self.settings.practice_human_id, self.settings.practice_bot_id]
        session_id = self.registry.create(
            participant_ids,
            game_mode,
            seed=seed,
            hand_size=self.settings.hand_size,
        )
        return self.get_session_view(session_id, perspective)

    def cleanup(self) -> list[str]:
        return self.registry.cleanup_stale(self.settings.session_ttl_seconds)

    # Actions -----------------------------------------------------------

    def play_card(
        self,
        session_id: str,
        participant_id: str,
        card_uid: str,
        requested_shape: "Shape | str | None" = None,
    ) -> SessionView:
        snapshot = self.registry.play_card(session_id, participant_id, card_uid, requested_shape)
        return build_view(snapshot, participant_id)

    def draw_card(self, session_id: str, participant_id: str) -> SessionView:
        snapshot = self.registry.draw_card(session_id, participant_id)
        return build_view(snapshot, participant_id)

    def run_bot_turns(
        self,
        session_id: str,
        bot_id: str,
        policy: MovePolicy,
        *,
        perspective: Optional[str] = None,
    ) -> SessionView:
        """Let ``policy`` act for ``bot_id`` until another participant is up.

        Replays (hold on, whot, suspension in a two-player game) keep the loop
        going. The whole chain runs under the session lock.
        """
        with self.registry.locked(session_id) as session:
            state = session.state
            for _ in range(self.settings.max_bot_moves):
                if state.is_finished() or state.current_player != bot_id:
                    break
                hand = state.hand(bot_id).cards()
                moves = state.available_moves(bot_id)
                decision = policy.choose_move(hand, moves, state.top_card, state.requested_shape)
                if decision.card is None:
                    state.draw_card(bot_id)
                else:
                    state.play_card(bot_id, decision.card.uid, decision.requested_shape)
                session.touch()
                logger.debug("Bot %s: %s", bot_id, state.last_move_message)
            else:
                logger.warning("Bot %s hit the %d move limit in %s", bot_id, self.settings.max_bot_moves, session_id)
            snapshot = session.snapshot(perspective)
        return build_view(snapshot, perspective)

    # Views -------------------------------------------------------------

    def get_session_view(self, session_id: str, perspective: Optional[str] = None) -> SessionView:
        return build_view(self.registry.snapshot(session_id, perspective), perspective)
