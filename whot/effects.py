"""Special card effects, keyed by rank."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional

from .cards import (
    Card,
    GENERAL_MARKET,
    HOLD_ON,
    Hand,
    PICK_THREE,
    PICK_TWO,
    REQUESTABLE_SHAPES,
    SUSPENSION,
    Shape,
    WHOT_RANK,
    parse_shape,
)
from .errors import ShapeRequired
from .piles import Piles
from .turns import TurnScheduler

logger = logging.getLogger(__name__)


class Effect(Enum):
    NONE = "none"
    HOLD_ON = "hold_on"
    PICK_TWO = "pick_two"
    PICK_THREE = "pick_three"
    SUSPENSION = "suspension"
    GENERAL_MARKET = "general_market"
    WHOT = "whot"


@dataclass(frozen=True)
class EffectRule:
    effect: Effect
    # Cards the next participant draws (pick two / pick three).
    next_draws: int = 0
    # Cards every other participant draws (general market).
    others_draw: int = 0
    # How far the turn moves once the effect is applied; 0 means the actor replays.
    advance: int = 1


EFFECT_TABLE: Dict[int, EffectRule] = {
    HOLD_ON: EffectRule(Effect.HOLD_ON, advance=0),
    PICK_TWO: EffectRule(Effect.PICK_TWO, next_draws=2),
    PICK_THREE: EffectRule(Effect.PICK_THREE, next_draws=3),
    SUSPENSION: EffectRule(Effect.SUSPENSION, advance=2),
    GENERAL_MARKET: EffectRule(Effect.GENERAL_MARKET, others_draw=1),
    WHOT_RANK: EffectRule(Effect.WHOT, advance=0),
}

NO_EFFECT = EffectRule(Effect.NONE)


def rule_for(card: Card) -> EffectRule:
    return EFFECT_TABLE.get(card.rank, NO_EFFECT)


def check_requested_shape(card: Card, requested_shape: "Shape | str | None") -> Optional[Shape]:
    """Return the shape a whot card names, raising ShapeRequired unless it is concrete.

    Non-whot plays ignore any requested shape.
    """
    if not card.is_wild:
        return None
    if requested_shape is None:
        raise ShapeRequired("A shape must be requested when playing a whot card.")
    try:
        shape = parse_shape(requested_shape)
    except ValueError as exc:
        raise ShapeRequired(str(exc)) from exc
    if shape not in REQUESTABLE_SHAPES:
        raise ShapeRequired(f"Cannot request shape {shape}.")
    return shape


@dataclass
class EffectOutcome:
    effect: Effect
    requested_shape: Optional[Shape] = None
    drawn: Dict[str, int] = field(default_factory=dict)
    skipped: Optional[str] = None
    message: str = ""


def resolve_effect(
    card: Card,
    *,
    actor: str,
    hands: Mapping[str, Hand],
    piles: Piles,
    turns: TurnScheduler,
    requested_shape: Optional[Shape] = None,
) -> EffectOutcome:
    """Apply the side effect of ``card`` just played by ``actor`` and move the turn.

    Must run after the card reached the discard pile and while ``actor`` is
    still the scheduler's current participant.
    """
    rule = rule_for(card)
    outcome = EffectOutcome(effect=rule.effect)

    if rule.effect is Effect.WHOT:
        outcome.requested_shape = check_requested_shape(card, requested_shape)
        outcome.message = f" {actor} requests {outcome.requested_shape}."
    elif rule.effect is Effect.HOLD_ON:
        outcome.message = f" {actor} gets another turn."
    elif rule.next_draws:
        victim = turns.peek()
        drawn = piles.draw_into(hands[victim], rule.next_draws)
        outcome.drawn[victim] = len(drawn)
        word = "two" if rule.next_draws == 2 else "three"
        outcome.message = f" {victim} picks {word}."
    elif rule.effect is Effect.SUSPENSION:
        outcome.skipped = turns.peek()
        outcome.message = f" {outcome.skipped} is suspended."
    elif rule.others_draw:
        for other in turns.others():
            drawn = piles.draw_into(hands[other], rule.others_draw)
            outcome.drawn[other] = len(drawn)
        outcome.message = " General market! Other players draw one."

    if rule.advance:
        turns.advance(rule.advance)
    if rule.effect is not Effect.NONE:
        logger.debug("%s triggered %s", actor, rule.effect.value)
    return outcome
