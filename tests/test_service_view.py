import pytest

from bots.baseline_greedy import GreedyBot
from whot.cards import Shape
from whot.config import EngineSettings
from whot.deck import build_deck
from whot.errors import ShapeRequired
from whot.game import create_session
from whot.service import GameService, MoveDecision


class ScriptedBot:
    """Plays the first legal card, requesting stars for whot cards."""

    def __init__(self) -> None:
        self.calls = 0

    def choose_move(self, hand, legal_moves, top_card, requested_shape):
        self.calls += 1
        if not legal_moves:
            return MoveDecision()
        card = legal_moves[0]
        return MoveDecision(card=card, requested_shape=Shape.STAR if card.is_wild else None)


class ForgetfulBot:
    def choose_move(self, hand, legal_moves, top_card, requested_shape):
        wild = next((card for card in hand if card.is_wild), None)
        return MoveDecision(card=wild or hand[0])


def test_practice_session_uses_default_participants():
    service = GameService()
    view = service.start_session(mode="practice", seed=1, perspective="player1")

    assert [p.participant_id for p in view.participants] == ["player1", "ai"]
    assert view.active_participant == "player1"
    assert view.phase == "in_progress"
    assert len(view.hand) == 5
    assert len(view.hand_labels) == 5
    assert view.message == "Game started."


def test_multiplayer_modes_need_participants():
    service = GameService()
    with pytest.raises(ValueError):
        service.start_session(mode="staked")


def test_hand_size_comes_from_settings():
    service = GameService(settings=EngineSettings(hand_size=7))
    view = service.start_session(["x", "y", "z"], "free", seed=2, perspective="z")
    assert [p.hand_size for p in view.participants] == [7, 7, 7]


def test_draw_and_view_visibility():
    service = GameService()
    view = service.start_session(["a", "b"], "free", seed=3)

    after = service.draw_card(view.session_id, "a")

    assert after.active_participant == "b"
    assert len(after.hand) == 6
    assert after.legal_moves == []

    as_b = service.get_session_view(view.session_id, "b")
    assert len(as_b.hand) == 5
    assert len(as_b.legal_moves) == len(as_b.legal_move_labels)


def test_play_card_through_service():
    # Catalog order: a holds circle 1-5, b holds circle 7-12, circle 13 starts the discard pile.
    service = GameService()
    session_id = service.registry.add(create_session(["a", "b"], "free", deck=build_deck()))
    view = service.get_session_view(session_id, "a")
    assert view.discard_top_label == "Circle 13"
    circle_three = next(card for card in view.hand if card["number"] == 3)
    assert circle_three in view.legal_moves

    played = service.play_card(session_id, "a", circle_three["uid"])

    assert played.discard_top["uid"] == circle_three["uid"]
    assert played.active_participant == "b"
    assert len(played.hand) == 4


def test_run_bot_turns_stops_when_human_is_up():
    service = GameService()
    view = service.start_session(mode="practice", seed=4)
    service.draw_card(view.session_id, "player1")
    bot = ScriptedBot()

    result = service.run_bot_turns(view.session_id, "ai", bot, perspective="player1")

    assert bot.calls >= 1
    assert result.winner is not None or result.active_participant == "player1"


def test_run_bot_turns_noop_when_not_bot_turn():
    service = GameService()
    view = service.start_session(mode="practice", seed=4)
    bot = ScriptedBot()

    result = service.run_bot_turns(view.session_id, "ai", GreedyBot())
    service.run_bot_turns(view.session_id, "ai", bot)

    assert bot.calls == 0
    assert result.active_participant == "player1"


def test_bad_policy_decisions_are_rejected():
    deck = build_deck()
    whot = next(card for card in deck if card.is_wild)
    deck.remove(whot)
    # player1 takes the first five cards, the bot's hand starts with a whot.
    deck = deck[:5] + [whot] + deck[5:]
    service = GameService()
    session_id = service.registry.add(create_session(["player1", "ai"], "practice", deck=deck))
    service.draw_card(session_id, "player1")
    before = service.registry.snapshot(session_id)

    with pytest.raises(ShapeRequired):
        service.run_bot_turns(session_id, "ai", ForgetfulBot())

    assert service.registry.snapshot(session_id) == before


def test_cleanup_evicts_idle_sessions():
    service = GameService(settings=EngineSettings(session_ttl_seconds=60))
    idle = service.start_session(mode="practice", seed=1).session_id
    active = service.start_session(mode="practice", seed=2).session_id
    service.registry.get(idle).updated_at -= 120

    assert service.cleanup() == [idle]
    assert service.registry.list_sessions() == [active]
