from bots.base import BotStrategy, choose_shape
from bots.baseline_greedy import GreedyBot
from bots.bot_arena import run_match
from bots.random_bot import RandomBot
from whot.cards import Card, Shape


def card(shape: Shape, rank: int, tag: str = "") -> Card:
    return Card(uid=f"{shape.value}-{rank}{tag}", shape=shape, rank=rank)


def test_run_match_executes():
    results = run_match([GreedyBot(), RandomBot(seed=1)], seed=7)
    assert set(results["hand_sizes"]) == {"bot0", "bot1"}
    assert results["moves"] > 0
    if results["winner"] is not None:
        assert results["hand_sizes"][results["winner"]] == 0


def test_many_seeded_matches_conserve_cards():
    # run_match raises if the card count ever drifts.
    for seed in range(15):
        bots = [RandomBot(seed=seed), GreedyBot(), BotStrategy()]
        results = run_match(bots, seed=seed, max_turns=400)
        assert results["moves"] <= 400


def test_choose_shape_prefers_most_common():
    hand = [card(Shape.STAR, 1), card(Shape.STAR, 3), card(Shape.CROSS, 2), card(Shape.WHOT, 20)]
    assert choose_shape(hand) is Shape.STAR
    assert choose_shape([card(Shape.WHOT, 20)]) is Shape.CIRCLE


def test_greedy_prefers_specials_and_holds_whot():
    whot = card(Shape.WHOT, 20)
    pick_three = card(Shape.CIRCLE, 5)
    high = card(Shape.CIRCLE, 13)
    bot = GreedyBot()

    decision = bot.choose_move([whot, high, pick_three], [whot, high, pick_three], card(Shape.CIRCLE, 9), None)
    assert decision.card == pick_three

    decision = bot.choose_move([whot, card(Shape.STAR, 3)], [whot], card(Shape.CIRCLE, 9), None)
    assert decision.card == whot
    assert decision.requested_shape is Shape.STAR


def test_bots_draw_without_legal_moves():
    for bot in (BotStrategy(), GreedyBot(), RandomBot(seed=2)):
        decision = bot.choose_move([card(Shape.STAR, 3)], [], card(Shape.CIRCLE, 9), None)
        assert decision.draws


def test_random_bot_always_names_a_shape_for_whot():
    whot = card(Shape.WHOT, 20)
    bot = RandomBot(seed=3)
    for _ in range(10):
        decision = bot.choose_move([whot], [whot], card(Shape.CIRCLE, 9), None)
        assert decision.requested_shape is not None
        assert decision.requested_shape is not Shape.WHOT
