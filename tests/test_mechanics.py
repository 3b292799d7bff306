from whot.cards import Card, Shape
from whot.mechanics import is_legal, legal_moves


def card(shape: Shape, rank: int) -> Card:
    return Card(uid=f"{shape.value}-{rank}", shape=shape, rank=rank)


def test_shape_or_rank_match_without_request():
    top = card(Shape.CIRCLE, 9)
    assert is_legal(card(Shape.CIRCLE, 5), top, None)
    assert is_legal(card(Shape.STAR, 9), top, None)
    assert not is_legal(card(Shape.TRIANGLE, 5), top, None)


def test_requested_shape_overrides_top_card():
    top = card(Shape.CIRCLE, 9)
    assert not is_legal(card(Shape.TRIANGLE, 5), top, Shape.SQUARE)
    assert not is_legal(card(Shape.CIRCLE, 9), top, Shape.SQUARE)
    assert is_legal(card(Shape.SQUARE, 2), top, Shape.SQUARE)


def test_whot_is_always_legal():
    whot = card(Shape.WHOT, 20)
    assert is_legal(whot, card(Shape.CROSS, 3), None)
    assert is_legal(whot, card(Shape.CROSS, 3), Shape.STAR)


def test_legal_moves_keeps_hand_order():
    hand = [card(Shape.STAR, 3), card(Shape.CIRCLE, 4), card(Shape.WHOT, 20), card(Shape.CIRCLE, 1)]
    moves = legal_moves(hand, card(Shape.CIRCLE, 7), None)
    assert moves == [hand[1], hand[2], hand[3]]
    assert legal_moves(hand, card(Shape.CIRCLE, 7), Shape.STAR) == [hand[0], hand[2]]
