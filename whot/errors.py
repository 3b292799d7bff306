"""Rejections raised by engine operations.

Each error rejects one call and leaves the session untouched; none is fatal.
"""

from __future__ import annotations


class GameError(RuntimeError):
    """Base class for rejected engine calls."""

    code = "game_error"


class SessionNotFound(GameError):
    """Raised when no session exists under the given id."""

    code = "not_found"


class AlreadyTerminal(GameError):
    """Raised when a session already has a winner."""

    code = "already_terminal"


class WrongTurn(GameError):
    """Raised when the caller is not the active participant."""

    code = "wrong_turn"


class CardNotOwned(GameError):
    """Raised when the card is not in the caller's hand."""

    code = "card_not_owned"


class IllegalMove(GameError):
    """Raised when the card cannot be played onto the current top card."""

    code = "illegal_move"


class ShapeRequired(GameError):
    """Raised when a whot card is played without naming a shape."""

    code = "shape_required"
