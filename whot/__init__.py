"""Core rule engine package for Whot!."""

__all__ = [
    "cards",
    "config",
    "deck",
    "effects",
    "errors",
    "game",
    "mechanics",
    "piles",
    "registry",
    "service",
    "state",
    "turns",
]
