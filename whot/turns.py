"""Turn order tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass
class TurnScheduler:
    participants: Sequence[str]
    active_index: int = 0

    def __post_init__(self) -> None:
        self.participants = tuple(self.participants)
        if not self.participants:
            raise ValueError("TurnScheduler needs at least one participant.")
        if not 0 <= self.active_index < len(self.participants):
            raise ValueError("Active index out of range.")

    def current(self) -> str:
        return self.participants[self.active_index]

    def advance(self, steps: int = 1) -> str:
        self.active_index = (self.active_index + steps) % len(self.participants)
        return self.current()

    def peek(self, steps: int = 1) -> str:
        """Return who would be active after ``steps`` advances, without moving."""
        return self.participants[(self.active_index + steps) % len(self.participants)]

    def others(self) -> List[str]:
        """Every participant except the active one, in turn order."""
        count = len(self.participants)
        return [self.participants[(self.active_index + offset) % count] for offset in range(1, count)]
