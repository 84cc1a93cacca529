from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol


class RewardCollector(Protocol):
    """Receives the credits and gamecoins earned in one turn."""

    def collect(self, credits: int, gamecoins: int) -> None:
        ...


@dataclass(frozen=True)
class RewardEvent:
    credits: int
    gamecoins: int

    def __post_init__(self) -> None:
        for name in ("credits", "gamecoins"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


@dataclass
class Wallet:
    """In-memory balance that accumulates collected rewards."""
    credits: int = 0
    gamecoins: int = 0
    history: List[RewardEvent] = field(default_factory=list)

    def collect(self, credits: int, gamecoins: int) -> None:
        event = RewardEvent(credits, gamecoins)
        self.credits += event.credits
        self.gamecoins += event.gamecoins
        self.history.append(event)
