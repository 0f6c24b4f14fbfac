from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from aliasdraw.clock.clock import Clock


@dataclass(frozen=True)
class Event:
    """A named occurrence that the clock may pick, proportionally to ``weight``."""
    name: str
    weight: float
    action: Optional[Callable[["Clock"], None]] = None

    def run(self, clock: "Clock") -> None:
        if self.action is not None:
            self.action(clock)
