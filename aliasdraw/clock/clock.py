"""
Day clock that picks weighted events.
"""
import logging
from typing import List, Optional, Union

import numpy as np

from aliasdraw.clock.emitter import EventEmitter
from aliasdraw.clock.event import Event
from aliasdraw.sampling import WeightedSampler

logger = logging.getLogger(__name__)


class Clock(EventEmitter[int]):
    """
    Advances a day counter and runs ``events_per_day`` weighted events per day.

    Listeners registered with :meth:`on` receive the new day number after the
    day's events have run.
    """

    def __init__(
        self,
        events_per_day: int = 1,
        rng: Optional[Union[int, np.random.Generator]] = None,
    ):
        super().__init__()
        if events_per_day < 0:
            raise ValueError("events_per_day must be >= 0")
        self.day = 0
        self.events_per_day = events_per_day
        self._events: WeightedSampler[Event] = WeightedSampler(rng=rng)

    @property
    def events(self) -> List[Event]:
        return self._events.items

    def add_event(self, event: Event) -> None:
        self._events.append(event)

    def remove_event(self, name: str) -> Event:
        """Remove the first event called ``name``; KeyError if there is none."""
        for index, event in enumerate(self._events):
            if event.name == name:
                return self._events.remove_at(index)
        raise KeyError(name)

    def run_events(self) -> List[Event]:
        """Pick and run today's events; nothing happens while no event is registered."""
        if len(self._events) == 0:
            return []
        picked = self._events.sample_many(self.events_per_day)
        for event in picked:
            logger.debug("day %d: running %s", self.day, event.name)
            event.run(self)
        return picked

    def tick(self) -> List[Event]:
        """Advance one day, run its events and notify listeners."""
        self.day += 1
        picked = self.run_events()
        self.emit(self.day)
        return picked
