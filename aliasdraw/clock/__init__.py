from aliasdraw.clock.clock import Clock
from aliasdraw.clock.emitter import EventEmitter
from aliasdraw.clock.event import Event

__all__ = [
    'Clock',
    'EventEmitter',
    'Event',
]
