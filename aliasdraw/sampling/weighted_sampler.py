"""
Weighted random selection over a mutable collection.

The sampler owns a private list of items and a lazily built alias table.
Every mutator drops the table, and the next draw rebuilds it, so a run of
draws between mutations costs O(n) once and O(1) per draw afterwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

import numpy as np

from aliasdraw.sampling.alias_table import AliasTable, build_alias_table
from aliasdraw.utils.rng import make_rng

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedItem(Generic[T]):
    """Pairs an arbitrary value with its weight."""
    value: T
    weight: float


class WeightedSampler(Generic[T]):
    """
    Container of weighted items answering weighted-random queries.

    Args:
        items: initial items.
        weight: callable returning the weight of an item. Defaults to the
            item's ``weight`` attribute.
        rng: numpy ``Generator`` or seed used for draws.

    Weights are only checked when a table is built, i.e. on the first draw
    after construction or after a mutation. Not thread-safe: guard each
    instance with one lock if it is shared between threads.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        weight: Callable[[T], float] = attrgetter("weight"),
        rng: Optional[np.random.Generator | int] = None,
    ):
        self._items: List[T] = list(items)
        self._weight = weight
        self._rng = make_rng(rng)
        self._table: Optional[AliasTable] = None

    # ------------------------------------------------------------------
    # read-only access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"WeightedSampler({self._items!r})"

    @property
    def items(self) -> List[T]:
        """Copy of the backing sequence."""
        return list(self._items)

    @property
    def weights(self) -> List[Any]:
        """Weights as returned by the accessor; they are checked when a table is built."""
        return [self._weight(item) for item in self._items]

    @property
    def table(self) -> Optional[AliasTable]:
        """The cached table, or ``None`` when it has to be rebuilt."""
        return self._table

    @property
    def is_built(self) -> bool:
        return self._table is not None

    # ------------------------------------------------------------------
    # mutators
    # ------------------------------------------------------------------
    def _invalidate(self) -> None:
        if self._table is not None:
            logger.debug("alias table of %d items invalidated", len(self._table))
        self._table = None

    def append(self, item: T) -> None:
        self._items.append(item)
        self._invalidate()

    def extend(self, items: Iterable[T]) -> None:
        self._items.extend(items)
        self._invalidate()

    def insert(self, index: int, item: T) -> None:
        self._items.insert(index, item)
        self._invalidate()

    def push_front(self, item: T) -> None:
        self.insert(0, item)

    def remove_at(self, index: int) -> T:
        item = self._items.pop(index)
        self._invalidate()
        return item

    def remove_range(self, start: int, count: int) -> List[T]:
        """
        Remove up to ``count`` items starting at ``start`` and return them.

        A negative ``start`` counts from the end, as in ``remove_at``.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if start < 0:
            start = max(len(self._items) + start, 0)
        removed = self._items[start:start + count]
        del self._items[start:start + count]
        self._invalidate()
        return removed

    def pop_back(self) -> T:
        return self.remove_at(-1)

    def pop_front(self) -> T:
        return self.remove_at(0)

    def reverse(self) -> None:
        self._items.reverse()
        self._invalidate()

    def clear(self) -> None:
        self._items.clear()
        self._invalidate()

    # ------------------------------------------------------------------
    # table
    # ------------------------------------------------------------------
    def build_table(self) -> AliasTable:
        """Rebuild the alias table from the current items and cache it."""
        table = build_alias_table(self.weights)
        self._table = table
        logger.debug("alias table built over %d items", len(table))
        return table

    def _ensure_table(self) -> AliasTable:
        if self._table is None:
            return self.build_table()
        return self._table

    def _draw_index(self, table: AliasTable) -> int:
        return table.resolve(self._rng.random() * len(table))

    # ------------------------------------------------------------------
    # draws
    # ------------------------------------------------------------------
    def sample_one(self) -> T:
        """Draw a single item with probability proportional to its weight."""
        table = self._ensure_table()
        return self._items[self._draw_index(table)]

    def sample_many(self, count: int) -> List[T]:
        """
        Draw ``count`` independent items, repetition allowed.

        The table is built (and the weights validated) even when ``count``
        is zero.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        table = self._ensure_table()
        indices = table.resolve_many(self._rng.random(count) * len(table))
        return [self._items[i] for i in indices.tolist()]

    def sample_filtered(
        self,
        count: int,
        predicate: Callable[[T, List[T]], Any],
    ) -> List[T]:
        """
        Draw up to ``count`` items that pass ``predicate(item, collected)``.

        ``collected`` is the list of items accepted so far, e.g.
        ``lambda item, collected: item not in collected`` avoids duplicates.
        When a candidate is rejected, the table is scanned in index order for
        the first alias target that differs from the candidate and passes the
        predicate. This only approximately avoids rejected items: it favors
        low indices and is not uniform over the remaining eligible items.
        A slot whose scan finds nothing is dropped, so the result can be
        shorter than ``count``.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        table = self._ensure_table()
        collected: List[T] = []
        for _ in range(count):
            index = self._draw_index(table)
            candidate = self._items[index]
            if predicate(candidate, collected):
                collected.append(candidate)
                continue
            for entry in table:
                if entry.alias != index and predicate(self._items[entry.alias], collected):
                    collected.append(self._items[entry.alias])
                    break
            else:
                logger.debug("no eligible item for slot after rejecting index %d", index)
        return collected

    # ------------------------------------------------------------------
    # copying
    # ------------------------------------------------------------------
    def clone(self) -> WeightedSampler[T]:
        """
        Independent copy sharing the current table.

        The copy gets its own list and a child random generator, so draws and
        mutations on either side do not affect the other. A clone taken right
        after a build skips the rebuild.
        """
        other = WeightedSampler(self._items, weight=self._weight, rng=self._rng.spawn(1)[0])
        other._table = self._table
        return other
