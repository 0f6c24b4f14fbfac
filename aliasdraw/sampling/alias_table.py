"""
Alias table construction (Vose's method).

A table maps every position ``i`` to a pair ``(threshold, alias)``: a uniform
draw landing on ``i`` keeps ``i`` with probability ``threshold`` and otherwise
resolves to ``alias``. Building costs O(n), resolving a draw costs O(1).

See http://www.keithschwarz.com/darts-dice-coins/ for a walkthrough.
"""
from __future__ import annotations

import math
from collections import deque
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from aliasdraw.sampling.exceptions import (
    EmptyCollectionError,
    InvalidWeightError,
    ZeroTotalWeightError,
)


class AliasEntry(NamedTuple):
    threshold: float
    alias: int


class AliasTable:
    """
    Immutable alias table.

    Entries are stored column-wise in two read-only numpy arrays so that
    batch draws can be resolved without a Python loop. Because nothing can
    write to it, a table can be shared between samplers without copying.
    """

    def __init__(self, thresholds: Sequence[float], aliases: Sequence[int]):
        thresholds = np.array(thresholds, dtype=np.float64)
        aliases = np.array(aliases, dtype=np.int64)
        if thresholds.ndim != 1 or thresholds.shape != aliases.shape:
            raise ValueError("thresholds and aliases must be 1-D and of equal length")
        thresholds.setflags(write=False)
        aliases.setflags(write=False)
        self.thresholds = thresholds
        self.aliases = aliases

    def __len__(self) -> int:
        return int(self.thresholds.shape[0])

    def __getitem__(self, index: int) -> AliasEntry:
        return AliasEntry(float(self.thresholds[index]), int(self.aliases[index]))

    def __iter__(self) -> Iterator[AliasEntry]:
        for threshold, alias in zip(self.thresholds.tolist(), self.aliases.tolist()):
            yield AliasEntry(threshold, alias)

    def __repr__(self) -> str:
        return f"AliasTable({list(self)!r})"

    def resolve(self, r: float) -> int:
        """Map a uniform draw ``r`` in ``[0, n)`` to an item index."""
        # r * n can round up to n for draws just below 1.0
        i = min(int(r), len(self) - 1)
        if r - i > self.thresholds[i]:
            return int(self.aliases[i])
        return i

    def resolve_many(self, r: np.ndarray) -> np.ndarray:
        """Vectorized :meth:`resolve` over an array of uniform draws."""
        idx = np.minimum(np.floor(r).astype(np.int64), len(self) - 1)
        frac = r - idx
        return np.where(frac > self.thresholds[idx], self.aliases[idx], idx)

    def probabilities(self) -> np.ndarray:
        """Marginal selection probability of every index implied by the table."""
        keep = self.thresholds.copy()
        np.add.at(keep, self.aliases, 1.0 - self.thresholds)
        return keep / len(self)


def build_alias_table(weights: Sequence[float]) -> AliasTable:
    """
    Build an alias table for ``weights``.

    Raises:
        EmptyCollectionError: ``weights`` is empty.
        InvalidWeightError: a weight is negative, NaN, infinite or not a number.
        ZeroTotalWeightError: the weights sum to exactly zero.
    """
    n = len(weights)
    if n == 0:
        raise EmptyCollectionError("cannot build an alias table over an empty collection")

    values = []
    for index, weight in enumerate(weights):
        try:
            value = float(weight)
        except (TypeError, ValueError):
            raise InvalidWeightError(index, weight) from None
        if not math.isfinite(value) or value < 0:
            raise InvalidWeightError(index, weight)
        values.append(value)

    peak = max(values)
    if peak == 0:
        raise ZeroTotalWeightError("weights sum to zero")
    # only relative mass matters; scaling by the largest weight keeps the sum finite
    weights = [v / peak for v in values]
    avg = math.fsum(weights) / n
    # probability mass of each position, in units of the average weight
    mass = [w / avg for w in weights]
    thresholds = [1.0] * n
    aliases = list(range(n))

    small = deque(i for i, w in enumerate(weights) if w < avg)
    large = deque(i for i, w in enumerate(weights) if w >= avg)

    while small and large:
        s = small.popleft()
        g = large[0]
        thresholds[s] = max(mass[s], 0.0)
        aliases[s] = g
        mass[g] -= 1.0 - mass[s]
        if mass[g] < 1.0:
            # the donor is now short itself and gets paired next
            large.popleft()
            small.appendleft(g)

    # whatever is left over keeps its own slot (threshold 1.0, self-alias)
    return AliasTable(thresholds, aliases)
