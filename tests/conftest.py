from __future__ import annotations

import numpy as np
import pytest

from aliasdraw.sampling import WeightedItem, WeightedSampler


@pytest.fixture
def rng():
    return np.random.default_rng(20240617)


@pytest.fixture
def make_sampler(rng):
    def _make(weights, **kwargs):
        kwargs.setdefault("rng", rng)
        return WeightedSampler((WeightedItem(i, w) for i, w in enumerate(weights)), **kwargs)

    return _make


def counts_of(items, size):
    return np.bincount([item.value for item in items], minlength=size)
