"""
Random generator helpers.
"""
from __future__ import annotations

from typing import Optional, Union

import numpy as np


def make_rng(seed: Optional[Union[int, np.random.Generator]] = None) -> np.random.Generator:
    """
    Return a numpy ``Generator``.

    An existing generator is passed through unchanged; anything else is
    handed to ``np.random.default_rng``.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)
