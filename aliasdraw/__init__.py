"""
aliasdraw: weighted random selection with the alias method
"""
__version__ = "0.1.0"

from aliasdraw.sampling import (
    AliasEntry,
    AliasTable,
    EmptyCollectionError,
    InvalidWeightError,
    SamplerError,
    WeightedItem,
    WeightedSampler,
    ZeroTotalWeightError,
)

__all__ = [
    'AliasEntry',
    'AliasTable',
    'EmptyCollectionError',
    'InvalidWeightError',
    'SamplerError',
    'WeightedItem',
    'WeightedSampler',
    'ZeroTotalWeightError',
]
