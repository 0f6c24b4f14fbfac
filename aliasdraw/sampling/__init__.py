from aliasdraw.sampling.alias_table import AliasEntry, AliasTable, build_alias_table
from aliasdraw.sampling.exceptions import (
    EmptyCollectionError,
    InvalidWeightError,
    SamplerError,
    ZeroTotalWeightError,
)
from aliasdraw.sampling.weighted_sampler import WeightedItem, WeightedSampler

__all__ = [
    'AliasEntry',
    'AliasTable',
    'build_alias_table',
    'EmptyCollectionError',
    'InvalidWeightError',
    'SamplerError',
    'ZeroTotalWeightError',
    'WeightedItem',
    'WeightedSampler',
]
