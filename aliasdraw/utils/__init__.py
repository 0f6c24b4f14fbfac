from aliasdraw.utils.rng import make_rng

__all__ = [
    'make_rng',
]
