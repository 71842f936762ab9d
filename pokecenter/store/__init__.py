"""Persistence for assembled species records."""
from .base import PokemonStore
from .redis_store import RedisPokemonStore

__all__ = [
    'PokemonStore',
    'RedisPokemonStore',
]
