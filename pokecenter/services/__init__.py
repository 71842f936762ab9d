"""Ingestion services: assembly of species records and store reconciliation."""
from .pokemon_service import PokemonService
from .reconciler import Reconciler

__all__ = [
    'PokemonService',
    'Reconciler',
]
