"""Pokémon Center data ingestion service."""
