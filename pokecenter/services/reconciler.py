import logging

from pokecenter.exceptions import StoreConflictError
from pokecenter.models import SpeciesRecord, Stats
from pokecenter.store.base import PokemonStore

logger = logging.getLogger(__name__)

STAT_FIELDS = ("hp", "attack", "defense", "speed", "special_attack", "special_defense")


class Reconciler:
    """Merges freshly assembled records into the store, keyed by external id."""

    def __init__(self, store: PokemonStore):
        self._store = store

    async def upsert(self, fresh: SpeciesRecord) -> SpeciesRecord:
        """
        Inserts `fresh` if its external id is unknown; otherwise copies its
        mutable fields onto the stored row and returns that row. The `fresh`
        object is only a carrier in the update case.
        """
        existing = await self._store.find_by_external_id(fresh.external_id)

        if existing is None:
            try:
                return await self._store.save_pokemon(fresh)
            except StoreConflictError:
                # A concurrent insert won; fall through and update its row instead
                logger.warning(f"Insert race on Pokemon #{fresh.external_id}, retrying as update")
                existing = await self._store.find_by_external_id(fresh.external_id)
                if existing is None:
                    raise

        self._merge(existing, fresh)
        return await self._store.save_pokemon(existing)

    @staticmethod
    def _merge(existing: SpeciesRecord, fresh: SpeciesRecord) -> None:
        existing.name_en = fresh.name_en
        existing.name_localized = fresh.name_localized
        existing.sprite_url = fresh.sprite_url
        existing.types = fresh.types
        existing.max_hp = fresh.max_hp
        existing.current_hp = fresh.current_hp

        if fresh.stats is not None:
            if existing.stats is None:
                existing.stats = Stats(owner_id=existing.external_id)
            for field in STAT_FIELDS:
                setattr(existing.stats, field, getattr(fresh.stats, field))

        # Replace, never append
        for description in fresh.descriptions:
            description.owner_id = existing.external_id
        existing.descriptions = list(fresh.descriptions)
