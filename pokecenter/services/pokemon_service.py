import logging
import random
from typing import Optional

from redis.exceptions import RedisError

from pokecenter.clients.pokeapi_client import PokeAPIClient
from pokecenter.config import Settings
from pokecenter.exceptions import StoreUnavailableError
from pokecenter.extractors import (
    extract_abilities,
    extract_description,
    extract_localized_name,
    extract_stats,
    extract_types,
    member_id_from_url,
    to_metric,
)
from pokecenter.models import SpeciesRecord, TypeRef
from pokecenter.services.reconciler import Reconciler
from pokecenter.sprites import SpriteResolver, fallback_sprite_url
from pokecenter.store.base import PokemonStore
from pokecenter.translator import TypeTranslator

logger = logging.getLogger(__name__)


class PokemonService:
    """
    Builds species records from PokeAPI.

    Each public lookup comes in two flavours: the plain one persists the
    result through the Reconciler, the `_ephemeral` one never touches the
    store. Both return None when the species cannot be found.
    """

    # Service requires its collaborators via Dependency Injection; the store is optional
    def __init__(
        self,
        poke_client: PokeAPIClient,
        sprite_resolver: SpriteResolver,
        translator: TypeTranslator,
        store: Optional[PokemonStore] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self._poke_client = poke_client
        self._sprite_resolver = sprite_resolver
        self._translator = translator
        self._store = store
        self._reconciler = Reconciler(store) if store is not None else None
        self._settings = settings or Settings()
        self._rng = rng or random.Random()

    # --- Lookup by name or id ---

    async def assemble(self, key) -> Optional[SpeciesRecord]:
        return await self._assemble(key, persist=True)

    async def assemble_ephemeral(self, key) -> Optional[SpeciesRecord]:
        return await self._assemble(key, persist=False)

    # --- Random lookups ---

    async def assemble_random(self) -> Optional[SpeciesRecord]:
        return await self._assemble(self._random_id(), persist=True)

    async def assemble_random_ephemeral(self) -> Optional[SpeciesRecord]:
        return await self._assemble(self._random_id(), persist=False)

    async def assemble_random_by_type(self, type_code: str) -> Optional[SpeciesRecord]:
        return await self._assemble_random_by_type(type_code, persist=True)

    async def assemble_random_by_type_ephemeral(self, type_code: str) -> Optional[SpeciesRecord]:
        return await self._assemble_random_by_type(type_code, persist=False)

    def _random_id(self) -> int:
        return self._rng.randint(1, self._settings.catalog_size)

    async def _assemble_random_by_type(self, type_code: str, persist: bool) -> Optional[SpeciesRecord]:
        if persist:
            self._require_store()
        type_data = await self._poke_client.get_type(type_code)
        if type_data is None:
            logger.info(f"Type '{type_code}' not found")
            return None

        members = type_data.get("pokemon")
        if not isinstance(members, list) or not members:
            logger.info(f"Type '{type_code}' has no members")
            return None

        member = self._rng.choice(members)
        entry = member.get("pokemon") if isinstance(member, dict) else None
        member_id = member_id_from_url(entry.get("url") if isinstance(entry, dict) else None)
        if member_id is None:
            logger.warning(f"Type '{type_code}' member without a usable URL: {member!r}")
            return None
        return await self._assemble(member_id, persist)

    # --- Assembly ---

    def _require_store(self) -> None:
        if self._store is None:
            raise StoreUnavailableError("No Pokemon store configured")

    async def _assemble(self, key, persist: bool) -> Optional[SpeciesRecord]:
        if persist:
            self._require_store()

        data = await self._poke_client.get_pokemon(key)
        if data is None:
            logger.info(f"Pokemon '{key}' not found upstream")
            return None

        external_id = data.get("id")
        if not isinstance(external_id, int):
            logger.warning(f"Pokemon payload for '{key}' has no numeric id")
            return None
        name_en = data.get("name") or ""

        record = SpeciesRecord(
            external_id=external_id,
            name_en=name_en,
            sprite_url=await self._sprite_resolver.resolve(data.get("sprites"), name_en, external_id),
            height=to_metric(data.get("height")),
            weight=to_metric(data.get("weight")),
            abilities=extract_abilities(data.get("abilities")),
        )

        record.types = extract_types(data.get("types"), self._translator)

        stats = extract_stats(data.get("stats"))
        stats.owner_id = external_id
        record.stats = stats
        if stats.hp is not None:
            record.max_hp = stats.hp
            record.current_hp = stats.hp

        # Species metadata is best effort: without it the record keeps its English name
        species = await self._poke_client.get_species(external_id)
        if species is None:
            logger.warning(f"Species metadata unavailable for #{external_id}")
        locale = self._settings.locale
        record.name_localized = extract_localized_name(species, locale) or name_en
        description = extract_description(species, locale)
        if description is not None:
            description.owner_id = external_id
            record.descriptions = [description]

        if not record.sprite_url:
            record.sprite_url = fallback_sprite_url(external_id)

        if persist:
            return await self._persist(record)
        return record

    async def _persist(self, record: SpeciesRecord) -> SpeciesRecord:
        """
        Resolves types and upserts a copy of `record`. If Redis fails midway
        the in-memory record is returned as is, so the upstream work is not redone.
        """
        stored = record.model_copy(deep=True)
        try:
            stored.types = await self._resolve_types(stored.types)
            return await self._reconciler.upsert(stored)
        except RedisError as e:
            logger.warning(f"Pokemon store unavailable, returning #{record.external_id} unpersisted: {str(e)}")
            return record

    async def _resolve_types(self, types: list[TypeRef]) -> list[TypeRef]:
        """Swaps each fresh TypeRef for its stored row, creating rows for new types."""
        resolved = []
        for type_ref in types:
            existing = await self._store.find_type_by_name_en(type_ref.name_en)
            if existing is None:
                existing = await self._store.find_type_by_name_localized(type_ref.name_localized)
            if existing is None:
                existing = await self._store.save_type(type_ref)
            resolved.append(existing)
        return resolved
