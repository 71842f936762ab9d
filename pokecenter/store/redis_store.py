import logging
from typing import Optional

import redis.asyncio as aioredis

from pokecenter.exceptions import StoreConflictError
from pokecenter.models import Description, SpeciesRecord, Stats, TypeRef

logger = logging.getLogger(__name__)

POKEMON_SEQ = "pokemon:seq"
TYPE_SEQ = "type:seq"


class RedisPokemonStore:
    """
    Redis-backed store for species records and their types.

    Key layout:
        pokemon:{external_id}               record JSON, without owned children
        pokemon:{external_id}:stats         Stats JSON
        pokemon:{external_id}:descriptions  list of Description JSON
        type:{id}                           TypeRef JSON
        type:by-en:{lower}                  type id, unique per English code
        type:by-localized:{lower}           type id

    Owned children are keyed by their parent's external id, so re-parenting
    is a matter of rewriting `owner_id` and the parent's child keys.
    """

    def __init__(self, redis_url: str = "redis://localhost:6379"):
        self.redis = aioredis.from_url(redis_url, decode_responses=True)

    @staticmethod
    def _pokemon_key(external_id: int) -> str:
        return f"pokemon:{external_id}"

    @staticmethod
    def _type_key(type_id: int) -> str:
        return f"type:{type_id}"

    @staticmethod
    def _type_index(kind: str, name: str) -> str:
        return f"type:{kind}:{name.lower()}"

    # --- Species records ---

    async def find_by_external_id(self, external_id: int) -> Optional[SpeciesRecord]:
        key = self._pokemon_key(external_id)
        body = await self.redis.get(key)
        if body is None:
            return None
        record = SpeciesRecord.model_validate_json(body)

        stats = await self.redis.get(f"{key}:stats")
        record.stats = Stats.model_validate_json(stats) if stats else None
        descriptions = await self.redis.lrange(f"{key}:descriptions", 0, -1)
        record.descriptions = [Description.model_validate_json(d) for d in descriptions]
        return record

    async def save_pokemon(self, record: SpeciesRecord) -> SpeciesRecord:
        """
        Inserts a record without store identity, or overwrites a stored one.

        Raises StoreConflictError if an insert finds the external id already taken.
        """
        key = self._pokemon_key(record.external_id)

        if record.id is None:
            new_id = await self.redis.incr(POKEMON_SEQ)
            body = record.model_copy(update={"id": new_id}).model_dump_json(exclude={"stats", "descriptions"})
            created = await self.redis.set(key, body, nx=True)
            if not created:
                raise StoreConflictError(record.external_id)
            record.id = new_id
            logger.info(f"Stored new Pokemon #{record.external_id} as row {new_id}")
        else:
            await self.redis.set(key, record.model_dump_json(exclude={"stats", "descriptions"}))
            logger.info(f"Updated Pokemon #{record.external_id} (row {record.id})")

        # Children are rewritten atomically so no stale descriptions survive
        async with self.redis.pipeline(transaction=True) as pipe:
            if record.stats is not None:
                record.stats.owner_id = record.external_id
                pipe.set(f"{key}:stats", record.stats.model_dump_json())
            else:
                pipe.delete(f"{key}:stats")
            pipe.delete(f"{key}:descriptions")
            for description in record.descriptions:
                description.owner_id = record.external_id
            if record.descriptions:
                pipe.rpush(f"{key}:descriptions", *(d.model_dump_json() for d in record.descriptions))
            await pipe.execute()
        return record

    # --- Types ---

    async def _type_by_index(self, index_key: str) -> Optional[TypeRef]:
        type_id = await self.redis.get(index_key)
        if type_id is None:
            return None
        body = await self.redis.get(self._type_key(int(type_id)))
        return TypeRef.model_validate_json(body) if body else None

    async def find_type_by_name_en(self, name_en: str) -> Optional[TypeRef]:
        return await self._type_by_index(self._type_index("by-en", name_en))

    async def find_type_by_name_localized(self, name_localized: str) -> Optional[TypeRef]:
        return await self._type_by_index(self._type_index("by-localized", name_localized))

    async def save_type(self, type_ref: TypeRef) -> TypeRef:
        """
        Stores a type. A new type only becomes visible once it claims its
        case-insensitive English index; losing that claim returns the winner.
        """
        if type_ref.id is not None:
            await self.redis.set(self._type_key(type_ref.id), type_ref.model_dump_json())
            return type_ref

        new_id = await self.redis.incr(TYPE_SEQ)
        stored = type_ref.model_copy(update={"id": new_id})
        await self.redis.set(self._type_key(new_id), stored.model_dump_json())

        claimed = await self.redis.set(self._type_index("by-en", stored.name_en), new_id, nx=True)
        if not claimed:
            await self.redis.delete(self._type_key(new_id))
            existing = await self.find_type_by_name_en(stored.name_en)
            if existing is not None:
                return existing
            # Index pointed at a missing row; take it over
            await self.redis.set(self._type_index("by-en", stored.name_en), new_id)
            await self.redis.set(self._type_key(new_id), stored.model_dump_json())

        await self.redis.set(self._type_index("by-localized", stored.name_localized), new_id, nx=True)
        logger.info(f"Stored new type {stored.name_en} as row {new_id}")
        return stored

    async def close(self):
        """Close Redis connection (call on app shutdown)."""
        await self.redis.aclose()
