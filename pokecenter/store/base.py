from typing import Optional, Protocol

from pokecenter.models import SpeciesRecord, TypeRef


class PokemonStore(Protocol):
    """Persistence operations the ingestion pipeline relies on."""

    async def find_by_external_id(self, external_id: int) -> Optional[SpeciesRecord]: ...

    async def find_type_by_name_en(self, name_en: str) -> Optional[TypeRef]: ...

    async def find_type_by_name_localized(self, name_localized: str) -> Optional[TypeRef]: ...

    async def save_type(self, type_ref: TypeRef) -> TypeRef: ...

    async def save_pokemon(self, record: SpeciesRecord) -> SpeciesRecord: ...
