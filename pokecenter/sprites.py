import asyncio
import logging
from typing import Any, Optional

from pokecenter.clients.pokeapi_client import PokeAPIClient

logger = logging.getLogger(__name__)

POKEMON_COM_ARTWORK_URL = "https://assets.pokemon.com/assets/cms2/img/pokedex/full/{id:03d}.png"
POKEMONDB_ARTWORK_URL = "https://img.pokemondb.net/artwork/large/{name}.jpg"
POKEAPI_SPRITE_URL = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"


def fallback_sprite_url(external_id: int) -> str:
    """The id-templated sprite, used when nothing better is known."""
    return POKEAPI_SPRITE_URL.format(id=external_id)


def _path(node: Any, *keys: str) -> Optional[str]:
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node
    return None


def best_payload_sprite(sprites: Any) -> Optional[str]:
    """Picks the best artwork already present in the /pokemon payload."""
    return (
        _path(sprites, "other", "home", "front_default")
        or _path(sprites, "other", "official-artwork", "front_default")
        or _path(sprites, "front_default")
        or _path(sprites, "other", "dream_world", "front_default")
    )


class SpriteResolver:
    """
    Chooses a reachable image URL for a species.

    Image hosts are inconsistently populated, so several candidates are tried
    in priority order and the first one answering a HEAD probe wins.
    """

    def __init__(self, poke_client: PokeAPIClient, parallel: bool = False):
        self._poke_client = poke_client
        self._parallel = parallel

    def candidates(self, sprites: Any, name_en: str, external_id: int) -> list[str]:
        urls = []
        primary = best_payload_sprite(sprites)
        if primary:
            urls.append(primary)
        urls.append(POKEMON_COM_ARTWORK_URL.format(id=external_id))
        if name_en and name_en.strip():
            urls.append(POKEMONDB_ARTWORK_URL.format(name=name_en.lower()))
        urls.append(fallback_sprite_url(external_id))
        return urls

    async def resolve(self, sprites: Any, name_en: str, external_id: int) -> Optional[str]:
        """
        Returns the first reachable candidate. When none answers, returns the
        payload's own best sprite, which may be None.
        """
        urls = self.candidates(sprites, name_en, external_id)
        if self._parallel:
            # All probes run at once; priority order still decides the winner
            results = await asyncio.gather(*(self._poke_client.probe(url) for url in urls))
            for url, reachable in zip(urls, results):
                if reachable:
                    return url
        else:
            for url in urls:
                if await self._poke_client.probe(url):
                    return url

        logger.warning(f"No reachable sprite for {name_en} (#{external_id})")
        return best_payload_sprite(sprites)
