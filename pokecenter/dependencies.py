from pokecenter.clients import PokeAPIClient
from pokecenter.config import Settings
from pokecenter.services import PokemonService
from pokecenter.sprites import SpriteResolver
from pokecenter.store import RedisPokemonStore
from pokecenter.translator import TypeTranslator
from fastapi import Depends

_settings = None
_poke_client = None
_store = None
_translator = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings

def get_poke_client(settings: Settings = Depends(get_settings)) -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient(base_url=settings.pokeapi_base_url, timeout=settings.http_timeout)
    return _poke_client

def get_store(settings: Settings = Depends(get_settings)) -> RedisPokemonStore:
    global _store
    if _store is None:
        _store = RedisPokemonStore(redis_url=settings.redis_url)
    return _store

def get_translator() -> TypeTranslator:
    global _translator
    if _translator is None:
        _translator = TypeTranslator()
    return _translator

def get_pokemon_service(
    settings: Settings = Depends(get_settings),
    poke_client: PokeAPIClient = Depends(get_poke_client),
    store: RedisPokemonStore = Depends(get_store),
    translator: TypeTranslator = Depends(get_translator),
) -> PokemonService:
    return PokemonService(
        poke_client=poke_client,
        sprite_resolver=SpriteResolver(poke_client, parallel=settings.parallel_sprite_probes),
        translator=translator,
        store=store,
        settings=settings,
    )

async def close_clients():
    """Releases the shared HTTP pool and Redis connection (app shutdown)."""
    global _poke_client, _store
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
    if _store is not None:
        await _store.close()
        _store = None
