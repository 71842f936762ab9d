import copy
from unittest.mock import AsyncMock

import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from pokecenter.config import Settings
from pokecenter.services.pokemon_service import PokemonService
from pokecenter.sprites import SpriteResolver
from pokecenter.store.redis_store import RedisPokemonStore
from pokecenter.translator import TypeTranslator

OFFICIAL_ARTWORK_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/1.png"
)

# Trimmed /pokemon/bulbasaur payload
MOCK_BULBASAUR = {
    "id": 1,
    "name": "bulbasaur",
    "height": 7,
    "weight": 69,
    "sprites": {
        "front_default": "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/1.png",
        "other": {
            "home": {"front_default": None},
            "official-artwork": {"front_default": OFFICIAL_ARTWORK_URL},
        },
    },
    "types": [
        {"slot": 1, "type": {"name": "grass"}},
        {"slot": 2, "type": {"name": "poison"}},
    ],
    "stats": [
        {"base_stat": 45, "stat": {"name": "hp"}},
        {"base_stat": 49, "stat": {"name": "attack"}},
        {"base_stat": 49, "stat": {"name": "defense"}},
        {"base_stat": 65, "stat": {"name": "special-attack"}},
        {"base_stat": 65, "stat": {"name": "special-defense"}},
        {"base_stat": 45, "stat": {"name": "speed"}},
    ],
    "abilities": [
        {"ability": {"name": "overgrow"}},
        {"ability": {"name": "chlorophyll"}},
    ],
}

# Trimmed /pokemon-species/1 payload
MOCK_BULBASAUR_SPECIES = {
    "names": [
        {"name": "フシギダネ", "language": {"name": "ja"}},
        {"name": "Bulbasaur", "language": {"name": "en"}},
    ],
    "flavor_text_entries": [
        {"flavor_text": "A strange seed was\nplanted on its\fback at birth.", "language": {"name": "en"}},
        {"flavor_text": "Uma semente estranha foi\nplantada nas suas costas.", "language": {"name": "pt-BR"}},
        {"flavor_text": "Another English entry.", "language": {"name": "en"}},
    ],
}


@pytest.fixture
def bulbasaur():
    return copy.deepcopy(MOCK_BULBASAUR)


@pytest.fixture
def bulbasaur_species():
    return copy.deepcopy(MOCK_BULBASAUR_SPECIES)


@pytest.fixture
def redis_client():
    """Provides a fake Redis client with its own server, so tests never share state."""
    return FakeRedis(server=FakeServer(), decode_responses=True)


@pytest.fixture
def store(redis_client):
    """Provides a RedisPokemonStore with fake Redis."""
    store = RedisPokemonStore()
    store.redis = redis_client  # Inject fake Redis
    return store


@pytest.fixture
def poke_client(bulbasaur, bulbasaur_species):
    # Use AsyncMock for methods that are awaited
    client = AsyncMock()
    client.get_pokemon.return_value = bulbasaur
    client.get_species.return_value = bulbasaur_species
    client.probe.return_value = True
    return client


@pytest.fixture
def pokemon_service(poke_client, store):
    return PokemonService(
        poke_client=poke_client,
        sprite_resolver=SpriteResolver(poke_client),
        translator=TypeTranslator(),
        store=store,
        settings=Settings(),
    )
