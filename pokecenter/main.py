import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Depends, status, HTTPException

from pokecenter.config import Settings
from pokecenter.dependencies import close_clients, get_pokemon_service
from pokecenter.exceptions import PokemonNotFoundError, StoreConflictError, StoreUnavailableError
from pokecenter.models import SpeciesRecord
from pokecenter.services.pokemon_service import PokemonService

logging.basicConfig(level=Settings.from_env().log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_clients()


app = FastAPI(
    title="Pokémon Center API",
    description="Fetches Pokémon from PokeAPI, localizes them and keeps the Pokédex store in sync.",
    lifespan=lifespan,
)


def _found(record: Optional[SpeciesRecord], what: str) -> SpeciesRecord:
    if record is None:
        raise PokemonNotFoundError(detail=f"Pokemon {what} not found.")
    return record


async def _persist_or_ephemeral(
    persist: Callable[[], Awaitable[Optional[SpeciesRecord]]],
    ephemeral: Callable[[], Awaitable[Optional[SpeciesRecord]]],
) -> Optional[SpeciesRecord]:
    """
    Runs the persisting lookup. Redis outages are absorbed by the service;
    only a missing store configuration falls back to the in-memory lookup.
    """
    try:
        return await persist()
    except StoreUnavailableError as e:
        logger.warning(f"No Pokemon store, serving without persistence: {str(e)}")
        return await ephemeral()
    except StoreConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


# --- Persisted Pokédex ---

@app.get(
    "/api/pokemons/random",
    response_model=SpeciesRecord,
    summary="Fetches and stores a random Pokemon",
)
async def get_random_pokemon(service: PokemonService = Depends(get_pokemon_service)):
    record = await _persist_or_ephemeral(service.assemble_random, service.assemble_random_ephemeral)
    return _found(record, "draw")


@app.get(
    "/api/pokemons/type/{type_code}/random",
    response_model=SpeciesRecord,
    summary="Fetches and stores a random Pokemon of the given type",
)
async def get_random_pokemon_by_type(
    type_code: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    record = await _persist_or_ephemeral(
        lambda: service.assemble_random_by_type(type_code),
        lambda: service.assemble_random_by_type_ephemeral(type_code),
    )
    return _found(record, f"of type '{type_code}'")


@app.get(
    "/api/pokemons/id/{external_id}",
    response_model=SpeciesRecord,
    summary="Fetches and stores a Pokemon by its PokeAPI id",
)
async def get_pokemon_by_id(
    external_id: int,
    service: PokemonService = Depends(get_pokemon_service),
):
    record = await _persist_or_ephemeral(
        lambda: service.assemble(external_id),
        lambda: service.assemble_ephemeral(external_id),
    )
    return _found(record, f"#{external_id}")


@app.get(
    "/api/pokemons/{name}",
    response_model=SpeciesRecord,
    summary="Fetches and stores a Pokemon by its English name",
)
async def get_pokemon(
    name: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    record = await _persist_or_ephemeral(
        lambda: service.assemble(name),
        lambda: service.assemble_ephemeral(name),
    )
    return _found(record, f"'{name}'")


# --- Read-only Pokédex (never touches the store) ---

@app.get("/api/pokedex/random", response_model=SpeciesRecord)
async def pokedex_random(service: PokemonService = Depends(get_pokemon_service)):
    return _found(await service.assemble_random_ephemeral(), "draw")


@app.get("/api/pokedex/type/{type_code}/random", response_model=SpeciesRecord)
async def pokedex_random_by_type(
    type_code: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    return _found(await service.assemble_random_by_type_ephemeral(type_code), f"of type '{type_code}'")


@app.get("/api/pokedex/{name}", response_model=SpeciesRecord)
async def pokedex_lookup(
    name: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Builds the Pokemon straight from PokeAPI, so the Pokédex works without the store."""
    return _found(await service.assemble_ephemeral(name), f"'{name}'")
