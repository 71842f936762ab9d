import os

from pydantic import BaseModel, ConfigDict

# Environment variable -> Settings field
ENV_VARS = {
    "POKEAPI_BASE_URL": "pokeapi_base_url",
    "REDIS_URL": "redis_url",
    "HTTP_TIMEOUT": "http_timeout",
    "CATALOG_SIZE": "catalog_size",
    "LOCALE": "locale",
    "PARALLEL_SPRITE_PROBES": "parallel_sprite_probes",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Runtime configuration, read once from the environment."""

    model_config = ConfigDict(frozen=True)

    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    redis_url: str = "redis://localhost:6379"
    http_timeout: float = 5.0
    catalog_size: int = 898  # national dex entries covered by random draws
    locale: str = "pt-BR"
    parallel_sprite_probes: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        values = {
            field: os.environ[var]
            for var, field in ENV_VARS.items()
            if os.environ.get(var)
        }
        return cls(**values)
