import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class PokeAPIClient:
    """
    Thin async wrapper around PokeAPI v2.

    Every call is a single attempt: there is no retry and no backoff. Failures
    never propagate, they come back as None (documents) or False (probes) and
    callers treat them as "not found".
    """
    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(self, base_url: str = None, timeout: float = 5.0):
        self.client = httpx.AsyncClient(base_url=base_url or self.BASE_URL, timeout=timeout)

    async def fetch(self, path: str) -> Optional[dict]:
        """GETs `path` relative to the API base and returns the parsed JSON object."""
        try:
            response = await self.client.get(path)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"PokeAPI returned {e.response.status_code} for {path}")
            return None
        except httpx.RequestError as e:
            # Network failures/timeouts
            logger.warning(f"PokeAPI network error for {path}: {str(e)}")
            return None
        except ValueError:
            logger.warning(f"PokeAPI returned a non-JSON body for {path}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"PokeAPI returned an unexpected document for {path}")
            return None
        return data

    async def get_pokemon(self, name_or_id) -> Optional[dict]:
        key = str(name_or_id).strip().lower()
        if not key:
            return None
        return await self.fetch(f"/pokemon/{key}")

    async def get_species(self, external_id: int) -> Optional[dict]:
        return await self.fetch(f"/pokemon-species/{external_id}")

    async def get_type(self, name: str) -> Optional[dict]:
        key = name.strip().lower()
        if not key:
            return None
        return await self.fetch(f"/type/{key}")

    async def probe(self, url: str) -> bool:
        """HEAD check: True only for 2xx/3xx answers. Redirects are not followed."""
        try:
            response = await self.client.head(url, follow_redirects=False)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.info(f"Probe failed for {url}: {str(e)}")
            return False
        return 200 <= response.status_code < 400

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
