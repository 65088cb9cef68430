"""PokeAPI client for fetching Pokemon and move records."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import httpx

from pokesim.core.errors import CatalogRecordError
from pokesim.core.moves import Move
from pokesim.core.pokemon import Pokemon
from pokesim.data.normalize import normalize_move, normalize_pokemon
from pokesim.utils.config import config

logger = logging.getLogger(__name__)

# How many of a Pokemon's learnable moves to fetch when choosing a move set
MOVE_CANDIDATES = 12


class PokeAPIClient:
    """Client for interacting with PokeAPI.

    Records are cached in memory and as JSON files under the cache dir.
    HTTP failures are logged and reported as None.
    """

    def __init__(
        self,
        base_url: str | None = None,
        cache_dir: Path | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or config.pokeapi_base_url).rstrip("/")
        self.cache_dir = cache_dir or config.cache_dir
        self.timeout = timeout if timeout is not None else config.http_timeout
        self._transport = transport
        self._cache: dict[str, dict] = {}

    def _cache_file(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    async def _fetch(self, resource: str, ident: int | str) -> Optional[dict]:
        """Fetch `{base_url}/{resource}/{ident}` from memory, disk, or the API."""
        ident = str(ident).lower()
        key = f"{resource}_{ident}"
        if key in self._cache:
            logger.debug("Memory cache hit: %s", key)
            return self._cache[key]

        cache_file = self._cache_file(key)
        if cache_file.exists():
            logger.debug("Disk cache hit: %s", cache_file)
            with open(cache_file, "r") as f:
                data = json.load(f)
            self._cache[key] = data
            return data

        logger.debug("Cache miss, fetching %s/%s", resource, ident)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(f"{self.base_url}/{resource}/{ident}")
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("PokeAPI request for %s/%s failed: %s", resource, ident, e)
                return None

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        with open(cache_file, "w") as f:
            json.dump(data, f)
        self._cache[key] = data
        return data

    async def get_pokemon(self, pokemon: int | str) -> Optional[dict]:
        """Fetch a raw pokemon record by id or name."""
        return await self._fetch("pokemon", pokemon)

    async def get_move(self, move: int | str) -> Optional[dict]:
        """Fetch a raw move record by id or name."""
        return await self._fetch("move", move)

    async def get_moves(self, names: list[str]) -> list[Move]:
        """Fetch and normalize moves, skipping any that fail."""
        records = await asyncio.gather(*(self.get_move(n) for n in names))
        moves = []
        for name, record in zip(names, records):
            if record is None:
                continue
            try:
                moves.append(normalize_move(record))
            except CatalogRecordError as e:
                logger.warning("Skipping move %s: %s", name, e)
        return moves

    async def build_battle_pokemon(
        self,
        pokemon: int | str,
        move_names: list[str] | None = None,
        ability: str | None = None,
    ) -> Optional[Pokemon]:
        """Fetch a Pokemon and give it a battle-ready move set.

        Without `move_names`, up to MOVE_CANDIDATES learnable moves are
        fetched and the strongest damaging ones are kept.
        """
        record = await self.get_pokemon(pokemon)
        if record is None:
            return None

        if move_names:
            moves = await self.get_moves(move_names)
        else:
            learnable = [m["move"]["name"] for m in record.get("moves") or [] if m.get("move")]
            moves = select_moves(await self.get_moves(learnable[:MOVE_CANDIDATES]))

        return normalize_pokemon(record, ability=ability, moves=moves[: config.moves_per_pokemon])


def select_moves(moves: list[Move], limit: int | None = None) -> list[Move]:
    """Damaging moves first, strongest first, then the rest in order."""
    limit = limit or config.moves_per_pokemon
    damaging = sorted((m for m in moves if m.is_damaging), key=lambda m: m.power or 0, reverse=True)
    others = [m for m in moves if not m.is_damaging]
    return (damaging + others)[:limit]


# Synchronous wrapper for CLI usage
def build_battle_pokemon_sync(
    pokemon: int | str,
    move_names: list[str] | None = None,
    ability: str | None = None,
) -> Optional[Pokemon]:
    """Synchronous wrapper for building a battle-ready Pokemon."""
    client = PokeAPIClient()
    return asyncio.run(client.build_battle_pokemon(pokemon, move_names, ability))
