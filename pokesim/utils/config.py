"""Configuration management for pokesim."""

from pathlib import Path

from pydantic import BaseModel


class Config(BaseModel):
    """Application configuration."""

    # Paths
    cache_dir: Path = Path.home() / ".pokesim" / "cache"

    # PokeAPI settings
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout: float = 10.0  # Seconds

    # Battle settings
    default_max_turns: int = 100
    moves_per_pokemon: int = 4


# Global config instance
config = Config()
