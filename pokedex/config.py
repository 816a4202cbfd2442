from __future__ import annotations

import dataclasses
import os

from typing import Any, Optional


__all__ = (
    "DEFAULT_BASE_URL",
    "DEFAULT_POKEMON_COUNT",
    "DEFAULT_USER_AGENT",
    "PokedexConfig",
)


DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_POKEMON_COUNT = 1154
DEFAULT_USER_AGENT = "pokedex-cachestore/0.1"


def _env_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None

    return float(value)


@dataclasses.dataclass(frozen=True)
class PokedexConfig:
    """Live environment configuration.

    Parameters
    ----------
    base_url : str
        PokeAPI root, without trailing slash.
    pokemon_count : int
        Highest valid pokemon index; navigation never goes past it.
    request_timeout : float or None
        Total timeout in seconds for one HTTP request. ``None`` leaves
        requests unbounded.
    user_agent : str
        Value of the ``User-Agent`` header.
    """

    base_url: str = DEFAULT_BASE_URL
    pokemon_count: int = DEFAULT_POKEMON_COUNT
    request_timeout: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.pokemon_count < 1:
            raise ValueError("pokemon_count must be at least 1")

        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> PokedexConfig:
        """Create configuration from ``POKEDEX_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        kwargs: dict[str, Any] = {}

        if "POKEDEX_BASE_URL" in env:
            kwargs["base_url"] = env["POKEDEX_BASE_URL"]

        if "POKEDEX_POKEMON_COUNT" in env:
            kwargs["pokemon_count"] = int(env["POKEDEX_POKEMON_COUNT"])

        if "POKEDEX_REQUEST_TIMEOUT" in env:
            kwargs["request_timeout"] = _env_float(env["POKEDEX_REQUEST_TIMEOUT"])

        if "POKEDEX_USER_AGENT" in env:
            kwargs["user_agent"] = env["POKEDEX_USER_AGENT"]

        kwargs.update(overrides)

        return cls(**kwargs)
