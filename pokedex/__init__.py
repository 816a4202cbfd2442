from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from cachestore import Store

from .actions import (
    FavoritePokemon,
    FetchPokemon,
    ImageResponse,
    LoadImage,
    NextPokemon,
    PokedexAction,
    PokemonResponse,
    PreviousPokemon
)
from .api import PokeApiClient, PokeApiError
from .config import PokedexConfig
from .content import PokedexContent
from .environment import PokedexEnvironment
from .handler import FIRST_POKEMON_INDEX, handle_pokedex_action, pokedex_action_handler
from .keys import PokedexKey
from .models import Pokemon, PokemonImage


__all__ = (
    "FIRST_POKEMON_INDEX",
    "FavoritePokemon",
    "FetchPokemon",
    "ImageResponse",
    "LoadImage",
    "NextPokemon",
    "PokeApiClient",
    "PokeApiError",
    "PokedexAction",
    "PokedexConfig",
    "PokedexContent",
    "PokedexEnvironment",
    "PokedexKey",
    "PokedexStore",
    "Pokemon",
    "PokemonImage",
    "PokemonResponse",
    "PreviousPokemon",

    "create_store",
    "handle_pokedex_action",
    "pokedex_action_handler",
)


PokedexStore = Store[PokedexKey, PokedexAction, PokedexEnvironment]


def create_store(
    environment: PokedexEnvironment,
    *,
    favorites: Optional[Iterable[str]] = None,
    index: int = FIRST_POKEMON_INDEX,
    debug: bool = False
) -> PokedexStore:
    store: PokedexStore = Store(
        {
            PokedexKey.POKEMON_INDEX: index,
            PokedexKey.FAVORITES: list(favorites or [])
        },
        pokedex_action_handler,
        environment
    )

    if debug:
        store.debug()

    return store
