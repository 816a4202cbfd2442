from __future__ import annotations

import logging

from typing import Optional

from cachestore import ActionHandler, Effect, MissingValueError, TypedCache, UnhandledActionError

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
from .environment import PokedexEnvironment
from .keys import PokedexKey
from .models import Pokemon


__all__ = (
    "FIRST_POKEMON_INDEX",
    "handle_pokedex_action",
    "pokedex_action_handler",
)


FIRST_POKEMON_INDEX = 1


_logger = logging.getLogger(__name__)


PokedexCache = TypedCache[PokedexKey]
PokedexEffect = Effect[PokedexAction]


def _step_index(cache: PokedexCache, step: int, upper_bound: int) -> bool:
    moved = False

    def move(index: Optional[int]) -> Optional[int]:
        nonlocal moved

        if index is None:
            return None

        if not FIRST_POKEMON_INDEX <= index + step <= upper_bound:
            return index

        moved = True

        return index + step

    cache.update(PokedexKey.POKEMON_INDEX, int, move)

    return moved


def _fetch_pokemon(cache: PokedexCache, environment: PokedexEnvironment) -> PokedexEffect:
    index = cache.get(PokedexKey.POKEMON_INDEX, int, 0)
    cache.remove(PokedexKey.POKEMON_IMAGE)

    async def fetch() -> PokedexAction:
        return PokemonResponse(pokemon=await environment.fetch_pokemon(index))

    def recover(error: Exception) -> PokedexAction:
        _logger.debug("Fetching pokemon #%d failed: %s", index, error)

        return PokemonResponse(pokemon=Pokemon())

    return Effect.run(fetch, recover=recover)


def _store_pokemon(cache: PokedexCache, pokemon: Pokemon) -> PokedexEffect:
    cache.set(PokedexKey.POKEMON, pokemon)

    url = pokemon.sprite_url

    if url is None:
        return Effect.none()

    return Effect.send(LoadImage(url=url))


def _load_image(url: str, environment: PokedexEnvironment) -> PokedexEffect:
    async def load() -> PokedexAction:
        return ImageResponse(image=await environment.load_image(url))

    return Effect.run(load)


def _toggle_favorite(cache: PokedexCache) -> None:
    pokemon: Pokemon = cache.resolve(PokedexKey.POKEMON, Pokemon)

    if not pokemon.name:
        raise MissingValueError(PokedexKey.POKEMON, "named Pokemon")

    name = pokemon.name

    def toggle(favorites: Optional[list[str]]) -> list[str]:
        if favorites is None:
            return [name]

        if name in favorites:
            return [favorite for favorite in favorites if favorite != name]

        return [*favorites, name]

    cache.update(PokedexKey.FAVORITES, list[str], toggle)


def handle_pokedex_action(
    cache: PokedexCache,
    action: PokedexAction,
    environment: PokedexEnvironment
) -> PokedexEffect:
    match action:
        case PreviousPokemon():
            if not _step_index(cache, -1, environment.pokemon_count):
                return Effect.none()

            return Effect.send(FetchPokemon())

        case NextPokemon():
            if not _step_index(cache, 1, environment.pokemon_count):
                return Effect.none()

            return Effect.send(FetchPokemon())

        case FetchPokemon():
            return _fetch_pokemon(cache, environment)

        case PokemonResponse(pokemon=pokemon):
            return _store_pokemon(cache, pokemon)

        case LoadImage(url=url):
            return _load_image(url, environment)

        case ImageResponse(image=image):
            cache.set(PokedexKey.POKEMON_IMAGE, image)

            return Effect.none()

        case FavoritePokemon():
            _toggle_favorite(cache)

            return Effect.none()

        case _:
            raise UnhandledActionError(action)


pokedex_action_handler: ActionHandler[PokedexKey, PokedexAction, PokedexEnvironment] = \
    ActionHandler(handle_pokedex_action)
