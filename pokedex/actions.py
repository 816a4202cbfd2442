from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from .models import Pokemon, PokemonImage


__all__ = (
    "FavoritePokemon",
    "FetchPokemon",
    "ImageResponse",
    "LoadImage",
    "NextPokemon",
    "PokedexAction",
    "PokemonResponse",
    "PreviousPokemon",
)


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class PreviousPokemon(_Action):
    kind: Literal["previous_pokemon"] = "previous_pokemon"


class NextPokemon(_Action):
    kind: Literal["next_pokemon"] = "next_pokemon"


class FavoritePokemon(_Action):
    kind: Literal["favorite_pokemon"] = "favorite_pokemon"


class FetchPokemon(_Action):
    kind: Literal["fetch_pokemon"] = "fetch_pokemon"


class PokemonResponse(_Action):
    kind: Literal["pokemon_response"] = "pokemon_response"
    pokemon: Pokemon


class LoadImage(_Action):
    kind: Literal["load_image"] = "load_image"
    url: str


class ImageResponse(_Action):
    kind: Literal["image_response"] = "image_response"
    image: PokemonImage


PokedexAction = Union[
    PreviousPokemon,
    NextPokemon,
    FavoritePokemon,
    FetchPokemon,
    PokemonResponse,
    LoadImage,
    ImageResponse,
]
