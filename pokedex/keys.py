from enum import Enum


__all__ = (
    "PokedexKey",
)


class PokedexKey(Enum):
    POKEMON_INDEX = "pokemon_index"
    POKEMON_IMAGE = "pokemon_image"
    FAVORITES = "favorites"
    POKEMON = "pokemon"
