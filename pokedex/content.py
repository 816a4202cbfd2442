from __future__ import annotations

from typing import Optional

from cachestore import Store

from .keys import PokedexKey
from .models import Pokemon, PokemonImage


__all__ = (
    "PokedexContent",
)


class PokedexContent:
    """Read-only view of a pokedex store for the presentation layer."""

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def pokemon(self) -> Optional[Pokemon]:
        return self._store.get(PokedexKey.POKEMON, Pokemon, None)

    @property
    def name(self) -> str:
        pokemon = self.pokemon

        if pokemon is None or pokemon.name is None:
            return ""

        return pokemon.name

    @property
    def title(self) -> str:
        return self.name.capitalize()

    @property
    def image(self) -> Optional[PokemonImage]:
        return self._store.get(PokedexKey.POKEMON_IMAGE, PokemonImage, None)

    @property
    def types(self) -> Optional[list[str]]:
        pokemon = self.pokemon

        if pokemon is None:
            return None

        return [name.capitalize() for name in pokemon.type_names]

    @property
    def favorites(self) -> list[str]:
        return list(self._store.get(PokedexKey.FAVORITES, list[str]))

    @property
    def is_favorite(self) -> bool:
        return bool(self.name) and self.name in self.favorites

    @property
    def is_loading(self) -> bool:
        return self.pokemon is None or self.image is None
