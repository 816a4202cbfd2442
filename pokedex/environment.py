from __future__ import annotations

from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .api import PokeApiClient
from .config import PokedexConfig
from .models import Pokemon, PokemonImage


__all__ = (
    "FetchPokemonFn",
    "LoadImageFn",
    "PokedexEnvironment",
)


FetchPokemonFn = Callable[[int], Awaitable[Pokemon]]
LoadImageFn = Callable[[str], Awaitable[PokemonImage]]


class PokedexEnvironment(BaseModel):
    """Dependencies available to the pokedex action handler.

    Swap the whole environment to move between the live API and test
    doubles; an environment never changes once built. A live environment
    that created its own client closes it in :meth:`aclose`, which the
    store calls on teardown.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pokemon_count: int = Field(ge=1)
    fetch_pokemon: FetchPokemonFn
    load_image: LoadImageFn
    owned_client: Optional[PokeApiClient] = Field(default=None, exclude=True, repr=False)

    @classmethod
    def mock(cls, pokemon_count: int = 9) -> PokedexEnvironment:
        async def fetch_pokemon(index: int) -> Pokemon:
            return Pokemon(name="mock gengar")

        async def load_image(url: str) -> PokemonImage:
            return PokemonImage(url=url)

        return cls(
            pokemon_count=pokemon_count,
            fetch_pokemon=fetch_pokemon,
            load_image=load_image
        )

    @classmethod
    def live(
        cls,
        client: Optional[PokeApiClient] = None,
        config: Optional[PokedexConfig] = None
    ) -> PokedexEnvironment:
        owned_client = None

        if client is None:
            client = owned_client = PokeApiClient(config)

        return cls(
            pokemon_count=client.config.pokemon_count,
            fetch_pokemon=client.fetch_pokemon,
            load_image=client.load_image,
            owned_client=owned_client
        )

    async def aclose(self) -> None:
        if self.owned_client is not None:
            await self.owned_client.close()
