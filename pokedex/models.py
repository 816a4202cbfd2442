"""Entities fetched from PokeAPI.

Only the fields the pokedex reads are modelled; everything else in the
payload is ignored. Every field is optional so that an empty ``Pokemon()``
stands in for a failed fetch.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


__all__ = (
    "NamedResource",
    "Pokemon",
    "PokemonImage",
    "PokemonTypeSlot",
    "Sprites",
)


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class NamedResource(_Entity):
    name: Optional[str] = None
    url: Optional[str] = None


class Sprites(_Entity):
    front_default: Optional[str] = None


class PokemonTypeSlot(_Entity):
    slot: Optional[int] = None
    type: Optional[NamedResource] = None


class Pokemon(_Entity):
    id: Optional[int] = None
    name: Optional[str] = None
    sprites: Optional[Sprites] = None
    types: tuple[PokemonTypeSlot, ...] = ()

    @property
    def sprite_url(self) -> Optional[str]:
        if self.sprites is None or not self.sprites.front_default:
            return None

        return self.sprites.front_default

    @property
    def type_names(self) -> list[str]:
        return [
            slot.type.name
            for slot in self.types
            if slot.type is not None and slot.type.name
        ]


class PokemonImage(_Entity):
    url: str
    data: bytes = b""
    content_type: Optional[str] = None
