from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from pokedex import PokeApiClient, PokeApiError, PokedexConfig


class _FakeResponse:
    def __init__(self, status: int, body: bytes, content_type: str = "application/json") -> None:
        self.status = status
        self._body = body
        self.headers = {"content-type": content_type}

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def read(self) -> bytes:
        return self._body


class _FakeSession:
    def __init__(self, responses: dict[str, Any]) -> None:
        self._responses = responses
        self.requested: list[str] = []
        self.closed = False

    def get(self, url: str) -> _FakeResponse:
        self.requested.append(url)
        response = self._responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


_GENGAR = {
    "id": 94,
    "name": "gengar",
    "height": 15,
    "sprites": {"front_default": "https://img.example/94.png", "back_default": None},
    "types": [{"slot": 1, "type": {"name": "ghost", "url": "https://pokeapi.co/api/v2/type/8/"}}],
}


def _client(responses: dict[str, Any]) -> tuple[PokeApiClient, _FakeSession]:
    session = _FakeSession(responses)
    client = PokeApiClient(PokedexConfig(), session=session)  # type: ignore[arg-type]
    return client, session


@pytest.mark.asyncio
async def test_fetch_pokemon_parses_payload() -> None:
    url = "https://pokeapi.co/api/v2/pokemon/94"
    client, session = _client({url: _FakeResponse(200, json.dumps(_GENGAR).encode())})

    pokemon = await client.fetch_pokemon(94)

    assert session.requested == [url]
    assert pokemon.name == "gengar"
    assert pokemon.sprite_url == "https://img.example/94.png"
    assert pokemon.type_names == ["ghost"]


@pytest.mark.asyncio
async def test_fetch_pokemon_non_200_raises() -> None:
    url = "https://pokeapi.co/api/v2/pokemon/0"
    client, _ = _client({url: _FakeResponse(404, b"Not Found", "text/plain")})

    with pytest.raises(PokeApiError) as excinfo:
        await client.fetch_pokemon(0)

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == url


@pytest.mark.asyncio
async def test_fetch_pokemon_invalid_json_raises() -> None:
    url = "https://pokeapi.co/api/v2/pokemon/1"
    client, _ = _client({url: _FakeResponse(200, b"<html>")})

    with pytest.raises(PokeApiError):
        await client.fetch_pokemon(1)


@pytest.mark.asyncio
async def test_client_error_is_wrapped() -> None:
    url = "https://pokeapi.co/api/v2/pokemon/1"
    client, _ = _client({url: aiohttp.ClientConnectionError("refused")})

    with pytest.raises(PokeApiError) as excinfo:
        await client.fetch_pokemon(1)

    assert isinstance(excinfo.value.__cause__, aiohttp.ClientError)


@pytest.mark.asyncio
async def test_load_image_returns_bytes() -> None:
    url = "https://img.example/94.png"
    client, _ = _client({url: _FakeResponse(200, b"\x89PNG", "image/png")})

    image = await client.load_image(url)

    assert image.url == url
    assert image.data == b"\x89PNG"
    assert image.content_type == "image/png"


@pytest.mark.asyncio
async def test_load_empty_image_raises() -> None:
    url = "https://img.example/none.png"
    client, _ = _client({url: _FakeResponse(200, b"", "image/png")})

    with pytest.raises(PokeApiError):
        await client.load_image(url)


@pytest.mark.asyncio
async def test_external_session_is_not_closed() -> None:
    client, session = _client({})

    async with client:
        pass

    assert not session.closed
