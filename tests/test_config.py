from __future__ import annotations

import pytest
from pydantic import ValidationError

from pokedex import PokedexConfig, PokedexEnvironment, PokeApiClient, create_store


def test_defaults() -> None:
    config = PokedexConfig()

    assert config.base_url == "https://pokeapi.co/api/v2"
    assert config.pokemon_count == 1154
    assert config.request_timeout is None


def test_base_url_trailing_slash_is_stripped() -> None:
    assert PokedexConfig(base_url="http://localhost:8000/api/").base_url == "http://localhost:8000/api"


def test_invalid_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        PokedexConfig(pokemon_count=0)


def test_from_env_with_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POKEDEX_BASE_URL", "http://localhost:8000/api/v2")
    monkeypatch.setenv("POKEDEX_POKEMON_COUNT", "151")
    monkeypatch.setenv("POKEDEX_REQUEST_TIMEOUT", "2.5")

    config = PokedexConfig.from_env(user_agent="tests")

    assert config.base_url == "http://localhost:8000/api/v2"
    assert config.pokemon_count == 151
    assert config.request_timeout == 2.5
    assert config.user_agent == "tests"


def test_from_env_blank_timeout_means_unbounded(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POKEDEX_REQUEST_TIMEOUT", " ")

    assert PokedexConfig.from_env().request_timeout is None


def test_live_environment_uses_client_config() -> None:
    client = PokeApiClient(PokedexConfig(pokemon_count=151))

    environment = PokedexEnvironment.live(client)

    assert environment.pokemon_count == 151
    assert environment.fetch_pokemon == client.fetch_pokemon
    assert environment.load_image == client.load_image


def test_live_environment_builds_client_from_config() -> None:
    environment = PokedexEnvironment.live(config=PokedexConfig(pokemon_count=10))

    assert environment.pokemon_count == 10


def test_environment_is_immutable() -> None:
    environment = PokedexEnvironment.mock()

    with pytest.raises(ValidationError):
        environment.pokemon_count = 3  # type: ignore[misc]


@pytest.mark.asyncio
async def test_store_close_closes_session_created_by_live_environment() -> None:
    environment = PokedexEnvironment.live(config=PokedexConfig(pokemon_count=10))
    assert environment.owned_client is not None
    session = environment.owned_client._session()  # type: ignore[attr-defined]
    store = create_store(environment)

    await store.close()

    assert session.closed


@pytest.mark.asyncio
async def test_store_close_leaves_caller_client_open() -> None:
    client = PokeApiClient(PokedexConfig())
    session = client._session()  # type: ignore[attr-defined]
    environment = PokedexEnvironment.live(client)
    store = create_store(environment)

    await store.close()

    assert environment.owned_client is None
    assert not session.closed

    await client.close()
    assert session.closed
