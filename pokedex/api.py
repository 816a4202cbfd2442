from __future__ import annotations

import logging

from typing import Any, Optional

import aiohttp

from pydantic import ValidationError

from .config import PokedexConfig
from .models import Pokemon, PokemonImage


__all__ = (
    "PokeApiClient",
    "PokeApiError",
)


_logger = logging.getLogger(__name__)


class PokeApiError(Exception):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: str = ""
    ) -> None:
        self.status_code = status_code
        self.url = url

        super().__init__(message)


class PokeApiClient:
    """Fetches pokemon and their sprites from PokeAPI.

    Pass an existing ``aiohttp.ClientSession`` to share connection pools;
    otherwise one is created lazily and closed by :meth:`close`.
    """

    _config: PokedexConfig
    _http_session: Optional[aiohttp.ClientSession]
    _external_session: bool

    def __init__(
        self,
        config: Optional[PokedexConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        self._config = config or PokedexConfig()
        self._http_session = session
        self._external_session = session is not None

    @property
    def config(self) -> PokedexConfig:
        return self._config

    def _session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

            self._http_session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"user-agent": self._config.user_agent}
            )

        return self._http_session

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()

        self._http_session = None

    async def __aenter__(self) -> PokeApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def pokemon_url(self, index: int) -> str:
        return f"{self._config.base_url}/pokemon/{index}"

    async def _get(self, url: str) -> tuple[bytes, Optional[str]]:
        _logger.debug("GET %s", url)

        try:
            async with self._session().get(url) as response:
                body = await response.read()

                if response.status != 200:
                    raise PokeApiError(
                        f"HTTP {response.status} from {url}",
                        status_code=response.status,
                        url=url
                    )

                return body, response.headers.get("content-type")
        except PokeApiError:
            raise
        except aiohttp.ClientError as error:
            raise PokeApiError(f"Request to {url} failed: {error}", url=url) from error

    async def fetch_pokemon(self, index: int) -> Pokemon:
        url = self.pokemon_url(index)
        body, _ = await self._get(url)

        try:
            return Pokemon.model_validate_json(body)
        except ValidationError as error:
            raise PokeApiError(f"Invalid pokemon payload from {url}", url=url) from error

    async def load_image(self, url: str) -> PokemonImage:
        body, content_type = await self._get(url)

        if not body:
            raise PokeApiError(f"Empty image from {url}", url=url)

        return PokemonImage(url=url, data=body, content_type=content_type)
