"""Async HTTP gateway to the public PokeAPI.

This module provides the two lookups the game needs, by id and by type,
on top of ``httpx.AsyncClient``. By-id lookups fail loudly with
:class:`~pokeduel.utils.errors.FetchError`; by-type lookups are best-effort
and return an empty list on a non-success status.
"""

from typing import Any

import httpx

from pokeduel.core.mapper import map_creature, map_type_members
from pokeduel.schemas.types import Creature, TypeMember
from pokeduel.utils.errors import FetchError
from pokeduel.utils.telemetry import async_performance_timer, get_logger

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class PokeAPIClient:
    """Gateway for creature and type lookups.

    No retries are attempted. With ``timeout=None`` (the default) a hung
    request blocks its caller indefinitely.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the gateway.

        Args:
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds, or None for no timeout
            client: Pre-built HTTP client (ownership stays with the caller)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._logger = get_logger("pokeduel.pokeapi", base_url=self.base_url)

    async def initialize(self) -> None:
        """Create the underlying HTTP client if none was supplied."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
            self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PokeAPIClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def creature_url(self, id_or_name: int | str) -> str:
        return f"{self.base_url}/pokemon/{id_or_name}"

    def type_url(self, type_name: str) -> str:
        return f"{self.base_url}/type/{type_name}"

    async def fetch_by_id(self, id_or_name: int | str) -> Creature:
        """Fetch and map a single creature.

        Args:
            id_or_name: Creature id or name

        Returns:
            The mapped creature

        Raises:
            FetchError: On transport failure, non-success status or bad body
        """
        return await self._fetch_creature(self.creature_url(id_or_name), "pokemon")

    async def fetch_resource(self, url: str) -> Creature:
        """Fetch and map a creature from an absolute by-id-equivalent URL.

        Raises:
            FetchError: On transport failure, non-success status or bad body
        """
        return await self._fetch_creature(url, "pokemon")

    async def fetch_by_type(self, type_name: str) -> list[TypeMember]:
        """Fetch the creatures sharing a type.

        Args:
            type_name: Type name, e.g. ``"fire"``

        Returns:
            Listed members; empty when the API answers with a non-success status

        Raises:
            FetchError: On transport failure or malformed body
        """
        url = self.type_url(type_name)
        response = await self._get(url, "type")
        if not response.is_success:
            self._logger.warning(
                "Type lookup missed",
                type_name=type_name,
                status_code=response.status_code,
            )
            return []
        return map_type_members(self._parse(response, url))

    async def _fetch_creature(self, url: str, endpoint: str) -> Creature:
        response = await self._get(url, endpoint)
        if not response.is_success:
            raise FetchError(url, status_code=response.status_code)
        return map_creature(self._parse(response, url))

    async def _get(self, url: str, endpoint: str) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("PokeAPIClient not initialized")

        async with async_performance_timer(
            "pokeapi.get", endpoint=endpoint, logger=self._logger, url=url
        ) as timer:
            try:
                response = await self._client.get(url)
            except httpx.HTTPError as e:
                raise FetchError(url, reason=str(e) or type(e).__name__) from e
            if not response.is_success:
                timer.status = f"http_{response.status_code}"
        return response

    def _parse(self, response: httpx.Response, url: str) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise FetchError(
                url, status_code=response.status_code, reason="malformed body"
            ) from e
        if not isinstance(body, dict):
            raise FetchError(
                url, status_code=response.status_code, reason="malformed body"
            )
        return body
