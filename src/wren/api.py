"""Content API client.

Fetches collection pages from the site in one of two representations,
following the Squarespace ``?format=`` convention:

- ``format="html"``: the rendered page markup, as ``str``
- ``format="json"``: the collection payload, decoded

Every failure surfaces as ``FetchFailure``: transport errors carry no
status, non-2xx responses carry theirs.
"""

import logging
from typing import Any, Literal, TypeAlias

import httpx

from wren.errors import FetchFailure

logger = logging.getLogger("wren.api")

Format: TypeAlias = Literal["html", "json"]


class ApiClient:
    """Async client for site collections.

    Owns its ``httpx.AsyncClient`` unless one is passed in::

        async with ApiClient("https://garber.co") as api:
            markup = await api.collection("/work/")
            data = await api.collection("/work/", format="json")
    """

    __slots__ = ("_base_url", "_client", "_owns_client", "_timeout")

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    async def collection(self, path: str, *, format: Format = "html") -> Any:
        """Fetch *path* as markup or decoded JSON.

        Raises:
            FetchFailure: on transport errors, non-2xx responses, or a
                JSON body that does not decode.
        """
        try:
            response = await self._client.get(
                self.url_for(path),
                params={"format": format},
                headers={"accept": "application/json" if format == "json" else "text/html"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("Fetch of %s failed: %s", path, exc)
            raise FetchFailure(path, None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.warning("Fetch of %s returned %d", path, response.status_code)
            raise FetchFailure(path, response.status_code, response.reason_phrase)

        if format == "json":
            try:
                return response.json()
            except ValueError as exc:
                raise FetchFailure(path, response.status_code, "invalid JSON body") from exc

        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
