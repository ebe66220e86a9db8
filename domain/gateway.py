"""Network gateway to the recipe catalog.

Every request races a fixed timeout. `asyncio.wait_for` cancels the request
task when the timer wins, so a timed out call does not keep running in the
background.
"""
import asyncio
import logging
from typing import Any

import httpx

from domain.errors import NetworkError, NotFoundError, RequestTimeoutError


logger = logging.getLogger(__name__)


API_URL = "https://forkify-api.herokuapp.com/api/v2/recipes/"
TIMEOUT_SEC = 10.0


def catalog_client_factory(
    base_url: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    base_url = API_URL if base_url is None else base_url
    # No client timeout: `Gateway.call` races its own deadline.
    return httpx.AsyncClient(
        base_url=base_url,
        headers={"Content-Type": "application/json"},
        timeout=None,
        transport=transport,
    )


class Gateway:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        api_key: str | None = None,
        timeout_sec: float = TIMEOUT_SEC,
    ) -> None:
        self.client = catalog_client_factory() if client is None else client
        self.api_key = api_key
        self.timeout_sec = timeout_sec

    def _params(self, params: dict[str, str] | None) -> dict[str, str]:
        params = {} if params is None else dict(params)
        if self.api_key:
            params["key"] = self.api_key
        return params

    async def call(
        self,
        target: str,
        payload: dict[str, Any] | None = None,
        *,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET `target`, or POST `payload` to it, and return the decoded body."""
        params = self._params(params)
        if payload is None:
            request = self.client.get(target, params=params)
        else:
            request = self.client.post(target, params=params, json=payload)

        try:
            resp = await asyncio.wait_for(request, timeout=self.timeout_sec)
        except (TimeoutError, httpx.TimeoutException):
            logger.warning("Timed out after %ss: %r", self.timeout_sec, target)
            raise RequestTimeoutError(self.timeout_sec) from None
        except httpx.HTTPError as e:
            logger.warning("Transport failure for %r: %r", target, e)
            raise NetworkError(f"Could not reach the recipe catalog: {e}") from e

        return self._decode(resp)

    def _decode(self, resp: httpx.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.is_success:
            message = resp.reason_phrase
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            if resp.status_code == 404:
                raise NotFoundError(message, resp.status_code)
            raise NetworkError(message, resp.status_code)

        if not isinstance(data, dict):
            raise NetworkError("Malformed response body.", resp.status_code)
        return data

    async def aclose(self) -> None:
        await self.client.aclose()
