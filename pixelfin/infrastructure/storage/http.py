"""Remote key/value storage over HTTP"""

from typing import Optional
from urllib.parse import quote

import httpx

from pixelfin.config import settings
from pixelfin.domain.exceptions import StorageReadError, StorageWriteError


class HttpStorage:
    """
    Client for a remote key/value endpoint.

    Protocol:
    - GET    {base}/kv/{key}  -> 200 {"value": "<blob>"} or 404 when absent
    - PUT    {base}/kv/{key}  <- {"value": "<blob>"}
    - DELETE {base}/kv/{key}  -> 2xx, 404 treated as already removed
    Calls are not retried; a failure is final for that attempt.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.storage_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _url(self, key: str) -> str:
        return f"{self.base_url}/kv/{quote(key, safe='')}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get(self, key: str) -> Optional[str]:
        async with self._client() as client:
            try:
                response = await client.get(self._url(key))
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                value = response.json()["value"]
                if value is not None and not isinstance(value, str):
                    raise TypeError("value must be a string")
                return value

            except httpx.TimeoutException as e:
                raise StorageReadError(f"Storage API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise StorageReadError(f"Storage API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise StorageReadError(f"Storage API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise StorageReadError(f"Invalid response from storage API: {e}") from e

    async def set(self, key: str, value: str) -> None:
        async with self._client() as client:
            try:
                response = await client.put(self._url(key), json={"value": value})
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise StorageWriteError(f"Storage API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise StorageWriteError(f"Storage API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise StorageWriteError(f"Storage API unreachable: {e}") from e

    async def remove(self, key: str) -> None:
        async with self._client() as client:
            try:
                response = await client.delete(self._url(key))
                if response.status_code == 404:
                    return
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise StorageWriteError(f"Storage API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise StorageWriteError(f"Storage API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise StorageWriteError(f"Storage API unreachable: {e}") from e
