"""HTTP client context used by every scenario.

One ``ApiContext`` per scenario: it is bound to a base URL, sends the default
JSON headers and must be disposed when the scenario ends, whatever the outcome.
Use it as an async context manager (or through ``api_context``) so disposal
happens on assertion failures as well.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional

import httpx

from restful_booker.config import BASE_URL, DEFAULT_HEADERS

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error for failed round trips."""


class ApiConnectionError(ApiError):
    """Raised when the service cannot be reached."""


class ApiResponseError(ApiError):
    """Raised when a response body cannot be interpreted."""


class ApiResponse:
    """Status code, reason phrase and body of a completed request."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self.status: int = response.status_code
        self.status_text: str = response.reason_phrase
        self.headers = response.headers
        self.text: str = response.text

    @property
    def url(self) -> str:
        return str(self._response.url)

    def json(self) -> Any:
        try:
            return self._response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ApiResponseError(
                f"{self._response.request.method} {self.url} returned a body that is not JSON: {self.text[:200]!r}"
            ) from exc

    def __repr__(self) -> str:
        return f"<ApiResponse {self.status} {self.status_text}>"


class ApiContext:
    def __init__(
        self,
        base_url: str = BASE_URL,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.headers: Dict[str, str] = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)
        self._client: Optional[httpx.AsyncClient] = httpx.AsyncClient(
            base_url=base_url,
            headers=self.headers,
            transport=transport,
        )

    @property
    def disposed(self) -> bool:
        return self._client is None

    async def _send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        if self._client is None:
            raise ApiError(f"cannot send {method} {path}: context already disposed")
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            response = await self._client.request(method, path, json=json_body, headers=headers)
        except httpx.TransportError as exc:
            raise ApiConnectionError(f"{method} {self.base_url}{path} failed: {exc}") from exc
        logger.debug("%s %s -> %s %s", method, path, response.status_code, response.reason_phrase)
        return ApiResponse(response)

    async def post(self, path: str, json_body: Any = None) -> ApiResponse:
        return await self._send("POST", path, json_body=json_body)

    async def get(self, path: str) -> ApiResponse:
        return await self._send("GET", path)

    async def delete(self, path: str, headers: Optional[Mapping[str, str]] = None) -> ApiResponse:
        return await self._send("DELETE", path, headers=headers)

    async def dispose(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()

    async def __aenter__(self) -> "ApiContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()


@asynccontextmanager
async def api_context(
    base_url: str = BASE_URL,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[ApiContext]:
    ctx = ApiContext(base_url, headers=headers, transport=transport)
    try:
        yield ctx
    finally:
        await ctx.dispose()
