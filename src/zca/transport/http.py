"""
httpx transport — production implementation of the Transport capability.

Cookies live in the client's own jar (seeded from Credentials and updated
from Set-Cookie); nothing is rebuilt per call.
"""

from typing import Mapping, Optional

import httpx

from zca.models.credentials import Credentials
from zca.transport.base import RawResponse

DEFAULT_TIMEOUT_S = 30.0


class HttpxTransport:
    def __init__(
        self,
        cookies: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        headers: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(
            cookies=dict(cookies or {}),
            headers=dict(headers or {}),
            timeout=timeout,
            follow_redirects=True,
        )

    @classmethod
    def for_credentials(cls, credentials: Credentials, timeout: float = DEFAULT_TIMEOUT_S) -> "HttpxTransport":
        return cls(cookies=credentials.cookie_dict(), timeout=timeout)

    @staticmethod
    def _raw(resp: httpx.Response) -> RawResponse:
        return RawResponse(status=resp.status_code, headers=dict(resp.headers), body=resp.text)

    async def get(self, url: str, headers: Mapping[str, str]) -> RawResponse:
        resp = await self._client.get(url, headers=dict(headers))
        return self._raw(resp)

    async def post(self, url: str, body: str, headers: Mapping[str, str]) -> RawResponse:
        resp = await self._client.post(url, content=body.encode("utf-8"), headers=dict(headers))
        return self._raw(resp)

    async def close(self) -> None:
        await self._client.aclose()
