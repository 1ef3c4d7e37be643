"""
Request dispatcher — sends one request through the injected transport.

No parsing, retries or timeouts happen here. A transport exception becomes a
retryable NetworkError value.
"""

import asyncio
import logging
from typing import Optional

import httpx

from zca.errors import NetworkError, Result
from zca.models.credentials import Credentials
from zca.transport.base import RawResponse, Transport

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

DEFAULT_HEADERS: dict[str, str] = {
    "accept": "application/json, text/plain, */*",
    "accept-encoding": "gzip, deflate",
    "accept-language": "en-US,en;q=0.9",
    "cache-control": "no-cache",
    "origin": "https://chat.zalo.me",
    "referer": "https://chat.zalo.me/",
    "sec-ch-ua": '"Chromium";v="128", "Not;A=Brand";v="24"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"macOS"',
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-site",
}

TRANSPORT_ERRORS = (httpx.RequestError, OSError, asyncio.TimeoutError)


def identity_headers(credentials: Credentials, content_type: Optional[str] = None) -> dict[str, str]:
    headers = {"user-agent": credentials.user_agent, "x-device-id": credentials.device_id, **DEFAULT_HEADERS}
    if content_type:
        headers["content-type"] = content_type
    return headers


def _redact(url: str) -> str:
    head, sep, query = url.partition("?")
    if not sep:
        return url
    parts = ["params=<redacted>" if p.startswith("params=") else p for p in query.split("&")]
    return f"{head}?{'&'.join(parts)}"


class RequestDispatcher:
    def __init__(self, transport: Transport):
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    async def get(self, url: str, credentials: Credentials) -> Result[RawResponse]:
        logger.debug("GET %s", _redact(url))
        try:
            resp = await self._transport.get(url, identity_headers(credentials))
        except TRANSPORT_ERRORS as e:
            logger.warning("GET %s failed: %s", _redact(url), type(e).__name__)
            return Result.failure(NetworkError.from_exception(e))
        return Result.success(resp)

    async def post(self, url: str, body: str, credentials: Credentials) -> Result[RawResponse]:
        logger.debug("POST %s", _redact(url))
        try:
            resp = await self._transport.post(url, body, identity_headers(credentials, FORM_CONTENT_TYPE))
        except TRANSPORT_ERRORS as e:
            logger.warning("POST %s failed: %s", _redact(url), type(e).__name__)
            return Result.failure(NetworkError.from_exception(e))
        return Result.success(resp)
