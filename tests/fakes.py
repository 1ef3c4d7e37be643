"""Test doubles: a fixed session key and an in-process fake transport."""

import json
from typing import Any, Optional

from zca.crypto.cipher import encrypt_params
from zca.transport.base import RawResponse

# base64 of b"0123456789abcdef0123456789abcdef" (AES-256)
SECRET_KEY = "MDEyMzQ1Njc4OWFiY2RlZjAxMjM0NTY3ODlhYmNkZWY="


def encrypted_body(data: Any, error_code: int = 0, key: str = SECRET_KEY) -> str:
    return json.dumps({"error_code": error_code, "error_message": "", "data": encrypt_params(key, data).unwrap()})


def ok_response(data: Any) -> RawResponse:
    return RawResponse(status=200, body=encrypted_body(data))


class FakeTransport:
    """Records every call and answers from a queue (or raises `exc`)."""

    def __init__(self, *responses: RawResponse, exc: Optional[BaseException] = None):
        self.calls: list[dict[str, Any]] = []
        self._responses = list(responses)
        self._exc = exc

    def _next(self) -> RawResponse:
        if self._exc is not None:
            raise self._exc
        if self._responses:
            return self._responses.pop(0)
        return ok_response({})

    async def get(self, url, headers):
        self.calls.append({"method": "GET", "url": url, "body": None, "headers": dict(headers)})
        return self._next()

    async def post(self, url, body, headers):
        self.calls.append({"method": "POST", "url": url, "body": body, "headers": dict(headers)})
        return self._next()
