"""
Response normalization — RawResponse to structured data or a ZaloError.

Typical envelope:
    {"error_code": 0, "error_message": "", "data": "<base64 ciphertext>"}

Errors are checked on the outer envelope and again on the decrypted payload.
A non-zero ``error_code`` at either level is an ApiError.
"""

import logging
from typing import Any

from zca.crypto.cipher import decrypt_params, parse_plain
from zca.errors import ApiError, Result
from zca.transport.base import RawResponse

logger = logging.getLogger(__name__)


def check_error(payload: Any) -> Result[Any]:
    """Fail on a non-zero error_code; pass anything else through."""
    if isinstance(payload, dict) and "error_code" in payload:
        code = payload["error_code"]
        if code not in (0, None):
            message = payload.get("error_message") or "Unknown error"
            return Result.failure(ApiError(code, message))
    return Result.success(payload)


def extract_data(payload: Any) -> Any:
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _check_status(raw: RawResponse) -> Result[RawResponse]:
    if not raw.is_success:
        logger.warning("HTTP %s from API", raw.status)
        return Result.failure(ApiError(raw.status, "HTTP request failed", {"body": raw.body[:200]}))
    return Result.success(raw)


def _envelope(raw: RawResponse) -> Result[Any]:
    status = _check_status(raw)
    if not status.ok:
        return status
    body = parse_plain(raw.body)
    if not body.ok:
        return body
    return check_error(body.value)


def decrypt_data(payload: Any, symmetric_key: str) -> Result[Any]:
    """Decrypt the ``data`` field when it is ciphertext; plaintext JSON objects are returned untouched."""
    if not isinstance(payload, dict) or "data" not in payload:
        return Result.success(payload)
    data = payload["data"]
    if isinstance(data, str):
        return decrypt_params(symmetric_key, data)
    return Result.success(data)


def parse_encrypted(raw: RawResponse, symmetric_key: str) -> Result[Any]:
    envelope = _envelope(raw)
    if not envelope.ok:
        return envelope
    inner = decrypt_data(envelope.value, symmetric_key)
    if not inner.ok:
        return inner
    checked = check_error(inner.value)
    if not checked.ok:
        return checked
    return Result.success(extract_data(checked.value))


def parse_unencrypted(raw: RawResponse) -> Result[Any]:
    envelope = _envelope(raw)
    if not envelope.ok:
        return envelope
    return Result.success(extract_data(envelope.value))


def normalize(raw: Result[RawResponse], symmetric_key: str, encrypted: bool = True) -> Result[Any]:
    """Entry point used by the envelope: dispatch result in, data or error out."""
    if not raw.ok:
        return raw
    if encrypted:
        return parse_encrypted(raw.value, symmetric_key)  # type: ignore[arg-type]
    return parse_unencrypted(raw.value)  # type: ignore[arg-type]
