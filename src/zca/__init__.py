"""
zca — client for the Zalo web chat API.

Every call goes through the secure request envelope: parameters are
AES-CBC encrypted under the session key, routed to the host serving the
requested service, and the response is decrypted and normalized into
either data or a typed ZaloError.
"""

from zca.client import AsyncZaloClient, ZaloClient
from zca.envelope import SecureEnvelope
from zca.errors import (
    ApiError,
    DecryptError,
    ErrorCategory,
    InvalidInputError,
    NetworkError,
    Result,
    ServiceNotFoundError,
    ZaloError,
)
from zca.models.credentials import Credentials
from zca.models.session import SessionContext
from zca.transport.base import RawResponse, Transport

__version__ = "0.1.0"
__all__ = [
    "AsyncZaloClient",
    "ZaloClient",
    "SecureEnvelope",
    "SessionContext",
    "Credentials",
    "Transport",
    "RawResponse",
    "Result",
    "ZaloError",
    "ErrorCategory",
    "InvalidInputError",
    "ServiceNotFoundError",
    "NetworkError",
    "ApiError",
    "DecryptError",
]
