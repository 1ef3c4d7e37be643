"""
Zalo client error types and the Result value returned by the request envelope.

Every failure of the envelope is reported as a ZaloError carried inside a
Result; nothing in the core raises. Callers that prefer exceptions call
``Result.unwrap()``.
"""

import asyncio
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

import httpx

T = TypeVar("T")
U = TypeVar("U")


class ErrorCategory(str, Enum):
    INVALID_INPUT = "invalid_input"
    SERVICE_NOT_FOUND = "service_not_found"
    NETWORK = "network"
    API = "api"
    DECRYPT_FAILURE = "decrypt_failure"


class ZaloError(Exception):
    def __init__(
        self,
        category: ErrorCategory,
        message: str,
        code: Union[int, str, None] = None,
        retryable: bool = False,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.category = category
        self.code = code
        self.message = message
        self.retryable = retryable
        self.details = details or {}

    def __str__(self) -> str:
        if self.code is None:
            return f"[{self.category.value}] {self.message}"
        return f"[{self.category.value}:{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.category.value!r}, code={self.code!r}, message={self.message!r})"


class InvalidInputError(ZaloError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCategory.INVALID_INPUT, message, details=details)


class ServiceNotFoundError(ZaloError):
    def __init__(self, service: str):
        super().__init__(
            ErrorCategory.SERVICE_NOT_FOUND,
            f"Service URL not found for {service}",
            details={"service": service},
        )
        self.service = service


class NetworkError(ZaloError):
    def __init__(self, message: str, retryable: bool = True, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCategory.NETWORK, message, retryable=retryable, details=details)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "NetworkError":
        """Map a transport-level exception onto the network category."""
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
            message = "Connection timeout"
        elif isinstance(exc, ConnectionRefusedError):
            message = "Connection refused"
        else:
            message = f"Request failed: {exc}" if str(exc) else "Request failed"
        return cls(message, details={"reason": type(exc).__name__})


class ApiError(ZaloError):
    def __init__(self, code: Union[int, str, None], message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCategory.API, message, code=code, details=details)


class DecryptError(ZaloError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCategory.DECRYPT_FAILURE, message, details=details)


class Result(Generic[T]):
    """Either a success value or a ZaloError."""

    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[ZaloError] = None):
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ZaloError) -> "Result[Any]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        if self.error is not None:
            return Result(error=self.error)
        return Result(value=fn(self.value))  # type: ignore[arg-type]

    def __repr__(self) -> str:
        if self.error is not None:
            return f"Result(error={self.error!r})"
        return f"Result(value={self.value!r})"
