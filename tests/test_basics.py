"""Basic unit tests for the zca package."""

import pytest

from zca import (
    ApiError,
    AsyncZaloClient,
    DecryptError,
    ErrorCategory,
    InvalidInputError,
    NetworkError,
    Result,
    ServiceNotFoundError,
    ZaloClient,
    ZaloError,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert ZaloClient is not None
    assert AsyncZaloClient is not None


def test_error_hierarchy():
    for cls in (InvalidInputError, ServiceNotFoundError, NetworkError, ApiError, DecryptError):
        assert issubclass(cls, ZaloError)


def test_error_attributes():
    err = ApiError(-1, "Invalid message")
    assert err.category == ErrorCategory.API
    assert err.code == -1
    assert err.retryable is False
    assert str(err) == "[api:-1] Invalid message"
    assert err.details == {}

    missing = ServiceNotFoundError("alias")
    assert missing.service == "alias"
    assert missing.details == {"service": "alias"}
    assert str(missing) == "[service_not_found] Service URL not found for alias"


def test_network_error_from_exception():
    refused = NetworkError.from_exception(ConnectionRefusedError())
    assert refused.message == "Connection refused"
    assert refused.retryable is True
    assert refused.details == {"reason": "ConnectionRefusedError"}

    other = NetworkError.from_exception(OSError("boom"))
    assert other.message == "Request failed: boom"


def test_result_success():
    result = Result.success({"a": 1})
    assert result.ok
    assert result.unwrap() == {"a": 1}
    assert result.map(lambda d: d["a"]).value == 1


def test_result_failure():
    result = Result.failure(DecryptError("Invalid JSON"))
    assert not result.ok
    assert result.map(lambda d: d["a"]).error is result.error
    with pytest.raises(DecryptError):
        result.unwrap()


def test_category_values():
    assert [c.value for c in ErrorCategory] == [
        "invalid_input", "service_not_found", "network", "api", "decrypt_failure",
    ]
