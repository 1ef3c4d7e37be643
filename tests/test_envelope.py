"""End-to-end envelope behaviour against a fake transport."""

import asyncio
import json
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from zca.crypto.cipher import decrypt_params, encrypt_params
from zca.envelope import SecureEnvelope
from zca.errors import ErrorCategory
from zca.models.session import SessionContext
from zca.transport.base import RawResponse

from fakes import SECRET_KEY, FakeTransport, ok_response


def query(url: str) -> dict:
    return dict(parse_qsl(urlsplit(url).query))


@pytest.mark.asyncio
async def test_post_url_and_body_shape(session, credentials):
    transport = FakeTransport(ok_response({"memberError": []}))
    env = SecureEnvelope(session, credentials, transport)
    params = {"grids": ["g1"], "imei": "imei-0001", "silent": 0, "language": "vi"}

    result = await env.post("group", "/api/group/leave", params)

    assert result.ok
    call = transport.calls[0]
    assert call["url"] == "https://group.example/api/group/leave?zpw_ver=645&zpw_type=30"
    assert "params" not in query(call["url"])
    assert call["body"].startswith("params=")
    assert "&" not in call["body"]
    ciphertext = dict(parse_qsl(call["body"]))["params"]
    assert ciphertext == encrypt_params(SECRET_KEY, params).value
    assert decrypt_params(SECRET_KEY, ciphertext).value == params


@pytest.mark.asyncio
async def test_get_url_carries_ciphertext(session, credentials):
    transport = FakeTransport()
    env = SecureEnvelope(session, credentials, transport)
    params = {"poll_id": 123, "option_ids": []}

    await env.get("group", "/api/poll/vote", params)

    call = transport.calls[0]
    assert call["body"] is None
    q = query(call["url"])
    assert q["zpw_ver"] == "645"
    assert q["zpw_type"] == "30"
    assert q["params"] == encrypt_params(SECRET_KEY, params).value
    assert decrypt_params(SECRET_KEY, q["params"]).value == params


@pytest.mark.asyncio
async def test_scenario_leave_group_url_prefix(credentials):
    session = SessionContext(owner_id="1", symmetric_key=SECRET_KEY,
                             service_directory={"group": ["https://group.example"]},
                             protocol_version=645, protocol_type=30)
    transport = FakeTransport()
    await SecureEnvelope(session, credentials, transport).post("group", "/api/group/leave", {"grids": ["1"]})
    url = transport.calls[0]["url"]
    assert url.startswith("https://group.example/api/group/leave?")
    assert "zpw_ver=645" in url and "zpw_type=30" in url


@pytest.mark.asyncio
async def test_scenario_missing_alias_service(credentials):
    session = SessionContext(owner_id="1", symmetric_key=SECRET_KEY, service_directory={})
    transport = FakeTransport()
    result = await SecureEnvelope(session, credentials, transport).get("alias", "/api/alias/list", {"page": 1})
    assert result.error.category == ErrorCategory.SERVICE_NOT_FOUND
    assert transport.calls == []


@pytest.mark.asyncio
async def test_scenario_embedded_error(session, credentials):
    body = json.dumps({"error_code": -1, "error_message": "Invalid message"})
    transport = FakeTransport(RawResponse(status=200, body=body))
    result = await SecureEnvelope(session, credentials, transport).post("chat", "/api/message/sms", {"msg": "hi"}, nretry=0)
    assert result.error.category == ErrorCategory.API
    assert result.error.message == "Invalid message"
    assert transport.calls[0]["url"].endswith("zpw_ver=645&zpw_type=30&nretry=0")


@pytest.mark.asyncio
async def test_scenario_connection_refused(session, credentials):
    transport = FakeTransport(exc=httpx.ConnectError("[Errno 111] Connection refused"))
    result = await SecureEnvelope(session, credentials, transport).get("chat", "/keepalive", {"imei": "x"})
    assert result.error.category == ErrorCategory.NETWORK
    assert result.error.retryable is True


@pytest.mark.asyncio
async def test_http_500_maps_to_api_error(session, credentials):
    transport = FakeTransport(RawResponse(status=500, body="oops"))
    result = await SecureEnvelope(session, credentials, transport).get("group", "/api/x", {})
    assert result.error.category == ErrorCategory.API
    assert result.error.code == 500
    assert result.error.retryable is False


@pytest.mark.asyncio
async def test_decrypted_response_is_returned_unchanged(session, credentials):
    payload = {"someKey": [1, {"x": None}], "CamelCase": True}
    transport = FakeTransport(ok_response(payload))
    result = await SecureEnvelope(session, credentials, transport).get("group", "/api/x", {})
    assert result.value == payload


@pytest.mark.asyncio
async def test_unencrypted_mode_skips_decryption(session, credentials):
    body = json.dumps({"error_code": 0, "data": {"config_vesion": 9}})
    transport = FakeTransport(RawResponse(status=200, body=body))
    result = await SecureEnvelope(session, credentials, transport).get(
        "chat", "/keepalive", {"imei": "x"}, encrypted_response=False)
    assert result.value == {"config_vesion": 9}


@pytest.mark.asyncio
async def test_encrypt_failure_stops_before_network(credentials):
    session = SessionContext(owner_id="1", symmetric_key="bad key", service_directory={"group": "https://g"})
    transport = FakeTransport()
    result = await SecureEnvelope(session, credentials, transport).post("group", "/p", {"a": 1})
    assert result.error.category == ErrorCategory.INVALID_INPUT
    assert transport.calls == []


@pytest.mark.asyncio
async def test_unsupported_method(session, credentials):
    result = await SecureEnvelope(session, credentials, FakeTransport()).request("PUT", "group", "/p")
    assert result.error.category == ErrorCategory.INVALID_INPUT


@pytest.mark.asyncio
async def test_get_without_params_has_no_params_query(session, credentials):
    transport = FakeTransport()
    await SecureEnvelope(session, credentials, transport).get("group", "/p")
    assert "params" not in query(transport.calls[0]["url"])


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_session(session, credentials):
    transport = FakeTransport(*[ok_response({"n": i}) for i in range(20)])
    env = SecureEnvelope(session, credentials, transport)
    results = await asyncio.gather(*(env.get("group", "/p", {"i": i}) for i in range(20)))
    assert sorted(r.value["n"] for r in results) == list(range(20))
    assert env.session is session
