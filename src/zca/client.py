"""
AsyncZaloClient / ZaloClient — main entry points.

The transport is injected (or built from the credentials); there is no
process-wide transport switch, so tests pass a fake transport directly.
"""

import asyncio
import functools
import inspect
from typing import Any, Mapping, Optional

from zca.account import AccountAPI
from zca.contacts import ContactsAPI
from zca.envelope import SecureEnvelope
from zca.errors import Result
from zca.groups import GroupsAPI
from zca.models.credentials import Credentials
from zca.models.session import SessionContext
from zca.polls import PollsAPI
from zca.transport.base import Transport
from zca.transport.http import DEFAULT_TIMEOUT_S, HttpxTransport


class AsyncZaloClient:
    """Async client (primary)."""

    def __init__(
        self,
        session: SessionContext,
        credentials: Credentials,
        transport: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport.for_credentials(credentials, timeout)
        self._credentials = credentials
        self._bind(session)

    def _bind(self, session: SessionContext) -> None:
        self.envelope = SecureEnvelope(session, self._credentials, self._transport)
        self.groups = GroupsAPI(self.envelope)
        self.polls = PollsAPI(self.envelope)
        self.contacts = ContactsAPI(self.envelope)
        self.account = AccountAPI(self.envelope)

    @property
    def session(self) -> SessionContext:
        return self.envelope.session

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def replace_session(self, session: SessionContext) -> None:
        """Swap in a new session after re-login. Calls already in flight keep the old one."""
        self._bind(session)

    async def request(
        self,
        method: str,
        service: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Result[Any]:
        """Raw envelope call for endpoints without a dedicated wrapper."""
        return await self.envelope.request(method, service, path, dict(params) if params is not None else None, **kwargs)

    async def close(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.close()

    async def __aenter__(self) -> "AsyncZaloClient":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()


class _SyncAPI:
    """Runs the coroutine methods of an endpoint group on the owning client's loop."""

    def __init__(self, api: Any, run: Any):
        self._api = api
        self._run = run

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._api, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        @functools.wraps(attr)
        def call(*args: Any, **kwargs: Any) -> Any:
            return self._run(attr(*args, **kwargs))
        return call


class ZaloClient:
    """Sync wrapper around AsyncZaloClient. Runs the event loop internally."""

    def __init__(self, session: SessionContext, credentials: Credentials, **kwargs: Any):
        self._loop = asyncio.new_event_loop()
        self._async = AsyncZaloClient(session, credentials, **kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def session(self) -> SessionContext:
        return self._async.session

    @property
    def groups(self) -> Any:
        return _SyncAPI(self._async.groups, self._run)

    @property
    def polls(self) -> Any:
        return _SyncAPI(self._async.polls, self._run)

    @property
    def contacts(self) -> Any:
        return _SyncAPI(self._async.contacts, self._run)

    @property
    def account(self) -> Any:
        return _SyncAPI(self._async.account, self._run)

    def replace_session(self, session: SessionContext) -> None:
        self._async.replace_session(session)

    def request(self, method: str, service: str, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Result[Any]:
        return self._run(self._async.request(method, service, path, params, **kwargs))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "ZaloClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()
