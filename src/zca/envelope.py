"""
Secure request envelope — the path every endpoint call takes:

    params -> encrypt -> resolve service -> build URL -> dispatch -> normalize

GET calls carry the ciphertext as the ``params`` query parameter. POST calls
send it as the ``params`` form field and keep only the protocol markers (and
``nretry`` when given) on the URL. Session and credentials are read-only, so
one envelope may serve any number of concurrent calls.
"""

import logging
from typing import Any, Mapping, Optional

from zca import services
from zca.crypto.cipher import Params, encrypt_params
from zca.dispatcher import RequestDispatcher
from zca.errors import InvalidInputError, Result
from zca.models.credentials import Credentials
from zca.models.session import SessionContext
from zca.response import normalize
from zca.transport.base import Transport
from zca.url import PARAMS_FIELD, build_url, form_body

logger = logging.getLogger(__name__)

GET = "GET"
POST = "POST"


class SecureEnvelope:
    def __init__(self, session: SessionContext, credentials: Credentials, transport: Transport):
        self._session = session
        self._credentials = credentials
        self._dispatcher = RequestDispatcher(transport)

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def transport(self) -> Transport:
        return self._dispatcher.transport

    def url_for(
        self,
        service: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        ciphertext: Optional[str] = None,
        nretry: Optional[int] = None,
    ) -> Result[str]:
        host = services.resolve_for_session(self._session, service)
        if not host.ok:
            return host
        logger.debug("service %s -> %s", service, host.value)
        return Result.success(build_url(host.value, path, self._session, query, ciphertext=ciphertext, nretry=nretry))  # type: ignore[arg-type]

    async def request(
        self,
        method: str,
        service: str,
        path: str,
        params: Optional[Params] = None,
        *,
        query: Optional[Mapping[str, Any]] = None,
        nretry: Optional[int] = None,
        encrypted_response: bool = True,
    ) -> Result[Any]:
        if method not in (GET, POST):
            return Result.failure(InvalidInputError(f"Unsupported method: {method}"))

        ciphertext: Optional[str] = None
        if params is not None:
            encrypted = encrypt_params(self._session.symmetric_key, params)
            if not encrypted.ok:
                return encrypted
            ciphertext = encrypted.value

        if method == GET:
            url = self.url_for(service, path, query, ciphertext=ciphertext, nretry=nretry)
            if not url.ok:
                return url
            raw = await self._dispatcher.get(url.value, self._credentials)  # type: ignore[arg-type]
        else:
            url = self.url_for(service, path, query, nretry=nretry)
            if not url.ok:
                return url
            body = form_body({PARAMS_FIELD: ciphertext})
            raw = await self._dispatcher.post(url.value, body, self._credentials)  # type: ignore[arg-type]

        return normalize(raw, self._session.symmetric_key, encrypted=encrypted_response)

    async def get(self, service: str, path: str, params: Optional[Params] = None, **kwargs: Any) -> Result[Any]:
        return await self.request(GET, service, path, params, **kwargs)

    async def post(self, service: str, path: str, params: Optional[Params] = None, **kwargs: Any) -> Result[Any]:
        return await self.request(POST, service, path, params, **kwargs)
