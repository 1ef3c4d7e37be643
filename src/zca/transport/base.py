"""
Transport capability — the only place a request touches the network.

Implementations raise on transport failure (connection refused, timeout,
DNS); the dispatcher turns those exceptions into NetworkError values.
"""

from typing import Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class RawResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int
    headers: dict[str, str] = {}
    body: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class Transport(Protocol):
    async def get(self, url: str, headers: Mapping[str, str]) -> RawResponse:
        ...

    async def post(self, url: str, body: str, headers: Mapping[str, str]) -> RawResponse:
        ...
