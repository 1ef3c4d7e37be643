from zca.transport.base import RawResponse, Transport
from zca.transport.http import HttpxTransport

__all__ = ["HttpxTransport", "RawResponse", "Transport"]
