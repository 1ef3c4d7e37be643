"""
Service resolution — logical service name to the base host that serves it.

Directory entries are either a single host or an ordered list of hosts; only
the first host of a list is ever used. A missing service is an error, except
for the account settings service, which has a fixed default host.
"""

import logging
from typing import Mapping, Optional

from zca.errors import Result, ServiceNotFoundError
from zca.models.session import ServiceDirectoryEntry, SessionContext

logger = logging.getLogger(__name__)

SETTINGS_SERVICE = "settings"
DEFAULT_SETTINGS_HOST = "https://wpa.chat.zalo.me"

DEFAULT_HOSTS: dict[str, str] = {SETTINGS_SERVICE: DEFAULT_SETTINGS_HOST}


def first_host(entry: Optional[ServiceDirectoryEntry]) -> Optional[str]:
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, (list, tuple)) and entry and isinstance(entry[0], str) and entry[0]:
        return entry[0]
    return None


def resolve(directory: Mapping[str, ServiceDirectoryEntry], service_name: str) -> Result[str]:
    host = first_host(directory.get(service_name))
    if host is None:
        host = DEFAULT_HOSTS.get(service_name)
    if host is None:
        logger.debug("No host for service %r (known: %s)", service_name, sorted(directory))
        return Result.failure(ServiceNotFoundError(service_name))
    return Result.success(host)


def resolve_for_session(session: SessionContext, service_name: str) -> Result[str]:
    return resolve(session.service_directory, service_name)
