"""Shared fixtures."""

import pytest

from zca.models.credentials import Credentials
from zca.models.session import SessionContext

from fakes import SECRET_KEY


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(
        owner_id="100200300",
        symmetric_key=SECRET_KEY,
        service_directory={
            "group": ["https://group.example", "https://group-backup.example"],
            "chat": ["https://chat.example"],
            "alias": "https://alias.example",
            "label": ["https://label.example"],
            "profile": ["https://profile.example"],
        },
        protocol_type=30,
        protocol_version=645,
    )


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        device_id="imei-0001",
        user_agent="Mozilla/5.0 (test)",
        cookies="zpw_sek=abc; zpsid=xyz",
    )
