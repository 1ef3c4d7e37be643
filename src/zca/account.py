"""
Account endpoints — privacy settings and the chat keep-alive.
"""

from typing import Any

from zca.envelope import SecureEnvelope
from zca.errors import InvalidInputError, Result
from zca.services import SETTINGS_SERVICE

# Python-side name -> key used by the settings API
SETTING_KEYS: dict[str, str] = {
    "view_birthday": "view_birthday",
    "show_online_status": "show_online_status",
    "display_seen_status": "display_seen_status",
    "receive_message": "receive_message",
    "accept_call": "accept_stranger_call",
    "add_friend_via_phone": "add_friend_via_phone",
    "add_friend_via_qr": "add_friend_via_qr",
    "add_friend_via_group": "add_friend_via_group",
    "add_friend_via_contact": "add_friend_via_contact",
    "display_on_recommend_friend": "display_on_recommend_friend",
    "archived_chat": "archivedChatStatus",
    "quick_message": "quickMessageStatus",
}


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


class AccountAPI:
    def __init__(self, envelope: SecureEnvelope):
        self._envelope = envelope

    async def settings(self) -> Result[dict[str, Any]]:
        """Privacy settings, keyed by SETTING_KEYS names. The untouched payload is kept under "raw"."""
        result = await self._envelope.get(SETTINGS_SERVICE, "/api/setting/me", {})

        def shape(data: Any) -> dict[str, Any]:
            data = data if isinstance(data, dict) else {}
            shaped = {name: data.get(key) for name, key in SETTING_KEYS.items()}
            shaped["raw"] = data
            return shaped

        return result.map(shape)

    async def update_setting(self, kind: str, value: int) -> Result[bool]:
        """
        Update one privacy setting.

        view_birthday: 0 hide, 1 full date, 2 day/month.
        receive_message: 1 everyone, 2 friends only.
        accept_call: 2 friends, 3 everyone, 4 friends and contacted.
        Everything else is 0 (off) / 1 (on).
        """
        key = SETTING_KEYS.get(kind)
        if key is None:
            return Result.failure(InvalidInputError(f"Unknown setting: {kind}", {"valid": sorted(SETTING_KEYS)}))
        if isinstance(value, bool) or not isinstance(value, int):
            return Result.failure(InvalidInputError("value must be an integer"))
        result = await self._envelope.get(SETTINGS_SERVICE, "/api/setting/update", {key: value})
        return result.map(lambda _: True)

    async def keep_alive(self) -> Result[dict[str, int]]:
        """Ping the chat service. The response is plain JSON, not ciphertext."""
        result = await self._envelope.get(
            "chat", "/keepalive",
            {"imei": self._envelope.credentials.device_id},
            encrypted_response=False,
        )

        def shape(data: Any) -> dict[str, int]:
            data = data if isinstance(data, dict) else {}
            # the server spells it "config_vesion"
            raw = data.get("config_vesion", data.get("config_version", 0))
            return {"config_version": _to_int(raw)}

        return result.map(shape)
