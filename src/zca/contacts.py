"""
Contact-side endpoints: friend aliases, conversation labels, mute list.
"""

import json
import logging
from typing import Any

from zca.envelope import SecureEnvelope
from zca.errors import InvalidInputError, Result

logger = logging.getLogger(__name__)


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def parse_embedded_list(raw: Any) -> list[Any]:
    """Some fields carry a JSON array as a string. Malformed values read as []."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring malformed embedded JSON list")
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def _mute_entry(entry: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": entry.get("id"),
        "duration": entry.get("duration"),
        "start_time": entry.get("startTime"),
        "system_time": entry.get("systemTime"),
        "current_time": entry.get("currentTime"),
        "mute_mode": entry.get("muteMode"),
    }


class ContactsAPI:
    def __init__(self, envelope: SecureEnvelope):
        self._envelope = envelope

    @property
    def _imei(self) -> str:
        return self._envelope.credentials.device_id

    async def alias_list(self, page: int = 1, count: int = 100) -> Result[dict[str, Any]]:
        for name, value in (("page", page), ("count", count)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                return Result.failure(InvalidInputError(f"{name} must be a positive integer"))
        result = await self._envelope.get("alias", "/api/alias/list", {
            "page": page,
            "count": count,
            "imei": self._imei,
        })

        def shape(data: Any) -> dict[str, Any]:
            data = data if isinstance(data, dict) else {}
            return {
                "items": [
                    {"user_id": _first(item, "userId", "user_id"), "alias": item.get("alias")}
                    for item in data.get("items") or [] if isinstance(item, dict)
                ],
                "update_time": _first(data, "updateTime", "update_time"),
            }

        return result.map(shape)

    async def labels(self) -> Result[dict[str, Any]]:
        result = await self._envelope.get("label", "/api/convlabel/get", {"imei": self._imei})

        def shape(data: Any) -> dict[str, Any]:
            data = data if isinstance(data, dict) else {}
            return {
                "label_data": parse_embedded_list(_first(data, "labelData", "label_data")),
                "version": data.get("version"),
                "last_update_time": _first(data, "lastUpdateTime", "last_update_time"),
            }

        return result.map(shape)

    async def mute_list(self) -> Result[dict[str, Any]]:
        result = await self._envelope.get("profile", "/api/social/profile/getmute", {"imei": self._imei})

        def shape(data: Any) -> dict[str, Any]:
            data = data if isinstance(data, dict) else {}
            return {
                "chat_entries": [_mute_entry(e) for e in data.get("chatEntries") or [] if isinstance(e, dict)],
                "group_chat_entries": [_mute_entry(e) for e in data.get("groupChatEntries") or [] if isinstance(e, dict)],
            }

        return result.map(shape)
