"""
Group endpoints.
"""

import time
from typing import Any

from zca.envelope import SecureEnvelope
from zca.errors import InvalidInputError, Result

GROUP_SERVICE = "group"


class GroupsAPI:
    def __init__(self, envelope: SecureEnvelope):
        self._envelope = envelope

    async def leave(self, group_id: str, silent: bool = False) -> Result[dict[str, Any]]:
        """Leave a group. Returns the members the server could not update."""
        if not isinstance(group_id, str) or not group_id:
            return Result.failure(InvalidInputError("group_id is required"))
        creds = self._envelope.credentials
        result = await self._envelope.post(GROUP_SERVICE, "/api/group/leave", {
            "grids": [group_id],
            "imei": creds.device_id,
            "silent": 1 if silent else 0,
            "language": creds.language,
        })
        return result.map(lambda data: {
            "member_error": data.get("memberError", []) if isinstance(data, dict) else [],
        })

    async def change_name(self, group_id: str, name: str) -> Result[Any]:
        """Rename a group. An empty name is replaced by the current time in ms, as the web client does."""
        if not isinstance(group_id, str) or not group_id:
            return Result.failure(InvalidInputError("group_id is required"))
        return await self._envelope.post(GROUP_SERVICE, "/api/group/updateinfo", {
            "grid": group_id,
            "gname": name or str(int(time.time() * 1000)),
            "imei": self._envelope.credentials.device_id,
        })
