"""
Poll endpoints — served by the group service.
"""

from typing import Any, Optional

from zca.envelope import SecureEnvelope
from zca.errors import InvalidInputError, Result

GROUP_SERVICE = "group"


def _validate_poll_id(poll_id: Any) -> Result[int]:
    if poll_id is None:
        return Result.failure(InvalidInputError("poll_id is required"))
    if isinstance(poll_id, bool) or not isinstance(poll_id, int) or poll_id <= 0:
        return Result.failure(InvalidInputError("poll_id must be a positive integer"))
    return Result.success(poll_id)


def _option(opt: dict[str, Any]) -> dict[str, Any]:
    return {
        "option_id": opt.get("option_id"),
        "content": opt.get("content"),
        "vote_count": opt.get("vote_count") or 0,
        "voters": opt.get("voters") or [],
    }


def _options(data: Any) -> list[dict[str, Any]]:
    options = data.get("options") if isinstance(data, dict) else None
    return [_option(o) for o in options or [] if isinstance(o, dict)]


class PollsAPI:
    def __init__(self, envelope: SecureEnvelope):
        self._envelope = envelope

    async def vote(self, poll_id: int, option_ids: Optional[list[int]] = None) -> Result[dict[str, Any]]:
        """Vote on a poll. An empty option_ids list removes the vote."""
        checked = _validate_poll_id(poll_id)
        if not checked.ok:
            return checked
        option_ids = [] if option_ids is None else option_ids
        if not isinstance(option_ids, list):
            return Result.failure(InvalidInputError("option_ids must be a list"))
        if not all(isinstance(o, int) and not isinstance(o, bool) for o in option_ids):
            return Result.failure(InvalidInputError("option_ids must be a list of integers"))
        result = await self._envelope.get(GROUP_SERVICE, "/api/poll/vote", {
            "poll_id": poll_id,
            "option_ids": option_ids,
            "imei": self._envelope.credentials.device_id,
        })
        return result.map(lambda data: {"options": _options(data)})

    async def detail(self, poll_id: int) -> Result[dict[str, Any]]:
        checked = _validate_poll_id(poll_id)
        if not checked.ok:
            return checked
        result = await self._envelope.post(GROUP_SERVICE, "/api/poll/detail", {
            "poll_id": poll_id,
            "imei": self._envelope.credentials.device_id,
        })
        return result.map(self._detail)

    @staticmethod
    def _detail(data: Any) -> dict[str, Any]:
        data = data if isinstance(data, dict) else {}
        return {
            "poll_id": data.get("poll_id"),
            "creator": data.get("creator"),
            "question": data.get("question"),
            "options": _options(data),
            "created_time": data.get("created_time"),
            "expired_time": data.get("expired_time"),
            "allow_multi_choices": data.get("allow_multi_choices"),
            "allow_add_new_option": data.get("allow_add_new_option"),
            "is_hide_vote_preview": data.get("is_hide_vote_preview"),
            "is_anonymous": data.get("is_anonymous"),
            "group_id": data.get("group_id"),
        }
