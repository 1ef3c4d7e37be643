"""
Account credentials — identity sent with every request.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

CookieSource = Union[str, list[dict[str, Any]], dict[str, Any]]


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    device_id: str  # "imei" in the web client
    user_agent: str
    cookies: CookieSource = Field(default="", repr=False)
    language: str = "vi"

    def cookie_dict(self) -> dict[str, str]:
        """Normalize a Cookie header string, a cookie list, or a {"cookies": [...]} export."""
        cookies = self.cookies
        if isinstance(cookies, dict) and isinstance(cookies.get("cookies"), list):
            cookies = cookies["cookies"]
        if isinstance(cookies, dict):
            cookies = [cookies]
        if isinstance(cookies, str):
            result: dict[str, str] = {}
            for part in cookies.split(";"):
                part = part.strip()
                if not part:
                    continue
                name, _, value = part.partition("=")
                result[name.strip()] = value.strip()
            return result
        return {
            str(c["name"]): str(c.get("value", ""))
            for c in cookies
            if isinstance(c, dict) and c.get("name")
        }
