"""
Session models — per-login state shared read-only by every request.
"""

from types import MappingProxyType
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from zca.errors import InvalidInputError, Result

DEFAULT_PROTOCOL_TYPE = 30
DEFAULT_PROTOCOL_VERSION = 645

DEFAULT_RESTRICTED_EXT = ["exe", "bat", "cmd", "com", "scr", "vbs", "msi", "apk", "dll"]

ServiceDirectoryEntry = Union[str, list[str]]


class ShareFileSettings(BaseModel):
    """settings.features.sharefile — upload limits."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    chunk_size_file: int = 512 * 1024
    max_file: int = 20
    max_size_share_file_v3: int = 100
    restricted_ext_file: list[str] = Field(default_factory=lambda: list(DEFAULT_RESTRICTED_EXT))

    @field_validator("chunk_size_file", "max_file", "max_size_share_file_v3")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("restricted_ext_file")
    @classmethod
    def _lowercase(cls, v: list[str]) -> list[str]:
        return [ext.lower() for ext in v]


class FeatureSettings(BaseModel):
    """settings.features"""
    model_config = ConfigDict(frozen=True, extra="allow")

    sharefile: ShareFileSettings = Field(default_factory=ShareFileSettings)


class SessionSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    features: FeatureSettings = Field(default_factory=FeatureSettings)


class SessionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_id: str
    symmetric_key: str = Field(repr=False)  # base64, only ever read by zca.crypto
    service_directory: Mapping[str, ServiceDirectoryEntry] = Field(default_factory=dict, validate_default=True)
    protocol_type: int = DEFAULT_PROTOCOL_TYPE
    protocol_version: int = DEFAULT_PROTOCOL_VERSION
    extra_versions: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    feature_settings: SessionSettings = Field(default_factory=SessionSettings)

    def extra_version(self, name: str, default: int = 0) -> int:
        return self.extra_versions.get(name, default)

    @field_validator("service_directory")
    @classmethod
    def _freeze_directory(cls, v: Mapping[str, ServiceDirectoryEntry]) -> Mapping[str, ServiceDirectoryEntry]:
        # shared by every in-flight call; lists become tuples
        return MappingProxyType({k: tuple(e) if isinstance(e, list) else e for k, e in v.items()})

    @field_validator("extra_versions")
    @classmethod
    def _freeze_versions(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(v))

    @field_serializer("service_directory", "extra_versions")
    def _thaw(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return {k: list(e) if isinstance(e, tuple) else e for k, e in v.items()}

    @classmethod
    def _validate(cls, data: dict[str, Any]) -> Result["SessionContext"]:
        try:
            return Result.success(cls.model_validate(data))
        except ValidationError as e:
            return Result.failure(InvalidInputError(f"Invalid session: {e.error_count()} validation error(s)",
                                                    {"fields": [".".join(map(str, err["loc"])) for err in e.errors()]}))

    @classmethod
    def from_login_response(cls, data: dict[str, Any]) -> Result["SessionContext"]:
        """Build a session from the getLoginInfo payload."""
        return cls._validate({
            "owner_id": str(data.get("uid", "")),
            "symmetric_key": data.get("zpw_enk") or "",
            "service_directory": data.get("zpw_service_map_v3") or {},
            "feature_settings": data.get("settings") or {},
            "extra_versions": data.get("extra_ver") or {},
        })

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        if not include_sensitive:
            data.pop("symmetric_key")
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["SessionContext"]:
        for field in ("owner_id", "symmetric_key", "service_directory"):
            if data.get(field) is None:
                return Result.failure(InvalidInputError(f"Missing required field: {field}", {"field": field}))
        return cls._validate(data)


def sharefile_settings(session: SessionContext) -> ShareFileSettings:
    return session.feature_settings.features.sharefile
