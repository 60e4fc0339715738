"""Type-safe models for userstack responses."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

from .enums import (
    CategoryType,
    DecodePolicy,
    DeviceType,
    EntityType,
    ErrorType,
    decode_enum,
    encode_enum,
)
from .exceptions import INVALID_ERROR_CODE


def _as_dict(data: Any) -> Dict[str, Any]:
    """Treat a missing or null nested object as empty."""
    return data if isinstance(data, dict) else {}


def _to_dict(instance: Any) -> Dict[str, Any]:
    """Encode a model, dropping None values and flattening enums to strings."""
    result: Dict[str, Any] = {}
    for f in fields(instance):
        value = getattr(instance, f.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = encode_enum(value)
        elif hasattr(value, "to_dict"):
            value = value.to_dict()
        result[f.name] = value
    return result


@dataclass(frozen=True)
class OsInfo:
    """Operating system details."""

    name: Optional[str] = None
    code: Optional[str] = None
    url: Optional[str] = None
    family: Optional[str] = None
    family_code: Optional[str] = None
    family_vendor: Optional[str] = None
    icon: Optional[str] = None
    icon_large: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "OsInfo":
        data = _as_dict(data)
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class DeviceInfo:
    """Device details."""

    is_mobile_device: bool = False
    type: Union[DeviceType, str, None] = None
    brand: Optional[str] = None
    brand_code: Optional[str] = None
    brand_url: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, policy: DecodePolicy) -> "DeviceInfo":
        data = _as_dict(data)
        raw_type = data.get("type")
        return cls(
            is_mobile_device=bool(data.get("is_mobile_device")),
            type=(
                decode_enum(DeviceType, raw_type, "device", policy)
                if raw_type is not None
                else None
            ),
            brand=data.get("brand"),
            brand_code=data.get("brand_code"),
            brand_url=data.get("brand_url"),
            name=data.get("name"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class BrowserInfo:
    """Browser details."""

    name: Optional[str] = None
    version: Optional[str] = None
    version_major: Optional[str] = None
    engine: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BrowserInfo":
        data = _as_dict(data)
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class CrawlerInfo:
    """Crawler classification.

    ``last_seen`` is kept as the opaque string the API sends,
    e.g. ``"2019-09-15 20:35:33"``.
    """

    is_crawler: bool = False
    category: Union[CategoryType, str, None] = None
    last_seen: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, policy: DecodePolicy) -> "CrawlerInfo":
        data = _as_dict(data)
        raw_category = data.get("category")
        return cls(
            is_crawler=bool(data.get("is_crawler")),
            category=(
                decode_enum(CategoryType, raw_category, "category", policy)
                if raw_category is not None
                else None
            ),
            last_seen=data.get("last_seen"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _to_dict(self)


@dataclass(frozen=True)
class Stack:
    """Result of a single detection.

    Every field is optional from the API's point of view; missing nested
    objects decode to empty instances rather than errors.
    """

    ua: Optional[str] = None
    type: Union[EntityType, str, None] = None
    brand: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    os: OsInfo = field(default_factory=OsInfo)
    device: DeviceInfo = field(default_factory=DeviceInfo)
    browser: BrowserInfo = field(default_factory=BrowserInfo)
    crawler: CrawlerInfo = field(default_factory=CrawlerInfo)

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], policy: DecodePolicy = DecodePolicy.STRICT
    ) -> "Stack":
        """Load a Stack from a decoded response body."""
        data = _as_dict(data)
        raw_type = data.get("type")
        return cls(
            ua=data.get("ua"),
            type=(
                decode_enum(EntityType, raw_type, "entity", policy)
                if raw_type is not None
                else None
            ),
            brand=data.get("brand"),
            name=data.get("name"),
            url=data.get("url"),
            os=OsInfo.from_dict(data.get("os")),
            device=DeviceInfo.from_dict(data.get("device"), policy),
            browser=BrowserInfo.from_dict(data.get("browser")),
            crawler=CrawlerInfo.from_dict(data.get("crawler"), policy),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict in the API's field names."""
        return _to_dict(self)


@dataclass(frozen=True)
class ApiErrorBody:
    """Error-carrying shape of a response body.

    ``success`` is tri-state: userstack omits it on many successful
    responses, so only an explicit False means failure.
    """

    success: Optional[bool] = None
    code: int = INVALID_ERROR_CODE
    type: Union[ErrorType, str, None] = None
    info: str = ""

    @property
    def failed(self) -> bool:
        return self.success is False

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], policy: DecodePolicy = DecodePolicy.STRICT
    ) -> "ApiErrorBody":
        data = _as_dict(data)
        error = _as_dict(data.get("error"))
        raw_type = error.get("type")
        success = data.get("success")
        code = error.get("code")
        if code is None:
            code = INVALID_ERROR_CODE
        elif isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"error code must be an integer, got {code!r}")
        info = error.get("info")
        if info is None:
            info = ""
        elif not isinstance(info, str):
            raise ValueError(f"error info must be a string, got {info!r}")
        return cls(
            success=success if isinstance(success, bool) else None,
            code=code,
            type=(
                decode_enum(ErrorType, raw_type, "error", policy)
                if raw_type is not None
                else None
            ),
            info=info,
        )


@dataclass(frozen=True)
class RequestParams:
    """Optional query parameters for a detect call.

    ``fields`` restricts the output fields, e.g. ``"browser.name,os"``.
    """

    fields: Optional[str] = None

    def to_query(self) -> Dict[str, str]:
        query: Dict[str, str] = {}
        if self.fields:
            query["fields"] = self.fields
        return query
