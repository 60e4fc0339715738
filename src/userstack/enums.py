"""Closed vocabularies returned by the userstack API and their decoding policy."""

from enum import Enum
from typing import Any, Type, TypeVar, Union

E = TypeVar("E", bound=Enum)


class DecodePolicy(str, Enum):
    """How string enum fields are decoded.

    STRICT rejects values outside the known vocabulary so callers notice API
    drift immediately. LENIENT keeps unknown values verbatim as plain strings,
    letting older clients keep working when userstack adds new values.
    """

    STRICT = "strict"
    LENIENT = "lenient"

    @classmethod
    def from_strict(cls, strict: bool) -> "DecodePolicy":
        return cls.STRICT if strict else cls.LENIENT


class EntityType(str, Enum):
    """What issued the request."""

    UNKNOWN = "unknown"
    BROWSER = "browser"
    MOBILE_BROWSER = "mobile-browser"
    EMAIL_CLIENT = "email-client"
    APP = "app"
    FEED_READER = "feed-reader"
    CRAWLER = "crawler"
    OFFLINE_BROWSER = "offline-browser"

    def __str__(self) -> str:
        return self.value


class DeviceType(str, Enum):
    """Hardware class of the device."""

    UNKNOWN = "unknown"
    DESKTOP = "desktop"
    TABLET = "tablet"
    SMARTPHONE = "smartphone"
    CONSOLE = "console"
    SMARTTV = "smarttv"
    WEARABLE = "wearable"

    def __str__(self) -> str:
        return self.value


class CategoryType(str, Enum):
    """Sub-classification of crawlers."""

    UNKNOWN = "unknown"
    SEARCH_ENGINE = "search-engine"
    MONITORING = "monitoring"
    SCREENSHOT_SERVICE = "screenshot-service"
    SCRAPER = "scraper"
    SECURITY_SCANNER = "security-scanner"

    def __str__(self) -> str:
        return self.value


class ErrorType(str, Enum):
    """Failure reasons reported in the ``error.type`` field."""

    NOT_FOUND = "404_not_found"
    MISSING_ACCESS_KEY = "missing_access_key"
    INVALID_ACCESS_KEY = "invalid_access_key"
    INACTIVE_USER = "inactive_user"
    INVALID_API_FUNCTION = "invalid_api_function"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    FUNCTION_ACCESS_RESTRICTED = "function_access_restricted"
    HTTPS_ACCESS_RESTRICTED = "https_access_restricted"
    MISSING_USER_AGENT = "missing_user_agent"
    INVALID_FIELDS = "invalid_fields"
    TOO_MANY_USER_AGENTS = "too_many_user_agents"
    BATCH_NOT_SUPPORTED_ON_PLAN = "batch_not_supported_on_plan"

    def __str__(self) -> str:
        return self.value


def decode_enum(
    enum_cls: Type[E], raw: Any, field: str, policy: DecodePolicy
) -> Union[E, str]:
    """Decode a raw JSON value into a member of ``enum_cls``.

    Args:
        enum_cls: Vocabulary to decode into.
        raw: Value taken from the response body.
        field: Name reported in errors ("entity", "device", "category", "error").
        policy: Active decoding policy.

    Returns:
        The matching member, or the raw string unchanged when running lenient
        and the value is outside the vocabulary.

    Raises:
        UnsupportedTypeError: In strict mode, for any value not in the vocabulary.
    """
    if isinstance(raw, str):
        for member in enum_cls:
            if member.value == raw:
                return member

    if policy is DecodePolicy.LENIENT:
        return raw if isinstance(raw, str) else str(raw)

    from .exceptions import UnsupportedTypeError

    raise UnsupportedTypeError(field, raw)


def encode_enum(value: Union[Enum, str]) -> str:
    """Encode a decoded enum value back to its wire string."""
    if isinstance(value, Enum):
        return value.value
    return value
