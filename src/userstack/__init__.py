"""Python client for the userstack User-Agent detection API."""

from .decoder import DetectFailure, DetectOutcome, DetectSuccess, decode_response
from .enums import (
    CategoryType,
    DecodePolicy,
    DeviceType,
    EntityType,
    ErrorType,
    decode_enum,
    encode_enum,
)
from .exceptions import (
    ApiError,
    UnsupportedTypeError,
    UserstackError,
    code_from_error_type,
)
from .models import (
    BrowserInfo,
    CrawlerInfo,
    DeviceInfo,
    OsInfo,
    RequestParams,
    Stack,
)

# TYPE_CHECKING imports keep IDE support while __getattr__ defers importing
# the HTTP stack until a client is actually needed.
from typing import TYPE_CHECKING  # noqa: E402

if TYPE_CHECKING:
    from .client import AsyncUserstackClient, UserstackClient
    from .config import ClientConfig, load_config


def __getattr__(name):
    """Lazily import the client and config modules only when accessed."""
    if name in ("UserstackClient", "AsyncUserstackClient"):
        from . import client

        return getattr(client, name)
    elif name in ("ClientConfig", "load_config"):
        from . import config

        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ApiError",
    "AsyncUserstackClient",
    "BrowserInfo",
    "CategoryType",
    "ClientConfig",
    "CrawlerInfo",
    "DecodePolicy",
    "DetectFailure",
    "DetectOutcome",
    "DetectSuccess",
    "DeviceInfo",
    "DeviceType",
    "EntityType",
    "ErrorType",
    "OsInfo",
    "RequestParams",
    "Stack",
    "UnsupportedTypeError",
    "UserstackClient",
    "UserstackError",
    "code_from_error_type",
    "decode_enum",
    "decode_response",
    "encode_enum",
    "load_config",
]
