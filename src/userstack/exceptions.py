"""Errors raised by the userstack client."""

from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from .enums import ErrorType

if TYPE_CHECKING:
    from .models import ApiErrorBody

# Returned by code_from_error_type for anything outside the table.
INVALID_ERROR_CODE = 0

# userstack's own codes, not HTTP status codes.
_ERROR_CODES: Dict[ErrorType, int] = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.MISSING_ACCESS_KEY: 101,
    ErrorType.INVALID_ACCESS_KEY: 101,
    ErrorType.INACTIVE_USER: 102,
    ErrorType.INVALID_API_FUNCTION: 103,
    ErrorType.USAGE_LIMIT_REACHED: 104,
    ErrorType.FUNCTION_ACCESS_RESTRICTED: 105,
    ErrorType.HTTPS_ACCESS_RESTRICTED: 105,
    ErrorType.MISSING_USER_AGENT: 301,
    ErrorType.INVALID_FIELDS: 302,
    ErrorType.TOO_MANY_USER_AGENTS: 303,
    ErrorType.BATCH_NOT_SUPPORTED_ON_PLAN: 304,
}

# Human readable descriptions, as documented by userstack.
ERROR_DESCRIPTIONS: Dict[ErrorType, str] = {
    ErrorType.NOT_FOUND: "User requested a resource which does not exist.",
    ErrorType.MISSING_ACCESS_KEY: "User did not supply an access key.",
    ErrorType.INVALID_ACCESS_KEY: "User supplied an invalid access key.",
    ErrorType.INACTIVE_USER: "User account is inactive or blocked.",
    ErrorType.INVALID_API_FUNCTION: "User requested a non-existent API function.",
    ErrorType.USAGE_LIMIT_REACHED: (
        "User has reached their subscription's monthly request allowance."
    ),
    ErrorType.FUNCTION_ACCESS_RESTRICTED: (
        "The current subscription does not support this API function."
    ),
    ErrorType.HTTPS_ACCESS_RESTRICTED: (
        "The current subscription plan does not support HTTPS."
    ),
    ErrorType.MISSING_USER_AGENT: "No User-Agent string has been specified.",
    ErrorType.INVALID_FIELDS: "One or more invalid output fields have been specified.",
    ErrorType.TOO_MANY_USER_AGENTS: (
        "Too many User-Agent strings have been specified in a single Bulk request."
    ),
    ErrorType.BATCH_NOT_SUPPORTED_ON_PLAN: (
        "Requests to the Bulk endpoint are not supported at this subscription level."
    ),
}


def code_from_error_type(error_type: Union[ErrorType, str, None]) -> int:
    """Map a userstack error type to its numeric code.

    Accepts raw strings too, so values kept verbatim by lenient decoding still
    resolve when they happen to be known. Returns INVALID_ERROR_CODE otherwise.
    """
    if isinstance(error_type, ErrorType):
        return _ERROR_CODES[error_type]
    for member, code in _ERROR_CODES.items():
        if member.value == error_type:
            return code
    return INVALID_ERROR_CODE


class UserstackError(Exception):
    """Base class for errors raised by this package."""


class UnsupportedTypeError(UserstackError, ValueError):
    """A strict-mode decode met a value outside a closed vocabulary."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"unsupported {field} type: {value}")


class ApiError(UserstackError):
    """A request rejected by the userstack API.

    userstack answers HTTP 200 for failures too, so this is built from the
    response body rather than the status code.

    Attributes:
        success: Tri-state success flag from the body (True, False or absent).
        code: userstack error code (not an HTTP status).
        type: Error kind; a raw string when decoded leniently.
        info: Message supplied by the API.
    """

    def __init__(
        self,
        code: int = INVALID_ERROR_CODE,
        type: Union[ErrorType, str, None] = None,
        info: str = "",
        success: Optional[bool] = False,
    ):
        self.success = success
        self.code = code
        self.type = type
        self.info = info
        super().__init__(f"{code}: {info}")

    def __str__(self) -> str:
        return f"{self.code}: {self.info}"

    def __repr__(self) -> str:
        return (
            f"ApiError(code={self.code!r}, type={self.type!r}, "
            f"info={self.info!r}, success={self.success!r})"
        )

    @classmethod
    def from_body(cls, body: "ApiErrorBody") -> "ApiError":
        """Build from the error-carrying shape of a response body."""
        return cls(
            code=body.code,
            type=body.type,
            info=body.info,
            success=body.success,
        )


def missing_access_key_error() -> ApiError:
    """The error raised when a client is configured without an access key."""
    return ApiError(
        code=code_from_error_type(ErrorType.MISSING_ACCESS_KEY),
        type=ErrorType.MISSING_ACCESS_KEY,
        info=ERROR_DESCRIPTIONS[ErrorType.MISSING_ACCESS_KEY],
        success=False,
    )
