"""Turn a userstack response body into a detection result or an API error.

userstack answers HTTP 200 whether a lookup succeeded or not, so the outcome
is decided from the body alone:

- ``"success": false`` means the API rejected the request; the ``error``
  object carries the code, type and message.
- ``"success": true`` or no ``success`` key at all means a detection. The
  API routinely omits the flag on successful responses, so absence must not
  be read as failure.
"""

import json
from dataclasses import dataclass
from typing import Union

from .enums import DecodePolicy
from .exceptions import ApiError
from .models import ApiErrorBody, Stack


@dataclass(frozen=True)
class DetectSuccess:
    stack: Stack


@dataclass(frozen=True)
class DetectFailure:
    error: ApiError


DetectOutcome = Union[DetectSuccess, DetectFailure]


def decode_response(
    body: Union[bytes, str], policy: DecodePolicy = DecodePolicy.STRICT
) -> DetectOutcome:
    """Decode a raw response body.

    Args:
        body: Response body as returned by the transport.
        policy: Enum decoding policy for this call.

    Returns:
        DetectFailure when the body reports ``success: false``, DetectSuccess
        otherwise.

    Raises:
        json.JSONDecodeError: Body is not valid JSON.
        ValueError: Body is valid JSON but not an object.
        UnsupportedTypeError: Strict policy and an enum value is unknown.
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(
            f"expected a JSON object from userstack, got {type(data).__name__}"
        )

    error_body = ApiErrorBody.from_dict(data, policy)
    if error_body.failed:
        return DetectFailure(ApiError.from_body(error_body))

    return DetectSuccess(Stack.from_dict(data, policy))
