"""Tests for the error model."""

import pytest

from userstack.enums import ErrorType
from userstack.exceptions import (
    ERROR_DESCRIPTIONS,
    INVALID_ERROR_CODE,
    ApiError,
    UnsupportedTypeError,
    UserstackError,
    code_from_error_type,
    missing_access_key_error,
)
from userstack.models import ApiErrorBody


class TestCodeFromErrorType:
    @pytest.mark.parametrize(
        "error_type,code",
        [
            (ErrorType.NOT_FOUND, 404),
            (ErrorType.MISSING_ACCESS_KEY, 101),
            (ErrorType.INVALID_ACCESS_KEY, 101),
            (ErrorType.INACTIVE_USER, 102),
            (ErrorType.INVALID_API_FUNCTION, 103),
            (ErrorType.USAGE_LIMIT_REACHED, 104),
            (ErrorType.FUNCTION_ACCESS_RESTRICTED, 105),
            (ErrorType.HTTPS_ACCESS_RESTRICTED, 105),
            (ErrorType.MISSING_USER_AGENT, 301),
            (ErrorType.INVALID_FIELDS, 302),
            (ErrorType.TOO_MANY_USER_AGENTS, 303),
            (ErrorType.BATCH_NOT_SUPPORTED_ON_PLAN, 304),
        ],
    )
    def test_known_types(self, error_type, code):
        assert code_from_error_type(error_type) == code

    def test_every_type_has_a_code_and_description(self):
        for error_type in ErrorType:
            assert code_from_error_type(error_type) != INVALID_ERROR_CODE
            assert ERROR_DESCRIPTIONS[error_type]

    def test_known_raw_string_resolves(self):
        assert code_from_error_type("usage_limit_reached") == 104

    @pytest.mark.parametrize("value", ["rate_limited", "", None, "MISSING_ACCESS_KEY"])
    def test_unknown_maps_to_zero(self, value):
        assert code_from_error_type(value) == 0


class TestApiError:
    def test_message_format(self):
        err = ApiError(
            code=301,
            type=ErrorType.MISSING_USER_AGENT,
            info="You have not specified a User-Agent string.",
        )

        assert str(err) == "301: You have not specified a User-Agent string."
        assert isinstance(err, UserstackError)

    def test_from_body_copies_fields(self):
        body = ApiErrorBody(
            success=False,
            code=104,
            type=ErrorType.USAGE_LIMIT_REACHED,
            info="Monthly allowance exceeded.",
        )

        err = ApiError.from_body(body)

        assert err.success is False
        assert err.code == 104
        assert err.type is ErrorType.USAGE_LIMIT_REACHED
        assert err.info == "Monthly allowance exceeded."

    def test_repr_includes_type(self):
        err = ApiError(code=102, type=ErrorType.INACTIVE_USER, info="blocked")
        assert "INACTIVE_USER" in repr(err)

    def test_missing_access_key_error(self):
        err = missing_access_key_error()

        assert err.success is False
        assert err.code == 101
        assert err.type is ErrorType.MISSING_ACCESS_KEY
        assert str(err) == "101: User did not supply an access key."


class TestUnsupportedTypeError:
    def test_is_value_error(self):
        err = UnsupportedTypeError("category", "bot-farm")

        assert isinstance(err, ValueError)
        assert isinstance(err, UserstackError)
        assert str(err) == "unsupported category type: bot-farm"
