"""Tests for response models."""

import dataclasses

import pytest

from tests.sample_responses import SUCCESS_BODY
from userstack.enums import CategoryType, DecodePolicy, DeviceType, EntityType, ErrorType
from userstack.exceptions import UnsupportedTypeError
from userstack.models import (
    ApiErrorBody,
    CrawlerInfo,
    DeviceInfo,
    OsInfo,
    RequestParams,
    Stack,
)


class TestStack:
    def test_from_dict_full_body(self):
        stack = Stack.from_dict(SUCCESS_BODY)

        assert stack.ua == SUCCESS_BODY["ua"]
        assert stack.type is EntityType.BROWSER
        assert stack.brand == "Apple"
        assert stack.os.family_code == "macos"
        assert stack.os.icon_large.endswith("macosx_big.png")
        assert stack.device.type is DeviceType.DESKTOP
        assert stack.device.is_mobile_device is False
        assert stack.device.brand_url == "http://www.apple.com/"
        assert stack.browser.version_major == "71"
        assert stack.browser.engine == "WebKit/Blink"
        assert stack.crawler.is_crawler is False
        assert stack.crawler.category is None

    def test_empty_body_is_valid(self):
        stack = Stack.from_dict({})

        assert stack.ua is None
        assert stack.type is None
        assert stack.os == OsInfo()
        assert stack.device == DeviceInfo()
        assert stack.crawler == CrawlerInfo()

    def test_null_nested_objects_treated_as_absent(self):
        stack = Stack.from_dict({"ua": "curl/8.0", "os": None, "device": None})

        assert stack.os == OsInfo()
        assert stack.device.type is None

    def test_crawler_fields(self):
        stack = Stack.from_dict(
            {
                "type": "crawler",
                "crawler": {
                    "is_crawler": True,
                    "category": "search-engine",
                    "last_seen": "2019-09-15 20:35:33",
                },
            }
        )

        assert stack.type is EntityType.CRAWLER
        assert stack.crawler.is_crawler is True
        assert stack.crawler.category is CategoryType.SEARCH_ENGINE
        assert stack.crawler.last_seen == "2019-09-15 20:35:33"

    def test_strict_unknown_device_type(self):
        body = {"device": {"type": "smartfridge"}}

        with pytest.raises(UnsupportedTypeError) as exc_info:
            Stack.from_dict(body, DecodePolicy.STRICT)

        assert exc_info.value.field == "device"

    def test_strict_unknown_category(self):
        body = {"crawler": {"is_crawler": True, "category": "ai-trainer"}}

        with pytest.raises(UnsupportedTypeError) as exc_info:
            Stack.from_dict(body, DecodePolicy.STRICT)

        assert exc_info.value.field == "category"

    def test_lenient_keeps_unknown_values(self):
        body = {
            "type": "vr-headset",
            "device": {"type": "smartfridge"},
            "crawler": {"category": "ai-trainer"},
        }

        stack = Stack.from_dict(body, DecodePolicy.LENIENT)

        assert stack.type == "vr-headset"
        assert stack.device.type == "smartfridge"
        assert stack.crawler.category == "ai-trainer"

    def test_is_frozen(self):
        stack = Stack.from_dict(SUCCESS_BODY)

        with pytest.raises(dataclasses.FrozenInstanceError):
            stack.ua = "changed"

    def test_to_dict_encodes_enums_and_drops_none(self):
        data = Stack.from_dict(SUCCESS_BODY).to_dict()

        assert data["type"] == "browser"
        assert data["device"]["type"] == "desktop"
        assert data["os"]["name"] == "macOS 10.14 Mojave"
        assert data["crawler"] == {"is_crawler": False}

    def test_to_dict_keeps_lenient_raw_values(self):
        stack = Stack.from_dict({"type": "vr-headset"}, DecodePolicy.LENIENT)
        assert stack.to_dict()["type"] == "vr-headset"


class TestApiErrorBody:
    def test_failure(self):
        body = ApiErrorBody.from_dict(
            {
                "success": False,
                "error": {"code": 302, "type": "invalid_fields", "info": "bad"},
            }
        )

        assert body.failed
        assert body.code == 302
        assert body.type is ErrorType.INVALID_FIELDS
        assert body.info == "bad"

    def test_success_absent_is_not_failure(self):
        body = ApiErrorBody.from_dict({"ua": "curl/8.0"})

        assert body.success is None
        assert not body.failed

    def test_success_true_is_not_failure(self):
        assert not ApiErrorBody.from_dict({"success": True}).failed

    @pytest.mark.parametrize("code", ["101", 101.0, True, [101]])
    def test_non_integer_code_rejected(self, code):
        with pytest.raises(ValueError, match="error code"):
            ApiErrorBody.from_dict(
                {"success": False, "error": {"code": code, "info": "x"}}
            )

    def test_non_string_info_rejected(self):
        with pytest.raises(ValueError, match="error info"):
            ApiErrorBody.from_dict(
                {"success": False, "error": {"code": 101, "info": 42}}
            )

    def test_null_code_and_info_treated_as_absent(self):
        body = ApiErrorBody.from_dict(
            {"success": False, "error": {"code": None, "info": None}}
        )

        assert body.code == 0
        assert body.info == ""

    def test_strict_unknown_error_type(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            ApiErrorBody.from_dict(
                {"success": False, "error": {"type": "quota_melted"}},
                DecodePolicy.STRICT,
            )

        assert exc_info.value.field == "error"


class TestRequestParams:
    def test_fields_forwarded(self):
        assert RequestParams(fields="os,device").to_query() == {"fields": "os,device"}

    @pytest.mark.parametrize("fields", [None, ""])
    def test_empty_fields_omitted(self, fields):
        assert RequestParams(fields=fields).to_query() == {}
