"""userstack logging configuration.

SECURITY NOTE: handlers installed by setup_logging carry a SensitiveDataFilter
that redacts access keys, API keys, and tokens. The client already hides the
access key in its own debug lines; the filter covers everything else that
ends up on the same handlers (e.g. exception text from httpx that embeds the
request URL).
"""

import logging
import os
import re
import sys
from typing import Any, Dict, Optional, Union

REDACTED = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Redacts sensitive information from log records.

    Identifies and redacts common patterns:
    - userstack access keys in query strings (access_key=...)
    - API keys (api_key, apiKey patterns)
    - Authorization headers (Bearer tokens)
    - Passwords and secrets
    """

    SENSITIVE_KEYS = {
        "access_key",
        "accesskey",
        "access-key",
        "api_key",
        "apikey",
        "api-key",
        "userstack_access_key",
        "password",
        "passwd",
        "pwd",
        "token",
        "secret",
        "authorization",
    }

    # access_key in URLs, kwargs and env-style assignments
    ACCESS_KEY_PATTERN = re.compile(
        r"((?:userstack[_-]?)?access[_-]?key\s*[:=]\s*['\"]?)([^&\s'\",;]+)(['\"]?)",
        re.IGNORECASE,
    )

    API_KEY_PATTERN = re.compile(
        r"((?:api[_-]?key|apikey)\s*[:=]\s*['\"]?)([A-Za-z0-9_-]+)(['\"]?)",
        re.IGNORECASE,
    )

    BEARER_PATTERN = re.compile(r"(bearer\s+)([A-Za-z0-9_.-]+)", re.IGNORECASE)

    PASSWORD_PATTERN = re.compile(
        r"(password|passwd|pwd|secret)(\s*[:=]\s*)(?:\"([^\"]*)\"|'([^']*)'|([^\s,;]+))",
        re.IGNORECASE,
    )

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize log record by redacting sensitive data.

        Args:
            record: The log record to sanitize

        Returns:
            True to allow the record to be logged (always)
        """
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self._redact_dict(record.args)
            elif isinstance(record.args, (tuple, list)):
                record.args = tuple(self._redact_value(arg) for arg in record.args)
            else:
                record.args = self._redact_value(record.args)

        # Format the traceback now so downstream formatters can't regenerate
        # an unredacted one from exc_info.
        if record.exc_info:
            formatted_exc = logging.Formatter().formatException(record.exc_info)
            record.exc_text = self._redact_string(formatted_exc)
            record.exc_info = None
        elif record.exc_text:
            record.exc_text = self._redact_string(record.exc_text)

        return True

    def _redact_string(self, text: str) -> str:
        if not isinstance(text, str):
            return text

        text = self.BEARER_PATTERN.sub(rf"\1{REDACTED}", text)
        text = self.ACCESS_KEY_PATTERN.sub(
            lambda m: f"{m.group(1)}{REDACTED}{m.group(3)}", text
        )
        text = self.API_KEY_PATTERN.sub(
            lambda m: f"{m.group(1)}{REDACTED}{m.group(3)}", text
        )
        text = self.PASSWORD_PATTERN.sub(
            lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text
        )
        return text

    def _redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        result = {}
        for key, value in data.items():
            key_lower = key.lower() if isinstance(key, str) else str(key).lower()

            if key_lower in self.SENSITIVE_KEYS:
                result[key] = REDACTED
            else:
                result[key] = self._redact_value(value)

        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._redact_string(value)
        elif isinstance(value, dict):
            return self._redact_dict(value)
        elif isinstance(value, (list, tuple)):
            return type(value)(self._redact_value(item) for item in value)
        return value


def setup_logging(
    level: Union[int, str] = logging.INFO, stream=sys.stderr, fmt: Optional[str] = None
):
    """
    Sets up the root logger with a stream handler and basic formatting.
    If handlers are already configured, only attaches the redaction filter.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        level = getattr(logging, env_level.upper(), level)

    if fmt is None:
        fmt = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"

    root_logger = logging.getLogger()
    sensitive_filter = SensitiveDataFilter()

    if not root_logger.hasHandlers():
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        handler.addFilter(sensitive_filter)
        root_logger.addHandler(handler)
    else:
        for existing_handler in root_logger.handlers:
            if not any(
                isinstance(f, SensitiveDataFilter) for f in existing_handler.filters
            ):
                existing_handler.addFilter(sensitive_filter)

    root_logger.setLevel(level)

    # httpx logs full request URLs, access key included, at INFO.
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
