"""userstack API client.

Example:
    with UserstackClient("my-access-key") as client:
        stack = client.detect("Mozilla/5.0 (iPhone; CPU iPhone OS 12_2 like Mac OS X) ...")
        print(stack.device.type, stack.browser.name)

Non-paying accounts must use ``secure=False``; only paid plans get https.
"""

import logging
from typing import TYPE_CHECKING, Optional, Protocol, Union
from urllib.parse import quote, quote_plus

import httpx

from .core.utils.http import (
    default_headers,
    get_default_async_httpx_client,
    get_default_httpx_client,
)
from .decoder import DetectFailure, DetectOutcome, decode_response
from .enums import DecodePolicy
from .exceptions import missing_access_key_error
from .logger import SensitiveDataFilter
from .models import RequestParams, Stack

if TYPE_CHECKING:
    from .config import ClientConfig

log = logging.getLogger(__name__)

API_HOST = "api.userstack.com"
DETECT_PATH = "detect"
# Placeholder written over the access key in debug output.
REDACTED_ACCESS_KEY = "hidden"


class HTTPClient(Protocol):
    """Transport used to send requests. ``httpx.Client`` satisfies it."""

    def send(self, request: httpx.Request) -> httpx.Response: ...


class AsyncHTTPClient(Protocol):
    """Async transport. ``httpx.AsyncClient`` satisfies it."""

    async def send(self, request: httpx.Request) -> httpx.Response: ...


def build_base_url(secure: bool) -> str:
    # Unpaid accounts do not have access to https.
    scheme = "https" if secure else "http"
    return f"{scheme}://{API_HOST}/"


def build_detect_url(
    base_url: str,
    access_key: str,
    user_agent: str,
    params: Optional[RequestParams] = None,
) -> httpx.URL:
    """Build ``{base_url}detect?access_key=...&ua=...[&fields=...]``."""
    query = {"access_key": access_key, "ua": user_agent}
    if params is not None:
        query.update(params.to_query())
    return httpx.URL(base_url).join(DETECT_PATH).copy_merge_params(query)


def redact_url(url: Union[httpx.URL, str]) -> str:
    """Return ``url`` as a string with the access key replaced by a placeholder."""
    url = httpx.URL(str(url))
    if "access_key" not in url.params:
        return str(url)
    return str(url.copy_set_param("access_key", REDACTED_ACCESS_KEY))


class _BaseClient:
    """Configuration and decoding shared by the sync and async clients."""

    def __init__(
        self,
        access_key: str,
        secure: bool = False,
        *,
        debug: bool = False,
        strict: bool = True,
        base_url: Optional[str] = None,
    ):
        if not access_key:
            raise missing_access_key_error()

        self._access_key = access_key
        self.secure = secure
        self.debug = debug
        self._policy = DecodePolicy.from_strict(strict)
        base_url = base_url or build_base_url(secure)
        # join() replaces the last path segment unless it ends with a slash
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_url={self.base_url!r}, "
            f"policy={self._policy.value!r}, debug={self.debug!r})"
        )

    @property
    def policy(self) -> DecodePolicy:
        return self._policy

    def _redact(self, msg: str) -> str:
        # Exception text can carry the key raw or query-encoded.
        forms = {
            self._access_key,
            quote_plus(self._access_key),
            quote(self._access_key, safe=""),
        }
        for form in sorted(forms, key=len, reverse=True):
            msg = msg.replace(form, REDACTED_ACCESS_KEY)
        return SensitiveDataFilter.ACCESS_KEY_PATTERN.sub(
            rf"\g<1>{REDACTED_ACCESS_KEY}\g<3>", msg
        )

    def _debugf(self, msg: str) -> None:
        if self.debug:
            log.debug(self._redact(msg))

    def _build_request(
        self, user_agent: str, params: Optional[RequestParams]
    ) -> httpx.Request:
        url = build_detect_url(self.base_url, self._access_key, user_agent, params)
        self._debugf(f"HTTP request: GET {redact_url(url)}")
        return httpx.Request("GET", url, headers=default_headers())

    def _decode(self, response: httpx.Response) -> DetectOutcome:
        # userstack returns 200 for failures too; the status code is
        # logged but never used to decide the outcome.
        self._debugf(
            f"HTTP GET:{response.status_code} header:{dict(response.headers)}"
        )
        outcome = decode_response(response.content, self._policy)
        if isinstance(outcome, DetectFailure):
            self._debugf(f"userstack API error: {outcome.error}")
        return outcome

    def _log_transport_error(self, exc: Exception) -> None:
        self._debugf(f"HTTP request failed: {type(exc).__name__}: {exc}")


class UserstackClient(_BaseClient):
    """Synchronous userstack client.

    Safe to share between threads as long as the transport is; httpx.Client
    is.

    Args:
        access_key: userstack access key. Empty raises ApiError
            (missing_access_key) before any network activity.
        secure: Use https. Only paid plans support it.
        debug: Log each request URL (access key hidden) and response headers
            at DEBUG level on the ``userstack.client`` logger.
        strict: Reject enum values outside the known vocabulary with
            UnsupportedTypeError. When False, unknown values are kept as
            plain strings.
        http_client: Custom transport. Defaults to an httpx.Client with
            conservative timeouts, owned and closed by this client.
        base_url: Override the API root, e.g. for a proxy.
        timeout: Overall timeout for the default transport, in seconds.
    """

    def __init__(
        self,
        access_key: str,
        secure: bool = False,
        *,
        debug: bool = False,
        strict: bool = True,
        http_client: Optional[HTTPClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(
            access_key, secure, debug=debug, strict=strict, base_url=base_url
        )
        self._owns_http_client = http_client is None
        self._http_client: HTTPClient = http_client or get_default_httpx_client(
            timeout
        )

    @classmethod
    def from_config(
        cls, config: "ClientConfig", http_client: Optional[HTTPClient] = None
    ) -> "UserstackClient":
        return cls(
            config.access_key,
            config.secure,
            debug=config.debug,
            strict=config.strict,
            http_client=http_client,
            timeout=config.timeout,
        )

    def detect_outcome(
        self, user_agent: str, params: Optional[RequestParams] = None
    ) -> DetectOutcome:
        """Look up a single User-Agent string.

        Returns:
            DetectSuccess with the Stack, or DetectFailure with the ApiError
            when userstack rejected the request.

        Raises:
            httpx.HTTPError: Transport failure, unchanged.
            json.JSONDecodeError: Response body is not JSON.
            UnsupportedTypeError: Strict mode met an unknown enum value.
        """
        request = self._build_request(user_agent, params)
        try:
            response = self._http_client.send(request)
        except Exception as e:
            self._log_transport_error(e)
            raise
        return self._decode(response)

    def detect(self, user_agent: str, params: Optional[RequestParams] = None) -> Stack:
        """Look up a single User-Agent string.

        An empty ``user_agent`` is sent as-is; userstack answers it with a
        missing_user_agent error.

        Raises:
            ApiError: userstack rejected the request (bad key, plan limits, ...).
            httpx.HTTPError: Transport failure, unchanged.
            json.JSONDecodeError: Response body is not JSON.
            UnsupportedTypeError: Strict mode met an unknown enum value.
        """
        outcome = self.detect_outcome(user_agent, params)
        if isinstance(outcome, DetectFailure):
            raise outcome.error
        return outcome.stack

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "UserstackClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncUserstackClient(_BaseClient):
    """Asynchronous userstack client.

    Takes the same arguments as UserstackClient. Cancelling the calling task
    or wrapping ``detect`` in ``asyncio.wait_for`` aborts the request; the
    resulting CancelledError or TimeoutError propagates unchanged.
    """

    def __init__(
        self,
        access_key: str,
        secure: bool = False,
        *,
        debug: bool = False,
        strict: bool = True,
        http_client: Optional[AsyncHTTPClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(
            access_key, secure, debug=debug, strict=strict, base_url=base_url
        )
        self._owns_http_client = http_client is None
        self._http_client: AsyncHTTPClient = (
            http_client or get_default_async_httpx_client(timeout)
        )

    @classmethod
    def from_config(
        cls, config: "ClientConfig", http_client: Optional[AsyncHTTPClient] = None
    ) -> "AsyncUserstackClient":
        return cls(
            config.access_key,
            config.secure,
            debug=config.debug,
            strict=config.strict,
            http_client=http_client,
            timeout=config.timeout,
        )

    async def detect_outcome(
        self, user_agent: str, params: Optional[RequestParams] = None
    ) -> DetectOutcome:
        """Async counterpart of UserstackClient.detect_outcome."""
        request = self._build_request(user_agent, params)
        try:
            response = await self._http_client.send(request)
        except Exception as e:
            self._log_transport_error(e)
            raise
        return self._decode(response)

    async def detect(
        self, user_agent: str, params: Optional[RequestParams] = None
    ) -> Stack:
        """Async counterpart of UserstackClient.detect."""
        outcome = await self.detect_outcome(user_agent, params)
        if isinstance(outcome, DetectFailure):
            raise outcome.error
        return outcome.stack

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "AsyncUserstackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
