"""HTTP utilities for userstack API communication."""

from typing import Optional

import httpx
import requests

# Per-phase timeouts (connect, TLS handshake, waiting for headers).
DEFAULT_CONNECT_TIMEOUT = 10.0
# Upper bound for the whole exchange.
DEFAULT_TIMEOUT = 60.0


def default_timeout(timeout: Optional[float] = None) -> httpx.Timeout:
    """Conservative httpx timeout: 10s to connect, ``timeout`` for everything else."""
    total = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.Timeout(total, connect=min(DEFAULT_CONNECT_TIMEOUT, total))


def default_headers() -> dict:
    from .user_agent import get_user_agent

    return {
        "User-Agent": get_user_agent(),
        "Accept": "application/json",
    }


def get_default_httpx_client(timeout: Optional[float] = None) -> httpx.Client:
    """Create the httpx Client used when the caller does not supply one.

    Automatically includes:
    - User-Agent header identifying the client library and version
    - 10s connect timeout, 60s for the rest of the exchange (configurable)
    - Redirects are not followed

    The access key is never set as a header; it travels as a query parameter
    added per request.

    Args:
        timeout: Overall timeout in seconds. Defaults to 60.0.

    Returns:
        Configured httpx.Client

    Example:
        with get_default_httpx_client(timeout=5.0) as http:
            client = UserstackClient(key, http_client=http)
    """
    return httpx.Client(
        timeout=default_timeout(timeout),
        headers=default_headers(),
        follow_redirects=False,
    )


def get_default_async_httpx_client(
    timeout: Optional[float] = None,
) -> httpx.AsyncClient:
    """Async counterpart of get_default_httpx_client.

    Args:
        timeout: Overall timeout in seconds. Defaults to 60.0.

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=default_timeout(timeout),
        headers=default_headers(),
        follow_redirects=False,
    )


class RequestsTransport:
    """Send httpx requests through a requests Session.

    Lets callers who already manage a ``requests.Session`` (proxies, adapters,
    mounted retries) plug it into UserstackClient. Transport errors are
    requests exceptions and propagate unchanged.

    Example:
        session = requests.Session()
        client = UserstackClient(key, http_client=RequestsTransport(session))
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._owns_session = session is None
        self.session = session or get_default_requests_session()
        total = timeout if timeout is not None else DEFAULT_TIMEOUT
        self.timeout = (min(DEFAULT_CONNECT_TIMEOUT, total), total)

    def send(self, request: httpx.Request) -> httpx.Response:
        resp = self.session.request(
            request.method,
            str(request.url),
            headers={
                k: v for k, v in request.headers.items() if k.lower() != "host"
            },
            timeout=self.timeout,
            allow_redirects=False,
        )
        # requests has already decompressed the body
        headers = {
            k: v
            for k, v in resp.headers.items()
            if k.lower() not in ("content-encoding", "content-length")
        }
        return httpx.Response(
            status_code=resp.status_code,
            headers=headers,
            content=resp.content,
            request=request,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()


def get_default_requests_session() -> requests.Session:
    """Create requests Session with the client's User-Agent.

    Returns:
        Configured requests.Session

    Example:
        import contextlib
        with contextlib.closing(get_default_requests_session()) as session:
            transport = RequestsTransport(session)
    """
    session = requests.Session()
    session.headers.update(default_headers())
    return session
