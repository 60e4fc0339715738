"""User-Agent header generation for HTTP requests."""

import platform
from importlib.metadata import version


def get_user_agent() -> str:
    """Get the User-Agent string the client sends with its own requests.

    This identifies the client library to userstack; it is unrelated to the
    User-Agent string being looked up, which travels in the ``ua`` query
    parameter.

    Returns:
        User-Agent string in format: userstack-python/<version> (Python <python_version>; <OS>)

    Example:
        >>> get_user_agent()
        'userstack-python/0.3.0 (Python 3.11.12; Darwin)'
    """
    try:
        pkg_version = version("userstack-client")
    except Exception:
        pkg_version = "unknown"

    python_version = platform.python_version()
    os_name = platform.system()

    return f"userstack-python/{pkg_version} (Python {python_version}; {os_name})"
