"""Configuration management for the userstack client.

Values come from the environment, after loading a ``.env`` file if present:

- USERSTACK_ACCESS_KEY: account access key (required to build a client)
- USERSTACK_SECURE: use https; only paid plans support it (default: false)
- USERSTACK_DEBUG: log outgoing requests with the key hidden (default: false)
- USERSTACK_STRICT: reject unknown enum values (default: true)
- USERSTACK_TIMEOUT: overall request timeout in seconds (default: 60)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

from .core.utils.http import DEFAULT_TIMEOUT

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class ClientConfig:
    """Settings used to construct a UserstackClient."""

    access_key: str = ""
    secure: bool = False
    debug: bool = False
    strict: bool = True
    timeout: float = DEFAULT_TIMEOUT


def load_config(env_file: Optional[Union[str, Path]] = None) -> ClientConfig:
    """Build a ClientConfig from the environment.

    Args:
        env_file: Optional path to a dotenv file. Without it, python-dotenv
            searches for ``.env`` from the working directory upwards. Values
            already set in the environment win over the file.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    return ClientConfig(
        access_key=os.getenv("USERSTACK_ACCESS_KEY", ""),
        secure=_env_bool("USERSTACK_SECURE", False),
        debug=_env_bool("USERSTACK_DEBUG", False),
        strict=_env_bool("USERSTACK_STRICT", True),
        timeout=_env_float("USERSTACK_TIMEOUT", DEFAULT_TIMEOUT),
    )
