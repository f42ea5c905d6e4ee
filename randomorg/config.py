"""Endpoint constants and environment-driven settings.

Settings resolve in this order: explicit argument, environment variable,
``.env`` file in the working directory (via python-dotenv).
"""

import os
from typing import Optional

from dotenv import load_dotenv

from randomorg.errors import ConfigError

# === Base configuration ===
RANDOM_ORG_ENDPOINT = "https://api.random.org/json-rpc/4/invoke"  # Release 4 basic API
JSONRPC_VERSION = "2.0"

API_KEY_ENV = "RANDOM_ORG_API_KEY"
PROXY_ENV = "RANDOM_ORG_PROXY"
TIMEOUT_ENV = "RANDOM_ORG_TIMEOUT"

DEFAULT_TIMEOUT = 30.0

_dotenv_loaded = False


def _ensure_dotenv() -> None:
    global _dotenv_loaded
    if not _dotenv_loaded:
        load_dotenv()
        _dotenv_loaded = True


def resolve_api_key(api_key: Optional[str] = None) -> str:
    """Return the API key to use, falling back to ``RANDOM_ORG_API_KEY``.

    Raises:
        ConfigError: If no non-empty key is available.
    """
    if api_key is None:
        _ensure_dotenv()
        api_key = os.environ.get(API_KEY_ENV)
    if not api_key or not api_key.strip():
        raise ConfigError(
            f"No API key provided. Pass one explicitly or set {API_KEY_ENV} "
            "in the environment or in a .env file."
        )
    return api_key.strip()


def resolve_proxy(proxy: Optional[str] = None) -> Optional[str]:
    if proxy is None:
        _ensure_dotenv()
        proxy = os.environ.get(PROXY_ENV)
    return proxy or None


def resolve_timeout(timeout: Optional[float] = None) -> float:
    if timeout is not None:
        return float(timeout)
    _ensure_dotenv()
    raw = os.environ.get(TIMEOUT_ENV)
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{TIMEOUT_ENV} must be positive, got {raw!r}")
    return value
