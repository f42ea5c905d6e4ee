"""Exception hierarchy for the Random.org client.

All errors derive from RandomOrgError, so callers can catch broadly at the
application boundary and still tell the failure kinds apart.
"""

from typing import Any, Dict, Optional


class RandomOrgError(Exception):
    """Base exception for all Random.org client errors."""


class ConfigError(RandomOrgError):
    """The client cannot be configured (missing API key, bad timeout)."""


class ValidationError(RandomOrgError, ValueError):
    """A generator parameter is out of range. Raised before any HTTP call."""


class TransportError(RandomOrgError):
    """The request could not be delivered or the reply could not be read."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EncodingError(TransportError):
    """Request parameters could not be serialized to JSON."""


class FormatError(RandomOrgError):
    """The response matches neither the result nor the error envelope.

    The raw payload is kept for diagnostics.
    """

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class MissingDataError(FormatError):
    """A result object carries no ``random.data`` array."""


class TypeMismatchError(RandomOrgError, TypeError):
    """A returned data element does not have the expected scalar type."""

    def __init__(self, index: int, value: Any, expected: str):
        super().__init__(
            f"element {index} of the data array is {type(value).__name__} "
            f"({value!r}), expected {expected}"
        )
        self.index = index
        self.value = value
        self.expected = expected


# === Friendly hints for well-known error codes ===
_HINTS: Dict[int, str] = {
    -32600: "Malformed JSON-RPC request. Check the method/params/id fields.",
    -32601: "Unknown JSON-RPC method. Is the method name correct?",
    -32602: "Invalid JSON-RPC params. Check field types and value ranges.",
    -32603: "JSON-RPC internal error. Try again later.",
    400: "The API key you specified does not exist. Check RANDOM_ORG_API_KEY.",
    401: "The API key is not running. Check its status on random.org.",
    402: "The API key has exceeded its daily allowance (requests or bits).",
    403: "The API key has exceeded its daily allowance (requests or bits).",
}


class APIError(RandomOrgError):
    """Well-formed error envelope returned by the service.

    ``code`` and ``message`` are carried verbatim from the service.
    """

    def __init__(self, code: int, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(f"API error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data or {}

    @property
    def hint(self) -> str:
        """Human-oriented advice for the error, plus any diagnostics in ``data``."""
        parts = [_HINTS.get(self.code, f"Call failed with code {self.code}: {self.message}")]
        if "advisoryDelay" in self.data:
            parts.append(f"Wait {self.data['advisoryDelay']} ms before retrying.")
        if "bitsLeft" in self.data:
            parts.append(f"bitsLeft={self.data['bitsLeft']}.")
        if "requestsLeft" in self.data:
            parts.append(f"requestsLeft={self.data['requestsLeft']}.")
        return " ".join(parts)


__all__ = [
    "RandomOrgError",
    "ConfigError",
    "ValidationError",
    "TransportError",
    "EncodingError",
    "FormatError",
    "MissingDataError",
    "TypeMismatchError",
    "APIError",
]
