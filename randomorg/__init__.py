"""Client for the Random.org true random number JSON-RPC API."""

from randomorg.client import RandomOrgClient
from randomorg.envelope import ResultObject
from randomorg.errors import (
    APIError,
    ConfigError,
    EncodingError,
    FormatError,
    MissingDataError,
    RandomOrgError,
    TransportError,
    TypeMismatchError,
    ValidationError,
)
from randomorg.transport import HttpTransport
from randomorg.usage import Usage, UsageCache

__all__ = [
    "RandomOrgClient",
    "HttpTransport",
    "ResultObject",
    "Usage",
    "UsageCache",
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
