"""Random.org API client.

Basic methods of the JSON-RPC release 4 API, see
https://api.random.org/json-rpc/4/basic. Each generator validates its
parameters locally, sends one request, and coerces the returned ``data``
array to the expected Python type. Usage fields that arrive with any
response are merged into the client's usage cache.
"""

from typing import Any, Callable, Dict, List, Optional

from randomorg.config import RANDOM_ORG_ENDPOINT, resolve_api_key, resolve_proxy, resolve_timeout
from randomorg.errors import FormatError, MissingDataError, ValidationError
from randomorg.transport import HttpTransport
from randomorg.usage import Usage, UsageCache
from randomorg.validation import (
    as_floats,
    as_ints,
    as_strings,
    validate_bool,
    validate_choice,
    validate_int_range,
    validate_length,
    validate_number_range,
)

BLOB_FORMATS = ("base64", "hex")


class RandomOrgClient:
    """Client for the Random.org JSON-RPC API.

    Args:
        api_key: API key; read from ``RANDOM_ORG_API_KEY`` (or ``.env``) when omitted.
        endpoint: JSON-RPC endpoint URL.
        timeout: HTTP timeout in seconds; ``RANDOM_ORG_TIMEOUT`` or 30 s when omitted.
        proxy: Proxy URL; ``RANDOM_ORG_PROXY`` when omitted.
        transport: Pre-built transport; *endpoint*, *timeout* and *proxy* are
            then ignored.

    Raises:
        ConfigError: If no API key is available.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        endpoint: str = RANDOM_ORG_ENDPOINT,
        timeout: Optional[float] = None,
        proxy: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
    ):
        self._api_key = resolve_api_key(api_key)
        if transport is None:
            transport = HttpTransport(
                endpoint=endpoint,
                timeout=resolve_timeout(timeout),
                proxy=resolve_proxy(proxy),
            )
        self._transport = transport
        self._usage = UsageCache()

    def set_proxy(self, proxy: Optional[str]) -> None:
        """Route subsequent requests through *proxy*; None or "" disables it."""
        self._transport.set_proxy(proxy)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "RandomOrgClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # === Request orchestration ===

    def request_command(self, method: str, params: Dict[str, Any]) -> List[Any]:
        """Invoke *method* and return the raw ``random.data`` array.

        Usage fields in the result are merged into the usage cache before the
        data array is extracted, so they are kept even when it is missing.

        Raises:
            MissingDataError: If the result has no ``random.data`` array.
        """
        result = self._transport.send(method, params, self._api_key)
        self._usage.merge(result.usage)
        return result.data

    def _generate(
        self,
        method: str,
        params: Dict[str, Any],
        coerce: Callable[[List[Any]], List[Any]],
    ) -> List[Any]:
        values = self.request_command(method, params)
        if len(values) != params["n"]:
            raise FormatError(
                f"{method} returned {len(values)} values, expected {params['n']}", values
            )
        return coerce(values)

    # === Basic methods ===

    def generate_integers(
        self, n: int, min_value: int, max_value: int, replacement: bool = True
    ) -> List[int]:
        """Generate *n* true random integers in ``[min_value, max_value]``."""
        validate_int_range(n, "n", 1, 10_000)
        validate_int_range(min_value, "min", -1_000_000_000, 1_000_000_000)
        validate_int_range(max_value, "max", -1_000_000_000, 1_000_000_000)
        if min_value > max_value:
            raise ValidationError(f"min cannot be greater than max ({min_value} > {max_value})")
        validate_bool(replacement, "replacement")

        params: Dict[str, Any] = {"n": n, "min": min_value, "max": max_value}
        if not replacement:
            params["replacement"] = False
        return self._generate("generateIntegers", params, as_ints)

    def generate_decimal_fractions(
        self, n: int, decimal_places: int, replacement: bool = True
    ) -> List[float]:
        """Generate *n* decimal fractions in ``[0, 1)`` with *decimal_places* digits."""
        validate_int_range(n, "n", 1, 10_000)
        validate_int_range(decimal_places, "decimalPlaces", 1, 20)
        validate_bool(replacement, "replacement")

        params: Dict[str, Any] = {"n": n, "decimalPlaces": decimal_places}
        if not replacement:
            params["replacement"] = False
        return self._generate("generateDecimalFractions", params, as_floats)

    def generate_gaussians(
        self, n: int, mean: float, standard_deviation: float, significant_digits: int
    ) -> List[float]:
        """Generate *n* numbers from a Gaussian distribution (always with replacement)."""
        validate_int_range(n, "n", 1, 10_000)
        validate_number_range(mean, "mean", -1e6, 1e6)
        validate_number_range(standard_deviation, "standardDeviation", -1e6, 1e6)
        validate_int_range(significant_digits, "significantDigits", 2, 20)

        params: Dict[str, Any] = {
            "n": n,
            "mean": mean,
            "standardDeviation": standard_deviation,
            "significantDigits": significant_digits,
        }
        return self._generate("generateGaussians", params, as_floats)

    def generate_strings(
        self, n: int, length: int, characters: str, replacement: bool = True
    ) -> List[str]:
        """Generate *n* strings of *length* characters drawn from *characters*."""
        validate_int_range(n, "n", 1, 10_000)
        validate_int_range(length, "length", 1, 20)
        validate_length(characters, "characters", 1, 80)
        validate_bool(replacement, "replacement")

        params: Dict[str, Any] = {"n": n, "length": length, "characters": characters}
        if not replacement:
            params["replacement"] = False
        return self._generate("generateStrings", params, as_strings)

    def generate_uuids(self, n: int) -> List[str]:
        """Generate *n* version 4 UUIDs (RFC 4122 section 4.4)."""
        validate_int_range(n, "n", 1, 1000)
        return self._generate("generateUUIDs", {"n": n}, as_strings)

    def generate_blobs(self, n: int, size: int, format: str = "base64") -> List[str]:
        """Generate *n* blobs of *size* bits, encoded as base64 or hex strings."""
        validate_int_range(n, "n", 1, 100)
        validate_int_range(size, "size", 1, 1_048_576)
        if size % 8 != 0:
            raise ValidationError(f"size must be a multiple of 8 bits, got {size}")
        validate_choice(format, "format", BLOB_FORMATS)

        params: Dict[str, Any] = {"n": n, "size": size}
        if format != "base64":
            params["format"] = format
        return self._generate("generateBlobs", params, as_strings)

    # === Usage ===

    def get_usage(self) -> Usage:
        """Query the key's usage and return the refreshed snapshot.

        The snapshot may still be incomplete if the service omitted fields.
        """
        try:
            self.request_command("getUsage", {})
        except MissingDataError:
            # getUsage answers carry no random block
            pass
        return self._usage.peek() or Usage()

    def usage(self) -> Usage:
        """Return the cached snapshot when complete, else query the service."""
        cached = self._usage.snapshot()
        if cached is not None:
            return cached
        return self.get_usage()

    def cached_usage(self) -> Optional[Usage]:
        """Return the snapshot as it stands, without any network call."""
        return self._usage.peek()
