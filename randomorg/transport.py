"""HTTP transport for JSON-RPC calls to Random.org."""

import logging
from typing import Any, Dict, Optional

import httpx

from randomorg.config import DEFAULT_TIMEOUT, RANDOM_ORG_ENDPOINT
from randomorg.envelope import ResultObject, decode, encode, new_request_id
from randomorg.errors import APIError, FormatError, TransportError

logger = logging.getLogger("randomorg")

HEADERS = {
    "Content-Type": "application/json-rpc",
    "Accept": "application/json",
}


class HttpTransport:
    """Posts request envelopes over a reusable ``httpx.Client``.

    Args:
        endpoint: JSON-RPC endpoint URL.
        timeout: Per-request timeout in seconds.
        proxy: Optional proxy URL all requests are routed through.
        http_client: Pre-built client to use instead of creating one
            (the transport then does not own it and never closes it).
    """

    def __init__(
        self,
        endpoint: str = RANDOM_ORG_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.proxy = proxy
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else self._build_client(proxy)

    def _build_client(self, proxy: Optional[str]) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, proxy=proxy)

    def set_proxy(self, proxy: Optional[str]) -> None:
        """Route subsequent requests through *proxy* (None or "" removes it).

        New calls pick up the new client at once. A call still in flight on
        the previous client may fail when that client is closed, so avoid
        switching proxies while other threads are mid-request.
        """
        proxy = proxy or None
        try:
            client = self._build_client(proxy)
        except (ValueError, TypeError, httpx.InvalidURL) as exc:
            raise TransportError(f"invalid proxy URL {proxy!r}: {exc}") from exc
        old_client, owned = self._client, self._owns_client
        self._client = client
        self._owns_client = True
        self.proxy = proxy
        # Swap before closing so no new call starts on a closed client.
        if owned:
            old_client.close()

    def send(self, method: str, params: Dict[str, Any], api_key: str) -> ResultObject:
        """Send one call and return its result object.

        Raises:
            EncodingError: If *params* cannot be serialized.
            TransportError: On connection failure or an unreadable HTTP error reply.
            FormatError: If the body matches neither envelope shape.
            APIError: If the service answered with an error envelope.
        """
        request_id = new_request_id()
        body = encode(method, params, api_key, request_id)
        logger.debug("Calling %s (id=%s)", method, request_id)

        try:
            resp = self._client.post(self.endpoint, content=body, headers=HEADERS)
            content = resp.content
        except httpx.HTTPError as e:
            # Network layer: timeouts, refused connections, broken bodies
            raise TransportError(f"request to {self.endpoint} failed: {e}") from e

        try:
            outcome = decode(content)
        except FormatError as e:
            if resp.is_error:
                raise TransportError(
                    f"HTTP {resp.status_code} from {self.endpoint}", status_code=resp.status_code
                ) from e
            raise

        if isinstance(outcome, APIError):
            logger.warning("%s returned %s", method, outcome)
            raise outcome
        return outcome

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
