"""JSON-RPC envelope codec.

Requests always take the form
``{"jsonrpc": "2.0", "method": ..., "params": {...}, "id": "<uuid>"}``;
responses are either ``{"result": {...}}`` or
``{"error": {"code": int, "message": str}}``.
"""

import json
import uuid as _uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from randomorg.config import JSONRPC_VERSION
from randomorg.errors import APIError, EncodingError, FormatError, MissingDataError
from randomorg.usage import Usage


@dataclass(frozen=True)
class ResultObject:
    """Decoded ``result`` member of a successful response."""

    random: Optional[Dict[str, Any]]
    usage: Usage
    bits_used: Optional[int] = None
    advisory_delay: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def data(self) -> List[Any]:
        """The ``random.data`` array.

        Raises:
            MissingDataError: If ``random`` or ``random.data`` is absent or malformed.
        """
        if not isinstance(self.random, dict):
            raise MissingDataError("result has no 'random' object", self.raw)
        data = self.random.get("data")
        if not isinstance(data, list):
            raise MissingDataError("result has no 'random.data' array", self.raw)
        return data


def new_request_id() -> str:
    return str(_uuid.uuid4())


def encode(
    method: str,
    params: Dict[str, Any],
    api_key: str,
    request_id: Optional[str] = None,
) -> bytes:
    """Serialize a request envelope, adding ``apiKey`` to *params*.

    Raises:
        EncodingError: If a parameter value cannot be serialized.
    """
    payload = {
        "jsonrpc": JSONRPC_VERSION,
        "method": method,
        "params": {**params, "apiKey": api_key},
        "id": request_id or new_request_id(),
    }
    try:
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"cannot serialize params for {method!r}: {exc}") from exc


def _optional_int(result: Dict[str, Any], key: str) -> Optional[int]:
    value = result.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _decode_result(result: Dict[str, Any]) -> ResultObject:
    random = result.get("random")
    return ResultObject(
        random=random if isinstance(random, dict) else None,
        usage=Usage.from_result(result, strict=False),
        bits_used=_optional_int(result, "bitsUsed"),
        advisory_delay=_optional_int(result, "advisoryDelay"),
        raw=result,
    )


def _decode_error(error: Any) -> Optional[APIError]:
    if not isinstance(error, dict):
        return None
    code = error.get("code")
    message = error.get("message")
    if not isinstance(code, int) or isinstance(code, bool) or not isinstance(message, str):
        return None
    data = error.get("data")
    return APIError(code, message, data if isinstance(data, dict) else None)


def decode(body: Union[bytes, str]) -> Union[ResultObject, APIError]:
    """Decode a response body into a result or a service error.

    The error is returned, not raised, so callers decide how to surface it.

    Raises:
        FormatError: If *body* is not UTF-8 JSON, or holds neither a result object
            nor a well-formed error object. The raw body is attached.
    """
    if isinstance(body, bytes):
        try:
            raw = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"response is not valid UTF-8: {exc}", body) from exc
    else:
        raw = body
    try:
        document = json.loads(raw)
    except ValueError as exc:
        raise FormatError(f"response is not valid JSON: {exc}", raw) from exc

    if not isinstance(document, dict):
        raise FormatError("response is not a JSON object", raw)

    result = document.get("result")
    if isinstance(result, dict):
        return _decode_result(result)

    api_error = _decode_error(document.get("error"))
    if api_error is not None:
        return api_error

    raise FormatError("response has neither a result nor an error object", raw)
