"""API key usage snapshot and the per-client cache that assembles it.

The service piggybacks quota fields on every successful response. The cache
merges whatever fields each response carries, so a snapshot fills up over
time and never loses a field once seen.
"""

import dataclasses
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from randomorg.errors import FormatError

logger = logging.getLogger("randomorg")

USAGE_STATUSES = ("stopped", "paused", "running")

# Wire name -> Usage attribute.
USAGE_FIELDS: Dict[str, str] = {
    "status": "status",
    "creationTime": "creation_time",
    "bitsLeft": "bits_left",
    "requestsLeft": "requests_left",
    "totalBits": "total_bits",
    "totalRequests": "total_requests",
}


def parse_creation_time(value: str) -> datetime:
    """Parse the service's ``YYYY-MM-DD HH:MM:SSZ`` timestamp (ISO 8601 also accepted)."""
    text = value.strip().replace(" ", "T", 1)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_counter(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise FormatError(f"usage field {name!r} must be an integer, got {value!r}", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise FormatError(f"usage field {name!r} must be an integer, got {value!r}", value)


def _parse_field(name: str, value: Any) -> Any:
    if name == "status":
        if not isinstance(value, str) or value not in USAGE_STATUSES:
            raise FormatError(f"unknown API key status {value!r}", value)
        return value
    if name == "creationTime":
        if not isinstance(value, str):
            raise FormatError(f"usage field 'creationTime' must be a string, got {value!r}", value)
        try:
            return parse_creation_time(value)
        except ValueError as exc:
            raise FormatError(f"unparseable creationTime {value!r}", value) from exc
    return _parse_counter(name, value)


@dataclass(frozen=True)
class Usage:
    """Quota information for an API key.

    Every field is optional because responses may carry any subset of them.
    """

    status: Optional[str] = None
    creation_time: Optional[datetime] = None
    bits_left: Optional[int] = None
    requests_left: Optional[int] = None
    total_bits: Optional[int] = None
    total_requests: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        """True once all six fields hold a value."""
        return all(getattr(self, attr) is not None for attr in USAGE_FIELDS.values())

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, attr) is None for attr in USAGE_FIELDS.values())

    @classmethod
    def from_result(cls, result: Dict[str, Any], strict: bool = True) -> "Usage":
        """Build a partial snapshot from the usage fields present in *result*.

        ``null`` values count as absent. With ``strict=False`` an ill-typed
        field is logged and dropped instead of failing the whole result.

        Raises:
            FormatError: If *strict* and a present field has the wrong type.
        """
        values: Dict[str, Any] = {}
        for wire_name, attr in USAGE_FIELDS.items():
            value = result.get(wire_name)
            if value is None:
                continue
            try:
                values[attr] = _parse_field(wire_name, value)
            except FormatError as exc:
                if strict:
                    raise
                logger.warning("Ignoring usage field %s: %s", wire_name, exc)
        return cls(**values)

    def merged_with(self, other: "Usage") -> "Usage":
        """Return a copy with every field set in *other* overwriting this one."""
        changes = {
            attr: getattr(other, attr)
            for attr in USAGE_FIELDS.values()
            if getattr(other, attr) is not None
        }
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Return the snapshot keyed by the service's field names."""
        data: Dict[str, Any] = {}
        for wire_name, attr in USAGE_FIELDS.items():
            value = getattr(self, attr)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[wire_name] = value
        data["isComplete"] = self.is_complete
        return data


class UsageCache:
    """Thread-safe holder of the last known usage snapshot for one client."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._usage: Optional[Usage] = None

    def merge(self, observed: Usage) -> Usage:
        """Overlay the fields present in *observed* onto the held snapshot.

        Creates the snapshot on first use. Returns the merged snapshot.
        """
        if observed.is_empty:
            with self._lock:
                return self._usage if self._usage is not None else Usage()
        with self._lock:
            current = self._usage if self._usage is not None else Usage()
            self._usage = current.merged_with(observed)
            merged = self._usage
        logger.debug("Merged usage fields; snapshot complete=%s", merged.is_complete)
        return merged

    def snapshot(self) -> Optional[Usage]:
        """Return the snapshot if complete, else None (a fresh query is needed)."""
        with self._lock:
            if self._usage is not None and self._usage.is_complete:
                return self._usage
            return None

    def peek(self) -> Optional[Usage]:
        """Return the snapshot as it stands, complete or not."""
        with self._lock:
            return self._usage
