"""Shared pytest fixtures for randomorg tests.

Every test talks to an in-process fake of the Random.org endpoint through
``httpx.MockTransport``; no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Union

import httpx
import pytest

from randomorg.client import RandomOrgClient
from randomorg.transport import HttpTransport

ENDPOINT = "https://api.random.org/json-rpc/4/invoke"
API_KEY = "00000000-0000-0000-0000-000000000000"

Reply = Union[tuple, Exception, Callable[[httpx.Request], httpx.Response]]


def result_body(data: Any = None, **fields: Any) -> dict:
    """Build a success envelope with ``random.data`` set to *data*.

    Extra keyword fields land in the result object (usage fields, bitsUsed...).
    Pass ``data=None`` to omit the random block entirely.
    """
    result: dict = dict(fields)
    if data is not None:
        result["random"] = {"data": data, "completionTime": "2024-06-01 12:00:00Z"}
    return {"jsonrpc": "2.0", "result": result, "id": "test"}


def error_body(code: int, message: str, **data: Any) -> dict:
    error: dict = {"code": code, "message": message}
    if data:
        error["data"] = data
    return {"jsonrpc": "2.0", "error": error, "id": "test"}


class FakeService:
    """Scripted stand-in for the JSON-RPC endpoint.

    Queue replies with :meth:`reply`; each request consumes one. A reply is a
    ``(status, body)`` tuple, an exception to raise, or a callable that
    builds the response.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[Reply] = []

    def reply(self, body: Any, status: int = 200) -> "FakeService":
        self._replies.append((status, body))
        return self

    def fail(self, exc: Exception) -> "FakeService":
        self._replies.append(exc)
        return self

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def payload(self, index: int = -1) -> dict:
        """Decoded JSON-RPC request envelope of the *index*-th call."""
        return json.loads(self.requests[index].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError("unexpected request: no reply queued")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        status, body = reply
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def transport(service: FakeService) -> HttpTransport:
    http_client = httpx.Client(transport=httpx.MockTransport(service.handler))
    return HttpTransport(endpoint=ENDPOINT, http_client=http_client)


@pytest.fixture
def client(transport: HttpTransport) -> RandomOrgClient:
    return RandomOrgClient(API_KEY, transport=transport)


@pytest.fixture
def full_usage() -> dict:
    """All six usage fields as the service sends them."""
    return {
        "status": "running",
        "creationTime": "2013-02-20 17:53:40Z",
        "bitsLeft": 998532,
        "requestsLeft": 199996,
        "totalBits": 1646421,
        "totalRequests": 65036,
    }
