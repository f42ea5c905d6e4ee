"""MCP server exposing the Random.org client as tools.

Run with ``randomorg-mcp`` (stdio transport, suitable for Claude Desktop or
the MCP Inspector). The API key comes from ``RANDOM_ORG_API_KEY`` or ``.env``.
"""

import json
import threading
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.session import ServerSession

from randomorg.client import RandomOrgClient
from randomorg.errors import APIError, RandomOrgError, ValidationError

mcp = FastMCP("Random.org MCP Server")

_client: Optional[RandomOrgClient] = None
_client_lock = threading.Lock()


def get_client() -> RandomOrgClient:
    """Return the process-wide client, creating it on first use."""
    global _client
    with _client_lock:
        if _client is None:
            _client = RandomOrgClient()
        return _client


def set_client(client: Optional[RandomOrgClient]) -> None:
    """Replace the process-wide client (None resets to lazy creation)."""
    global _client
    with _client_lock:
        _client = client


def _call(fn: Callable[[RandomOrgClient], List[Any]]) -> Dict[str, Any]:
    """Run *fn* against the client and attach the latest quota counters.

    Library errors are re-raised as ValueError/RuntimeError so MCP reports
    them as tool errors with a readable message.
    """
    try:
        client = get_client()
        values = fn(client)
    except ValidationError:
        raise
    except APIError as e:
        raise RuntimeError(f"{e}. {e.hint}") from e
    except RandomOrgError as e:
        raise RuntimeError(str(e)) from e

    usage = client.cached_usage()
    return {
        "values": values,
        "bitsLeft": usage.bits_left if usage else None,
        "requestsLeft": usage.requests_left if usage else None,
    }


# === Tool: true random integers ===
@mcp.tool(title="Generate True Random Integers")
def generate_integers(
    n: int, min_value: int, max_value: int, replacement: bool = True
) -> Dict[str, Any]:
    """
    Get n true random integers in [min_value, max_value] from Random.org.
      - n in [1, 10000]; min/max in [-1e9, 1e9]
      - replacement: allow repeated values (default True)
    Returns values plus bitsLeft/requestsLeft.
    """
    return _call(lambda c: c.generate_integers(n, min_value, max_value, replacement))


# === Tool: decimal fractions in [0, 1) ===
@mcp.tool(title="Generate True Random Decimal Fractions")
def generate_decimal_fractions(
    n: int, decimalPlaces: int, replacement: bool = True
) -> Dict[str, Any]:
    """
    Get n true random decimal fractions in [0, 1) with decimalPlaces digits (1..20).
    """
    return _call(lambda c: c.generate_decimal_fractions(n, decimalPlaces, replacement))


# === Tool: Gaussian distributed numbers ===
@mcp.tool(title="Generate True Random Gaussians")
def generate_gaussians(
    n: int, mean: float, standardDeviation: float, significantDigits: int
) -> Dict[str, Any]:
    """
    Get n true random numbers from a Gaussian distribution.
      - mean, standardDeviation in [-1e6, 1e6]
      - significantDigits in [2, 20]
    Gaussians are always drawn with replacement.
    """
    return _call(
        lambda c: c.generate_gaussians(n, mean, standardDeviation, significantDigits)
    )


# === Tool: random strings ===
@mcp.tool(title="Generate True Random Strings")
def generate_strings(
    n: int, length: int, characters: str, replacement: bool = True
) -> Dict[str, Any]:
    """
    Get n true random strings of the given length (1..20) drawn from characters (1..80 chars).
    """
    return _call(lambda c: c.generate_strings(n, length, characters, replacement))


# === Tool: UUID v4 (RFC 4122 section 4.4) ===
@mcp.tool(title="Generate True Random UUIDv4")
def generate_uuids(n: int) -> Dict[str, Any]:
    """Get n (1..1000) true random version 4 UUIDs."""
    return _call(lambda c: c.generate_uuids(n))


# === Tool: binary blobs ===
@mcp.tool(title="Generate True Random Blobs")
def generate_blobs(n: int, size: int, format: str = "base64") -> Dict[str, Any]:
    """
    Get n (1..100) true random blobs of size bits (1..1048576, multiple of 8),
    encoded as "base64" (default) or "hex".
    """
    return _call(lambda c: c.generate_blobs(n, size, format))


# === Tool: API key usage ===
@mcp.tool(title="Get Random.org Usage")
def get_usage() -> Dict[str, Any]:
    """
    Query the API key's usage (status, bits/requests left, totals).
    """
    try:
        usage = get_client().get_usage()
    except APIError as e:
        raise RuntimeError(f"{e}. {e.hint}") from e
    except RandomOrgError as e:
        raise RuntimeError(str(e)) from e
    return usage.to_dict()


@mcp.resource("randomorg://usage")
def usage_resource() -> str:
    """Usage as a read-only JSON resource."""
    return json.dumps(get_usage(), ensure_ascii=False, indent=2)


@mcp.tool(title="Health Check")
async def health(ctx: Context[ServerSession, None]) -> Dict[str, str]:
    """
    Liveness check; also logs to the MCP client's log panel.
    """
    await ctx.info("Random.org MCP Server is healthy")
    return {"status": "ok"}


def main():
    mcp.run()


if __name__ == "__main__":
    main()
