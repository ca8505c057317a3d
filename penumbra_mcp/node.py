"""
HTTP client for a Penumbra node's CometBFT RPC endpoint.

Used by the chain query tools when PENUMBRA_NODE_LIVE is set. Timeouts,
connection failures and 5xx answers are retried with exponential backoff;
4xx answers are returned to the caller as a NodeError straight away.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from penumbra_mcp.config import NodeSettings
from penumbra_mcp.errors import NodeError

logger = logging.getLogger(__name__)

RETRY_BACKOFF_SECONDS = 0.25


class NodeClient:
    """Async JSON client bound to one node URL."""

    def __init__(
        self,
        settings: NodeSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        backoff_seconds: float = RETRY_BACKOFF_SECONDS,
    ):
        self._settings = settings
        self._backoff = backoff_seconds
        self._client = httpx.AsyncClient(
            base_url=settings.url,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a path and decode the JSON body.

        Raises:
            NodeError: On a 4xx answer, an undecodable body, or once the
                retry budget is exhausted.
        """
        attempts = self._settings.retries + 1
        error = NodeError(f"no attempt made for {path}")

        for attempt in range(attempts):
            try:
                response = await self._client.get(path, params=params)
            except httpx.TimeoutException:
                error = NodeError(f"request timed out after {self._settings.timeout_ms}ms")
            except httpx.TransportError as e:
                error = NodeError(f"node unreachable at {self._settings.url}: {e}")
            else:
                if response.status_code < 500:
                    if response.is_error:
                        raise NodeError(
                            f"node returned HTTP {response.status_code} for {path}",
                            status_code=response.status_code,
                        )
                    try:
                        return response.json()
                    except ValueError as e:
                        raise NodeError(f"node returned invalid JSON for {path}") from e
                error = NodeError(
                    f"node returned HTTP {response.status_code} for {path}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._backoff * 2 ** attempt
                logger.warning(
                    f"Node request {path} failed ({error}); "
                    f"retry {attempt + 1}/{self._settings.retries} in {delay:.2f}s"
                )
                await asyncio.sleep(delay)

        raise error

    async def rpc(self, path: str, params: dict[str, Any] | None = None) -> dict:
        """Call a CometBFT RPC route and return its "result" member."""
        body = await self.get_json(path, params)
        if not isinstance(body, dict):
            raise NodeError(f"unexpected response shape from {path}")
        if body.get("error"):
            err = body["error"]
            detail = (err.get("data") or err.get("message")) if isinstance(err, dict) else err
            raise NodeError(f"node rejected {path}: {detail}")
        result = body.get("result")
        if not isinstance(result, dict):
            raise NodeError(f"response from {path} has no result")
        return result

    async def status(self) -> dict:
        return await self.rpc("/status")

    async def validators(self) -> dict:
        return await self.rpc("/validators")

    async def transaction(self, tx_hash: str) -> dict:
        if not tx_hash.lower().startswith("0x"):
            tx_hash = "0x" + tx_hash
        return await self.rpc("/tx", {"hash": tx_hash})
