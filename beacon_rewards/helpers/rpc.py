"""Ethereum JSON-RPC client utilities."""

import itertools

from typing import Any

import httpx
from pydantic import ValidationError

from beacon_rewards.data.execution.models import Block, Receipt
from beacon_rewards.helpers.errors import (
    BlockNotFoundError,
    ReceiptNotFoundError,
    ResponseParseError,
    RPCError,
    UpstreamError,
)
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.helpers.rpc_models import (
    EthGetBlockByHashRequest,
    EthGetTransactionReceiptRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


logger = get_logger(__name__)


class RPCClient:
    """Ethereum JSON-RPC client for the execution layer."""

    def __init__(self, rpc_url: str, timeout: float | None = None) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Optional per-call timeout; the HTTP client default otherwise

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._ids = itertools.count(1)

    async def send(
        self,
        client: httpx.AsyncClient,
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send a prepared JSON-RPC request.

        Args:
            client: HTTP client instance
            request: JSON-RPC request model
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            UpstreamError: If the HTTP request fails or returns a non-2xx status
            ResponseParseError: If the body is not a JSON-RPC response
            RPCError: If the RPC response contains an error
        """
        request_timeout = timeout or self.timeout or httpx.USE_CLIENT_DEFAULT
        logger.debug("Calling %s on %s", request.method, self.rpc_url)

        try:
            response = await client.post(
                self.rpc_url, json=request.model_dump(), timeout=request_timeout
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            msg = f"{request.method} failed: {e}"
            raise UpstreamError(msg) from e

        try:
            result = JsonRpcResponse.model_validate_json(response.content)
        except ValidationError as e:
            msg = f"{request.method} returned an invalid JSON-RPC response"
            raise ResponseParseError(msg) from e

        if result.error is not None:
            msg = f"RPC error: {result.error.message} (code {result.error.code})"
            raise RPCError(msg)

        return result.result

    async def call(
        self,
        client: httpx.AsyncClient,
        method: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            client: HTTP client instance
            method: RPC method name (e.g., "eth_blockNumber")
            params: Method parameters list
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            UpstreamError: If the HTTP request fails
            RPCError: If the RPC response contains an error
        """
        request = JsonRpcRequest(method=method, params=params or [], id=next(self._ids))
        return await self.send(client, request, timeout=timeout)

    async def get_block_by_hash(
        self, client: httpx.AsyncClient, block_hash: str
    ) -> Block:
        """Get a block with full transaction objects.

        Args:
            client: HTTP client instance
            block_hash: 0x-prefixed block hash

        Returns:
            Decoded block

        Raises:
            BlockNotFoundError: If the node does not know the block
            ResponseParseError: If the block cannot be decoded
        """
        request = EthGetBlockByHashRequest(params=[block_hash, True], id=next(self._ids))
        result = await self.send(client, request)
        if result is None:
            msg = f"block {block_hash} not found"
            raise BlockNotFoundError(msg)

        try:
            return Block.model_validate(result)
        except ValidationError as e:
            msg = f"cannot decode block {block_hash}"
            raise ResponseParseError(msg) from e

    async def get_transaction_receipt(
        self, client: httpx.AsyncClient, tx_hash: str
    ) -> Receipt:
        """Get the receipt of a mined transaction.

        Args:
            client: HTTP client instance
            tx_hash: 0x-prefixed transaction hash

        Returns:
            Decoded receipt

        Raises:
            ReceiptNotFoundError: If the node has no receipt for the transaction
            ResponseParseError: If the receipt cannot be decoded
        """
        request = EthGetTransactionReceiptRequest(params=[tx_hash], id=next(self._ids))
        result = await self.send(client, request)
        if result is None:
            msg = f"receipt for {tx_hash} not found"
            raise ReceiptNotFoundError(msg)

        try:
            return Receipt.model_validate(result)
        except ValidationError as e:
            msg = f"cannot decode receipt for {tx_hash}"
            raise ResponseParseError(msg) from e


__all__ = ["RPCClient"]
