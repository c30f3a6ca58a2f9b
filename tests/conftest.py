"""Pytest configuration and shared fixtures for upstream-backed tests."""

import json
from collections.abc import AsyncGenerator

from typing import Any

import httpx
import pytest
import pytest_asyncio

from beacon_rewards.helpers.http import create_http_client
from beacon_rewards.helpers.rate_limit import TokenBucketLimiter


BEACON_URL = "https://beacon.test"
RPC_URL = "https://rpc.test"

BLOCK_HASH = "0x" + "ab" * 32


def head_payload(slot: int | str) -> dict[str, Any]:
    """Body of GET /eth/v1/beacon/headers with one header."""
    return {
        "execution_optimistic": False,
        "data": [
            {
                "root": "0x" + "11" * 32,
                "canonical": True,
                "header": {
                    "message": {"slot": str(slot), "proposer_index": "1"},
                    "signature": "0x00",
                },
            }
        ],
    }


def block_detail_payload(block_hash: str = BLOCK_HASH) -> dict[str, Any]:
    """Body of GET /eth/v2/beacon/blocks/{slot}."""
    return {
        "version": "deneb",
        "data": {
            "message": {
                "slot": "5000000",
                "body": {
                    "eth1_data": {
                        "deposit_root": "0x" + "22" * 32,
                        "deposit_count": "1",
                        "block_hash": block_hash,
                    },
                },
            },
            "signature": "0x00",
        },
    }


def sync_committee_payload(indices: list[str]) -> dict[str, Any]:
    """Body of GET /eth/v1/beacon/states/{slot}/sync_committees."""
    return {"data": {"validators": indices, "validator_aggregates": [indices]}}


def validators_payload(pubkeys: list[str]) -> dict[str, Any]:
    """Body of GET /eth/v1/beacon/states/{slot}/validators."""
    return {
        "data": [
            {
                "index": str(i),
                "status": "active_ongoing",
                "validator": {"pubkey": pubkey, "effective_balance": "32000000000"},
            }
            for i, pubkey in enumerate(pubkeys)
        ]
    }


def tx_json(tx_hash: str, gas: int, gas_price: int) -> dict[str, Any]:
    """Transaction object as returned inside eth_getBlockByHash."""
    return {"hash": tx_hash, "gas": hex(gas), "gasPrice": hex(gas_price), "value": "0x0"}


def block_json(
    base_fee: int,
    gas_used: int,
    transactions: list[dict[str, Any]],
    block_hash: str = BLOCK_HASH,
) -> dict[str, Any]:
    """Result of eth_getBlockByHash with full transactions."""
    return {
        "hash": block_hash,
        "number": hex(18_000_000),
        "baseFeePerGas": hex(base_fee),
        "gasUsed": hex(gas_used),
        "transactions": transactions,
    }


def receipt_json(tx_hash: str, effective_gas_price: int, gas_used: int) -> dict[str, Any]:
    """Result of eth_getTransactionReceipt."""
    return {
        "transactionHash": tx_hash,
        "effectiveGasPrice": hex(effective_gas_price),
        "gasUsed": hex(gas_used),
        "status": "0x1",
    }


class FakeExecutionNode:
    """JSON-RPC responder for eth_getBlockByHash and eth_getTransactionReceipt.

    Register with ``httpx_mock.add_callback(node.handle, ...)``.
    """

    def __init__(self) -> None:
        self.blocks: dict[str, dict[str, Any]] = {}
        self.receipts: dict[str, dict[str, Any]] = {}
        self.failing_receipts: set[str] = set()
        self.calls: list[tuple[str, list[Any]]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method, params = body["method"], body["params"]
        self.calls.append((method, params))

        if method == "eth_getBlockByHash":
            result = self.blocks.get(params[0])
        elif method == "eth_getTransactionReceipt":
            if params[0] in self.failing_receipts:
                return httpx.Response(
                    200,
                    json={
                        "jsonrpc": "2.0",
                        "id": body["id"],
                        "error": {"code": -32000, "message": "receipt unavailable"},
                    },
                )
            result = self.receipts.get(params[0])
        else:
            return httpx.Response(
                200,
                json={
                    "jsonrpc": "2.0",
                    "id": body["id"],
                    "error": {"code": -32601, "message": "method not found"},
                },
            )

        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": body["id"], "result": result}
        )


@pytest.fixture
def execution_node() -> FakeExecutionNode:
    """Empty fake execution node."""
    return FakeExecutionNode()


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Rate-limited HTTP client with a budget high enough not to slow tests."""
    limiter = TokenBucketLimiter(rate=10_000.0)
    async with create_http_client(limiter=limiter) as client:
        yield client
