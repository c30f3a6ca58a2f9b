"""Tests for RPC models."""

import pytest

from pydantic import ValidationError

from beacon_rewards.helpers.rpc_models import (
    EthGetBlockByHashRequest,
    EthGetTransactionReceiptRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


def test_json_rpc_request() -> None:
    """Test JsonRpcRequest model."""
    request = JsonRpcRequest(method="test_method", params=[1, "two"], id=1)
    assert request.jsonrpc == "2.0"
    assert request.method == "test_method"
    assert request.params == [1, "two"]
    assert request.id == 1


def test_json_rpc_request_default_params() -> None:
    """Test JsonRpcRequest with default params."""
    request = JsonRpcRequest(method="test_method", id="abc")
    assert request.params == []


def test_json_rpc_request_validation() -> None:
    """Test JsonRpcRequest validation."""
    with pytest.raises(ValidationError):
        JsonRpcRequest(id=1)  # type: ignore[call-arg]


def test_eth_get_block_by_hash_request() -> None:
    """Test EthGetBlockByHashRequest model."""
    request = EthGetBlockByHashRequest(params=["0xabc", True], id=2)
    assert request.method == "eth_getBlockByHash"
    assert request.model_dump() == {
        "jsonrpc": "2.0",
        "method": "eth_getBlockByHash",
        "params": ["0xabc", True],
        "id": 2,
    }


def test_eth_get_transaction_receipt_request_frozen_method() -> None:
    """Test EthGetTransactionReceiptRequest method is frozen."""
    request = EthGetTransactionReceiptRequest(params=["0x01"], id=3)
    assert request.method == "eth_getTransactionReceipt"
    with pytest.raises(ValidationError):
        request.method = "eth_call"


def test_json_rpc_response_result() -> None:
    """Test decoding a successful response."""
    response = JsonRpcResponse.model_validate_json(
        '{"jsonrpc": "2.0", "id": 1, "result": {"hash": "0x01"}}'
    )
    assert response.result == {"hash": "0x01"}
    assert response.error is None


def test_json_rpc_response_null_result() -> None:
    """Test that a null result decodes to None without an error."""
    response = JsonRpcResponse.model_validate_json('{"jsonrpc": "2.0", "id": 1, "result": null}')
    assert response.result is None
    assert response.error is None


def test_json_rpc_response_error() -> None:
    """Test decoding an error response."""
    response = JsonRpcResponse.model_validate_json(
        '{"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "header not found"}}'
    )
    assert response.error is not None
    assert response.error.code == -32000
    assert response.error.message == "header not found"
    assert response.error.data is None
