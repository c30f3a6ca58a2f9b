"""Pydantic models for execution-layer blocks, transactions and receipts."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from beacon_rewards.helpers.parsers import parse_hex_int


def _quantity(value: Any) -> Any:
    # JSON-RPC quantities arrive as 0x-prefixed hex strings
    if isinstance(value, str):
        return parse_hex_int(value)
    return value


HexInt = Annotated[int, BeforeValidator(_quantity)]


class Transaction(BaseModel):
    """Transaction object from eth_getBlockByHash with full transactions."""

    hash: str = Field(..., description="Transaction hash")
    gas: HexInt = Field(..., description="Gas limit")
    gas_price: HexInt = Field(
        ..., description="Price per gas reported by the node", alias="gasPrice"
    )
    max_fee_per_gas: HexInt | None = Field(
        default=None,
        description="Fee cap of a dynamic-fee transaction",
        alias="maxFeePerGas",
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _fee_cap_as_price(cls, data: Any) -> Any:
        # Some clients omit gasPrice on dynamic-fee transactions
        if isinstance(data, dict) and data.get("gasPrice") is None:
            fee_cap = data.get("maxFeePerGas")
            if fee_cap is not None:
                return {**data, "gasPrice": fee_cap}
        return data

    @property
    def quoted_price(self) -> int:
        """Price per gas before execution: the fee cap, else the gas price.

        Mined dynamic-fee transactions carry their effective price in
        gasPrice, so maxFeePerGas is read first.
        """
        if self.max_fee_per_gas is not None:
            return self.max_fee_per_gas
        return self.gas_price

    @property
    def cost(self) -> int:
        """Pre-receipt cost estimate in wei."""
        return self.quoted_price * self.gas


class Block(BaseModel):
    """Execution block from eth_getBlockByHash."""

    hash: str
    number: HexInt
    base_fee_per_gas: HexInt = Field(
        ..., description="Base fee per gas in wei", alias="baseFeePerGas"
    )
    gas_used: HexInt = Field(..., alias="gasUsed")
    transactions: list[Transaction] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def total_burnt(self) -> int:
        """Fees burnt by the block in wei."""
        return self.base_fee_per_gas * self.gas_used


class Receipt(BaseModel):
    """Transaction receipt from eth_getTransactionReceipt."""

    transaction_hash: str = Field(..., alias="transactionHash")
    effective_gas_price: HexInt = Field(..., alias="effectiveGasPrice")
    gas_used: HexInt = Field(..., alias="gasUsed")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def cost(self) -> int:
        """Fees paid by the transaction in wei."""
        return self.effective_gas_price * self.gas_used


__all__ = [
    "Block",
    "HexInt",
    "Receipt",
    "Transaction",
]
