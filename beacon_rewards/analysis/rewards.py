"""Execution-layer block reward and MEV classification for a beacon slot.

Processing flow:
1. Validate the slot (boundary and head checks)
2. Resolve the slot to an execution block hash through the beacon node
3. Fetch the block with full transactions from the execution client
4. Fetch every transaction receipt concurrently; a failed receipt falls back
   to the transaction's quoted values instead of failing the request
5. Sum fees paid, subtract fees burnt, flag MEV pricing
"""

from collections.abc import Iterable

import asyncio

import httpx

from beacon_rewards.analysis.models import (
    BlockStatus,
    FetchedReceipt,
    ReceiptFallback,
    ReceiptOutcome,
    RewardBreakdown,
    RewardResult,
)
from beacon_rewards.analysis.slots import SlotValidator
from beacon_rewards.data.beacon.client import BeaconClient
from beacon_rewards.data.execution.models import Block, Transaction
from beacon_rewards.helpers.constants import MEV_BASE_FEE_MULTIPLIER
from beacon_rewards.helpers.errors import BeaconRewardsError
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.helpers.parsers import format_gwei
from beacon_rewards.helpers.rpc import RPCClient


logger = get_logger(__name__)


def aggregate_reward(
    base_fee: int,
    gas_used: int,
    outcomes: Iterable[ReceiptOutcome],
    mev_multiplier: int = MEV_BASE_FEE_MULTIPLIER,
) -> RewardBreakdown:
    """Fold per-transaction outcomes into the block's reward breakdown.

    The result does not depend on the order of the outcomes.

    Args:
        base_fee: Block base fee per gas in wei
        gas_used: Gas used by the block
        outcomes: One outcome per transaction
        mev_multiplier: A price strictly above this multiple of the base fee
            marks the block as MEV

    Returns:
        Reward breakdown in wei

    Example:
        >>> aggregate_reward(10, 2, []).reward_wei
        -20
    """
    threshold = mev_multiplier * base_fee
    total_costs = 0
    fallback_count = 0
    status = BlockStatus.VANILLA

    for outcome in outcomes:
        total_costs += outcome.cost
        if outcome.price > threshold:
            status = BlockStatus.MEV
        if isinstance(outcome, ReceiptFallback):
            fallback_count += 1

    return RewardBreakdown(
        total_burnt=base_fee * gas_used,
        total_costs=total_costs,
        status=status,
        fallback_count=fallback_count,
    )


class RewardAggregator:
    """Computes the execution reward of the block proposed at a slot."""

    def __init__(
        self,
        validator: SlotValidator,
        beacon: BeaconClient,
        rpc: RPCClient,
        mev_multiplier: int = MEV_BASE_FEE_MULTIPLIER,
    ) -> None:
        """Initialize the aggregator.

        Args:
            validator: Slot validator
            beacon: Beacon client for the slot to block hash lookup
            rpc: Execution JSON-RPC client
            mev_multiplier: Base fee multiple above which a price counts as MEV
        """
        self.validator = validator
        self.beacon = beacon
        self.rpc = rpc
        self.mev_multiplier = mev_multiplier

    async def fetch_receipt_outcome(
        self, client: httpx.AsyncClient, transaction: Transaction
    ) -> ReceiptOutcome:
        """Fetch a transaction receipt, falling back on any upstream failure."""
        try:
            receipt = await self.rpc.get_transaction_receipt(client, transaction.hash)
        except BeaconRewardsError as e:
            logger.warning(
                "Receipt for %s unavailable, using quoted values: %s",
                transaction.hash,
                e,
            )
            return ReceiptFallback(transaction=transaction, reason=str(e))
        return FetchedReceipt(transaction=transaction, receipt=receipt)

    async def fetch_block(self, client: httpx.AsyncClient, slot: int) -> Block:
        """Resolve a validated slot to its execution block."""
        block_hash = await self.beacon.fetch_block_hash(client, slot)
        return await self.rpc.get_block_by_hash(client, block_hash)

    async def breakdown_for_slot(
        self, client: httpx.AsyncClient, slot_text: str
    ) -> RewardBreakdown:
        """Compute the reward breakdown of the block at a slot.

        Args:
            client: HTTP client instance
            slot_text: Slot as received from the caller

        Returns:
            Reward breakdown in wei

        Raises:
            BeaconRewardsError: On validation or block lookup failure
        """
        slot = await self.validator.validate(client, slot_text)
        block = await self.fetch_block(client, slot)

        outcomes = await asyncio.gather(*[
            self.fetch_receipt_outcome(client, tx) for tx in block.transactions
        ])

        breakdown = aggregate_reward(
            block.base_fee_per_gas, block.gas_used, outcomes, self.mev_multiplier
        )
        logger.info(
            "Slot %s block %s: %d txs, %d receipt fallbacks, status %s",
            slot,
            block.hash,
            len(outcomes),
            breakdown.fallback_count,
            breakdown.status,
        )
        return breakdown

    async def reward_for_slot(
        self, client: httpx.AsyncClient, slot_text: str
    ) -> RewardResult:
        """Compute the rendered reward and status of the block at a slot.

        Args:
            client: HTTP client instance
            slot_text: Slot as received from the caller

        Returns:
            Reward in Gwei and MEV classification
        """
        breakdown = await self.breakdown_for_slot(client, slot_text)
        return RewardResult(
            reward=format_gwei(breakdown.reward_wei), status=breakdown.status
        )


__all__ = [
    "RewardAggregator",
    "aggregate_reward",
]
