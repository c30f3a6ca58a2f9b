"""Models for reward analysis results."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field

from beacon_rewards.data.execution.models import Receipt, Transaction


class BlockStatus(StrEnum):
    """Classification of a block's transaction pricing."""

    VANILLA = "vanilla"
    MEV = "mev"


class RewardResult(BaseModel):
    """Block reward as returned to API callers."""

    reward: str = Field(..., description="Reward in Gwei with nine fraction digits")
    status: BlockStatus


class RewardBreakdown(BaseModel):
    """Intermediate sums behind a reward, all amounts in wei."""

    total_burnt: int
    total_costs: int
    status: BlockStatus
    fallback_count: int = 0

    @property
    def reward_wei(self) -> int:
        """Transaction fees paid minus fees burnt; may be negative."""
        return self.total_costs - self.total_burnt


@dataclass(frozen=True)
class FetchedReceipt:
    """Receipt fetched for a transaction; its effective values apply."""

    transaction: Transaction
    receipt: Receipt

    @property
    def cost(self) -> int:
        return self.receipt.cost

    @property
    def price(self) -> int:
        return self.receipt.effective_gas_price


@dataclass(frozen=True)
class ReceiptFallback:
    """Receipt unavailable; the transaction's own quoted values apply."""

    transaction: Transaction
    reason: str

    @property
    def cost(self) -> int:
        return self.transaction.cost

    @property
    def price(self) -> int:
        return self.transaction.quoted_price


type ReceiptOutcome = FetchedReceipt | ReceiptFallback


__all__ = [
    "BlockStatus",
    "FetchedReceipt",
    "ReceiptFallback",
    "ReceiptOutcome",
    "RewardBreakdown",
    "RewardResult",
]
