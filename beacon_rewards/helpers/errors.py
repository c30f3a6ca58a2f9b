"""Exception hierarchy shared by the upstream clients and the slot engine."""


class BeaconRewardsError(Exception):
    """Base exception for all errors raised by this package."""


class SlotError(BeaconRewardsError):
    """Domain error about the requested slot.

    These are expected in normal operation and are reported to the caller
    with their message, unlike upstream or internal failures.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description returned to the caller
        """
        super().__init__(message)
        self.message = message


class SlotUnavailableError(SlotError):
    """Slot predates the validity boundary or does not exist upstream."""


class SlotTooFarInFutureError(SlotError):
    """Slot is beyond the chain's current head."""


class InvalidSlotError(BeaconRewardsError):
    """Slot text is not a base-10 integer."""


class UpstreamError(BeaconRewardsError):
    """Upstream request failed (connection, timeout or unexpected status)."""


class ResponseParseError(UpstreamError):
    """Upstream response body could not be decoded into the expected shape."""


class RPCError(UpstreamError, ValueError):
    """JSON-RPC response carried an error member."""


class BlockNotFoundError(RPCError):
    """Execution client returned no block for the requested hash."""


class ReceiptNotFoundError(RPCError):
    """Execution client returned no receipt for the requested transaction."""


__all__ = [
    "BeaconRewardsError",
    "BlockNotFoundError",
    "InvalidSlotError",
    "RPCError",
    "ReceiptNotFoundError",
    "ResponseParseError",
    "SlotError",
    "SlotTooFarInFutureError",
    "SlotUnavailableError",
    "UpstreamError",
]
