"""Tagged results returned by the service facade.

Callers receive exactly one of ``Success``, ``SlotUnavailable``,
``SlotTooFarInFuture`` or ``InternalError`` and are expected to ``match`` on
it exhaustively.
"""

from collections.abc import Awaitable
from dataclasses import dataclass

from beacon_rewards.helpers.errors import SlotTooFarInFutureError, SlotUnavailableError
from beacon_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class Success[T]:
    """Operation completed."""

    value: T


@dataclass(frozen=True)
class SlotUnavailable:
    """Slot predates the validity boundary or does not exist upstream."""

    message: str


@dataclass(frozen=True)
class SlotTooFarInFuture:
    """Slot is beyond the chain's current head."""

    message: str


@dataclass(frozen=True)
class InternalError:
    """Any other failure: bad slot text, upstream or decoding errors."""

    message: str


type Outcome[T] = Success[T] | SlotUnavailable | SlotTooFarInFuture | InternalError


async def capture[T](operation: str, awaitable: Awaitable[T]) -> Outcome[T]:
    """Await an engine call and convert its result or error into an Outcome.

    Cancellation is not converted and propagates to the caller.

    Args:
        operation: Operation name for logging
        awaitable: Engine call to await

    Returns:
        Tagged outcome
    """
    try:
        return Success(await awaitable)
    except SlotUnavailableError as e:
        return SlotUnavailable(e.message)
    except SlotTooFarInFutureError as e:
        return SlotTooFarInFuture(e.message)
    except Exception as e:
        logger.exception("%s failed", operation)
        return InternalError(str(e))


__all__ = [
    "InternalError",
    "Outcome",
    "SlotTooFarInFuture",
    "SlotUnavailable",
    "Success",
    "capture",
]
