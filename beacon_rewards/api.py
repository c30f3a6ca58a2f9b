"""FastAPI application exposing block reward and sync duty queries."""

import json
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

from typing import Any, assert_never

import asyncio

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from beacon_rewards.helpers.config import Settings, load_settings
from beacon_rewards.helpers.constants import DISCONNECT_POLL_INTERVAL
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.outcomes import (
    InternalError,
    Outcome,
    SlotTooFarInFuture,
    SlotUnavailable,
    Success,
)
from beacon_rewards.service import SlotService


logger = get_logger(__name__)

CLIENT_CLOSED_REQUEST = 499


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with four-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, indent=4, ensure_ascii=False).encode("utf-8")


def outcome_response(outcome: Outcome[Any]) -> Response:
    """Map a service outcome to its HTTP response.

    Args:
        outcome: Tagged service result

    Returns:
        200 with the value, 404 for an unavailable slot, 400 for a slot past
        head, 500 with a generic message for anything else
    """
    match outcome:
        case Success(value=value):
            if hasattr(value, "model_dump"):
                value = value.model_dump(mode="json")
            return IndentedJSONResponse(value)
        case SlotUnavailable(message=message):
            return JSONResponse({"error": message}, status_code=404)
        case SlotTooFarInFuture(message=message):
            return JSONResponse({"error": message}, status_code=400)
        case InternalError():
            return JSONResponse({"error": "internal server error"}, status_code=500)
        case _:
            assert_never(outcome)


async def cancel_on_disconnect(
    request: Request, awaitable: Awaitable[Outcome[Any]]
) -> Response:
    """Run a service call, cancelling it if the client goes away.

    Args:
        request: Inbound request
        awaitable: Service call producing an outcome

    Returns:
        Response for the outcome, or 499 if the client disconnected first
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return outcome_response(task.result())
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling %s", request.url.path)
                task.cancel()
                return Response(status_code=CLIENT_CLOSED_REQUEST)
    finally:
        if not task.done():
            task.cancel()


def get_service(request: Request) -> SlotService:
    """Dependency returning the service built at startup."""
    return request.app.state.service


def create_app(
    settings: Settings | None = None, service: SlotService | None = None
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings used to build the service at startup; loaded from the
            environment when omitted
        service: Prebuilt service; when given, settings are not read and the
            caller owns its lifetime

    Returns:
        Configured application
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            app.state.service = service
            yield
            return

        app.state.service = SlotService.from_settings(settings or load_settings())
        try:
            yield
        finally:
            await app.state.service.aclose()

    app = FastAPI(title="Beacon Rewards", lifespan=_lifespan)
    if service is not None:
        app.state.service = service

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/blockreward/{slot}")
    async def block_reward(
        slot: str, request: Request, svc: SlotService = Depends(get_service)
    ) -> Response:
        """Execution reward in Gwei and vanilla/mev status of the block at a slot."""
        return await cancel_on_disconnect(
            request, svc.get_block_reward_and_status(slot)
        )

    @app.get("/syncduties/{slot}")
    async def sync_duties(
        slot: str, request: Request, svc: SlotService = Depends(get_service)
    ) -> Response:
        """Public keys of the sync committee members at a slot."""
        return await cancel_on_disconnect(request, svc.get_sync_duties(slot))

    return app


__all__ = [
    "create_app",
    "get_service",
    "outcome_response",
]
