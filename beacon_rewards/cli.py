"""Command-line interface: run the API server or query a single slot.

Usage:
    beacon-rewards serve
    beacon-rewards reward 5000000
    beacon-rewards duties 5000000
"""

import argparse
import sys

from typing import Any

import asyncio

import uvicorn
from rich.console import Console

from beacon_rewards.api import create_app
from beacon_rewards.helpers.config import Settings, load_settings
from beacon_rewards.outcomes import (
    InternalError,
    Outcome,
    SlotTooFarInFuture,
    SlotUnavailable,
    Success,
)
from beacon_rewards.service import SlotService


console = Console()


def serve(settings: Settings) -> None:
    """Run the HTTP API with uvicorn."""
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips=settings.trusted_proxies or None,
    )


def print_outcome(outcome: Outcome[Any]) -> int:
    """Print a query outcome and return the process exit code."""
    match outcome:
        case Success(value=value):
            if isinstance(value, list):
                for pubkey in value:
                    console.print(pubkey)
            else:
                console.print(f"reward: [bold]{value.reward}[/bold] Gwei")
                console.print(f"status: [bold]{value.status}[/bold]")
            return 0
        case SlotUnavailable(message=message):
            console.print(f"[yellow]Slot unavailable: {message}[/yellow]")
        case SlotTooFarInFuture(message=message):
            console.print(f"[yellow]Slot too far in the future: {message}[/yellow]")
        case InternalError(message=message):
            console.print(f"[red]Error: {message}[/red]")
    return 1


async def query(settings: Settings, command: str, slot: str) -> int:
    """Run one query against the configured upstreams."""
    service = SlotService.from_settings(settings)
    try:
        if command == "reward":
            outcome: Outcome[Any] = await service.get_block_reward_and_status(slot)
        else:
            outcome = await service.get_sync_duties(slot)
    finally:
        await service.aclose()
    return print_outcome(outcome)


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Beacon slot block rewards and sync committee duties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve GET /blockreward/{slot} and GET /syncduties/{slot}
  beacon-rewards serve

  # Reward and vanilla/mev status of one block
  beacon-rewards reward 5000000

  # Sync committee public keys at one slot
  beacon-rewards duties 5000000
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("serve", help="Run the HTTP API")
    for name, help_text in (
        ("reward", "Print the block reward for a slot"),
        ("duties", "Print sync committee public keys for a slot"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("slot", help="Beacon slot number")

    args = parser.parse_args()

    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    if args.command == "serve":
        serve(settings)
        return

    sys.exit(asyncio.run(query(settings, args.command, args.slot)))


if __name__ == "__main__":
    cli()
