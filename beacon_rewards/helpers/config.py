"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from beacon_rewards.helpers.constants import (
    ALL_INTERFACES,
    DEFAULT_RATE_LIMIT,
    DEFAULT_SERVER_ADDRESS,
    DEFAULT_TIMEOUT,
    DEFAULT_TRUSTED_PROXIES,
    MEV_BASE_FEE_MULTIPLIER,
    POS_TRANSITION_SLOT,
)


# Load environment variables from .env file
load_dotenv()


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from beacon_rewards.helpers.config import get_required_env

        rpc_url = get_required_env("ETH_RPC_URL")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_required_url(
    key: str, url: str | None = None, description: str | None = None
) -> str:
    """Get a URL from a parameter or a required environment variable.

    Args:
        key: Environment variable name
        url: Optional URL to use directly
        description: Human-readable name used in the error message

    Returns:
        URL without a trailing slash

    Raises:
        ValueError: If neither the parameter nor the environment variable is set
    """
    value = url or os.getenv(key)
    if not value:
        msg = f"{description or key} must be provided or set in {key}"
        raise ValueError(msg)
    return value.rstrip("/")


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set
    """
    return get_required_url("ETH_RPC_URL", rpc_url, "Ethereum RPC URL")


def get_beacon_url(beacon_url: str | None = None) -> str:
    """Get beacon node REST URL, falling back to the execution RPC URL.

    Hosted providers commonly serve both APIs from one base URL, so
    BEACON_ENDPOINT is only needed when the two are split.

    Args:
        beacon_url: Optional beacon URL to use directly

    Returns:
        Beacon node base URL

    Raises:
        ValueError: If no beacon URL is given and ETH_RPC_URL is not set either
    """
    value = beacon_url or os.getenv("BEACON_ENDPOINT")
    if value:
        return value.rstrip("/")
    return get_eth_rpc_url()


class Settings(BaseModel):
    """Validated process settings."""

    rpc_url: str = Field(..., description="Execution JSON-RPC endpoint")
    beacon_url: str = Field(..., description="Beacon node REST base URL")
    rate_limit: float = Field(
        default=DEFAULT_RATE_LIMIT,
        gt=0,
        description="Shared upstream budget in requests per second",
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    server_address: str = Field(default=DEFAULT_SERVER_ADDRESS)
    trusted_proxies: list[str] = Field(default_factory=list)
    pos_transition_slot: int = Field(default=POS_TRANSITION_SLOT, ge=0)
    mev_base_fee_multiplier: int = Field(default=MEV_BASE_FEE_MULTIPLIER, ge=1)

    @field_validator("server_address")
    @classmethod
    def _check_server_address(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if not sep or not port.isdigit():
            msg = f"SERVER_ADDRESS must look like host:port, got {value!r}"
            raise ValueError(msg)
        return value

    @property
    def host(self) -> str:
        """Host part of the server address; ":8080" listens on every interface."""
        return self.server_address.rpartition(":")[0] or ALL_INTERFACES

    @property
    def port(self) -> int:
        """Port part of the server address."""
        return int(self.server_address.rpartition(":")[2])


def _env_number(key: str, default: float, cast: type[float] | type[int]) -> float:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        msg = f"{key} must be a number, got {raw!r}"
        raise ValueError(msg) from None


def load_settings() -> Settings:
    """Build settings from the environment (and the .env file).

    Returns:
        Validated settings

    Raises:
        ValueError: If a variable is missing or invalid

    Example:
        ```python
        from beacon_rewards.helpers.config import load_settings

        settings = load_settings()
        print(settings.rate_limit)
        ```
    """
    proxies = get_optional_env("TRUSTED_PROXIES", DEFAULT_TRUSTED_PROXIES) or ""
    return Settings(
        rpc_url=get_eth_rpc_url(),
        beacon_url=get_beacon_url(),
        rate_limit=_env_number("RPC_RATE_LIMIT", DEFAULT_RATE_LIMIT, float),
        timeout=_env_number("HTTP_TIMEOUT", DEFAULT_TIMEOUT, float),
        server_address=get_optional_env("SERVER_ADDRESS", DEFAULT_SERVER_ADDRESS)
        or DEFAULT_SERVER_ADDRESS,
        trusted_proxies=[p.strip() for p in proxies.split(",") if p.strip()],
        pos_transition_slot=_env_number(
            "POS_TRANSITION_SLOT", POS_TRANSITION_SLOT, int
        ),
        mev_base_fee_multiplier=_env_number(
            "MEV_BASE_FEE_MULTIPLIER", MEV_BASE_FEE_MULTIPLIER, int
        ),
    )


__all__ = [
    "Settings",
    "get_beacon_url",
    "get_eth_rpc_url",
    "get_optional_env",
    "get_required_env",
    "get_required_url",
    "load_settings",
]
