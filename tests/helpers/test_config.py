"""Tests for configuration and environment variable helpers."""

import os
from collections.abc import Generator

import pytest

from pydantic import ValidationError

from beacon_rewards.helpers.config import (
    Settings,
    get_beacon_url,
    get_eth_rpc_url,
    get_optional_env,
    get_required_env,
    get_required_url,
    load_settings,
)


ENV_KEYS = (
    "TEST_KEY",
    "TEST_URL",
    "ETH_RPC_URL",
    "BEACON_ENDPOINT",
    "RPC_RATE_LIMIT",
    "SERVER_ADDRESS",
    "TRUSTED_PROXIES",
    "POS_TRANSITION_SLOT",
    "MEV_BASE_FEE_MULTIPLIER",
    "HTTP_TIMEOUT",
)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Clean environment variables before and after test."""
    saved_env = {key: os.environ.get(key) for key in ENV_KEYS}

    for key in saved_env:
        if key in os.environ:
            del os.environ[key]

    yield

    for key, value in saved_env.items():
        if value is not None:
            os.environ[key] = value
        elif key in os.environ:
            del os.environ[key]


@pytest.mark.usefixtures("clean_env")
class TestGetRequiredEnv:
    """Tests for get_required_env function."""

    def test_returns_env_value_when_set(self) -> None:
        """Test that get_required_env returns value when set."""
        os.environ["TEST_KEY"] = "test_value"
        assert get_required_env("TEST_KEY") == "test_value"

    def test_raises_when_not_set(self) -> None:
        """Test that get_required_env raises ValueError when not set."""
        with pytest.raises(
            ValueError, match="TEST_KEY environment variable is not set"
        ):
            get_required_env("TEST_KEY")

    def test_raises_when_empty_string(self) -> None:
        """Test that get_required_env raises ValueError when empty."""
        os.environ["TEST_KEY"] = ""
        with pytest.raises(
            ValueError, match="TEST_KEY environment variable is not set"
        ):
            get_required_env("TEST_KEY")


@pytest.mark.usefixtures("clean_env")
class TestGetOptionalEnv:
    """Tests for get_optional_env function."""

    def test_returns_none_when_not_set(self) -> None:
        """Test that get_optional_env returns None when not set."""
        assert get_optional_env("TEST_KEY") is None

    def test_returns_env_value_over_default(self) -> None:
        """Test that get_optional_env prefers env value over default."""
        os.environ["TEST_KEY"] = "env_value"
        assert get_optional_env("TEST_KEY", "default") == "env_value"


@pytest.mark.usefixtures("clean_env")
class TestGetRequiredUrl:
    """Tests for get_required_url function."""

    def test_url_parameter_takes_precedence(self) -> None:
        """Test that URL parameter takes precedence over env var."""
        os.environ["TEST_URL"] = "https://from-env.com"
        url = "https://from-param.com"
        assert get_required_url("TEST_URL", url=url) == url

    def test_strips_trailing_slash(self) -> None:
        """Test that a trailing slash is removed."""
        os.environ["TEST_URL"] = "https://from-env.com/"
        assert get_required_url("TEST_URL") == "https://from-env.com"

    def test_custom_description_in_error(self) -> None:
        """Test that custom description appears in error message."""
        with pytest.raises(
            ValueError, match="Custom API URL must be provided or set in TEST_URL"
        ):
            get_required_url("TEST_URL", description="Custom API URL")


@pytest.mark.usefixtures("clean_env")
class TestEndpointUrls:
    """Tests for get_eth_rpc_url and get_beacon_url."""

    def test_rpc_url_from_env(self) -> None:
        """Test that get_eth_rpc_url returns env value."""
        os.environ["ETH_RPC_URL"] = "https://mainnet.example/v3/test"
        assert get_eth_rpc_url() == "https://mainnet.example/v3/test"

    def test_rpc_url_missing_message(self) -> None:
        """Test that error message mentions Ethereum RPC URL."""
        with pytest.raises(
            ValueError, match="Ethereum RPC URL must be provided or set in ETH_RPC_URL"
        ):
            get_eth_rpc_url()

    def test_beacon_url_from_env(self) -> None:
        """Test that BEACON_ENDPOINT is used when set."""
        os.environ["ETH_RPC_URL"] = "https://rpc.example"
        os.environ["BEACON_ENDPOINT"] = "https://beacon.example/"
        assert get_beacon_url() == "https://beacon.example"

    def test_beacon_url_falls_back_to_rpc_url(self) -> None:
        """Test that the beacon URL defaults to the execution RPC URL."""
        os.environ["ETH_RPC_URL"] = "https://node.example"
        assert get_beacon_url() == "https://node.example"


@pytest.mark.usefixtures("clean_env")
class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self) -> None:
        """Test settings with only the required variable set."""
        os.environ["ETH_RPC_URL"] = "https://node.example"

        settings = load_settings()

        assert settings.rpc_url == "https://node.example"
        assert settings.beacon_url == "https://node.example"
        assert settings.rate_limit == 10.0
        assert settings.timeout == 30.0
        assert settings.server_address == "0.0.0.0:8080"
        assert settings.trusted_proxies == ["127.0.0.1"]
        assert settings.pos_transition_slot == 4_700_012
        assert settings.mev_base_fee_multiplier == 3

    def test_overrides(self) -> None:
        """Test that every variable is read from the environment."""
        os.environ.update(
            {
                "ETH_RPC_URL": "https://rpc.example",
                "BEACON_ENDPOINT": "https://beacon.example",
                "RPC_RATE_LIMIT": "2.5",
                "HTTP_TIMEOUT": "5",
                "SERVER_ADDRESS": "127.0.0.1:9000",
                "TRUSTED_PROXIES": "10.0.0.1, 10.0.0.2,",
                "POS_TRANSITION_SLOT": "0",
                "MEV_BASE_FEE_MULTIPLIER": "4",
            }
        )

        settings = load_settings()

        assert settings.beacon_url == "https://beacon.example"
        assert settings.rate_limit == 2.5
        assert settings.timeout == 5.0
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.trusted_proxies == ["10.0.0.1", "10.0.0.2"]
        assert settings.pos_transition_slot == 0
        assert settings.mev_base_fee_multiplier == 4

    def test_empty_trusted_proxies(self) -> None:
        """Test that an empty TRUSTED_PROXIES trusts no proxy."""
        os.environ["ETH_RPC_URL"] = "https://node.example"
        os.environ["TRUSTED_PROXIES"] = ""

        assert load_settings().trusted_proxies == []

    def test_missing_rpc_url_raises(self) -> None:
        """Test that ETH_RPC_URL is required."""
        with pytest.raises(ValueError, match="ETH_RPC_URL"):
            load_settings()

    def test_non_numeric_rate_limit_raises(self) -> None:
        """Test that a non-numeric rate limit is rejected."""
        os.environ["ETH_RPC_URL"] = "https://node.example"
        os.environ["RPC_RATE_LIMIT"] = "fast"

        with pytest.raises(ValueError, match="RPC_RATE_LIMIT must be a number"):
            load_settings()

    def test_zero_rate_limit_raises(self) -> None:
        """Test that a non-positive rate limit is rejected."""
        os.environ["ETH_RPC_URL"] = "https://node.example"
        os.environ["RPC_RATE_LIMIT"] = "0"

        with pytest.raises(ValidationError):
            load_settings()

    def test_empty_host_binds_all_interfaces(self) -> None:
        """Test that ":8080" listens on every interface."""
        settings = Settings(rpc_url="a", beacon_url="b", server_address=":8080")

        assert settings.host == "0.0.0.0"
        assert settings.port == 8080

    @pytest.mark.parametrize("address", ["8080", "localhost:", "localhost:http"])
    def test_invalid_server_address_raises(self, address: str) -> None:
        """Test that SERVER_ADDRESS must be host:port."""
        with pytest.raises(ValidationError, match="host:port"):
            Settings(rpc_url="a", beacon_url="b", server_address=address)
