"""Common configuration constants used across the application."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default upstream request timeout in seconds"""

CONNECTION_TIMEOUT = 3.0
"""Timeout for establishing connections"""

DEFAULT_RATE_LIMIT = 10.0
"""Default shared upstream budget in requests per second"""

RATE_LIMIT_BURST = 1
"""Token bucket capacity, no bursting beyond the steady rate"""

DISCONNECT_POLL_INTERVAL = 0.1
"""Seconds between inbound client disconnect checks"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 10
"""Maximum total number of connections"""

# Slot and Reward Constants
POS_TRANSITION_SLOT = 4_700_012
"""Last slot before the Paris merge on mainnet; earlier slots carry no reward"""

MEV_BASE_FEE_MULTIPLIER = 3
"""A transaction priced above this multiple of the base fee flags the block as MEV"""

GWEI = 10**9
"""Wei per Gwei"""

REWARD_DECIMALS = 9
"""Fraction digits in a rendered Gwei reward"""

# Server
ALL_INTERFACES = "0.0.0.0"
"""Bind host used when SERVER_ADDRESS has an empty host"""

DEFAULT_SERVER_ADDRESS = "0.0.0.0:8080"
"""Default host:port for the HTTP API"""

DEFAULT_TRUSTED_PROXIES = "127.0.0.1"
"""Default comma-separated proxies trusted for forwarded headers"""


__all__ = [
    "ALL_INTERFACES",
    "CONNECTION_TIMEOUT",
    "DEFAULT_RATE_LIMIT",
    "DEFAULT_SERVER_ADDRESS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_TRUSTED_PROXIES",
    "DISCONNECT_POLL_INTERVAL",
    "GWEI",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "MEV_BASE_FEE_MULTIPLIER",
    "POS_TRANSITION_SLOT",
    "RATE_LIMIT_BURST",
    "REWARD_DECIMALS",
]
