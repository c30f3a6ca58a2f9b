"""HTTP client utilities and helpers."""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from beacon_rewards.helpers.constants import (
    CONNECTION_TIMEOUT,
    DEFAULT_TIMEOUT,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
)
from beacon_rewards.helpers.errors import (
    ResponseParseError,
    SlotTooFarInFutureError,
    SlotUnavailableError,
    UpstreamError,
)
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.helpers.rate_limit import RateLimitedTransport, TokenBucketLimiter


logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_HEADERS = {"Accept": "application/json"}


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT,
    *,
    limiter: TokenBucketLimiter | None = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    When a limiter is given, every request sent through the client first
    takes a token from it. Pass the same limiter (or share the client) to
    keep all upstream traffic under one budget.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        limiter: Optional shared token bucket
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from beacon_rewards.helpers.http import create_http_client
        from beacon_rewards.helpers.rate_limit import TokenBucketLimiter

        limiter = TokenBucketLimiter(rate=10.0)
        async with create_http_client(limiter=limiter) as client:
            response = await client.get("https://example.com")
        ```
    """
    limits = httpx.Limits(
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        max_connections=MAX_CONNECTIONS,
    )
    if limiter is not None:
        kwargs.setdefault("transport", RateLimitedTransport(limiter, limits=limits))
    else:
        kwargs.setdefault("limits", limits)

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=CONNECTION_TIMEOUT), **kwargs
    )


async def get_response(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: list[tuple[str, str]] | None = None,
    timeout: float | None = None,
) -> httpx.Response:
    """Send a GET request for JSON and map slot-related statuses.

    Args:
        client: HTTP client instance
        url: URL to fetch
        params: Query parameters, repeated keys allowed
        timeout: Optional timeout override

    Returns:
        Successful (2xx) response

    Raises:
        SlotTooFarInFutureError: On 404
        SlotUnavailableError: On 400
        UpstreamError: On transport failure or any other non-2xx status
    """
    logger.debug("Requesting GET data from: %s", url)
    request_timeout = timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT

    try:
        response = await client.get(
            url, params=params, headers=JSON_HEADERS, timeout=request_timeout
        )
    except httpx.HTTPError as e:
        logger.warning("HTTP error fetching %s: %s", url, e)
        msg = f"request to {url} failed: {e}"
        raise UpstreamError(msg) from e

    if response.status_code == httpx.codes.NOT_FOUND:
        msg = "requested slot is too far in the future"
        raise SlotTooFarInFutureError(msg)
    if response.status_code == httpx.codes.BAD_REQUEST:
        msg = "slot does not exist"
        raise SlotUnavailableError(msg)

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "HTTP error fetching %s: %s %s",
            url,
            response.status_code,
            response.text[:100] if response.text else "",
        )
        msg = f"{url} returned status {response.status_code}"
        raise UpstreamError(msg) from e

    return response


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    response_model: type[ModelT],
    *,
    params: list[tuple[str, str]] | None = None,
    timeout: float | None = None,
) -> ModelT:
    """Fetch JSON data from a URL and decode it into a response model.

    Args:
        client: HTTP client instance
        url: URL to fetch
        response_model: Pydantic model describing the response shape
        params: Query parameters, repeated keys allowed
        timeout: Optional timeout override

    Returns:
        Decoded response

    Raises:
        SlotTooFarInFutureError: On 404
        SlotUnavailableError: On 400
        UpstreamError: On transport failure or any other non-2xx status
        ResponseParseError: If the body is not valid JSON of the expected shape

    Example:
        ```python
        async with create_http_client() as client:
            header = await fetch_json(client, url, HeadersResponse)
        ```
    """
    response = await get_response(client, url, params=params, timeout=timeout)

    try:
        return response_model.model_validate_json(response.content)
    except ValidationError as e:
        logger.warning("Unexpected response from %s: %s", url, e)
        msg = f"cannot decode response from {url}"
        raise ResponseParseError(msg) from e


__all__ = [
    "create_http_client",
    "fetch_json",
    "get_response",
]
