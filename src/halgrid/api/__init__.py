"""Read-only platform clients (Sleeper, ESPN, Yahoo)."""

from .errors import (
    CredentialsError,
    PlatformAPIError,
    PlatformAuthError,
    UnsupportedPlatformError,
)
from .espn_client import EspnClient
from .sleeper_client import SleeperClient, nfl_state_from_date, sleeper_client
from .utils import RateLimiter, ResponseCache, rate_limiter, response_cache
from .yahoo_client import (
    get_access_token,
    refresh_yahoo_token,
    set_access_token,
    yahoo_api_call,
)

__all__ = [
    "CredentialsError",
    "EspnClient",
    "PlatformAPIError",
    "PlatformAuthError",
    "RateLimiter",
    "ResponseCache",
    "SleeperClient",
    "UnsupportedPlatformError",
    "get_access_token",
    "nfl_state_from_date",
    "rate_limiter",
    "refresh_yahoo_token",
    "response_cache",
    "set_access_token",
    "sleeper_client",
    "yahoo_api_call",
]
