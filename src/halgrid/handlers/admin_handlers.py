"""Admin and system management handlers for MCP tools."""

from typing import Dict

from halgrid.api import refresh_yahoo_token
from halgrid.api.sleeper_client import sleeper_client
from halgrid.api.utils import rate_limiter, response_cache


async def handle_ff_refresh_token(arguments: Dict) -> Dict:
    """Refresh the Yahoo OAuth access token.

    Args:
        arguments: Empty dict (no arguments required)

    Returns:
        Status dict with refresh result
    """
    return await refresh_yahoo_token()


async def handle_ff_get_api_status(arguments: Dict) -> Dict:
    """Yahoo rate limiter plus Yahoo and Sleeper cache statistics."""
    return {
        "rate_limit": rate_limiter.get_status(),
        "cache": response_cache.get_stats(),
        "sleeper_cache": sleeper_client.cache.get_stats(),
    }


async def handle_ff_clear_cache(arguments: Dict) -> Dict:
    """Clear the platform response caches.

    Args:
        arguments: Optional 'pattern' to clear matching endpoints only

    Returns:
        Status dict with the number of entries removed
    """
    pattern = arguments.get("pattern")
    cleared = await response_cache.clear(pattern)
    cleared += await sleeper_client.cache.clear(pattern)
    suffix = f" for pattern: {pattern}" if pattern else " completely"
    return {
        "status": "success",
        "message": f"Cache cleared{suffix}",
        "cleared_entries": cleared,
    }
