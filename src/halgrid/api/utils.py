"""
Rate limiting and response caching shared by the platform clients.
"""

import asyncio
import hashlib
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from aiocache import SimpleMemoryCache
from loguru import logger

from ..config.settings import get_settings


class RateLimiter:
    """Sliding-window rate limiter (Yahoo allows roughly 1000 requests per hour)."""

    def __init__(self, max_requests: int = 900, window_seconds: int = 3600):
        """
        Args:
            max_requests: Maximum requests allowed in the window
            window_seconds: Time window in seconds (3600 = 1 hour)
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.requests: deque = deque()
        self._lock = asyncio.Lock()

    def _prune(self, now: float) -> None:
        while self.requests and self.requests[0] <= now - self.window_seconds:
            self.requests.popleft()

    async def acquire(self):
        """Wait if necessary to respect rate limits."""
        async with self._lock:
            now = time.time()
            self._prune(now)

            if len(self.requests) >= self.max_requests:
                wait_time = (self.requests[0] + self.window_seconds) - now
                if wait_time > 0:
                    logger.warning(f"Rate limit reached. Waiting {wait_time:.1f} seconds...")
                    await asyncio.sleep(wait_time)
                    now = time.time()
                    self._prune(now)

            self.requests.append(now)

    def get_status(self) -> Dict[str, Any]:
        """Get current rate limiter status."""
        now = time.time()
        self._prune(now)

        reset_time = None
        reset_in_seconds = 0.0
        if self.requests:
            reset_time = self.requests[0] + self.window_seconds
            reset_in_seconds = max(0.0, reset_time - now)

        return {
            "requests_used": len(self.requests),
            "requests_remaining": self.max_requests - len(self.requests),
            "max_requests": self.max_requests,
            "reset_in_seconds": round(reset_in_seconds),
            "reset_time": datetime.fromtimestamp(reset_time).isoformat() if reset_time else None,
        }


@dataclass
class CacheRecord:
    endpoint: str
    timestamp: float
    ttl: int

    @property
    def age(self) -> float:
        return time.time() - self.timestamp

    @property
    def expired(self) -> bool:
        return self.age >= self.ttl


class ResponseCache:
    """TTL cache for platform API responses backed by aiocache."""

    def __init__(self, namespace: str = "halgrid", default_ttl: int = 300):
        self._cache = SimpleMemoryCache(namespace=namespace)
        self._records: Dict[str, CacheRecord] = {}
        self._lock = asyncio.Lock()
        self.default_ttl = default_ttl
        self.hits = 0
        self.misses = 0

        # TTLs by endpoint keyword, checked in order
        self.default_ttls: Dict[str, int] = {
            "trending": 1800,
            "players/nfl": 86400,  # full player pool changes daily at most
            "projections": 3600,
            "state": 3600,
            "leagues": 3600,
            "games": 3600,
            "users": 3600,
            "standings": 300,
            "roster": 300,
            "transactions": 300,
            "matchup": 60,  # live scoring
            "scoreboard": 60,
        }

    @staticmethod
    def _get_cache_key(endpoint: str) -> str:
        return hashlib.md5(endpoint.encode()).hexdigest()

    def get_ttl_for_endpoint(self, endpoint: str) -> int:
        """Determine TTL based on endpoint type."""
        for keyword, ttl in self.default_ttls.items():
            if keyword in endpoint:
                return ttl
        return self.default_ttl

    async def get(self, endpoint: str) -> Optional[Any]:
        """Get cached response if still valid."""
        key = self._get_cache_key(endpoint)
        value = await self._cache.get(key)
        if value is None:
            self.misses += 1
            async with self._lock:
                self._records.pop(key, None)
            return None
        self.hits += 1
        return value

    async def set(self, endpoint: str, data: Any, ttl: Optional[int] = None):
        """Store response in cache, forgetting records that have expired since."""
        key = self._get_cache_key(endpoint)
        ttl_value = ttl if ttl is not None else self.get_ttl_for_endpoint(endpoint)
        await self._cache.set(key, data, ttl=ttl_value)
        async with self._lock:
            for stale in [k for k, rec in self._records.items() if rec.expired]:
                del self._records[stale]
            self._records[key] = CacheRecord(endpoint=endpoint, timestamp=time.time(), ttl=ttl_value)

    async def clear(self, pattern: Optional[str] = None) -> int:
        """Clear entries whose endpoint contains ``pattern``, or everything."""
        async with self._lock:
            if pattern:
                keys = [k for k, rec in self._records.items() if pattern in rec.endpoint]
            else:
                keys = list(self._records)
            for key in keys:
                await self._cache.delete(key)
                del self._records[key]
            if not pattern:
                await self._cache.clear()
        logger.debug(f"Cleared {len(keys)} cache entries (pattern={pattern!r})")
        return len(keys)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        records = list(self._records.values())
        expired = sum(1 for rec in records if rec.expired)
        total_lookups = self.hits + self.misses
        oldest = max((rec.age for rec in records), default=0.0)
        return {
            "total_entries": len(records),
            "expired_entries": expired,
            "active_entries": len(records) - expired,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total_lookups, 3) if total_lookups else 0.0,
            "oldest_entry_age_seconds": round(oldest, 1),
            "sample_endpoints": [rec.endpoint for rec in records[:5]],
        }


# Global instances
_settings = get_settings()
rate_limiter = RateLimiter(_settings.yahoo_api_rate_limit, _settings.yahoo_api_rate_window_seconds)
response_cache = ResponseCache(default_ttl=_settings.cache_ttl_seconds)
