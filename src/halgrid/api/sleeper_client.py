"""
Sleeper API client for fantasy football data.
No authentication required - the read API is public.
"""

import asyncio
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

import aiohttp
from loguru import logger

from ..config.settings import get_settings
from .utils import ResponseCache

PLAYERS_CACHE_SECONDS = 86400


def nfl_state_from_date(today: Optional[date] = None) -> Dict[str, Any]:
    """Estimate the NFL week and season from the calendar alone.

    Used when Sleeper's state endpoint is unavailable. September onward is the
    regular season of the current year; January and February belong to the
    previous year's postseason; March through August is the offseason.
    """
    today = today or date.today()
    year = today.year
    if today.month >= 9:
        season_start = date(year, 9, 1)
        week = (today - season_start).days // 7 + 1
        return {
            "week": max(1, min(week, 18)),
            "season": str(year),
            "season_type": "regular",
        }
    return {"week": 18, "season": str(year - 1), "season_type": "post"}


class SleeperClient:
    """Client for Sleeper's free fantasy football API."""

    BASE_URL = "https://api.sleeper.app/v1"

    def __init__(self, cache: Optional[ResponseCache] = None, timeout_seconds: int = 30):
        self.cache = cache or ResponseCache(namespace="sleeper")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        self._players_cache: Optional[Dict[str, Dict]] = None
        self._players_cache_time: Optional[datetime] = None

    async def _make_request(self, endpoint: str, use_cache: bool = True) -> Optional[Any]:
        """GET ``endpoint``; returns None on any failure."""
        if use_cache:
            cached = await self.cache.get(endpoint)
            if cached is not None:
                return cached

        url = f"{self.BASE_URL}/{endpoint}"

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    if response.status == 200:
                        data = await response.json()
                        if use_cache and data is not None:
                            await self.cache.set(endpoint, data)
                        return data
                    logger.warning(f"Sleeper API error {response.status} for {endpoint}")
                    return None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching from Sleeper ({endpoint}): {e}")
            return None

    async def get_nfl_state(self) -> Dict[str, Any]:
        """Current NFL week/season, falling back to the calendar."""
        state = await self._make_request("state/nfl")
        if not state:
            fallback = nfl_state_from_date()
            logger.info(f"Using date-based NFL state fallback: {fallback}")
            return fallback
        return {
            "week": state.get("week") or 1,
            "season": state.get("season") or str(date.today().year),
            "season_type": state.get("season_type") or "regular",
        }

    async def get_user(self, username: str) -> Optional[Dict]:
        return await self._make_request(f"user/{username}")

    async def get_user_leagues(
        self, user_id: str, season: Optional[str] = None, sport: str = "nfl"
    ) -> List[Dict]:
        """Leagues for a user; tries the previous season if the current one has none."""
        year = season or (await self.get_nfl_state())["season"]

        leagues = await self._make_request(f"user/{user_id}/leagues/{sport}/{year}")
        if not leagues and season is None:
            fallback_year = str(int(year) - 1)
            logger.info(f"Leagues for {year} unavailable, trying {fallback_year}")
            leagues = await self._make_request(f"user/{user_id}/leagues/{sport}/{fallback_year}")

        logger.debug(f"Found {len(leagues or [])} Sleeper leagues for {user_id}")
        return leagues or []

    async def get_league(self, league_id: str) -> Optional[Dict]:
        return await self._make_request(f"league/{league_id}")

    async def get_league_rosters(self, league_id: str) -> List[Dict]:
        return await self._make_request(f"league/{league_id}/rosters") or []

    async def get_league_users(self, league_id: str) -> List[Dict]:
        return await self._make_request(f"league/{league_id}/users") or []

    async def get_matchups(self, league_id: str, week: int, use_cache: bool = True) -> List[Dict]:
        """Matchups for one week; an unplayed or missing week yields []."""
        return await self._make_request(f"league/{league_id}/matchups/{week}", use_cache=use_cache) or []

    async def get_season_matchups(
        self, league_id: str, weeks: Iterable[int]
    ) -> Dict[int, List[Dict]]:
        """Fetch several weeks concurrently, dropping weeks with no data."""
        weeks = list(weeks)
        results = await asyncio.gather(*(self.get_matchups(league_id, w) for w in weeks))
        return {week: data for week, data in zip(weeks, results) if data}

    async def get_transactions(self, league_id: str, week: int) -> List[Dict]:
        return await self._make_request(f"league/{league_id}/transactions/{week}") or []

    async def get_trending_players(
        self, trend_type: str = "add", lookback_hours: int = 24, limit: int = 25
    ) -> List[Dict]:
        endpoint = (
            f"players/nfl/trending/{trend_type}?lookback_hours={lookback_hours}&limit={limit}"
        )
        return await self._make_request(endpoint) or []

    async def get_all_players(self) -> Dict[str, Dict]:
        """
        Get NFL players keyed by player_id.

        Only active players or players on an NFL team are kept; the pool is
        held in memory for 24 hours.
        """
        if self._players_cache and self._players_cache_time:
            age = (datetime.now() - self._players_cache_time).total_seconds()
            if age < PLAYERS_CACHE_SECONDS:
                return self._players_cache

        players = await self._make_request("players/nfl")
        if not players:
            return self._players_cache or {}

        filtered = {
            pid: pdata
            for pid, pdata in players.items()
            if pdata.get("active") or pdata.get("team")
        }
        self._players_cache = filtered
        self._players_cache_time = datetime.now()
        logger.info(f"Cached {len(filtered)} Sleeper players")
        return filtered


# Global instance
sleeper_client = SleeperClient(timeout_seconds=get_settings().http_timeout_seconds)
