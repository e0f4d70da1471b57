"""ESPN Fantasy Football API client (read-only, cookie authenticated)."""

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp
from loguru import logger

from .errors import PlatformAPIError, PlatformAuthError
from .utils import ResponseCache

ESPN_API_BASE = "https://fantasy.espn.com/apis/v3/games/ffl"


class EspnClient:
    """Fetches league, team and matchup views for ESPN leagues.

    Private leagues need the ``espn_s2`` and ``SWID`` cookies from a logged-in
    browser session; public leagues work without them.
    """

    def __init__(
        self,
        espn_s2: Optional[str] = None,
        swid: Optional[str] = None,
        season: Optional[int] = None,
        cache: Optional[ResponseCache] = None,
        timeout_seconds: int = 30,
    ):
        self.espn_s2 = espn_s2
        self.swid = swid
        self.season = season or date.today().year
        self.cache = cache or ResponseCache(namespace="espn")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.espn_s2 and self.swid:
            headers["Cookie"] = f"espn_s2={self.espn_s2}; SWID={self.swid}"
        return headers

    def _league_path(self, league_id: str, season: Optional[int] = None) -> str:
        return f"seasons/{season or self.season}/segments/0/leagues/{league_id}"

    async def _make_request(
        self, path: str, params: Sequence[Tuple[str, Any]] = (), use_cache: bool = True
    ) -> Dict:
        """GET ``path`` with repeated ``view`` params.

        Raises:
            PlatformAuthError: On 401/403 (bad or missing cookies)
            PlatformAPIError: On any other non-200 response
        """
        cache_key = path + "?" + "&".join(f"{k}={v}" for k, v in params)
        if use_cache:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return cached

        url = f"{ESPN_API_BASE}/{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=list(params), headers=self._headers()) as response:
                    if response.status == 200:
                        data = await response.json()
                        if use_cache:
                            await self.cache.set(cache_key, data)
                        return data
                    text = await response.text()
                    if response.status in (401, 403):
                        raise PlatformAuthError("espn", text[:200], status=response.status)
                    raise PlatformAPIError("espn", text[:200], status=response.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"ESPN request failed for {path}: {e}")
            raise PlatformAPIError("espn", str(e)) from e

    async def get_league(self, league_id: str, season: Optional[int] = None) -> Dict:
        """League settings (scoring, roster slots, schedule)."""
        return await self._make_request(
            self._league_path(league_id, season), [("view", "mSettings"), ("view", "mTeam")]
        )

    async def get_league_teams(self, league_id: str, season: Optional[int] = None) -> List[Dict]:
        data = await self._make_request(
            self._league_path(league_id, season), [("view", "mTeam"), ("view", "mRoster")]
        )
        return data.get("teams", [])

    async def get_matchups(
        self,
        league_id: str,
        week: Optional[int] = None,
        season: Optional[int] = None,
        use_cache: bool = True,
    ) -> List[Dict]:
        """Schedule entries, narrowed to ``week`` when given."""
        params: List[Tuple[str, Any]] = [("view", "mMatchup"), ("view", "mMatchupScore")]
        if week:
            params.append(("scoringPeriodId", week))
        data = await self._make_request(self._league_path(league_id, season), params, use_cache=use_cache)
        schedule = data.get("schedule", [])
        if week:
            schedule = [m for m in schedule if m.get("matchupPeriodId") == week]
        return schedule

    def find_user_team(self, teams: List[Dict]) -> Optional[Dict]:
        """The team owned by the SWID holder, if any."""
        if not self.swid:
            return None
        swid = self.swid.strip("{}").upper()
        for team in teams:
            owners = [str(o).strip("{}").upper() for o in team.get("owners", [])]
            if swid in owners:
                return team
        return None
