"""
Platform manager: one place to connect Sleeper, ESPN and Yahoo accounts and
pull every team the user owns into the unified ``Team`` model.

Each platform imports independently; a failure on one is recorded in its sync
status and never stops the others.
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel

from ..api import yahoo_client
from ..api.errors import CredentialsError, PlatformAPIError, UnsupportedPlatformError
from ..api.espn_client import EspnClient
from ..api.sleeper_client import SleeperClient, sleeper_client
from ..config.settings import get_settings
from ..models import League, Platform, Team
from ..parsers import espn_parsers, sleeper_parsers, yahoo_parsers
from ..parsers.csv_parser import parse_roster_csv

REQUIRED_CREDENTIALS: Dict[Platform, Tuple[str, ...]] = {
    Platform.SLEEPER: ("username",),
    Platform.YAHOO: ("access_token",),
    Platform.ESPN: ("espn_s2", "swid"),
}

CREDENTIAL_ERRORS: Dict[Platform, str] = {
    Platform.SLEEPER: "Username required for Sleeper",
    Platform.YAHOO: "Access token required for Yahoo",
    Platform.ESPN: "ESPN cookies required",
}


class SyncState(str, Enum):
    PENDING = "pending"
    SYNCING = "syncing"
    SYNCED = "synced"
    ERROR = "error"


class SyncStatus(BaseModel):
    platform: Platform
    state: SyncState = SyncState.PENDING
    team_count: int = 0
    last_sync: Optional[datetime] = None
    error: Optional[str] = None


def resolve_platform(platform: Union[str, Platform]) -> Platform:
    """Platform enum for a user-supplied name.

    Raises:
        UnsupportedPlatformError: For anything but sleeper, espn or yahoo
    """
    if isinstance(platform, Platform):
        return platform
    try:
        return Platform(str(platform).strip().lower())
    except ValueError:
        raise UnsupportedPlatformError(f"Platform {platform} not yet supported") from None


class PlatformManager:
    """Connected platforms, their imported teams and sync status."""

    def __init__(
        self,
        sleeper: Optional[SleeperClient] = None,
        espn_factory: Callable[..., EspnClient] = EspnClient,
        yahoo: Any = yahoo_client,
    ):
        self.sleeper = sleeper or sleeper_client
        self.espn_factory = espn_factory
        self.yahoo = yahoo

        self._credentials: Dict[Platform, Dict[str, Any]] = {}
        self._status: Dict[Platform, SyncStatus] = {}
        self._teams: Dict[str, Team] = {}
        self._leagues: Dict[str, League] = {}

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def connect_platform(self, platform: Union[str, Platform], credentials: Dict[str, Any]) -> SyncStatus:
        """Validate and store credentials; the platform starts out pending.

        Raises:
            UnsupportedPlatformError: Unknown platform name
            CredentialsError: A required credential is missing or empty
        """
        plat = resolve_platform(platform)
        missing = [key for key in REQUIRED_CREDENTIALS[plat] if not credentials.get(key)]
        if missing:
            raise CredentialsError(CREDENTIAL_ERRORS[plat])

        if plat is Platform.YAHOO:
            self.yahoo.set_access_token(credentials["access_token"])

        self._credentials[plat] = dict(credentials)
        self._status[plat] = SyncStatus(platform=plat)
        logger.info(f"Connected {plat.value}")
        return self._status[plat]

    def disconnect_platform(self, platform: Union[str, Platform]) -> bool:
        """Forget a platform's credentials and teams; False if it was not connected."""
        plat = resolve_platform(platform)
        if plat not in self._credentials:
            return False
        del self._credentials[plat]
        self._status.pop(plat, None)
        for team_id in [tid for tid, team in self._teams.items() if team.platform is plat]:
            del self._teams[team_id]
            self._leagues.pop(team_id, None)
        logger.info(f"Disconnected {plat.value}")
        return True

    def get_connected_platforms(self) -> List[Platform]:
        return list(self._credentials)

    def get_sync_status(self) -> Dict[str, SyncStatus]:
        return {plat.value: status for plat, status in self._status.items()}

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    @property
    def teams(self) -> List[Team]:
        return list(self._teams.values())

    def get_team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def get_league(self, team_id: str) -> Optional[League]:
        """League settings for an imported team, when the platform supplied them."""
        return self._leagues.get(team_id)

    def _store(self, teams: List[Tuple[Team, Optional[League]]]) -> List[Team]:
        for team, league in teams:
            self._teams[team.id] = team
            if league is not None:
                self._leagues[team.id] = league
        return [team for team, _ in teams]

    async def import_all_teams(self) -> List[Team]:
        """Import every connected platform concurrently."""
        platforms = list(self._credentials)
        results = await asyncio.gather(*(self._import_platform(p) for p in platforms))
        teams = [team for batch in results for team in batch]
        logger.info(f"Imported {len(teams)} teams from {len(platforms)} platforms")
        return teams

    async def import_platform(self, platform: Union[str, Platform]) -> List[Team]:
        """Import a single connected platform.

        Raises:
            CredentialsError: The platform has not been connected
        """
        plat = resolve_platform(platform)
        if plat not in self._credentials:
            raise CredentialsError(f"{plat.value} is not connected")
        return await self._import_platform(plat)

    async def _import_platform(self, plat: Platform) -> List[Team]:
        status = self._status.setdefault(plat, SyncStatus(platform=plat))
        status.state = SyncState.SYNCING
        importer = {
            Platform.SLEEPER: self._import_sleeper,
            Platform.YAHOO: self._import_yahoo,
            Platform.ESPN: self._import_espn,
        }[plat]

        try:
            imported = await importer(self._credentials[plat])
        except Exception as e:
            logger.error(f"Failed to import {plat.value} teams: {e}")
            status.state = SyncState.ERROR
            status.error = str(e)
            return []

        teams = self._store(imported)
        status.state = SyncState.SYNCED
        status.team_count = len(teams)
        status.last_sync = datetime.now()
        status.error = None
        return teams

    async def _import_sleeper(self, credentials: Dict[str, Any]) -> List[Tuple[Team, Optional[League]]]:
        username = credentials["username"]
        user = await self.sleeper.get_user(username)
        if not user or not user.get("user_id"):
            raise PlatformAPIError("sleeper", f"User {username} not found", status=404)
        user_id = user["user_id"]

        leagues = await self.sleeper.get_user_leagues(user_id, season=credentials.get("season"))
        if not leagues:
            return []

        players_db = await self.sleeper.get_all_players()
        state = await self.sleeper.get_nfl_state()
        completed_weeks = range(1, int(state.get("week") or 1))

        teams = []
        for raw_league in leagues:
            league = sleeper_parsers.parse_league(raw_league)
            rosters, users = await asyncio.gather(
                self.sleeper.get_league_rosters(league.league_id),
                self.sleeper.get_league_users(league.league_id),
            )
            mine = next((r for r in rosters if r.get("owner_id") == user_id), None)
            if mine is None:
                logger.debug(f"No roster for {username} in Sleeper league {league.league_id}")
                continue

            raw_weeks = await self.sleeper.get_season_matchups(league.league_id, completed_weeks)
            matchups_by_week = {
                week: sleeper_parsers.parse_matchups(data, week) for week, data in raw_weeks.items()
            }
            roster = sleeper_parsers.parse_roster(mine)
            teams.append(
                (sleeper_parsers.build_team(league, roster, users, players_db, matchups_by_week), league)
            )
        return teams

    async def _import_yahoo(self, credentials: Dict[str, Any]) -> List[Tuple[Team, Optional[League]]]:
        leagues = {
            info["league_key"]: info
            for info in yahoo_parsers.parse_user_leagues(await self.yahoo.get_user_leagues())
        }
        teams = []
        for info in yahoo_parsers.parse_user_teams(await self.yahoo.get_user_teams()):
            league_key = yahoo_parsers.league_key_from_team_key(info["team_key"])
            league_info = leagues.get(league_key, {})
            roster_data = await self.yahoo.get_team_roster(info["team_key"])
            team = yahoo_parsers.build_team(
                info["team_key"],
                info["name"],
                roster_data,
                league_name=league_info.get("name", ""),
            )
            league = None
            if league_info:
                league = League(
                    league_id=league_key,
                    name=league_info.get("name", ""),
                    platform=Platform.YAHOO,
                    season=league_info.get("season") or None,
                    total_rosters=league_info.get("num_teams") or 0,
                    settings={"current_week": league_info.get("current_week")},
                )
            teams.append((team, league))
        return teams

    def create_espn_client(self) -> EspnClient:
        """ESPN client carrying the connected cookies.

        Raises:
            CredentialsError: ESPN has not been connected
        """
        credentials = self._credentials.get(Platform.ESPN)
        if credentials is None:
            raise CredentialsError("espn is not connected")
        season = credentials.get("season")
        return self.espn_factory(
            espn_s2=credentials["espn_s2"],
            swid=credentials["swid"],
            season=int(season) if season else None,
            timeout_seconds=get_settings().http_timeout_seconds,
        )

    async def _import_espn(self, credentials: Dict[str, Any]) -> List[Tuple[Team, Optional[League]]]:
        league_ids = [str(lid) for lid in credentials.get("league_ids") or []]
        if not league_ids:
            logger.warning("ESPN connected without league_ids; nothing to import")
            return []

        client = self.create_espn_client()
        teams = []
        for league_id in league_ids:
            league = espn_parsers.parse_league(await client.get_league(league_id))
            if not league.league_id:
                league = league.model_copy(update={"league_id": league_id})
            mine = client.find_user_team(await client.get_league_teams(league_id))
            if mine is None:
                logger.warning(f"SWID owns no team in ESPN league {league_id}")
                continue
            teams.append((espn_parsers.build_team(league, mine), league))
        return teams

    # ------------------------------------------------------------------
    # CSV
    # ------------------------------------------------------------------

    def import_csv(self, csv_text: str, platform: Union[str, Platform]) -> List[Team]:
        """Teams from a roster CSV export, one per league/team pair.

        Raises:
            UnsupportedPlatformError: Unknown platform name
            ValueError: The CSV is missing required columns
        """
        plat = resolve_platform(platform)
        teams = []
        for roster in parse_roster_csv(csv_text, plat.value):
            teams.append(
                Team(
                    id=f"{plat.value}_{roster['league_id']}_{roster['team_id']}",
                    platform=plat,
                    league_id=roster["league_id"],
                    team_name=f"Team {roster['team_id']}",
                    players=roster["players"],
                )
            )
        return self._store([(team, None) for team in teams])


# Global instance
platform_manager = PlatformManager()
