"""Lookups shared by the insight, strategy and live-score handlers."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from halgrid.api.sleeper_client import SleeperClient
from halgrid.models import League, Matchup, Platform, Player, Roster, Team
from halgrid.parsers import sleeper_parsers

TRENDING_LIMIT = 50


@dataclass
class SleeperLeagueContext:
    league: League
    rosters: List[Roster]
    users: List[Dict[str, Any]]
    week: int
    matchups_by_week: Dict[int, List[Matchup]] = field(default_factory=dict)

    def roster(self, roster_id: Optional[int]) -> Optional[Roster]:
        return next((r for r in self.rosters if r.roster_id == roster_id), None)

    @property
    def names(self) -> Dict[int, str]:
        by_user = {u.get("user_id"): u for u in self.users}
        names = {}
        for roster in self.rosters:
            user = by_user.get(roster.owner_id) or {}
            names[roster.roster_id] = (
                (user.get("metadata") or {}).get("team_name")
                or user.get("display_name")
                or f"Team {roster.roster_id}"
            )
        return names

    def opponent_of(self, roster_id: int, week: Optional[int] = None) -> Tuple[Optional[Matchup], Optional[Matchup]]:
        """This roster's matchup entry and its opponent's for ``week``."""
        entries = self.matchups_by_week.get(week or self.week, [])
        mine = next((m for m in entries if m.roster_id == roster_id), None)
        if mine is None or mine.matchup_id is None:
            return mine, None
        other = next(
            (m for m in entries if m.matchup_id == mine.matchup_id and m.roster_id != roster_id),
            None,
        )
        return mine, other


def resolve_team(manager, arguments: Dict[str, Any]) -> Tuple[Optional[Team], Optional[Dict[str, Any]]]:
    """The imported team named by ``team_id``, or an error payload."""
    team_id = arguments.get("team_id")
    if not team_id:
        return None, {"error": "team_id is required"}
    team = manager.get_team(team_id)
    if team is None:
        return None, {"error": f"Team {team_id} not found; import teams first"}
    return team, None


def argument_error(error: ValueError) -> str:
    """First validation message, or the error text for hand-raised errors."""
    if isinstance(error, ValidationError):
        return error.errors()[0]["msg"]
    return str(error)


def parse_players(raw_players: Optional[Iterable[Dict[str, Any]]]) -> List[Player]:
    """Players supplied inline as dicts; entries without an id or name are skipped.

    Raises:
        ValueError: The list or one of its entries is not an object
    """
    if raw_players and not isinstance(raw_players, list):
        raise ValueError("expected a list of player objects")
    players = []
    for raw in raw_players or []:
        if not isinstance(raw, dict):
            raise ValueError(f"expected a player object, got {type(raw).__name__}")
        if not raw.get("player_id") or not raw.get("name"):
            logger.debug(f"Skipping inline player without id/name: {raw}")
            continue
        players.append(Player(**raw))
    return players


async def current_week(sleeper: SleeperClient, arguments: Dict[str, Any]) -> int:
    """Requested week, or the current NFL week when none (or garbage) is given."""
    week = arguments.get("week")
    if week:
        try:
            return int(week)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid week {week!r}")
    state = await sleeper.get_nfl_state()
    return int(state.get("week") or 1)


async def load_sleeper_league(
    sleeper: SleeperClient,
    league_id: str,
    week: int,
    weeks: Optional[Iterable[int]] = None,
) -> Optional[SleeperLeagueContext]:
    """League, rosters, users and matchups for ``weeks`` (default: ``week`` only)."""
    raw_league = await sleeper.get_league(league_id)
    if not raw_league:
        return None
    raw_rosters, users, raw_weeks = await asyncio.gather(
        sleeper.get_league_rosters(league_id),
        sleeper.get_league_users(league_id),
        sleeper.get_season_matchups(league_id, weeks if weeks is not None else [week]),
    )
    return SleeperLeagueContext(
        league=sleeper_parsers.parse_league(raw_league),
        rosters=[sleeper_parsers.parse_roster(r) for r in raw_rosters],
        users=users,
        week=week,
        matchups_by_week={w: sleeper_parsers.parse_matchups(data, w) for w, data in raw_weeks.items()},
    )


async def sleeper_league_teams(sleeper: SleeperClient, context: SleeperLeagueContext) -> List[Team]:
    """Every roster in a Sleeper league as a unified team."""
    players_db = await sleeper.get_all_players()
    return [
        sleeper_parsers.build_team(context.league, roster, context.users, players_db, context.matchups_by_week)
        for roster in context.rosters
    ]


async def sleeper_free_agents(sleeper: SleeperClient, team: Team, limit: int = TRENDING_LIMIT) -> List[Player]:
    """Trending adds that nobody in the team's league has rostered."""
    if team.platform is not Platform.SLEEPER:
        return []
    trending, rosters, players_db = await asyncio.gather(
        sleeper.get_trending_players("add", limit=limit),
        sleeper.get_league_rosters(team.league_id),
        sleeper.get_all_players(),
    )
    rostered = {str(pid) for roster in rosters for pid in roster.get("players") or []}
    free_agents = []
    for entry in trending:
        player_id = str(entry.get("player_id", ""))
        if not player_id or player_id in rostered or player_id not in players_db:
            continue
        free_agents.append(sleeper_parsers.parse_player(player_id, players_db[player_id]))
    logger.debug(f"{len(free_agents)} trending free agents for league {team.league_id}")
    return free_agents
