"""Parsers turning Sleeper JSON into unified models."""

from typing import Any, Dict, Iterable, List, Optional

from ..models import League, Matchup, Platform, Player, Record, Roster, Team
from ..utils.bye_weeks import get_bye_week_with_fallback


def _points(settings: Dict[str, Any], key: str) -> float:
    """Sleeper splits season points into integer and hundredths fields."""
    whole = settings.get(key) or 0
    decimal = settings.get(f"{key}_decimal") or 0
    return float(whole) + float(decimal) / 100


def parse_league(data: Dict[str, Any]) -> League:
    return League(
        league_id=str(data.get("league_id", "")),
        name=data.get("name") or "",
        platform=Platform.SLEEPER,
        season=str(data.get("season") or "") or None,
        total_rosters=data.get("total_rosters") or 0,
        scoring_settings={k: float(v) for k, v in (data.get("scoring_settings") or {}).items()},
        roster_positions=list(data.get("roster_positions") or []),
        settings=dict(data.get("settings") or {}),
        status=data.get("status"),
    )


def parse_roster(data: Dict[str, Any]) -> Roster:
    settings = data.get("settings") or {}
    return Roster(
        roster_id=data.get("roster_id", 0),
        owner_id=data.get("owner_id"),
        players=[str(p) for p in data.get("players") or []],
        starters=[str(p) for p in data.get("starters") or [] if p and p != "0"],
        record=Record(
            wins=settings.get("wins") or 0,
            losses=settings.get("losses") or 0,
            ties=settings.get("ties") or 0,
            points_for=_points(settings, "fpts"),
            points_against=_points(settings, "fpts_against"),
        ),
        waiver_budget_used=settings.get("waiver_budget_used") or 0,
    )


def parse_matchups(data: Iterable[Dict[str, Any]], week: Optional[int] = None) -> List[Matchup]:
    return [
        Matchup(
            roster_id=m.get("roster_id", 0),
            matchup_id=m.get("matchup_id"),
            week=week,
            points=float(m.get("points") or 0),
            players_points={str(k): float(v or 0) for k, v in (m.get("players_points") or {}).items()},
            starters=[str(p) for p in m.get("starters") or [] if p and p != "0"],
        )
        for m in data
    ]


def parse_player(
    player_id: str,
    data: Optional[Dict[str, Any]],
    weekly_points: Optional[List[float]] = None,
) -> Player:
    """Build a Player from a Sleeper player-database entry.

    Unknown ids (players since removed from the database) keep their id as the
    name so they remain visible on the roster.
    """
    data = data or {}
    name = data.get("full_name") or " ".join(
        part for part in (data.get("first_name"), data.get("last_name")) if part
    )
    position = data.get("position") or ""
    team = data.get("team")
    if position == "DEF" and not name:
        name = f"{player_id} Defense"
    return Player(
        player_id=str(player_id),
        name=name or str(player_id),
        position=position,
        fantasy_positions=data.get("fantasy_positions") or [],
        team=team,
        injury_status=data.get("injury_status"),
        age=data.get("age"),
        years_exp=data.get("years_exp"),
        depth_chart_order=data.get("depth_chart_order"),
        bye_week=get_bye_week_with_fallback(team),
        weekly_points=weekly_points or [],
        platform=Platform.SLEEPER.value,
    )


def weekly_points_by_player(
    matchups_by_week: Dict[int, List[Matchup]], roster_id: int
) -> Dict[str, List[float]]:
    """Per-player weekly points for one roster, in week order."""
    history: Dict[str, List[float]] = {}
    for week in sorted(matchups_by_week):
        for matchup in matchups_by_week[week]:
            if matchup.roster_id != roster_id:
                continue
            for player_id, points in matchup.players_points.items():
                history.setdefault(player_id, []).append(points)
    return history


def build_team(
    league: League,
    roster: Roster,
    users: List[Dict[str, Any]],
    players_db: Dict[str, Dict[str, Any]],
    matchups_by_week: Optional[Dict[int, List[Matchup]]] = None,
) -> Team:
    """Assemble the unified ``sleeper_{league}_{roster}`` team."""
    owner = next((u for u in users if u.get("user_id") == roster.owner_id), {})
    history = weekly_points_by_player(matchups_by_week or {}, roster.roster_id)
    team_name = (owner.get("metadata") or {}).get("team_name") or owner.get("display_name") or ""

    return Team(
        id=f"sleeper_{league.league_id}_{roster.roster_id}",
        platform=Platform.SLEEPER,
        league_id=league.league_id,
        league_name=league.name,
        team_name=team_name or f"Team {roster.roster_id}",
        owner=owner.get("display_name"),
        roster_id=roster.roster_id,
        players=[parse_player(pid, players_db.get(pid), history.get(pid)) for pid in roster.players],
        starters=roster.starters,
        record=roster.record,
        waiver_budget_used=roster.waiver_budget_used,
    )
