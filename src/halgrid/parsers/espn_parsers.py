"""Parsers turning ESPN league views into unified models."""

from typing import Any, Dict, List, Optional

from ..models import League, Matchup, Platform, Player, Record, Team
from ..utils.bye_weeks import get_bye_week_with_fallback
from ..utils.constants import (
    ESPN_POSITION_MAP,
    ESPN_PRO_TEAM_MAP,
    ESPN_SLOT_MAP,
    FREE_AGENT_TEAM,
    NON_STARTING_SLOTS,
)

# ESPN scoring stat ids mapped to Sleeper-style keys
ESPN_STAT_MAP: Dict[int, str] = {
    3: "pass_yd",
    4: "pass_td",
    20: "pass_int",
    24: "rush_yd",
    25: "rush_td",
    42: "rec_yd",
    43: "rec_td",
    53: "rec",
    72: "fum_lost",
    86: "xp",
}

ACTUAL_STAT_SOURCE = 0
PROJECTED_STAT_SOURCE = 1
WEEKLY_SPLIT = 1


def slot_name(slot_id: Optional[int]) -> str:
    return ESPN_SLOT_MAP.get(slot_id, "BENCH") if slot_id is not None else "BENCH"


def pro_team_abbr(pro_team_id: Optional[int]) -> str:
    return ESPN_PRO_TEAM_MAP.get(pro_team_id, FREE_AGENT_TEAM)


def parse_league(data: Dict[str, Any]) -> League:
    settings = data.get("settings") or {}
    scoring_items = (settings.get("scoringSettings") or {}).get("scoringItems") or []
    scoring = {
        ESPN_STAT_MAP[item["statId"]]: float(item.get("points", 0))
        for item in scoring_items
        if item.get("statId") in ESPN_STAT_MAP
    }

    slot_counts = (settings.get("rosterSettings") or {}).get("lineupSlotCounts") or {}
    roster_positions: List[str] = []
    for slot_id, count in slot_counts.items():
        name = ESPN_SLOT_MAP.get(int(slot_id))
        if name and count:
            roster_positions.extend(["BN" if name == "BENCH" else name] * int(count))

    schedule = settings.get("scheduleSettings") or {}
    return League(
        league_id=str(data.get("id", "")),
        name=settings.get("name", ""),
        platform=Platform.ESPN,
        season=str(data.get("seasonId") or "") or None,
        total_rosters=settings.get("size") or len(data.get("teams") or []),
        scoring_settings=scoring,
        roster_positions=roster_positions,
        settings={
            "playoff_team_count": schedule.get("playoffTeamCount"),
            "matchup_period_count": schedule.get("matchupPeriodCount"),
            "current_week": data.get("scoringPeriodId"),
        },
    )


def parse_player(entry: Dict[str, Any]) -> Player:
    """One ``roster.entries`` item to a Player."""
    player = (entry.get("playerPoolEntry") or {}).get("player") or {}
    player_id = str(entry.get("playerId") or player.get("id", ""))
    team = pro_team_abbr(player.get("proTeamId"))

    weekly: Dict[int, float] = {}
    projected: Optional[float] = None
    for stat in player.get("stats") or []:
        if stat.get("statSplitTypeId") != WEEKLY_SPLIT:
            continue
        period = stat.get("scoringPeriodId") or 0
        if stat.get("statSourceId") == ACTUAL_STAT_SOURCE and period:
            weekly[period] = float(stat.get("appliedTotal") or 0)
        elif stat.get("statSourceId") == PROJECTED_STAT_SOURCE:
            projected = float(stat.get("appliedTotal") or 0)

    return Player(
        player_id=player_id,
        name=player.get("fullName") or player_id,
        position=ESPN_POSITION_MAP.get(player.get("defaultPositionId"), ""),
        team=team,
        injury_status=player.get("injuryStatus"),
        bye_week=get_bye_week_with_fallback(team),
        weekly_points=[weekly[week] for week in sorted(weekly)],
        projected_points=projected,
        platform=Platform.ESPN.value,
    )


def team_name(team: Dict[str, Any]) -> str:
    if team.get("name"):
        return team["name"]
    return " ".join(p for p in (team.get("location"), team.get("nickname")) if p).strip()


def build_team(league: League, team: Dict[str, Any]) -> Team:
    """Assemble the unified ``espn_{league}_{team}`` team."""
    entries = (team.get("roster") or {}).get("entries") or []
    players = [parse_player(entry) for entry in entries]
    starters = [
        p.player_id
        for p, entry in zip(players, entries)
        if slot_name(entry.get("lineupSlotId")) not in NON_STARTING_SLOTS
    ]
    overall = (team.get("record") or {}).get("overall") or {}

    return Team(
        id=f"espn_{league.league_id}_{team.get('id')}",
        platform=Platform.ESPN,
        league_id=league.league_id,
        league_name=league.name,
        team_name=team_name(team) or team.get("abbrev", ""),
        owner=(team.get("owners") or [None])[0],
        roster_id=team.get("id"),
        players=players,
        starters=starters,
        record=Record(
            wins=overall.get("wins", 0),
            losses=overall.get("losses", 0),
            ties=overall.get("ties", 0),
            points_for=float(overall.get("pointsFor") or team.get("points") or 0),
            points_against=float(overall.get("pointsAgainst") or team.get("pointsAgainst") or 0),
        ),
    )


def parse_matchups(schedule: List[Dict[str, Any]]) -> List[Matchup]:
    """Split ESPN home/away schedule entries into per-team matchups."""
    matchups: List[Matchup] = []
    for index, game in enumerate(schedule, start=1):
        for side in ("home", "away"):
            node = game.get(side)
            if not node:
                continue
            matchups.append(
                Matchup(
                    roster_id=node.get("teamId", 0),
                    matchup_id=game.get("id", index),
                    week=game.get("matchupPeriodId"),
                    points=float(node.get("totalPoints") or 0),
                    projected_points=node.get("totalProjectedPoints"),
                )
            )
    return matchups
