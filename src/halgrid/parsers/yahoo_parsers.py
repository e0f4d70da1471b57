"""Parsers for Yahoo Fantasy Sports API responses.

Yahoo wraps most resources as ``[ [ {key: value}, ... ], {sub_resource: ...} ]``
and collections as ``{"0": {...}, "1": {...}, "count": 2}``. The helpers
below flatten those shapes before the unified models are built.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from loguru import logger

from ..models import Platform, Player, Record, Team
from ..utils.bye_weeks import get_bye_week_with_fallback
from ..utils.constants import NON_STARTING_SLOTS


def _iter_collection(collection: Any) -> Iterator[Any]:
    """Yield the members of a Yahoo ``{"0": ..., "count": n}`` collection."""
    if isinstance(collection, list):
        yield from collection
        return
    if not isinstance(collection, dict):
        return
    for key, value in collection.items():
        if key == "count":
            continue
        yield value


def _flatten(node: Any) -> Dict[str, Any]:
    """Merge Yahoo's list-of-single-key-dicts idiom into one dict."""
    merged: Dict[str, Any] = {}
    if isinstance(node, dict):
        merged.update(node)
    elif isinstance(node, list):
        for item in node:
            merged.update(_flatten(item))
    return merged


def _selected_position(value: Any) -> Optional[str]:
    if isinstance(value, dict) and "position" in value:
        return value["position"]
    for entry in _iter_collection(value):
        if isinstance(entry, dict) and "position" in entry:
            return entry["position"]
    return None


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_yahoo_player(player_array: Any) -> Optional[Dict[str, Any]]:
    """Flatten one ``player`` node into a plain dict plus its selected slot."""
    info = _flatten(player_array)
    if "player_key" not in info:
        return None

    name = info.get("name", {})
    full_name = name.get("full") if isinstance(name, dict) else str(name or "")
    eligible = [
        e.get("position")
        for e in _iter_collection(info.get("eligible_positions", []))
        if isinstance(e, dict) and e.get("position")
    ]
    bye = info.get("bye_weeks", {})
    api_bye = _to_int(bye.get("week")) if isinstance(bye, dict) else None
    team = info.get("editorial_team_abbr")

    return {
        "player_id": info["player_key"],
        "name": full_name or info["player_key"],
        "position": info.get("display_position", "").split(",")[0],
        "fantasy_positions": eligible,
        "team": team.upper() if isinstance(team, str) else None,
        "injury_status": info.get("status"),
        "bye_week": get_bye_week_with_fallback(team, api_bye or None),
        "selected_position": _selected_position(info.get("selected_position")),
        "platform": "yahoo",
    }


def parse_team_roster(data: Dict) -> List[Player]:
    """Extract unified players from a ``team/{team_key}/roster`` response."""
    players, _ = parse_team_roster_with_slots(data)
    return players


def parse_team_roster_with_slots(data: Dict) -> Tuple[List[Player], List[str]]:
    """Players plus the ids of those in starting slots."""
    team_nodes = data.get("fantasy_content", {}).get("team", [])
    roster_node = _flatten(team_nodes).get("roster", {})

    players_node = None
    if isinstance(roster_node, dict):
        players_node = roster_node.get("0", {}).get("players") or roster_node.get("players")
    if not players_node:
        logger.debug("Yahoo roster response contained no players")
        return [], []

    players: List[Player] = []
    starters: List[str] = []
    for entry in _iter_collection(players_node):
        if not isinstance(entry, dict) or "player" not in entry:
            continue
        parsed = parse_yahoo_player(entry["player"])
        if parsed is None:
            continue
        slot = parsed.pop("selected_position")
        players.append(Player(**parsed))
        if slot and slot.upper() not in NON_STARTING_SLOTS:
            starters.append(parsed["player_id"])
    return players, starters


def parse_user_leagues(data: Dict) -> List[Dict[str, Any]]:
    """Leagues from ``users;use_login=1/games;game_codes=nfl/leagues``."""
    leagues: List[Dict[str, Any]] = []
    users = data.get("fantasy_content", {}).get("users", {})
    for user in _iter_collection(users):
        user_node = _flatten(user.get("user", [])) if isinstance(user, dict) else {}
        for game in _iter_collection(user_node.get("games", {})):
            game_node = _flatten(game.get("game", [])) if isinstance(game, dict) else {}
            for league in _iter_collection(game_node.get("leagues", {})):
                if not isinstance(league, dict):
                    continue
                info = _flatten(league.get("league", []))
                if "league_key" not in info:
                    continue
                leagues.append(
                    {
                        "league_key": info["league_key"],
                        "league_id": str(info.get("league_id", "")),
                        "name": info.get("name", ""),
                        "season": str(info.get("season", "")),
                        "num_teams": _to_int(info.get("num_teams")),
                        "current_week": _to_int(info.get("current_week")) or 1,
                        "scoring_type": info.get("scoring_type"),
                    }
                )
    return leagues


def parse_user_teams(data: Dict) -> List[Dict[str, Any]]:
    """The user's own teams from ``users;use_login=1/games;game_codes=nfl/teams``."""
    teams: List[Dict[str, Any]] = []
    users = data.get("fantasy_content", {}).get("users", {})
    for user in _iter_collection(users):
        user_node = _flatten(user.get("user", [])) if isinstance(user, dict) else {}
        for game in _iter_collection(user_node.get("games", {})):
            game_node = _flatten(game.get("game", [])) if isinstance(game, dict) else {}
            for team in _iter_collection(game_node.get("teams", {})):
                if not isinstance(team, dict):
                    continue
                info = _flatten(team.get("team", []))
                if "team_key" in info:
                    teams.append({"team_key": info["team_key"], "name": info.get("name", "")})
    return teams


def league_key_from_team_key(team_key: str) -> str:
    """``461.l.61410.t.1`` -> ``461.l.61410``."""
    return team_key.split(".t.")[0]


def _team_record(team_array: Any) -> Dict[str, Any]:
    info = _flatten(team_array)
    standings = info.get("team_standings") or {}
    totals = standings.get("outcome_totals") or {}
    points = info.get("team_points") or {}
    record = Record(
        wins=_to_int(totals.get("wins")),
        losses=_to_int(totals.get("losses")),
        ties=_to_int(totals.get("ties")),
        points_for=_to_float(standings.get("points_for") or points.get("total")),
        points_against=_to_float(standings.get("points_against")),
    )
    return {
        "team_key": info.get("team_key"),
        "name": info.get("name", ""),
        "rank": _to_int(standings.get("rank")),
        "record": record,
    }


def parse_standings(data: Dict) -> List[Dict[str, Any]]:
    """Teams with records from ``league/{key}/standings``."""
    league = _flatten(data.get("fantasy_content", {}).get("league", []))
    standings = league.get("standings", [])
    teams_node = _flatten(standings).get("teams", {})
    rows = []
    for team in _iter_collection(teams_node):
        if isinstance(team, dict) and "team" in team:
            rows.append(_team_record(team["team"]))
    return rows


def parse_scoreboard(data: Dict) -> List[Dict[str, Any]]:
    """Head-to-head pairs from ``league/{key}/scoreboard``."""
    league = _flatten(data.get("fantasy_content", {}).get("league", []))
    scoreboard = league.get("scoreboard", {})
    matchups_node = (scoreboard.get("0") or {}).get("matchups", {}) if isinstance(scoreboard, dict) else {}

    matchups = []
    for index, matchup in enumerate(_iter_collection(matchups_node), start=1):
        node = matchup.get("matchup", {}) if isinstance(matchup, dict) else {}
        teams_node = (node.get("0") or {}).get("teams", {})
        sides = []
        for team in _iter_collection(teams_node):
            if not isinstance(team, dict) or "team" not in team:
                continue
            info = _flatten(team["team"])
            sides.append(
                {
                    "team_key": info.get("team_key"),
                    "name": info.get("name", ""),
                    "points": _to_float(info.get("team_points", {}).get("total")),
                    "projected_points": _to_float(
                        info.get("team_projected_points", {}).get("total")
                    ),
                }
            )
        matchups.append({"matchup_id": index, "week": _to_int(node.get("week")), "teams": sides})
    return matchups


def build_team(
    team_key: str,
    team_name: str,
    roster_data: Dict,
    league_name: str = "",
    record: Optional[Record] = None,
) -> Team:
    """Assemble the unified ``yahoo_{league_key}`` team from a roster response."""
    league_key = league_key_from_team_key(team_key)
    players, starters = parse_team_roster_with_slots(roster_data)
    return Team(
        id=f"yahoo_{league_key}",
        platform=Platform.YAHOO,
        league_id=league_key,
        league_name=league_name,
        team_name=team_name,
        players=players,
        starters=starters,
        record=record or Record(),
    )
