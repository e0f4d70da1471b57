"""League scoring handlers."""

from typing import Optional, Tuple

from halgrid.models import League
from halgrid.parsers import sleeper_parsers
from halgrid.services.scoring import (
    calculate_player_score,
    compare_league_scoring,
    get_league_scoring_info,
)

# Injected from the server module
platform_manager = None
sleeper_client = None


async def _resolve_league(team_id: Optional[str], league_id: Optional[str]) -> Tuple[Optional[League], Optional[dict]]:
    """League settings for an imported team, or a Sleeper league by id."""
    if team_id:
        league = platform_manager.get_league(team_id)
        if league is None:
            return None, {"error": f"No league settings for team {team_id}; import teams first"}
        return league, None
    if league_id:
        raw = await sleeper_client.get_league(league_id)
        if not raw:
            return None, {"status": "error", "message": f"Sleeper league {league_id} not found"}
        return sleeper_parsers.parse_league(raw), None
    return None, {"error": "team_id or league_id is required"}


async def handle_ff_get_league_scoring(arguments: dict) -> dict:
    """Scoring type, key rules and IDP flag for a league."""
    league, error = await _resolve_league(arguments.get("team_id"), arguments.get("league_id"))
    if error:
        return error
    return {
        "status": "success",
        "league_id": league.league_id,
        "league_name": league.name,
        "scoring": get_league_scoring_info(league),
        "scoring_settings": league.scoring_settings,
    }


async def handle_ff_calculate_player_score(arguments: dict) -> dict:
    """Fantasy points for a stat line with a per-category breakdown.

    Args:
        arguments: Dict containing:
            - stats: Stat key -> value, Sleeper keys (required)
            - position: Player position (required)
            - scoring_settings: Stat key -> points (optional), or
            - team_id / league_id: Read scoring from that league
    """
    stats = arguments.get("stats")
    position = arguments.get("position")
    if not stats or not position:
        return {"error": "stats and position are required"}

    scoring_settings = arguments.get("scoring_settings")
    if not scoring_settings:
        league, error = await _resolve_league(arguments.get("team_id"), arguments.get("league_id"))
        if error:
            return error
        scoring_settings = league.scoring_settings

    score = calculate_player_score(stats, scoring_settings, position.upper())
    return {"status": "success", **score.model_dump(mode="json")}


async def handle_ff_compare_league_scoring(arguments: dict) -> dict:
    """Score one stat line under two leagues' rules."""
    stats = arguments.get("stats")
    position = arguments.get("position")
    if not stats or not position:
        return {"error": "stats and position are required"}

    league_a, error = await _resolve_league(arguments.get("team_id_a"), arguments.get("league_id_a"))
    if error:
        return error
    league_b, error = await _resolve_league(arguments.get("team_id_b"), arguments.get("league_id_b"))
    if error:
        return error

    return {"status": "success", **compare_league_scoring(stats, position.upper(), league_a, league_b)}
