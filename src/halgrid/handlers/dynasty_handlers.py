"""Dynasty and keeper handlers."""

from loguru import logger

from halgrid.parsers import sleeper_parsers
from halgrid.services.dynasty import analyze_dynasty_roster, evaluate_dynasty_trade, rank_rookies
from halgrid.utils.constants import SKILL_POSITIONS

from .team_context import argument_error, parse_players, resolve_team

# Injected from the server module
platform_manager = None
sleeper_client = None

DEFAULT_ROOKIE_LIMIT = 25


async def handle_ff_get_dynasty_analysis(arguments: dict) -> dict:
    """Long-term player values, keepers and contending window for a team."""
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    roster = analyze_dynasty_roster(team.id, team.players)
    return {"status": "success", **roster.model_dump(mode="json")}


async def handle_ff_evaluate_dynasty_trade(arguments: dict) -> dict:
    """Judge a trade on dynasty value.

    Args:
        arguments: Dict containing:
            - team_id: Unified team id (required)
            - sending: Player ids leaving your roster (required)
            - receiving: Players coming back, as player dicts with age (required)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    raw_sending = arguments.get("sending")
    if not raw_sending or not isinstance(raw_sending, list) or not arguments.get("receiving"):
        return {"error": "sending and receiving are required"}
    sending_ids = {str(pid) for pid in raw_sending}
    sending = [p for p in team.players if p.player_id in sending_ids]
    missing = sending_ids - {p.player_id for p in sending}
    if missing:
        return {"error": f"Players not on roster: {', '.join(sorted(missing))}"}

    try:
        receiving = parse_players(arguments["receiving"])
    except ValueError as e:
        return {"error": f"Invalid receiving players: {argument_error(e)}"}

    trade = evaluate_dynasty_trade(sending, receiving)
    window = analyze_dynasty_roster(team.id, team.players).contending_window
    return {
        "status": "success",
        "team_id": team.id,
        "contending_window": window,
        "trade": trade.model_dump(mode="json"),
    }


async def handle_ff_get_rookie_rankings(arguments: dict) -> dict:
    """First-year QB/RB/WR/TE from the Sleeper player pool.

    Args:
        arguments: Dict containing:
            - position: Only this position (optional)
            - limit: Maximum rookies returned (default 25)
    """
    position = arguments.get("position")
    positions = SKILL_POSITIONS
    if position:
        if not isinstance(position, str) or position.upper() not in SKILL_POSITIONS:
            return {"error": f"position must be one of {', '.join(SKILL_POSITIONS)}"}
        positions = [position.upper()]
    try:
        limit = max(1, int(arguments.get("limit", DEFAULT_ROOKIE_LIMIT)))
    except (TypeError, ValueError):
        return {"error": "limit must be an integer"}

    players_db = await sleeper_client.get_all_players()
    if not players_db:
        return {"status": "error", "message": "Sleeper player database is unavailable"}

    rookies = [
        sleeper_parsers.parse_player(pid, data)
        for pid, data in players_db.items()
        if data.get("years_exp") == 0 and data.get("position") in positions
    ]
    ranked = rank_rookies(rookies)
    logger.info(f"Ranked {len(ranked)} rookies at {', '.join(positions)}")
    return {
        "status": "success",
        "total": len(ranked),
        "rookies": [r.model_dump(mode="json") for r in ranked[:limit]],
    }
