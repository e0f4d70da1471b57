"""Roster insight handlers: start/sit, waivers, analytics, trades and lineups."""

from typing import Any, Dict, List

from loguru import logger

from halgrid.api.errors import PlatformAPIError
from halgrid.models import Platform, Player
from halgrid.services.analytics import get_lineup_recommendations, get_player_analytics
from halgrid.services.enhanced_insights import (
    MatchupContext,
    generate_enhanced_waiver_targets,
    generate_player_insights,
    get_key_decisions,
    get_must_start_insights,
)
from halgrid.services.lineup import optimize_lineup
from halgrid.services.scoring import get_scoring_type
from halgrid.services.team_personalized import (
    analyze_roster_composition,
    generate_start_sit_recommendations,
    generate_waiver_targets,
)
from halgrid.services.trade_analyzer import analyze_trade, find_trade_targets
from halgrid.services.waivers import get_waiver_recommendations

from .team_context import (
    argument_error,
    current_week,
    load_sleeper_league,
    parse_players,
    resolve_team,
    sleeper_free_agents,
    sleeper_league_teams,
)

# Injected from the server module
platform_manager = None
sleeper_client = None


def _dump(items) -> List[Dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


async def _available_players(arguments: dict, team) -> List[Player]:
    """Inline ``available_players`` if supplied, else Sleeper trending free agents."""
    if arguments.get("available_players"):
        return parse_players(arguments["available_players"])
    return await sleeper_free_agents(sleeper_client, team)


def _matchup_contexts(arguments: dict) -> Dict[str, MatchupContext]:
    raw = arguments.get("matchups") or {}
    if not isinstance(raw, dict):
        raise ValueError("expected an object keyed by player id")
    contexts = {}
    for pid, context in raw.items():
        if not isinstance(context, dict):
            raise ValueError(f"matchup for {pid} must be an object")
        contexts[str(pid)] = MatchupContext(**context)
    return contexts


def _scoring_type(arguments: dict, team_id: str) -> str:
    if arguments.get("scoring_type"):
        return arguments["scoring_type"]
    league = platform_manager.get_league(team_id)
    if league is None or not league.scoring_settings:
        return "PPR"
    return "Standard" if get_scoring_type(league.scoring_settings) == "Standard" else "PPR"


async def handle_ff_get_start_sit(arguments: dict) -> dict:
    """Start/sit labels for every rostered player.

    Args:
        arguments: Dict containing:
            - team_id: Unified team id (required)
            - position: Limit to one position (optional)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    recommendations = generate_start_sit_recommendations(team.players)
    position = arguments.get("position")
    if position:
        recommendations = [r for r in recommendations if r.position == position.upper()]

    return {
        "status": "success",
        "team_id": team.id,
        "recommendations": _dump(recommendations),
    }


async def handle_ff_get_roster_composition(arguments: dict) -> dict:
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error
    composition = analyze_roster_composition(team.players)
    return {"status": "success", "team_id": team.id, "composition": composition.model_dump(mode="json")}


async def handle_ff_get_waiver_targets(arguments: dict) -> dict:
    """Free agents that fill this roster's gaps, with FAAB bids.

    Args:
        arguments: Dict containing:
            - team_id: Unified team id (required)
            - available_players: Free agents as player dicts (optional;
              Sleeper teams default to trending adds)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    try:
        available = await _available_players(arguments, team)
    except ValueError as e:
        return {"error": f"Invalid available_players: {argument_error(e)}"}

    targets = generate_waiver_targets(team.players, available, league=platform_manager.get_league(team.id))
    return {
        "status": "success",
        "team_id": team.id,
        "candidates_considered": len(available),
        "targets": _dump(targets),
    }


async def handle_ff_get_enhanced_insights(arguments: dict) -> dict:
    """Matchup-aware insights.

    Args:
        arguments: Dict containing:
            - team_id: Unified team id (required)
            - mode: "all" (default), "must_start" or "key_decisions"
            - player_id: Single player (optional, overrides mode)
            - matchups: player_id -> {opponent, defense_rank, spread, total,
              is_home, poor_weather} (optional)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    try:
        contexts = _matchup_contexts(arguments)
    except ValueError as e:
        return {"error": f"Invalid matchups: {argument_error(e)}"}

    player_id = arguments.get("player_id")
    if player_id:
        player = next((p for p in team.players if p.player_id == str(player_id)), None)
        if player is None:
            return {"error": f"Player {player_id} is not on team {team.id}"}
        insight = generate_player_insights(player, team.players, contexts.get(player.player_id))
        return {"status": "success", "team_id": team.id, "insights": [insight.model_dump(mode="json")]}

    mode = arguments.get("mode", "all")
    if mode == "must_start":
        insights = get_must_start_insights(team.players, team.starters, contexts)
    elif mode == "key_decisions":
        insights = get_key_decisions(team.players, contexts)
    else:
        insights = [generate_player_insights(p, team.players, contexts.get(p.player_id)) for p in team.players]

    return {"status": "success", "team_id": team.id, "mode": mode, "insights": _dump(insights)}


async def handle_ff_get_enhanced_waiver_targets(arguments: dict) -> dict:
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error
    try:
        available = await _available_players(arguments, team)
    except ValueError as e:
        return {"error": f"Invalid available_players: {argument_error(e)}"}
    targets = generate_enhanced_waiver_targets(available, team.players)
    return {"status": "success", "team_id": team.id, "targets": _dump(targets)}


def _analytics_row(analytics) -> Dict[str, Any]:
    row = analytics.performance.model_dump(mode="json")
    row.update(
        name=analytics.player.name,
        position=analytics.player.position,
        is_hot=analytics.is_hot,
        is_cold=analytics.is_cold,
        is_boom_bust=analytics.is_boom_bust,
        should_start=analytics.should_start,
        should_sell=analytics.should_sell,
        should_buy=analytics.should_buy,
    )
    return row


async def handle_ff_get_player_analytics(arguments: dict) -> dict:
    """Trend, rating and flags per player, plus suggested lineup swaps."""
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    analytics = {p.player_id: get_player_analytics(p) for p in team.players}
    starters = [analytics[pid] for pid in team.starters if pid in analytics]
    bench = [analytics[p.player_id] for p in team.bench]
    swaps = get_lineup_recommendations(starters, bench)

    return {
        "status": "success",
        "team_id": team.id,
        "players": [_analytics_row(a) for a in analytics.values()],
        "lineup_swaps": _dump(swaps),
    }


async def handle_ff_get_waiver_recommendations(arguments: dict) -> dict:
    """League-aware waiver recommendations using recent transactions.

    Sleeper teams read the week's transactions from the league; other
    platforms may pass ``transactions`` inline.
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    try:
        available = await _available_players(arguments, team)
    except ValueError as e:
        return {"error": f"Invalid available_players: {argument_error(e)}"}

    transactions = arguments.get("transactions") or []
    if not transactions and team.platform is Platform.SLEEPER:
        week = await current_week(sleeper_client, arguments)
        transactions = await sleeper_client.get_transactions(team.league_id, week)

    recommendations = get_waiver_recommendations(
        available,
        team.players,
        team.starters,
        transactions,
        league=platform_manager.get_league(team.id),
    )
    return {"status": "success", "team_id": team.id, "recommendations": _dump(recommendations)}


async def handle_ff_analyze_trade(arguments: dict) -> dict:
    """Evaluate a proposed trade.

    Args:
        arguments: Dict containing:
            - team_id: Unified team id (required)
            - sending: Player ids leaving your roster (required)
            - receiving: Players coming back, as player dicts (required)
            - partner_team_id: Imported partner team, for counter offers (optional)
            - scoring_type: "PPR" or "Standard" (optional, from league otherwise)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error

    sending_ids = {str(pid) for pid in arguments.get("sending") or []}
    if not sending_ids or not arguments.get("receiving"):
        return {"error": "sending and receiving are required"}

    sending = [p for p in team.players if p.player_id in sending_ids]
    missing = sending_ids - {p.player_id for p in sending}
    if missing:
        return {"error": f"Players not on roster: {', '.join(sorted(missing))}"}

    try:
        receiving = parse_players(arguments["receiving"])
    except ValueError as e:
        return {"error": f"Invalid receiving players: {argument_error(e)}"}

    partner = None
    if arguments.get("partner_team_id"):
        partner = platform_manager.get_team(arguments["partner_team_id"])

    analysis = analyze_trade(team, sending, receiving, _scoring_type(arguments, team.id), partner_team=partner)
    return {"status": "success", "team_id": team.id, "analysis": analysis.model_dump(mode="json")}


async def handle_ff_find_trade_targets(arguments: dict) -> dict:
    """Gettable players at a position across a Sleeper league."""
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error
    position = arguments.get("position")
    if not position or not isinstance(position, str):
        return {"error": "position is required"}
    position = position.upper()
    try:
        limit = int(arguments.get("limit", 10))
    except (TypeError, ValueError):
        return {"error": "limit must be an integer"}
    if team.platform is not Platform.SLEEPER:
        return {"status": "error", "message": "League-wide rosters are only available for Sleeper leagues"}

    try:
        week = await current_week(sleeper_client, arguments)
        context = await load_sleeper_league(sleeper_client, team.league_id, week, weeks=range(1, week))
    except PlatformAPIError as e:
        return {"status": "error", "message": str(e)}
    if context is None:
        return {"status": "error", "message": f"Sleeper league {team.league_id} not found"}

    all_teams = await sleeper_league_teams(sleeper_client, context)
    targets = find_trade_targets(
        team,
        all_teams,
        position,
        _scoring_type(arguments, team.id),
        limit=limit,
    )
    logger.info(f"Found {len(targets)} {position} trade targets for {team.id}")
    return {"status": "success", "team_id": team.id, "position": position, "targets": _dump(targets)}


async def handle_ff_get_optimal_lineup(arguments: dict) -> dict:
    """Best projected lineup for the league's roster slots."""
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error
    league = platform_manager.get_league(team.id)
    slots = arguments.get("roster_positions") or (league.roster_positions if league else None)
    lineup = optimize_lineup(team.players, slots)
    current = set(team.starters)
    changes = [s.player_id for s in lineup.starters if s.player_id and s.player_id not in current]
    return {
        "status": "success",
        "team_id": team.id,
        "lineup": lineup.model_dump(mode="json"),
        "players_to_start": changes,
    }
