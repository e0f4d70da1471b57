"""Season strategy and playoff odds handlers (Sleeper leagues)."""

from loguru import logger

from halgrid.config.settings import get_settings
from halgrid.models import Platform
from halgrid.services.playoff_calculator import build_playoff_teams, calculate_playoff_probabilities
from halgrid.services.team_personalized import generate_start_sit_recommendations, generate_waiver_targets
from halgrid.services.team_strategy import (
    analyze_team_situation,
    enhance_start_sit_with_context,
    enhance_waiver_targets_with_context,
    generate_weekly_strategy,
)
from halgrid.utils.constants import REGULAR_SEASON_WEEKS

from .team_context import current_week, load_sleeper_league, resolve_team, sleeper_free_agents

# Injected from the server module
platform_manager = None
sleeper_client = None

MIN_SIMULATIONS = 100
MAX_SIMULATIONS = 100_000


def _regular_season_weeks(league) -> int:
    if league.playoff_week_start:
        return int(league.playoff_week_start) - 1
    return REGULAR_SEASON_WEEKS


async def handle_ff_get_team_strategy(arguments: dict) -> dict:
    """Situation, weekly strategy and context-adjusted recommendations.

    Args:
        arguments: Dict containing:
            - team_id: Unified Sleeper team id (required)
            - week: Week to plan for (optional, defaults to the current NFL week)
            - include_waivers: Also re-weight waiver targets (default: False)
    """
    team, error = resolve_team(platform_manager, arguments)
    if error:
        return error
    if team.platform is not Platform.SLEEPER:
        return {"status": "error", "message": "Team strategy needs league standings, available for Sleeper leagues"}

    week = await current_week(sleeper_client, arguments)
    context = await load_sleeper_league(sleeper_client, team.league_id, week)
    if context is None:
        return {"status": "error", "message": f"Sleeper league {team.league_id} not found"}

    my_roster = context.roster(team.roster_id)
    if my_roster is None:
        return {"status": "error", "message": f"Roster {team.roster_id} not found in league {team.league_id}"}

    situation = analyze_team_situation(my_roster, context.rosters, context.league, week)
    result = {
        "status": "success",
        "team_id": team.id,
        "week": week,
        "situation": situation.model_dump(mode="json"),
    }

    my_matchup, opponent_matchup = context.opponent_of(my_roster.roster_id)
    opponent = context.roster(opponent_matchup.roster_id) if opponent_matchup else None
    if opponent is None:
        result["message"] = f"No opponent scheduled for week {week}"
        return result

    strategy = generate_weekly_strategy(situation, my_roster, opponent, my_matchup, opponent_matchup)
    recommendations = enhance_start_sit_with_context(
        generate_start_sit_recommendations(team.players), situation, strategy, team.players
    )
    result.update(
        opponent=context.names.get(opponent.roster_id),
        strategy=strategy.model_dump(mode="json"),
        start_sit=[r.model_dump(mode="json") for r in recommendations],
    )

    if arguments.get("include_waivers"):
        available = await sleeper_free_agents(sleeper_client, team)
        targets = generate_waiver_targets(team.players, available, league=context.league)
        result["waiver_targets"] = [
            t.model_dump(mode="json")
            for t in enhance_waiver_targets_with_context(targets, situation, context.league)
        ]

    logger.info(f"{team.id} week {week}: {strategy.lineup_strategy.value} strategy")
    return result


async def handle_ff_get_playoff_odds(arguments: dict) -> dict:
    """Monte Carlo playoff and championship odds for every team in a Sleeper league.

    Args:
        arguments: Dict containing:
            - league_id: Sleeper league id, or
            - team_id: Unified Sleeper team id (its league is used)
            - week: Current week (optional)
            - simulations: Number of simulated seasons (optional, 100 to 100000)
            - seed: Random seed for reproducible odds (optional)
    """
    league_id = arguments.get("league_id")
    if not league_id and arguments.get("team_id"):
        team, error = resolve_team(platform_manager, arguments)
        if error:
            return error
        if team.platform is not Platform.SLEEPER:
            return {"status": "error", "message": "Playoff odds are available for Sleeper leagues"}
        league_id = team.league_id
    if not league_id:
        return {"error": "league_id or team_id is required"}

    settings = get_settings()
    try:
        simulations = int(arguments.get("simulations") or settings.playoff_simulations)
        seed = arguments.get("seed", settings.simulation_seed)
        seed = int(seed) if seed is not None else None
    except (TypeError, ValueError):
        return {"error": "simulations and seed must be integers"}
    simulations = max(MIN_SIMULATIONS, min(simulations, MAX_SIMULATIONS))

    week = await current_week(sleeper_client, arguments)
    context = await load_sleeper_league(sleeper_client, league_id, week, weeks=range(1, REGULAR_SEASON_WEEKS + 1))
    if context is None:
        return {"status": "error", "message": f"Sleeper league {league_id} not found"}

    season_weeks = _regular_season_weeks(context.league)
    playoff_spots = int(context.league.settings.get("playoff_teams") or 6)
    teams = build_playoff_teams(context.rosters, context.matchups_by_week, week, context.names)
    result = calculate_playoff_probabilities(
        teams,
        playoff_spots=min(playoff_spots, len(teams)),
        regular_season_weeks=season_weeks,
        current_week=week,
        simulations=simulations,
        seed=seed,
    )
    return {
        "status": "success",
        "league_id": league_id,
        "week": week,
        **result.model_dump(mode="json"),
    }
