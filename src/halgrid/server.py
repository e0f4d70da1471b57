"""FastMCP server entry point for HalGrid.

Every tool is a thin wrapper over a ``halgrid.handlers`` function; the
handlers share one ``PlatformManager`` and one Sleeper client, injected at
import time. Platforms with credentials in the environment are connected on
startup.
"""

import os
from typing import Any, Awaitable, Callable, Dict, List, Optional

from dotenv import load_dotenv
from fastmcp import Context, FastMCP
from loguru import logger

from halgrid import handlers
from halgrid.api.errors import CredentialsError
from halgrid.api.sleeper_client import sleeper_client
from halgrid.config.settings import Settings, get_settings
from halgrid.unification import PlatformManager, platform_manager

load_dotenv()

handlers.inject_all_dependencies(platform_manager=platform_manager, sleeper_client=sleeper_client)

server = FastMCP(
    name=get_settings().mcp_server_name,
    instructions=(
        "Fantasy football teams from Sleeper, ESPN and Yahoo in one place, with "
        "live scores and start/sit, waiver, trade and playoff insights. Connect "
        "a platform and import teams before asking for team insights."
    ),
)

_TOOL_PROMPTS: Dict[str, str] = {
    "ff_connect_platform": (
        "Connect a fantasy platform: a username for Sleeper, an OAuth access "
        "token for Yahoo, or espn_s2/swid cookies plus league ids for ESPN."
    ),
    "ff_disconnect_platform": "Forget a connected platform and the teams imported from it.",
    "ff_import_teams": (
        "Pull every team the user owns from the connected platforms. Run this "
        "after connecting and whenever rosters may have changed."
    ),
    "ff_get_teams": "List imported teams with their unified ids, records and leagues.",
    "ff_get_team": "Show the full unified roster of one imported team.",
    "ff_get_sync_status": "Check which platforms are connected and whether their last import succeeded.",
    "ff_import_csv": (
        "Import rosters from a CSV export with leagueId, teamId, displayName, "
        "position and team columns when a platform API is unavailable."
    ),
    "ff_get_start_sit": (
        "Answer who to start or sit this week, with confidence, reasoning and "
        "bench alternatives for each rostered player."
    ),
    "ff_get_roster_composition": (
        "Describe roster depth: position strengths, weak spots, bye-week holes "
        "and whether the roster is top heavy or deep."
    ),
    "ff_get_waiver_targets": (
        "Find free agents that fill this roster's gaps, with suggested FAAB "
        "bids and who they would replace."
    ),
    "ff_get_enhanced_insights": (
        "Give matchup-aware start/sit insights with matchup grades, game "
        "script, floor/ceiling and risk, optionally only must-starts or the "
        "week's key decisions."
    ),
    "ff_get_enhanced_waiver_targets": (
        "Rank skill-position free agents by how urgently this roster needs "
        "them, from critical needs to lottery tickets."
    ),
    "ff_get_player_analytics": (
        "Show hot/cold trends, performance ratings and buy/sell flags for "
        "every rostered player plus suggested lineup swaps."
    ),
    "ff_get_waiver_recommendations": (
        "Recommend waiver adds using league add/drop activity, roster needs "
        "and a drop candidate for each pickup."
    ),
    "ff_analyze_trade": (
        "Judge a proposed trade: value on both sides, positional impact, "
        "fairness and whether to accept, reject or counter."
    ),
    "ff_find_trade_targets": "Find gettable players at a position on other rosters in a Sleeper league.",
    "ff_get_optimal_lineup": "Build the highest-projected legal lineup for the league's roster slots.",
    "ff_get_league_scoring": "Explain a league's scoring type, key rules and whether it uses IDP.",
    "ff_calculate_player_score": "Score a stat line under a league's rules with a per-category breakdown.",
    "ff_compare_league_scoring": "Compare what the same stat line is worth in two leagues.",
    "ff_get_team_strategy": (
        "Assess the team's season situation and choose this week's lineup "
        "philosophy against the scheduled opponent."
    ),
    "ff_get_playoff_odds": (
        "Simulate the rest of the regular season for playoff, seed and "
        "championship odds for every team."
    ),
    "ff_get_live_scores": "Show live head-to-head scores and win probabilities for a league's week.",
    "ff_watch_live_scores": (
        "Poll a league's live scores a few times and report every player "
        "score change seen."
    ),
    "ff_get_dynasty_analysis": (
        "Value a roster for dynasty or keeper leagues: keepers, contending "
        "window, who to buy and who to sell."
    ),
    "ff_evaluate_dynasty_trade": "Judge a trade on long-term dynasty value rather than this season.",
    "ff_get_rookie_rankings": "Rank first-year players for rookie drafts by projected dynasty value.",
    "ff_refresh_token": (
        "Refresh the stored Yahoo OAuth access token when API responses start "
        "failing with authentication errors."
    ),
    "ff_get_api_status": (
        "Diagnose API availability by checking rate-limit usage and cache status."
    ),
    "ff_clear_cache": (
        "Clear cached platform responses to force fresh data. Optionally "
        "specify a pattern to target certain endpoints."
    ),
}


def _tool_meta(name: str) -> Dict[str, str]:
    """Helper to attach consistent prompt metadata to each tool."""

    return {"prompt": _TOOL_PROMPTS[name]}


async def _call_handler(
    name: str,
    handler: Callable[[dict], Awaitable[dict]],
    *,
    ctx: Context | None = None,
    **arguments: Any,
) -> Dict[str, Any]:
    """Run a handler with the non-None arguments."""

    filtered_args = {key: value for key, value in arguments.items() if value is not None}
    if ctx is not None:
        await ctx.info(f"Running {name}")
    return await handler(filtered_args)


# ---------------------------------------------------------------------------
# Platforms and teams
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_connect_platform",
    description=(
        "Connect sleeper (username), yahoo (access_token) or espn (espn_s2, "
        "swid, league_ids) so its teams can be imported."
    ),
    meta=_tool_meta("ff_connect_platform"),
)
async def ff_connect_platform(
    ctx: Context,
    platform: str,
    username: Optional[str] = None,
    access_token: Optional[str] = None,
    espn_s2: Optional[str] = None,
    swid: Optional[str] = None,
    league_ids: Optional[List[str]] = None,
    season: Optional[str] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_connect_platform",
        handlers.handle_ff_connect_platform,
        ctx=ctx,
        platform=platform,
        username=username,
        access_token=access_token,
        espn_s2=espn_s2,
        swid=swid,
        league_ids=league_ids,
        season=season,
    )


@server.tool(
    name="ff_disconnect_platform",
    description="Disconnect a platform and drop its imported teams.",
    meta=_tool_meta("ff_disconnect_platform"),
)
async def ff_disconnect_platform(ctx: Context, platform: str) -> Dict[str, Any]:
    return await _call_handler(
        "ff_disconnect_platform", handlers.handle_ff_disconnect_platform, ctx=ctx, platform=platform
    )


@server.tool(
    name="ff_import_teams",
    description="Import the user's teams from every connected platform, or only the one given.",
    meta=_tool_meta("ff_import_teams"),
)
async def ff_import_teams(ctx: Context, platform: Optional[str] = None) -> Dict[str, Any]:
    return await _call_handler("ff_import_teams", handlers.handle_ff_import_teams, ctx=ctx, platform=platform)


@server.tool(
    name="ff_get_teams",
    description="List imported teams, optionally for one platform.",
    meta=_tool_meta("ff_get_teams"),
)
async def ff_get_teams(ctx: Context, platform: Optional[str] = None) -> Dict[str, Any]:
    return await _call_handler("ff_get_teams", handlers.handle_ff_get_teams, ctx=ctx, platform=platform)


@server.tool(
    name="ff_get_team",
    description="Full unified roster for a team_id returned by ff_get_teams.",
    meta=_tool_meta("ff_get_team"),
)
async def ff_get_team(ctx: Context, team_id: str) -> Dict[str, Any]:
    return await _call_handler("ff_get_team", handlers.handle_ff_get_team, ctx=ctx, team_id=team_id)


@server.tool(
    name="ff_get_sync_status",
    description="Connected platforms and the outcome of their last import.",
    meta=_tool_meta("ff_get_sync_status"),
)
async def ff_get_sync_status(ctx: Context) -> Dict[str, Any]:
    return await _call_handler("ff_get_sync_status", handlers.handle_ff_get_sync_status, ctx=ctx)


@server.tool(
    name="ff_import_csv",
    description="Import rosters from CSV text (leagueId,teamId,displayName,position,team).",
    meta=_tool_meta("ff_import_csv"),
)
async def ff_import_csv(ctx: Context, csv_text: str, platform: str) -> Dict[str, Any]:
    return await _call_handler(
        "ff_import_csv", handlers.handle_ff_import_csv, ctx=ctx, csv_text=csv_text, platform=platform
    )


# ---------------------------------------------------------------------------
# Roster insights
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_get_start_sit",
    description="Start/sit recommendations for an imported team, optionally for one position.",
    meta=_tool_meta("ff_get_start_sit"),
)
async def ff_get_start_sit(ctx: Context, team_id: str, position: Optional[str] = None) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_start_sit", handlers.handle_ff_get_start_sit, ctx=ctx, team_id=team_id, position=position
    )


@server.tool(
    name="ff_get_roster_composition",
    description="Depth chart, position strengths and bye-week vulnerabilities for a team.",
    meta=_tool_meta("ff_get_roster_composition"),
)
async def ff_get_roster_composition(ctx: Context, team_id: str) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_roster_composition", handlers.handle_ff_get_roster_composition, ctx=ctx, team_id=team_id
    )


@server.tool(
    name="ff_get_waiver_targets",
    description=(
        "Waiver targets with FAAB bids. Sleeper teams use trending free agents; "
        "other platforms pass available_players."
    ),
    meta=_tool_meta("ff_get_waiver_targets"),
)
async def ff_get_waiver_targets(
    ctx: Context,
    team_id: str,
    available_players: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_waiver_targets",
        handlers.handle_ff_get_waiver_targets,
        ctx=ctx,
        team_id=team_id,
        available_players=available_players,
    )


@server.tool(
    name="ff_get_enhanced_insights",
    description=(
        "Matchup-aware insights. mode: all, must_start or key_decisions. "
        "matchups maps player_id to {opponent, defense_rank, spread, total, is_home}."
    ),
    meta=_tool_meta("ff_get_enhanced_insights"),
)
async def ff_get_enhanced_insights(
    ctx: Context,
    team_id: str,
    mode: Optional[str] = None,
    player_id: Optional[str] = None,
    matchups: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_enhanced_insights",
        handlers.handle_ff_get_enhanced_insights,
        ctx=ctx,
        team_id=team_id,
        mode=mode,
        player_id=player_id,
        matchups=matchups,
    )


@server.tool(
    name="ff_get_enhanced_waiver_targets",
    description="Skill-position free agents ranked from critical need to lottery ticket.",
    meta=_tool_meta("ff_get_enhanced_waiver_targets"),
)
async def ff_get_enhanced_waiver_targets(
    ctx: Context,
    team_id: str,
    available_players: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_enhanced_waiver_targets",
        handlers.handle_ff_get_enhanced_waiver_targets,
        ctx=ctx,
        team_id=team_id,
        available_players=available_players,
    )


@server.tool(
    name="ff_get_player_analytics",
    description="Trends, ratings and buy/sell flags per player plus lineup swaps.",
    meta=_tool_meta("ff_get_player_analytics"),
)
async def ff_get_player_analytics(ctx: Context, team_id: str) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_player_analytics", handlers.handle_ff_get_player_analytics, ctx=ctx, team_id=team_id
    )


@server.tool(
    name="ff_get_waiver_recommendations",
    description="League-aware waiver adds with add activity, position need and drop candidates.",
    meta=_tool_meta("ff_get_waiver_recommendations"),
)
async def ff_get_waiver_recommendations(
    ctx: Context,
    team_id: str,
    week: Optional[int] = None,
    available_players: Optional[List[Dict[str, Any]]] = None,
    transactions: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_waiver_recommendations",
        handlers.handle_ff_get_waiver_recommendations,
        ctx=ctx,
        team_id=team_id,
        week=week,
        available_players=available_players,
        transactions=transactions,
    )


@server.tool(
    name="ff_analyze_trade",
    description=(
        "Evaluate sending player ids for receiving players (as dicts with "
        "player_id, name, position, weekly_points, projected_points)."
    ),
    meta=_tool_meta("ff_analyze_trade"),
)
async def ff_analyze_trade(
    ctx: Context,
    team_id: str,
    sending: List[str],
    receiving: List[Dict[str, Any]],
    partner_team_id: Optional[str] = None,
    scoring_type: Optional[str] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_analyze_trade",
        handlers.handle_ff_analyze_trade,
        ctx=ctx,
        team_id=team_id,
        sending=sending,
        receiving=receiving,
        partner_team_id=partner_team_id,
        scoring_type=scoring_type,
    )


@server.tool(
    name="ff_find_trade_targets",
    description="Players at a position on other Sleeper rosters whose owners may deal them.",
    meta=_tool_meta("ff_find_trade_targets"),
)
async def ff_find_trade_targets(
    ctx: Context,
    team_id: str,
    position: str,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_find_trade_targets",
        handlers.handle_ff_find_trade_targets,
        ctx=ctx,
        team_id=team_id,
        position=position,
        limit=limit,
    )


@server.tool(
    name="ff_get_optimal_lineup",
    description="Highest-projected lineup for the league's roster slots (or roster_positions given).",
    meta=_tool_meta("ff_get_optimal_lineup"),
)
async def ff_get_optimal_lineup(
    ctx: Context,
    team_id: str,
    roster_positions: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_optimal_lineup",
        handlers.handle_ff_get_optimal_lineup,
        ctx=ctx,
        team_id=team_id,
        roster_positions=roster_positions,
    )


# ---------------------------------------------------------------------------
# League scoring
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_get_league_scoring",
    description="Scoring type and key rules for an imported team's league or a Sleeper league_id.",
    meta=_tool_meta("ff_get_league_scoring"),
)
async def ff_get_league_scoring(
    ctx: Context,
    team_id: Optional[str] = None,
    league_id: Optional[str] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_league_scoring",
        handlers.handle_ff_get_league_scoring,
        ctx=ctx,
        team_id=team_id,
        league_id=league_id,
    )


@server.tool(
    name="ff_calculate_player_score",
    description="Fantasy points for a stat line using scoring_settings or a league's rules.",
    meta=_tool_meta("ff_calculate_player_score"),
)
async def ff_calculate_player_score(
    ctx: Context,
    stats: Dict[str, float],
    position: str,
    scoring_settings: Optional[Dict[str, float]] = None,
    team_id: Optional[str] = None,
    league_id: Optional[str] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_calculate_player_score",
        handlers.handle_ff_calculate_player_score,
        ctx=ctx,
        stats=stats,
        position=position,
        scoring_settings=scoring_settings,
        team_id=team_id,
        league_id=league_id,
    )


@server.tool(
    name="ff_compare_league_scoring",
    description="Score one stat line in two leagues (team ids or Sleeper league ids).",
    meta=_tool_meta("ff_compare_league_scoring"),
)
async def ff_compare_league_scoring(
    ctx: Context,
    stats: Dict[str, float],
    position: str,
    team_id_a: Optional[str] = None,
    team_id_b: Optional[str] = None,
    league_id_a: Optional[str] = None,
    league_id_b: Optional[str] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_compare_league_scoring",
        handlers.handle_ff_compare_league_scoring,
        ctx=ctx,
        stats=stats,
        position=position,
        team_id_a=team_id_a,
        team_id_b=team_id_b,
        league_id_a=league_id_a,
        league_id_b=league_id_b,
    )


# ---------------------------------------------------------------------------
# Strategy and live scores
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_get_team_strategy",
    description="Season situation, weekly lineup strategy and adjusted start/sit for a Sleeper team.",
    meta=_tool_meta("ff_get_team_strategy"),
)
async def ff_get_team_strategy(
    ctx: Context,
    team_id: str,
    week: Optional[int] = None,
    include_waivers: Optional[bool] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_team_strategy",
        handlers.handle_ff_get_team_strategy,
        ctx=ctx,
        team_id=team_id,
        week=week,
        include_waivers=include_waivers,
    )


@server.tool(
    name="ff_get_playoff_odds",
    description="Monte Carlo playoff, seed and championship odds for a Sleeper league.",
    meta=_tool_meta("ff_get_playoff_odds"),
)
async def ff_get_playoff_odds(
    ctx: Context,
    league_id: Optional[str] = None,
    team_id: Optional[str] = None,
    week: Optional[int] = None,
    simulations: Optional[int] = None,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_playoff_odds",
        handlers.handle_ff_get_playoff_odds,
        ctx=ctx,
        league_id=league_id,
        team_id=team_id,
        week=week,
        simulations=simulations,
        seed=seed,
    )


@server.tool(
    name="ff_get_live_scores",
    description="Live head-to-head scores with win probabilities (Sleeper or ESPN).",
    meta=_tool_meta("ff_get_live_scores"),
)
async def ff_get_live_scores(
    ctx: Context,
    league_id: Optional[str] = None,
    team_id: Optional[str] = None,
    platform: Optional[str] = None,
    week: Optional[int] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_live_scores",
        handlers.handle_ff_get_live_scores,
        ctx=ctx,
        league_id=league_id,
        team_id=team_id,
        platform=platform,
        week=week,
    )


@server.tool(
    name="ff_watch_live_scores",
    description="Poll live scores several times and return player score changes.",
    meta=_tool_meta("ff_watch_live_scores"),
)
async def ff_watch_live_scores(
    ctx: Context,
    league_id: Optional[str] = None,
    team_id: Optional[str] = None,
    platform: Optional[str] = None,
    week: Optional[int] = None,
    polls: Optional[int] = None,
    interval_seconds: Optional[float] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_watch_live_scores",
        handlers.handle_ff_watch_live_scores,
        ctx=ctx,
        league_id=league_id,
        team_id=team_id,
        platform=platform,
        week=week,
        polls=polls,
        interval_seconds=interval_seconds,
    )


# ---------------------------------------------------------------------------
# Dynasty
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_get_dynasty_analysis",
    description="Dynasty player values, keeper picks and contending window for an imported team.",
    meta=_tool_meta("ff_get_dynasty_analysis"),
)
async def ff_get_dynasty_analysis(ctx: Context, team_id: str) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_dynasty_analysis",
        handlers.handle_ff_get_dynasty_analysis,
        ctx=ctx,
        team_id=team_id,
    )


@server.tool(
    name="ff_evaluate_dynasty_trade",
    description=(
        "Compare the dynasty value of player ids sent against receiving players "
        "(dicts with player_id, name, position, age)."
    ),
    meta=_tool_meta("ff_evaluate_dynasty_trade"),
)
async def ff_evaluate_dynasty_trade(
    ctx: Context,
    team_id: str,
    sending: List[str],
    receiving: List[Dict[str, Any]],
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_evaluate_dynasty_trade",
        handlers.handle_ff_evaluate_dynasty_trade,
        ctx=ctx,
        team_id=team_id,
        sending=sending,
        receiving=receiving,
    )


@server.tool(
    name="ff_get_rookie_rankings",
    description="First-year QB, RB, WR and TE from the Sleeper player pool, best projection first.",
    meta=_tool_meta("ff_get_rookie_rankings"),
)
async def ff_get_rookie_rankings(
    ctx: Context,
    position: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    return await _call_handler(
        "ff_get_rookie_rankings",
        handlers.handle_ff_get_rookie_rankings,
        ctx=ctx,
        position=position,
        limit=limit,
    )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@server.tool(
    name="ff_refresh_token",
    description=(
        "Refresh the Yahoo OAuth access token using the configured refresh "
        "token, consumer key and secret."
    ),
    meta=_tool_meta("ff_refresh_token"),
)
async def ff_refresh_token(ctx: Context) -> Dict[str, Any]:
    if ctx is not None:
        await ctx.info("Refreshing Yahoo OAuth token")
    return await handlers.handle_ff_refresh_token({})


@server.tool(
    name="ff_get_api_status",
    description=(
        "Inspect rate limiter and cache metrics for troubleshooting API "
        "throttling or stale data issues."
    ),
    meta=_tool_meta("ff_get_api_status"),
)
async def ff_get_api_status(ctx: Context) -> Dict[str, Any]:
    return await _call_handler("ff_get_api_status", handlers.handle_ff_get_api_status, ctx=ctx)


@server.tool(
    name="ff_clear_cache",
    description=(
        "Invalidate the platform response caches. Optionally provide a pattern "
        "to clear a subset of cached endpoints."
    ),
    meta=_tool_meta("ff_clear_cache"),
)
async def ff_clear_cache(ctx: Context, pattern: Optional[str] = None) -> Dict[str, Any]:
    return await _call_handler("ff_clear_cache", handlers.handle_ff_clear_cache, ctx=ctx, pattern=pattern)


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


def setup_logging(settings: Settings) -> None:
    """Configure logging for the server."""
    settings.ensure_log_directory()
    logger.add(
        settings.log_file,
        rotation="10 MB",
        retention="7 days",
        level=settings.log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
    )


def connect_from_environment(manager: PlatformManager, settings: Settings) -> List[str]:
    """Connect every platform whose credentials are configured; returns their names."""
    candidates = {
        "sleeper": {"username": settings.sleeper_username},
        "yahoo": {"access_token": settings.yahoo_access_token},
        "espn": {
            "espn_s2": settings.espn_s2,
            "swid": settings.espn_swid,
            "league_ids": settings.espn_league_id_list,
        },
    }
    connected = []
    for platform, credentials in candidates.items():
        if not any(credentials.values()):
            continue
        try:
            manager.connect_platform(platform, credentials)
        except CredentialsError as e:
            logger.warning(f"Skipping {platform} from environment: {e}")
            continue
        connected.append(platform)
    return connected


def run_http_server(host: Optional[str] = None, port: Optional[int] = None, *, show_banner: bool = True) -> None:
    """Start the FastMCP server using the HTTP transport."""

    resolved_host = host or os.getenv("HOST", "0.0.0.0")
    resolved_port = port or int(os.getenv("PORT", "8000"))

    server.run(
        "http",
        host=resolved_host,
        port=resolved_port,
        show_banner=show_banner,
    )


def main() -> None:
    """Console script entry point for launching the HTTP server."""

    settings = get_settings()
    setup_logging(settings)
    connected = connect_from_environment(platform_manager, settings)
    logger.info(
        f"HalGrid MCP server v{settings.mcp_server_version} starting"
        + (f" with {', '.join(connected)} connected" if connected else "")
    )
    run_http_server()


__all__ = [
    "server",
    "setup_logging",
    "connect_from_environment",
    "run_http_server",
    "main",
]
