"""MCP tool handlers - orchestrates handler modules with dependency injection."""

# Admin handlers (no dependencies)
from .admin_handlers import (
    handle_ff_clear_cache,
    handle_ff_get_api_status,
    handle_ff_refresh_token,
)

# Platform handlers (need the platform manager)
from .platform_handlers import (
    handle_ff_connect_platform,
    handle_ff_disconnect_platform,
    handle_ff_get_sync_status,
    handle_ff_get_team,
    handle_ff_get_teams,
    handle_ff_import_csv,
    handle_ff_import_teams,
)

# Insight handlers (need the platform manager and Sleeper client)
from .insight_handlers import (
    handle_ff_analyze_trade,
    handle_ff_find_trade_targets,
    handle_ff_get_enhanced_insights,
    handle_ff_get_enhanced_waiver_targets,
    handle_ff_get_optimal_lineup,
    handle_ff_get_player_analytics,
    handle_ff_get_roster_composition,
    handle_ff_get_start_sit,
    handle_ff_get_waiver_recommendations,
    handle_ff_get_waiver_targets,
)

# League scoring handlers
from .league_handlers import (
    handle_ff_calculate_player_score,
    handle_ff_compare_league_scoring,
    handle_ff_get_league_scoring,
)

# Strategy handlers
from .strategy_handlers import handle_ff_get_playoff_odds, handle_ff_get_team_strategy

# Live score handlers
from .live_handlers import handle_ff_get_live_scores, handle_ff_watch_live_scores

# Dynasty handlers
from .dynasty_handlers import (
    handle_ff_evaluate_dynasty_trade,
    handle_ff_get_dynasty_analysis,
    handle_ff_get_rookie_rankings,
)


def _inject(module, deps):
    for name, value in deps.items():
        setattr(module, name, value)


def inject_platform_dependencies(**deps):
    """Inject dependencies needed by platform handlers.

    Required dependencies:
    - platform_manager: PlatformManager holding connections and teams
    """
    from . import platform_handlers

    _inject(platform_handlers, deps)


def inject_insight_dependencies(**deps):
    """Inject dependencies needed by insight handlers.

    Required dependencies:
    - platform_manager: PlatformManager holding imported teams
    - sleeper_client: SleeperClient for free agents and transactions
    """
    from . import insight_handlers

    _inject(insight_handlers, deps)


def inject_league_dependencies(**deps):
    """Inject dependencies needed by league scoring handlers.

    Required dependencies:
    - platform_manager: PlatformManager holding league settings
    - sleeper_client: SleeperClient for leagues looked up by id
    """
    from . import league_handlers

    _inject(league_handlers, deps)


def inject_strategy_dependencies(**deps):
    """Inject dependencies needed by strategy handlers.

    Required dependencies:
    - platform_manager: PlatformManager holding imported teams
    - sleeper_client: SleeperClient for standings and schedules
    """
    from . import strategy_handlers

    _inject(strategy_handlers, deps)


def inject_live_dependencies(**deps):
    """Inject dependencies needed by live score handlers.

    Required dependencies:
    - platform_manager: PlatformManager (ESPN cookies, team lookup)
    - sleeper_client: SleeperClient for Sleeper matchups and NFL state
    """
    from . import live_handlers

    _inject(live_handlers, deps)


def inject_dynasty_dependencies(**deps):
    """Inject dependencies needed by dynasty handlers.

    Required dependencies:
    - platform_manager: PlatformManager holding imported teams
    - sleeper_client: SleeperClient for the rookie player pool
    """
    from . import dynasty_handlers

    _inject(dynasty_handlers, deps)


def inject_all_dependencies(platform_manager, sleeper_client):
    """Wire every handler module to the same manager and Sleeper client."""
    inject_platform_dependencies(platform_manager=platform_manager)
    for inject in (
        inject_insight_dependencies,
        inject_league_dependencies,
        inject_strategy_dependencies,
        inject_live_dependencies,
        inject_dynasty_dependencies,
    ):
        inject(platform_manager=platform_manager, sleeper_client=sleeper_client)


__all__ = [
    # Admin handlers
    "handle_ff_refresh_token",
    "handle_ff_get_api_status",
    "handle_ff_clear_cache",
    # Platform handlers
    "handle_ff_connect_platform",
    "handle_ff_disconnect_platform",
    "handle_ff_import_teams",
    "handle_ff_get_teams",
    "handle_ff_get_team",
    "handle_ff_get_sync_status",
    "handle_ff_import_csv",
    # Insight handlers
    "handle_ff_get_start_sit",
    "handle_ff_get_roster_composition",
    "handle_ff_get_waiver_targets",
    "handle_ff_get_enhanced_insights",
    "handle_ff_get_enhanced_waiver_targets",
    "handle_ff_get_player_analytics",
    "handle_ff_get_waiver_recommendations",
    "handle_ff_analyze_trade",
    "handle_ff_find_trade_targets",
    "handle_ff_get_optimal_lineup",
    # League scoring handlers
    "handle_ff_get_league_scoring",
    "handle_ff_calculate_player_score",
    "handle_ff_compare_league_scoring",
    # Strategy handlers
    "handle_ff_get_team_strategy",
    "handle_ff_get_playoff_odds",
    # Live score handlers
    "handle_ff_get_live_scores",
    "handle_ff_watch_live_scores",
    # Dynasty handlers
    "handle_ff_get_dynasty_analysis",
    "handle_ff_evaluate_dynasty_trade",
    "handle_ff_get_rookie_rankings",
    # Dependency injection
    "inject_platform_dependencies",
    "inject_insight_dependencies",
    "inject_league_dependencies",
    "inject_strategy_dependencies",
    "inject_live_dependencies",
    "inject_dynasty_dependencies",
    "inject_all_dependencies",
]
