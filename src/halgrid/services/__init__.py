"""Heuristic fantasy analysis: scoring, roster insights, strategy, odds and live scores."""

from .scoring import (
    calculate_player_score,
    calculate_projected_points,
    compare_league_scoring,
    get_league_scoring_info,
    get_scoring_type,
    is_idp_league,
)
from .team_personalized import (
    analyze_player_role,
    analyze_roster_composition,
    generate_start_sit_recommendations,
    generate_waiver_targets,
    get_recent_performance,
)
from .team_strategy import (
    analyze_team_situation,
    enhance_start_sit_with_context,
    enhance_waiver_targets_with_context,
    generate_weekly_strategy,
)

__all__ = [
    "analyze_player_role",
    "analyze_roster_composition",
    "analyze_team_situation",
    "calculate_player_score",
    "calculate_projected_points",
    "compare_league_scoring",
    "enhance_start_sit_with_context",
    "enhance_waiver_targets_with_context",
    "generate_start_sit_recommendations",
    "generate_waiver_targets",
    "generate_weekly_strategy",
    "get_league_scoring_info",
    "get_recent_performance",
    "get_scoring_type",
    "is_idp_league",
]
