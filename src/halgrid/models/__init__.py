"""Pydantic models shared across clients, parsers and services."""

from .insights import (
    PlayerRole,
    PositionContext,
    PositionGroupMember,
    RecentPerformance,
    RoleType,
    RosterComposition,
    StartSit,
    StartSitRecommendation,
    WaiverImpact,
    WaiverPriority,
    WaiverTarget,
)
from .league import League, Matchup, Platform, Record, Roster, Team
from .player import InjuryStatus, Player, Position, normalize_position
from .strategy import (
    CompetitiveStatus,
    LineupStrategy,
    OpponentAnalysis,
    TeamSituation,
    WeeklyStrategy,
)

__all__ = [
    "CompetitiveStatus",
    "InjuryStatus",
    "League",
    "LineupStrategy",
    "Matchup",
    "OpponentAnalysis",
    "Platform",
    "Player",
    "PlayerRole",
    "Position",
    "PositionContext",
    "PositionGroupMember",
    "RecentPerformance",
    "Record",
    "RoleType",
    "Roster",
    "RosterComposition",
    "StartSit",
    "StartSitRecommendation",
    "Team",
    "TeamSituation",
    "WaiverImpact",
    "WaiverPriority",
    "WaiverTarget",
    "WeeklyStrategy",
    "normalize_position",
]
