"""
Insight models produced by the roster and waiver heuristics.

These are the records handed back to tool callers: start/sit labels,
waiver targets with FAAB bids, and the roster composition summary that
both are derived from.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StartSit(str, Enum):
    """Start/sit recommendation labels, strongest first."""

    MUST_START = "must_start"
    STRONG_START = "strong_start"
    FLEX_PLAY = "flex_play"
    SIT = "sit"
    AVOID = "avoid"


class RoleType(str, Enum):
    STARTER = "starter"
    FLEX_CANDIDATE = "flex_candidate"
    DEEP_BENCH = "deep_bench"


class WaiverPriority(str, Enum):
    """Why a free agent is worth claiming."""

    CRITICAL_NEED = "critical_need"
    UPGRADE = "upgrade"
    DEPTH = "depth"
    LOTTERY_TICKET = "lottery_ticket"
    IGNORE = "ignore"


class WaiverImpact(str, Enum):
    IMMEDIATE_STARTER = "immediate_starter"
    FLEX_UPGRADE = "flex_upgrade"
    DEPTH_PIECE = "depth_piece"
    FUTURE_VALUE = "future_value"
    SPECULATIVE_ADD = "speculative_add"
    NONE = "none"


class PlayerRole(BaseModel):
    role: RoleType
    starting_probability: float = Field(..., ge=0, le=1)


class RecentPerformance(BaseModel):
    """Weekly scoring summary for one player."""

    average: float = 0.0
    floor: float = 0.0
    ceiling: float = 0.0
    consistency: float = 0.0
    weekly: List[float] = Field(default_factory=list)


class PositionGroupMember(BaseModel):
    player_id: str
    name: str
    role: RoleType
    starting_probability: float


class RosterComposition(BaseModel):
    """Depth chart view of a roster."""

    position_groups: Dict[str, List[PositionGroupMember]] = Field(default_factory=dict)
    position_strength: Dict[str, float] = Field(default_factory=dict)
    strongest_positions: List[str] = Field(default_factory=list)
    weakest_positions: List[str] = Field(default_factory=list)
    bye_week_vulnerabilities: Dict[int, List[str]] = Field(default_factory=dict)
    average_age: float = 0.0
    experience_level: str = "mixed"
    roster_construction: str = "balanced"


class PositionContext(BaseModel):
    depth: int = 0
    better_options_on_bench: bool = False
    is_your_best_option: bool = False


class StartSitRecommendation(BaseModel):
    """A start/sit label with its confidence and supporting reasoning."""

    player_id: str
    player_name: str
    position: str
    team: Optional[str] = None
    recommendation: StartSit = StartSit.SIT
    confidence: int = Field(50, ge=0, le=100)
    reasoning: List[str] = Field(default_factory=list)
    position_context: PositionContext = Field(default_factory=PositionContext)
    recent_performance: RecentPerformance = Field(default_factory=RecentPerformance)
    upside: str = "low"
    alternatives: List[str] = Field(default_factory=list)
    risk_level: Optional[str] = None
    alternative_if_injured: Optional[str] = None
    league_context: List[str] = Field(default_factory=list)


class WaiverTarget(BaseModel):
    """A free agent worth claiming, with a suggested FAAB bid."""

    player_id: str
    player_name: str
    position: str
    team: Optional[str] = None
    priority: WaiverPriority
    impact: WaiverImpact
    faab_bid: int = Field(0, ge=0)
    waiver_priority: str = "skip"
    need_level: str = "low"
    current_gap: str = ""
    reasoning: List[str] = Field(default_factory=list)
    replaces_who: Optional[str] = None
    immediate_need: int = 5
    future_value: int = 5
    competition_level: str = "medium"
    timing_suggestion: Optional[str] = None
