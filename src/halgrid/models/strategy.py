"""Season situation and weekly game-plan models."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class CompetitiveStatus(str, Enum):
    LOCKED = "locked"
    COMFORTABLE = "comfortable"
    COMPETITIVE = "competitive"
    FIGHTING = "fighting"
    DESPERATE = "desperate"


class LineupStrategy(str, Enum):
    HAIL_MARY = "hail_mary"
    HIGH_CEILING = "high_ceiling"
    SAFE_FLOOR = "safe_floor"
    BALANCED = "balanced"


class TeamSituation(BaseModel):
    """Where a team stands in its league and what that implies."""

    standing: int
    total_teams: int
    points_rank: int
    wins: int = 0
    losses: int = 0
    win_pct: float = 0.0
    playoff_spots: int = 6
    weeks_remaining: int = 0
    playoff_chance: float = 0.0
    must_win_weeks: List[int] = Field(default_factory=list)
    can_afford_loss: bool = False
    tiebreakers: str = "wins"
    competitive_status: CompetitiveStatus = CompetitiveStatus.COMPETITIVE
    roster_maturity: str = "building"
    time_horizon: str = "next_year"
    key_decisions: List[str] = Field(default_factory=list)


class OpponentAnalysis(BaseModel):
    average_points: float = 0.0
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class WeeklyStrategy(BaseModel):
    """How to set a lineup for the coming matchup."""

    lineup_strategy: LineupStrategy = LineupStrategy.BALANCED
    risk_tolerance: str = "moderate"
    target_score: float = 0.0
    my_average: float = 0.0
    opponent: OpponentAnalysis = Field(default_factory=OpponentAnalysis)
    expected_game_flow: str = "close"
    reasoning: List[str] = Field(default_factory=list)
