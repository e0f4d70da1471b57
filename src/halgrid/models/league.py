"""League, team and matchup models shared by every platform."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .player import Player


class Platform(str, Enum):
    """Supported fantasy platforms."""
    SLEEPER = "sleeper"
    ESPN = "espn"
    YAHOO = "yahoo"


class League(BaseModel):
    """League configuration: scoring rules and roster slots."""

    league_id: str
    name: str = ""
    platform: Platform = Platform.SLEEPER
    season: Optional[str] = None
    total_rosters: int = Field(default=10, ge=0)
    scoring_settings: Dict[str, float] = Field(default_factory=dict)
    roster_positions: List[str] = Field(default_factory=list)
    settings: Dict[str, Any] = Field(default_factory=dict)
    status: Optional[str] = None

    @property
    def playoff_week_start(self) -> Optional[int]:
        return self.settings.get("playoff_week_start")

    @property
    def waiver_type(self) -> Optional[str]:
        """``faab`` when the league bids on free agents."""
        waiver_type = self.settings.get("waiver_type")
        if waiver_type in (2, "2", "faab", "FAAB"):
            return "faab"
        if waiver_type is None:
            return None
        return str(waiver_type)


class Record(BaseModel):
    """Win/loss record and season points."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_pct(self) -> float:
        return self.wins / max(self.wins + self.losses, 1)


class Roster(BaseModel):
    """A league roster as used by standings and strategy analysis."""

    roster_id: int
    owner_id: Optional[str] = None
    players: List[str] = Field(default_factory=list)
    starters: List[str] = Field(default_factory=list)
    record: Record = Field(default_factory=Record)
    waiver_budget_used: int = 0


class Team(BaseModel):
    """A user's team in one league after platform normalization."""

    id: str
    platform: Platform
    league_id: str
    league_name: str = ""
    team_name: str = ""
    owner: Optional[str] = None
    roster_id: Optional[int] = None
    players: List[Player] = Field(default_factory=list)
    starters: List[str] = Field(default_factory=list)
    record: Record = Field(default_factory=Record)
    waiver_budget_used: int = 0
    last_sync: datetime = Field(default_factory=datetime.now)

    @property
    def bench(self) -> List[Player]:
        starters = set(self.starters)
        return [p for p in self.players if p.player_id not in starters]


class Matchup(BaseModel):
    """One roster's side of a weekly head-to-head matchup."""

    roster_id: int
    matchup_id: Optional[int] = None
    week: Optional[int] = None
    points: float = 0.0
    players_points: Dict[str, float] = Field(default_factory=dict)
    starters: List[str] = Field(default_factory=list)
    projected_points: Optional[float] = None
