"""
Player models for fantasy football analysis.

This module contains the Pydantic models used to represent a rostered or
available NFL player once platform payloads have been normalized.
"""

from enum import Enum
from statistics import mean
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Position(str, Enum):
    """Offensive fantasy positions the insight heuristics reason about."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"


class InjuryStatus(str, Enum):
    """Player injury status designations."""
    HEALTHY = "Healthy"
    QUESTIONABLE = "Questionable"
    DOUBTFUL = "Doubtful"
    OUT = "Out"
    IR = "IR"
    PUP = "PUP"
    SUSPENDED = "Suspended"


# Platform spellings of injury designations
_INJURY_ALIASES = {
    "q": InjuryStatus.QUESTIONABLE,
    "questionable": InjuryStatus.QUESTIONABLE,
    "d": InjuryStatus.DOUBTFUL,
    "doubtful": InjuryStatus.DOUBTFUL,
    "o": InjuryStatus.OUT,
    "out": InjuryStatus.OUT,
    "ir": InjuryStatus.IR,
    "injury_reserve": InjuryStatus.IR,
    "injured reserve": InjuryStatus.IR,
    "pup": InjuryStatus.PUP,
    "pup-r": InjuryStatus.PUP,
    "sus": InjuryStatus.SUSPENDED,
    "suspended": InjuryStatus.SUSPENDED,
    "susp": InjuryStatus.SUSPENDED,
}

_POSITION_ALIASES = {
    "D/ST": "DEF",
    "DST": "DEF",
    "D": "DEF",
}


def normalize_position(position: Optional[str]) -> str:
    """Map platform-specific position spellings onto the unified set."""
    if not position:
        return ""
    upper = position.strip().upper()
    return _POSITION_ALIASES.get(upper, upper)


class Player(BaseModel):
    """A fantasy football player in platform-neutral form."""

    player_id: str = Field(..., description="Platform player identifier")
    name: str = Field(..., description="Full display name")
    position: str = Field("", description="Primary fantasy position")
    fantasy_positions: List[str] = Field(default_factory=list)
    team: Optional[str] = Field(None, description="NFL team abbreviation")
    injury_status: Optional[InjuryStatus] = None
    age: Optional[int] = Field(None, ge=0)
    years_exp: Optional[int] = Field(None, ge=0)
    depth_chart_order: Optional[int] = None
    bye_week: Optional[int] = Field(None, ge=1, le=18)
    weekly_points: List[float] = Field(default_factory=list)
    stats: Dict[str, float] = Field(default_factory=dict)
    projected_points: Optional[float] = None
    platform: Optional[str] = None

    @field_validator("position", mode="before")
    @classmethod
    def _normalize_position(cls, value):
        return normalize_position(value)

    @field_validator("fantasy_positions", mode="before")
    @classmethod
    def _normalize_fantasy_positions(cls, value):
        if not value:
            return []
        return [normalize_position(pos) for pos in value]

    @field_validator("injury_status", mode="before")
    @classmethod
    def _normalize_injury(cls, value):
        """Accept Sleeper, ESPN and Yahoo injury spellings."""
        if value is None or isinstance(value, InjuryStatus):
            return value
        text = str(value).strip()
        if not text or text.lower() in {"active", "ok", "healthy", "normal", "na"}:
            return None
        return _INJURY_ALIASES.get(text.lower())

    def plays(self, position: str) -> bool:
        """True when the player is eligible at ``position``."""
        return self.position == position or position in self.fantasy_positions

    @property
    def is_unavailable(self) -> bool:
        return self.injury_status in (InjuryStatus.OUT, InjuryStatus.IR)

    @property
    def season_average(self) -> float:
        return mean(self.weekly_points) if self.weekly_points else 0.0
