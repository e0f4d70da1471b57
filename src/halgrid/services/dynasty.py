"""
Dynasty and keeper valuation.

Long-term value sits on a 1-100 scale driven by position and age: running
backs fall off first, quarterbacks last. A roster's total value and average
age place it in a contending window, and the window decides whether aging
players are sold or kept for a title push.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import BaseModel, Field

from ..models import Player
from ..utils.constants import SKILL_POSITIONS

DEFAULT_DYNASTY_AGE = 25
MAX_KEEPERS = 8
MAX_SELL_CANDIDATES = 5

# (age below which the value applies, value); None closes the curve
AGE_CURVES: Dict[str, List[Tuple[Optional[int], int]]] = {
    "QB": [(24, 75), (30, 65), (None, 40)],
    "RB": [(24, 70), (27, 60), (30, 35), (None, 20)],
    "WR": [(25, 65), (30, 55), (33, 40), (None, 25)],
    "TE": [(26, 60), (31, 50), (None, 30)],
}
TREND_PERCENT = {"up": 8, "down": -6, "stable": 0}
SITUATION_BONUS = {"excellent": 10, "good": 5, "average": 0, "poor": -5}

WINDOW_TRADE_TARGETS: Dict[str, List[str]] = {
    "now": [
        "Target proven veterans for championship push",
        "Look for WRs in good situations",
        "Acquire reliable TEs",
        "Don't overpay for rookies",
    ],
    "next_year": [
        "Target young players with upside",
        "Acquire draft picks",
        "Look for breakout candidates",
        "Avoid aging veterans",
    ],
    "rebuilding": [
        "Trade veterans for picks",
        "Target rookie draft picks",
        "Acquire young players with potential",
        "Sell aging assets while they have value",
    ],
}


class DynastyPlayerValue(BaseModel):
    player_id: str
    player_name: str
    position: str
    team: Optional[str] = None
    age: Optional[int] = None
    dynasty_value: int = Field(..., ge=1, le=100)
    one_qb_value: int
    superflex_value: int
    trend: str
    trend_percent: int
    keeper_value: str
    injury_risk: str
    breakout_candidate: bool
    veteran_decline: bool


class RookieProfile(BaseModel):
    player_id: str
    player_name: str
    position: str
    team: Optional[str] = None
    situation: str
    projected_value: int
    redshirt_candidate: bool
    immediate_impact: bool


class DynastyRoster(BaseModel):
    """A roster's long-term outlook."""

    team_id: str
    player_values: List[DynastyPlayerValue] = Field(default_factory=list)
    total_value: int
    average_age: float
    contending_window: str
    keeper_recommendations: List[str] = Field(default_factory=list)
    trade_targets: List[str] = Field(default_factory=list)
    sell_candidates: List[str] = Field(default_factory=list)


class DynastyTrade(BaseModel):
    """A trade judged on long-term value, from the receiving team's side."""

    sending_value: int
    receiving_value: int
    fairness: str
    contending_impact: str
    rebuilding_impact: str


def _age(player: Player) -> int:
    return player.age or DEFAULT_DYNASTY_AGE


def base_dynasty_value(position: str, age: int) -> int:
    for limit, value in AGE_CURVES.get(position, []):
        if limit is None or age < limit:
            return value
    return 50


def calculate_injury_risk(player: Player) -> str:
    age = _age(player)
    if player.position == "RB" and age > 27:
        return "high"
    if age > 32:
        return "high"
    if player.position == "RB" or age > 29:
        return "medium"
    return "low"


def _keeper_value(value: int) -> str:
    if value > 80:
        return "elite"
    if value > 65:
        return "high"
    if value < 30:
        return "cut"
    if value < 45:
        return "low"
    return "medium"


def calculate_dynasty_value(player: Player) -> Optional[DynastyPlayerValue]:
    """Dynasty value for a QB, RB, WR or TE; ``None`` for other positions.

    Players without a known age are valued as 25-year-olds.
    """
    if player.position not in SKILL_POSITIONS:
        return None
    age = _age(player)
    value = max(1, min(100, base_dynasty_value(player.position, age)))

    if age < 24:
        trend = "up"
    elif age > 29:
        trend = "down"
    else:
        trend = "stable"

    return DynastyPlayerValue(
        player_id=player.player_id,
        player_name=player.name,
        position=player.position,
        team=player.team,
        age=player.age,
        dynasty_value=value,
        one_qb_value=round(value * 0.9),
        superflex_value=round(value * 1.2) if player.position == "QB" else value,
        trend=trend,
        trend_percent=TREND_PERCENT[trend],
        keeper_value=_keeper_value(value),
        injury_risk=calculate_injury_risk(player),
        breakout_candidate=age < 25 and 40 < value < 70,
        veteran_decline=age > 30 and trend == "down",
    )


def value_players(players: Sequence[Player]) -> List[DynastyPlayerValue]:
    values = [calculate_dynasty_value(p) for p in players]
    return [v for v in values if v is not None]


def contending_window(total_value: int, average_age: float) -> str:
    if total_value > 800 and average_age < 28:
        return "now"
    if total_value > 600 and average_age < 30:
        return "next_year"
    return "rebuilding"


def get_keeper_recommendations(values: Sequence[DynastyPlayerValue]) -> List[str]:
    keepers = [v for v in values if v.keeper_value in ("elite", "high")]
    keepers.sort(key=lambda v: v.dynasty_value, reverse=True)
    return [f"{v.player_name} ({v.dynasty_value} pts)" for v in keepers[:MAX_KEEPERS]]


def get_sell_candidates(values: Sequence[DynastyPlayerValue], window: str) -> List[str]:
    """Rebuilders sell valuable veterans, oldest first; everyone else sells declining players."""
    if window == "rebuilding":
        veterans = [v for v in values if v.age and v.age > 28 and v.dynasty_value > 50]
        veterans.sort(key=lambda v: v.age, reverse=True)
        return [
            f"{v.player_name} (Age {v.age}, {v.dynasty_value} pts)"
            for v in veterans[:MAX_SELL_CANDIDATES]
        ]
    return [f"{v.player_name} (Declining)" for v in values if v.veteran_decline]


def analyze_dynasty_roster(team_id: str, players: Sequence[Player]) -> DynastyRoster:
    values = value_players(players)
    total = sum(v.dynasty_value for v in values)
    average_age = (
        sum(v.age or DEFAULT_DYNASTY_AGE for v in values) / len(values) if values else 0.0
    )
    window = contending_window(total, average_age) if values else "rebuilding"
    logger.debug(f"Dynasty roster {team_id}: value {total}, age {average_age:.1f}, window {window}")

    return DynastyRoster(
        team_id=team_id,
        player_values=values,
        total_value=total,
        average_age=round(average_age, 1),
        contending_window=window,
        keeper_recommendations=get_keeper_recommendations(values),
        trade_targets=WINDOW_TRADE_TARGETS[window],
        sell_candidates=get_sell_candidates(values, window),
    )


def _trade_impact(values: Sequence[DynastyPlayerValue], window: str) -> str:
    if not values:
        return "No dynasty value received"
    average_age = sum(v.age or DEFAULT_DYNASTY_AGE for v in values) / len(values)
    if window == "now":
        return "Good for immediate impact" if average_age > 28 else "Mixed value for contending"
    return "Excellent for rebuilding" if average_age < 26 else "Limited long-term value"


def evaluate_dynasty_trade(sending: Sequence[Player], receiving: Sequence[Player]) -> DynastyTrade:
    """Compare the dynasty value given up with the value received.

    A gap above 30% of the average side is lopsided, above 15% leans one
    way. The impact lines describe the received players for a contender and
    for a rebuilding team.
    """
    sent = value_players(sending)
    received = value_players(receiving)
    sending_value = sum(v.dynasty_value for v in sent)
    receiving_value = sum(v.dynasty_value for v in received)

    average = (sending_value + receiving_value) / 2
    gap = abs(sending_value - receiving_value) / average if average else 0.0
    side = "you" if receiving_value > sending_value else "partner"
    if gap > 0.3:
        fairness = f"heavily_favors_{side}"
    elif gap > 0.15:
        fairness = f"favors_{side}"
    else:
        fairness = "fair"

    return DynastyTrade(
        sending_value=sending_value,
        receiving_value=receiving_value,
        fairness=fairness,
        contending_impact=_trade_impact(received, "now"),
        rebuilding_impact=_trade_impact(received, "rebuilding"),
    )


def _rookie_situation(player: Player) -> str:
    order = player.depth_chart_order
    if order == 1:
        return "excellent"
    if order == 2:
        return "good"
    if order == 3:
        return "average"
    return "poor"


def rank_rookies(players: Sequence[Player]) -> List[RookieProfile]:
    """First-year skill players, best projected value first.

    Projection is dynasty value adjusted for the NFL depth chart spot.
    """
    profiles = []
    for player in players:
        if player.years_exp != 0:
            continue
        value = calculate_dynasty_value(player)
        if value is None:
            continue
        situation = _rookie_situation(player)
        profiles.append(
            RookieProfile(
                player_id=player.player_id,
                player_name=player.name,
                position=player.position,
                team=player.team,
                situation=situation,
                projected_value=max(1, min(100, value.dynasty_value + SITUATION_BONUS[situation])),
                redshirt_candidate=situation == "poor",
                immediate_impact=situation == "excellent",
            )
        )
    profiles.sort(key=lambda r: (-r.projected_value, r.player_name))
    return profiles
