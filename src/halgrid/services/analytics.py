"""
Player performance analytics.

Trend, performance rating and buy/sell flags from a player's weekly scores,
plus the lineup swaps and position scarcity those numbers imply.
"""

from statistics import mean, pstdev
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..models import InjuryStatus, Matchup, Player
from ..utils.constants import DEFAULT_POOL_SIZE, FLEX_POSITIONS, POSITION_POOL_SIZES

TREND_WINDOW = 3
TREND_THRESHOLD_PCT = 20


class PlayerPerformance(BaseModel):
    player_id: str
    weekly_scores: List[float] = Field(default_factory=list)
    season_average: float = 0.0
    last3_average: float = 0.0
    trend: str = "neutral"
    projected_points: Optional[float] = None
    actual_points: float = 0.0
    consistency: float = 0.0
    performance_rating: float = 50.0
    recommendations: List[str] = Field(default_factory=list)


class PlayerAnalytics(BaseModel):
    """Performance summary plus the decisions it suggests."""

    player: Player
    performance: PlayerPerformance
    is_hot: bool = False
    is_cold: bool = False
    is_boom_bust: bool = False
    should_start: bool = False
    should_sell: bool = False
    should_buy: bool = False


class LineupSwap(BaseModel):
    bench: str
    starter: str
    reason: str


def calculate_trend(weekly_scores: Sequence[float]) -> str:
    """``hot``/``cold`` when the last three weeks beat/trail the season by 20%."""
    if len(weekly_scores) < TREND_WINDOW:
        return "neutral"
    season_avg = mean(weekly_scores)
    if season_avg <= 0:
        return "neutral"
    recent_avg = mean(weekly_scores[-TREND_WINDOW:])
    pct_diff = (recent_avg - season_avg) / season_avg * 100
    if pct_diff > TREND_THRESHOLD_PCT:
        return "hot"
    if pct_diff < -TREND_THRESHOLD_PCT:
        return "cold"
    return "neutral"


def calculate_performance_rating(
    actual_points: float,
    projected_points: float,
    position_rank: Optional[int],
    consistency: float,
) -> float:
    """0-100 rating blending projection accuracy, position rank and consistency."""
    rating = 50.0
    if projected_points > 0:
        rating += min(actual_points / projected_points * 30 - 30, 15)
    if position_rank:
        rating += max(0, 30 - position_rank)
    rating += consistency * 20
    return min(100.0, max(0.0, rating))


def get_recommendations(analytics: PlayerAnalytics) -> List[str]:
    recs = []
    if analytics.is_hot:
        recs.append("Hot streak - Start with confidence")
    if analytics.is_cold:
        recs.append("Cold streak - Consider benching")
    if analytics.is_boom_bust:
        recs.append("Boom/bust player - High risk, high reward")
    if analytics.should_sell:
        recs.append("Sell high candidate")
    if analytics.should_buy:
        recs.append("Buy low opportunity")
    if analytics.player.injury_status:
        recs.append(f"Injury concern: {analytics.player.injury_status.value}")
    return recs


def analyze_matchup_history(matchups: Sequence[Matchup], roster_id: int) -> Dict[str, List[float]]:
    """Per-player weekly points for one roster across a list of matchups."""
    scores: Dict[str, List[float]] = {}
    for matchup in matchups:
        if matchup.roster_id != roster_id:
            continue
        for player_id, points in matchup.players_points.items():
            scores.setdefault(player_id, []).append(points)
    return scores


def get_player_analytics(
    player: Player,
    weekly_scores: Optional[Sequence[float]] = None,
    current_week_points: Optional[float] = None,
    projected_points: Optional[float] = None,
    position_rank: Optional[int] = None,
) -> PlayerAnalytics:
    """Analytics for one player; scores default to ``player.weekly_points``."""
    scores = [float(s) for s in (weekly_scores if weekly_scores is not None else player.weekly_points)]
    if current_week_points is None:
        current_week_points = scores[-1] if scores else 0.0
    if projected_points is None:
        projected_points = player.projected_points

    season_avg = mean(scores) if scores else 0.0
    last3_avg = mean(scores[-TREND_WINDOW:]) if scores else 0.0
    std_dev = pstdev(scores) if scores else 0.0
    consistency = max(0.0, 1 - std_dev / season_avg) if season_avg > 0 else 0.0
    trend = calculate_trend(scores)
    rating = calculate_performance_rating(current_week_points, projected_points or 0, position_rank, consistency)

    analytics = PlayerAnalytics(
        player=player,
        performance=PlayerPerformance(
            player_id=player.player_id,
            weekly_scores=scores,
            season_average=round(season_avg, 2),
            last3_average=round(last3_avg, 2),
            trend=trend,
            projected_points=projected_points,
            actual_points=current_week_points,
            consistency=round(consistency, 3),
            performance_rating=round(rating, 1),
        ),
        is_hot=trend == "hot",
        is_cold=trend == "cold",
        is_boom_bust=bool(scores) and std_dev > season_avg * 0.5,
        should_start=rating > 60 and player.injury_status in (None, InjuryStatus.HEALTHY),
        should_sell=trend == "hot" and rating > 80,
        should_buy=trend == "cold" and season_avg > 10,
    )
    analytics.performance.recommendations = get_recommendations(analytics)
    return analytics


def get_lineup_recommendations(
    starters: Sequence[PlayerAnalytics],
    bench: Sequence[PlayerAnalytics],
) -> List[LineupSwap]:
    """Swap cold, low-rated starters for hot bench players at the same spot."""
    cold_starters = [s for s in starters if s.is_cold and s.performance.performance_rating < 50]
    hot_bench = [b for b in bench if b.is_hot and b.performance.performance_rating > 60]
    used = set()
    swaps = []

    for starter in cold_starters:
        pos = starter.player.position
        replacement = next(
            (
                b
                for b in hot_bench
                if b.player.player_id not in used
                and (b.player.position == pos or (pos == "FLEX" and b.player.position in FLEX_POSITIONS))
            ),
            None,
        )
        if replacement is None:
            continue
        used.add(replacement.player.player_id)
        swaps.append(
            LineupSwap(
                bench=replacement.player.player_id,
                starter=starter.player.player_id,
                reason=(
                    f"{replacement.player.name} is hot ({replacement.performance.last3_average:.1f} ppg) "
                    f"while {starter.player.name} is cold ({starter.performance.last3_average:.1f} ppg)"
                ),
            )
        )
    return swaps


def get_position_scarcity(position: str, available_players: Sequence[Player]) -> float:
    """0 (plentiful) to 1 (nothing left) for free agents at ``position``."""
    startable = POSITION_POOL_SIZES.get(position, DEFAULT_POOL_SIZE)
    available = sum(1 for p in available_players if p.position == position)
    return max(0.0, 1 - available / startable)
