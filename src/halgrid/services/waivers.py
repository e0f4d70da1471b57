"""
League-wide waiver wire analysis.

Counts recent adds and drops from league transactions, compares the roster
against recommended position counts and ranks free agents by heat, need and
production.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from loguru import logger
from pydantic import BaseModel

from ..models import InjuryStatus, League, Player
from ..utils.constants import RECOMMENDED_POSITION_COUNTS
from .analytics import PlayerAnalytics, get_player_analytics

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


class TransactionTrend(BaseModel):
    adds: int = 0
    drops: int = 0


class WaiverRecommendation(BaseModel):
    player_id: str
    player_name: str
    position: str
    team: Optional[str] = None
    reason: str
    priority: str
    position_need: bool
    trending: str
    add_percentage: int
    performance_rating: float
    season_average: float
    drop_candidate: Optional[str] = None
    target_bid: Optional[int] = None


def analyze_trending_players(transactions: Sequence[Mapping[str, Any]]) -> Dict[str, TransactionTrend]:
    """Adds and drops per player across raw league transactions."""
    trends: Dict[str, TransactionTrend] = {}
    for transaction in transactions:
        for player_id in (transaction.get("adds") or {}):
            trends.setdefault(player_id, TransactionTrend()).adds += 1
        for player_id in (transaction.get("drops") or {}):
            trends.setdefault(player_id, TransactionTrend()).drops += 1
    return trends


def get_position_needs(roster_players: Sequence[Player]) -> List[str]:
    """Positions rostered below the recommended count."""
    counts: Dict[str, int] = {}
    for player in roster_players:
        counts[player.position] = counts.get(player.position, 0) + 1
    return [pos for pos, wanted in RECOMMENDED_POSITION_COUNTS.items() if counts.get(pos, 0) < wanted]


def get_drop_candidates(
    roster_players: Sequence[Player],
    starters: Sequence[str],
    analytics: Mapping[str, PlayerAnalytics],
    count: int = 3,
) -> List[Player]:
    """Weakest rostered players; starters are protected, injured and cold players are not."""
    starter_ids = set(starters)
    scored = []
    for player in roster_players:
        stats = analytics.get(player.player_id)
        if stats is None:
            continue
        score = stats.performance.performance_rating
        if player.player_id in starter_ids:
            score += 30
        if player.injury_status in (InjuryStatus.IR, InjuryStatus.OUT):
            score -= 20
        if stats.is_cold:
            score -= 10
        scored.append((score, player))
    scored.sort(key=lambda item: item[0])
    return [player for _, player in scored[:count]]


def get_waiver_recommendations(
    available_players: Sequence[Player],
    roster_players: Sequence[Player],
    starters: Sequence[str],
    transactions: Sequence[Mapping[str, Any]],
    league: Optional[League] = None,
) -> List[WaiverRecommendation]:
    """Free agents worth adding, highest priority first."""
    needs = get_position_needs(roster_players)
    trends = analyze_trending_players(transactions)
    roster_analytics = {p.player_id: get_player_analytics(p) for p in roster_players}
    drops = get_drop_candidates(roster_players, starters, roster_analytics, count=5)
    faab = league is not None and league.waiver_type == "faab"

    recommendations = []
    for player in available_players:
        stats = get_player_analytics(player)
        perf = stats.performance
        trend = trends.get(player.player_id, TransactionTrend())
        if trend.adds > trend.drops:
            trending = "rising"
        elif trend.drops > trend.adds:
            trending = "falling"
        else:
            trending = "steady"

        position_need = player.position in needs
        priority = "low"
        reasons = []

        if stats.is_hot and position_need:
            priority = "high"
            reasons.append(f"Hot player filling {player.position} need")
        elif stats.is_hot or (position_need and perf.performance_rating > 60):
            priority = "medium"
            if stats.is_hot:
                reasons.append("Player is hot")
            if position_need:
                reasons.append(f"Fills {player.position} need")

        if trending == "rising":
            if priority == "low":
                priority = "medium"
            reasons.append("Trending up in adds")

        if stats.should_buy:
            reasons.append("Buy low opportunity")

        if perf.season_average > 10 and priority == "low":
            priority = "medium"
            reasons.append(f"Solid contributor ({perf.season_average:.1f} ppg)")

        if not reasons:
            continue

        drop = next((d for d in drops if d.position == player.position), drops[0] if drops else None)
        recommendations.append(
            WaiverRecommendation(
                player_id=player.player_id,
                player_name=player.name,
                position=player.position,
                team=player.team,
                reason=" | ".join(reasons),
                priority=priority,
                position_need=position_need,
                trending=trending,
                add_percentage=min(100, trend.adds * 5 + (20 if stats.is_hot else 0)),
                performance_rating=perf.performance_rating,
                season_average=perf.season_average,
                drop_candidate=drop.name if drop else None,
                target_bid=int(perf.season_average * 2) if faab else None,
            )
        )

    logger.debug(f"Waiver scan: {len(recommendations)} of {len(available_players)} free agents recommended")
    return sorted(
        recommendations,
        key=lambda r: (-PRIORITY_ORDER[r.priority], -r.performance_rating),
    )
