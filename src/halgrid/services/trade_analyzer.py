"""
Trade value and trade fairness.

Player value blends season production with the weekly projection, scaled by
positional scarcity and the league's reception scoring. A trade is judged on
value exchanged, the change in strength at each skill position and the
projected weekly points swing.
"""

from typing import Dict, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from ..models import Player, Team
from ..utils.constants import SKILL_POSITIONS
from .analytics import calculate_trend

POSITION_MULTIPLIERS: Dict[str, float] = {
    "QB": 0.8,
    "RB": 1.2,
    "WR": 1.0,
    "TE": 1.1,
    "K": 0.3,
    "DEF": 0.4,
}
TREND_ADJUSTMENTS = {"hot": 1.1, "cold": 0.9, "neutral": 1.0}
PLAYOFF_WIN_THRESHOLD = 7
REGULAR_SEASON_GAMES = 14
NON_TRADE_FILLER_POSITIONS = ("QB", "K", "DEF")


class TradeAnalysis(BaseModel):
    """Verdict on a proposed trade from the proposing team's side."""

    recommendation: str
    fairness_score: float = Field(..., ge=-100, le=100)
    confidence: float
    sending_value: float
    receiving_value: float
    value_difference: float
    points_differential: float
    position_impact: Dict[str, float] = Field(default_factory=dict)
    depth_impact: str
    playoff_probability_change: float
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    key_factors: List[str] = Field(default_factory=list)
    counter_request: List[str] = Field(default_factory=list)


class TradeTarget(BaseModel):
    player_id: str
    player_name: str
    team_id: str
    targetability: float
    fair_offer: List[str] = Field(default_factory=list)
    reasoning: str


def _production(player: Player) -> float:
    return player.stats.get("fantasy_points") or player.season_average


def _scoring_adjustment(position: str, scoring_type: str) -> float:
    if scoring_type == "PPR":
        if position in ("WR", "TE"):
            return 1.15
        if position == "RB":
            return 1.05
    elif scoring_type == "Standard" and position == "RB":
        return 1.1
    return 1.0


def calculate_player_value(player: Player, scoring_type: str = "PPR") -> float:
    """Trade value: ``(production·0.4 + projected·0.6) × position × scoring × trend``."""
    base = _production(player) * 0.4 + (player.projected_points or 0) * 0.6
    value = (
        base
        * POSITION_MULTIPLIERS.get(player.position, 1.0)
        * _scoring_adjustment(player.position, scoring_type)
        * TREND_ADJUSTMENTS[calculate_trend(player.weekly_points)]
    )
    return round(value, 2)


def _total_value(players: Sequence[Player], scoring_type: str) -> float:
    return sum(calculate_player_value(p, scoring_type) for p in players)


def analyze_position_impact(
    team: Team, sending: Sequence[Player], receiving: Sequence[Player]
) -> Dict[str, float]:
    """Relative production change at each skill position."""
    impact = {}
    for pos in SKILL_POSITIONS:
        before = sum(_production(p) for p in team.players if p.position == pos)
        change = sum(_production(p) for p in receiving if p.position == pos) - sum(
            _production(p) for p in sending if p.position == pos
        )
        impact[pos] = round(change / max(before, 1), 3)
    return impact


def assess_depth_impact(team: Team, sending: Sequence[Player], receiving: Sequence[Player]) -> str:
    counts: Dict[str, int] = {}
    for player in team.players:
        counts[player.position] = counts.get(player.position, 0) + 1
    for player in sending:
        counts[player.position] = counts.get(player.position, 0) - 1
    for player in receiving:
        counts[player.position] = counts.get(player.position, 0) + 1

    thin = [pos for pos, n in counts.items() if n < 2 and pos not in NON_TRADE_FILLER_POSITIONS]
    if thin:
        return f"Dangerously thin at {', '.join(thin)}"
    deep = [pos for pos, n in counts.items() if n > 4]
    if deep:
        return f"Strong depth at {', '.join(deep)}"
    return "Maintains reasonable depth"


def playoff_probability_change(team: Team, weekly_points_change: float) -> float:
    """Percentage-point swing in playoff odds from a weekly scoring change."""
    record = team.record
    decided = record.wins + record.losses
    win_rate = record.wins / decided if decided else 0.5
    remaining = max(0, REGULAR_SEASON_GAMES - decided)
    projected_wins = round((win_rate + weekly_points_change / 100) * remaining)

    baseline = min(1.0, max(0.0, (record.wins + round(win_rate * remaining)) / PLAYOFF_WIN_THRESHOLD))
    projected = min(1.0, max(0.0, (record.wins + projected_wins) / PLAYOFF_WIN_THRESHOLD))
    return round((projected - baseline) * 100, 1)


def calculate_fairness_score(
    sending_value: float, receiving_value: float, position_impact: Dict[str, float]
) -> float:
    """-100 (lopsided against you) to 100 (lopsided for you)."""
    largest = max(sending_value, receiving_value)
    value_score = (receiving_value - sending_value) / largest * 50 if largest > 0 else 0.0
    position_score = sum(position_impact.values()) * 10
    return round(max(-100.0, min(100.0, value_score + position_score)), 1)


def determine_recommendation(fairness: float, playoff_change: float) -> str:
    if fairness > 30 and playoff_change > 0:
        return "ACCEPT"
    if fairness < -30 or playoff_change < -10:
        return "REJECT"
    if -30 < fairness < -10:
        return "COUNTER"
    return "CONSIDER"


def _reasoning(
    sending_value: float,
    receiving_value: float,
    position_impact: Dict[str, float],
    points_change: float,
    playoff_change: float,
    depth: str,
):
    pros, cons, factors = [], [], []

    if sending_value > 0 and receiving_value > sending_value * 1.1:
        pros.append(f"Getting {round((receiving_value / sending_value - 1) * 100)}% more value")
    elif receiving_value > 0 and sending_value > receiving_value * 1.1:
        cons.append(f"Giving up {round((sending_value / receiving_value - 1) * 100)}% more value")
    else:
        factors.append("Trade value is relatively fair")

    improved = [pos for pos, v in position_impact.items() if v > 0.1]
    if improved:
        pros.append(f"Improves {', '.join(improved)} position(s)")
    weakened = [pos for pos, v in position_impact.items() if v < -0.1]
    if weakened:
        cons.append(f"Weakens {', '.join(weakened)} position(s)")

    if points_change > 3:
        pros.append(f"+{points_change:.1f} projected points per week")
    elif points_change < -3:
        cons.append(f"{points_change:.1f} projected points per week")

    if playoff_change > 5:
        pros.append(f"+{playoff_change:.0f}% playoff probability")
    elif playoff_change < -5:
        cons.append(f"{playoff_change:.0f}% playoff probability")

    factors.append(f"Impact on depth: {depth}")
    return pros, cons, factors


def _find_balancing_player(
    candidates: Sequence[Player], value_needed: float, scoring_type: str
) -> Optional[Player]:
    for player in candidates:
        if abs(calculate_player_value(player, scoring_type) - value_needed) < value_needed * 0.3:
            return player
    return None


def analyze_trade(
    my_team: Team,
    sending: Sequence[Player],
    receiving: Sequence[Player],
    scoring_type: str = "PPR",
    partner_team: Optional[Team] = None,
) -> TradeAnalysis:
    """Evaluate giving ``sending`` for ``receiving``."""
    sending_value = _total_value(sending, scoring_type)
    receiving_value = _total_value(receiving, scoring_type)
    impact = analyze_position_impact(my_team, sending, receiving)
    points_change = round(
        sum(p.projected_points or 0 for p in receiving) - sum(p.projected_points or 0 for p in sending), 2
    )
    playoff_change = playoff_probability_change(my_team, points_change)
    depth = assess_depth_impact(my_team, sending, receiving)
    fairness = calculate_fairness_score(sending_value, receiving_value, impact)
    recommendation = determine_recommendation(fairness, playoff_change)
    pros, cons, factors = _reasoning(sending_value, receiving_value, impact, points_change, playoff_change, depth)

    confidence = 0.5 + (0.1 if len(pros) + len(cons) > 3 else 0.0)

    counter_request: List[str] = []
    if recommendation == "COUNTER":
        value_needed = abs(sending_value - receiving_value)
        if partner_team is not None:
            received = {p.player_id for p in receiving}
            pool = sorted(
                (
                    p
                    for p in partner_team.players
                    if p.position not in NON_TRADE_FILLER_POSITIONS and p.player_id not in received
                ),
                key=_production,
            )
            extra = _find_balancing_player(pool, value_needed, scoring_type)
            if extra is not None:
                counter_request.append(extra.name)
        logger.debug(f"Counter needed: {value_needed:.1f} value short, requesting {counter_request or 'nothing'}")

    return TradeAnalysis(
        recommendation=recommendation,
        fairness_score=fairness,
        confidence=round(min(0.95, confidence), 2),
        sending_value=round(sending_value, 2),
        receiving_value=round(receiving_value, 2),
        value_difference=round(receiving_value - sending_value, 2),
        points_differential=points_change,
        position_impact=impact,
        depth_impact=depth,
        playoff_probability_change=playoff_change,
        pros=pros,
        cons=cons,
        key_factors=factors,
        counter_request=counter_request,
    )


def calculate_targetability(player: Player, team: Team) -> float:
    """How likely the owning team is to move ``player`` (0-1)."""
    score = 0.5
    group = sorted(
        (p for p in team.players if p.position == player.position),
        key=_production,
        reverse=True,
    )
    rank = next((i for i, p in enumerate(group) if p.player_id == player.player_id), 0)
    if rank > 2:
        score += 0.2
    if len(group) > 4:
        score += 0.15
    if team.record.wins > team.record.losses * 1.5:
        score -= 0.1
    if player.projected_points is not None and _production(player) > player.projected_points:
        score -= 0.15
    return round(max(0.0, min(1.0, score)), 2)


def calculate_fair_offer(target: Player, my_team: Team, scoring_type: str = "PPR") -> List[Player]:
    """Players from ``my_team`` whose combined value matches ``target``."""
    target_value = calculate_player_value(target, scoring_type)
    offer: List[Player] = []
    offer_value = 0.0
    for player in sorted(my_team.players, key=_production, reverse=True):
        value = calculate_player_value(player, scoring_type)
        if abs(value - target_value) < target_value * 0.2:
            return [player]
        if offer_value < target_value:
            offer.append(player)
            offer_value += value
            if offer_value >= target_value * 0.9:
                return offer
    return offer


def find_trade_targets(
    my_team: Team,
    all_teams: Sequence[Team],
    position: str,
    scoring_type: str = "PPR",
    limit: int = 10,
) -> List[TradeTarget]:
    """Gettable players at ``position`` across the league."""
    scored = []
    for team in all_teams:
        if team.id == my_team.id:
            continue
        for player in team.players:
            if player.position != position:
                continue
            targetability = calculate_targetability(player, team)
            if targetability <= 0.3:
                continue

            reasons = []
            if targetability > 0.7:
                reasons.append("Owner likely willing to trade")
            if _production(player) > 15:
                reasons.append("Strong producer")
            if team.record.losses > team.record.wins:
                reasons.append("Owner may be in sell mode")
            if sum(1 for p in team.players if p.position == position) > 3:
                reasons.append(f"Owner has depth at {position}")

            target = TradeTarget(
                player_id=player.player_id,
                player_name=player.name,
                team_id=team.id,
                targetability=targetability,
                fair_offer=[p.name for p in calculate_fair_offer(player, my_team, scoring_type)],
                reasoning=". ".join(reasons) or "Potential trade candidate",
            )
            scored.append((targetability * _production(player), target))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [target for _, target in scored[:limit]]
