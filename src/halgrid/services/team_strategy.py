"""
Season-situation strategy.

Places a roster in its league standings, estimates playoff odds, picks a
weekly lineup philosophy, and layers that context over the roster-level
start/sit and waiver recommendations.
"""

import math
from typing import List, Optional, Sequence

from loguru import logger

from ..models import (
    CompetitiveStatus,
    League,
    LineupStrategy,
    Matchup,
    OpponentAnalysis,
    Player,
    Roster,
    StartSit,
    StartSitRecommendation,
    TeamSituation,
    WaiverImpact,
    WaiverTarget,
    WeeklyStrategy,
)
from ..utils.constants import REGULAR_SEASON_WEEKS

DEFAULT_PLAYOFF_SPOTS = 6
DEEP_LEAGUE_SIZE = 12


def _average_points(roster: Roster) -> float:
    record = roster.record
    return record.points_for / max(record.wins + record.losses, 1)


def _competitive_status(roster: Roster) -> CompetitiveStatus:
    record = roster.record
    if record.games_played == 0:
        return CompetitiveStatus.COMPETITIVE
    win_pct = record.wins / record.games_played
    if win_pct < 0.25:
        return CompetitiveStatus.DESPERATE
    if win_pct < 0.45:
        return CompetitiveStatus.FIGHTING
    if win_pct > 0.9:
        return CompetitiveStatus.LOCKED
    if win_pct > 0.75:
        return CompetitiveStatus.COMFORTABLE
    return CompetitiveStatus.COMPETITIVE


def calculate_playoff_chance(standing: int, win_pct: float, playoff_spots: int) -> float:
    """Heuristic playoff odds (percent) from standing and win rate."""
    spots_out = max(0, standing - playoff_spots)
    if standing <= playoff_spots:
        return min(95.0, 70 + win_pct * 25)
    if spots_out <= 2 and win_pct > 0.4:
        return max(20.0, 60 - spots_out * 15)
    return max(5.0, 40 - spots_out * 10)


def _roster_maturity(roster: Roster):
    avg = _average_points(roster)
    if avg > 130:
        return "peak", "win_now", ["Maximize current talent"]
    if avg > 110:
        return "competing", "win_now", ["Add missing pieces"]
    if avg > 90:
        return "building", "next_year", ["Develop young talent"]
    return "decline", "multi_year", ["Consider rebuild"]


def analyze_team_situation(
    my_roster: Roster,
    all_rosters: Sequence[Roster],
    league: League,
    week: int,
) -> TeamSituation:
    """Where ``my_roster`` stands and what is at stake for the rest of the season."""
    standings = sorted(
        all_rosters,
        key=lambda r: (r.record.win_pct, r.record.points_for),
        reverse=True,
    )
    standing = next(
        (i + 1 for i, r in enumerate(standings) if r.roster_id == my_roster.roster_id),
        len(standings) + 1,
    )
    by_points = sorted(all_rosters, key=lambda r: r.record.points_for, reverse=True)
    points_rank = next(
        (i + 1 for i, r in enumerate(by_points) if r.roster_id == my_roster.roster_id),
        len(by_points) + 1,
    )

    total_teams = league.total_rosters or len(all_rosters)
    playoff_spots = (
        math.ceil(total_teams / 2) if league.playoff_week_start else DEFAULT_PLAYOFF_SPOTS
    )
    weeks_remaining = max(0, REGULAR_SEASON_WEEKS - week)
    win_pct = my_roster.record.wins / max(my_roster.record.games_played, 1)
    chance = calculate_playoff_chance(standing, win_pct, playoff_spots)
    maturity, horizon, decisions = _roster_maturity(my_roster)

    situation = TeamSituation(
        standing=standing,
        total_teams=total_teams,
        points_rank=points_rank,
        wins=my_roster.record.wins,
        losses=my_roster.record.losses,
        win_pct=round(win_pct, 3),
        playoff_spots=playoff_spots,
        weeks_remaining=weeks_remaining,
        playoff_chance=round(chance, 1),
        must_win_weeks=list(range(1, min(weeks_remaining, 4) + 1)) if chance < 30 else [],
        can_afford_loss=chance > 80 or standing <= 2,
        tiebreakers="points" if points_rank > standing else "wins",
        competitive_status=_competitive_status(my_roster),
        roster_maturity=maturity,
        time_horizon=horizon,
        key_decisions=decisions,
    )
    logger.debug(
        f"Roster {my_roster.roster_id}: standing {standing}/{total_teams}, "
        f"playoff chance {situation.playoff_chance}%"
    )
    return situation


def _opponent_analysis(opponent: Roster) -> OpponentAnalysis:
    avg = _average_points(opponent)
    record = opponent.record
    strengths, weaknesses = [], []
    if avg > 120:
        strengths.append("High-scoring offense")
    if record.wins > record.losses:
        strengths.append("Good game management")
    if avg < 100:
        weaknesses.append("Low-scoring lineup")
    if record.losses > record.wins:
        weaknesses.append("Inconsistent performance")
    return OpponentAnalysis(average_points=round(avg, 2), strengths=strengths, weaknesses=weaknesses)


def generate_weekly_strategy(
    situation: TeamSituation,
    my_roster: Roster,
    opponent_roster: Roster,
    my_matchup: Optional[Matchup] = None,
    opponent_matchup: Optional[Matchup] = None,
) -> WeeklyStrategy:
    """Pick a lineup philosophy for this week's opponent."""
    my_avg = _average_points(my_roster)
    opponent = _opponent_analysis(opponent_roster)
    opp_avg = opponent.average_points

    if my_matchup is not None and opponent_matchup is not None:
        projected_diff = my_matchup.points - opponent_matchup.points
    else:
        projected_diff = my_avg - opp_avg

    strategy = LineupStrategy.BALANCED
    risk = "moderate"
    reasoning: List[str] = []

    if situation.competitive_status == CompetitiveStatus.DESPERATE:
        strategy, risk = LineupStrategy.HAIL_MARY, "desperate"
        reasoning.append("Desperate for wins - take maximum risks")
        reasoning.append("Play highest ceiling players regardless of floor")
    elif situation.must_win_weeks:
        strategy, risk = LineupStrategy.HIGH_CEILING, "aggressive"
        reasoning.append("Must-win situation - prioritize upside")
    elif situation.can_afford_loss:
        strategy, risk = LineupStrategy.SAFE_FLOOR, "conservative"
        reasoning.append("Comfortable position - avoid unnecessary risks")

    if opp_avg > my_avg + 15:
        strategy, risk = LineupStrategy.HIGH_CEILING, "aggressive"
        reasoning.append("Facing strong opponent - need big performances")
    elif my_avg > opp_avg + 15:
        strategy = LineupStrategy.SAFE_FLOOR
        reasoning.append("Favored to win - play it safe")

    if projected_diff > 10:
        flow = "blowout"
    elif projected_diff > 5:
        flow = "competitive"
    else:
        flow = "close"

    return WeeklyStrategy(
        lineup_strategy=strategy,
        risk_tolerance=risk,
        target_score=round(opp_avg + 10, 2),
        my_average=round(my_avg, 2),
        opponent=opponent,
        expected_game_flow=flow,
        reasoning=reasoning,
    )


def _has_high_ceiling(player_position: str, years_exp: Optional[int]) -> bool:
    return player_position in ("WR", "RB") and (years_exp or 0) < 5


def _is_consistent(player_position: str, years_exp: Optional[int]) -> bool:
    return player_position in ("QB", "TE") or (years_exp or 0) > 5


def enhance_start_sit_with_context(
    recommendations: Sequence[StartSitRecommendation],
    situation: TeamSituation,
    strategy: WeeklyStrategy,
    roster_players: Sequence[Player],
) -> List[StartSitRecommendation]:
    """Adjust labels to the week's lineup philosophy; inputs are not mutated."""
    players = {p.player_id: p for p in roster_players}
    enhanced = []

    for rec in recommendations:
        player = players.get(rec.player_id)
        years_exp = player.years_exp if player else None
        updates = {"risk_level": "medium", "league_context": list(rec.league_context)}
        recommendation, confidence = rec.recommendation, rec.confidence

        if strategy.lineup_strategy == LineupStrategy.HAIL_MARY and rec.position not in ("K", "DEF"):
            if _has_high_ceiling(rec.position, years_exp) and recommendation == StartSit.SIT:
                recommendation, confidence = StartSit.FLEX_PLAY, confidence + 15
                updates["league_context"].append("Desperate situation - taking ceiling risk")
                updates["risk_level"] = "high"
        elif strategy.lineup_strategy == LineupStrategy.SAFE_FLOOR:
            if _is_consistent(rec.position, years_exp) and recommendation == StartSit.FLEX_PLAY:
                recommendation, confidence = StartSit.STRONG_START, confidence + 10
                updates["league_context"].append("Safe situation - prioritizing floor")
                updates["risk_level"] = "low"

        if situation.tiebreakers == "points":
            updates["league_context"].append("Points matter for tiebreakers - avoid duds")

        alternative = next(
            (
                p.name
                for p in roster_players
                if p.position == rec.position and p.player_id != rec.player_id
            ),
            None,
        )
        updates.update(
            recommendation=recommendation,
            confidence=min(100, max(0, confidence)),
            alternative_if_injured=alternative,
        )
        enhanced.append(rec.model_copy(update=updates))
    return enhanced


def enhance_waiver_targets_with_context(
    targets: Sequence[WaiverTarget],
    situation: TeamSituation,
    league: League,
) -> List[WaiverTarget]:
    """Re-weight waiver targets for where the team is in its season."""
    enhanced = []
    for target in targets:
        immediate, future = 5, 5
        timing = "claim_now"
        faab = target.faab_bid
        reasoning = list(target.reasoning)
        competition = "medium"

        if situation.competitive_status == CompetitiveStatus.DESPERATE:
            if target.impact == WaiverImpact.IMMEDIATE_STARTER:
                immediate, future = 10, 3
                faab += 10
        elif situation.competitive_status == CompetitiveStatus.COMFORTABLE:
            if target.impact == WaiverImpact.FUTURE_VALUE:
                immediate, future = 2, 9
                timing = "speculative_add"

        if situation.playoff_chance < 30:
            immediate += 3
            reasoning.append("Low playoff odds - need immediate impact")
        elif situation.playoff_chance > 80:
            future += 2
            reasoning.append("Strong playoff position - can add depth/upside")

        if league.total_rosters >= DEEP_LEAGUE_SIZE:
            competition = "high"
            faab += 3
            reasoning.append("Deep league - quality additions are rare")

        enhanced.append(
            target.model_copy(
                update={
                    "immediate_need": immediate,
                    "future_value": future,
                    "timing_suggestion": timing,
                    "faab_bid": faab,
                    "reasoning": reasoning,
                    "competition_level": competition,
                }
            )
        )
    return enhanced
