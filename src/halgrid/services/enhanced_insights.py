"""
Detailed per-player insights.

Every insight is derived from the player's weekly points and a
``MatchupContext`` describing the week's game (opponent, defense rank against
the position, Vegas spread and total, home/away). No value is invented: a
missing context falls back to a neutral, league-average matchup.
"""

from statistics import mean, pstdev
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from ..models import InjuryStatus, Player, StartSit

NEUTRAL_DEFENSE_RANK = 16
NEUTRAL_GAME_TOTAL = 45.0
FORM_WINDOW = 4
WAIVER_POSITIONS = ("QB", "RB", "WR", "TE")
MAX_WAIVER_CANDIDATES = 20


class MatchupContext(BaseModel):
    """The week's game from one player's side."""

    opponent: str = "TBD"
    defense_rank: int = Field(NEUTRAL_DEFENSE_RANK, ge=1, le=32)
    spread: float = 0.0
    total: float = NEUTRAL_GAME_TOTAL
    is_home: bool = False
    poor_weather: bool = False


class RecentForm(BaseModel):
    games: List[float] = Field(default_factory=list)
    average: float = 0.0
    trend: str = "declining"
    consistency: float = 0.0


class RiskProfile(BaseModel):
    floor: float
    ceiling: float
    most_likely: float
    bust_chance: int
    boom_chance: int
    volatility: str


class KeyFactors(BaseModel):
    matchup_grade: str
    volume_expectation: str
    injury_risk: str
    game_script: str
    recent_form: str


class InsightPositionContext(BaseModel):
    depth_at_position: int
    rank_on_team: int
    alternatives: List[str] = Field(default_factory=list)
    must_start_by_necessity: bool = False
    luxury_play: bool = False


class EnhancedInsight(BaseModel):
    """Start/sit call with the matchup, form and risk picture behind it."""

    player_id: str
    player_name: str
    position: str
    recommendation: StartSit
    confidence: int = Field(..., ge=0, le=100)
    reasoning: List[str] = Field(default_factory=list)
    key_factors: KeyFactors
    primary_reason: str
    supporting_factors: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    key_statistic: str
    matchup: MatchupContext
    defense_vs_position: str
    expected_volume: Dict[str, object] = Field(default_factory=dict)
    risk_profile: RiskProfile
    position_context: InsightPositionContext


class EnhancedWaiverInsight(BaseModel):
    player_id: str
    player_name: str
    position: str
    priority: str
    faab_percent: int
    max_bid: int
    bid_reasoning: str
    competition_level: str
    would_start: bool
    upgrades_over: Optional[str] = None
    recent_average: float = 0.0
    trend: str = "stable"


# --------------------------------------------------------------------------
# Building blocks
# --------------------------------------------------------------------------

def analyze_recent_form(player: Player) -> RecentForm:
    """Average, trend and consistency over the last four scored weeks."""
    games = [float(p) for p in player.weekly_points[-FORM_WINDOW:]]
    if not games:
        return RecentForm()
    avg = mean(games)
    consistency = max(0.0, 1 - pstdev(games) / avg) if avg > 0 else 0.0
    trend = "improving" if games[-1] > games[0] else "declining"
    return RecentForm(
        games=games,
        average=round(avg, 2),
        trend=trend,
        consistency=round(consistency, 3),
    )


def analyze_game_script(matchup: MatchupContext) -> str:
    spread, total = matchup.spread, matchup.total
    if spread > 3 and total > 50:
        return "very_positive"
    if spread > 0 and total > 47:
        return "positive"
    if abs(spread) <= 3:
        return "neutral"
    if spread < -3 and total < 45:
        return "negative"
    return "very_negative"


def grade_matchup(defense_rank: int) -> str:
    """Letter grade for a defense rank (1 = most generous to the position)."""
    for limit, grade in ((3, "A+"), (8, "A"), (12, "B+"), (18, "B"), (22, "C+"), (26, "C"), (30, "D+")):
        if defense_rank <= limit:
            return grade
    return "D"


def calculate_risk_profile(matchup: MatchupContext, form: RecentForm) -> RiskProfile:
    if matchup.defense_rank <= 10:
        multiplier = 1.2
    elif matchup.defense_rank >= 25:
        multiplier = 0.8
    else:
        multiplier = 1.0

    if form.consistency > 0.8:
        volatility = "Low"
    elif form.consistency > 0.6:
        volatility = "Moderate"
    else:
        volatility = "High"

    return RiskProfile(
        floor=round(max(0.0, form.average * 0.6 * multiplier), 2),
        ceiling=round(form.average * 1.4 * multiplier, 2),
        most_likely=round(form.average * multiplier, 2),
        bust_chance=25 if matchup.defense_rank >= 25 else 15,
        boom_chance=35 if matchup.defense_rank <= 10 else 20,
        volatility=volatility,
    )


def project_volume(position: str, game_script: str) -> str:
    volume = {"QB": "High", "RB": "Above Average", "WR": "Average", "TE": "Below Average"}.get(
        position, "Low"
    )
    if game_script == "very_positive" and position in ("RB", "WR"):
        volume = "High"
    elif game_script == "negative" and position == "RB":
        volume = "Below Average"
    return volume


def assess_injury_risk(player: Player) -> str:
    status = player.injury_status
    if status is None or status == InjuryStatus.HEALTHY:
        return "None"
    if status == InjuryStatus.QUESTIONABLE:
        return "Questionable"
    if status in (InjuryStatus.DOUBTFUL, InjuryStatus.OUT, InjuryStatus.IR):
        return "High"
    return "Moderate"


def _format_recent_form(avg: float) -> str:
    if avg > 18:
        return "Excellent"
    if avg > 14:
        return "Good"
    if avg > 10:
        return "Average"
    if avg > 6:
        return "Poor"
    return "Terrible"


def _expected_usage(position: str, game_script: str, form: RecentForm) -> Dict[str, object]:
    usage: Dict[str, object] = {
        "red_zone_opportunities": 3 if game_script in ("very_positive", "positive") else 1,
        "goal_line_role": "Secondary",
    }
    if position == "RB":
        usage["expected_touches"] = 15 + min(10, int(form.average // 2))
        usage["goal_line_role"] = "Primary"
    elif position == "WR":
        usage["expected_targets"] = 6 + min(8, int(form.average // 3))
    return usage


def _position_players(player: Player, roster_players: Sequence[Player]) -> List[Player]:
    return [p for p in roster_players if p.position == player.position]


def analyze_position_context(player: Player, roster_players: Sequence[Player]) -> InsightPositionContext:
    group = _position_players(player, roster_players)
    rank = next((i + 1 for i, p in enumerate(group) if p.player_id == player.player_id), 0)
    return InsightPositionContext(
        depth_at_position=len(group),
        rank_on_team=rank,
        alternatives=[p.name for p in group if p.player_id != player.player_id],
        must_start_by_necessity=len(group) <= 2,
        luxury_play=len(group) >= 4 and rank >= 3,
    )


def determine_recommendation(
    player: Player,
    matchup: MatchupContext,
    form: RecentForm,
    roster_players: Sequence[Player],
) -> StartSit:
    if player.is_unavailable:
        return StartSit.AVOID
    top_option = len(_position_players(player, roster_players)) <= 2
    good_matchup = matchup.defense_rank <= 15
    good_form = form.average > 10

    if top_option and good_matchup and good_form:
        return StartSit.MUST_START
    if (top_option and good_matchup) or (good_matchup and good_form):
        return StartSit.STRONG_START
    if good_matchup or good_form or top_option:
        return StartSit.FLEX_PLAY
    return StartSit.SIT


def calculate_confidence(recommendation: StartSit, matchup: MatchupContext, form: RecentForm) -> int:
    base = {StartSit.MUST_START: 90, StartSit.STRONG_START: 80}.get(recommendation, 70)
    if matchup.defense_rank <= 10:
        base += 10
    if form.average > 15:
        base += 10
    return min(100, base)


def _reasoning(
    player: Player,
    recommendation: StartSit,
    matchup: MatchupContext,
    form: RecentForm,
    game_script: str,
) -> List[str]:
    name, pos = player.name, player.position
    reasons = {
        StartSit.MUST_START: f"MUST START: {name} is your best option at {pos} with an elite matchup and strong recent form",
        StartSit.STRONG_START: f"STRONG START: {name} offers excellent upside with favorable conditions aligning",
        StartSit.FLEX_PLAY: f"FLEX CONSIDERATION: {name} has merit but requires careful consideration against alternatives",
        StartSit.AVOID: f"AVOID: {name} is listed {player.injury_status.value if player.injury_status else 'inactive'}",
    }
    reasoning = [reasons.get(recommendation, f"BENCH RECOMMENDATION: {name} faces challenging conditions this week")]

    rank = matchup.defense_rank
    if rank <= 5:
        reasoning.append(f"ELITE MATCHUP: Facing #{rank} defense - historically allows big games to {pos}s")
    elif rank <= 15:
        reasoning.append(f"GOOD MATCHUP: #{rank} ranked defense provides above-average opportunity")
    elif rank >= 25:
        reasoning.append(f"TOUGH MATCHUP: #{rank} defense is stingy against {pos}s")

    if game_script == "very_positive":
        reasoning.append("GAME SCRIPT GOLD: Expected blowout win means maximum touches and red zone opportunities")
    elif game_script == "positive":
        reasoning.append("POSITIVE SCRIPT: Likely game flow should increase usage and scoring chances")
    elif game_script == "negative":
        reasoning.append("NEGATIVE SCRIPT: Game flow may limit opportunities and touch volume")

    if form.average > 15:
        reasoning.append(
            f"HOT STREAK: Averaging {form.average:.1f} points over last {len(form.games)} games with {form.trend} trend"
        )
    elif form.average > 10:
        reasoning.append(f"SOLID FORM: Consistent {form.average:.1f} point average shows reliable floor")
    else:
        reasoning.append(f"COLD STRETCH: Averaging only {form.average:.1f} points - needs bounce-back performance")

    if matchup.is_home:
        reasoning.append(f"HOME ADVANTAGE: Playing at home where {name} historically performs better")
    if matchup.total > 50:
        reasoning.append(
            f"HIGH-SCORING ENVIRONMENT: Over/under of {matchup.total:.1f} suggests plenty of offensive opportunities"
        )
    return reasoning


def _defense_vs_position(rank: int, position: str) -> str:
    if rank <= 10:
        return f"Top-10 matchup vs {position}s - defense allows frequent big games"
    if rank >= 25:
        return f"Bottom-10 matchup vs {position}s - defense allows few big games"
    return f"Middle-tier defense vs {position}s - average matchup"


# --------------------------------------------------------------------------
# Public operations
# --------------------------------------------------------------------------

def generate_player_insights(
    player: Player,
    roster_players: Sequence[Player],
    matchup: Optional[MatchupContext] = None,
) -> EnhancedInsight:
    """Full insight for one rostered player."""
    matchup = matchup or MatchupContext()
    form = analyze_recent_form(player)
    script = analyze_game_script(matchup)
    recommendation = determine_recommendation(player, matchup, form, roster_players)

    supporting = []
    if matchup.defense_rank <= 15:
        supporting.append("Favorable defensive matchup")
    if matchup.is_home:
        supporting.append("Home field advantage")
    if form.trend == "improving":
        supporting.append("Improving recent performance")
    if matchup.total > 50:
        supporting.append("High-scoring game environment")

    concerns = []
    if matchup.defense_rank >= 25:
        concerns.append("Tough defensive matchup")
    if matchup.poor_weather:
        concerns.append("Poor weather conditions")
    if matchup.total < 45:
        concerns.append("Low-scoring game script")
    if player.injury_status is not None:
        concerns.append(f"Injury status: {player.injury_status.value}")

    if recommendation == StartSit.MUST_START:
        primary = f"Top option at {player.position} with excellent matchup"
    elif recommendation == StartSit.STRONG_START:
        primary = "Strong play with favorable conditions"
    else:
        primary = "Solid contributor when lineup spots available"

    return EnhancedInsight(
        player_id=player.player_id,
        player_name=player.name,
        position=player.position,
        recommendation=recommendation,
        confidence=calculate_confidence(recommendation, matchup, form),
        reasoning=_reasoning(player, recommendation, matchup, form, script),
        key_factors=KeyFactors(
            matchup_grade=grade_matchup(matchup.defense_rank),
            volume_expectation=project_volume(player.position, script),
            injury_risk=assess_injury_risk(player),
            game_script=script.replace("_", " ").title(),
            recent_form=_format_recent_form(form.average),
        ),
        primary_reason=primary,
        supporting_factors=supporting,
        concerns=concerns,
        key_statistic=f"{form.average:.1f} PPG over last {len(form.games)} games",
        matchup=matchup,
        defense_vs_position=_defense_vs_position(matchup.defense_rank, player.position),
        expected_volume=_expected_usage(player.position, script, form),
        risk_profile=calculate_risk_profile(matchup, form),
        position_context=analyze_position_context(player, roster_players),
    )


def _insights_for(
    players: Sequence[Player],
    roster_players: Sequence[Player],
    matchups: Mapping[str, MatchupContext],
) -> List[EnhancedInsight]:
    return [generate_player_insights(p, roster_players, matchups.get(p.player_id)) for p in players]


def get_must_start_insights(
    roster_players: Sequence[Player],
    starters: Sequence[str],
    matchups: Optional[Mapping[str, MatchupContext]] = None,
) -> List[EnhancedInsight]:
    """Starters labelled must/strong start, strongest first."""
    starter_ids = set(starters)
    in_lineup = [p for p in roster_players if p.player_id in starter_ids]
    insights = [
        i
        for i in _insights_for(in_lineup, roster_players, matchups or {})
        if i.recommendation in (StartSit.MUST_START, StartSit.STRONG_START)
    ]
    order = {StartSit.MUST_START: 0, StartSit.STRONG_START: 1}
    return sorted(insights, key=lambda i: (order[i.recommendation], -i.confidence))


def get_key_decisions(
    roster_players: Sequence[Player],
    matchups: Optional[Mapping[str, MatchupContext]] = None,
) -> List[EnhancedInsight]:
    """Players whose lineup spot is a real decision this week."""
    decisions = {StartSit.STRONG_START, StartSit.FLEX_PLAY, StartSit.SIT}
    insights = [
        i for i in _insights_for(roster_players, roster_players, matchups or {}) if i.recommendation in decisions
    ]
    return sorted(insights, key=lambda i: -i.confidence)


def _waiver_insight(player: Player, roster_players: Sequence[Player]) -> EnhancedWaiverInsight:
    form = analyze_recent_form(player)
    group = sorted(
        _position_players(player, roster_players),
        key=lambda p: p.season_average,
        reverse=True,
    )
    weakest = group[-1] if group else None
    starter_bar = group[0].season_average if group else 0.0

    if not group:
        priority, pct, competition = "critical_need", 25, "High"
        reasoning = f"No rostered {player.position} - fills an empty position"
    elif form.average > starter_bar:
        priority, pct, competition = "significant_upgrade", 20, "High"
        reasoning = f"Outscoring your best {player.position} over recent weeks"
    elif weakest is not None and form.average > weakest.season_average:
        priority, pct, competition = "depth_add", 10, "Moderate"
        reasoning = "Solid depth piece with upside"
    elif form.trend == "improving" and form.average > 0:
        priority, pct, competition = "lottery_ticket", 3, "Low"
        reasoning = "Trending up - cheap stash"
    else:
        priority, pct, competition = "ignore", 0, "None"
        reasoning = "No edge over current roster"

    return EnhancedWaiverInsight(
        player_id=player.player_id,
        player_name=player.name,
        position=player.position,
        priority=priority,
        faab_percent=pct,
        max_bid=round(pct * 1.5),
        bid_reasoning=reasoning,
        competition_level=competition,
        would_start=not group or form.average > starter_bar,
        upgrades_over=weakest.name if weakest and priority != "ignore" else None,
        recent_average=form.average,
        trend="rising" if form.trend == "improving" else "declining",
    )


_WAIVER_ORDER = {"critical_need": 0, "significant_upgrade": 1, "depth_add": 2, "lottery_ticket": 3}


def generate_enhanced_waiver_targets(
    available_players: Sequence[Player],
    roster_players: Sequence[Player],
) -> List[EnhancedWaiverInsight]:
    """Skill-position free agents worth claiming, most urgent first."""
    candidates = [p for p in available_players if p.position in WAIVER_POSITIONS][:MAX_WAIVER_CANDIDATES]
    targets = [t for t in (_waiver_insight(p, roster_players) for p in candidates) if t.priority != "ignore"]
    logger.debug(f"{len(targets)} of {len(candidates)} waiver candidates are worth a claim")
    return sorted(targets, key=lambda t: (_WAIVER_ORDER[t.priority], -t.recent_average))
