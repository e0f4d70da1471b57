"""
Roster-specific start/sit and waiver recommendations.

Everything here is judged against the user's own depth chart: a player's
label depends on where they sit among teammates at the same position, not
on league-wide rankings.
"""

from dataclasses import dataclass
from statistics import mean, pstdev
from typing import Dict, Iterable, List, Optional, Sequence

from loguru import logger

from ..models import (
    InjuryStatus,
    League,
    Matchup,
    Player,
    PlayerRole,
    PositionContext,
    PositionGroupMember,
    RecentPerformance,
    RoleType,
    RosterComposition,
    StartSit,
    StartSitRecommendation,
    WaiverImpact,
    WaiverPriority,
    WaiverTarget,
)
from ..utils.constants import INSIGHT_POSITIONS, POSITION_ORDER, UNKNOWN_POSITION_ORDER

MAX_FAAB_PERCENT = 30
DEFAULT_AGE = 30
DEFAULT_DEPTH_ORDER = 99

WAIVER_PRIORITY_RANK = {
    WaiverPriority.CRITICAL_NEED: 5,
    WaiverPriority.UPGRADE: 4,
    WaiverPriority.DEPTH: 3,
    WaiverPriority.LOTTERY_TICKET: 2,
    WaiverPriority.IGNORE: 1,
}


@dataclass
class RankedPlayer:
    """A rostered player with their place in the position depth chart."""

    player: Player
    position_rank: int
    role: PlayerRole
    performance: RecentPerformance

    @property
    def starting_probability(self) -> float:
        return self.role.starting_probability


def get_recent_performance(
    player_id: str,
    matchups: Iterable[Matchup],
    fallback: Sequence[float] = (),
) -> RecentPerformance:
    """Floor, ceiling and consistency from weekly ``players_points``.

    ``fallback`` weekly points are used when no matchup mentions the player.
    """
    points = [m.players_points[player_id] for m in matchups if player_id in m.players_points]
    if not points:
        points = list(fallback)
    if not points:
        return RecentPerformance()

    avg = mean(points)
    consistency = max(0.0, 1 - pstdev(points) / avg) if avg > 0 else 0.0
    return RecentPerformance(
        average=round(avg, 2),
        floor=min(points),
        ceiling=max(points),
        consistency=round(consistency, 3),
        weekly=points,
    )


def calculate_upside(performance: RecentPerformance) -> str:
    if performance.ceiling > 20:
        return "high"
    if performance.ceiling > 12:
        return "medium"
    return "low"


def analyze_player_role(player: Player, index: int, group_size: int) -> PlayerRole:
    """Role from depth-chart index; injuries override it."""
    role = RoleType.DEEP_BENCH
    probability = 0.0

    if index == 0:
        role, probability = RoleType.STARTER, 0.9
    elif index == 1 and player.position in ("RB", "WR"):
        role = RoleType.STARTER if group_size <= 3 else RoleType.FLEX_CANDIDATE
        probability = 0.7
    elif index <= 2 and player.position == "RB":
        role, probability = RoleType.FLEX_CANDIDATE, 0.4
    elif index <= 3 and player.position == "WR":
        role, probability = RoleType.FLEX_CANDIDATE, 0.3

    if player.is_unavailable:
        role, probability = RoleType.DEEP_BENCH, 0.0
    elif player.injury_status == InjuryStatus.QUESTIONABLE:
        probability *= 0.7

    return PlayerRole(role=role, starting_probability=round(probability, 3))


def _depth_sort_key(player: Player, performance: RecentPerformance):
    return (-performance.average, player.depth_chart_order or DEFAULT_DEPTH_ORDER, player.name)


def rank_position_groups(
    roster_players: Sequence[Player], matchups: Sequence[Matchup] = ()
) -> Dict[str, List[RankedPlayer]]:
    """Depth chart per position, best option first.

    Players are ordered by recent scoring (then platform depth chart) before
    roles are assigned, then re-sorted by starting probability so injured
    starters drop to the bottom.
    """
    groups: Dict[str, List[RankedPlayer]] = {}
    for position in INSIGHT_POSITIONS:
        members = [p for p in roster_players if p.plays(position)]
        performances = {
            p.player_id: get_recent_performance(p.player_id, matchups, p.weekly_points)
            for p in members
        }
        members.sort(key=lambda p: _depth_sort_key(p, performances[p.player_id]))

        ranked = [
            RankedPlayer(
                player=p,
                position_rank=index + 1,
                role=analyze_player_role(p, index, len(members)),
                performance=performances[p.player_id],
            )
            for index, p in enumerate(members)
        ]
        ranked.sort(key=lambda r: r.starting_probability, reverse=True)
        groups[position] = ranked
    return groups


def _position_strengths(groups: Dict[str, List[RankedPlayer]]) -> Dict[str, float]:
    strengths = {}
    for position, ranked in groups.items():
        size = len(ranked)
        strengths[position] = round(
            sum(r.starting_probability * (size - i) for i, r in enumerate(ranked)), 3
        )
    return strengths


def _bye_week_vulnerabilities(groups: Dict[str, List[RankedPlayer]]) -> Dict[int, List[str]]:
    """Weeks in which every rostered player at a position is on bye."""
    vulnerable: Dict[int, List[str]] = {}
    for position, ranked in groups.items():
        byes = {r.player.bye_week for r in ranked}
        if len(byes) == 1 and None not in byes:
            vulnerable.setdefault(byes.pop(), []).append(position)
    return dict(sorted(vulnerable.items()))


def _experience_level(players: Sequence[Player]) -> str:
    years = [p.years_exp for p in players if p.years_exp is not None]
    avg = mean(years) if years else 0
    if avg < 2:
        return "rookie"
    if avg > 6:
        return "veteran"
    return "mixed"


def _roster_construction(groups: Dict[str, List[RankedPlayer]]) -> str:
    ranked = [r for group in groups.values() for r in group]
    if not ranked:
        return "balanced"
    ratio = sum(1 for r in ranked if r.starting_probability > 0.7) / len(ranked)
    if ratio > 0.4:
        return "top_heavy"
    if ratio < 0.2:
        return "deep"
    return "balanced"


def analyze_roster_composition(
    roster_players: Sequence[Player],
    matchups: Sequence[Matchup] = (),
    groups: Optional[Dict[str, List[RankedPlayer]]] = None,
) -> RosterComposition:
    """Summarize depth, strengths and shape of a roster."""
    groups = groups or rank_position_groups(roster_players, matchups)
    strengths = _position_strengths(groups)
    ordered = sorted(strengths, key=lambda pos: strengths[pos], reverse=True)
    ages = [p.age for p in roster_players if p.age]

    return RosterComposition(
        position_groups={
            pos: [
                PositionGroupMember(
                    player_id=r.player.player_id,
                    name=r.player.name,
                    role=r.role.role,
                    starting_probability=r.starting_probability,
                )
                for r in ranked
            ]
            for pos, ranked in groups.items()
        },
        position_strength=strengths,
        strongest_positions=ordered[:2],
        weakest_positions=ordered[-2:],
        bye_week_vulnerabilities=_bye_week_vulnerabilities(groups),
        average_age=round(mean(ages), 1) if ages else 0.0,
        experience_level=_experience_level(roster_players),
        roster_construction=_roster_construction(groups),
    )


def _recommend(ranked: RankedPlayer, group: List[RankedPlayer]) -> StartSitRecommendation:
    player = ranked.player
    position = player.position
    rank = ranked.position_rank
    reasoning: List[str] = []
    recommendation = StartSit.SIT
    confidence = 50

    if rank == 1 and position == "QB":
        recommendation, confidence = StartSit.MUST_START, 95
        reasoning.append(f"Your #{rank} QB - must start")
    elif rank == 1 and position in ("K", "DEF"):
        recommendation, confidence = StartSit.MUST_START, 90
        reasoning.append(f"Your only viable {position}")
    elif rank <= 2 and position in ("RB", "WR"):
        recommendation = StartSit.STRONG_START
        if rank == 1:
            confidence = 85
            reasoning.append(f"Your #{rank} {position} - top option")
        else:
            confidence = 75
            reasoning.append(f"Your #{rank} {position} - likely starter")
    elif rank <= 3 and position in ("RB", "WR"):
        recommendation, confidence = StartSit.FLEX_PLAY, 60
        reasoning.append(f"Flex consideration - your #{rank} {position}")
    elif position == "TE" and rank == 1:
        recommendation, confidence = StartSit.STRONG_START, 80
        reasoning.append("Your top TE option")

    if player.injury_status == InjuryStatus.QUESTIONABLE:
        confidence -= 15
        reasoning.append("Questionable injury status - monitor closely")
    elif player.injury_status == InjuryStatus.DOUBTFUL:
        recommendation, confidence = StartSit.AVOID, 20
        reasoning.append("Doubtful to play")

    if len(group) <= 1 and recommendation == StartSit.SIT:
        reasoning.append(f"Limited depth at {position} - consider starting")
        confidence += 10

    return StartSitRecommendation(
        player_id=player.player_id,
        player_name=player.name,
        position=position,
        team=player.team,
        recommendation=recommendation,
        confidence=min(100, max(0, confidence)),
        reasoning=reasoning,
        position_context=PositionContext(
            depth=len(group),
            better_options_on_bench=any(
                r.position_rank < rank and r.starting_probability > ranked.starting_probability
                for r in group
            ),
            is_your_best_option=rank == 1,
        ),
        recent_performance=ranked.performance,
        upside=calculate_upside(ranked.performance),
        alternatives=[r.player.name for r in group if r.player.player_id != player.player_id][:2],
    )


def generate_start_sit_recommendations(
    roster_players: Sequence[Player],
    matchups: Sequence[Matchup] = (),
    groups: Optional[Dict[str, List[RankedPlayer]]] = None,
) -> List[StartSitRecommendation]:
    """One recommendation per rostered player at a tracked position.

    Sorted by position (QB, RB, WR, TE, K, DEF) then confidence.
    """
    groups = groups or rank_position_groups(roster_players, matchups)
    recommendations = []
    for player in roster_players:
        group = groups.get(player.position, [])
        ranked = next((r for r in group if r.player.player_id == player.player_id), None)
        if ranked is None:
            continue
        recommendations.append(_recommend(ranked, group))

    recommendations.sort(
        key=lambda r: (POSITION_ORDER.get(r.position, UNKNOWN_POSITION_ORDER), -r.confidence)
    )
    return recommendations


def _has_breakout_potential(player: Player) -> bool:
    return (player.age or 0) < 25 and (player.years_exp or 0) < 3 and player.position in ("RB", "WR")


def _is_upgrade(candidate: Player, current: Player) -> bool:
    """Younger, or higher on an NFL depth chart."""
    if (candidate.age or DEFAULT_AGE) < (current.age or DEFAULT_AGE):
        return True
    return (candidate.depth_chart_order or DEFAULT_DEPTH_ORDER) < (
        current.depth_chart_order or DEFAULT_DEPTH_ORDER
    )


def describe_position_need(position: str, depth: int) -> str:
    if depth == 0:
        return f"No {position} on roster"
    if depth == 1:
        return f"Only 1 {position} - need backup"
    if depth == 2:
        return f"Limited depth at {position}"
    return f"Decent depth at {position}"


def _waiver_priority_label(faab: int) -> str:
    if faab > 15:
        return "use_high"
    if faab > 8:
        return "use_medium"
    if faab > 3:
        return "use_low"
    return "skip"


def evaluate_waiver_target(
    player: Player,
    groups: Dict[str, List[RankedPlayer]],
    weakest_positions: Sequence[str],
) -> WaiverTarget:
    position = player.position
    group = groups.get(position, [])
    depth = len(group)
    priority = WaiverPriority.IGNORE
    impact = WaiverImpact.DEPTH_PIECE
    faab = 0
    reasoning: List[str] = []

    if depth == 0:
        priority, impact, faab = WaiverPriority.CRITICAL_NEED, WaiverImpact.IMMEDIATE_STARTER, 25
        reasoning.append(f"You have NO {position} on roster")
    elif depth == 1 and position in ("RB", "WR"):
        priority, impact, faab = WaiverPriority.CRITICAL_NEED, WaiverImpact.IMMEDIATE_STARTER, 20
        reasoning.append(f"You only have 1 {position} - need depth")
    elif position in weakest_positions and depth <= 2:
        priority, impact, faab = WaiverPriority.UPGRADE, WaiverImpact.FLEX_UPGRADE, 15
        reasoning.append("Weak position for your team - could upgrade")
    elif depth < 3 and position in ("RB", "WR"):
        priority, impact, faab = WaiverPriority.DEPTH, WaiverImpact.DEPTH_PIECE, 8
        reasoning.append(f"Good depth addition at {position}")
    elif _has_breakout_potential(player):
        priority, impact, faab = WaiverPriority.LOTTERY_TICKET, WaiverImpact.FUTURE_VALUE, 5
        reasoning.append("High upside player worth stashing")

    replaces_who = None
    if group and _is_upgrade(player, group[-1].player):
        replaces_who = group[-1].player.name
        reasoning.append(f"Upgrade over {replaces_who}")
        faab += 3

    if priority == WaiverPriority.CRITICAL_NEED:
        need_level = "critical"
    elif priority == WaiverPriority.UPGRADE:
        need_level = "moderate"
    else:
        need_level = "nice_to_have"

    return WaiverTarget(
        player_id=player.player_id,
        player_name=player.name,
        position=position,
        team=player.team,
        priority=priority,
        impact=impact,
        faab_bid=min(MAX_FAAB_PERCENT, faab),
        waiver_priority=_waiver_priority_label(faab),
        need_level=need_level,
        current_gap=describe_position_need(position, depth),
        reasoning=reasoning,
        replaces_who=replaces_who,
    )


def generate_waiver_targets(
    roster_players: Sequence[Player],
    available_players: Iterable[Player],
    matchups: Sequence[Matchup] = (),
    league: Optional[League] = None,
) -> List[WaiverTarget]:
    """Free agents that fill this roster's gaps, most urgent first."""
    groups = rank_position_groups(roster_players, matchups)
    composition = analyze_roster_composition(roster_players, matchups, groups=groups)

    targets = []
    for player in available_players:
        if player.position not in INSIGHT_POSITIONS:
            continue
        target = evaluate_waiver_target(player, groups, composition.weakest_positions)
        if target.priority != WaiverPriority.IGNORE:
            targets.append(target)

    targets.sort(key=lambda t: (-WAIVER_PRIORITY_RANK[t.priority], -t.faab_bid))
    logger.debug(
        f"Generated {len(targets)} waiver targets"
        + (f" for league {league.league_id}" if league else "")
    )
    return targets
