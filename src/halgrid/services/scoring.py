"""
League-specific scoring.

Scores a stat line against a league's per-stat point values and summarizes
how a league scores (PPR / Half-PPR / Standard, with or without IDP).
"""

from typing import Dict, List, Mapping, Tuple

from pydantic import BaseModel, Field

from ..models import League
from ..utils.constants import IDP_POSITIONS, IDP_SCORING_KEYS

# (stat key, category, label); yardage stats are flagged for 2-decimal output
_OFFENSE_RULES: List[Tuple[str, str, str]] = [
    ("pass_yd", "Passing", "yards"),
    ("pass_td", "Passing", "TD"),
    ("pass_int", "Passing", "INT"),
    ("rush_yd", "Rushing", "yards"),
    ("rush_td", "Rushing", "TD"),
    ("rec", "Receiving", "receptions"),
    ("rec_yd", "Receiving", "yards"),
    ("rec_td", "Receiving", "TD"),
    ("fum_lost", "Fumbles", "fumbles lost"),
]

_FIELD_GOAL_KEYS = ["fgm_0_19", "fgm_20_29", "fgm_30_39", "fgm_40_49", "fgm_50p"]

_IDP_RULES: List[Tuple[str, str]] = [
    ("idp_tackle", "tackles"),
    ("idp_assist", "assists"),
    ("idp_sack", "sacks"),
    ("idp_int", "interceptions"),
    ("idp_fum_rec", "fumble recoveries"),
    ("idp_def_td", "defensive TD"),
]

# Positions scored with IDP rules
IDP_SCORED_POSITIONS = {"LB", "DB", "DL"}


class ScoreLine(BaseModel):
    category: str
    points: float
    description: str


class CalculatedScore(BaseModel):
    total: float = 0.0
    breakdown: List[ScoreLine] = Field(default_factory=list)


def _fmt(value: float) -> str:
    return f"{value:g}"


def calculate_player_score(
    stats: Mapping[str, float],
    scoring_settings: Mapping[str, float],
    position: str,
) -> CalculatedScore:
    """Fantasy points for a stat line under a league's scoring settings.

    A stat counts only when both the stat and its point value are non-zero.
    Kicking rules apply to kickers only and IDP rules to LB/DB/DL only.
    """
    breakdown: List[ScoreLine] = []

    def add(key: str, category: str, label: str) -> None:
        stat = stats.get(key) or 0
        setting = scoring_settings.get(key) or 0
        if not stat or not setting:
            return
        points = stat * setting
        shown = f"{points:.2f}" if label == "yards" else _fmt(points)
        breakdown.append(
            ScoreLine(
                category=category,
                points=points,
                description=f"{_fmt(stat)} {label} × {_fmt(setting)} = {shown}",
            )
        )

    for key, category, label in _OFFENSE_RULES:
        add(key, category, label)

    if position == "K":
        add("xp", "Kicking", "XP")
        for key in _FIELD_GOAL_KEYS:
            distance = key.replace("fgm_", "").replace("_", "-")
            add(key, "Kicking", f"FG ({distance})")

    if position in IDP_SCORED_POSITIONS:
        for key, label in _IDP_RULES:
            add(key, "Defense", label)

    total = sum(line.points for line in breakdown)
    return CalculatedScore(total=round(total, 2), breakdown=breakdown)


def get_scoring_type(scoring_settings: Mapping[str, float]) -> str:
    """``PPR``, ``Half-PPR`` or ``Standard`` from the reception value."""
    ppr = scoring_settings.get("rec") or 0
    if ppr >= 1:
        return "PPR"
    if ppr > 0:
        return "Half-PPR"
    return "Standard"


def is_idp_league(scoring_settings: Mapping[str, float], roster_positions: List[str]) -> bool:
    """True when the league rosters or scores individual defensive players."""
    if any(pos in IDP_POSITIONS for pos in roster_positions):
        return True
    return any(scoring_settings.get(key) for key in IDP_SCORING_KEYS)


def get_league_scoring_info(league: League) -> Dict:
    settings = league.scoring_settings
    scoring_type = get_scoring_type(settings)
    idp = is_idp_league(settings, league.roster_positions)

    key_rules: List[str] = []
    if settings.get("rec"):
        key_rules.append(f"{_fmt(settings['rec'])} pt per reception")
    if settings.get("pass_yd"):
        key_rules.append(f"{_fmt(settings['pass_yd'])} pts per passing yard")
    if settings.get("rush_yd"):
        key_rules.append(f"{_fmt(settings['rush_yd'])} pts per rushing yard")
    if settings.get("rec_yd"):
        key_rules.append(f"{_fmt(settings['rec_yd'])} pts per receiving yard")
    if idp:
        if settings.get("idp_tackle"):
            key_rules.append(f"{_fmt(settings['idp_tackle'])} pts per tackle")
        if settings.get("idp_sack"):
            key_rules.append(f"{_fmt(settings['idp_sack'])} pts per sack")

    return {
        "type": scoring_type + (" + IDP" if idp else ""),
        "is_idp": idp,
        "key_rules": key_rules,
        "roster_positions": list(league.roster_positions),
    }


def calculate_projected_points(
    projected_stats: Mapping[str, float],
    scoring_settings: Mapping[str, float],
    position: str,
) -> float:
    return calculate_player_score(projected_stats, scoring_settings, position).total


def compare_league_scoring(
    stats: Mapping[str, float],
    position: str,
    league_a: League,
    league_b: League,
    tolerance: float = 0.5,
) -> Dict:
    """Score the same stat line in two leagues and explain the gap."""
    score_a = calculate_player_score(stats, league_a.scoring_settings, position).total
    score_b = calculate_player_score(stats, league_b.scoring_settings, position).total
    difference = round(score_a - score_b, 2)

    if abs(difference) < tolerance:
        explanation = "Similar scoring in both leagues"
    elif difference > 0:
        explanation = f"Higher scoring in {league_a.name} due to different settings"
    else:
        explanation = f"Higher scoring in {league_b.name} due to different settings"

    return {
        "league_a_score": score_a,
        "league_b_score": score_b,
        "difference": difference,
        "explanation": explanation,
    }
