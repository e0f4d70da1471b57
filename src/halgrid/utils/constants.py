"""
Fantasy football constants: positions, platform id maps, and heuristic thresholds.
"""

from typing import Dict, List

# Positions the roster heuristics consider, in display order
INSIGHT_POSITIONS: List[str] = ["QB", "RB", "WR", "TE", "K", "DEF"]
POSITION_ORDER: Dict[str, int] = {pos: i + 1 for i, pos in enumerate(INSIGHT_POSITIONS)}
UNKNOWN_POSITION_ORDER = 7

SKILL_POSITIONS = ["QB", "RB", "WR", "TE"]
FLEX_POSITIONS = ["RB", "WR", "TE"]
SUPER_FLEX_POSITIONS = ["QB", "RB", "WR", "TE"]

IDP_POSITIONS = ["LB", "DB", "DL", "DE", "DT", "CB", "S", "OLB", "ILB"]
IDP_SCORING_KEYS = ["idp_tackle", "idp_assist", "idp_sack", "idp_int", "idp_fum_rec"]

# Slots that never hold an active starter
NON_STARTING_SLOTS = {"BN", "BENCH", "IR", "TAXI"}

# Recommended roster counts used by waiver need analysis
RECOMMENDED_POSITION_COUNTS: Dict[str, int] = {
    "QB": 2,
    "RB": 5,
    "WR": 5,
    "TE": 2,
    "K": 1,
    "DEF": 1,
}

# Approximate fantasy-relevant pool per position
POSITION_POOL_SIZES: Dict[str, int] = {
    "QB": 32,
    "RB": 60,
    "WR": 90,
    "TE": 32,
    "K": 32,
    "DEF": 32,
}
DEFAULT_POOL_SIZE = 30

REGULAR_SEASON_WEEKS = 17
MAX_NFL_WEEK = 18

# ESPN lineup slot ids
ESPN_SLOT_MAP: Dict[int, str] = {
    0: "QB",
    2: "RB",
    4: "WR",
    6: "TE",
    16: "DEF",
    17: "K",
    20: "BENCH",
    21: "IR",
    23: "FLEX",
}

# ESPN default position ids
ESPN_POSITION_MAP: Dict[int, str] = {
    1: "QB",
    2: "RB",
    3: "WR",
    4: "TE",
    5: "K",
    16: "DEF",
}

# ESPN pro team ids
ESPN_PRO_TEAM_MAP: Dict[int, str] = {
    1: "ATL",
    2: "BUF",
    3: "CHI",
    4: "CIN",
    5: "CLE",
    6: "DAL",
    7: "DEN",
    8: "DET",
    9: "GB",
    10: "TEN",
    11: "IND",
    12: "KC",
    13: "LV",
    14: "LAR",
    15: "MIA",
    16: "MIN",
    17: "NE",
    18: "NO",
    19: "NYG",
    20: "NYJ",
    21: "PHI",
    22: "ARI",
    23: "PIT",
    24: "LAC",
    25: "SF",
    26: "SEA",
    27: "TB",
    28: "WAS",
    29: "CAR",
    30: "JAX",
    33: "BAL",
    34: "HOU",
}
FREE_AGENT_TEAM = "FA"

# Alternate abbreviations seen across platforms
TEAM_ALIASES: Dict[str, str] = {
    "WSH": "WAS",
    "JAC": "JAX",
    "LA": "LAR",
    "OAK": "LV",
    "SD": "LAC",
}


def normalize_team(team: str) -> str:
    """Return the canonical NFL team abbreviation."""
    upper = (team or "").upper()
    return TEAM_ALIASES.get(upper, upper)
