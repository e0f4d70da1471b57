"""Roster import from CSV exports.

Expected columns: ``leagueId,teamId,displayName,position,team``.
"""

import csv
import io
from typing import Dict, List, Tuple

from loguru import logger

from ..models import Player

REQUIRED_COLUMNS = {"leagueId", "teamId", "displayName", "position", "team"}


def parse_roster_csv(csv_text: str, platform: str) -> List[Dict]:
    """Group CSV rows into one roster per league/team pair.

    Raises:
        ValueError: If a required column is missing.
    """
    reader = csv.DictReader(io.StringIO(csv_text.strip()))
    missing = REQUIRED_COLUMNS - set(reader.fieldnames or [])
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(sorted(missing))}")

    rosters: Dict[Tuple[str, str], Dict] = {}
    for row_number, row in enumerate(reader, start=1):
        if not any((value or "").strip() for value in row.values()):
            continue
        key = (row["leagueId"].strip(), row["teamId"].strip())
        roster = rosters.setdefault(
            key,
            {"platform": platform, "league_id": key[0], "team_id": key[1], "players": []},
        )
        name = row["displayName"].strip()
        roster["players"].append(
            Player(
                player_id=f"{platform}_{key[0]}_{key[1]}_{row_number}",
                name=name,
                position=row["position"],
                team=row["team"].strip() or None,
                platform=platform,
            )
        )

    logger.info(f"Parsed {len(rosters)} rosters from CSV for {platform}")
    return list(rosters.values())
