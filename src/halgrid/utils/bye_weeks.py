"""
Utility module for loading and managing NFL bye week data.

Provides static bye week data as a fallback when platform payloads omit it.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from loguru import logger

from .constants import normalize_team

# Cache for loaded bye week data to avoid repeated file reads
_BYE_WEEK_CACHE: Optional[Dict[str, int]] = None

DATA_FILE = Path(__file__).parent.parent / "data" / "bye_weeks_2025.json"


def load_static_bye_weeks() -> Dict[str, int]:
    """
    Load static bye week data from the packaged JSON file.

    Returns:
        Dictionary mapping team abbreviations to bye week numbers.
        Returns empty dict if file cannot be loaded.
    """
    global _BYE_WEEK_CACHE

    if _BYE_WEEK_CACHE is not None:
        return _BYE_WEEK_CACHE

    try:
        with open(DATA_FILE, "r") as f:
            bye_weeks = json.load(f)
    except FileNotFoundError:
        logger.error("Static bye week data file not found")
        return {}
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing static bye week data: {e}")
        return {}

    if not isinstance(bye_weeks, dict):
        logger.error("Static bye week data is not a dictionary")
        return {}

    valid = {}
    for team, week in bye_weeks.items():
        if isinstance(week, int) and 1 <= week <= 18:
            valid[team] = week
        else:
            logger.warning(f"Invalid bye week {week} for team {team} in static data")

    _BYE_WEEK_CACHE = valid
    logger.info(f"Loaded static bye week data for {len(valid)} teams")
    return valid


def get_bye_week_with_fallback(
    team_abbr: Optional[str], api_bye_week: Optional[int] = None
) -> Optional[int]:
    """
    Get bye week for a team, preferring a valid platform value.

    Args:
        team_abbr: Team abbreviation (e.g., "KC", "SF", "WSH")
        api_bye_week: Bye week reported by the platform, if any

    Returns:
        Bye week number (1-18) or None if not found.
    """
    if isinstance(api_bye_week, int) and 1 <= api_bye_week <= 18:
        return api_bye_week

    if not team_abbr:
        return None

    bye_week = load_static_bye_weeks().get(normalize_team(team_abbr))
    if bye_week is None:
        logger.debug(f"No bye week data found for team {team_abbr}")
    return bye_week


def teams_on_bye(week: int, teams: Iterable[str]) -> List[str]:
    """Return the subset of ``teams`` whose bye falls in ``week``."""
    return [team for team in teams if get_bye_week_with_fallback(team) == week]


def clear_cache():
    """Clear the cached bye week data. Useful for testing or forcing a reload."""
    global _BYE_WEEK_CACHE
    _BYE_WEEK_CACHE = None
    logger.debug("Bye week cache cleared")
