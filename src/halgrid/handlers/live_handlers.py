"""Live scoring handlers for Sleeper and ESPN leagues."""

from typing import List

from loguru import logger

from halgrid.api.errors import CredentialsError, PlatformAPIError
from halgrid.models import Matchup
from halgrid.parsers import espn_parsers, sleeper_parsers
from halgrid.services.live_scores import (
    MATCHUP_SCORE_UPDATE,
    PLAYER_SCORE_UPDATE,
    LiveScoreHub,
    pair_matchups,
)

from .team_context import current_week

# Injected from the server module
platform_manager = None
sleeper_client = None

MAX_WATCH_POLLS = 20
DEFAULT_WATCH_POLLS = 3
MIN_POLL_INTERVAL = 5.0


async def fetch_live_matchups(platform: str, league_id: str, week: int) -> List[Matchup]:
    """Uncached matchup entries for ``week``.

    Raises:
        CredentialsError: ESPN requested without connected cookies
        PlatformAPIError: ESPN rejected the request
    """
    if platform == "espn":
        client = platform_manager.create_espn_client()
        schedule = await client.get_matchups(league_id, week, use_cache=False)
        return espn_parsers.parse_matchups(schedule)
    raw = await sleeper_client.get_matchups(league_id, week, use_cache=False)
    return sleeper_parsers.parse_matchups(raw, week)


def _target(arguments: dict):
    platform = (arguments.get("platform") or "sleeper").lower()
    league_id = arguments.get("league_id")
    if not league_id and arguments.get("team_id"):
        team = platform_manager.get_team(arguments["team_id"])
        if team is not None:
            platform, league_id = team.platform.value, team.league_id
    return platform, league_id


async def handle_ff_get_live_scores(arguments: dict) -> dict:
    """Head-to-head scores with win probabilities.

    Args:
        arguments: Dict containing:
            - league_id: League id (or team_id of an imported team)
            - platform: "sleeper" (default) or "espn"
            - week: Scoring week (optional, defaults to the current NFL week)
    """
    platform, league_id = _target(arguments)
    if not league_id:
        return {"error": "league_id or team_id is required"}
    if platform not in ("sleeper", "espn"):
        return {"status": "error", "message": f"Live scores are not available for {platform}"}

    week = await current_week(sleeper_client, arguments)
    try:
        entries = await fetch_live_matchups(platform, league_id, week)
    except (CredentialsError, PlatformAPIError) as e:
        return {"status": "error", "message": str(e)}

    scores = pair_matchups(entries)
    return {
        "status": "success",
        "platform": platform,
        "league_id": league_id,
        "week": week,
        "matchups": [s.model_dump(mode="json") for s in scores],
    }


async def handle_ff_watch_live_scores(arguments: dict) -> dict:
    """Poll a league a few times and return every score change seen.

    Args:
        arguments: Dict containing:
            - league_id / team_id / platform / week: As for live scores
            - polls: Number of fetches (default 3, at most 20)
            - interval_seconds: Pause between fetches (default 30, at least 5)
    """
    platform, league_id = _target(arguments)
    if not league_id:
        return {"error": "league_id or team_id is required"}
    if platform not in ("sleeper", "espn"):
        return {"status": "error", "message": f"Live scores are not available for {platform}"}

    try:
        polls = max(1, min(int(arguments.get("polls", DEFAULT_WATCH_POLLS)), MAX_WATCH_POLLS))
        interval = max(MIN_POLL_INTERVAL, float(arguments.get("interval_seconds", 30)))
    except (TypeError, ValueError):
        return {"error": "polls and interval_seconds must be numbers"}
    week = await current_week(sleeper_client, arguments)

    player_updates = []
    matchup_updates = []
    hub = LiveScoreHub()
    hub.on(PLAYER_SCORE_UPDATE, player_updates.append)
    hub.on(MATCHUP_SCORE_UPDATE, matchup_updates.append)

    try:
        await hub.poll(
            lambda: fetch_live_matchups(platform, league_id, week),
            interval_seconds=interval,
            max_polls=polls,
        )
    except (CredentialsError, PlatformAPIError) as e:
        return {"status": "error", "message": str(e)}
    logger.info(f"Watched {platform} league {league_id}: {len(player_updates)} player updates over {polls} polls")

    latest = {}
    for score in matchup_updates:
        latest[score.matchup_id] = score
    return {
        "status": "success",
        "platform": platform,
        "league_id": league_id,
        "week": week,
        "polls": polls,
        "player_updates": [u.model_dump(mode="json") for u in player_updates],
        "matchups": [s.model_dump(mode="json") for s in latest.values()],
    }
