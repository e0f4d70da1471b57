"""Platform connection, team import and CSV import handlers."""

from typing import Any, Dict

from loguru import logger

from halgrid.api.errors import CredentialsError, UnsupportedPlatformError
from halgrid.models import Team

# Injected from the server module
platform_manager = None

CREDENTIAL_KEYS = ("username", "access_token", "refresh_token", "espn_s2", "swid", "league_ids", "season")


def team_summary(team: Team) -> Dict[str, Any]:
    return {
        "id": team.id,
        "platform": team.platform.value,
        "league_id": team.league_id,
        "league_name": team.league_name,
        "team_name": team.team_name,
        "owner": team.owner,
        "record": f"{team.record.wins}-{team.record.losses}-{team.record.ties}",
        "points_for": team.record.points_for,
        "player_count": len(team.players),
        "last_sync": team.last_sync.isoformat(),
    }


def _sync_status() -> Dict[str, Any]:
    return {name: status.model_dump(mode="json") for name, status in platform_manager.get_sync_status().items()}


async def handle_ff_connect_platform(arguments: dict) -> dict:
    """Validate and store credentials for a platform.

    Args:
        arguments: Dict containing:
            - platform: sleeper, espn or yahoo (required)
            - username: Sleeper username
            - access_token: Yahoo OAuth access token
            - espn_s2, swid: ESPN cookies
            - league_ids: ESPN league ids to import
            - season: Season override (optional)
    """
    platform = arguments.get("platform")
    if not platform:
        return {"error": "platform is required"}

    credentials = {key: arguments[key] for key in CREDENTIAL_KEYS if arguments.get(key) is not None}
    try:
        status = platform_manager.connect_platform(platform, credentials)
    except (CredentialsError, UnsupportedPlatformError) as e:
        return {"status": "error", "message": str(e)}

    return {
        "status": "success",
        "platform": status.platform.value,
        "sync_status": status.model_dump(mode="json"),
        "connected_platforms": [p.value for p in platform_manager.get_connected_platforms()],
    }


async def handle_ff_disconnect_platform(arguments: dict) -> dict:
    platform = arguments.get("platform")
    if not platform:
        return {"error": "platform is required"}
    try:
        removed = platform_manager.disconnect_platform(platform)
    except UnsupportedPlatformError as e:
        return {"status": "error", "message": str(e)}
    if not removed:
        return {"status": "error", "message": f"{platform} is not connected"}
    return {"status": "success", "message": f"Disconnected {platform}"}


async def handle_ff_import_teams(arguments: dict) -> dict:
    """Import teams from every connected platform, or just ``platform``."""
    platform = arguments.get("platform")
    if not platform_manager.get_connected_platforms():
        return {"status": "error", "message": "No platforms connected"}

    try:
        if platform:
            teams = await platform_manager.import_platform(platform)
        else:
            teams = await platform_manager.import_all_teams()
    except (CredentialsError, UnsupportedPlatformError) as e:
        return {"status": "error", "message": str(e)}

    return {
        "status": "success",
        "teams": [team_summary(t) for t in teams],
        "total_count": len(teams),
        "sync_status": _sync_status(),
    }


async def handle_ff_get_teams(arguments: dict) -> dict:
    """Imported teams, optionally filtered by platform."""
    platform = arguments.get("platform")
    teams = [t for t in platform_manager.teams if not platform or t.platform.value == platform]
    return {"status": "success", "teams": [team_summary(t) for t in teams], "total_count": len(teams)}


async def handle_ff_get_team(arguments: dict) -> dict:
    """Full unified roster for one imported team."""
    team_id = arguments.get("team_id")
    if not team_id:
        return {"error": "team_id is required"}
    team = platform_manager.get_team(team_id)
    if team is None:
        return {"error": f"Team {team_id} not found; import teams first"}
    return {"status": "success", "team": team.model_dump(mode="json")}


async def handle_ff_get_sync_status(arguments: dict) -> dict:
    return {
        "connected_platforms": [p.value for p in platform_manager.get_connected_platforms()],
        "sync_status": _sync_status(),
    }


async def handle_ff_import_csv(arguments: dict) -> dict:
    """Import rosters from CSV text with ``leagueId,teamId,displayName,position,team`` columns."""
    csv_text = arguments.get("csv_text")
    platform = arguments.get("platform")
    if not csv_text or not platform:
        return {"error": "csv_text and platform are required"}

    try:
        teams = platform_manager.import_csv(csv_text, platform)
    except (UnsupportedPlatformError, ValueError) as e:
        logger.warning(f"CSV import rejected: {e}")
        return {"status": "error", "message": str(e)}

    return {"status": "success", "teams": [team_summary(t) for t in teams], "total_count": len(teams)}
