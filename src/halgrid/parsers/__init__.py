"""Platform response parsers."""

from . import espn_parsers, sleeper_parsers, yahoo_parsers
from .csv_parser import parse_roster_csv
from .yahoo_parsers import (
    parse_scoreboard,
    parse_standings,
    parse_team_roster,
    parse_team_roster_with_slots,
    parse_user_leagues,
    parse_user_teams,
)

__all__ = [
    "espn_parsers",
    "parse_roster_csv",
    "parse_scoreboard",
    "parse_standings",
    "parse_team_roster",
    "parse_team_roster_with_slots",
    "parse_user_leagues",
    "parse_user_teams",
    "sleeper_parsers",
    "yahoo_parsers",
]
