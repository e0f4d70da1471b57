"""Pytest configuration and shared fixtures for all tests."""

from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from halgrid.models import Platform, Player, Record, Team


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    test_env = {
        "YAHOO_ACCESS_TOKEN": "test_access_token_12345",
        "YAHOO_REFRESH_TOKEN": "test_refresh_token_67890",
        "YAHOO_CONSUMER_KEY": "test_consumer_key",
        "YAHOO_CONSUMER_SECRET": "test_consumer_secret",
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    return test_env


@pytest.fixture
def mock_rate_limiter():
    """Mock rate limiter for testing."""
    limiter = MagicMock()
    limiter.acquire = AsyncMock()
    limiter.get_status = MagicMock(
        return_value={
            "requests_used": 50,
            "requests_remaining": 850,
            "max_requests": 900,
            "reset_in_seconds": 1800,
        }
    )
    return limiter


@pytest.fixture
def mock_response_cache():
    """Mock response cache for testing."""
    cache = MagicMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.clear = AsyncMock(return_value=3)
    cache.get_stats = MagicMock(
        return_value={
            "total_entries": 15,
            "hits": 245,
            "misses": 87,
            "hit_rate": 0.738,
        }
    )
    return cache


@pytest.fixture
def mock_http_session() -> Callable[..., MagicMock]:
    """Factory for a patched ``aiohttp.ClientSession`` whose get/post return one response."""

    def _make(status: int = 200, payload: Any = None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status = status
        response.json = AsyncMock(return_value=payload)
        response.text = AsyncMock(return_value=text)

        request_cm = MagicMock()
        request_cm.__aenter__ = AsyncMock(return_value=response)
        request_cm.__aexit__ = AsyncMock(return_value=None)

        session = MagicMock()
        session.__aenter__ = AsyncMock(return_value=session)
        session.__aexit__ = AsyncMock(return_value=None)
        session.get = MagicMock(return_value=request_cm)
        session.post = MagicMock(return_value=request_cm)
        return session

    return _make


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Factory for players with sensible defaults."""

    def _make(player_id: str, position: str = "WR", weekly_points: List[float] = (), **kwargs) -> Player:
        kwargs.setdefault("name", f"Player {player_id}")
        return Player(player_id=player_id, position=position, weekly_points=list(weekly_points), **kwargs)

    return _make


@pytest.fixture
def sample_roster(make_player) -> List[Player]:
    """A 12-man roster with a clear starter at each position."""
    return [
        make_player("qb1", "QB", [22, 25, 19, 24], team="BUF", age=29, years_exp=7),
        make_player("qb2", "QB", [12, 9, 14, 11], team="NYJ", age=27, years_exp=5),
        make_player("rb1", "RB", [18, 21, 24, 19], team="SF", age=28, years_exp=8),
        make_player("rb2", "RB", [12, 14, 9, 15], team="DET", age=24, years_exp=2),
        make_player("rb3", "RB", [4, 3, 6, 2], team="NO", age=23, years_exp=1),
        make_player("wr1", "WR", [20, 17, 23, 26], team="MIN", age=26, years_exp=5),
        make_player("wr2", "WR", [14, 11, 13, 12], team="CIN", age=25, years_exp=4),
        make_player("wr3", "WR", [8, 7, 9, 6], team="LAR", age=31, years_exp=9),
        make_player("te1", "TE", [11, 9, 13, 10], team="KC", age=35, years_exp=12),
        make_player("k1", "K", [8, 9, 7, 10], team="BAL", age=34, years_exp=13),
        make_player("def1", "DEF", [7, 10, 4, 9], team="PIT"),
        make_player("wr4", "WR", [3, 2, 1, 4], team="CHI", injury_status="IR", age=22, years_exp=0),
    ]


@pytest.fixture
def sample_team(sample_roster) -> Team:
    return Team(
        id="sleeper_111_1",
        platform=Platform.SLEEPER,
        league_id="111",
        league_name="Test League",
        team_name="Gridiron Gang",
        roster_id=1,
        players=sample_roster,
        starters=["qb1", "rb1", "rb2", "wr1", "wr2", "te1", "wr3", "k1", "def1"],
        record=Record(wins=5, losses=3, points_for=980.5, points_against=910.2),
    )


# ---------------------------------------------------------------------------
# Sleeper payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def sleeper_league_payload() -> Dict[str, Any]:
    return {
        "league_id": "111",
        "name": "Test League",
        "season": "2025",
        "status": "in_season",
        "total_rosters": 4,
        "scoring_settings": {"pass_yd": 0.04, "pass_td": 4, "rec": 1, "rec_yd": 0.1, "rush_yd": 0.1},
        "roster_positions": ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DEF", "BN", "BN"],
        "settings": {"playoff_week_start": 15, "waiver_type": 2, "playoff_teams": 2},
    }


@pytest.fixture
def sleeper_rosters_payload() -> List[Dict[str, Any]]:
    def roster(roster_id, owner, players, wins, losses, fpts):
        return {
            "roster_id": roster_id,
            "owner_id": owner,
            "players": players,
            "starters": players[:2],
            "settings": {"wins": wins, "losses": losses, "ties": 0, "fpts": fpts, "fpts_decimal": 50},
        }

    return [
        roster(1, "user_1", ["4046", "6794", "7564"], 6, 2, 1050),
        roster(2, "user_2", ["4034", "5859"], 5, 3, 990),
        roster(3, "user_3", ["6786", "4866"], 3, 5, 900),
        roster(4, "user_4", ["8146", "2133"], 2, 6, 850),
    ]


@pytest.fixture
def sleeper_users_payload() -> List[Dict[str, Any]]:
    return [
        {"user_id": "user_1", "display_name": "tester", "metadata": {"team_name": "Gridiron Gang"}},
        {"user_id": "user_2", "display_name": "rival", "metadata": {}},
        {"user_id": "user_3", "display_name": "third"},
        {"user_id": "user_4", "display_name": "fourth"},
    ]


@pytest.fixture
def sleeper_players_payload() -> Dict[str, Dict[str, Any]]:
    return {
        "4046": {
            "full_name": "Patrick Mahomes",
            "position": "QB",
            "fantasy_positions": ["QB"],
            "team": "KC",
            "age": 30,
            "years_exp": 8,
            "active": True,
        },
        "6794": {
            "full_name": "Justin Jefferson",
            "position": "WR",
            "fantasy_positions": ["WR"],
            "team": "MIN",
            "injury_status": "Questionable",
            "active": True,
        },
        "7564": {
            "first_name": "Ja'Marr",
            "last_name": "Chase",
            "position": "WR",
            "fantasy_positions": ["WR"],
            "team": "CIN",
            "active": True,
        },
        "9999": {"full_name": "Waiver Guy", "position": "RB", "fantasy_positions": ["RB"], "team": "GB"},
    }


@pytest.fixture
def sleeper_matchups_payload() -> List[Dict[str, Any]]:
    return [
        {"roster_id": 1, "matchup_id": 1, "points": 102.5, "players_points": {"4046": 24.5, "6794": 18.0}},
        {"roster_id": 2, "matchup_id": 1, "points": 95.0, "players_points": {"4034": 20.0}},
        {"roster_id": 3, "matchup_id": 2, "points": 88.0, "players_points": {}},
        {"roster_id": 4, "matchup_id": 2, "points": 110.2, "players_points": {}},
    ]


# ---------------------------------------------------------------------------
# ESPN payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def espn_league_payload() -> Dict[str, Any]:
    return {
        "id": 555,
        "seasonId": 2025,
        "scoringPeriodId": 6,
        "settings": {
            "name": "ESPN Test League",
            "size": 10,
            "scoringSettings": {"scoringItems": [{"statId": 53, "points": 1.0}, {"statId": 3, "points": 0.04}]},
            "rosterSettings": {"lineupSlotCounts": {"0": 1, "2": 2, "4": 2, "6": 1, "23": 1, "20": 6}},
            "scheduleSettings": {"playoffTeamCount": 4, "matchupPeriodCount": 14},
        },
    }


@pytest.fixture
def espn_teams_payload() -> List[Dict[str, Any]]:
    return [
        {
            "id": 3,
            "location": "Gotham",
            "nickname": "Knights",
            "owners": ["{ABC-123}"],
            "record": {"overall": {"wins": 4, "losses": 1, "ties": 0, "pointsFor": 612.4, "pointsAgainst": 540.1}},
            "roster": {
                "entries": [
                    {
                        "playerId": 3139477,
                        "lineupSlotId": 0,
                        "playerPoolEntry": {
                            "player": {
                                "id": 3139477,
                                "fullName": "Patrick Mahomes",
                                "defaultPositionId": 1,
                                "proTeamId": 12,
                                "injuryStatus": "ACTIVE",
                                "stats": [],
                            }
                        },
                    },
                    {
                        "playerId": 4262921,
                        "lineupSlotId": 20,
                        "playerPoolEntry": {
                            "player": {
                                "id": 4262921,
                                "fullName": "Justin Jefferson",
                                "defaultPositionId": 3,
                                "proTeamId": 16,
                                "injuryStatus": "QUESTIONABLE",
                                "stats": [],
                            }
                        },
                    },
                ]
            },
        },
        {"id": 4, "name": "Other Team", "owners": ["{XYZ-999}"], "roster": {"entries": []}},
    ]


# ---------------------------------------------------------------------------
# Yahoo payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_yahoo_league_response() -> Dict[str, Any]:
    """Mock Yahoo API response for leagues endpoint."""
    return {
        "fantasy_content": {
            "users": {
                "0": {
                    "user": [
                        [{"guid": "TEST_GUID_12345"}],
                        {
                            "games": {
                                "0": {
                                    "game": [
                                        [{"game_key": "461"}],
                                        {
                                            "leagues": {
                                                "0": {
                                                    "league": [
                                                        [
                                                            {
                                                                "league_key": "461.l.61410",
                                                                "league_id": "61410",
                                                                "name": "Anyone But Andy",
                                                                "season": "2025",
                                                                "num_teams": 10,
                                                                "current_week": 6,
                                                                "scoring_type": "head",
                                                            }
                                                        ]
                                                    ]
                                                },
                                                "count": 1,
                                            }
                                        },
                                    ]
                                },
                                "count": 1,
                            }
                        },
                    ]
                },
                "count": 1,
            }
        }
    }


@pytest.fixture
def mock_yahoo_teams_response() -> Dict[str, Any]:
    """Mock Yahoo API response for the user's teams endpoint."""
    return {
        "fantasy_content": {
            "users": {
                "0": {
                    "user": [
                        [{"guid": "TEST_GUID_12345"}],
                        {
                            "games": {
                                "0": {
                                    "game": [
                                        [{"game_key": "461"}],
                                        {
                                            "teams": {
                                                "0": {
                                                    "team": [
                                                        [
                                                            {"team_key": "461.l.61410.t.1"},
                                                            {"name": "Yahoo Yodelers"},
                                                        ]
                                                    ]
                                                },
                                                "count": 1,
                                            }
                                        },
                                    ]
                                },
                                "count": 1,
                            }
                        },
                    ]
                },
                "count": 1,
            }
        }
    }


@pytest.fixture
def mock_yahoo_roster_response() -> Dict[str, Any]:
    """Mock Yahoo API response for team roster endpoint."""
    return {
        "fantasy_content": {
            "team": [
                [{"team_key": "461.l.61410.t.1"}],
                {
                    "roster": {
                        "0": {
                            "players": {
                                "0": {
                                    "player": [
                                        [
                                            {
                                                "player_key": "461.p.33536",
                                                "name": {"full": "Josh Allen"},
                                                "display_position": "QB",
                                                "editorial_team_abbr": "BUF",
                                                "status": "OK",
                                            }
                                        ],
                                        {"selected_position": [{"coverage_type": "week"}, {"position": "QB"}]},
                                    ]
                                },
                                "1": {
                                    "player": [
                                        [
                                            {
                                                "player_key": "461.p.31860",
                                                "name": {"full": "Christian McCaffrey"},
                                                "display_position": "RB",
                                                "editorial_team_abbr": "SF",
                                                "status": "O",
                                            }
                                        ],
                                        {"selected_position": [{"coverage_type": "week"}, {"position": "BN"}]},
                                    ]
                                },
                                "2": {
                                    "player": [
                                        [
                                            {
                                                "player_key": "461.p.30123",
                                                "name": {"full": "Cooper Kupp"},
                                                "display_position": "WR",
                                                "editorial_team_abbr": "LAR",
                                                "status": "OK",
                                            }
                                        ],
                                        {"selected_position": [{"coverage_type": "week"}, {"position": "WR"}]},
                                    ]
                                },
                                "count": 3,
                            }
                        }
                    }
                },
            ]
        }
    }
