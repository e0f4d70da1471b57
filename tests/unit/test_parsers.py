"""Unit tests for the Sleeper, ESPN, Yahoo and CSV parsers."""

import pytest

from halgrid.models import InjuryStatus, Platform
from halgrid.parsers import espn_parsers, parse_roster_csv, sleeper_parsers, yahoo_parsers


class TestSleeperParsers:
    """Test Sleeper payload parsing."""

    def test_parse_league(self, sleeper_league_payload):
        league = sleeper_parsers.parse_league(sleeper_league_payload)

        assert league.league_id == "111"
        assert league.platform == Platform.SLEEPER
        assert league.scoring_settings["rec"] == 1.0
        assert league.playoff_week_start == 15
        assert league.waiver_type == "faab"

    def test_parse_roster_combines_decimal_points(self, sleeper_rosters_payload):
        roster = sleeper_parsers.parse_roster(sleeper_rosters_payload[0])

        assert roster.roster_id == 1
        assert roster.record.wins == 6
        assert roster.record.points_for == pytest.approx(1050.5)
        assert roster.starters == ["4046", "6794"]

    def test_parse_roster_drops_empty_starter_slots(self):
        roster = sleeper_parsers.parse_roster({"roster_id": 2, "starters": ["4046", "0", None]})
        assert roster.starters == ["4046"]

    def test_parse_player_builds_name_from_parts(self, sleeper_players_payload):
        player = sleeper_parsers.parse_player("7564", sleeper_players_payload["7564"])

        assert player.name == "Ja'Marr Chase"
        assert player.team == "CIN"
        assert player.bye_week == 10
        assert player.platform == "sleeper"

    def test_parse_unknown_player_keeps_id(self):
        player = sleeper_parsers.parse_player("123", None)
        assert player.name == "123"
        assert player.position == ""

    def test_build_team(
        self,
        sleeper_league_payload,
        sleeper_rosters_payload,
        sleeper_users_payload,
        sleeper_players_payload,
        sleeper_matchups_payload,
    ):
        league = sleeper_parsers.parse_league(sleeper_league_payload)
        roster = sleeper_parsers.parse_roster(sleeper_rosters_payload[0])
        matchups = {
            1: sleeper_parsers.parse_matchups(sleeper_matchups_payload, week=1),
            2: sleeper_parsers.parse_matchups(sleeper_matchups_payload, week=2),
        }

        team = sleeper_parsers.build_team(
            league, roster, sleeper_users_payload, sleeper_players_payload, matchups
        )

        assert team.id == "sleeper_111_1"
        assert team.team_name == "Gridiron Gang"
        assert team.owner == "tester"
        mahomes = next(p for p in team.players if p.player_id == "4046")
        assert mahomes.weekly_points == [24.5, 24.5]
        jefferson = next(p for p in team.players if p.player_id == "6794")
        assert jefferson.injury_status == InjuryStatus.QUESTIONABLE

    def test_build_team_falls_back_to_roster_number(self, sleeper_league_payload):
        league = sleeper_parsers.parse_league(sleeper_league_payload)
        roster = sleeper_parsers.parse_roster({"roster_id": 7, "owner_id": None})

        team = sleeper_parsers.build_team(league, roster, [], {})

        assert team.team_name == "Team 7"
        assert team.players == []


class TestEspnParsers:
    """Test ESPN payload parsing."""

    def test_parse_league(self, espn_league_payload):
        league = espn_parsers.parse_league(espn_league_payload)

        assert league.league_id == "555"
        assert league.platform == Platform.ESPN
        assert league.scoring_settings == {"rec": 1.0, "pass_yd": 0.04}
        assert league.roster_positions.count("BN") == 6
        assert league.roster_positions.count("WR") == 2
        assert "FLEX" in league.roster_positions
        assert league.settings["current_week"] == 6

    def test_build_team(self, espn_league_payload, espn_teams_payload):
        league = espn_parsers.parse_league(espn_league_payload)

        team = espn_parsers.build_team(league, espn_teams_payload[0])

        assert team.id == "espn_555_3"
        assert team.team_name == "Gotham Knights"
        assert team.starters == ["3139477"]
        assert team.record.wins == 4
        assert team.record.points_for == pytest.approx(612.4)
        qb = team.players[0]
        assert qb.position == "QB"
        assert qb.team == "KC"
        assert qb.injury_status is None
        assert team.players[1].injury_status == InjuryStatus.QUESTIONABLE

    def test_parse_player_weekly_stats(self):
        entry = {
            "playerId": 1,
            "playerPoolEntry": {
                "player": {
                    "fullName": "Someone",
                    "defaultPositionId": 2,
                    "proTeamId": 99,
                    "stats": [
                        {"statSplitTypeId": 1, "statSourceId": 0, "scoringPeriodId": 2, "appliedTotal": 12.0},
                        {"statSplitTypeId": 1, "statSourceId": 0, "scoringPeriodId": 1, "appliedTotal": 8.0},
                        {"statSplitTypeId": 1, "statSourceId": 1, "scoringPeriodId": 3, "appliedTotal": 14.5},
                        {"statSplitTypeId": 0, "statSourceId": 0, "scoringPeriodId": 0, "appliedTotal": 20.0},
                    ],
                }
            },
        }

        player = espn_parsers.parse_player(entry)

        assert player.weekly_points == [8.0, 12.0]
        assert player.projected_points == 14.5
        assert player.team == "FA"
        assert player.bye_week is None

    def test_parse_matchups(self):
        schedule = [
            {
                "id": 10,
                "matchupPeriodId": 6,
                "home": {"teamId": 3, "totalPoints": 101.2},
                "away": {"teamId": 4, "totalPoints": 99.0},
            },
            {"id": 11, "matchupPeriodId": 6, "home": {"teamId": 5, "totalPoints": 80}},
        ]

        matchups = espn_parsers.parse_matchups(schedule)

        assert [m.roster_id for m in matchups] == [3, 4, 5]
        assert matchups[0].matchup_id == matchups[1].matchup_id == 10
        assert matchups[2].week == 6


class TestYahooParsers:
    """Test Yahoo response parsing."""

    def test_parse_user_leagues(self, mock_yahoo_league_response):
        leagues = yahoo_parsers.parse_user_leagues(mock_yahoo_league_response)

        assert len(leagues) == 1
        assert leagues[0]["league_key"] == "461.l.61410"
        assert leagues[0]["num_teams"] == 10
        assert leagues[0]["current_week"] == 6

    def test_parse_user_teams(self, mock_yahoo_teams_response):
        teams = yahoo_parsers.parse_user_teams(mock_yahoo_teams_response)
        assert teams == [{"team_key": "461.l.61410.t.1", "name": "Yahoo Yodelers"}]

    def test_parse_roster_with_slots(self, mock_yahoo_roster_response):
        players, starters = yahoo_parsers.parse_team_roster_with_slots(mock_yahoo_roster_response)

        assert [p.name for p in players] == ["Josh Allen", "Christian McCaffrey", "Cooper Kupp"]
        assert starters == ["461.p.33536", "461.p.30123"]
        assert players[1].injury_status == InjuryStatus.OUT
        assert players[0].bye_week == 7

    def test_parse_empty_roster(self):
        assert yahoo_parsers.parse_team_roster({"fantasy_content": {"team": []}}) == []

    def test_build_team(self, mock_yahoo_roster_response):
        team = yahoo_parsers.build_team(
            "461.l.61410.t.1", "Yahoo Yodelers", mock_yahoo_roster_response, league_name="Anyone But Andy"
        )

        assert team.id == "yahoo_461.l.61410"
        assert team.platform == Platform.YAHOO
        assert team.league_id == "461.l.61410"
        assert len(team.players) == 3

    def test_parse_standings(self):
        data = {
            "fantasy_content": {
                "league": [
                    [{"league_key": "461.l.61410"}],
                    {
                        "standings": [
                            {
                                "teams": {
                                    "0": {
                                        "team": [
                                            [{"team_key": "461.l.61410.t.1"}, {"name": "Yodelers"}],
                                            {
                                                "team_standings": {
                                                    "rank": "2",
                                                    "points_for": "612.5",
                                                    "points_against": "580",
                                                    "outcome_totals": {"wins": "4", "losses": "2", "ties": "0"},
                                                }
                                            },
                                        ]
                                    },
                                    "count": 1,
                                }
                            }
                        ]
                    },
                ]
            }
        }

        rows = yahoo_parsers.parse_standings(data)

        assert rows[0]["rank"] == 2
        assert rows[0]["record"].wins == 4
        assert rows[0]["record"].points_for == 612.5

    def test_parse_scoreboard(self):
        def side(key, points):
            return {"team": [[{"team_key": key}], {"team_points": {"total": points}}]}

        data = {
            "fantasy_content": {
                "league": [
                    [{"league_key": "461.l.61410"}],
                    {
                        "scoreboard": {
                            "0": {
                                "matchups": {
                                    "0": {
                                        "matchup": {
                                            "week": "6",
                                            "0": {"teams": {"0": side("a", "101.5"), "1": side("b", "88"), "count": 2}},
                                        }
                                    },
                                    "count": 1,
                                }
                            }
                        }
                    },
                ]
            }
        }

        matchups = yahoo_parsers.parse_scoreboard(data)

        assert matchups[0]["week"] == 6
        assert [t["points"] for t in matchups[0]["teams"]] == [101.5, 88.0]

    def test_league_key_from_team_key(self):
        assert yahoo_parsers.league_key_from_team_key("461.l.61410.t.1") == "461.l.61410"


class TestCsvParser:
    """Test roster CSV import."""

    def test_groups_rows_by_league_and_team(self):
        csv_text = (
            "leagueId,teamId,displayName,position,team\n"
            "L1,T1,Josh Allen,QB,BUF\n"
            "L1,T1,Steelers,D/ST,PIT\n"
            ",,,,\n"
            "L1,T2,Saquon Barkley,RB,\n"
        )

        rosters = parse_roster_csv(csv_text, "espn")

        assert len(rosters) == 2
        first = rosters[0]
        assert (first["league_id"], first["team_id"]) == ("L1", "T1")
        assert [p.player_id for p in first["players"]] == ["espn_L1_T1_1", "espn_L1_T1_2"]
        assert first["players"][1].position == "DEF"
        assert rosters[1]["players"][0].team is None

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="displayName, position"):
            parse_roster_csv("leagueId,teamId,team\nL1,T1,BUF\n", "espn")
