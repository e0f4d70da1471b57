"""Unit tests for league-specific scoring."""

import pytest

from halgrid.models import League
from halgrid.services.scoring import (
    calculate_player_score,
    calculate_projected_points,
    compare_league_scoring,
    get_league_scoring_info,
    get_scoring_type,
    is_idp_league,
)

PPR = {"pass_yd": 0.04, "pass_td": 4, "pass_int": -2, "rec": 1, "rec_yd": 0.1, "rush_yd": 0.1, "rush_td": 6}


class TestCalculatePlayerScore:
    """Test stat line scoring."""

    def test_quarterback_line(self):
        score = calculate_player_score({"pass_yd": 300, "pass_td": 2, "pass_int": 1}, PPR, "QB")

        assert score.total == 18.0
        assert [line.category for line in score.breakdown] == ["Passing", "Passing", "Passing"]
        assert score.breakdown[0].description == "300 yards × 0.04 = 12.00"
        assert score.breakdown[1].description == "2 TD × 4 = 8"

    def test_zero_stats_and_unscored_stats_are_skipped(self):
        score = calculate_player_score({"rec": 0, "rec_yd": 50, "fum_lost": 1}, PPR, "WR")

        assert score.total == 5.0
        assert len(score.breakdown) == 1

    def test_kicking_only_for_kickers(self):
        settings = {"xp": 1, "fgm_50p": 5}
        stats = {"xp": 3, "fgm_50p": 1}

        assert calculate_player_score(stats, settings, "K").total == 8.0
        assert calculate_player_score(stats, settings, "WR").total == 0.0
        labels = [line.description for line in calculate_player_score(stats, settings, "K").breakdown]
        assert labels[1].startswith("1 FG (50p)")

    def test_idp_rules_only_for_defensive_players(self):
        settings = {"idp_tackle": 1, "idp_sack": 2}
        stats = {"idp_tackle": 7, "idp_sack": 1}

        score = calculate_player_score(stats, settings, "LB")

        assert score.total == 9.0
        assert [line.category for line in score.breakdown] == ["Defense", "Defense"]
        assert score.breakdown[1].description == "1 sacks × 2 = 2"
        assert calculate_player_score(stats, settings, "RB").total == 0.0

    def test_projected_points(self):
        assert calculate_projected_points({"rec": 5, "rec_yd": 60}, PPR, "WR") == 11.0


class TestScoringType:
    """Test scoring classification."""

    @pytest.mark.parametrize(
        "rec,expected", [(1, "PPR"), (1.5, "PPR"), (0.5, "Half-PPR"), (0, "Standard")]
    )
    def test_get_scoring_type(self, rec, expected):
        assert get_scoring_type({"rec": rec}) == expected

    def test_idp_detection(self):
        assert is_idp_league({}, ["QB", "LB"])
        assert is_idp_league({"idp_sack": 2}, ["QB"])
        assert not is_idp_league({"rec": 1}, ["QB", "RB"])

    def test_league_scoring_info(self):
        league = League(
            league_id="1",
            scoring_settings={"rec": 0.5, "idp_tackle": 1.5},
            roster_positions=["QB", "DL"],
        )

        info = get_league_scoring_info(league)

        assert info["type"] == "Half-PPR + IDP"
        assert info["is_idp"] is True
        assert info["key_rules"] == ["0.5 pt per reception", "1.5 pts per tackle"]


class TestCompareLeagueScoring:
    """Test cross-league comparison."""

    def test_ppr_beats_standard_for_receivers(self):
        ppr = League(league_id="a", name="PPR League", scoring_settings={"rec": 1, "rec_yd": 0.1})
        standard = League(league_id="b", name="Standard League", scoring_settings={"rec_yd": 0.1})

        result = compare_league_scoring({"rec": 8, "rec_yd": 90}, "WR", ppr, standard)

        assert result["league_a_score"] == 17.0
        assert result["league_b_score"] == 9.0
        assert result["difference"] == 8.0
        assert result["explanation"] == "Higher scoring in PPR League due to different settings"

    def test_similar_scoring_within_tolerance(self):
        a = League(league_id="a", scoring_settings={"rec_yd": 0.1})
        b = League(league_id="b", scoring_settings={"rec_yd": 0.1, "rec": 0.01})

        result = compare_league_scoring({"rec": 10, "rec_yd": 50}, "WR", a, b)

        assert result["explanation"] == "Similar scoring in both leagues"
