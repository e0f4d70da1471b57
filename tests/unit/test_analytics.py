"""Unit tests for player performance analytics."""

import pytest

from halgrid.models import Matchup
from halgrid.services.analytics import (
    analyze_matchup_history,
    calculate_performance_rating,
    calculate_trend,
    get_lineup_recommendations,
    get_player_analytics,
    get_position_scarcity,
)

HOT = [10, 10, 10, 20, 20, 20]
COLD = [20, 20, 20, 10, 10, 10]


class TestTrendAndRating:
    """Test the trend and rating formulas."""

    @pytest.mark.parametrize(
        "scores,expected",
        [(HOT, "hot"), (COLD, "cold"), ([12, 11, 13], "neutral"), ([1, 2], "neutral"), ([0, 0, 0], "neutral")],
    )
    def test_calculate_trend(self, scores, expected):
        assert calculate_trend(scores) == expected

    def test_rating_is_clamped(self):
        assert calculate_performance_rating(20, 10, 5, 0.5) == 100.0
        assert calculate_performance_rating(0, 0, None, 0) == 50.0

    def test_rating_penalizes_missed_projection(self):
        assert calculate_performance_rating(10, 30, None, 0) == pytest.approx(30.0)


class TestPlayerAnalytics:
    """Test per-player analytics."""

    def test_hot_player(self, make_player):
        analytics = get_player_analytics(make_player("hot", "WR", HOT))

        perf = analytics.performance
        assert perf.season_average == 15.0
        assert perf.last3_average == 20.0
        assert perf.actual_points == 20.0
        assert perf.consistency == pytest.approx(0.667)
        assert perf.performance_rating == pytest.approx(63.3)
        assert analytics.is_hot and analytics.should_start
        assert not analytics.should_sell
        assert perf.recommendations == ["Hot streak - Start with confidence"]

    def test_cold_player_is_buy_low(self, make_player):
        analytics = get_player_analytics(make_player("cold", "WR", COLD))

        assert analytics.is_cold
        assert analytics.should_buy
        assert "Buy low opportunity" in analytics.performance.recommendations

    def test_injured_player_not_started(self, make_player):
        analytics = get_player_analytics(make_player("q", "RB", HOT, injury_status="Questionable"))

        assert not analytics.should_start
        assert "Injury concern: Questionable" in analytics.performance.recommendations

    def test_explicit_scores_override_weekly_points(self, make_player):
        analytics = get_player_analytics(make_player("x", "TE", [1, 1]), weekly_scores=[8, 30], position_rank=3)

        assert analytics.performance.weekly_scores == [8.0, 30.0]
        assert analytics.is_boom_bust

    def test_no_scores(self, make_player):
        analytics = get_player_analytics(make_player("x", "TE"))

        assert analytics.performance.season_average == 0.0
        assert not analytics.is_boom_bust


class TestLineupSwaps:
    """Test hot-bench for cold-starter swaps."""

    def test_swaps_same_position(self, make_player):
        starter = get_player_analytics(make_player("s", "WR", COLD, projected_points=30))
        hot_wr = get_player_analytics(make_player("b", "WR", HOT))
        hot_rb = get_player_analytics(make_player("r", "RB", HOT))

        swaps = get_lineup_recommendations([starter], [hot_rb, hot_wr])

        assert len(swaps) == 1
        assert (swaps[0].bench, swaps[0].starter) == ("b", "s")
        assert swaps[0].reason == "Player b is hot (20.0 ppg) while Player s is cold (10.0 ppg)"

    def test_no_swap_for_well_rated_starter(self, make_player):
        starter = get_player_analytics(make_player("s", "WR", COLD))
        hot_wr = get_player_analytics(make_player("b", "WR", HOT))

        assert get_lineup_recommendations([starter], [hot_wr]) == []


class TestHistoryAndScarcity:
    """Test matchup history and scarcity helpers."""

    def test_matchup_history(self):
        matchups = [
            Matchup(roster_id=1, players_points={"a": 10.0}),
            Matchup(roster_id=2, players_points={"a": 99.0}),
            Matchup(roster_id=1, players_points={"a": 12.0, "b": 3.0}),
        ]

        assert analyze_matchup_history(matchups, 1) == {"a": [10.0, 12.0], "b": [3.0]}

    def test_position_scarcity(self, make_player):
        available = [make_player(f"wr{i}", "WR") for i in range(9)]

        assert get_position_scarcity("WR", available) == pytest.approx(0.9)
        assert get_position_scarcity("K", available) == 1.0
