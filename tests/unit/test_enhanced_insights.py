"""Unit tests for detailed per-player insights."""

import pytest

from halgrid.models import StartSit
from halgrid.services.enhanced_insights import (
    MatchupContext,
    analyze_game_script,
    analyze_recent_form,
    generate_enhanced_waiver_targets,
    generate_player_insights,
    get_key_decisions,
    get_must_start_insights,
    grade_matchup,
)


def _by_id(players, player_id):
    return next(p for p in players if p.player_id == player_id)


class TestBuildingBlocks:
    """Test the form, script and grade helpers."""

    def test_recent_form_uses_last_four_weeks(self, make_player):
        form = analyze_recent_form(make_player("x", "WR", [10, 12, 8, 20, 30]))

        assert form.games == [12.0, 8.0, 20.0, 30.0]
        assert form.average == 17.5
        assert form.trend == "improving"

    def test_recent_form_without_games(self, make_player):
        form = analyze_recent_form(make_player("x", "WR"))
        assert form.average == 0.0
        assert form.games == []

    @pytest.mark.parametrize(
        "spread,total,expected",
        [
            (7, 52, "very_positive"),
            (2, 48, "positive"),
            (0, 45, "neutral"),
            (-5, 40, "negative"),
            (-5, 48, "very_negative"),
        ],
    )
    def test_game_script(self, spread, total, expected):
        assert analyze_game_script(MatchupContext(spread=spread, total=total)) == expected

    @pytest.mark.parametrize("rank,grade", [(1, "A+"), (8, "A"), (9, "B+"), (13, "B"), (30, "D+"), (31, "D")])
    def test_grade_matchup(self, rank, grade):
        assert grade_matchup(rank) == grade


class TestPlayerInsights:
    """Test full player insights."""

    def test_elite_matchup_must_start(self, sample_roster):
        matchup = MatchupContext(opponent="MIA", defense_rank=3, spread=7, total=52, is_home=True)

        insight = generate_player_insights(_by_id(sample_roster, "qb1"), sample_roster, matchup)

        assert insight.recommendation == StartSit.MUST_START
        assert insight.confidence == 100
        assert insight.key_factors.matchup_grade == "A+"
        assert insight.key_factors.game_script == "Very Positive"
        assert insight.key_factors.recent_form == "Excellent"
        assert insight.risk_profile.most_likely == pytest.approx(27.0)
        assert insight.risk_profile.boom_chance == 35
        assert "Home field advantage" in insight.supporting_factors
        assert any(r.startswith("ELITE MATCHUP") for r in insight.reasoning)
        assert insight.position_context.must_start_by_necessity

    def test_neutral_matchup_by_default(self, sample_roster):
        insight = generate_player_insights(_by_id(sample_roster, "qb1"), sample_roster)

        assert insight.matchup.opponent == "TBD"
        assert insight.recommendation == StartSit.FLEX_PLAY
        assert insight.confidence == 80
        assert insight.key_statistic == "22.5 PPG over last 4 games"

    def test_injured_reserve_avoided(self, sample_roster):
        insight = generate_player_insights(_by_id(sample_roster, "wr4"), sample_roster)

        assert insight.recommendation == StartSit.AVOID
        assert insight.reasoning[0] == "AVOID: Player wr4 is listed IR"
        assert insight.key_factors.injury_risk == "High"
        assert "Injury status: IR" in insight.concerns
        assert insight.position_context.luxury_play


class TestInsightModes:
    """Test must-start and key-decision selections."""

    def test_must_start(self, sample_team):
        matchups = {"qb1": MatchupContext(defense_rank=5), "rb2": MatchupContext(defense_rank=12)}

        insights = get_must_start_insights(sample_team.players, sample_team.starters, matchups)

        assert [(i.player_id, i.recommendation) for i in insights] == [
            ("qb1", StartSit.MUST_START),
            ("rb2", StartSit.STRONG_START),
        ]

    def test_key_decisions_exclude_unavailable(self, sample_roster):
        decisions = get_key_decisions(sample_roster)

        ids = [d.player_id for d in decisions]
        assert "wr4" not in ids
        assert len(ids) == 11
        confidences = [d.confidence for d in decisions]
        assert confidences == sorted(confidences, reverse=True)


class TestEnhancedWaiverTargets:
    """Test roster-relative waiver insights."""

    def test_upgrade_and_stash(self, sample_roster, make_player):
        available = [
            make_player("fa_te", "TE", [15, 16, 14, 15]),
            make_player("fa_k", "K", [12, 12]),
            make_player("fa_rb", "RB", [1, 2, 3, 5]),
            make_player("fa_qb", "QB", [0, 0]),
        ]

        targets = generate_enhanced_waiver_targets(available, sample_roster)

        assert [t.player_id for t in targets] == ["fa_te", "fa_rb"]
        te = targets[0]
        assert te.priority == "significant_upgrade"
        assert te.faab_percent == 20
        assert te.max_bid == 30
        assert te.would_start
        assert te.upgrades_over == "Player te1"
        assert targets[1].priority == "lottery_ticket"
        assert targets[1].trend == "rising"

    def test_empty_position_is_critical(self, make_player):
        targets = generate_enhanced_waiver_targets([make_player("fa", "TE", [5])], [make_player("qb", "QB", [20])])

        assert targets[0].priority == "critical_need"
        assert targets[0].upgrades_over is None
