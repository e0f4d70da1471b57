"""Unit tests for roster-specific start/sit and waiver recommendations."""

import pytest

from halgrid.models import Matchup, RoleType, StartSit, WaiverImpact, WaiverPriority
from halgrid.services import team_personalized
from halgrid.services.team_personalized import (
    analyze_player_role,
    analyze_roster_composition,
    calculate_upside,
    evaluate_waiver_target,
    generate_start_sit_recommendations,
    generate_waiver_targets,
    get_recent_performance,
    rank_position_groups,
)


class TestRecentPerformance:
    """Test weekly scoring summaries."""

    def test_from_matchups(self):
        matchups = [
            Matchup(roster_id=1, players_points={"x": 10.0}),
            Matchup(roster_id=1, players_points={"x": 20.0}),
            Matchup(roster_id=1, players_points={"y": 99.0}),
        ]

        perf = get_recent_performance("x", matchups)

        assert perf.average == 15.0
        assert (perf.floor, perf.ceiling) == (10.0, 20.0)
        assert perf.consistency == pytest.approx(0.667)
        assert calculate_upside(perf) == "medium"

    def test_fallback_and_empty(self):
        assert get_recent_performance("x", [], fallback=[4.0, 6.0]).average == 5.0
        assert get_recent_performance("x", []).average == 0.0


class TestPositionGroups:
    """Test depth chart ranking."""

    def test_roles(self, sample_roster):
        groups = rank_position_groups(sample_roster)

        wr = {r.player.player_id: r for r in groups["WR"]}
        assert wr["wr1"].role.role == RoleType.STARTER
        assert wr["wr2"].role.role == RoleType.FLEX_CANDIDATE
        assert wr["wr4"].starting_probability == 0.0
        assert groups["WR"][-1].player.player_id == "wr4"

        rb = {r.player.player_id: r for r in groups["RB"]}
        assert rb["rb2"].role.role == RoleType.STARTER
        assert rb["rb3"].starting_probability == 0.4

    def test_questionable_lowers_probability(self, make_player):
        player = make_player("a", "RB", injury_status="Questionable")
        assert analyze_player_role(player, 0, 1).starting_probability == pytest.approx(0.63)

    @pytest.mark.parametrize("status", ["Out", "IR"])
    @pytest.mark.parametrize("position,index", [("QB", 0), ("WR", 1), ("RB", 2)])
    def test_unavailable_players_are_deep_bench(self, make_player, status, position, index):
        role = analyze_player_role(make_player("a", position, injury_status=status), index, 2)

        assert role.role == RoleType.DEEP_BENCH
        assert role.starting_probability == 0.0


class TestRosterComposition:
    """Test roster summaries."""

    def test_sample_roster(self, sample_roster):
        composition = analyze_roster_composition(sample_roster)

        assert composition.strongest_positions == ["WR", "RB"]
        assert composition.weakest_positions == ["K", "DEF"]
        assert composition.position_strength["RB"] == 4.5
        assert composition.average_age == 27.6
        assert composition.experience_level == "mixed"
        assert composition.roster_construction == "top_heavy"
        assert composition.bye_week_vulnerabilities == {}

    def test_bye_week_vulnerability(self, make_player):
        roster = [
            make_player("te1", "TE", [8], bye_week=10),
            make_player("qb1", "QB", [20], bye_week=7),
            make_player("qb2", "QB", [10], bye_week=9),
        ]

        composition = analyze_roster_composition(roster)

        assert composition.bye_week_vulnerabilities == {10: ["TE"]}

    @pytest.mark.parametrize("receivers,construction", [(6, "deep"), (4, "balanced"), (2, "top_heavy")])
    def test_roster_construction(self, make_player, receivers, construction):
        roster = [make_player(f"w{i}", "WR", [20 - i]) for i in range(receivers)]

        assert analyze_roster_composition(roster).roster_construction == construction

    @pytest.mark.parametrize(
        "years,level",
        [([0, 1, 2], "rookie"), ([7, 9, 12], "veteran"), ([2, 6], "mixed"), ([None, None], "rookie")],
    )
    def test_experience_level(self, make_player, years, level):
        roster = [make_player(f"p{i}", "RB", [10], years_exp=exp) for i, exp in enumerate(years)]

        assert analyze_roster_composition(roster).experience_level == level


class TestStartSit:
    """Test start/sit labels."""

    def test_labels_follow_depth_chart(self, sample_roster):
        recs = {r.player_id: r for r in generate_start_sit_recommendations(sample_roster)}

        assert recs["qb1"].recommendation == StartSit.MUST_START
        assert recs["qb1"].confidence == 95
        assert recs["rb1"].recommendation == StartSit.STRONG_START
        assert recs["rb2"].confidence == 75
        assert recs["rb3"].recommendation == StartSit.FLEX_PLAY
        assert recs["te1"].recommendation == StartSit.STRONG_START
        assert recs["k1"].recommendation == StartSit.MUST_START
        assert recs["qb2"].recommendation == StartSit.SIT
        assert recs["qb1"].position_context.is_your_best_option

    def test_sorted_by_position_then_confidence(self, sample_roster):
        positions = [r.position for r in generate_start_sit_recommendations(sample_roster)]
        assert positions[:2] == ["QB", "QB"]
        assert positions[-1] == "DEF"

    def test_doubtful_player_avoided(self, make_player):
        roster = [make_player("a", "RB", [20], injury_status="Doubtful"), make_player("b", "RB", [5])]

        recs = {r.player_id: r for r in generate_start_sit_recommendations(roster)}

        assert recs["a"].recommendation == StartSit.AVOID
        assert recs["a"].confidence == 20


class TestWaiverTargets:
    """Test roster-aware waiver targets."""

    def test_fills_empty_and_thin_positions(self, make_player):
        roster = [make_player("qb", "QB", [20], age=28), make_player("rb", "RB", [15], age=25)]
        available = [
            make_player("q2", "QB", [10], age=35),
            make_player("r2", "RB", [8], age=28),
            make_player("w", "WR", [12], age=27),
            make_player("lb", "LB", [9]),
        ]

        targets = generate_waiver_targets(roster, available)

        assert [t.player_id for t in targets] == ["w", "r2"]
        assert targets[0].priority == WaiverPriority.CRITICAL_NEED
        assert targets[0].faab_bid == 25
        assert targets[0].current_gap == "No WR on roster"
        assert targets[1].faab_bid == 20
        assert targets[1].current_gap == "Only 1 RB - need backup"

    def test_younger_player_marked_as_upgrade(self, make_player):
        roster = [make_player(pos.lower(), pos, [10]) for pos in ("QB", "RB", "WR", "TE", "DEF")]
        roster.append(make_player("k1", "K", [8], age=34))

        targets = generate_waiver_targets(roster, [make_player("k2", "K", [7], age=26)])

        assert targets[0].replaces_who == "Player k1"
        assert targets[0].faab_bid == 18
        assert targets[0].waiver_priority == "use_high"

    @pytest.mark.parametrize(
        "roster_positions,candidate,priority,faab,label",
        [
            (["RB", "RB"], {"position": "RB", "age": 28}, WaiverPriority.DEPTH, 8, "use_low"),
            (["RB", "RB"], {"position": "RB", "age": 23}, WaiverPriority.DEPTH, 11, "use_medium"),
            (["WR", "WR", "WR"], {"position": "WR", "age": 22, "years_exp": 1}, WaiverPriority.LOTTERY_TICKET, 8, "use_low"),
            (["TE"], {"position": "TE", "age": 29}, WaiverPriority.IGNORE, 0, "skip"),
        ],
    )
    def test_bid_labels(self, make_player, roster_positions, candidate, priority, faab, label):
        roster = [make_player(f"r{i}", pos, [10], age=26) for i, pos in enumerate(roster_positions)]
        groups = rank_position_groups(roster)

        target = evaluate_waiver_target(make_player("fa", **candidate), groups, weakest_positions=[])

        assert target.priority == priority
        assert target.faab_bid == faab
        assert target.waiver_priority == label

    def test_bid_is_capped(self, make_player, monkeypatch):
        monkeypatch.setattr(team_personalized, "MAX_FAAB_PERCENT", 20)

        target = evaluate_waiver_target(make_player("te", "TE", age=24), {}, weakest_positions=[])

        assert target.impact == WaiverImpact.IMMEDIATE_STARTER
        assert target.faab_bid == 20
        assert target.waiver_priority == "use_high"
        assert target.need_level == "critical"
