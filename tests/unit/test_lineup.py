"""Unit tests for the greedy lineup optimizer."""

from halgrid.models import Player
from halgrid.services.lineup import eligible_positions, optimize_lineup, player_projection


class TestOptimizeLineup:
    """Test lineup slot filling."""

    def test_default_slots(self, sample_roster):
        lineup = optimize_lineup(sample_roster)

        by_slot = [(s.slot, s.player_id) for s in lineup.starters]
        assert by_slot == [
            ("QB", "qb1"),
            ("RB", "rb1"),
            ("RB", "rb2"),
            ("WR", "wr1"),
            ("WR", "wr2"),
            ("TE", "te1"),
            ("FLEX", "wr3"),
            ("K", "k1"),
            ("DEF", "def1"),
        ]
        assert set(lineup.bench) == {"qb2", "rb3", "wr4"}
        assert lineup.projected_total == 123.75
        assert lineup.empty_slots == []

    def test_injured_players_never_start(self, make_player):
        players = [
            make_player("a", "QB", [30], injury_status="Out"),
            make_player("b", "QB", [5]),
        ]

        lineup = optimize_lineup(players, ["QB"])

        assert lineup.starters[0].player_id == "b"
        assert lineup.bench == ["a"]

    def test_flex_does_not_steal_scarce_starter(self, make_player):
        players = [make_player("te", "TE", [15]), make_player("wr", "WR", [10])]

        lineup = optimize_lineup(players, ["FLEX", "TE"])

        assert [s.player_id for s in lineup.starters] == ["wr", "te"]

    def test_empty_slots_and_bench_slots_ignored(self, make_player):
        lineup = optimize_lineup([make_player("k", "K", [9])], ["K", "DEF", "BN", "IR"])

        assert [s.slot for s in lineup.starters] == ["K", "DEF"]
        assert lineup.empty_slots == ["DEF"]

    def test_projection_prefers_weekly_projection(self):
        player = Player(player_id="1", name="X", weekly_points=[10, 20], projected_points=4.0)
        assert player_projection(player) == 4.0

    def test_slot_eligibility(self):
        assert eligible_positions("superflex") == ["QB", "RB", "WR", "TE"]
        assert eligible_positions("D/ST") == ["DEF"]
        assert eligible_positions("RB") == ["RB"]
