"""Unit tests for the unified player, league and team models."""

import pytest
from pydantic import ValidationError

from halgrid.models import InjuryStatus, League, Player, Record, Team, normalize_position


class TestPlayer:
    """Test Player normalization."""

    def test_defense_spellings_normalize_to_def(self):
        assert normalize_position("D/ST") == "DEF"
        assert normalize_position("dst") == "DEF"
        assert normalize_position(None) == ""

        player = Player(player_id="1", name="Steelers", position="D/ST", fantasy_positions=["D/ST"])
        assert player.position == "DEF"
        assert player.fantasy_positions == ["DEF"]

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Questionable", InjuryStatus.QUESTIONABLE),
            ("Q", InjuryStatus.QUESTIONABLE),
            ("O", InjuryStatus.OUT),
            ("INJURY_RESERVE", InjuryStatus.IR),
            ("PUP-R", InjuryStatus.PUP),
            ("ACTIVE", None),
            ("OK", None),
            ("", None),
            ("something new", None),
        ],
    )
    def test_injury_status_aliases(self, raw, expected):
        assert Player(player_id="1", name="X", injury_status=raw).injury_status == expected

    def test_is_unavailable(self):
        assert Player(player_id="1", name="X", injury_status="IR").is_unavailable
        assert Player(player_id="1", name="X", injury_status="Out").is_unavailable
        assert not Player(player_id="1", name="X", injury_status="Doubtful").is_unavailable

    def test_plays_checks_fantasy_positions(self):
        player = Player(player_id="1", name="Taysom", position="QB", fantasy_positions=["QB", "TE"])
        assert player.plays("QB")
        assert player.plays("TE")
        assert not player.plays("WR")

    def test_season_average(self):
        assert Player(player_id="1", name="X", weekly_points=[10, 20]).season_average == 15
        assert Player(player_id="1", name="X").season_average == 0.0

    def test_bye_week_range_validated(self):
        with pytest.raises(ValidationError):
            Player(player_id="1", name="X", bye_week=19)


class TestLeagueAndRecord:
    """Test league and record helpers."""

    @pytest.mark.parametrize("raw", [2, "2", "faab"])
    def test_faab_waiver_type(self, raw):
        assert League(league_id="1", settings={"waiver_type": raw}).waiver_type == "faab"

    def test_other_waiver_types(self):
        assert League(league_id="1").waiver_type is None
        assert League(league_id="1", settings={"waiver_type": 0}).waiver_type == "0"

    def test_win_pct_ignores_ties_and_handles_no_games(self):
        assert Record(wins=3, losses=1, ties=1).win_pct == 0.75
        assert Record().win_pct == 0.0
        assert Record(wins=3, losses=1, ties=1).games_played == 5

    def test_team_bench(self, sample_team):
        bench_ids = {p.player_id for p in sample_team.bench}
        assert bench_ids == {"qb2", "rb3", "wr4"}

    def test_team_serializes(self, sample_team):
        dumped = sample_team.model_dump(mode="json")
        assert dumped["platform"] == "sleeper"
        assert isinstance(Team.model_validate(dumped), Team)
