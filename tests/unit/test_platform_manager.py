"""Unit tests for the platform manager: connections, imports and sync status."""

from unittest.mock import ANY, AsyncMock, MagicMock

import pytest

from halgrid.api.errors import CredentialsError, UnsupportedPlatformError
from halgrid.models import Platform
from halgrid.unification.platform_manager import PlatformManager, SyncState, resolve_platform


@pytest.fixture
def mock_sleeper(
    sleeper_league_payload,
    sleeper_rosters_payload,
    sleeper_users_payload,
    sleeper_players_payload,
    sleeper_matchups_payload,
):
    sleeper = MagicMock()
    sleeper.get_user = AsyncMock(return_value={"user_id": "user_1", "username": "tester"})
    sleeper.get_user_leagues = AsyncMock(return_value=[sleeper_league_payload])
    sleeper.get_all_players = AsyncMock(return_value=sleeper_players_payload)
    sleeper.get_nfl_state = AsyncMock(return_value={"week": 3, "season": "2025"})
    sleeper.get_league_rosters = AsyncMock(return_value=sleeper_rosters_payload)
    sleeper.get_league_users = AsyncMock(return_value=sleeper_users_payload)
    sleeper.get_season_matchups = AsyncMock(
        return_value={1: sleeper_matchups_payload, 2: sleeper_matchups_payload}
    )
    return sleeper


@pytest.fixture
def mock_yahoo(mock_yahoo_league_response, mock_yahoo_teams_response, mock_yahoo_roster_response):
    yahoo = MagicMock()
    yahoo.get_user_leagues = AsyncMock(return_value=mock_yahoo_league_response)
    yahoo.get_user_teams = AsyncMock(return_value=mock_yahoo_teams_response)
    yahoo.get_team_roster = AsyncMock(return_value=mock_yahoo_roster_response)
    return yahoo


@pytest.fixture
def mock_espn_client(espn_league_payload, espn_teams_payload):
    client = MagicMock()
    client.get_league = AsyncMock(return_value=espn_league_payload)
    client.get_league_teams = AsyncMock(return_value=espn_teams_payload)
    client.find_user_team = MagicMock(return_value=espn_teams_payload[0])
    return client


@pytest.fixture
def manager(mock_sleeper, mock_yahoo, mock_espn_client):
    return PlatformManager(
        sleeper=mock_sleeper,
        espn_factory=MagicMock(return_value=mock_espn_client),
        yahoo=mock_yahoo,
    )


class TestResolvePlatform:
    def test_names_are_case_insensitive(self):
        assert resolve_platform(" Sleeper ") is Platform.SLEEPER
        assert resolve_platform(Platform.ESPN) is Platform.ESPN

    def test_unknown_platform(self):
        with pytest.raises(UnsupportedPlatformError, match="cbs not yet supported"):
            resolve_platform("cbs")


class TestConnections:
    """Test credential validation and connection bookkeeping."""

    def test_connect_sleeper(self, manager):
        status = manager.connect_platform("sleeper", {"username": "tester"})

        assert status.platform is Platform.SLEEPER
        assert status.state is SyncState.PENDING
        assert manager.get_connected_platforms() == [Platform.SLEEPER]

    @pytest.mark.parametrize(
        "platform,credentials,message",
        [
            ("sleeper", {}, "Username required for Sleeper"),
            ("yahoo", {"access_token": ""}, "Access token required for Yahoo"),
            ("espn", {"espn_s2": "s2"}, "ESPN cookies required"),
        ],
    )
    def test_missing_credentials(self, manager, platform, credentials, message):
        with pytest.raises(CredentialsError, match=message):
            manager.connect_platform(platform, credentials)
        assert manager.get_connected_platforms() == []

    def test_connect_yahoo_sets_token(self, manager, mock_yahoo):
        manager.connect_platform("yahoo", {"access_token": "tok"})

        mock_yahoo.set_access_token.assert_called_once_with("tok")

    @pytest.mark.asyncio
    async def test_disconnect_removes_teams(self, manager):
        manager.connect_platform("sleeper", {"username": "tester"})
        await manager.import_all_teams()
        assert manager.get_team("sleeper_111_1") is not None

        assert manager.disconnect_platform("sleeper") is True
        assert manager.get_team("sleeper_111_1") is None
        assert manager.get_league("sleeper_111_1") is None
        assert manager.get_sync_status() == {}

    def test_disconnect_unknown(self, manager):
        assert manager.disconnect_platform("espn") is False


class TestImports:
    """Test per-platform imports into the unified team model."""

    @pytest.mark.asyncio
    async def test_import_sleeper(self, manager, mock_sleeper):
        manager.connect_platform("sleeper", {"username": "tester"})

        teams = await manager.import_platform("sleeper")

        assert len(teams) == 1
        team = teams[0]
        assert team.id == "sleeper_111_1"
        assert team.team_name == "Gridiron Gang"
        assert team.record.wins == 6
        assert [p.player_id for p in team.players] == ["4046", "6794", "7564"]
        assert team.players[0].weekly_points == [24.5, 24.5]
        assert manager.get_league("sleeper_111_1").waiver_type == "faab"
        mock_sleeper.get_season_matchups.assert_awaited_once_with("111", range(1, 3))

        status = manager.get_sync_status()["sleeper"]
        assert status.state is SyncState.SYNCED
        assert status.team_count == 1
        assert status.last_sync is not None

    @pytest.mark.asyncio
    async def test_import_sleeper_skips_leagues_without_roster(self, manager, mock_sleeper):
        mock_sleeper.get_user.return_value = {"user_id": "someone_else"}
        manager.connect_platform("sleeper", {"username": "tester"})

        assert await manager.import_platform("sleeper") == []
        assert manager.get_sync_status()["sleeper"].state is SyncState.SYNCED

    @pytest.mark.asyncio
    async def test_unknown_user_records_error(self, manager, mock_sleeper):
        mock_sleeper.get_user.return_value = None
        manager.connect_platform("sleeper", {"username": "ghost"})

        assert await manager.import_all_teams() == []

        status = manager.get_sync_status()["sleeper"]
        assert status.state is SyncState.ERROR
        assert "User ghost not found" in status.error

    @pytest.mark.asyncio
    async def test_import_yahoo(self, manager):
        manager.connect_platform("yahoo", {"access_token": "tok"})

        teams = await manager.import_platform("yahoo")

        assert [t.id for t in teams] == ["yahoo_461.l.61410"]
        assert teams[0].league_name == "Anyone But Andy"
        assert teams[0].team_name == "Yahoo Yodelers"
        league = manager.get_league("yahoo_461.l.61410")
        assert league.total_rosters == 10
        assert league.settings["current_week"] == 6

    @pytest.mark.asyncio
    async def test_import_espn(self, manager, mock_espn_client):
        manager.connect_platform(
            "espn", {"espn_s2": "s2", "swid": "{ABC-123}", "league_ids": ["555"], "season": "2025"}
        )

        teams = await manager.import_platform("espn")

        assert [t.id for t in teams] == ["espn_555_3"]
        assert teams[0].team_name == "Gotham Knights"
        manager.espn_factory.assert_called_once_with(
            espn_s2="s2", swid="{ABC-123}", season=2025, timeout_seconds=ANY
        )
        mock_espn_client.get_league_teams.assert_awaited_once_with("555")

    @pytest.mark.asyncio
    async def test_import_espn_without_leagues(self, manager):
        manager.connect_platform("espn", {"espn_s2": "s2", "swid": "{ABC-123}"})

        assert await manager.import_platform("espn") == []
        manager.espn_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_others(self, manager, mock_yahoo):
        mock_yahoo.get_user_teams.side_effect = RuntimeError("boom")
        manager.connect_platform("sleeper", {"username": "tester"})
        manager.connect_platform("yahoo", {"access_token": "tok"})

        teams = await manager.import_all_teams()

        assert [t.id for t in teams] == ["sleeper_111_1"]
        status = manager.get_sync_status()
        assert status["sleeper"].state is SyncState.SYNCED
        assert status["yahoo"].state is SyncState.ERROR
        assert status["yahoo"].error == "boom"

    @pytest.mark.asyncio
    async def test_import_unconnected_platform(self, manager):
        with pytest.raises(CredentialsError, match="yahoo is not connected"):
            await manager.import_platform("yahoo")

    def test_espn_client_requires_connection(self, manager):
        with pytest.raises(CredentialsError):
            manager.create_espn_client()


class TestCsvImport:
    def test_import_csv(self, manager):
        csv_text = (
            "leagueId,teamId,displayName,position,team\n"
            "L1,T1,Josh Allen,QB,BUF\n"
            "L1,T1,Bijan Robinson,RB,ATL\n"
            "L1,T2,Puka Nacua,WR,LAR\n"
        )

        teams = manager.import_csv(csv_text, "espn")

        assert [t.id for t in teams] == ["espn_L1_T1", "espn_L1_T2"]
        assert len(teams[0].players) == 2
        assert teams[1].team_name == "Team T2"
        assert manager.get_team("espn_L1_T2") is teams[1]

    def test_import_csv_missing_columns(self, manager):
        with pytest.raises(ValueError, match="missing columns"):
            manager.import_csv("leagueId,teamId\nL1,T1\n", "sleeper")
