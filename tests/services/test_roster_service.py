"""RosterService 테스트 (인메모리 SQLite)"""

import random
from datetime import datetime, timedelta

from npcsim.core.social.models import HelpStatus, HelpStatusKind
from npcsim.db.models import AgentModel
from npcsim.services.roster_service import RosterService

NOW = datetime(2024, 5, 1, 12, 0)


class TestLoadOrSeed:
    def test_seeds_once(self, db_session):
        roster = RosterService(db_session)
        agents, player = roster.load_or_seed(5, random.Random(1), NOW, "player-1", "hero")

        assert [a.agent_id for a in agents] == [f"npc-{i:03d}" for i in range(1, 6)]
        assert player.name == "hero"
        assert db_session.query(AgentModel).count() == 5

        again, same_player = roster.load_or_seed(9, random.Random(2), NOW, "player-1")
        assert [a.agent_id for a in again] == [a.agent_id for a in agents]
        assert [a.name for a in again] == [a.name for a in agents]
        assert same_player.player_id == "player-1"

    def test_missing_player(self, db_session):
        assert RosterService(db_session).load_player("nobody") is None


class TestSave:
    def test_save_updates_rows(self, db_session):
        roster = RosterService(db_session)
        agents, player = roster.load_or_seed(2, random.Random(1), NOW, "player-1")

        agents[0].level = 7
        agents[0].social_relations["player-1"] = 33.0
        roster.save_agents(agents, NOW + timedelta(minutes=1))

        row = db_session.get(AgentModel, agents[0].agent_id)
        assert row.level == 7
        assert roster.load_agents()[0].relation_to("player-1") == 33.0

    def test_player_help_status_persists(self, db_session):
        roster = RosterService(db_session)
        _, player = roster.load_or_seed(1, random.Random(1), NOW, "player-1")
        player.stats.help_status = HelpStatus(
            kind=HelpStatusKind.AMBUSH_SHIELD,
            level=3,
            magnitude=0.5,
            expires_at=NOW + timedelta(hours=2),
        )
        roster.save_player(player, NOW)

        loaded = roster.load_player("player-1")
        assert loaded.stats.help_status.kind == HelpStatusKind.AMBUSH_SHIELD
        assert loaded.stats.help_status.expires_at == NOW + timedelta(hours=2)


class TestSnapshots:
    def test_stale_snapshot_is_skipped(self, db_session):
        """먼저 캡처된 스냅샷이 늦게 써져도 최신 행을 덮지 않는다"""
        roster = RosterService(db_session)
        agents, player = roster.load_or_seed(2, random.Random(1), NOW, "player-1")

        agents[0].level = 3
        older = roster.capture(agents, player)
        agents[0].level = 9
        newer = roster.capture(agents, player)

        assert roster.write(newer, NOW) == 3
        assert roster.write(older, NOW) == 0
        assert db_session.get(AgentModel, agents[0].agent_id).level == 9

    def test_partial_capture_keeps_position(self, db_session):
        roster = RosterService(db_session)
        agents, player = roster.load_or_seed(3, random.Random(1), NOW, "player-1")

        snapshot = roster.capture(agents, player, only=[agents[2].agent_id])

        assert [row.agent_id for row in snapshot.agents] == [agents[2].agent_id]
        assert snapshot.agents[0].position == 2
        assert snapshot.row_count() == 2
        assert roster.write(snapshot, NOW) == 2

    def test_snapshot_is_detached_from_live_state(self, db_session):
        roster = RosterService(db_session)
        agents, player = roster.load_or_seed(1, random.Random(1), NOW, "player-1")
        agents[0].social_relations["player-1"] = 20.0

        snapshot = roster.capture(agents, player)
        agents[0].social_relations["player-1"] = 80.0
        roster.write(snapshot, NOW)

        assert roster.load_agents()[0].relation_to("player-1") == 20.0
