"""SocialService 통합 테스트"""

import random
from datetime import datetime

import pytest
from conftest import LockCheckingRoster

from npcsim.core.event_bus import EventBus
from npcsim.core.event_types import EventTypes
from npcsim.core.notifications import CapturingSink, NotificationType
from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player
from npcsim.core.social.models import SocialActionKind
from npcsim.db.models import AgentModel
from npcsim.services.roster_service import RosterService
from npcsim.services.social_service import SocialService
from npcsim.services.world import SocialWorld

NOW = datetime(2024, 5, 1, 12, 0)


@pytest.fixture()
def setup(db_session):
    world = SocialWorld(
        agents=[
            Agent(agent_id="npc-001", name="Aldric", social_relations={"player-1": 10}),
            Agent(agent_id="npc-002", name="Brena", social_relations={"player-1": 60}),
        ],
        player=Player(player_id="player-1", name="hero"),
        rng=random.Random(5),
    )
    bus = EventBus()
    sink = CapturingSink()
    roster = RosterService(db_session)
    service = SocialService(world, bus, sink, roster, clock=lambda: NOW)

    events = []
    for event_type in (
        EventTypes.SOCIAL_ACTION_PERFORMED,
        EventTypes.SOCIAL_ACTION_REFUSED,
        EventTypes.TIER_CHANGED,
        EventTypes.HELP_GRANTED,
        EventTypes.GIFT_REWARDED,
    ):
        bus.subscribe(event_type, lambda e: events.append(e))
    return service, world, sink, roster, events


class TestPerform:
    def test_converse(self, setup):
        service, world, sink, _, events = setup
        result = service.perform("npc-001", SocialActionKind.CONVERSE)

        assert result.success is True
        assert result.relation == 14
        assert sink.titles() == ["Converse"]
        assert [e.event_type for e in events] == [EventTypes.SOCIAL_ACTION_PERFORMED]
        assert world.player.social_relations["npc-001"] == 14

    def test_refused_help(self, setup):
        """관계 10 → 거절 알림, 버프 없음"""
        service, world, sink, _, events = setup
        result = service.perform("npc-001", SocialActionKind.REQUEST_HELP)

        assert result.success is False
        assert [n.type for n in sink.notifications] == [NotificationType.REFUSAL]
        assert [e.event_type for e in events] == [EventTypes.SOCIAL_ACTION_REFUSED]
        assert world.player.stats.help_status is None

    def test_granted_help_then_consume(self, setup):
        service, world, _, _, events = setup
        result = service.perform("npc-002", SocialActionKind.REQUEST_HELP)

        assert result.help_status is not None
        assert EventTypes.HELP_GRANTED in [e.event_type for e in events]
        consumed = service.consume_help(NOW)
        assert consumed is result.help_status
        assert world.player.stats.help_status is None

    def test_gift_reward_event(self, setup):
        service, world, _, _, events = setup
        for _ in range(3):
            service.perform("npc-002", SocialActionKind.GIFT, item_id="epic-flower")

        rewarded = [e for e in events if e.event_type == EventTypes.GIFT_REWARDED]
        assert len(rewarded) == 1
        assert rewarded[0].data["item_id"] == "basic-ration"
        assert world.player.inventory == {"basic-ration": 1}

    def test_unknown_agent(self, setup):
        service, _, sink, _, events = setup
        assert service.perform("npc-999", SocialActionKind.CONVERSE) is None
        assert sink.notifications == []
        assert events == []

    def test_persists_after_action(self, setup):
        service, _, _, roster, _ = setup
        service.perform("npc-001", SocialActionKind.PROVOKE)
        stored = {a.agent_id: a for a in roster.load_agents()}
        assert stored["npc-001"].relation_to("player-1") == 2
        assert roster.load_player("player-1").social_relations["npc-001"] == 2

    def test_persists_only_acted_agent(self, setup, db_session):
        service, _, _, _, _ = setup
        service.perform("npc-001", SocialActionKind.CONVERSE)
        assert [row.agent_id for row in db_session.query(AgentModel).all()] == ["npc-001"]
        assert db_session.get(AgentModel, "npc-001").position == 0


class TestTierEvents:
    """단계 이벤트는 저장된 라벨끼리 비교한다."""

    @staticmethod
    def _tier_events(events):
        return [e for e in events if e.event_type == EventTypes.TIER_CHANGED]

    def test_kept_label_is_not_a_change(self, setup):
        """라벨 known, 점수 2 → 칭찬 후 7(neutral)이어도 known 유지, 이벤트 없음"""
        service, world, _, _, events = setup
        agent = world.get_agent("npc-001")
        agent.social_relations["player-1"] = 2
        agent.memory.friend_status_by_target["player-1"] = "known"

        result = service.perform("npc-001", SocialActionKind.COMPLIMENT)

        assert result.relation == 7
        assert agent.memory.friend_status_by_target["player-1"] == "known"
        assert self._tier_events(events) == []

    def test_first_neutral_action_is_silent(self, setup):
        """라벨 없는 NPC의 첫 행동이 neutral에 머물면 이벤트 없음"""
        service, world, _, _, events = setup
        agent = world.get_agent("npc-001")
        agent.social_relations["player-1"] = 0

        result = service.perform("npc-001", SocialActionKind.PROVOKE)

        assert result.relation == -8
        assert agent.memory.friend_status_by_target["player-1"] == "neutral"
        assert self._tier_events(events) == []

    def test_crossing_threshold(self, setup):
        service, world, _, _, events = setup
        world.get_agent("npc-001").social_relations["player-1"] = 38

        result = service.perform("npc-001", SocialActionKind.CONVERSE)

        assert result.relation == 41
        changed = self._tier_events(events)
        assert len(changed) == 1
        assert changed[0].data["old_tier"] == "known"
        assert changed[0].data["new_tier"] == "friend"


class TestBenefits:
    def test_benefits_follow_labels(self, setup):
        service, _, _, _, _ = setup
        assert service.benefits() == {
            "shop_discount": 0.0,
            "mission_buff": 0.0,
            "unlock_tier": "none",
        }
        service.perform("npc-002", SocialActionKind.CONVERSE)
        benefits = service.benefits()
        assert benefits["shop_discount"] == pytest.approx(0.10)
        assert benefits["unlock_tier"] == "tier3"


class TestPersistenceLocking:
    def test_write_happens_outside_world_lock(self, setup, db_session):
        _, world, _, _, _ = setup
        roster = LockCheckingRoster(db_session, world.lock)
        service = SocialService(world, EventBus(), CapturingSink(), roster, clock=lambda: NOW)

        service.perform("npc-002", SocialActionKind.CONVERSE)
        service.consume_help(NOW)

        assert roster.lock_free_on_write == [True, True]
        assert roster.load_player("player-1") is not None
