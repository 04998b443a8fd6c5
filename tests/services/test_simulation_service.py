"""SimulationService 통합 테스트 (인메모리 SQLite + EventBus + CapturingSink)"""

import random
from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from conftest import LockCheckingRoster

from npcsim.core.event_bus import EventBus
from npcsim.core.event_types import EventTypes
from npcsim.core.notifications import SUMMARY_TITLE, CapturingSink
from npcsim.core.npc.population import seed_population
from npcsim.core.player.models import Player
from npcsim.core.tunables import NotificationMode, SocialTunables
from npcsim.services.roster_service import RosterService
from npcsim.services.simulation_service import SimulationService
from npcsim.services.world import SocialWorld

START = datetime(2024, 5, 1, 6, 0)


def _world(mode: NotificationMode = NotificationMode.COMPACT, **kwargs) -> SocialWorld:
    rng = random.Random(11)
    return SocialWorld(
        agents=seed_population(6, rng),
        player=Player(player_id="player-1", name="hero"),
        tunables=replace(SocialTunables(), notifications_mode=mode, **kwargs),
        rng=rng,
    )


@pytest.fixture()
def setup(db_session):
    """World + EventBus + CapturingSink + RosterService"""
    world = _world()
    bus = EventBus()
    sink = CapturingSink()
    roster = RosterService(db_session)
    service = SimulationService(world, bus, sink, roster)
    return service, world, bus, sink, roster


def _hourly(service: SimulationService, ticks: int):
    return [service.run_tick(START + timedelta(hours=i)) for i in range(ticks)]


class TestTickEmission:
    def test_compact_emits_at_most_one_per_tick(self, setup):
        service, _, _, sink, _ = setup
        for i in range(12):
            sink.clear()
            service.run_tick(START + timedelta(hours=i))
            assert len(sink.notifications) <= 1
            assert all(n.title == SUMMARY_TITLE for n in sink.notifications)

    def test_normal_mode_cap(self):
        world = _world(NotificationMode.NORMAL, notify_max_per_tick=2)
        sink = CapturingSink()
        service = SimulationService(world, EventBus(), sink)
        for i in range(6):
            sink.clear()
            service.run_tick(START + timedelta(hours=i))
            assert len(sink.notifications) <= 2

    def test_off_mode_emits_nothing(self):
        sink = CapturingSink()
        service = SimulationService(_world(NotificationMode.OFF), EventBus(), sink)
        _hourly(service, 6)
        assert sink.notifications == []
        assert service.last_emitted == []

    def test_last_emitted_matches_sink(self, setup):
        service, _, _, sink, _ = setup
        service.run_tick(START)
        assert service.last_emitted == sink.notifications


class TestTickEvents:
    def test_tick_lifecycle_events(self, setup):
        service, world, bus, _, _ = setup
        seen = []
        for event_type in (EventTypes.TICK_STARTED, EventTypes.NPC_ACTED, EventTypes.TICK_COMPLETED):
            bus.subscribe(event_type, lambda e, t=event_type: seen.append(t))

        service.run_tick(START)

        assert seen[0] == EventTypes.TICK_STARTED
        assert seen[-1] == EventTypes.TICK_COMPLETED
        assert seen.count(EventTypes.NPC_ACTED) == len(world.agents)
        assert world.tick_count == 1

    def test_relationship_events_follow_social_steps(self, setup):
        service, _, bus, _, _ = setup
        changes = []
        bus.subscribe(EventTypes.RELATIONSHIP_CHANGED, lambda e: changes.append(e.data))

        reports = _hourly(service, 24)

        social_steps = sum(1 for r in reports for s in r.steps if s.social is not None)
        assert len(changes) == social_steps
        assert all(c["target_id"] == "player-1" for c in changes)

    def test_cascade_timestamp(self, setup):
        service, world, _, _, _ = setup
        service.run_tick(START)
        assert world.last_cascade_at == START
        service.run_tick(START + timedelta(hours=1))
        assert world.last_cascade_at == START


class TestPersistence:
    def test_tick_persists_population(self, setup):
        service, world, _, _, roster = setup
        _hourly(service, 3)

        agents = roster.load_agents()
        assert [a.agent_id for a in agents] == [a.agent_id for a in world.agents]
        for stored, live in zip(agents, world.agents):
            assert stored.social_relations == live.social_relations
            assert stored.memory.score_by_action == live.memory.score_by_action
        assert roster.load_player("player-1").social_relations == world.player.social_relations

    def test_without_roster(self):
        service = SimulationService(_world(), EventBus())
        report = service.run_tick(START)
        assert len(report.steps) == 6

    def test_write_happens_outside_world_lock(self, db_session):
        world = _world()
        roster = LockCheckingRoster(db_session, world.lock)
        service = SimulationService(world, EventBus(), CapturingSink(), roster)

        service.run_tick(START)

        assert roster.lock_free_on_write == [True]
        assert len(roster.load_agents()) == 6
