"""Simulation Service — 틱 실행, 이벤트 발행, 알림 방출, 저장

architecture: Service → Core, Service → DB 허용
Service → Service 금지, EventBus 경유
"""

from datetime import datetime
from typing import Callable, List, Optional

from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.notifications import (
    Notification,
    NotificationSink,
    flush_tick_notifications,
)
from npcsim.core.npc.actions import TITLE_MISSION
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.simulation import TickReport, run_population_pass
from npcsim.services.roster_service import RosterService, RosterSnapshot
from npcsim.services.world import SocialWorld

logger = get_logger(__name__)

SOURCE = "simulation_service"


class SimulationService:
    """인구 틱 1회 = 잠금 → 순수 처리 → 이벤트 → 알림 → 스냅샷, 잠금 해제 후 저장"""

    def __init__(
        self,
        world: SocialWorld,
        event_bus: EventBus,
        sink: Optional[NotificationSink] = None,
        roster: Optional[RosterService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._world = world
        self._bus = event_bus
        self._sink = sink
        self._roster = roster
        self._clock = clock
        self.last_emitted: List[Notification] = []

    def run_tick(self, now: Optional[datetime] = None) -> TickReport:
        """전체 인구 1회 처리. 동시에 하나만 실행된다."""
        world = self._world
        with world.lock:
            now = now or self._clock()
            self._bus.reset_chain()
            self._emit(EventTypes.TICK_STARTED, {"tick": world.tick_count + 1})

            report = run_population_pass(
                world.agents,
                world.player,
                now,
                world.rng,
                world.tunables,
                last_cascade_at=world.last_cascade_at,
            )
            world.tick_count += 1
            if report.cascade_ran:
                world.last_cascade_at = now

            self._publish(report)
            self.last_emitted = flush_tick_notifications(
                self._sink,
                report.notifications,
                world.tunables.notifications_mode,
                world.tunables.notify_max_per_tick,
                highlight_title=TITLE_MISSION,
            )
            snapshot = self._capture()

            self._emit(
                EventTypes.TICK_COMPLETED,
                {
                    "tick": world.tick_count,
                    "agents": len(report.steps),
                    "notifications": len(self.last_emitted),
                },
            )
            logger.info(
                f"Tick {world.tick_count} done: agents={len(report.steps)} "
                f"collected={len(report.notifications)} emitted={len(self.last_emitted)}"
            )
        self._write(snapshot, now)
        return report

    # ── 내부 ─────────────────────────────────────────────────

    def _emit(self, event_type: str, data: dict) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=SOURCE))

    def _publish(self, report: TickReport) -> None:
        player_id = self._world.player.player_id if self._world.player else None
        for step in report.steps:
            self._emit(
                EventTypes.NPC_ACTED,
                {
                    "agent_id": step.agent_id,
                    "action": step.action.value,
                    "bias": step.bias.value,
                    "mood": step.mood.value,
                },
            )
            update = step.social
            if update is not None:
                self._emit(
                    EventTypes.RELATIONSHIP_CHANGED,
                    {
                        "source_id": step.agent_id,
                        "target_id": player_id,
                        "old_value": update.previous,
                        "new_value": update.value,
                        "delta": update.delta,
                    },
                )
                old_tier = compute_tier(update.previous, self._world.tunables)
                if old_tier != update.tier:
                    self._emit(
                        EventTypes.TIER_CHANGED,
                        {
                            "agent_id": step.agent_id,
                            "target_id": player_id,
                            "old_tier": old_tier.value,
                            "new_tier": update.tier.value,
                        },
                    )
            if step.special_event is not None:
                self._emit(
                    EventTypes.SPECIAL_EVENT_FIRED,
                    {
                        "agent_id": step.agent_id,
                        "kind": step.special_event.kind.value,
                        "tier": step.special_event.tier.value,
                    },
                )

        if report.pair_event is not None:
            pair = report.pair_event
            self._emit(
                EventTypes.NPC_PAIR_INTERACTED,
                {"first_id": pair.first_id, "second_id": pair.second_id, "delta": pair.delta},
            )
        if report.duel_issued and self._world.player is not None:
            invite = self._world.player.duel_invites[-1]
            self._emit(
                EventTypes.DUEL_INVITE_ISSUED,
                {"npc_id": invite.npc_id, "type": invite.type.value},
            )
        if report.cascaded:
            self._emit(
                EventTypes.REPUTATION_CASCADED,
                {"player_id": player_id, "agent_ids": list(report.cascaded)},
            )

    def _capture(self) -> Optional[RosterSnapshot]:
        if self._roster is None:
            return None
        return self._roster.capture(self._world.agents, self._world.player)

    def _write(self, snapshot: Optional[RosterSnapshot], now: datetime) -> None:
        if self._roster is not None and snapshot is not None:
            self._roster.write(snapshot, now)
