"""Social Service — 플레이어 소셜 행동 진입점

틱과 같은 lock 아래에서 Core 핸들러를 호출하고,
결과 알림을 즉시 방출한다. 저장은 바뀐 NPC와 플레이어만, lock 밖에서 한다.
"""

from datetime import datetime
from typing import Callable, Optional, Sequence

from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import Agent
from npcsim.core.notifications import NotificationSink, safe_emit
from npcsim.core.relationship.benefits import (
    mission_buff_percent,
    shop_discount_percent,
    unlock_tier,
)
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.social.actions import SocialActionResult, perform_social_action
from npcsim.core.social.help import consume_help_status
from npcsim.core.social.models import HelpStatus, SocialActionKind
from npcsim.services.roster_service import RosterService, RosterSnapshot
from npcsim.services.world import SocialWorld

logger = get_logger(__name__)

SOURCE = "social_service"


class SocialService:
    """converse / compliment / request_help / gift / provoke + 혜택 조회"""

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

    def perform(
        self,
        agent_id: str,
        action: SocialActionKind,
        item_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[SocialActionResult]:
        """행동 실행. NPC나 플레이어가 없으면 None."""
        world = self._world
        with world.lock:
            agent = world.get_agent(agent_id)
            player = world.player
            if agent is None or player is None:
                logger.debug(f"Social action skipped: npc={agent_id} player={player}")
                return None
            now = now or self._clock()

            agent.ensure_defaults()
            old_label = self._tier_label(agent, player.player_id)
            result = perform_social_action(
                action, agent, player, now, world.rng, world.tunables, item_id=item_id
            )
            new_label = self._tier_label(agent, player.player_id)
            for notification in result.notifications:
                safe_emit(self._sink, notification)
            self._publish(agent_id, player.player_id, old_label, new_label, result)
            snapshot = self._capture(only=[agent_id])

            logger.info(
                f"Social action {action.value}: npc={agent_id} success={result.success} "
                f"delta={result.delta} relation={result.relation:g}"
            )
        self._write(snapshot, now)
        return result

    def consume_help(self, now: Optional[datetime] = None) -> Optional[HelpStatus]:
        """다음 임무용 도움 버프를 꺼낸다."""
        world = self._world
        with world.lock:
            if world.player is None:
                return None
            now = now or self._clock()
            status = consume_help_status(world.player, now)
            snapshot = self._capture(only=[])
        self._write(snapshot, now)
        return status

    def benefits(self) -> dict:
        world = self._world
        with world.lock:
            if world.player is None:
                return {}
            return {
                "shop_discount": shop_discount_percent(world.player, world.tunables),
                "mission_buff": mission_buff_percent(world.player, world.tunables),
                "unlock_tier": unlock_tier(world.player, world.tunables).value,
            }

    # ── 내부 ─────────────────────────────────────────────────

    def _emit(self, event_type: str, data: dict) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=SOURCE))

    def _tier_label(self, agent: Agent, player_id: str) -> str:
        """저장된 단계 라벨. 아직 없으면 현재 점수의 단계."""
        label = agent.memory.friend_status_by_target.get(player_id)
        if label is not None:
            return label
        return compute_tier(agent.relation_to(player_id), self._world.tunables).value

    def _publish(
        self,
        agent_id: str,
        player_id: str,
        old_label: str,
        new_label: str,
        result: SocialActionResult,
    ) -> None:
        if not result.success and result.action == SocialActionKind.REQUEST_HELP:
            self._emit(
                EventTypes.SOCIAL_ACTION_REFUSED,
                {"agent_id": agent_id, "action": result.action.value},
            )
            return

        self._emit(
            EventTypes.SOCIAL_ACTION_PERFORMED,
            {
                "agent_id": agent_id,
                "action": result.action.value,
                "delta": result.delta,
                "relation": result.relation,
            },
        )
        if new_label != old_label:
            self._emit(
                EventTypes.TIER_CHANGED,
                {
                    "agent_id": agent_id,
                    "target_id": player_id,
                    "old_tier": old_label,
                    "new_tier": new_label,
                },
            )
        if result.help_status is not None:
            self._emit(
                EventTypes.HELP_GRANTED,
                {
                    "agent_id": agent_id,
                    "kind": result.help_status.kind.value,
                    "level": result.help_status.level,
                },
            )
        if result.reward_item is not None:
            self._emit(
                EventTypes.GIFT_REWARDED,
                {"agent_id": agent_id, "item_id": result.reward_item},
            )

    def _capture(self, only: Sequence[str]) -> Optional[RosterSnapshot]:
        """바뀐 NPC와 플레이어만 담는다."""
        if self._roster is None:
            return None
        return self._roster.capture(self._world.agents, self._world.player, only=only)

    def _write(self, snapshot: Optional[RosterSnapshot], now: datetime) -> None:
        if self._roster is not None and snapshot is not None:
            self._roster.write(snapshot, now)
