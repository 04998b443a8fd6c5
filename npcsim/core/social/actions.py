"""플레이어 소셜 행동 처리

converse / compliment / request_help / gift / provoke.
모든 핸들러는 SocialActionResult를 반환하고 예외를 던지지 않는다.
거절은 refusal 알림으로만 표현한다.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from npcsim.core.logging import get_logger
from npcsim.core.notifications import Notification, NotificationType
from npcsim.core.npc.memory import add_social_note, record_interaction
from npcsim.core.npc.models import Agent, GiftStats, Mood
from npcsim.core.player.models import Player
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.relationship.dynamics import (
    apply_relation_delta,
    store_relation,
    update_on_social,
)
from npcsim.core.relationship.models import RelationTier, SocialMood
from npcsim.core.social.help import (
    build_help_status,
    describe_help_status,
    grant_help_status,
)
from npcsim.core.social.models import GiftCategory, HelpStatus, SocialActionKind
from npcsim.core.tunables import SocialTunables

logger = get_logger(__name__)

COMPLIMENT_GOOD = 5
COMPLIMENT_BAD = -3
PROVOKE_DELTA = -8

GIFT_BASE = 4
GIFT_AFFINITY = 7
GIFT_SOCIAL = 6
GIFT_REWARD_COUNT = 3
GIFT_REWARD_QUALITY = 5

CLASS_AFFINITY: Dict[GiftCategory, frozenset] = {
    GiftCategory.WARRIOR: frozenset({"warrior", "paladin"}),
    GiftCategory.ARCANE: frozenset({"mage", "sorcerer"}),
}

HELP_BLOCKING_MOODS = frozenset({Mood.ANGRY, Mood.TIRED})
COMPLIMENT_BLOCKING_MOODS = frozenset({Mood.ANGRY, Mood.SAD})


@dataclass
class SocialActionResult:
    """소셜 행동 1회 결과"""

    action: SocialActionKind
    success: bool
    delta: float = 0
    relation: float = 0
    tier: RelationTier = RelationTier.NEUTRAL
    help_status: Optional[HelpStatus] = None
    reward_item: Optional[str] = None
    notifications: List[Notification] = field(default_factory=list)


# ── 선물 분류 ──


def classify_gift(item_id: str) -> GiftCategory:
    item = item_id.lower()
    if "potion" in item:
        return GiftCategory.WARRIOR
    if "stone" in item or "arcane" in item:
        return GiftCategory.ARCANE
    if "flower" in item or "bond" in item:
        return GiftCategory.SOCIAL
    return GiftCategory.NEUTRAL


def gift_quality(item_id: str) -> int:
    item = item_id.lower()
    if "legendary" in item or "deluxe" in item:
        return 3
    if "epic" in item:
        return 2
    return 1


def gift_base_delta(category: GiftCategory, hero_class: str) -> int:
    if category == GiftCategory.SOCIAL:
        return GIFT_SOCIAL
    if hero_class in CLASS_AFFINITY.get(category, frozenset()):
        return GIFT_AFFINITY
    return GIFT_BASE


def gift_reward_item(item_id: str) -> str:
    item = item_id.lower()
    if "potion" in item:
        return "protection-scroll"
    if "stone" in item:
        return "bond-essence"
    return "basic-ration"


# ── 공통 마무리 ──


def _finish(
    agent: Agent,
    player: Player,
    result: SocialActionResult,
    note: str,
    now: datetime,
    tunables: SocialTunables,
) -> SocialActionResult:
    """메모 추가 + 플레이어 쪽 관계 사본 갱신 + 상호작용 카운터"""
    add_social_note(
        agent.memory, player.player_id, note, tunables.social_notes_cap
    )
    relation = agent.relation_to(player.player_id)
    label = agent.memory.friend_status_by_target.get(
        player.player_id, compute_tier(relation, tunables).value
    )
    player.social_relations[agent.agent_id] = relation
    player.npc_memory[agent.agent_id] = label
    player.record_interaction(now)

    result.relation = relation
    result.tier = compute_tier(relation, tunables)
    return result


# ── 핸들러 ──


def converse(
    agent: Agent, player: Player, now: datetime, tunables: SocialTunables
) -> SocialActionResult:
    """대화. 화난 NPC는 neutral 갱신, 그 외 friendly."""
    agent.ensure_defaults()
    mood = SocialMood.NEUTRAL if agent.mood == Mood.ANGRY else SocialMood.FRIENDLY
    update = update_on_social(agent, player.player_id, mood, now, tunables)
    record_interaction(
        agent.memory,
        player.player_id,
        f"converse_{mood.value}",
        update.delta,
        now,
        tunables.interaction_log_cap,
    )
    result = SocialActionResult(
        action=SocialActionKind.CONVERSE,
        success=True,
        delta=update.delta,
        notifications=[
            Notification(
                type=NotificationType.QUEST,
                title="Converse",
                message=f"{agent.name}: relation {update.value:g}",
                icon="💬",
                duration=2000,
            )
        ],
    )
    return _finish(agent, player, result, f"conversed ({mood.value})", now, tunables)


def compliment(
    agent: Agent, player: Player, now: datetime, tunables: SocialTunables
) -> SocialActionResult:
    """칭찬. 화나거나 슬픈 NPC는 역효과."""
    agent.ensure_defaults()
    good = agent.mood not in COMPLIMENT_BLOCKING_MOODS
    raw = COMPLIMENT_GOOD if good else COMPLIMENT_BAD
    update = apply_relation_delta(
        agent, player.player_id, raw, now, tunables, intensity=1.0
    )
    result = SocialActionResult(
        action=SocialActionKind.COMPLIMENT,
        success=good,
        delta=update.delta,
        notifications=[
            Notification(
                type=NotificationType.ACHIEVEMENT if good else NotificationType.STAMINA,
                title="Compliment",
                message=(
                    f"{agent.name} appreciated the compliment"
                    if good
                    else f"{agent.name} did not like the compliment"
                ),
                icon="🙂" if good else "😠",
                duration=2000,
            )
        ],
    )
    note = "complimented" if good else "compliment backfired"
    return _finish(agent, player, result, note, now, tunables)


def request_help(
    agent: Agent,
    player: Player,
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
) -> SocialActionResult:
    """도움 요청

    관계 ≥ help_relation_gate 이고 화나거나 지치지 않았으면 버프 부여.
    실패하면 거절 알림만 남기고 상태는 건드리지 않는다.
    """
    agent.ensure_defaults()
    relation = agent.relation_to(player.player_id)
    if relation < tunables.help_relation_gate or agent.mood in HELP_BLOCKING_MOODS:
        logger.debug(
            f"Help refused: npc={agent.agent_id} relation={relation} mood={agent.mood.value}"
        )
        return SocialActionResult(
            action=SocialActionKind.REQUEST_HELP,
            success=False,
            relation=relation,
            tier=compute_tier(relation, tunables),
            notifications=[
                Notification(
                    type=NotificationType.REFUSAL,
                    title="Request Help",
                    message=f"{agent.name} refused",
                    icon="✋",
                    duration=2000,
                )
            ],
        )

    status = build_help_status(relation, now, rng, tunables.help_status_ttl_hours)
    grant_help_status(player, status)
    result = SocialActionResult(
        action=SocialActionKind.REQUEST_HELP,
        success=True,
        help_status=status,
        notifications=[
            Notification(
                type=NotificationType.ACHIEVEMENT,
                title="Help Granted",
                message=f"{agent.name}: {describe_help_status(status)}",
                icon="🤝",
                duration=2500,
            )
        ],
    )
    return _finish(
        agent, player, result, f"helped ({status.kind.value} L{status.level})", now, tunables
    )


def gift(
    agent: Agent,
    player: Player,
    item_id: str,
    now: datetime,
    tunables: SocialTunables,
) -> SocialActionResult:
    """선물

    누적 횟수 ≥3 이고 누적 품질 ≥5 이면 보답 아이템을 준다.
    누적치는 보답 후에도 초기화하지 않는다.
    """
    agent.ensure_defaults()
    category = classify_gift(item_id)
    raw = gift_base_delta(category, agent.hero_class)
    update = apply_relation_delta(
        agent, player.player_id, raw, now, tunables, intensity=1.0
    )

    stats = agent.memory.gift_stats_by_target.setdefault(player.player_id, GiftStats())
    stats.count += 1
    stats.quality += gift_quality(item_id)

    result = SocialActionResult(
        action=SocialActionKind.GIFT,
        success=True,
        delta=update.delta,
        notifications=[
            Notification(
                type=NotificationType.ACHIEVEMENT,
                title="Gift",
                message=f"{agent.name} liked the gift ({item_id})",
                icon="🎁",
                duration=2000,
            )
        ],
    )

    if stats.count >= GIFT_REWARD_COUNT and stats.quality >= GIFT_REWARD_QUALITY:
        reward = gift_reward_item(item_id)
        player.add_item(reward)
        result.reward_item = reward
        result.notifications.append(
            Notification(
                type=NotificationType.ACHIEVEMENT,
                title="Gift Reward",
                message=f"{agent.name} gave you {reward} in return!",
                icon="🏅",
                duration=3000,
            )
        )
    return _finish(agent, player, result, f"gift: {item_id}", now, tunables)


def provoke(
    agent: Agent, player: Player, now: datetime, tunables: SocialTunables
) -> SocialActionResult:
    """도발. 수확 체감 없이 고정 -8."""
    agent.ensure_defaults()
    current = agent.relation_to(player.player_id)
    store_relation(agent, player.player_id, current + PROVOKE_DELTA, now, tunables)
    result = SocialActionResult(
        action=SocialActionKind.PROVOKE,
        success=True,
        delta=agent.relation_to(player.player_id) - current,
        notifications=[
            Notification(
                type=NotificationType.STAMINA,
                title="Provoke",
                message=f"{agent.name} got irritated",
                icon="⚠️",
                duration=2000,
            )
        ],
    )
    return _finish(agent, player, result, "provoked", now, tunables)


def perform_social_action(
    action: SocialActionKind,
    agent: Agent,
    player: Player,
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
    item_id: Optional[str] = None,
) -> SocialActionResult:
    """행동 종류별 핸들러 디스패치"""
    handlers: Dict[SocialActionKind, Callable[[], SocialActionResult]] = {
        SocialActionKind.CONVERSE: lambda: converse(agent, player, now, tunables),
        SocialActionKind.COMPLIMENT: lambda: compliment(agent, player, now, tunables),
        SocialActionKind.REQUEST_HELP: lambda: request_help(
            agent, player, now, rng, tunables
        ),
        SocialActionKind.GIFT: lambda: gift(
            agent, player, item_id or "gift", now, tunables
        ),
        SocialActionKind.PROVOKE: lambda: provoke(agent, player, now, tunables),
    }
    return handlers[action]()
