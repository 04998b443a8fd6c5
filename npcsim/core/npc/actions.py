"""자율 행동 선택 + 효과

루틴 편향 → 후보 풀 → 균등 선택. social 행동의 관계 처리는
core.simulation 쪽에서 한다 (플레이어가 필요하므로).
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from npcsim.core.notifications import Notification, NotificationType
from npcsim.core.npc.memory import record_interaction, try_claim_cooldown
from npcsim.core.npc.models import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_NAMES,
    COMPLETED_QUESTS_CAP,
    ActionKind,
    ActivityKind,
    Agent,
)
from npcsim.core.tunables import SocialTunables

# 중복 = 가중치
ACTION_POOLS: Dict[ActivityKind, Tuple[ActionKind, ...]] = {
    ActivityKind.TRAIN: (
        ActionKind.TRAIN,
        ActionKind.TRAIN,
        ActionKind.SOCIAL,
        ActionKind.MARKET,
    ),
    ActivityKind.MISSION: (
        ActionKind.MISSION,
        ActionKind.MISSION,
        ActionKind.EXPLORE,
        ActionKind.SOCIAL,
    ),
    ActivityKind.SOCIAL: (
        ActionKind.SOCIAL,
        ActionKind.SOCIAL,
        ActionKind.MARKET,
        ActionKind.TRAIN,
    ),
    ActivityKind.TAVERN: (
        ActionKind.SOCIAL,
        ActionKind.SOCIAL,
        ActionKind.MARKET,
        ActionKind.EXPLORE,
    ),
}
DEFAULT_POOL: Tuple[ActionKind, ...] = (
    ActionKind.EXPLORE,
    ActionKind.MISSION,
    ActionKind.TRAIN,
    ActionKind.MARKET,
)

MISSION_XP_RANGE = (10, 49)
MISSION_GOLD_RANGE = (5, 34)
MARKET_GOLD_RANGE = (3, 22)
EXPLORE_FIND_CHANCE = 0.3
RISK_XP_THRESHOLD = 30

# 알림 제목 (compact 요약의 집계 키)
TITLE_TRAINING = "NPC Training"
TITLE_MISSION = "NPC Mission"
TITLE_MARKET = "NPC Trading"
TITLE_EXPLORE = "NPC Exploration"


@dataclass
class ActionOutcome:
    """행동 1회 결과"""

    action: ActionKind
    notifications: List[Notification] = field(default_factory=list)
    xp_gained: int = 0
    gold_gained: int = 0
    item_found: bool = False
    attribute: Optional[str] = None


def candidate_pool(bias: ActivityKind, prefers_party: bool) -> List[ActionKind]:
    pool = list(ACTION_POOLS.get(bias, DEFAULT_POOL))
    if prefers_party:
        pool.insert(0, ActionKind.SOCIAL)
    return pool


def choose_action(agent: Agent, bias: ActivityKind, rng: random.Random) -> ActionKind:
    return rng.choice(candidate_pool(bias, agent.personality.prefers_party))


def perform_train(
    agent: Agent, now: datetime, rng: random.Random, tunables: SocialTunables
) -> ActionOutcome:
    attr = rng.choice(ATTRIBUTE_NAMES)
    agent.attributes[attr] = max(
        0, min(ATTRIBUTE_MAX, agent.attributes.get(attr, 0) + 1)
    )
    agent.stats.total_play_time += 1
    record_interaction(
        agent.memory, agent.agent_id, "train", 1, now, tunables.interaction_log_cap
    )
    return ActionOutcome(
        action=ActionKind.TRAIN,
        attribute=attr,
        notifications=[
            Notification(
                type=NotificationType.XP,
                title=TITLE_TRAINING,
                message=f"{agent.name} sharpened their {attr}",
                icon="🏋️",
                duration=2500,
            )
        ],
    )


def perform_mission(
    agent: Agent, now: datetime, rng: random.Random, tunables: SocialTunables
) -> ActionOutcome:
    xp = rng.randint(*MISSION_XP_RANGE)
    gold = rng.randint(*MISSION_GOLD_RANGE)
    agent.progression.xp += xp
    agent.progression.gold += gold
    agent.stats.quests_completed += 1
    agent.completed_quests.append(f"npc-quest-{int(now.timestamp())}")
    if len(agent.completed_quests) > COMPLETED_QUESTS_CAP:
        del agent.completed_quests[: len(agent.completed_quests) - COMPLETED_QUESTS_CAP]
    record_interaction(
        agent.memory, agent.agent_id, "mission", 2, now, tunables.interaction_log_cap
    )

    adjust = 2 if xp > RISK_XP_THRESHOLD else -1
    personality = agent.personality
    personality.risk_affinity = max(0, min(100, personality.risk_affinity + adjust))

    return ActionOutcome(
        action=ActionKind.MISSION,
        xp_gained=xp,
        gold_gained=gold,
        notifications=[
            Notification(
                type=NotificationType.QUEST,
                title=TITLE_MISSION,
                message=f"{agent.name} completed a mission (+{xp} XP, +{gold} gold)",
                icon="📜",
                duration=2800,
            )
        ],
    )


def perform_market(
    agent: Agent, now: datetime, rng: random.Random, tunables: SocialTunables
) -> ActionOutcome:
    gold = rng.randint(*MARKET_GOLD_RANGE)
    agent.progression.gold += gold
    outcome = ActionOutcome(action=ActionKind.MARKET, gold_gained=gold)
    if try_claim_cooldown(
        agent.memory, ActionKind.MARKET.value, now, tunables.interaction_cooldown_seconds
    ):
        outcome.notifications.append(
            Notification(
                type=NotificationType.ITEM,
                title=TITLE_MARKET,
                message=f"{agent.name} traded at the market (+{gold} gold)",
                icon="🪙",
                duration=2200,
            )
        )
    return outcome


def perform_explore(
    agent: Agent, now: datetime, rng: random.Random, tunables: SocialTunables
) -> ActionOutcome:
    found = rng.random() < EXPLORE_FIND_CHANCE
    if found:
        agent.stats.items_found += 1
    outcome = ActionOutcome(action=ActionKind.EXPLORE, item_found=found)
    if try_claim_cooldown(
        agent.memory, ActionKind.EXPLORE.value, now, tunables.interaction_cooldown_seconds
    ):
        message = (
            f"{agent.name} found a rare item"
            if found
            else f"{agent.name} scouted the nearby areas"
        )
        outcome.notifications.append(
            Notification(
                type=NotificationType.QUEST,
                title=TITLE_EXPLORE,
                message=message,
                icon="✨" if found else "🧭",
                duration=2200,
            )
        )
    return outcome


SOLO_ACTIONS = {
    ActionKind.TRAIN: perform_train,
    ActionKind.MISSION: perform_mission,
    ActionKind.MARKET: perform_market,
    ActionKind.EXPLORE: perform_explore,
}


def bump_action_score(agent: Agent, action: ActionKind) -> None:
    scores = agent.memory.score_by_action
    scores[action.value] = scores.get(action.value, 0) + 1
