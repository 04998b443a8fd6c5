"""관계 변동 — 감쇠, 소셜 갱신, 평판 전파, NPC↔NPC 상호작용

Agent를 직접 갱신한다. 난수/시각은 호출자가 주입.
"""

import math
import random
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from npcsim.core.npc.memory import count_positive_interactions
from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player
from npcsim.core.relationship.calculations import (
    clamp_relation,
    compute_tier,
    scale_delta,
)
from npcsim.core.relationship.models import (
    NpcPairEvent,
    RelationTier,
    SocialMood,
    SocialUpdate,
)
from npcsim.core.tunables import SocialTunables

RECENCY_WINDOW_HOURS = 3
POSITIVE_HISTORY_CAP = 3
NEUTRAL_DELTA = 1
CASCADE_GAIN_CAP = 2
NPC_PAIR_DELTA_RANGE = (-3, 3)


def apply_decay(
    agent: Agent, target_id: str, now: datetime, tunables: SocialTunables
) -> float:
    """마지막 접촉 이후 경과 일수만큼 감쇠.

    접촉 기록이 없으면 그대로. 방향 무관하게 점수를 깎는다.
    """
    agent.ensure_defaults()
    current = agent.relation_to(target_id)
    last = agent.memory.last_contact_by_target.get(target_id)
    if last is None:
        return current
    elapsed_days = max(0.0, (now - last).total_seconds() / 86400)
    value = clamp_relation(current - elapsed_days * tunables.decay_per_day)
    agent.social_relations[target_id] = value
    return value


def _raw_social_delta(
    agent: Agent, target_id: str, mood: SocialMood, now: datetime, tunables: SocialTunables
) -> int:
    if mood == SocialMood.NEUTRAL:
        return NEUTRAL_DELTA
    if mood == SocialMood.HOSTILE:
        return -tunables.negative_weight

    positives = min(
        POSITIVE_HISTORY_CAP, count_positive_interactions(agent.memory, target_id)
    )
    recency = 0.0
    last = agent.memory.last_contact_by_target.get(target_id)
    if last is not None:
        hours = (now - last).total_seconds() / 3600
        recency = max(0.0, RECENCY_WINDOW_HOURS - hours)
    return tunables.positive_weight + positives + math.floor(recency)


def store_relation(
    agent: Agent,
    target_id: str,
    value: float,
    now: datetime,
    tunables: SocialTunables,
) -> RelationTier:
    """점수 저장 + 단계 라벨 갱신 + 접촉 시각 기록.

    새 단계가 neutral이고 기존 라벨이 있으면 라벨을 유지한다.
    """
    agent.ensure_defaults()
    value = clamp_relation(value)
    agent.social_relations[target_id] = value
    tier = compute_tier(value, tunables)
    labels = agent.memory.friend_status_by_target
    if not (tier == RelationTier.NEUTRAL and target_id in labels):
        labels[target_id] = tier.value
    agent.memory.last_contact_by_target[target_id] = now
    return tier


def apply_relation_delta(
    agent: Agent,
    target_id: str,
    raw: float,
    now: datetime,
    tunables: SocialTunables,
    intensity: Optional[float] = None,
) -> SocialUpdate:
    """raw 변화량을 강도/수확 체감으로 보정해 적용.

    intensity를 주지 않으면 튜닝 값의 관계 강도를 쓴다.
    """
    agent.ensure_defaults()
    current = agent.relation_to(target_id)
    factor = tunables.intensity if intensity is None else intensity
    delta = scale_delta(raw, current, factor)
    tier = store_relation(agent, target_id, current + delta, now, tunables)
    return SocialUpdate(
        value=agent.social_relations[target_id],
        tier=tier,
        delta=delta,
        previous=current,
    )


def update_on_social(
    agent: Agent,
    target_id: str,
    mood: SocialMood,
    now: datetime,
    tunables: SocialTunables,
) -> SocialUpdate:
    """소셜 상호작용 1회 반영

    friendly → 기본 가중치 + min(3, 과거 긍정 횟수) + floor(최근성),
    neutral → +1, hostile → -부정 가중치.
    """
    agent.ensure_defaults()
    raw = _raw_social_delta(agent, target_id, mood, now, tunables)
    return apply_relation_delta(agent, target_id, raw, now, tunables)


def cascade_global_reputation(
    player: Player,
    agents: Iterable[Agent],
    now: datetime,
    tunables: SocialTunables,
) -> List[str]:
    """플레이어 진영 평판 → 최근 접촉 NPC 관계로 전파

    최근 cascade_contact_window_days일 안에 접촉한 NPC만 min(2, delta) 상승.
    갱신된 NPC ID 목록을 반환.
    """
    total = player.total_positive_reputation()
    if total <= 0:
        return []
    delta = math.floor(total * tunables.faction_cascade_percent)
    gain = min(CASCADE_GAIN_CAP, delta)
    if gain <= 0:
        return []

    window = timedelta(days=tunables.cascade_contact_window_days)
    touched: List[str] = []
    for agent in agents:
        agent.ensure_defaults()
        last = agent.memory.last_contact_by_target.get(player.player_id)
        if last is None or now - last > window:
            continue
        agent.social_relations[player.player_id] = clamp_relation(
            agent.relation_to(player.player_id) + gain
        )
        touched.append(agent.agent_id)
    return touched


def random_npc_npc_event(
    agents: Sequence[Agent], rng: random.Random
) -> Optional[NpcPairEvent]:
    """서로 다른 NPC 둘을 골라 같은 변화량을 양쪽에 적용. 2명 미만이면 None."""
    if len(agents) < 2:
        return None
    first, second = rng.sample(list(agents), 2)
    delta = rng.randint(*NPC_PAIR_DELTA_RANGE)
    first.social_relations[second.agent_id] = clamp_relation(
        first.relation_to(second.agent_id) + delta
    )
    second.social_relations[first.agent_id] = clamp_relation(
        second.relation_to(first.agent_id) + delta
    )
    return NpcPairEvent(
        first_id=first.agent_id, second_id=second.agent_id, delta=delta
    )
