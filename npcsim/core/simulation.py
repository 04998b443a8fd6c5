"""틱 1회 시뮬레이션 (순수 로직)

에이전트를 목록 순서대로 처리한다:
욕구 진행 → 루틴 편향 → 기분 → 행동 선택/적용 → (social) 관계 갱신.
이후 NPC↔NPC 상호작용, 결투 초대, 평판 전파를 한 번씩 판정한다.
잠금/알림 방출/저장은 SimulationService 몫.
"""

import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from npcsim.core.notifications import Notification, NotificationType
from npcsim.core.npc.actions import (
    SOLO_ACTIONS,
    ActionOutcome,
    bump_action_score,
    choose_action,
)
from npcsim.core.npc.memory import record_interaction, try_claim_cooldown
from npcsim.core.npc.models import ActionKind, ActivityKind, Agent, Mood
from npcsim.core.npc.needs import advance_needs, derive_mood, relieve_hunger
from npcsim.core.npc.routine import resolve_bias
from npcsim.core.player.models import Player
from npcsim.core.relationship.calculations import tier_at_least
from npcsim.core.relationship.dynamics import (
    cascade_global_reputation,
    random_npc_npc_event,
    update_on_social,
)
from npcsim.core.relationship.models import (
    NpcPairEvent,
    RelationTier,
    SocialMood,
    SocialUpdate,
    SpecialEvent,
)
from npcsim.core.relationship.special_events import (
    maybe_trigger_special_event,
    special_event_notification,
)
from npcsim.core.social.duels import issue_duel_challenges
from npcsim.core.tunables import SocialTunables

TITLE_SOCIAL = "Social Interaction"
TITLE_NEW_RELATION = "New Relationship"
TITLE_NPC_PAIR = "NPC Interaction"

SOCIAL_BASE_RANGE = (-3, 3)
REPUTATION_BOOST_DIVISOR = 500
SOCIAL_DELTA_LIMIT = 5


@dataclass
class AgentStep:
    """에이전트 1명의 틱 결과"""

    agent_id: str
    bias: ActivityKind
    action: ActionKind
    mood: Mood
    outcome: Optional[ActionOutcome] = None
    social: Optional[SocialUpdate] = None
    special_event: Optional[SpecialEvent] = None
    notifications: List[Notification] = field(default_factory=list)


@dataclass
class TickReport:
    """틱 1회 전체 결과"""

    started_at: datetime
    steps: List[AgentStep] = field(default_factory=list)
    pair_event: Optional[NpcPairEvent] = None
    duel_issued: bool = False
    cascade_ran: bool = False
    cascaded: List[str] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)


def social_outcome_mood(player: Player, rng: random.Random) -> SocialMood:
    """무작위 기본값 + 진영 평판 보정 → 상호작용 분위기"""
    base = rng.randint(*SOCIAL_BASE_RANGE)
    boost = math.floor(player.total_positive_reputation() / REPUTATION_BOOST_DIVISOR)
    delta = max(-SOCIAL_DELTA_LIMIT, min(SOCIAL_DELTA_LIMIT, base + boost))
    if delta >= 2:
        return SocialMood.FRIENDLY
    if delta <= -2:
        return SocialMood.HOSTILE
    return SocialMood.NEUTRAL


def _promote_friend_lists(
    agent: Agent, player: Player, tier: RelationTier
) -> Optional[Notification]:
    label = None
    if tier_at_least(tier, RelationTier.BEST_FRIEND) and agent.agent_id not in player.best_friends:
        player.best_friends.append(agent.agent_id)
        label = "best friend"
    if tier_at_least(tier, RelationTier.FRIEND) and agent.agent_id not in player.friends:
        player.friends.append(agent.agent_id)
        label = label or "friend"
    if label is None:
        return None
    return Notification(
        type=NotificationType.ACHIEVEMENT,
        title=TITLE_NEW_RELATION,
        message=f"{agent.name} is now your {label}",
        icon="🤝",
        duration=2600,
    )


def social_step(
    agent: Agent,
    player: Player,
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
) -> AgentStep:
    """social 행동: 관계 갱신 → 기억 → 사본 갱신 → 특별 이벤트 판정"""
    mood = social_outcome_mood(player, rng)
    update = update_on_social(agent, player.player_id, mood, now, tunables)
    record_interaction(
        agent.memory,
        player.player_id,
        f"social_{mood.value}",
        update.delta,
        now,
        tunables.interaction_log_cap,
    )
    player.social_relations[agent.agent_id] = update.value
    player.npc_memory[agent.agent_id] = agent.memory.friend_status_by_target.get(
        player.player_id, update.tier.value
    )

    step = AgentStep(
        agent_id=agent.agent_id,
        bias=ActivityKind.SOCIAL,
        action=ActionKind.SOCIAL,
        mood=agent.mood,
        social=update,
    )
    if try_claim_cooldown(
        agent.memory, ActionKind.SOCIAL.value, now, tunables.interaction_cooldown_seconds
    ):
        step.notifications.append(
            Notification(
                type=NotificationType.ACHIEVEMENT,
                title=TITLE_SOCIAL,
                message=f"{agent.name} interacted with you ({mood.value})",
                icon="💬",
                duration=2500,
            )
        )
    promoted = _promote_friend_lists(agent, player, update.tier)
    if promoted is not None:
        step.notifications.append(promoted)

    event = maybe_trigger_special_event(agent, player.player_id, now, rng, tunables)
    if event is not None:
        step.special_event = event
        step.notifications.append(special_event_notification(event))
    return step


def step_agent(
    agent: Agent,
    player: Optional[Player],
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
) -> AgentStep:
    """에이전트 1명 틱 처리. 실패하는 행동은 없다."""
    agent.ensure_defaults()
    advance_needs(agent.needs, rng)
    bias = resolve_bias(agent.routine, now.hour)
    if bias == ActivityKind.TAVERN:
        relieve_hunger(agent.needs)
    relation = agent.relation_to(player.player_id) if player is not None else None
    agent.mood = derive_mood(agent.needs, relation)

    action = choose_action(agent, bias, rng)
    if action == ActionKind.SOCIAL:
        if player is not None:
            step = social_step(agent, player, now, rng, tunables)
        else:
            step = AgentStep(agent_id=agent.agent_id, bias=bias, action=action, mood=agent.mood)
        step.bias = bias
    else:
        outcome = SOLO_ACTIONS[action](agent, now, rng, tunables)
        step = AgentStep(
            agent_id=agent.agent_id,
            bias=bias,
            action=action,
            mood=agent.mood,
            outcome=outcome,
            notifications=list(outcome.notifications),
        )
    bump_action_score(agent, action)
    return step


def _pair_notification(agents: Sequence[Agent], event: NpcPairEvent) -> Notification:
    names = {a.agent_id: a.name for a in agents}
    if event.delta >= 2:
        flavor, icon = "friendship", "🤝"
    elif event.delta <= -2:
        flavor, icon = "rivalry", "⚔️"
    else:
        flavor, icon = "neutral", "👋"
    return Notification(
        type=NotificationType.QUEST,
        title=TITLE_NPC_PAIR,
        message=f"{names[event.first_id]} and {names[event.second_id]} interacted ({flavor})",
        icon=icon,
        duration=2500,
    )


def cascade_due(
    last_cascade_at: Optional[datetime], now: datetime, tunables: SocialTunables
) -> bool:
    if last_cascade_at is None:
        return True
    return now - last_cascade_at >= timedelta(hours=tunables.cascade_interval_hours)


def run_population_pass(
    agents: Sequence[Agent],
    player: Optional[Player],
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
    last_cascade_at: Optional[datetime] = None,
) -> TickReport:
    """전체 인구 1회 처리. 알림은 모으기만 하고 방출하지 않는다."""
    report = TickReport(started_at=now)
    for agent in agents:
        step = step_agent(agent, player, now, rng, tunables)
        report.steps.append(step)
        report.notifications.extend(step.notifications)

    pair = random_npc_npc_event(agents, rng)
    if pair is not None:
        report.pair_event = pair
        report.notifications.append(_pair_notification(agents, pair))

    if player is not None:
        duel = issue_duel_challenges(agents, player, now, rng, tunables)
        if duel is not None:
            report.duel_issued = True
            report.notifications.append(duel)

        if cascade_due(last_cascade_at, now, tunables):
            report.cascade_ran = True
            report.cascaded = cascade_global_reputation(player, agents, now, tunables)
            for agent_id in report.cascaded:
                agent = next(a for a in agents if a.agent_id == agent_id)
                player.social_relations[agent_id] = agent.relation_to(player.player_id)
    return report
