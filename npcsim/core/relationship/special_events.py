"""관계 마일스톤 특별 이벤트

NPC별 쿨다운(며칠 단위)을 두고, 마일스톤 단계(3/5/7)면 반드시 발생한다.
"""

import random
from datetime import datetime
from typing import Optional

from npcsim.core.notifications import Notification, NotificationType
from npcsim.core.npc.memory import stamp_interaction
from npcsim.core.npc.models import Agent
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.relationship.models import (
    MILESTONE_ORDINALS,
    TIER_ORDINAL,
    RelationTier,
    SpecialEvent,
    SpecialEventKind,
)
from npcsim.core.tunables import SocialTunables

SPECIAL_EVENT_KEY = "special_event"
SPECIAL_EVENT_TITLE = "Special Event"

_ICONS = {
    SpecialEventKind.CELEBRATION: "🎉",
    SpecialEventKind.WELCOME: "🥂",
    SpecialEventKind.RIVAL_ENCOUNTER: "⚔️",
}


def _cooldown_days(rng: random.Random, tunables: SocialTunables) -> float:
    days_min = max(2.0, tunables.events_cooldown_days_min)
    days_max = max(days_min, tunables.events_cooldown_days_max)
    return rng.uniform(days_min, days_max)


def _event_message(kind: SpecialEventKind, name: str, tier: RelationTier) -> str:
    if kind == SpecialEventKind.CELEBRATION:
        return f"{name} celebrates your new bond ({tier.value})."
    if kind == SpecialEventKind.WELCOME:
        return f"{name} welcomes the new bond ({tier.value})."
    return f"{name}, a rival, shows up to test your bond!"


def maybe_trigger_special_event(
    agent: Agent,
    player_id: str,
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
) -> Optional[SpecialEvent]:
    """조건이 맞으면 이벤트를 만들고 special_event 타임스탬프를 찍는다."""
    if not tunables.random_events_enabled:
        return None
    agent.ensure_defaults()

    last = agent.memory.last_interaction_by_type.get(SPECIAL_EVENT_KEY)
    if last is not None:
        elapsed_days = (now - last).total_seconds() / 86400
        if elapsed_days < _cooldown_days(rng, tunables):
            return None

    tier = compute_tier(agent.relation_to(player_id), tunables)
    milestone = TIER_ORDINAL[tier] in MILESTONE_ORDINALS
    if not milestone:
        per_day = max(1, min(5, tunables.events_per_day))
        chance = min(0.9, per_day / 10)
        if rng.random() >= chance:
            return None

    rival_chance = max(0.15, min(0.3, tunables.rival_encounter_chance))
    if tier == RelationTier.RIVAL and rng.random() < rival_chance:
        kind = SpecialEventKind.RIVAL_ENCOUNTER
    elif milestone:
        kind = SpecialEventKind.CELEBRATION
    else:
        kind = SpecialEventKind.WELCOME

    stamp_interaction(agent.memory, SPECIAL_EVENT_KEY, now)
    return SpecialEvent(
        kind=kind,
        agent_id=agent.agent_id,
        tier=tier,
        forced=milestone,
        message=_event_message(kind, agent.name, tier),
    )


def special_event_notification(event: SpecialEvent) -> Notification:
    return Notification(
        type=NotificationType.QUEST,
        title=SPECIAL_EVENT_TITLE,
        message=event.message or "",
        icon=_ICONS[event.kind],
        duration=3500,
    )
