"""NPC Core 도메인 패키지

공개 API:
- 도메인 모델: Agent, Personality, Needs, AgentMemory, RoutineEntry, ...
- 욕구/기분: advance_needs, derive_mood
- 루틴: default_routine, resolve_bias
- 행동: choose_action, SOLO_ACTIONS
- 기억: record_interaction, try_claim_cooldown
- 생성: seed_population, create_agent
"""

from npcsim.core.npc.models import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_NAMES,
    COMPLETED_QUESTS_CAP,
    ActionKind,
    ActivityKind,
    Agent,
    AgentMemory,
    AgentStats,
    Archetype,
    ChatStyle,
    GiftStats,
    InteractionRecord,
    Mood,
    Needs,
    Personality,
    Progression,
    RoutineEntry,
)
from npcsim.core.npc.needs import (
    advance_needs,
    clamp_need,
    derive_mood,
    relieve_hunger,
)
from npcsim.core.npc.routine import (
    DEFAULT_BIAS,
    default_routine,
    find_entry,
    resolve_bias,
)
from npcsim.core.npc.memory import (
    add_social_note,
    cooldown_ready,
    count_positive_interactions,
    recent_summaries,
    record_interaction,
    stamp_interaction,
    try_claim_cooldown,
)
from npcsim.core.npc.actions import (
    ACTION_POOLS,
    DEFAULT_POOL,
    SOLO_ACTIONS,
    ActionOutcome,
    candidate_pool,
    choose_action,
)
from npcsim.core.npc.population import (
    NPC_NAMES,
    create_agent,
    seed_personality,
    seed_population,
)

__all__ = [
    # models
    "ATTRIBUTE_MAX",
    "ATTRIBUTE_NAMES",
    "COMPLETED_QUESTS_CAP",
    "ActionKind",
    "ActivityKind",
    "Agent",
    "AgentMemory",
    "AgentStats",
    "Archetype",
    "ChatStyle",
    "GiftStats",
    "InteractionRecord",
    "Mood",
    "Needs",
    "Personality",
    "Progression",
    "RoutineEntry",
    # needs
    "advance_needs",
    "clamp_need",
    "derive_mood",
    "relieve_hunger",
    # routine
    "DEFAULT_BIAS",
    "default_routine",
    "find_entry",
    "resolve_bias",
    # memory
    "add_social_note",
    "cooldown_ready",
    "count_positive_interactions",
    "recent_summaries",
    "record_interaction",
    "stamp_interaction",
    "try_claim_cooldown",
    # actions
    "ACTION_POOLS",
    "DEFAULT_POOL",
    "SOLO_ACTIONS",
    "ActionOutcome",
    "candidate_pool",
    "choose_action",
    # population
    "NPC_NAMES",
    "create_agent",
    "seed_personality",
    "seed_population",
]
