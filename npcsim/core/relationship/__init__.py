"""관계 시스템 Core 패키지 — 공개 API"""

from npcsim.core.relationship.models import (
    MILESTONE_ORDINALS,
    TIER_ORDINAL,
    NpcPairEvent,
    RelationTier,
    SocialMood,
    SocialUpdate,
    SpecialEvent,
    SpecialEventKind,
)
from npcsim.core.relationship.calculations import (
    clamp_relation,
    compute_tier,
    diminishing_factor,
    scale_delta,
    tier_at_least,
)
from npcsim.core.relationship.dynamics import (
    apply_decay,
    apply_relation_delta,
    cascade_global_reputation,
    random_npc_npc_event,
    store_relation,
    update_on_social,
)
from npcsim.core.relationship.special_events import (
    SPECIAL_EVENT_KEY,
    maybe_trigger_special_event,
    special_event_notification,
)
from npcsim.core.relationship.benefits import (
    UnlockTier,
    best_relation_tier,
    mission_buff_percent,
    shop_discount_percent,
    unlock_tier,
)

__all__ = [
    "MILESTONE_ORDINALS",
    "TIER_ORDINAL",
    "NpcPairEvent",
    "RelationTier",
    "SocialMood",
    "SocialUpdate",
    "SpecialEvent",
    "SpecialEventKind",
    "clamp_relation",
    "compute_tier",
    "diminishing_factor",
    "scale_delta",
    "tier_at_least",
    "apply_decay",
    "apply_relation_delta",
    "cascade_global_reputation",
    "random_npc_npc_event",
    "store_relation",
    "update_on_social",
    "SPECIAL_EVENT_KEY",
    "maybe_trigger_special_event",
    "special_event_notification",
    "UnlockTier",
    "best_relation_tier",
    "mission_buff_percent",
    "shop_discount_percent",
    "unlock_tier",
]
