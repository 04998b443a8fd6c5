"""관계 혜택 — 상점 할인, 임무 버프, 해금 단계"""

from enum import Enum

from npcsim.core.player.models import Player
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.relationship.models import RelationTier
from npcsim.core.tunables import SocialTunables

_LABEL_ORDER = [tier.value for tier in RelationTier]

SHOP_DISCOUNT_BY_TIER = {
    RelationTier.FRIEND: 0.10,
    RelationTier.BEST_FRIEND: 0.20,
    RelationTier.ALLY: 0.30,
}
SHOP_DISCOUNT_CAP = 0.5

MISSION_BUFF_BY_TIER = {
    RelationTier.FRIEND: 0.05,
    RelationTier.BEST_FRIEND: 0.10,
    RelationTier.ALLY: 0.15,
}
MISSION_BUFF_CAP = 0.25


class UnlockTier(str, Enum):
    NONE = "none"
    TIER1 = "tier1"
    TIER3 = "tier3"
    TIER5 = "tier5"


def best_relation_tier(player: Player) -> RelationTier:
    """플레이어가 가진 단계 라벨 중 가장 높은 것. 없으면 neutral."""
    labels = [
        label for label in player.npc_memory.values() if label in _LABEL_ORDER
    ]
    if not labels:
        return RelationTier.NEUTRAL
    return RelationTier(max(labels, key=_LABEL_ORDER.index))


def shop_discount_percent(player: Player, tunables: SocialTunables) -> float:
    base = SHOP_DISCOUNT_BY_TIER.get(best_relation_tier(player), 0.0)
    return min(SHOP_DISCOUNT_CAP, base * tunables.intensity)


def mission_buff_percent(player: Player, tunables: SocialTunables) -> float:
    base = MISSION_BUFF_BY_TIER.get(best_relation_tier(player), 0.0)
    return min(MISSION_BUFF_CAP, base * tunables.intensity)


def unlock_tier(player: Player, tunables: SocialTunables) -> UnlockTier:
    """가장 높은 관계 점수 기준 해금 단계"""
    if not player.social_relations:
        return UnlockTier.NONE
    tier = compute_tier(max(player.social_relations.values()), tunables)
    if tier == RelationTier.KNOWN:
        return UnlockTier.TIER1
    if tier == RelationTier.FRIEND:
        return UnlockTier.TIER3
    if tier == RelationTier.BEST_FRIEND:
        return UnlockTier.TIER5
    return UnlockTier.NONE
