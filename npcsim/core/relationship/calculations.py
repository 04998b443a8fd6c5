"""관계 수치 계산

전부 순수 함수 — 외부 의존 없음.
"""

import math

from npcsim.core.relationship.models import RelationTier
from npcsim.core.tunables import SocialTunables

RELATION_MIN = -100.0
RELATION_MAX = 100.0
DIMINISHING_FLOOR = 0.2


def clamp_relation(value: float) -> float:
    """-100 ~ +100 클램프."""
    return max(RELATION_MIN, min(RELATION_MAX, value))


def diminishing_factor(current: float) -> float:
    """수확 체감 계수.

    양수 쪽 상한에 가까울수록 작아진다. 최소 0.2 보장, 음수 점수는 1.0.
    """
    return max(DIMINISHING_FLOOR, (100 - max(0.0, current)) / 100)


def scale_delta(raw: float, current: float, intensity: float = 1.0) -> int:
    """raw × intensity × 수확 체감, 올림 정수화."""
    return math.ceil(raw * intensity * diminishing_factor(current))


def compute_tier(score: float, tunables: SocialTunables) -> RelationTier:
    """점수 → 관계 단계. rival이 가장 먼저 판정된다."""
    if score <= tunables.rival_threshold:
        return RelationTier.RIVAL
    if score >= tunables.ally_threshold:
        return RelationTier.ALLY
    if score >= tunables.best_friend_threshold:
        return RelationTier.BEST_FRIEND
    if score >= tunables.friend_threshold:
        return RelationTier.FRIEND
    if score >= tunables.known_threshold:
        return RelationTier.KNOWN
    return RelationTier.NEUTRAL


def tier_at_least(tier: RelationTier, floor: RelationTier) -> bool:
    """tier가 floor 이상인지 (rival은 항상 False)"""
    order = [
        RelationTier.NEUTRAL,
        RelationTier.KNOWN,
        RelationTier.FRIEND,
        RelationTier.BEST_FRIEND,
        RelationTier.ALLY,
    ]
    if tier == RelationTier.RIVAL or floor == RelationTier.RIVAL:
        return tier == floor
    return order.index(tier) >= order.index(floor)
