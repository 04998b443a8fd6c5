"""관계 시스템 도메인 모델

점수는 -100 ~ +100 float. 단계는 점수에서 매번 도출한다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class RelationTier(str, Enum):
    """관계 단계 6종"""

    RIVAL = "rival"
    NEUTRAL = "neutral"
    KNOWN = "known"
    FRIEND = "friend"
    BEST_FRIEND = "best_friend"
    ALLY = "ally"


# 특별 이벤트 마일스톤 판정용 서수 (3/5/7이 마일스톤)
TIER_ORDINAL: Dict[RelationTier, int] = {
    RelationTier.RIVAL: 0,
    RelationTier.NEUTRAL: 0,
    RelationTier.KNOWN: 1,
    RelationTier.FRIEND: 3,
    RelationTier.BEST_FRIEND: 5,
    RelationTier.ALLY: 7,
}

MILESTONE_ORDINALS = frozenset({3, 5, 7})


class SocialMood(str, Enum):
    """소셜 상호작용 결과 분위기"""

    FRIENDLY = "friendly"
    NEUTRAL = "neutral"
    HOSTILE = "hostile"


class SpecialEventKind(str, Enum):
    WELCOME = "welcome"
    CELEBRATION = "celebration"
    RIVAL_ENCOUNTER = "rival_encounter"


@dataclass
class SocialUpdate:
    """update_on_social 결과"""

    value: float
    tier: RelationTier
    delta: int
    previous: float = 0.0


@dataclass
class NpcPairEvent:
    """NPC↔NPC 무작위 상호작용 결과"""

    first_id: str
    second_id: str
    delta: int


@dataclass
class SpecialEvent:
    kind: SpecialEventKind
    agent_id: str
    tier: RelationTier
    forced: bool = False
    message: Optional[str] = None
