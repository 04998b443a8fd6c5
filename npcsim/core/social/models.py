"""소셜 행동 도메인 모델 — 도움 버프, 결투 초대, 선물 분류"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SocialActionKind(str, Enum):
    """플레이어가 직접 거는 소셜 행동"""

    CONVERSE = "converse"
    COMPLIMENT = "compliment"
    REQUEST_HELP = "request_help"
    GIFT = "gift"
    PROVOKE = "provoke"


class HelpStatusKind(str, Enum):
    """도움 요청 성공 시 부여되는 일시 버프 9종"""

    BOOST_XP = "boost_xp"
    STAMINA_REFILL = "stamina_refill"
    REDUCE_COOLDOWN = "reduce_cooldown"
    BOOST_INITIATIVE = "boost_initiative"
    GOLD_BONUS = "gold_bonus"
    SUCCESS_BOOST = "success_boost"
    STAMINA_DISCOUNT = "stamina_discount"
    LOOT_BONUS = "loot_bonus"
    AMBUSH_SHIELD = "ambush_shield"


@dataclass
class HelpStatus:
    """일시 도움 버프. 플레이어당 최대 1개, 새로 받으면 덮어쓴다.

    magnitude 단위는 kind별로 다르다 (비율/분/포인트, HELP_MAGNITUDES 참조).
    """

    kind: HelpStatusKind
    level: int  # 1 ~ 3
    magnitude: float
    expires_at: datetime
    missions_remaining: int = 1

    def is_active(self, now: datetime) -> bool:
        return self.missions_remaining > 0 and now < self.expires_at


class DuelType(str, Enum):
    TRAINING = "training"
    HONOR = "honor"
    REWARD = "reward"


@dataclass
class DuelInvite:
    """결투 초대. 여러 개가 공존할 수 있다."""

    npc_id: str
    type: DuelType
    expires_at: datetime
    level_diff: int = 0

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class GiftCategory(str, Enum):
    """선물 분류 (아이템 ID 키워드로 판정)"""

    WARRIOR = "warrior"
    ARCANE = "arcane"
    SOCIAL = "social"
    NEUTRAL = "neutral"
