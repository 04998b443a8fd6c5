"""시뮬레이션 튜닝 값

설정 저장소(외부)가 노출하는 값만 담는다. 저장소가 없으면 기본값 그대로 사용.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from npcsim.core.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


class InteractionDifficulty(str, Enum):
    """결투 신청 빈도 단계"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationMode(str, Enum):
    """틱당 알림 방출 방식"""

    OFF = "off"
    NORMAL = "normal"
    COMPACT = "compact"


# 설정 저장소 표기 → 단계
DIFFICULTY_ALIASES: Dict[str, InteractionDifficulty] = {
    "normal": InteractionDifficulty.MEDIUM,
}


def coerce_enum(
    enum_cls: Type[E],
    value: Any,
    default: E,
    aliases: Optional[Mapping[str, E]] = None,
) -> E:
    """문자열 → enum. 별칭을 먼저 보고, 모르는 값은 경고 후 default."""
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    if aliases and key in aliases:
        return aliases[key]
    try:
        return enum_cls(key)
    except ValueError:
        logger.warning(
            f"Unknown {enum_cls.__name__} '{value}'; using {default.value}"
        )
        return default


DUEL_CHANCE_BY_DIFFICULTY: Dict[InteractionDifficulty, float] = {
    InteractionDifficulty.LOW: 0.2,
    InteractionDifficulty.MEDIUM: 0.35,
    InteractionDifficulty.HIGH: 0.5,
}


@dataclass(frozen=True)
class SocialTunables:
    """관계/이벤트/결투 튜닝 값 (기본값 포함)"""

    # 관계 단계 임계값
    known_threshold: float = 10
    friend_threshold: float = 40
    best_friend_threshold: float = 75
    ally_threshold: float = 90
    rival_threshold: float = -30

    # 관계 변동
    decay_per_day: float = 0.5
    positive_weight: int = 4
    negative_weight: int = 5
    relation_intensity_percent: int = 100
    faction_cascade_percent: float = 0.02
    cascade_contact_window_days: float = 3
    cascade_interval_hours: float = 24

    # 쿨다운
    interaction_cooldown_seconds: int = 90

    # 특별 이벤트
    random_events_enabled: bool = True
    events_per_day: int = 2
    events_cooldown_days_min: float = 2
    events_cooldown_days_max: float = 4
    rival_encounter_chance: float = 0.2

    # 결투
    duel_rivalry_moderate: float = -30
    duel_rivalry_high: float = -60
    duel_level_diff_max: int = 5
    interaction_difficulty: InteractionDifficulty = InteractionDifficulty.MEDIUM
    friendly_duel_chance: float = 0.15
    duel_invite_ttl_minutes: int = 15

    # 도움 요청
    help_relation_gate: float = 20
    help_status_ttl_hours: float = 2

    # 알림
    notifications_mode: NotificationMode = NotificationMode.COMPACT
    notify_max_per_tick: int = 3

    # 기억 상한
    interaction_log_cap: int = 50
    social_notes_cap: int = 20

    # 대사 색채
    biome_lexicon_enabled: bool = True
    dialogue_whisper_prob: float = 0.25
    dialogue_thought_prob: float = 0.35

    @property
    def intensity(self) -> float:
        return self.relation_intensity_percent / 100

    @property
    def duel_chance(self) -> float:
        return DUEL_CHANCE_BY_DIFFICULTY[self.interaction_difficulty]

    def thresholds_ascending(self) -> bool:
        return (
            self.rival_threshold
            < self.known_threshold
            < self.friend_threshold
            < self.best_friend_threshold
            < self.ally_threshold
        )

    def validated(self) -> "SocialTunables":
        """임계값이 오름차순이 아니면 임계값만 기본값으로 되돌린다."""
        if self.thresholds_ascending():
            return self
        defaults = SocialTunables()
        logger.warning(
            "Relation thresholds not ascending "
            f"(rival={self.rival_threshold}, known={self.known_threshold}, "
            f"friend={self.friend_threshold}, best={self.best_friend_threshold}, "
            f"ally={self.ally_threshold}); using defaults"
        )
        return replace(
            self,
            known_threshold=defaults.known_threshold,
            friend_threshold=defaults.friend_threshold,
            best_friend_threshold=defaults.best_friend_threshold,
            ally_threshold=defaults.ally_threshold,
            rival_threshold=defaults.rival_threshold,
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SocialTunables":
        """부분 매핑 → 튜닝 값. 모르는 키와 None은 무시.

        enum 값은 별칭/대소문자를 허용하고, 모르는 값은 기본값으로 되돌린다.
        """
        defaults = cls()
        known = {f.name for f in fields(cls)}
        picked = {k: v for k, v in values.items() if k in known and v is not None}
        if "interaction_difficulty" in picked:
            picked["interaction_difficulty"] = coerce_enum(
                InteractionDifficulty,
                picked["interaction_difficulty"],
                defaults.interaction_difficulty,
                DIFFICULTY_ALIASES,
            )
        if "notifications_mode" in picked:
            picked["notifications_mode"] = coerce_enum(
                NotificationMode, picked["notifications_mode"], defaults.notifications_mode
            )
        return cls(**picked).validated()
