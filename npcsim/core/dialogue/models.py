"""대사 도메인 모델

DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional


class DialogueTag(str, Enum):
    GOSSIP = "gossip"
    EVENT = "event"
    HUMOR = "humor"
    TIME_MORNING = "time_morning"
    TIME_EVENING = "time_evening"
    SEASONAL = "seasonal"
    GUILD_MISSION = "guild_mission"
    WARNING = "warning"


class DialoguePriority(str, Enum):
    URGENT = "urgent"
    PLOT = "plot"
    SOCIAL = "social"
    AMBIENT = "ambient"


@dataclass(frozen=True)
class DialogueLine:
    """대사 한 줄. text의 {npc}는 NPC 이름으로 치환된다.

    required_* 가 None이면 조건 없음 (0은 유효한 조건).
    """

    text: str
    tags: FrozenSet[DialogueTag]
    priority: DialoguePriority = DialoguePriority.AMBIENT
    weight: int = 1
    required_relation: Optional[int] = None
    required_reputation: Optional[int] = None


@dataclass
class EnrichmentContext:
    """텍스트 생성 요청용 NPC 상황 요약"""

    activity: str
    mood: str
    relation: float
    player_name: str
    preferences: dict = field(default_factory=dict)
    recent_memories: List[str] = field(default_factory=list)

    def render(self) -> str:
        memories = ", ".join(self.recent_memories) or "none"
        prefs = ", ".join(f"{k}={v}" for k, v in self.preferences.items()) or "none"
        return (
            f"Current activity: {self.activity}. Mood: {self.mood}. "
            f"Relation with {self.player_name}: {self.relation:g}. "
            f"Preferences: {prefs}. Recent interactions: {memories}"
        )
