"""NPC 에이전트 도메인 모델

DB 무관 순수 데이터 클래스. 행동 로직은 needs/routine/actions 모듈에 있다.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set


class Archetype(str, Enum):
    """성격 원형"""

    COMPETITIVE = "competitive"
    COLLABORATIVE = "collaborative"
    MERCHANT = "merchant"
    EXPLORER = "explorer"
    SAGE = "sage"
    CHAOTIC = "chaotic"


class ChatStyle(str, Enum):
    """말투"""

    FRIENDLY = "friendly"
    SARCASTIC = "sarcastic"
    FORMAL = "formal"
    QUIET = "quiet"


class Mood(str, Enum):
    """기분 (매 틱 욕구 + 관계에서 재계산)"""

    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    STRESSED = "stressed"
    ANGRY = "angry"
    SAD = "sad"
    TIRED = "tired"


class ActivityKind(str, Enum):
    """루틴 활동 = 행동 선택 편향"""

    TRAIN = "train"
    MISSION = "mission"
    TAVERN = "tavern"
    EXPLORE = "explore"
    SOCIAL = "social"


class ActionKind(str, Enum):
    """틱마다 선택되는 자율 행동"""

    TRAIN = "train"
    MISSION = "mission"
    MARKET = "market"
    EXPLORE = "explore"
    SOCIAL = "social"


ATTRIBUTE_NAMES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)

ATTRIBUTE_MAX = 10
COMPLETED_QUESTS_CAP = 50


@dataclass
class Personality:
    """성격. 생성 시 고정."""

    archetype: Archetype = Archetype.EXPLORER
    traits: Set[str] = field(default_factory=set)
    risk_affinity: int = 50  # 0 ~ 100
    chat_style: ChatStyle = ChatStyle.FRIENDLY
    prefers_party: bool = False


@dataclass
class RoutineEntry:
    """루틴 한 칸. [start, end) 구간, "HH:MM" 형식."""

    start: str
    end: str
    activity: ActivityKind
    location: str = ""


@dataclass
class Needs:
    """욕구 5종, 각 0 ~ 100"""

    fatigue: int = 20
    hunger: int = 20
    social: int = 50
    adventure: int = 40
    task: int = 40


@dataclass
class InteractionRecord:
    """기억 로그 한 줄"""

    actor_id: str
    timestamp: datetime
    summary: str
    impact: int = 0


@dataclass
class GiftStats:
    """대상별 누적 선물 통계"""

    count: int = 0
    quality: int = 0


@dataclass
class AgentMemory:
    """NPC 기억. 모든 맵은 빈 상태로 시작한다."""

    interactions: List[InteractionRecord] = field(default_factory=list)
    preferences: Dict[str, str] = field(default_factory=dict)
    score_by_action: Dict[str, int] = field(default_factory=dict)
    friend_status_by_target: Dict[str, str] = field(default_factory=dict)
    last_contact_by_target: Dict[str, datetime] = field(default_factory=dict)
    last_interaction_by_type: Dict[str, datetime] = field(default_factory=dict)
    social_notes_by_target: Dict[str, List[str]] = field(default_factory=dict)
    gift_stats_by_target: Dict[str, GiftStats] = field(default_factory=dict)


@dataclass
class Progression:
    """성장 수치"""

    xp: int = 0
    gold: int = 0


@dataclass
class AgentStats:
    """누적 활동 통계"""

    quests_completed: int = 0
    items_found: int = 0
    total_play_time: int = 0


def _default_attributes() -> Dict[str, int]:
    return {name: 3 for name in ATTRIBUTE_NAMES}


@dataclass
class Agent:
    """NPC 완전 데이터

    Core 레이어용 순수 데이터. DB ORM(AgentModel)과 별개.
    social_relations 값은 항상 -100 ~ +100.
    """

    agent_id: str
    name: str = ""
    hero_class: str = "warrior"
    level: int = 1

    attributes: Dict[str, int] = field(default_factory=_default_attributes)
    progression: Progression = field(default_factory=Progression)
    stats: AgentStats = field(default_factory=AgentStats)
    completed_quests: List[str] = field(default_factory=list)

    personality: Personality = field(default_factory=Personality)
    routine: List[RoutineEntry] = field(default_factory=list)
    needs: Optional[Needs] = field(default_factory=Needs)
    mood: Mood = Mood.NEUTRAL
    memory: Optional[AgentMemory] = field(default_factory=AgentMemory)

    social_relations: Dict[str, float] = field(default_factory=dict)

    def relation_to(self, target_id: str) -> float:
        return self.social_relations.get(target_id, 0)

    def ensure_defaults(self) -> "Agent":
        """욕구/기억이 없으면 기본값으로 채운다."""
        if self.needs is None:
            self.needs = Needs()
        if self.memory is None:
            self.memory = AgentMemory()
        return self
