"""플레이어 협력자 모델

엔진이 읽고 쓰는 플레이어 상태만 담는다 (전투/경제 수치 해석은 외부).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from npcsim.core.social.models import DuelInvite, HelpStatus

DAILY_HISTORY_DAYS = 7  # 일별 상호작용 기록 보관 일수


@dataclass
class PlayerProgression:
    xp: int = 0
    gold: int = 0
    reputation: int = 0
    fatigue: int = 0


@dataclass
class PlayerStats:
    """상호작용 기록 + 도움 버프 슬롯"""

    last_interaction_at: Optional[datetime] = None
    daily_interactions: Dict[str, int] = field(default_factory=dict)  # "YYYY-MM-DD" → 횟수
    help_status: Optional[HelpStatus] = None


@dataclass
class Player:
    """플레이어 데이터

    social_relations / npc_memory 는 NPC 쪽 값을 비추는 사본이다.
    """

    player_id: str
    name: str = ""
    level: int = 1

    progression: PlayerProgression = field(default_factory=PlayerProgression)
    faction_reputation: Dict[str, int] = field(default_factory=dict)
    stats: PlayerStats = field(default_factory=PlayerStats)

    friends: List[str] = field(default_factory=list)
    best_friends: List[str] = field(default_factory=list)
    duel_invites: List[DuelInvite] = field(default_factory=list)
    inventory: Dict[str, int] = field(default_factory=dict)

    social_relations: Dict[str, float] = field(default_factory=dict)
    npc_memory: Dict[str, str] = field(default_factory=dict)  # npc_id → 관계 단계

    def total_positive_reputation(self) -> int:
        return sum(max(0, rep) for rep in self.faction_reputation.values())

    def add_item(self, item_id: str, quantity: int = 1) -> None:
        self.inventory[item_id] = self.inventory.get(item_id, 0) + quantity

    def record_interaction(self, now: datetime) -> None:
        self.stats.last_interaction_at = now
        day = now.date().isoformat()
        self.stats.daily_interactions[day] = self.stats.daily_interactions.get(day, 0) + 1
        oldest = (now.date() - timedelta(days=DAILY_HISTORY_DAYS - 1)).isoformat()
        for stale in [d for d in self.stats.daily_interactions if d < oldest]:
            del self.stats.daily_interactions[stale]
