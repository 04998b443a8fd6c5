"""SocialWorld — 시뮬레이션 공유 상태 컨테이너

틱과 API 행동이 같은 lock을 잡는다 (동시에 하나의 writer만).
"""

import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player
from npcsim.core.tunables import SocialTunables


@dataclass
class SocialWorld:
    agents: List[Agent] = field(default_factory=list)
    player: Optional[Player] = None
    tunables: SocialTunables = field(default_factory=SocialTunables)
    rng: random.Random = field(default_factory=random.Random)
    lock: threading.RLock = field(default_factory=threading.RLock)
    last_cascade_at: Optional[datetime] = None
    tick_count: int = 0

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return next((a for a in self.agents if a.agent_id == agent_id), None)
