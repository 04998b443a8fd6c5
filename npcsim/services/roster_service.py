"""Roster Service — 에이전트/플레이어 저장과 복원

Service → Core, Service → DB. 저장 형식은 core.serialization의 dict.

capture()는 world lock 안에서 dict 사본만 만들고,
write()는 lock을 놓은 뒤 DB에 쓴다. 세션은 스레드 간 공유라 DB 접근은
자체 lock으로 직렬화한다.
"""

import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from npcsim.core.logging import get_logger
from npcsim.core.npc.models import Agent
from npcsim.core.npc.population import seed_population
from npcsim.core.player.models import Player
from npcsim.core.serialization import (
    agent_from_dict,
    agent_to_dict,
    player_from_dict,
    player_to_dict,
)
from npcsim.db.models import AgentModel, PlayerModel

logger = get_logger(__name__)


@dataclass
class AgentRow:
    agent_id: str
    name: str
    hero_class: str
    level: int
    position: int
    payload: dict


@dataclass
class RosterSnapshot:
    """한 시점의 저장 대상. seq는 캡처 순번."""

    seq: int
    agents: List[AgentRow] = field(default_factory=list)
    player: Optional[Tuple[str, str, dict]] = None  # (player_id, name, payload)

    def row_count(self) -> int:
        return len(self.agents) + (1 if self.player is not None else 0)


class RosterService:
    """인구 로드/저장/시드"""

    def __init__(self, db_session: Session) -> None:
        self._db = db_session
        self._db_lock = threading.RLock()
        self._seq_lock = threading.Lock()
        self._seq = 0
        self._written: Dict[str, int] = {}  # 행 키 → 마지막으로 쓴 seq

    # ── 조회 ─────────────────────────────────────────────────

    def load_agents(self) -> List[Agent]:
        with self._db_lock:
            rows = self._db.query(AgentModel).order_by(AgentModel.position).all()
            return [agent_from_dict(row.payload) for row in rows]

    def load_player(self, player_id: str) -> Optional[Player]:
        with self._db_lock:
            row = (
                self._db.query(PlayerModel)
                .filter(PlayerModel.player_id == player_id)
                .first()
            )
            if row is None:
                return None
            return player_from_dict(row.payload)

    # ── 저장 ─────────────────────────────────────────────────

    def capture(
        self,
        agents: Sequence[Agent],
        player: Optional[Player] = None,
        only: Optional[Iterable[str]] = None,
    ) -> RosterSnapshot:
        """저장할 상태의 dict 사본. only가 있으면 그 agent_id만 담는다.

        position은 agents 안의 순서라서, 일부만 담을 때도 전체 목록을 넘긴다.
        """
        wanted = set(only) if only is not None else None
        with self._seq_lock:
            self._seq += 1
            seq = self._seq
        rows = [
            AgentRow(
                agent_id=agent.agent_id,
                name=agent.name,
                hero_class=agent.hero_class,
                level=agent.level,
                position=position,
                payload=agent_to_dict(agent),
            )
            for position, agent in enumerate(agents)
            if wanted is None or agent.agent_id in wanted
        ]
        player_row = None
        if player is not None:
            player_row = (player.player_id, player.name, player_to_dict(player))
        return RosterSnapshot(seq=seq, agents=rows, player=player_row)

    def write(self, snapshot: RosterSnapshot, now: datetime) -> int:
        """스냅샷을 한 번에 커밋하고 실제로 쓴 행 수를 반환.

        더 나중에 캡처된 스냅샷이 이미 쓴 행은 건너뛴다.
        """
        with self._db_lock:
            written = 0
            for item in snapshot.agents:
                if not self._claim_row(f"agent:{item.agent_id}", snapshot.seq):
                    continue
                row = self._db.get(AgentModel, item.agent_id)
                if row is None:
                    row = AgentModel(agent_id=item.agent_id)
                    self._db.add(row)
                row.name = item.name
                row.hero_class = item.hero_class
                row.level = item.level
                row.position = item.position
                row.payload = item.payload
                row.updated_at = now
                written += 1

            if snapshot.player is not None:
                player_id, name, payload = snapshot.player
                if self._claim_row(f"player:{player_id}", snapshot.seq):
                    row = self._db.get(PlayerModel, player_id)
                    if row is None:
                        row = PlayerModel(player_id=player_id)
                        self._db.add(row)
                    row.name = name
                    row.payload = payload
                    row.updated_at = now
                    written += 1
            self._db.commit()

        if written < snapshot.row_count():
            logger.debug(
                f"Snapshot #{snapshot.seq}: skipped {snapshot.row_count() - written} stale rows"
            )
        return written

    def save_agents(self, agents: Sequence[Agent], now: datetime) -> None:
        self.write(self.capture(agents), now)

    def save_player(self, player: Player, now: datetime) -> None:
        self.write(self.capture([], player), now)

    def _claim_row(self, key: str, seq: int) -> bool:
        if self._written.get(key, 0) > seq:
            return False
        self._written[key] = seq
        return True

    # ── 초기화 ───────────────────────────────────────────────

    def load_or_seed(
        self,
        size: int,
        rng: random.Random,
        now: datetime,
        player_id: str,
        player_name: str = "",
    ) -> tuple[List[Agent], Player]:
        """저장된 인구가 없으면 새로 만들어 저장한다."""
        agents = self.load_agents()
        if not agents:
            agents = seed_population(size, rng)
            self.save_agents(agents, now)
            logger.info(f"Seeded population: {len(agents)} agents")
        else:
            logger.info(f"Loaded population: {len(agents)} agents")

        player = self.load_player(player_id)
        if player is None:
            player = Player(player_id=player_id, name=player_name)
            self.save_player(player, now)
            logger.info(f"Created player: {player_id}")
        return agents, player
