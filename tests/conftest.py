"""Shared test fixtures."""

import os

# settings는 import 시점에 읽힌다 — 앱 import 전에 인메모리 DB로 고정
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AI_PROVIDER", "mock")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import random  # noqa: E402
import threading  # noqa: E402
from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from npcsim.core.notifications import CapturingSink  # noqa: E402
from npcsim.core.npc.models import Agent  # noqa: E402
from npcsim.core.player.models import Player  # noqa: E402
from npcsim.core.tunables import SocialTunables  # noqa: E402
from npcsim.db.database import engine as app_engine, init_db, make_engine  # noqa: E402
from npcsim.db.models import Base  # noqa: E402
from npcsim.services.roster_service import RosterService  # noqa: E402

PLAYER_ID = "player-1"
NOON = datetime(2024, 5, 1, 12, 0, 0)


class FixedRandom(random.Random):
    """random()이 항상 고정값인 RNG.

    random()만 재정의했으므로 choice/randint도 이 값으로 결정된다.
    """

    def __init__(self, value: float, seed: int = 7) -> None:
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


class LockCheckingRoster(RosterService):
    """write() 시점에 다른 스레드가 world lock을 잡을 수 있었는지 기록한다."""

    def __init__(self, db_session, lock) -> None:
        super().__init__(db_session)
        self._lock = lock
        self.lock_free_on_write: list = []

    def write(self, snapshot, now):
        outcome = []

        def try_lock():
            acquired = self._lock.acquire(timeout=1)
            if acquired:
                self._lock.release()
            outcome.append(acquired)

        other = threading.Thread(target=try_lock)
        other.start()
        other.join()
        self.lock_free_on_write.append(outcome[0])
        return super().write(snapshot, now)


def make_agent(agent_id: str = "npc-001", relation: float = 0, **kwargs) -> Agent:
    """테스트용 Agent 팩토리 (플레이어 관계 점수 지정 가능)"""
    defaults = {"name": agent_id.replace("npc-", "Npc")}
    defaults.update(kwargs)
    agent = Agent(agent_id=agent_id, **defaults)
    if relation:
        agent.social_relations[PLAYER_ID] = relation
    return agent


@pytest.fixture()
def now() -> datetime:
    return NOON


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def tunables() -> SocialTunables:
    return SocialTunables()


@pytest.fixture()
def player() -> Player:
    return Player(player_id=PLAYER_ID, name="hero")


@pytest.fixture()
def sink() -> CapturingSink:
    return CapturingSink()


@pytest.fixture()
def db_session() -> Session:
    """테스트별 독립 인메모리 SQLite 세션"""
    engine = make_engine("sqlite://")
    init_db(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient (lifespan 실행, 매번 빈 DB에서 인구 시드)"""
    from npcsim.main import app

    Base.metadata.drop_all(bind=app_engine)
    with TestClient(app) as test_client:
        yield test_client
