"""FastAPI application entrypoint."""

import random
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator

from fastapi import FastAPI

from npcsim.api.health import router as health_router
from npcsim.api.npcs import router as npcs_router
from npcsim.api.simulation import router as simulation_router
from npcsim.config import settings
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger, setup_logging
from npcsim.core.notifications import EventBusSink
from npcsim.db.database import SessionLocal, engine as db_engine, init_db
from npcsim.services.ai import get_ai_provider
from npcsim.services.dialogue_service import DialogueService
from npcsim.services.roster_service import RosterService
from npcsim.services.scheduler import TickScheduler
from npcsim.services.simulation_service import SimulationService
from npcsim.services.social_service import SocialService
from npcsim.services.world import SocialWorld

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def _log_notification(event: GameEvent) -> None:
    data = event.data
    logger.info(f"[notify] {data.get('title')}: {data.get('message')}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    init_db(db_engine)
    db_session = SessionLocal()

    # 인구 로드 (없으면 시드)
    rng = random.Random(settings.WORLD_SEED)
    roster = RosterService(db_session)
    agents, player = roster.load_or_seed(
        settings.POPULATION_SIZE,
        rng,
        datetime.now(),
        settings.PLAYER_ID,
        settings.PLAYER_NAME,
    )
    world = SocialWorld(
        agents=agents,
        player=player,
        tunables=settings.social_tunables(),
        rng=rng,
    )
    app.state.world = world
    logger.info(f"World ready: {len(agents)} agents, player={player.player_id}")

    # EventBus + 알림 싱크
    event_bus = EventBus()
    event_bus.subscribe(EventTypes.NOTIFICATION, _log_notification)
    sink = EventBusSink(event_bus)
    app.state.event_bus = event_bus

    # AI Provider (대사 보강 전용)
    ai_provider = get_ai_provider()
    logger.info(f"AI provider initialized: {ai_provider.name}")

    simulation_service = SimulationService(world, event_bus, sink, roster)
    app.state.simulation_service = simulation_service
    app.state.social_service = SocialService(world, event_bus, sink, roster)
    app.state.dialogue_service = DialogueService(world, event_bus, ai_provider)

    scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = TickScheduler(simulation_service.run_tick, settings.tick_interval)
        scheduler.start()
    app.state.scheduler = scheduler

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    if scheduler is not None:
        scheduler.stop()
    db_session.close()


app = FastAPI(title="NPC Social Simulation", lifespan=lifespan)

app.include_router(health_router)
app.include_router(npcs_router)
app.include_router(simulation_router)
