"""Simulation API endpoints — 틱 실행, 플레이어 상태"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from npcsim.api.npcs import get_social_service, get_world, help_status_info
from npcsim.api.schemas import (
    DuelInviteInfo,
    NotificationInfo,
    PlayerResponse,
    TickResponse,
)
from npcsim.core.logging import get_logger
from npcsim.services.scheduler import TickScheduler
from npcsim.services.simulation_service import SimulationService
from npcsim.services.social_service import SocialService
from npcsim.services.world import SocialWorld

logger = get_logger(__name__)

router = APIRouter(tags=["simulation"])


def get_simulation_service(request: Request) -> SimulationService:
    """SimulationService 인스턴스 반환 (의존성 주입)"""
    service: SimulationService = request.app.state.simulation_service
    return service


def get_scheduler(request: Request) -> Optional[TickScheduler]:
    return getattr(request.app.state, "scheduler", None)


@router.post("/simulation/tick", response_model=TickResponse)
def run_tick(
    world: SocialWorld = Depends(get_world),
    service: SimulationService = Depends(get_simulation_service),
) -> TickResponse:
    """틱 1회 수동 실행. 응답 알림은 실제 방출된 것만."""
    report = service.run_tick()
    return TickResponse(
        tick=world.tick_count,
        actions={step.agent_id: step.action.value for step in report.steps},
        notifications=[NotificationInfo(**n.to_dict()) for n in service.last_emitted],
        duel_issued=report.duel_issued,
        cascaded=list(report.cascaded),
    )


@router.get("/simulation/status")
def simulation_status(
    world: SocialWorld = Depends(get_world),
    scheduler: Optional[TickScheduler] = Depends(get_scheduler),
) -> dict:
    """틱 카운트와 스케줄러 상태"""
    return {
        "tick": world.tick_count,
        "agents": len(world.agents),
        "scheduler": scheduler.status() if scheduler else None,
    }


@router.get("/player", response_model=PlayerResponse)
def get_player(
    world: SocialWorld = Depends(get_world),
    social: SocialService = Depends(get_social_service),
) -> PlayerResponse:
    """플레이어 상태 + 관계 혜택"""
    benefits = social.benefits()
    with world.lock:
        player = world.player
        if player is None:
            raise HTTPException(status_code=404, detail="Player not initialized")
        return PlayerResponse(
            player_id=player.player_id,
            name=player.name,
            level=player.level,
            progression=asdict(player.progression),
            friends=list(player.friends),
            best_friends=list(player.best_friends),
            duel_invites=[
                DuelInviteInfo(
                    npc_id=invite.npc_id,
                    type=invite.type.value,
                    expires_at=invite.expires_at.isoformat(),
                    level_diff=invite.level_diff,
                )
                for invite in player.duel_invites
            ],
            inventory=dict(player.inventory),
            relations=dict(player.social_relations),
            help_status=help_status_info(player.stats.help_status),
            benefits=benefits,
        )
