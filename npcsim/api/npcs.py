"""NPC API endpoints — 조회, 소셜 행동, 대사"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from npcsim.api.schemas import (
    DialogueResponse,
    HelpStatusInfo,
    NeedsInfo,
    NotificationInfo,
    NPCDetail,
    NPCSummary,
    SocialActionRequest,
    SocialActionResponse,
)
from npcsim.core.dialogue.models import DialogueTag
from npcsim.core.logging import get_logger
from npcsim.core.npc.memory import recent_summaries
from npcsim.core.npc.models import Agent
from npcsim.core.relationship.calculations import compute_tier
from npcsim.core.social.models import HelpStatus, SocialActionKind
from npcsim.services.dialogue_service import DialogueService
from npcsim.services.social_service import SocialService
from npcsim.services.world import SocialWorld

logger = get_logger(__name__)

router = APIRouter(prefix="/npcs", tags=["npcs"])


def get_world(request: Request) -> SocialWorld:
    """SocialWorld 인스턴스 반환 (의존성 주입)"""
    world: SocialWorld = request.app.state.world
    return world


def get_social_service(request: Request) -> SocialService:
    """SocialService 인스턴스 반환 (의존성 주입)"""
    service: SocialService = request.app.state.social_service
    return service


def get_dialogue_service(request: Request) -> DialogueService:
    """DialogueService 인스턴스 반환 (의존성 주입)"""
    service: DialogueService = request.app.state.dialogue_service
    return service


def help_status_info(status: Optional[HelpStatus]) -> Optional[HelpStatusInfo]:
    if status is None:
        return None
    return HelpStatusInfo(
        kind=status.kind.value,
        level=status.level,
        magnitude=status.magnitude,
        expires_at=status.expires_at.isoformat(),
        missions_remaining=status.missions_remaining,
    )


def _summary_fields(agent: Agent, world: SocialWorld) -> dict:
    player_id = world.player.player_id if world.player else ""
    relation = agent.relation_to(player_id)
    return {
        "agent_id": agent.agent_id,
        "name": agent.name,
        "hero_class": agent.hero_class,
        "level": agent.level,
        "mood": agent.mood.value,
        "relation": relation,
        "tier": compute_tier(relation, world.tunables).value,
    }


def _require_agent(world: SocialWorld, agent_id: str) -> Agent:
    agent = world.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail=f"NPC not found: {agent_id}")
    return agent


@router.get("", response_model=list[NPCSummary])
def list_npcs(world: SocialWorld = Depends(get_world)) -> list[NPCSummary]:
    """전체 NPC 목록 (처리 순서대로)"""
    with world.lock:
        return [NPCSummary(**_summary_fields(a, world)) for a in world.agents]


@router.get("/{agent_id}", response_model=NPCDetail)
def get_npc(agent_id: str, world: SocialWorld = Depends(get_world)) -> NPCDetail:
    """NPC 상세"""
    with world.lock:
        agent = _require_agent(world, agent_id).ensure_defaults()
        player_id = world.player.player_id if world.player else ""
        needs = agent.needs
        return NPCDetail(
            **_summary_fields(agent, world),
            archetype=agent.personality.archetype.value,
            chat_style=agent.personality.chat_style.value,
            traits=sorted(agent.personality.traits),
            needs=NeedsInfo(
                fatigue=needs.fatigue,
                hunger=needs.hunger,
                social=needs.social,
                adventure=needs.adventure,
                task=needs.task,
            ),
            xp=agent.progression.xp,
            gold=agent.progression.gold,
            attributes=dict(agent.attributes),
            recent_memories=recent_summaries(agent.memory, 3),
            social_notes=list(agent.memory.social_notes_by_target.get(player_id, [])),
        )


@router.post("/{agent_id}/actions/{action}", response_model=SocialActionResponse)
def perform_action(
    agent_id: str,
    action: SocialActionKind,
    body: Optional[SocialActionRequest] = None,
    world: SocialWorld = Depends(get_world),
    service: SocialService = Depends(get_social_service),
) -> SocialActionResponse:
    """소셜 행동 실행. 거절도 200 (success=false)."""
    _require_agent(world, agent_id)
    item_id = body.item_id if body else None
    if action == SocialActionKind.GIFT and not item_id:
        raise HTTPException(status_code=422, detail="item_id is required for gift")

    result = service.perform(agent_id, action, item_id=item_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Player or NPC not available")
    return SocialActionResponse(
        action=result.action.value,
        success=result.success,
        delta=result.delta,
        relation=result.relation,
        tier=result.tier.value,
        help_status=help_status_info(result.help_status),
        reward_item=result.reward_item,
        notifications=[NotificationInfo(**n.to_dict()) for n in result.notifications],
    )


@router.get("/{agent_id}/dialogue", response_model=DialogueResponse)
def get_dialogue(
    agent_id: str,
    tags: list[DialogueTag] = Query(default=[]),
    limit: int = Query(default=3, ge=1, le=8),
    enrich: bool = Query(default=False),
    context: Optional[str] = Query(default=None, max_length=200),
    service: DialogueService = Depends(get_dialogue_service),
) -> DialogueResponse:
    """대사 요청. context가 있으면 자유 대사, enrich면 텍스트 생성 보강."""
    if context:
        reply = service.freeform(agent_id, context)
    else:
        reply = service.request_dialogue(agent_id, tags, limit, enrich=enrich)
    if reply is None:
        raise HTTPException(status_code=404, detail=f"NPC not found: {agent_id}")
    return DialogueResponse(agent_id=reply.agent_id, lines=reply.lines, source=reply.source)
