"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class SocialActionRequest(BaseModel):
    """소셜 행동 요청 본문 (gift일 때만 item_id 필요)"""

    item_id: Optional[str] = Field(
        default=None, min_length=1, max_length=80, description="선물 아이템 ID"
    )


# === Response Schemas ===


class NotificationInfo(BaseModel):
    type: str
    title: str
    message: str
    icon: Optional[str] = None
    duration: Optional[int] = None


class NeedsInfo(BaseModel):
    fatigue: int
    hunger: int
    social: int
    adventure: int
    task: int


class NPCSummary(BaseModel):
    """NPC 목록 항목"""

    agent_id: str
    name: str
    hero_class: str
    level: int
    mood: str
    relation: float
    tier: str


class NPCDetail(NPCSummary):
    """NPC 상세"""

    archetype: str
    chat_style: str
    traits: list[str] = []
    needs: NeedsInfo
    xp: int
    gold: int
    attributes: dict[str, int] = {}
    recent_memories: list[str] = []
    social_notes: list[str] = []


class HelpStatusInfo(BaseModel):
    kind: str
    level: int
    magnitude: float
    expires_at: str
    missions_remaining: int


class SocialActionResponse(BaseModel):
    """소셜 행동 결과"""

    action: str
    success: bool
    delta: float
    relation: float
    tier: str
    help_status: Optional[HelpStatusInfo] = None
    reward_item: Optional[str] = None
    notifications: list[NotificationInfo] = []


class DialogueResponse(BaseModel):
    agent_id: str
    lines: list[str]
    source: str


class TickResponse(BaseModel):
    """틱 1회 결과 요약"""

    tick: int
    actions: dict[str, str]
    notifications: list[NotificationInfo] = []
    duel_issued: bool = False
    cascaded: list[str] = []


class DuelInviteInfo(BaseModel):
    npc_id: str
    type: str
    expires_at: str
    level_diff: int


class PlayerResponse(BaseModel):
    """플레이어 상태"""

    player_id: str
    name: str
    level: int
    progression: dict[str, int]
    friends: list[str] = []
    best_friends: list[str] = []
    duel_invites: list[DuelInviteInfo] = []
    inventory: dict[str, int] = {}
    relations: dict[str, float] = {}
    help_status: Optional[HelpStatusInfo] = None
    benefits: dict[str, Any] = {}


class ErrorResponse(BaseModel):
    """에러 응답"""

    error: str
    detail: Optional[str] = None
