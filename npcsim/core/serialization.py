"""Agent / Player ↔ JSON 호환 dict 변환

DB JSON 컬럼과 API 응답에서 같이 쓴다. 누락된 키는 기본값으로 채운다.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from npcsim.core.npc.models import (
    ActivityKind,
    Agent,
    AgentMemory,
    AgentStats,
    Archetype,
    ChatStyle,
    GiftStats,
    InteractionRecord,
    Mood,
    Needs,
    Personality,
    Progression,
    RoutineEntry,
)
from npcsim.core.player.models import Player, PlayerProgression, PlayerStats
from npcsim.core.social.models import (
    DuelInvite,
    DuelType,
    HelpStatus,
    HelpStatusKind,
)


def _dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


# ── Agent ──


def memory_to_dict(memory: AgentMemory) -> Dict[str, Any]:
    return {
        "interactions": [
            {
                "actor_id": r.actor_id,
                "timestamp": _dt(r.timestamp),
                "summary": r.summary,
                "impact": r.impact,
            }
            for r in memory.interactions
        ],
        "preferences": dict(memory.preferences),
        "score_by_action": dict(memory.score_by_action),
        "friend_status_by_target": dict(memory.friend_status_by_target),
        "last_contact_by_target": {
            k: _dt(v) for k, v in memory.last_contact_by_target.items()
        },
        "last_interaction_by_type": {
            k: _dt(v) for k, v in memory.last_interaction_by_type.items()
        },
        "social_notes_by_target": {
            k: list(v) for k, v in memory.social_notes_by_target.items()
        },
        "gift_stats_by_target": {
            k: {"count": v.count, "quality": v.quality}
            for k, v in memory.gift_stats_by_target.items()
        },
    }


def memory_from_dict(data: Optional[Dict[str, Any]]) -> AgentMemory:
    data = data or {}
    return AgentMemory(
        interactions=[
            InteractionRecord(
                actor_id=r["actor_id"],
                timestamp=_parse_dt(r["timestamp"]),
                summary=r.get("summary", ""),
                impact=r.get("impact", 0),
            )
            for r in data.get("interactions", [])
        ],
        preferences=dict(data.get("preferences", {})),
        score_by_action=dict(data.get("score_by_action", {})),
        friend_status_by_target=dict(data.get("friend_status_by_target", {})),
        last_contact_by_target={
            k: _parse_dt(v) for k, v in data.get("last_contact_by_target", {}).items()
        },
        last_interaction_by_type={
            k: _parse_dt(v)
            for k, v in data.get("last_interaction_by_type", {}).items()
        },
        social_notes_by_target={
            k: list(v) for k, v in data.get("social_notes_by_target", {}).items()
        },
        gift_stats_by_target={
            k: GiftStats(**v) for k, v in data.get("gift_stats_by_target", {}).items()
        },
    )


def agent_to_dict(agent: Agent) -> Dict[str, Any]:
    agent.ensure_defaults()
    p = agent.personality
    n = agent.needs
    return {
        "agent_id": agent.agent_id,
        "name": agent.name,
        "hero_class": agent.hero_class,
        "level": agent.level,
        "attributes": dict(agent.attributes),
        "progression": {"xp": agent.progression.xp, "gold": agent.progression.gold},
        "stats": {
            "quests_completed": agent.stats.quests_completed,
            "items_found": agent.stats.items_found,
            "total_play_time": agent.stats.total_play_time,
        },
        "completed_quests": list(agent.completed_quests),
        "personality": {
            "archetype": p.archetype.value,
            "traits": sorted(p.traits),
            "risk_affinity": p.risk_affinity,
            "chat_style": p.chat_style.value,
            "prefers_party": p.prefers_party,
        },
        "routine": [
            {
                "start": r.start,
                "end": r.end,
                "activity": r.activity.value,
                "location": r.location,
            }
            for r in agent.routine
        ],
        "needs": {
            "fatigue": n.fatigue,
            "hunger": n.hunger,
            "social": n.social,
            "adventure": n.adventure,
            "task": n.task,
        },
        "mood": agent.mood.value,
        "memory": memory_to_dict(agent.memory),
        "social_relations": dict(agent.social_relations),
    }


def agent_from_dict(data: Dict[str, Any]) -> Agent:
    personality = data.get("personality") or {}
    agent = Agent(
        agent_id=data["agent_id"],
        name=data.get("name", ""),
        hero_class=data.get("hero_class", "warrior"),
        level=data.get("level", 1),
        progression=Progression(**(data.get("progression") or {})),
        stats=AgentStats(**(data.get("stats") or {})),
        completed_quests=list(data.get("completed_quests", [])),
        personality=Personality(
            archetype=Archetype(personality.get("archetype", Archetype.EXPLORER.value)),
            traits=set(personality.get("traits", [])),
            risk_affinity=personality.get("risk_affinity", 50),
            chat_style=ChatStyle(personality.get("chat_style", ChatStyle.FRIENDLY.value)),
            prefers_party=personality.get("prefers_party", False),
        ),
        routine=[
            RoutineEntry(
                start=r["start"],
                end=r["end"],
                activity=ActivityKind(r["activity"]),
                location=r.get("location", ""),
            )
            for r in data.get("routine", [])
        ],
        needs=Needs(**data["needs"]) if data.get("needs") else None,
        mood=Mood(data.get("mood", Mood.NEUTRAL.value)),
        memory=memory_from_dict(data["memory"]) if data.get("memory") else None,
        social_relations={
            k: float(v) for k, v in (data.get("social_relations") or {}).items()
        },
    )
    if data.get("attributes"):
        agent.attributes = dict(data["attributes"])
    return agent.ensure_defaults()


# ── Player ──


def help_status_to_dict(status: Optional[HelpStatus]) -> Optional[Dict[str, Any]]:
    if status is None:
        return None
    return {
        "kind": status.kind.value,
        "level": status.level,
        "magnitude": status.magnitude,
        "expires_at": _dt(status.expires_at),
        "missions_remaining": status.missions_remaining,
    }


def help_status_from_dict(data: Optional[Dict[str, Any]]) -> Optional[HelpStatus]:
    if not data:
        return None
    return HelpStatus(
        kind=HelpStatusKind(data["kind"]),
        level=data["level"],
        magnitude=data["magnitude"],
        expires_at=_parse_dt(data["expires_at"]),
        missions_remaining=data.get("missions_remaining", 1),
    )


def player_to_dict(player: Player) -> Dict[str, Any]:
    prog = player.progression
    return {
        "player_id": player.player_id,
        "name": player.name,
        "level": player.level,
        "progression": {
            "xp": prog.xp,
            "gold": prog.gold,
            "reputation": prog.reputation,
            "fatigue": prog.fatigue,
        },
        "faction_reputation": dict(player.faction_reputation),
        "stats": {
            "last_interaction_at": _dt(player.stats.last_interaction_at),
            "daily_interactions": dict(player.stats.daily_interactions),
            "help_status": help_status_to_dict(player.stats.help_status),
        },
        "friends": list(player.friends),
        "best_friends": list(player.best_friends),
        "duel_invites": [
            {
                "npc_id": i.npc_id,
                "type": i.type.value,
                "expires_at": _dt(i.expires_at),
                "level_diff": i.level_diff,
            }
            for i in player.duel_invites
        ],
        "inventory": dict(player.inventory),
        "social_relations": dict(player.social_relations),
        "npc_memory": dict(player.npc_memory),
    }


def player_from_dict(data: Dict[str, Any]) -> Player:
    stats = data.get("stats") or {}
    return Player(
        player_id=data["player_id"],
        name=data.get("name", ""),
        level=data.get("level", 1),
        progression=PlayerProgression(**(data.get("progression") or {})),
        faction_reputation=dict(data.get("faction_reputation", {})),
        stats=PlayerStats(
            last_interaction_at=_parse_dt(stats.get("last_interaction_at")),
            daily_interactions=dict(stats.get("daily_interactions", {})),
            help_status=help_status_from_dict(stats.get("help_status")),
        ),
        friends=list(data.get("friends", [])),
        best_friends=list(data.get("best_friends", [])),
        duel_invites=[
            DuelInvite(
                npc_id=i["npc_id"],
                type=DuelType(i["type"]),
                expires_at=_parse_dt(i["expires_at"]),
                level_diff=i.get("level_diff", 0),
            )
            for i in data.get("duel_invites", [])
        ],
        inventory=dict(data.get("inventory", {})),
        social_relations={
            k: float(v) for k, v in (data.get("social_relations") or {}).items()
        },
        npc_memory=dict(data.get("npc_memory", {})),
    )
