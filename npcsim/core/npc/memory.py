"""NPC 기억 조작

상호작용 로그(상한 유지), 쿨다운 타임스탬프, 소셜 메모.
"""

from datetime import datetime
from typing import List

from npcsim.core.npc.models import AgentMemory, InteractionRecord

DEFAULT_INTERACTION_CAP = 50
DEFAULT_NOTES_CAP = 20


def record_interaction(
    memory: AgentMemory,
    actor_id: str,
    summary: str,
    impact: int,
    now: datetime,
    cap: int = DEFAULT_INTERACTION_CAP,
) -> InteractionRecord:
    """로그 추가 후 최근 cap개만 남긴다."""
    record = InteractionRecord(
        actor_id=actor_id, timestamp=now, summary=summary, impact=impact
    )
    memory.interactions.append(record)
    if len(memory.interactions) > cap:
        del memory.interactions[: len(memory.interactions) - cap]
    return record


def count_positive_interactions(memory: AgentMemory, actor_id: str) -> int:
    """actor와의 impact > 0 기록 수"""
    return sum(
        1 for r in memory.interactions if r.actor_id == actor_id and r.impact > 0
    )


def recent_summaries(memory: AgentMemory, n: int = 3) -> List[str]:
    """최근 n개 요약 (오래된 것 → 최신 순)"""
    if n <= 0:
        return []
    return [r.summary for r in memory.interactions[-n:]]


def add_social_note(
    memory: AgentMemory,
    target_id: str,
    note: str,
    cap: int = DEFAULT_NOTES_CAP,
) -> None:
    notes = memory.social_notes_by_target.setdefault(target_id, [])
    notes.append(note)
    if len(notes) > cap:
        del notes[: len(notes) - cap]


def cooldown_ready(
    memory: AgentMemory, key: str, now: datetime, cooldown_seconds: float
) -> bool:
    """key 유형의 마지막 기록이 cooldown_seconds 이상 지났는지"""
    last = memory.last_interaction_by_type.get(key)
    if last is None:
        return True
    return (now - last).total_seconds() >= cooldown_seconds


def stamp_interaction(memory: AgentMemory, key: str, now: datetime) -> None:
    memory.last_interaction_by_type[key] = now


def try_claim_cooldown(
    memory: AgentMemory, key: str, now: datetime, cooldown_seconds: float
) -> bool:
    """쿨다운이 끝났으면 타임스탬프를 찍고 True. 아니면 아무것도 바꾸지 않는다."""
    if not cooldown_ready(memory, key, now, cooldown_seconds):
        return False
    stamp_interaction(memory, key, now)
    return True
