"""텍스트 생성 보강용 프롬프트 조립/응답 파싱

실제 호출은 DialogueService가 한다 (사용자 요청 경로에서만).
"""

import re
from datetime import datetime
from typing import List

from npcsim.core.dialogue.models import EnrichmentContext
from npcsim.core.npc.memory import recent_summaries
from npcsim.core.npc.models import Agent
from npcsim.core.npc.routine import resolve_bias
from npcsim.core.player.models import Player

ENRICHMENT_MAX_TOKENS = 120
ENRICHMENT_TEMPERATURE = 0.8
MAX_GENERATED_LINES = 2

SYSTEM_MESSAGE = (
    "You are a fantasy NPC. Write short, contextual remarks (at most 2 lines) "
    "based on your current routine, mood and memories. Avoid repetition and "
    "cliches. NPC speech only."
)

_NPC_PREFIX = re.compile(r"^NPC:\s*", re.IGNORECASE)


def build_enrichment_context(
    agent: Agent, player: Player, now: datetime
) -> EnrichmentContext:
    agent.ensure_defaults()
    return EnrichmentContext(
        activity=resolve_bias(agent.routine, now.hour).value,
        mood=agent.mood.value,
        relation=agent.relation_to(player.player_id),
        player_name=player.name or player.player_id,
        preferences=dict(agent.memory.preferences),
        recent_memories=recent_summaries(agent.memory, 3),
    )


def build_enrichment_prompt(context: EnrichmentContext) -> str:
    return (
        f"Write up to two original remarks about {context.activity}, reflecting a "
        f"{context.mood} mood and quietly mentioning a detail of the routine or "
        f"place, addressed to the hero {context.player_name}."
    )


def parse_generated_lines(text: str, limit: int = MAX_GENERATED_LINES) -> List[str]:
    """줄 단위 분리 → 공백/빈 줄 제거 → "NPC:" 접두어 제거 → 앞에서 limit개"""
    lines = [raw.strip() for raw in (text or "").splitlines()]
    cleaned = [_NPC_PREFIX.sub("", line).strip() for line in lines if line]
    return [line for line in cleaned if line][:limit]
