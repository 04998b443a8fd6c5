"""대사 점수/선택

조건 미달 줄은 -1점으로 제외. 정렬은 안정 정렬(동점이면 뱅크 순서).
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from npcsim.core.dialogue.bank import DIALOGUE_BANK
from npcsim.core.dialogue.models import DialogueLine, DialoguePriority, DialogueTag
from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player

EXCLUDED = -1
URGENT_BONUS = 3
TIME_BONUS = 2
MIXED_POOL_SIZE = 8


def is_morning(hour: int) -> bool:
    return 5 <= hour < 12


def is_evening(hour: int) -> bool:
    return hour >= 18 or hour < 2


def score_line(
    line: DialogueLine, relation: float, reputation: int, now: datetime
) -> int:
    """가중치 + 긴급/시간대 보너스. 조건 미달이면 -1."""
    if line.required_relation is not None and relation < line.required_relation:
        return EXCLUDED
    if line.required_reputation is not None and reputation < line.required_reputation:
        return EXCLUDED

    score = line.weight
    if line.priority == DialoguePriority.URGENT:
        score += URGENT_BONUS
    if DialogueTag.TIME_MORNING in line.tags and is_morning(now.hour):
        score += TIME_BONUS
    if DialogueTag.TIME_EVENING in line.tags and is_evening(now.hour):
        score += TIME_BONUS
    return score


def _ranked(
    lines: Iterable[DialogueLine], agent: Agent, player: Player, now: datetime
) -> List[DialogueLine]:
    relation = agent.relation_to(player.player_id)
    reputation = player.progression.reputation
    scored = [(line, score_line(line, relation, reputation, now)) for line in lines]
    kept = [(line, s) for line, s in scored if s >= 0]
    kept.sort(key=lambda pair: pair[1], reverse=True)
    return [line for line, _ in kept]


def render_line(line: DialogueLine, agent: Agent) -> str:
    return line.text.replace("{npc}", agent.name)


def generate_dialogue(
    agent: Agent,
    player: Player,
    required_tags: Sequence[DialogueTag],
    limit: int = 3,
    now: Optional[datetime] = None,
    bank: Sequence[DialogueLine] = DIALOGUE_BANK,
) -> List[str]:
    """required_tags를 모두 가진 줄 중 점수 상위 max(1, limit)개"""
    now = now or datetime.now()
    wanted = set(required_tags)
    filtered = [line for line in bank if wanted <= line.tags]
    ranked = _ranked(filtered, agent, player, now)
    return [render_line(line, agent) for line in ranked[: max(1, limit)]]


def generate_mixed(
    agent: Agent,
    player: Player,
    limit: int = 3,
    now: Optional[datetime] = None,
    bank: Sequence[DialogueLine] = DIALOGUE_BANK,
) -> List[str]:
    """태그 무관 상위 8줄 중 앞에서 limit개"""
    now = now or datetime.now()
    pool = _ranked(bank, agent, player, now)[:MIXED_POOL_SIZE]
    return [render_line(line, agent) for line in pool][: max(0, limit)]
