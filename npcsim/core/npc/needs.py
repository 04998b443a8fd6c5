"""욕구 진행 + 기분 도출

전부 순수 함수. 난수는 호출자가 주입한다.
"""

import random
from typing import Optional

from npcsim.core.npc.models import Mood, Needs

NEED_MIN = 0
NEED_MAX = 100

# 기분 판정 임계값 (우선순위 순)
HUNGER_ANGRY = 70
FATIGUE_TIRED = 70
SOCIAL_SAD = 30

# 플레이어 관계 보정
RELATION_HAPPY = 40
RELATION_CALM = 20

TAVERN_HUNGER_RELIEF = 10


def clamp_need(value: int) -> int:
    return max(NEED_MIN, min(NEED_MAX, value))


def advance_needs(needs: Needs, rng: random.Random) -> Needs:
    """틱 1회 욕구 진행. needs를 직접 갱신하고 반환.

    fatigue +1, hunger +0/1, social -0/1, adventure +2 (30%), task -1 (20%).
    """
    needs.fatigue = clamp_need(needs.fatigue + 1)
    needs.hunger = clamp_need(needs.hunger + (1 if rng.random() < 0.5 else 0))
    needs.social = clamp_need(needs.social - (1 if rng.random() < 0.5 else 0))
    if rng.random() < 0.3:
        needs.adventure = clamp_need(needs.adventure + 2)
    if rng.random() < 0.2:
        needs.task = clamp_need(needs.task - 1)
    return needs


def relieve_hunger(needs: Needs, amount: int = TAVERN_HUNGER_RELIEF) -> Needs:
    needs.hunger = clamp_need(needs.hunger - amount)
    return needs


def derive_mood(needs: Needs, relation: Optional[float] = None) -> Mood:
    """욕구 → 기분, 이후 플레이어 관계로 보정.

    hunger>70 → angry, fatigue>70 → tired, social<30 → sad, 그 외 neutral.
    관계 ≥40 → happy, ≥20 → calm (angry/tired는 유지).
    """
    if needs.hunger > HUNGER_ANGRY:
        mood = Mood.ANGRY
    elif needs.fatigue > FATIGUE_TIRED:
        mood = Mood.TIRED
    elif needs.social < SOCIAL_SAD:
        mood = Mood.SAD
    else:
        mood = Mood.NEUTRAL

    if relation is None:
        return mood
    if relation >= RELATION_HAPPY:
        return Mood.HAPPY
    if relation >= RELATION_CALM and mood not in (Mood.ANGRY, Mood.TIRED):
        return Mood.CALM
    return mood
