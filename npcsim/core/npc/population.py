"""초기 인구 생성 — 성격/루틴은 생성 시 한 번만 정한다"""

import random
from typing import List, Optional, Sequence

from npcsim.core.npc.models import (
    ATTRIBUTE_NAMES,
    Agent,
    Archetype,
    ChatStyle,
    Personality,
)
from npcsim.core.npc.routine import default_routine

TRAITS_POOL = (
    "impulsive",
    "strategist",
    "generous",
    "ambitious",
    "curious",
    "distrustful",
    "loyal",
    "cunning",
    "honorable",
)

HERO_CLASSES = ("warrior", "paladin", "mage", "sorcerer", "rogue", "ranger")

NPC_NAMES = (
    "Aldric",
    "Brena",
    "Corvin",
    "Dalia",
    "Edrik",
    "Fenna",
    "Garrick",
    "Hilde",
    "Isolde",
    "Jorund",
    "Kaela",
    "Lorcan",
)

PARTY_PREFERENCE_CHANCE = 0.6


def seed_personality(rng: random.Random) -> Personality:
    """무작위 성격 (특성 3개는 중복 가능, set이라 합쳐질 수 있음)"""
    return Personality(
        archetype=rng.choice(list(Archetype)),
        traits={rng.choice(TRAITS_POOL) for _ in range(3)},
        risk_affinity=rng.randrange(100),
        chat_style=rng.choice(list(ChatStyle)),
        prefers_party=rng.random() < PARTY_PREFERENCE_CHANCE,
    )


def create_agent(
    agent_id: str,
    name: str,
    rng: random.Random,
    hero_class: Optional[str] = None,
    level: int = 1,
) -> Agent:
    agent = Agent(
        agent_id=agent_id,
        name=name,
        hero_class=hero_class or rng.choice(HERO_CLASSES),
        level=max(1, level),
        attributes={attr: rng.randint(2, 5) for attr in ATTRIBUTE_NAMES},
        personality=seed_personality(rng),
        routine=default_routine(),
    )
    return agent


def seed_population(
    size: int,
    rng: random.Random,
    names: Sequence[str] = NPC_NAMES,
    max_level: int = 8,
) -> List[Agent]:
    """size명의 NPC 생성. 이름이 모자라면 번호를 붙인다."""
    agents: List[Agent] = []
    for i in range(size):
        base = names[i % len(names)]
        name = base if i < len(names) else f"{base} {i // len(names) + 1}"
        agents.append(
            create_agent(
                agent_id=f"npc-{i + 1:03d}",
                name=name,
                rng=rng,
                level=rng.randint(1, max_level),
            )
        )
    return agents
