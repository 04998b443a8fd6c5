"""도움 버프 생성/소비

버프는 다음 임무 1회에만 적용된다. 수치 해석(임무 판정)은 외부 몫.
"""

import random
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from npcsim.core.player.models import Player
from npcsim.core.social.models import HelpStatus, HelpStatusKind

# kind → (L1, L2, L3)
HELP_MAGNITUDES: Dict[HelpStatusKind, Tuple[float, float, float]] = {
    HelpStatusKind.BOOST_XP: (0.10, 0.15, 0.20),
    HelpStatusKind.BOOST_INITIATIVE: (5, 6, 8),
    HelpStatusKind.GOLD_BONUS: (0.10, 0.15, 0.20),
    HelpStatusKind.SUCCESS_BOOST: (0.05, 0.07, 0.10),
    HelpStatusKind.STAMINA_DISCOUNT: (1, 1, 2),
    HelpStatusKind.LOOT_BONUS: (0.10, 0.15, 0.25),
    HelpStatusKind.AMBUSH_SHIELD: (0.20, 0.35, 0.50),
    HelpStatusKind.REDUCE_COOLDOWN: (5, 8, 12),
    HelpStatusKind.STAMINA_REFILL: (10, 20, 30),
}

LEVEL_3_RELATION = 80
LEVEL_2_RELATION = 50


def help_level(relation: float) -> int:
    if relation >= LEVEL_3_RELATION:
        return 3
    if relation >= LEVEL_2_RELATION:
        return 2
    return 1


def build_help_status(
    relation: float,
    now: datetime,
    rng: random.Random,
    ttl_hours: float = 2,
) -> HelpStatus:
    """관계 점수로 레벨을 정하고 kind는 균등 선택"""
    kind = rng.choice(list(HelpStatusKind))
    level = help_level(relation)
    return HelpStatus(
        kind=kind,
        level=level,
        magnitude=HELP_MAGNITUDES[kind][level - 1],
        expires_at=now + timedelta(hours=ttl_hours),
    )


def grant_help_status(player: Player, status: HelpStatus) -> None:
    """기존 버프를 덮어쓴다. stamina_refill은 즉시 피로도를 깎는다."""
    if status.kind == HelpStatusKind.STAMINA_REFILL:
        fatigue = max(0, player.progression.fatigue)
        player.progression.fatigue = max(0, fatigue - int(status.magnitude))
    player.stats.help_status = status


def describe_help_status(status: HelpStatus) -> str:
    kind = status.kind
    if kind == HelpStatusKind.BOOST_XP:
        return f"+{round(status.magnitude * 100)}% XP on the next mission"
    if kind == HelpStatusKind.STAMINA_REFILL:
        return f"Fatigue -{int(status.magnitude)}"
    if kind == HelpStatusKind.REDUCE_COOLDOWN:
        return f"Cooldown -{int(status.magnitude)} min on the next mission"
    if kind == HelpStatusKind.BOOST_INITIATIVE:
        return f"+{int(status.magnitude)} initiative on the next mission"
    if kind == HelpStatusKind.GOLD_BONUS:
        return f"+{round(status.magnitude * 100)}% gold on the next mission"
    if kind == HelpStatusKind.SUCCESS_BOOST:
        return f"+{round(status.magnitude * 100)}% success chance per phase"
    if kind == HelpStatusKind.STAMINA_DISCOUNT:
        return f"Fatigue cost reduced by {int(status.magnitude)}"
    if kind == HelpStatusKind.LOOT_BONUS:
        return f"Loot chance +{round(status.magnitude * 100)}%"
    return f"Ambush protection ({round(status.magnitude * 100)}% less risk/damage)"


def consume_help_status(player: Player, now: datetime) -> Optional[HelpStatus]:
    """다음 임무 시도용으로 버프를 꺼내고 비운다. 만료된 버프는 버린다."""
    status = player.stats.help_status
    player.stats.help_status = None
    if status is None or not status.is_active(now):
        return None
    status.missions_remaining -= 1
    return status
