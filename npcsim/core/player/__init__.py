"""플레이어 Core 패키지 — 공개 API"""

from npcsim.core.player.models import Player, PlayerProgression, PlayerStats

__all__ = [
    "Player",
    "PlayerProgression",
    "PlayerStats",
]
