"""루틴 해석 — 현재 시각 → 활동 편향"""

from typing import List, Optional

from npcsim.core.npc.models import ActivityKind, RoutineEntry

DEFAULT_BIAS = ActivityKind.EXPLORE

# 기본 하루 일과 (06~22시, 나머지는 공백 → 기본 편향)
DEFAULT_ROUTINE_TEMPLATE = (
    ("06:00", "09:00", ActivityKind.TRAIN, "training_hall"),
    ("09:00", "12:00", ActivityKind.MISSION, "field"),
    ("12:00", "13:00", ActivityKind.TAVERN, "tavern"),
    ("13:00", "18:00", ActivityKind.EXPLORE, "outskirts"),
    ("18:00", "22:00", ActivityKind.SOCIAL, "forge"),
)


def default_routine() -> List[RoutineEntry]:
    return [
        RoutineEntry(start=s, end=e, activity=a, location=loc)
        for s, e, a, loc in DEFAULT_ROUTINE_TEMPLATE
    ]


def parse_hour(value: str, fallback: int) -> int:
    """"HH:MM" → 시(hour). 형식이 깨졌으면 fallback."""
    try:
        return int(value.split(":", 1)[0])
    except (AttributeError, ValueError):
        return fallback


def find_entry(routine: List[RoutineEntry], hour: int) -> Optional[RoutineEntry]:
    """[start, end) 구간에 hour가 들어가는 첫 항목"""
    for entry in routine:
        start = parse_hour(entry.start, 0)
        end = parse_hour(entry.end, 23)
        if start <= hour < end:
            return entry
    return None


def resolve_bias(routine: Optional[List[RoutineEntry]], hour: int) -> ActivityKind:
    """현재 시각의 활동. 루틴이 없거나 공백 시간이면 explore."""
    entry = find_entry(routine or [], hour)
    if entry is None:
        return DEFAULT_BIAS
    return entry.activity
