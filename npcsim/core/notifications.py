"""알림 싱크 — 시뮬레이션 결과를 외부 알림 채널로 방출

Core 로직은 Notification을 만들기만 한다. 방출 횟수 제한은
flush_tick_notifications()가 틱 단위로 처리한다.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.tunables import NotificationMode

logger = get_logger(__name__)


class NotificationType:
    """알림 유형 문자열 상수 (UI 분류용)"""

    XP = "xp"
    QUEST = "quest"
    ITEM = "item"
    ACHIEVEMENT = "achievement"
    STAMINA = "stamina"
    REFUSAL = "refusal"


@dataclass
class Notification:
    """외부 알림 1건"""

    type: str
    title: str
    message: str
    icon: Optional[str] = None
    duration: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class NotificationSink(ABC):
    """알림 채널. emit은 확인 응답 없이 끝난다."""

    @abstractmethod
    def emit(self, notification: Notification) -> None: ...


class CapturingSink(NotificationSink):
    """받은 알림을 목록에 쌓는 싱크 (테스트/API 응답용)"""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def titles(self) -> List[str]:
        return [n.title for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


class EventBusSink(NotificationSink):
    """알림을 EventBus notification 이벤트로 전달"""

    def __init__(self, bus: EventBus, source: str = "notification_sink") -> None:
        self._bus = bus
        self._source = source

    def emit(self, notification: Notification) -> None:
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.NOTIFICATION,
                data=notification.to_dict(),
                source=self._source,
            )
        )


def safe_emit(sink: Optional[NotificationSink], notification: Notification) -> None:
    """싱크 에러는 시뮬레이션으로 전파하지 않는다."""
    if sink is None:
        return
    try:
        sink.emit(notification)
    except Exception:
        logger.exception(f"Notification sink failed: {notification.title}")


SUMMARY_TITLE = "NPC Activities"
SUMMARY_TOP_TITLES = 4


def summarize(
    notifications: List[Notification], highlight_title: Optional[str] = None
) -> Optional[Notification]:
    """틱 알림 목록 → 요약 1건 ("제목 xN • ... • Highlight: ...")"""
    if not notifications:
        return None
    counts = Counter(n.title for n in notifications)
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    summary = " • ".join(f"{title} x{n}" for title, n in ordered[:SUMMARY_TOP_TITLES])
    highlight = next(
        (n for n in notifications if n.title == highlight_title), notifications[0]
    )
    return Notification(
        type=NotificationType.QUEST,
        title=SUMMARY_TITLE,
        message=f"{summary} • Highlight: {highlight.message}",
        icon="👥",
        duration=3500,
    )


def flush_tick_notifications(
    sink: Optional[NotificationSink],
    notifications: List[Notification],
    mode: NotificationMode,
    max_per_tick: int,
    highlight_title: Optional[str] = None,
) -> List[Notification]:
    """틱에서 모은 알림을 모드에 맞게 방출하고, 실제 방출한 목록을 반환.

    off → 없음, normal → 앞에서 max_per_tick개, compact → 요약 1건.
    """
    if mode == NotificationMode.OFF or not notifications:
        return []
    if mode == NotificationMode.NORMAL:
        emitted = notifications[: max(0, max_per_tick)]
    else:
        summary = summarize(notifications, highlight_title)
        emitted = [summary] if summary is not None else []
    for notification in emitted:
        safe_emit(sink, notification)
    return emitted
