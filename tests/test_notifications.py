"""알림 싱크 / 틱 방출 모드 테스트"""

from npcsim.core.event_bus import EventBus
from npcsim.core.event_types import EventTypes
from npcsim.core.notifications import (
    SUMMARY_TITLE,
    CapturingSink,
    EventBusSink,
    Notification,
    NotificationSink,
    NotificationType,
    flush_tick_notifications,
    safe_emit,
    summarize,
)
from npcsim.core.tunables import NotificationMode


def _n(title: str, message: str = "msg") -> Notification:
    return Notification(type=NotificationType.QUEST, title=title, message=message)


class _ExplodingSink(NotificationSink):
    def emit(self, notification: Notification) -> None:
        raise ConnectionError("channel down")


BATCH = [
    _n("NPC Training", "a trained"),
    _n("NPC Mission", "b finished a mission"),
    _n("NPC Training", "c trained"),
    _n("NPC Trading", "d traded"),
    _n("NPC Mission", "e finished a mission"),
]


class TestFlushModes:
    def test_off(self, sink):
        assert flush_tick_notifications(sink, BATCH, NotificationMode.OFF, 3) == []
        assert sink.notifications == []

    def test_normal_caps_per_tick(self, sink):
        emitted = flush_tick_notifications(sink, BATCH, NotificationMode.NORMAL, 3)
        assert emitted == BATCH[:3]
        assert sink.notifications == BATCH[:3]

    def test_compact_single_summary(self, sink):
        emitted = flush_tick_notifications(
            sink, BATCH, NotificationMode.COMPACT, 3, highlight_title="NPC Mission"
        )
        assert len(emitted) == 1
        assert sink.titles() == [SUMMARY_TITLE]
        message = emitted[0].message
        assert message.startswith("NPC Training x2 • NPC Mission x2 • NPC Trading x1")
        assert message.endswith("Highlight: b finished a mission")

    def test_compact_empty(self, sink):
        assert flush_tick_notifications(sink, [], NotificationMode.COMPACT, 3) == []

    def test_summary_highlight_fallback(self):
        summary = summarize([_n("NPC Trading", "first")], highlight_title="NPC Mission")
        assert summary.message.endswith("Highlight: first")

    def test_summary_top_four_titles(self):
        batch = [_n(f"T{i}") for i in range(6)]
        assert summarize(batch).message.count(" x1") == 4


class TestSinks:
    def test_safe_emit_swallows_sink_errors(self):
        safe_emit(_ExplodingSink(), _n("NPC Mission"))

    def test_safe_emit_without_sink(self):
        safe_emit(None, _n("NPC Mission"))

    def test_event_bus_sink(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.NOTIFICATION, lambda e: received.append(e.data))
        EventBusSink(bus).emit(_n("NPC Mission", "done"))
        assert received == [
            {"type": "quest", "title": "NPC Mission", "message": "done", "icon": None, "duration": None}
        ]

    def test_capturing_sink_clear(self):
        sink = CapturingSink()
        sink.emit(_n("x"))
        sink.clear()
        assert sink.titles() == []
