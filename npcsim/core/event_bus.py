"""EventBus - 서비스 간 시뮬레이션 이벤트 전달

규칙:
- 서비스는 다른 서비스를 직접 호출하지 않는다
- 이벤트는 식별자(ID)와 수치만 전달한다
- 전파 깊이 최대 MAX_DEPTH 단계
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from npcsim.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 틱 내 이벤트 전파 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (예: "relationship_changed")
        data: 이벤트 데이터 (ID 위주, 무거운 객체 금지)
        source: 발행한 서비스 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    # 내부 추적용 (외부에서 설정하지 않음)
    _depth: int = field(default=0, repr=False)


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe("relationship_changed", handler)
        bus.emit(GameEvent(event_type="relationship_changed", data={...}, source="simulation"))
        bus.reset_chain()  # 틱 종료 시
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제"""
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    def emit(self, event: GameEvent) -> bool:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        Returns:
            전달되었으면 True, 깊이 초과로 버려졌으면 False.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return False

        event._depth = self._current_depth

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return True

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
        return True

    def reset_chain(self) -> None:
        """틱 경계에서 호출. 전파 깊이 초기화."""
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())
