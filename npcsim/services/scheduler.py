"""Background scheduler that runs one population tick per interval."""

import threading
from datetime import datetime
from typing import Callable, Optional

from npcsim.core.logging import get_logger

logger = get_logger(__name__)


class TickScheduler:
    """Daemon thread calling ``tick`` every ``interval_seconds``.

    A failing tick is logged and the loop keeps going.
    """

    def __init__(
        self,
        tick: Callable[[], object],
        interval_seconds: float,
        name: str = "npcsim-tick-scheduler",
    ) -> None:
        self._tick = tick
        self._interval = interval_seconds
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self._ticks_run = 0
        self._last_tick_at: Optional[datetime] = None
        self._last_error: Optional[str] = None

    @property
    def running(self) -> bool:
        with self._state_lock:
            return bool(self._thread and self._thread.is_alive())

    def start(self) -> bool:
        with self._state_lock:
            if self._thread and self._thread.is_alive():
                return False
            self._stop_event.clear()
            thread = threading.Thread(target=self._run_loop, name=self._name, daemon=True)
            thread.start()
            self._thread = thread
        logger.info(f"Tick scheduler started (interval={self._interval}s)")
        return True

    def stop(self, join_timeout_seconds: float = 3.0) -> bool:
        with self._state_lock:
            thread = self._thread
            if thread is None:
                return False
            self._stop_event.set()
        thread.join(timeout=max(0.1, join_timeout_seconds))
        with self._state_lock:
            if self._thread is thread:
                self._thread = None
        logger.info("Tick scheduler stopped")
        return True

    def status(self) -> dict:
        return {
            "running": self.running,
            "interval_seconds": self._interval,
            "ticks_run": self._ticks_run,
            "last_tick_at": self._last_tick_at.isoformat() if self._last_tick_at else None,
            "last_error": self._last_error,
        }

    def run_once(self) -> None:
        try:
            self._tick()
            self._ticks_run += 1
            self._last_tick_at = datetime.now()
            self._last_error = None
        except Exception as exc:
            self._last_error = f"{exc.__class__.__name__}: {exc}"
            logger.exception(f"Scheduled tick failed: {exc}")

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.run_once()
