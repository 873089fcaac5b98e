"""
Live Clock Driver
=================
A once-per-second ticker for the Store.

Why is this file needed?
------------------------
1. Alignment: The first tick is delayed to the next wall-clock second
   boundary so displayed seconds flip in step with the system clock.
2. Lifecycle: Both the alignment timer and the repeating timer are owned here
   and are cancelled together by `stop()`.

The driver only emits `ticked`; it never touches the source state.
"""
from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot

from zonesync.config import TICK_INTERVAL_MS
from zonesync.model.source_state import utc_now

logger = logging.getLogger(__name__)


def ms_until_next_second(now: datetime) -> int:
    """Milliseconds until the next whole second, in 1..1000."""
    return 1000 - now.microsecond // 1000


class LiveClockDriver(QObject):
    ticked = Signal()

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._clock = clock

        self._align_timer = QTimer(self)
        self._align_timer.setSingleShot(True)
        self._align_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._align_timer.timeout.connect(self._on_aligned)

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(interval_ms)
        self._tick_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._tick_timer.timeout.connect(self._on_tick)

    def interval_ms(self) -> int:
        return self._tick_timer.interval()

    def is_running(self) -> bool:
        return self._align_timer.isActive() or self._tick_timer.isActive()

    def is_aligning(self) -> bool:
        return self._align_timer.isActive()

    def start(self) -> None:
        """Arm the alignment timer; repeating ticks start on the next second."""
        self.stop()
        delay = ms_until_next_second(self._clock())
        logger.debug(f"Live clock aligning in {delay} ms.")
        self._align_timer.start(delay)

    def stop(self) -> None:
        self._align_timer.stop()
        self._tick_timer.stop()

    @Slot()
    def _on_aligned(self) -> None:
        self._tick_timer.start()
        self.ticked.emit()

    @Slot()
    def _on_tick(self) -> None:
        self.ticked.emit()
