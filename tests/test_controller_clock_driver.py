from __future__ import annotations

import unittest
from datetime import datetime, timezone

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

from zonesync.controller.clock_driver import LiveClockDriver, ms_until_next_second


def _at(microsecond: int) -> datetime:
    return datetime(2024, 6, 3, 12, 0, 0, microsecond, tzinfo=timezone.utc)


class TestAlignment(unittest.TestCase):
    def test_delay_to_next_second(self) -> None:
        self.assertEqual(ms_until_next_second(_at(0)), 1000)
        self.assertEqual(ms_until_next_second(_at(250_000)), 750)
        self.assertEqual(ms_until_next_second(_at(999_999)), 1)

    def test_delay_is_always_positive(self) -> None:
        for micro in range(0, 1_000_000, 37_000):
            delay = ms_until_next_second(_at(micro))
            self.assertGreaterEqual(delay, 1)
            self.assertLessEqual(delay, 1000)


class TestLiveClockDriver(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def setUp(self) -> None:
        self.driver = LiveClockDriver(clock=lambda: _at(900_000))
        self.ticks = 0
        self.driver.ticked.connect(self._count)

    def tearDown(self) -> None:
        self.driver.stop()

    def _count(self) -> None:
        self.ticks += 1

    def test_start_arms_alignment_only(self) -> None:
        self.driver.start()
        self.assertTrue(self.driver.is_running())
        self.assertTrue(self.driver.is_aligning())
        self.assertEqual(self.driver.interval_ms(), 1000)
        self.assertEqual(self.ticks, 0)

    def test_alignment_starts_repeating_ticks(self) -> None:
        self.driver.start()
        self.driver._align_timer.stop()
        self.driver._on_aligned()
        self.assertEqual(self.ticks, 1)
        self.assertFalse(self.driver.is_aligning())
        self.assertTrue(self.driver.is_running())

    def test_stop_cancels_everything(self) -> None:
        self.driver.start()
        self.driver._on_aligned()
        self.driver.stop()
        self.assertFalse(self.driver.is_running())

    def test_restart_does_not_duplicate_timers(self) -> None:
        self.driver.start()
        self.driver.start()
        self.assertTrue(self.driver.is_aligning())
        self.driver.stop()
        self.assertFalse(self.driver.is_running())

    def test_ticks_in_event_loop(self) -> None:
        driver = LiveClockDriver(clock=lambda: _at(900_000), interval_ms=50)
        driver.ticked.connect(self._count)
        loop = QEventLoop()
        QTimer.singleShot(400, loop.quit)
        driver.start()
        loop.exec()
        driver.stop()
        # 100 ms alignment then a tick every 50 ms
        self.assertGreaterEqual(self.ticks, 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
