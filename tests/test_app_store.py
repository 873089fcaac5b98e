from __future__ import annotations

import threading
import unittest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from PySide6.QtCore import QCoreApplication

from zonesync.app.state import Store
from zonesync.model.locations import DEFAULT_REGISTRY
from zonesync.model.source_state import SourceTimeComponents, SourceTimeState
from zonesync.model.work_state import WorkState


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


class TestStore(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def setUp(self) -> None:
        self.clock = FakeClock(datetime(2024, 3, 11, 1, 0, 5, tzinfo=timezone.utc))
        state = SourceTimeState(location=DEFAULT_REGISTRY.find("saopaulo"), anchor=self.clock())
        self.store = Store(state=state, clock=self.clock)

        self.batches: list[tuple] = []
        self.sources: list[str] = []
        self.rejections: list[str] = []
        self.components: list[SourceTimeComponents] = []
        self.store.records_changed.connect(self.batches.append)
        self.store.source_changed.connect(self.sources.append)
        self.store.patch_rejected.connect(self.rejections.append)
        self.store.components_changed.connect(self.components.append)

    def test_initial_batch(self) -> None:
        records = self.store.records()
        self.assertEqual(len(records), len(DEFAULT_REGISTRY))
        self.assertEqual(self.store.source_id(), "saopaulo")
        self.assertEqual(self.store.components(), SourceTimeComponents(22, 0, "2024-03-10"))

    def test_default_state_is_seeded_from_clock(self) -> None:
        store = Store(clock=self.clock)
        self.assertEqual(store.state.anchor, self.clock())

    def test_refresh_advances_seconds_without_touching_state(self) -> None:
        anchor = self.store.state.anchor
        self.clock.advance(3)
        self.store.refresh()
        self.assertEqual(len(self.batches), 1)
        self.assertTrue(all(r.local_second == 8 for r in self.batches[0]))
        self.assertIs(self.store.state.anchor, anchor)
        self.assertIs(self.store.records(), self.batches[0])

    def test_set_source(self) -> None:
        self.assertTrue(self.store.set_source("bristol"))
        self.assertEqual(self.sources, ["bristol"])
        self.assertEqual(len(self.batches), 1)
        self.assertTrue(self.store.find_record("bristol").is_source)
        self.assertEqual(self.components[-1], SourceTimeComponents(1, 0, "2024-03-11"))

    def test_set_source_unknown_is_silent_noop(self) -> None:
        before = self.store.records()
        self.assertFalse(self.store.set_source("atlantis"))
        self.assertFalse(self.store.set_source("saopaulo"))
        self.assertEqual(self.sources, [])
        self.assertEqual(self.batches, [])
        self.assertIs(self.store.records(), before)

    def test_apply_patch(self) -> None:
        self.assertTrue(self.store.apply_patch({"hour": 10, "minute": 30}))
        self.assertEqual(self.store.components(), SourceTimeComponents(10, 30, "2024-03-10"))
        singapore = self.store.find_record("singapore")
        self.assertEqual((singapore.local_hour, singapore.local_minute), (21, 30))
        self.assertEqual(len(self.batches), 1)

    def test_rejected_patch_keeps_state(self) -> None:
        anchor = self.store.state.anchor
        with self.assertLogs("zonesync.app.state", level="WARNING"):
            self.assertFalse(self.store.apply_patch({"hour": 25}))
        self.assertEqual(len(self.rejections), 1)
        self.assertEqual(self.batches, [])
        self.assertEqual(self.store.state.anchor, anchor)

    def test_set_now_discards_override(self) -> None:
        self.store.apply_patch({"hour": 3})
        self.clock.advance(60)
        self.store.set_now()
        self.assertEqual(self.store.state.anchor, self.clock())
        self.assertEqual(self.store.state.anchor.tzinfo, ZoneInfo("America/Sao_Paulo"))

    def test_grouping_excludes_home_location(self) -> None:
        grouped = self.store.grouped()
        ids = [r.location.id for group in grouped.values() for r in group]
        self.assertNotIn("saopaulo", ids)
        self.assertEqual(self.store.anchor_record().location.id, "saopaulo")
        self.assertEqual([r.location.id for r in grouped[WorkState.WORKING]], ["singapore"])

    def test_source_id_waits_for_a_writer_holding_the_lock(self) -> None:
        holding, release = threading.Event(), threading.Event()
        seen: list[str] = []

        def writer() -> None:
            with self.store._lock:
                holding.set()
                release.wait(5)

        w = threading.Thread(target=writer)
        w.start()
        self.assertTrue(holding.wait(5))
        r = threading.Thread(target=lambda: seen.append(self.store.source_id()))
        r.start()
        r.join(0.2)
        self.assertTrue(r.is_alive())
        self.assertEqual(seen, [])

        release.set()
        r.join(5)
        w.join(5)
        self.assertEqual(seen, ["saopaulo"])

    def test_toggle_format(self) -> None:
        seen: list[bool] = []
        self.store.format_changed.connect(seen.append)
        self.store.toggle_format()
        self.store.toggle_format()
        self.assertEqual(seen, [True, False])


if __name__ == "__main__":
    unittest.main(verbosity=2)
