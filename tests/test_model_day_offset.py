from __future__ import annotations

import unittest
from datetime import date, datetime
from zoneinfo import ZoneInfo

from zonesync.model.day_offset import DayOffset, label


class TestDayOffsetLabel(unittest.TestCase):
    SOURCE = date(2024, 3, 10)

    def test_tomorrow(self) -> None:
        self.assertEqual(label(self.SOURCE, date(2024, 3, 11)), DayOffset(1, "Tomorrow"))

    def test_yesterday(self) -> None:
        self.assertEqual(label(self.SOURCE, date(2024, 3, 9)), DayOffset(-1, "Yesterday"))

    def test_several_days_ahead(self) -> None:
        self.assertEqual(label(self.SOURCE, date(2024, 3, 15)), DayOffset(5, "+5 days"))

    def test_several_days_behind_keeps_sign(self) -> None:
        self.assertEqual(label(self.SOURCE, date(2024, 3, 7)), DayOffset(-3, "-3 days"))

    def test_same_day_has_no_label(self) -> None:
        self.assertEqual(label(self.SOURCE, self.SOURCE), DayOffset(0, None))

    def test_across_month_and_year(self) -> None:
        self.assertEqual(label(date(2023, 12, 31), date(2024, 1, 1)).day_offset, 1)
        self.assertEqual(label(date(2024, 3, 1), date(2024, 2, 29)).day_offset, -1)

    def test_uses_local_calendar_day_of_aware_datetimes(self) -> None:
        chicago = ZoneInfo("America/Chicago")
        # The 2024-03-10 spring-forward day is only 23 hours long
        source = datetime(2024, 3, 10, 23, 30, tzinfo=chicago)
        target = datetime(2024, 3, 11, 0, 15, tzinfo=chicago)
        self.assertEqual(label(source, target), DayOffset(1, "Tomorrow"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
