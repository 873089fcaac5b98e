from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from zonesync.model.conversion import DerivedRecord
from zonesync.model.time_input import to_12_hour


class TimeCard(QFrame):
    """One location: flag, name, offset badges and the live local time."""
    clicked = Signal(str)  # location id

    def __init__(self, record: DerivedRecord, large: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.location_id = record.location.id
        self._large = large
        self.setObjectName("timeCard")
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        self.lbl_name = QLabel(f"{record.location.flag}  {record.location.name}")
        self.lbl_meta = QLabel()
        self.lbl_time = QLabel()
        self.lbl_date = QLabel()

        time_font = self.lbl_time.font()
        time_font.setPointSize(34 if large else 22)
        time_font.setBold(True)
        self.lbl_time.setFont(time_font)

        header = QHBoxLayout()
        header.addWidget(self.lbl_name)
        header.addStretch(1)
        header.addWidget(self.lbl_meta)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addWidget(self.lbl_time)
        layout.addWidget(self.lbl_date)

        self.update_record(record, use_24h=False)

    def update_record(self, record: DerivedRecord, use_24h: bool) -> None:
        if use_24h:
            time_text = f"{record.formatted_time}:{record.formatted_seconds}"
        else:
            hour, period = to_12_hour(record.local_hour)
            time_text = f"{hour:02d}:{record.local_minute:02d}:{record.formatted_seconds} {period}"
        self.lbl_time.setText(time_text)

        meta = [record.utc_offset]
        if record.is_dst:
            meta.append("DST")
        if record.is_source:
            meta.insert(0, "Source")
        self.lbl_meta.setText("  ·  ".join(meta))

        date_text = record.formatted_date
        if record.day_label:
            date_text = f"{record.day_label}  ·  {date_text}"
        self.lbl_date.setText(date_text)
        self.setToolTip(f"{record.location.address}\n{record.location.timezone} ({record.tz_abbreviation})")

        # Black overlay composited onto both stops
        keep = 1.0 - record.contrast_overlay
        top = QColor(*(round(c * keep) for c in record.gradient.top)).name()
        bottom = QColor(*(round(c * keep) for c in record.gradient.bottom)).name()
        angle = "x1:0, y1:0, x2:0, y2:1" if self._large else "x1:0, y1:0, x2:1, y2:1"
        self.setStyleSheet(
            f"QFrame#timeCard {{ border-radius: 12px; "
            f"background: qlineargradient({angle}, stop:0 {top}, stop:1 {bottom}); }}"
            f"QFrame#timeCard QLabel {{ color: white; background: transparent; }}"
        )

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.location_id)
        super().mousePressEvent(event)
