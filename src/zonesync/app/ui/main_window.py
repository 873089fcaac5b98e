"""
Main window: the input bar on top, the home-location card below it and the
other locations grouped by work state.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QDate, Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QComboBox, QDateEdit, QGroupBox, QHBoxLayout, QLineEdit, QMainWindow, QPushButton,
    QStatusBar, QVBoxLayout, QWidget,
)

from zonesync.app.settings import ThemePreferences
from zonesync.app.state import Store
from zonesync.app.ui.time_card import TimeCard
from zonesync.config import THEME_DARK, VISIBLE_APP_NAME
from zonesync.controller.clock_driver import LiveClockDriver
from zonesync.model.conversion import DerivedRecord
from zonesync.model.source_state import SourceTimeComponents
from zonesync.model.time_input import format_clock, parse_time_text, period_of, toggle_period
from zonesync.model.work_state import WorkState

logger = logging.getLogger(__name__)

SECTION_TITLES = {
    WorkState.WORKING: "WORKING HOURS",
    WorkState.STARTING_SOON: "STARTING SOON",
    WorkState.OUTSIDE: "OUTSIDE HOURS",
}

THEME_STYLES = {
    THEME_DARK: "QWidget#central { background: #0a0a0b; } QGroupBox { color: #e5e5e7; }",
    "light": "QWidget#central { background: #f5f5f7; } QGroupBox { color: #1d1d1f; }",
}


class MainWindow(QMainWindow):
    def __init__(self, store: Store | None = None, preferences: ThemePreferences | None = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(960, 720)

        self.store = store if store is not None else Store()
        self.preferences = preferences if preferences is not None else ThemePreferences()
        self.driver = LiveClockDriver(parent=self)

        central = QWidget(self)
        central.setObjectName("central")
        v = QVBoxLayout(central)

        v.addLayout(self._build_input_bar())

        self.anchor_card: TimeCard | None = None
        self.anchor_slot = QVBoxLayout()
        v.addLayout(self.anchor_slot)

        self.cards: dict[str, TimeCard] = {}
        self.sections: dict[WorkState, QGroupBox] = {}
        for state, title in SECTION_TITLES.items():
            box = QGroupBox(title, central)
            QHBoxLayout(box)
            self.sections[state] = box
            v.addWidget(box)
        v.addStretch(1)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))

        # Wiring
        self.store.records_changed.connect(self._on_records_changed)
        self.store.components_changed.connect(self._sync_inputs)
        self.store.source_changed.connect(self._on_source_changed)
        self.store.patch_rejected.connect(lambda msg: self.statusBar().showMessage(msg, 4000))
        self.store.format_changed.connect(lambda _: self._refresh_format())
        self.preferences.theme_changed.connect(self._apply_theme)
        self.driver.ticked.connect(self.store.refresh)

        self._apply_theme(self.preferences.theme)
        self._on_source_changed(self.store.source_id())
        self.cmb_source.currentIndexChanged.connect(
            lambda i: self.store.set_source(self.cmb_source.itemData(i))
        )
        self._sync_inputs(self.store.components())
        self._on_records_changed(self.store.records())
        self.driver.start()

    # ------------------------------------------------------------------------------
    # Input bar
    # ------------------------------------------------------------------------------

    def _build_input_bar(self) -> QHBoxLayout:
        bar = QHBoxLayout()

        self.cmb_source = QComboBox()
        for loc in self.store.state.registry:
            self.cmb_source.addItem(f"{loc.flag}  {loc.name}", loc.id)
        bar.addWidget(self.cmb_source)

        self.txt_time = QLineEdit()
        self.txt_time.setMaxLength(5)
        self.txt_time.setFixedWidth(80)
        self.txt_time.textEdited.connect(self._on_time_edited)
        self.txt_time.editingFinished.connect(lambda: self._sync_inputs(self.store.components()))
        bar.addWidget(self.txt_time)

        self.btn_period = QPushButton()
        self.btn_period.clicked.connect(
            lambda: self.store.apply_patch(toggle_period(self.store.components().hour))
        )
        bar.addWidget(self.btn_period)

        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("MMM d, yyyy")
        self.date_edit.dateChanged.connect(self._on_date_changed)
        bar.addWidget(self.date_edit)

        btn_now = QPushButton("Now")
        btn_now.clicked.connect(self.store.set_now)
        bar.addWidget(btn_now)

        self.btn_format = QPushButton()
        self.btn_format.clicked.connect(self.store.toggle_format)
        bar.addWidget(self.btn_format)

        bar.addStretch(1)

        self.btn_theme = QPushButton()
        self.btn_theme.clicked.connect(self.preferences.toggle)
        bar.addWidget(self.btn_theme)
        return bar

    @Slot(str)
    def _on_time_edited(self, text: str) -> None:
        components = self.store.components()
        patch = parse_time_text(text, use_24h=self.store.use_24h, period=period_of(components.hour))
        if patch is not None:
            self.store.apply_patch(patch)

    @Slot(QDate)
    def _on_date_changed(self, value: QDate) -> None:
        self.store.apply_patch({"date": value.toString("yyyy-MM-dd")})

    @Slot(object)
    def _sync_inputs(self, components: SourceTimeComponents) -> None:
        """Reflect the authoritative source time in the editable fields."""
        if not self.txt_time.hasFocus():
            # "HH:MM" in both modes, the period has its own button
            self.txt_time.setText(format_clock(components.hour, components.minute, self.store.use_24h)[:5])
        self.btn_period.setText(period_of(components.hour))
        self.btn_period.setVisible(not self.store.use_24h)

        self.date_edit.blockSignals(True)
        self.date_edit.setDate(QDate.fromString(components.date, "yyyy-MM-dd"))
        self.date_edit.blockSignals(False)

        self.btn_format.setText("24h" if self.store.use_24h else "12h")

    @Slot(str)
    def _on_source_changed(self, location_id: str) -> None:
        index = self.cmb_source.findData(location_id)
        if index != self.cmb_source.currentIndex():
            self.cmb_source.blockSignals(True)
            self.cmb_source.setCurrentIndex(index)
            self.cmb_source.blockSignals(False)

    def _refresh_format(self) -> None:
        self._sync_inputs(self.store.components())
        self._on_records_changed(self.store.records())

    # ------------------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------------------

    @Slot(object)
    def _on_records_changed(self, records: tuple[DerivedRecord, ...]) -> None:
        anchor = self.store.anchor_record()
        if anchor is not None:
            if self.anchor_card is None:
                self.anchor_card = TimeCard(anchor, large=True)
                self.anchor_card.clicked.connect(self.store.set_source)
                self.anchor_slot.addWidget(self.anchor_card)
            self.anchor_card.update_record(anchor, self.store.use_24h)

        for state, group in self.store.grouped().items():
            box = self.sections[state]
            layout = box.layout()
            for record in group:
                card = self.cards.get(record.location.id)
                if card is None:
                    card = TimeCard(record)
                    card.clicked.connect(self.store.set_source)
                    self.cards[record.location.id] = card
                if card.parentWidget() is not box:
                    layout.addWidget(card)
                card.update_record(record, self.store.use_24h)
            box.setVisible(bool(group))

    # ------------------------------------------------------------------------------
    # Theme / lifecycle
    # ------------------------------------------------------------------------------

    @Slot(str)
    def _apply_theme(self, theme: str) -> None:
        self.centralWidget().setStyleSheet(THEME_STYLES.get(theme, THEME_STYLES[THEME_DARK]))
        self.btn_theme.setText("Light" if theme == THEME_DARK else "Dark")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.driver.stop()
        logger.info("Live clock stopped.")
        super().closeEvent(event)
