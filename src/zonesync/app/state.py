from __future__ import annotations

from datetime import datetime
import logging
import threading
from typing import Any, Callable, Mapping, Optional, Union

from PySide6.QtCore import QObject, Signal, Slot

from zonesync.config import ANCHOR_LOCATION_ID
from zonesync.model.conversion import DerivedRecord, derive_all
from zonesync.model.source_state import (
    PatchError, SourceTimeComponents, SourceTimeState, TimePatch, utc_now,
)
from zonesync.model.work_state import WorkState, group_by_work_state

logger = logging.getLogger(__name__)


class Store(QObject):
    """
    Central state store: the single writer of the SourceTimeState.

    Every mutation (and every clock tick via `refresh`) re-derives the full
    batch of records and publishes it with `records_changed`. The batch is an
    immutable tuple swapped in one assignment, so listeners never see a
    partially updated set.
    """
    records_changed = Signal(object)      # tuple[DerivedRecord, ...]
    source_changed = Signal(str)          # new source location id
    components_changed = Signal(object)   # SourceTimeComponents
    patch_rejected = Signal(str)          # validation message
    format_changed = Signal(bool)         # use_24h

    def __init__(
        self,
        state: Optional[SourceTimeState] = None,
        clock: Callable[[], datetime] = utc_now,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._lock = threading.RLock()
        self.state = state if state is not None else SourceTimeState.initial(now=clock())
        self.use_24h = False
        self._records: tuple[DerivedRecord, ...] = ()
        self._recompute()

    # ------------------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------------------

    def records(self) -> tuple[DerivedRecord, ...]:
        return self._records

    def components(self) -> SourceTimeComponents:
        with self._lock:
            return self.state.components()

    def source_id(self) -> str:
        with self._lock:
            return self.state.location_id

    def find_record(self, location_id: str) -> Optional[DerivedRecord]:
        records = self._records  # immutable snapshot
        for record in records:
            if record.location.id == location_id:
                return record
        return None

    def anchor_record(self) -> Optional[DerivedRecord]:
        """Record of the home location pinned at the top of the window."""
        return self.find_record(ANCHOR_LOCATION_ID)

    def grouped(self) -> dict[WorkState, list[DerivedRecord]]:
        """Records other than the home location, bucketed by work state."""
        return group_by_work_state(self._records, exclude_id=ANCHOR_LOCATION_ID)

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def set_source(self, location_id: str) -> bool:
        with self._lock:
            changed = self.state.set_source(location_id)
        if not changed:
            return False
        logger.info(f"Source location changed to '{location_id}'.")
        self.source_changed.emit(location_id)
        self._publish_components()
        self._recompute()
        return True

    def apply_patch(self, patch: Union[TimePatch, Mapping[str, Any]]) -> bool:
        """
        Apply an {hour?, minute?, date?} edit.

        Returns:
            False if the patch was rejected; the state is unchanged in that case
            and `patch_rejected` carries the reason.
        """
        try:
            with self._lock:
                self.state.apply_patch(patch)
        except PatchError as e:
            logger.warning(f"Rejected time patch {patch!r}: {e}")
            self.patch_rejected.emit(str(e))
            return False
        self._publish_components()
        self._recompute()
        return True

    def set_now(self) -> None:
        with self._lock:
            self.state.set_now(self._clock())
        logger.debug("Source time reset to now.")
        self._publish_components()
        self._recompute()

    def toggle_format(self) -> None:
        self.use_24h = not self.use_24h
        self.format_changed.emit(self.use_24h)

    @Slot()
    def refresh(self) -> None:
        """Re-derive records without touching the source state (clock tick)."""
        self._recompute()

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _recompute(self) -> None:
        with self._lock:
            records = derive_all(self.state, self._clock())
            self._records = records
        self.records_changed.emit(records)

    def _publish_components(self) -> None:
        self.components_changed.emit(self.components())
