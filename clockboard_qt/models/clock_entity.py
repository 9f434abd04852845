# clockboard_qt/models/clock_entity.py
"""
Model for a single clock widget: location, labels, time zone, 12/24h format
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import uuid4

from ..services.timezone_adapter import TimeZoneInfo, format_utc_offset, resolve_time_zone
from ..utils.constants import (
    DATE_FORMAT,
    DST_ACTIVE_TEXT,
    DST_INACTIVE_TEXT,
    TIME_FORMAT_24H,
)


@dataclass(frozen=True)
class ClockDisplay:
    """Strings shown by one clock widget for one tick"""
    time_text: str
    date_text: str
    utc_offset_label: str
    dst_label: str
    is_dst: bool


def clean_labels(labels: Iterable[str]) -> List[str]:
    """Strip labels and drop empty ones, keeping order and duplicates"""
    return [label.strip() for label in labels if label and label.strip()]


def format_time(local: datetime, is_24_hour: bool) -> str:
    if is_24_hour:
        return local.strftime(TIME_FORMAT_24H)
    # AM/PM built by hand: strftime('%p') follows the process locale
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour:02d}:{local.minute:02d} {suffix}"


class ClockEntity:
    """
    State of one clock widget

    The time zone is resolved on construction and on edit, so an existing
    entity always holds a resolvable zone.
    """

    def __init__(
            self,
            location: str,
            labels: Optional[Iterable[str]],
            time_zone_id: str,
            is_24_hour: bool = False,
            clock_id: Optional[str] = None
    ):
        self._zone: TimeZoneInfo = resolve_time_zone(time_zone_id)
        self.clock_id = clock_id or uuid4().hex
        self.location = location or ""
        self.labels: List[str] = list(labels or [])
        self.is_24_hour = bool(is_24_hour)

    @classmethod
    def create(
            cls,
            location: str,
            labels: Optional[Iterable[str]],
            time_zone_id: str,
            is_24_hour: bool = False
    ) -> "ClockEntity":
        """
        Create a clock

        Raises:
            UnknownTimeZoneError: time_zone_id cannot be resolved
        """
        return cls(location, labels, time_zone_id, is_24_hour)

    # ========== PROPERTIES ==========

    @property
    def time_zone_id(self) -> str:
        return self._zone.id

    @property
    def time_zone(self) -> TimeZoneInfo:
        return self._zone

    @property
    def display_labels(self) -> List[str]:
        return clean_labels(self.labels)

    # ========== OPERATIONS ==========

    def compute_display(self, now_utc: datetime) -> ClockDisplay:
        """
        Format the clock for the instant now_utc

        The offset label always shows the zone's standard offset, so it
        stays the same while DST is active.
        """
        local = self._zone.to_local(now_utc)
        is_dst = self._zone.is_daylight_saving_time(now_utc)

        return ClockDisplay(
            time_text=format_time(local, self.is_24_hour),
            date_text=local.strftime(DATE_FORMAT),
            utc_offset_label=format_utc_offset(self._zone.base_utc_offset(now_utc)),
            dst_label=DST_ACTIVE_TEXT if is_dst else DST_INACTIVE_TEXT,
            is_dst=is_dst
        )

    def edit(self, new_time_zone_id: str, new_labels: Iterable[str]):
        """
        Replace time zone and labels together

        Raises:
            UnknownTimeZoneError: nothing is changed
        """
        zone = resolve_time_zone(new_time_zone_id)
        labels = list(new_labels or [])
        self._zone = zone
        self.labels = labels

    def set_format(self, is_24_hour: bool):
        self.is_24_hour = bool(is_24_hour)

    def __repr__(self):
        return (f"ClockEntity(id={self.clock_id!r}, location={self.location!r}, "
                f"zone={self.time_zone_id!r}, 24h={self.is_24_hour})")
