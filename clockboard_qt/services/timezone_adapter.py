# clockboard_qt/services/timezone_adapter.py
"""
Adapter over the IANA time zone database (zoneinfo + tzdata)
Resolves zone identifiers and answers offset / DST questions
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones
import logging

from ..utils.constants import WINDOWS_ZONE_ALIASES
from ..utils.errors import UnknownTimeZoneError

logger = logging.getLogger(__name__)


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken as UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class TimeZoneInfo:
    """A resolved time zone"""

    def __init__(self, zone_id: str, zone: ZoneInfo):
        self.id = zone_id
        self._zone = zone

    @property
    def iana_name(self) -> str:
        return self._zone.key

    @property
    def display_name(self) -> str:
        """Name shown in dialogs, e.g. 'America/New_York (UTC-05:00)'"""
        offset = self.base_utc_offset(datetime.now(timezone.utc))
        return f"{self.id} ({format_utc_offset(offset)})"

    def to_local(self, moment: datetime) -> datetime:
        return _as_utc(moment).astimezone(self._zone)

    def utc_offset(self, moment: datetime) -> timedelta:
        """Offset currently observed at moment (includes DST)"""
        return self.to_local(moment).utcoffset()

    def base_utc_offset(self, moment: datetime) -> timedelta:
        """
        Standard (non-DST) offset of the zone in the year of moment

        Taken as the smaller of the January and July offsets. tzdata marks
        some zones (Europe/Dublin) with negative DST in winter, so dst()
        cannot be trusted for this.
        """
        year = self.to_local(moment).year
        january = datetime(year, 1, 1, tzinfo=self._zone).utcoffset()
        july = datetime(year, 7, 1, tzinfo=self._zone).utcoffset()
        return min(january, july)

    def dst_delta(self, moment: datetime) -> timedelta:
        """Amount the current offset is ahead of the standard offset"""
        return self.utc_offset(moment) - self.base_utc_offset(moment)

    def is_daylight_saving_time(self, moment: datetime) -> bool:
        return self.dst_delta(moment) > timedelta(0)

    def __eq__(self, other):
        if not isinstance(other, TimeZoneInfo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"TimeZoneInfo({self.id!r})"


@lru_cache(maxsize=None)
def _load_zone(iana_name: str) -> ZoneInfo:
    return ZoneInfo(iana_name)


def resolve_time_zone(zone_id: str) -> TimeZoneInfo:
    """
    Resolve a zone identifier

    Args:
        zone_id: IANA name ("Europe/Paris") or a Windows zone name
                 ("Eastern Standard Time")

    Returns:
        TimeZoneInfo keeping zone_id verbatim

    Raises:
        UnknownTimeZoneError: identifier cannot be resolved
    """
    if not isinstance(zone_id, str) or not zone_id.strip():
        raise UnknownTimeZoneError(zone_id, "empty identifier")

    iana_name = WINDOWS_ZONE_ALIASES.get(zone_id, zone_id)
    try:
        zone = _load_zone(iana_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.debug(f"Zone lookup failed for {zone_id!r}: {e}")
        raise UnknownTimeZoneError(zone_id) from e

    return TimeZoneInfo(zone_id, zone)


def available_time_zones() -> List[str]:
    """Sorted IANA identifiers known to the database"""
    return sorted(available_timezones())


def format_utc_offset(offset: timedelta) -> str:
    """timedelta(hours=-5) -> 'UTC-05:00'"""
    total_minutes = int(offset.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"
