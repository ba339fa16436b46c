"""Calendar snapshots and the clocks that supply them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .fields import field_spec


@dataclass(frozen=True, slots=True)
class CalendarSnapshot:
    """Calendar components of one instant, as cron fields see them.

    ``day_of_week`` runs 0-6 with 0 = Sunday.
    """

    minute: int
    hour: int
    day_of_month: int
    month: int
    day_of_week: int
    year: int

    @classmethod
    def from_datetime(cls, dt: datetime) -> CalendarSnapshot:
        return cls(
            minute=dt.minute,
            hour=dt.hour,
            day_of_month=dt.day,
            month=dt.month,
            # Monday=0 .. Sunday=6 -> Sunday=0 .. Saturday=6
            day_of_week=(dt.weekday() + 1) % 7,
            year=dt.year,
        )

    @classmethod
    def from_timestamp(cls, timestamp: float) -> CalendarSnapshot:
        """Decompose a Unix timestamp in the process's local time."""
        return cls.from_datetime(datetime.fromtimestamp(timestamp))

    def value_for(self, field_name: str) -> int:
        return getattr(self, field_spec(field_name).name)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock pinned to a single instant (tests, replays)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
