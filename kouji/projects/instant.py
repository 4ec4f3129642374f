"""
Instant - an absolute point in time with nanosecond precision.

``datetime`` stops at microseconds, so an Instant keeps Unix seconds and a
nanosecond remainder itself. The UTC offset is carried for display only:
two instants are equal when they denote the same absolute moment, whatever
offset produced them.
"""

import time
from calendar import monthrange
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import total_ordering
from typing import Optional

NANOS_PER_SECOND = 1_000_000_000

_EPOCH = datetime(1970, 1, 1)


def local_offset(wall: datetime) -> int:
    """
    UTC offset (seconds east) of the process's local timezone at a naive
    wall-clock time.

    Dates the platform clock cannot represent (year 1, far future) fall back
    to the current local offset.
    """
    try:
        return int(wall.astimezone().utcoffset().total_seconds())
    except (OverflowError, OSError, ValueError):
        return int(datetime.now().astimezone().utcoffset().total_seconds())


def format_offset(offset: int) -> str:
    """RFC 3339 offset text: ``Z`` for UTC, otherwise ``±HH:MM``."""
    if offset == 0:
        return "Z"
    sign = "+" if offset > 0 else "-"
    minutes = abs(offset) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


@total_ordering
@dataclass(frozen=True, eq=False)
class Instant:
    """A moment in time: Unix ``seconds`` + ``nanos``, shown at ``offset``."""

    seconds: int
    nanos: int = 0
    offset: int = 0

    def __post_init__(self):
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos out of range: {self.nanos}")

    # -- construction ------------------------------------------------------

    @classmethod
    def from_wall(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanos: int = 0,
        offset: Optional[int] = None,
    ) -> "Instant":
        """
        Build an Instant from wall-clock fields.

        Raises ValueError when the fields are not a real calendar date/time.
        ``offset=None`` interprets the fields in the local timezone.
        """
        wall = datetime(year, month, day, hour, minute, second)
        if offset is None:
            offset = local_offset(wall)
        delta = wall - _EPOCH
        seconds = delta.days * 86400 + delta.seconds - offset
        return cls(seconds=seconds, nanos=nanos, offset=offset)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Convert a ``datetime``; naive values are taken as local time."""
        offset = None
        if dt.tzinfo is not None and dt.utcoffset() is not None:
            offset = int(dt.utcoffset().total_seconds())
        return cls.from_wall(
            dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
            nanos=dt.microsecond * 1000, offset=offset,
        )

    @classmethod
    def from_unix_nanos(cls, total: int, offset: int = 0) -> "Instant":
        seconds, nanos = divmod(total, NANOS_PER_SECOND)
        return cls(seconds=seconds, nanos=nanos, offset=offset)

    @classmethod
    def local_from_unix_nanos(cls, total: int) -> "Instant":
        """An absolute Unix-nanosecond value, displayed in the local timezone."""
        instant = cls.from_unix_nanos(total)
        offset = int(datetime.fromtimestamp(instant.seconds).astimezone().utcoffset().total_seconds())
        return instant.with_offset(offset)

    @classmethod
    def now(cls) -> "Instant":
        """The current moment, displayed in the local timezone."""
        return cls.local_from_unix_nanos(time.time_ns())

    # -- views ---------------------------------------------------------------

    @property
    def unix_nanos(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    @property
    def wall(self) -> datetime:
        """Naive wall-clock time at this instant's own offset (whole seconds)."""
        return _EPOCH + timedelta(seconds=self.seconds + self.offset)

    @property
    def year(self) -> int:
        return self.wall.year

    def date_string(self) -> str:
        w = self.wall
        return f"{w.year:04d}-{w.month:02d}-{w.day:02d}"

    def isoformat(self) -> str:
        """RFC 3339 with all nine fractional digits and an explicit offset."""
        w = self.wall
        return (
            f"{w.year:04d}-{w.month:02d}-{w.day:02d}"
            f"T{w.hour:02d}:{w.minute:02d}:{w.second:02d}"
            f".{self.nanos:09d}{format_offset(self.offset)}"
        )

    def with_offset(self, offset: int) -> "Instant":
        """Same moment, displayed at another offset."""
        return Instant(seconds=self.seconds, nanos=self.nanos, offset=offset)

    # -- arithmetic ------------------------------------------------------------

    def add_months(self, months: int) -> "Instant":
        """
        Calendar month arithmetic on the wall clock.

        The day is clamped to the length of the target month
        (Jan 31 + 1 month = Feb 28/29).
        """
        w = self.wall
        index = w.month - 1 + months
        year, month = w.year + index // 12, index % 12 + 1
        day = min(w.day, monthrange(year, month)[1])
        return Instant.from_wall(
            year, month, day, w.hour, w.minute, w.second,
            nanos=self.nanos, offset=self.offset,
        )

    def add_days(self, days: int) -> "Instant":
        return Instant(seconds=self.seconds + days * 86400, nanos=self.nanos, offset=self.offset)

    # -- comparison --------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.unix_nanos == other.unix_nanos

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.unix_nanos < other.unix_nanos

    def __hash__(self):
        return hash(self.unix_nanos)

    def __str__(self):
        return self.isoformat()
