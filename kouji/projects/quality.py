"""
Timestamp data-quality checks.

Store files written by older tools contain timestamps such as
``0001-01-01T09:26:51+09:18`` (a never-set time rendered in local mean
time) or dates far in the future. Records carrying them are dropped during
the merge instead of being reported as errors.
"""

from enum import Enum
from typing import Optional

from kouji.projects.instant import Instant
from kouji.projects.models import ProjectRecord

SENTINEL_YEAR = 1

# Nothing before this moment is a plausible project timestamp.
VALIDITY_FLOOR = Instant.from_wall(2000, 1, 1, offset=0)


class Tolerance(str, Enum):
    """How far past ``now`` a timestamp may lie and still be valid."""
    YEAR = "year"
    DAY = "day"


def _horizon(now: Instant, tolerance: Tolerance) -> Instant:
    if tolerance == Tolerance.DAY:
        return now.add_days(1)
    return now.add_months(12)


def is_invalid(
    timestamp: Optional[Instant],
    now: Optional[Instant] = None,
    tolerance: Tolerance = Tolerance.YEAR,
) -> bool:
    """
    True when the timestamp is unset, carries the year-1 sentinel, lies
    beyond now + tolerance, or predates 2000-01-01T00:00:00Z.
    """
    if timestamp is None:
        return True
    if timestamp.year == SENTINEL_YEAR:
        return True
    if now is None:
        now = Instant.now()
    if timestamp > _horizon(now, tolerance):
        return True
    if timestamp < VALIDITY_FLOOR:
        return True
    return False


def is_invalid_record(record: ProjectRecord, now: Optional[Instant] = None) -> bool:
    """
    True when the record must not survive a merge.

    The record's own timestamp (``source_entry.modified_time``) is checked
    with a one-day tolerance. A year-1 sentinel is forgiven when both the
    company and the location name are filled in: such a record still
    identifies a real folder, so it is kept.
    """
    if not record.id:
        return True

    modified = record.modified_time
    if (
        modified is not None
        and modified.year == SENTINEL_YEAR
        and record.company_name
        and record.location_name
    ):
        return False

    return is_invalid(modified, now, Tolerance.DAY)
