"""
Project lifecycle status.

Status is never stored authoritatively: it is derived from the start date
and the clock every time a record is built or loaded. A project is assumed
to run for a fixed PROJECT_DURATION_MONTHS after it starts.
"""

from typing import Optional

from kouji.projects.instant import Instant
from kouji.projects.models import ProjectStatus

PROJECT_DURATION_MONTHS = 3


def resolve_status(start: Optional[Instant], now: Optional[Instant] = None) -> ProjectStatus:
    """
    unknown     - no start date
    planned     - now is before the start date
    completed   - now is after start + PROJECT_DURATION_MONTHS
    in-progress - otherwise (both boundaries inclusive)
    """
    if start is None:
        return ProjectStatus.UNKNOWN

    if now is None:
        now = Instant.now()

    if now < start:
        return ProjectStatus.PLANNED
    if now > start.add_months(PROJECT_DURATION_MONTHS):
        return ProjectStatus.COMPLETED
    return ProjectStatus.IN_PROGRESS
