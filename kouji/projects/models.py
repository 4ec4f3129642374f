"""
Project record types.

One canonical record is shared by the directory scan, the side-car store
and the merge; conversion to and from plain dicts lives in
kouji.projects.store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from kouji.projects.instant import Instant


class ProjectStatus(str, Enum):
    UNKNOWN = "unknown"
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SourceEntry:
    """Filesystem snapshot of the folder behind a project."""
    name: str
    path: str
    size: int = 0
    is_directory: bool = False
    modified_time: Optional[Instant] = None


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    company_name: str = ""
    location_name: str = ""
    status: ProjectStatus = ProjectStatus.UNKNOWN
    start_date: Optional[Instant] = None
    end_date: Optional[Instant] = None
    description: str = ""
    tags: Tuple[str, ...] = ()
    file_count: int = 0
    subdir_count: int = 0
    source_entry: Optional[SourceEntry] = None

    @property
    def modified_time(self) -> Optional[Instant]:
        """``source_entry.modified_time``, or None without a source entry."""
        if self.source_entry is None:
            return None
        return self.source_entry.modified_time
