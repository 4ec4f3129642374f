"""
Kouji Projects Module

Timestamp parsing, stable ids, data-quality checks, status derivation and
the merge of scanned project folders with the side-car store.
"""

from kouji.projects.ids import derive_id, project_key
from kouji.projects.instant import Instant
from kouji.projects.merge import merge
from kouji.projects.models import ProjectRecord, ProjectStatus, SourceEntry
from kouji.projects.quality import Tolerance, is_invalid, is_invalid_record
from kouji.projects.status import resolve_status
from kouji.projects.timeparse import (
    UnparseableTimestamp,
    parse_timestamp,
    parse_timestamp_and_rest,
)

__all__ = [
    "derive_id",
    "project_key",
    "Instant",
    "merge",
    "ProjectRecord",
    "ProjectStatus",
    "SourceEntry",
    "Tolerance",
    "is_invalid",
    "is_invalid_record",
    "resolve_status",
    "UnparseableTimestamp",
    "parse_timestamp",
    "parse_timestamp_and_rest",
]
