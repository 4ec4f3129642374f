"""
Project list operations used by the CLI and the web API.

Each call works on one scan root: the folders under it are scanned, the
``.inside.yaml`` store inside it is loaded, and the two are merged.
Only one writer per store is assumed; nothing here locks the file.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Union

from kouji.core import get_logger
from kouji.core.paths import resolve_root, store_path_for
from kouji.projects.instant import Instant
from kouji.projects.merge import merge
from kouji.projects.models import ProjectRecord, SourceEntry
from kouji.projects.quality import is_invalid_record
from kouji.projects.scanner import discover_projects, scan_directory
from kouji.projects.status import resolve_status
from kouji.projects.store import load_projects, save_projects as write_store

logger = get_logger("kouji.projects.service")


class ProjectNotFoundError(KeyError):
    """No stored project has the requested id."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"project not found: {project_id}")


@dataclass
class FolderListing:
    path: Path
    entries: List[SourceEntry]


@dataclass
class SaveResult:
    count: int
    path: Path


@dataclass
class CleanupResult:
    path: Path
    projects_before: int
    projects_after: int

    @property
    def removed_count(self) -> int:
        return self.projects_before - self.projects_after


def list_folders(root: Optional[Union[str, Path]] = None) -> FolderListing:
    """Every immediate child of ``root`` (files included), sorted by name."""
    root = resolve_root(root)
    return FolderListing(path=root, entries=scan_directory(root))


def list_projects(
    root: Optional[Union[str, Path]] = None, now: Optional[Instant] = None
) -> List[ProjectRecord]:
    """Merged view of the folders under ``root`` and its store. Nothing is written."""
    if now is None:
        now = Instant.now()
    root = resolve_root(root)
    discovered = discover_projects(root, now)
    persisted = load_projects(store_path_for(root), now)
    return merge(discovered, persisted, now)


def save_projects(
    root: Optional[Union[str, Path]] = None, now: Optional[Instant] = None
) -> SaveResult:
    """Merge the folders under ``root`` into its store and write the store back."""
    if now is None:
        now = Instant.now()
    root = resolve_root(root)
    store_path = store_path_for(root)

    merged = merge(discover_projects(root, now), load_projects(store_path, now), now)
    write_store(store_path, merged)
    return SaveResult(count=len(merged), path=store_path)


def update_project_dates(
    project_id: str,
    start_date: Instant,
    end_date: Optional[Instant],
    root: Optional[Union[str, Path]] = None,
    now: Optional[Instant] = None,
) -> ProjectRecord:
    """
    Set the start and end date of one stored project and re-derive its status.

    Raises:
        ProjectNotFoundError: ``project_id`` is not in the store.
    """
    store_path = store_path_for(root)
    records = load_projects(store_path, now)

    for index, record in enumerate(records):
        if record.id == project_id:
            updated = replace(
                record,
                start_date=start_date,
                end_date=end_date,
                status=resolve_status(start_date, now),
            )
            records[index] = updated
            write_store(store_path, records)
            logger.info("Updated dates of %s", project_id)
            return updated

    raise ProjectNotFoundError(project_id)


def cleanup_invalid_records(
    root: Optional[Union[str, Path]] = None, now: Optional[Instant] = None
) -> CleanupResult:
    """
    Remove records with invalid timestamps from the store.

    The store is only rewritten when something was removed.
    """
    if now is None:
        now = Instant.now()
    store_path = store_path_for(root)
    records = load_projects(store_path, now)
    valid = [record for record in records if not is_invalid_record(record, now)]

    if len(valid) != len(records):
        write_store(store_path, valid)
        logger.info("Removed %d invalid records from %s", len(records) - len(valid), store_path)

    return CleanupResult(path=store_path, projects_before=len(records), projects_after=len(valid))
