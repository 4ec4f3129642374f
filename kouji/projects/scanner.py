"""
Project Directory Scanner

Lists the folders under a scan root and turns every folder named
``YYYY-MMDD <company> <location>`` into a discovered ProjectRecord with a
stable id, a derived status and a snapshot of the folder on disk.
"""

import os
import re
import stat
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

from kouji.core import get_logger
from kouji.projects.ids import derive_id, project_key
from kouji.projects.instant import Instant
from kouji.projects.models import ProjectRecord, SourceEntry
from kouji.projects.status import resolve_status
from kouji.projects.timeparse import UnparseableTimestamp, parse_timestamp

logger = get_logger("kouji.projects.scanner")

# "2025-0618 Acme Nagoya": date block, then exactly two whitespace-separated tokens
_FOLDER_NAME_RE = re.compile(r"^(\d{4}-\d{4})\s+(\S+)\s+(\S+)$")


class FolderName(NamedTuple):
    start: Instant
    company_name: str
    location_name: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_folder_name(name: str) -> Optional[FolderName]:
    """
    Split a project folder name into its date, company and location.

    Examples:
        2025-0618 Acme Nagoya        ->  2025-06-18 (local), Acme, Nagoya
        2025-0618 Acme               ->  None (location missing)
        2025-1399 Acme Nagoya        ->  None (not a date)

    Returns:
        FolderName, or None when the name does not follow the convention.
    """
    match = _FOLDER_NAME_RE.match(name)
    if not match:
        return None

    date_block, company_name, location_name = match.groups()
    try:
        start = parse_timestamp(date_block)
    except UnparseableTimestamp:
        logger.debug("Skipping %r: bad date block %r", name, date_block)
        return None

    return FolderName(start, company_name, location_name)


def _count_children(path: Union[str, Path]) -> Tuple[int, int]:
    """Count (files, subdirectories) directly inside a folder."""
    file_count = 0
    subdir_count = 0
    try:
        with os.scandir(path) as it:
            for child in it:
                if child.is_dir():
                    subdir_count += 1
                else:
                    file_count += 1
    except PermissionError:
        logger.warning("Permission denied counting %s", path)
    return file_count, subdir_count


# ---------------------------------------------------------------------------
# Core scan
# ---------------------------------------------------------------------------


def scan_directory(root: Union[str, Path]) -> List[SourceEntry]:
    """
    Snapshot the immediate children of ``root``, sorted by name.

    Symlinks report the type of their target. A missing or unreadable root
    raises OSError.
    """
    root = Path(root)
    entries: List[SourceEntry] = []

    for name in sorted(os.listdir(root)):
        full_path = root / name
        try:
            info = full_path.lstat()
        except OSError as exc:
            logger.warning("Could not stat %s: %s", full_path, exc)
            continue

        is_directory = stat.S_ISDIR(info.st_mode)
        if stat.S_ISLNK(info.st_mode):
            is_directory = full_path.is_dir()

        entries.append(
            SourceEntry(
                name=name,
                path=str(full_path),
                size=info.st_size,
                is_directory=is_directory,
                modified_time=Instant.local_from_unix_nanos(info.st_mtime_ns),
            )
        )

    return entries


def record_from_entry(entry: SourceEntry, now: Optional[Instant] = None) -> Optional[ProjectRecord]:
    """Build the discovered record for one directory entry, or None if it is not a project."""
    if not entry.is_directory:
        return None

    folder = parse_folder_name(entry.name)
    if folder is None:
        return None

    file_count, subdir_count = _count_children(entry.path)

    return ProjectRecord(
        id=derive_id(project_key(folder.start, folder.company_name, folder.location_name)),
        company_name=folder.company_name,
        location_name=folder.location_name,
        status=resolve_status(folder.start, now),
        start_date=folder.start,
        tags=(folder.company_name, folder.location_name, f"{folder.start.year:04d}"),
        file_count=file_count,
        subdir_count=subdir_count,
        source_entry=entry,
    )


def discover_projects(root: Union[str, Path], now: Optional[Instant] = None) -> List[ProjectRecord]:
    """
    Scan ``root`` and return one record per project folder, in name order.

    Entries that are not directories or do not follow the naming
    convention are ignored.
    """
    entries = scan_directory(root)
    projects: List[ProjectRecord] = []

    for entry in entries:
        record = record_from_entry(entry, now)
        if record is not None:
            projects.append(record)

    logger.info(
        "Scanned %s: %d project folders out of %d entries",
        root,
        len(projects),
        len(entries),
    )
    return projects
