"""
Side-car record store (``.inside.yaml``).

The store keeps what a folder name cannot express (description, a
hand-set end date) next to the scanned folders. File layout:

    version: 1
    generated_at: '2025-06-18T10:00:00.000000000+09:00'
    generated_by: kouji 0.1.0
    projects:
      - id: A3K7M
        company_name: Acme
        ...

A bare list of projects (the older layout) is still read. Every instant is
written as a full nanosecond, offset-qualified RFC 3339 string, or '' when
unset. Status is never trusted from the file; it is re-derived on load.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

import kouji
from kouji.core import get_logger
from kouji.core.paths import ensure_directory
from kouji.projects.instant import Instant
from kouji.projects.models import ProjectRecord, SourceEntry
from kouji.projects.status import resolve_status
from kouji.projects.timeparse import UnparseableTimestamp, parse_timestamp

logger = get_logger("kouji.projects.store")

STORE_VERSION = 1


class StoreFormatError(ValueError):
    """The store file exists but its content is not a project list."""


# Everything load_projects / save_projects can raise for a bad or unreadable store.
STORE_ERRORS = (OSError, yaml.YAMLError, StoreFormatError)


# ---------------------------------------------------------------------------
# Serialization boundary
# ---------------------------------------------------------------------------


def instant_to_text(value: Optional[Instant]) -> str:
    return value.isoformat() if value is not None else ""


def instant_from_value(value: Any, field: str = "timestamp") -> Optional[Instant]:
    """
    Read an instant from a loaded YAML value.

    '' and null mean unset. Unquoted timestamps that YAML already turned into
    ``datetime`` / ``date`` objects are accepted as well as strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return Instant.from_datetime(value)
    if isinstance(value, date):
        return Instant.from_wall(value.year, value.month, value.day)
    try:
        return parse_timestamp(str(value))
    except UnparseableTimestamp as exc:
        raise StoreFormatError(f"{field}: {exc}") from exc


def _tags_from_value(value: Any) -> Tuple[str, ...]:
    """A YAML list of tags; null means none. Scalars and mappings are rejected."""
    if value is None:
        return ()
    if not isinstance(value, list):
        raise StoreFormatError(f"tags must be a list, got {type(value).__name__}")
    return tuple(str(tag) for tag in value)


def _flag_from_value(value: Any, field: str) -> bool:
    """A YAML boolean; null means False. Strings such as "false" are rejected."""
    if value is None:
        return False
    if not isinstance(value, bool):
        raise StoreFormatError(f"{field} must be true or false, got {value!r}")
    return value


def entry_to_dict(entry: SourceEntry) -> Dict[str, Any]:
    return {
        "name": entry.name,
        "path": entry.path,
        "size": entry.size,
        "is_directory": entry.is_directory,
        "modified_time": instant_to_text(entry.modified_time),
    }


def entry_from_dict(data: Dict[str, Any]) -> SourceEntry:
    if not isinstance(data, dict):
        raise StoreFormatError(f"source_entry must be a mapping, got {type(data).__name__}")
    return SourceEntry(
        name=str(data.get("name") or ""),
        path=str(data.get("path") or ""),
        size=int(data.get("size") or 0),
        is_directory=_flag_from_value(data.get("is_directory"), "source_entry.is_directory"),
        modified_time=instant_from_value(data.get("modified_time"), "source_entry.modified_time"),
    )


def record_to_dict(record: ProjectRecord) -> Dict[str, Any]:
    """ProjectRecord -> plain dict (YAML store and JSON responses)."""
    return {
        "id": record.id,
        "company_name": record.company_name,
        "location_name": record.location_name,
        "status": record.status.value,
        "start_date": instant_to_text(record.start_date),
        "end_date": instant_to_text(record.end_date),
        "description": record.description,
        "tags": list(record.tags),
        "file_count": record.file_count,
        "subdir_count": record.subdir_count,
        "source_entry": entry_to_dict(record.source_entry) if record.source_entry else None,
    }


def record_from_dict(data: Dict[str, Any], now: Optional[Instant] = None) -> ProjectRecord:
    """
    Plain dict -> ProjectRecord. Status is recomputed from the start date.

    Raises:
        StoreFormatError: wrong shape or an unparseable timestamp.
    """
    if not isinstance(data, dict):
        raise StoreFormatError(f"project must be a mapping, got {type(data).__name__}")

    start_date = instant_from_value(data.get("start_date"), "start_date")
    source = data.get("source_entry")

    try:
        return ProjectRecord(
            id=str(data.get("id") or ""),
            company_name=str(data.get("company_name") or ""),
            location_name=str(data.get("location_name") or ""),
            status=resolve_status(start_date, now),
            start_date=start_date,
            end_date=instant_from_value(data.get("end_date"), "end_date"),
            description=str(data.get("description") or ""),
            tags=_tags_from_value(data.get("tags")),
            file_count=int(data.get("file_count") or 0),
            subdir_count=int(data.get("subdir_count") or 0),
            source_entry=entry_from_dict(source) if source is not None else None,
        )
    except StoreFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise StoreFormatError(f"project {data.get('id')!r}: {exc}") from exc


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def load_projects(path: Union[str, Path], now: Optional[Instant] = None) -> List[ProjectRecord]:
    """
    Load the stored records.

    Returns an empty list when the file does not exist. Unreadable files,
    YAML syntax errors (yaml.YAMLError) and StoreFormatError propagate.
    """
    path = Path(path).expanduser()
    if not path.exists():
        logger.debug("No store at %s", path)
        return []

    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        return []
    if isinstance(document, dict):
        version = document.get("version", STORE_VERSION)
        if version != STORE_VERSION:
            raise StoreFormatError(f"unsupported store version {version!r} in {path}")
        items = document.get("projects") or []
    else:
        items = document

    if not isinstance(items, list):
        raise StoreFormatError(f"projects must be a list in {path}")

    records = [record_from_dict(item, now) for item in items]
    logger.debug("Loaded %d records from %s", len(records), path)
    return records


def save_projects(path: Union[str, Path], records: List[ProjectRecord]) -> Path:
    """
    Write ``records`` to the store, creating parent directories.

    The file is overwritten in place. Returns the written path.
    """
    path = Path(path).expanduser()
    ensure_directory(path.parent)

    document = {
        "version": STORE_VERSION,
        "generated_at": instant_to_text(Instant.now()),
        "generated_by": f"kouji {kouji.__version__}",
        "projects": [record_to_dict(record) for record in records],
    }

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    logger.info("Saved %d records to %s", len(records), path)
    return path
