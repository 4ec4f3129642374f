"""
Reconciliation of discovered and persisted project records.

Discovered records come from a fresh directory scan; persisted records come
from the side-car store. Both describe the same projects under the same
stable ids, and the merge produces the one list that is shown and saved:

1. Discovered records are visited in input order. Invalid ones are dropped.
2. A discovered record with no stored counterpart is new and kept as is.
3. A stored counterpart with invalid timestamps is replaced outright.
4. Otherwise the side with the newer ``source_entry.modified_time`` wins.
   When the folder is newer, ``description`` and ``end_date`` (which only
   the store can hold) are carried over from the stored record.
5. Stored records with no folder left are kept if valid.
6. The result is stably sorted by start date, newest first.

Dropped records are not reported; compare input and output lengths to
count them.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Set

from kouji.core import get_logger
from kouji.projects.instant import Instant
from kouji.projects.models import ProjectRecord
from kouji.projects.quality import is_invalid_record

logger = get_logger("kouji.projects.merge")


def _is_newer(discovered: ProjectRecord, persisted: ProjectRecord) -> bool:
    """Strictly newer; an absent modified time never wins."""
    if discovered.modified_time is None:
        return False
    if persisted.modified_time is None:
        return True
    return discovered.modified_time > persisted.modified_time


def _carry_store_fields(discovered: ProjectRecord, persisted: ProjectRecord) -> ProjectRecord:
    """Discovered record with the store-only fields kept from the persisted one."""
    changes = {}
    if persisted.description:
        changes["description"] = persisted.description
    if persisted.end_date is not None:
        changes["end_date"] = persisted.end_date
    return replace(discovered, **changes) if changes else discovered


def sort_by_start_date(records: Sequence[ProjectRecord]) -> List[ProjectRecord]:
    """Newest start date first; ties and missing dates keep their order (missing last)."""
    return sorted(
        records,
        key=lambda r: (r.start_date is not None, r.start_date.unix_nanos if r.start_date else 0),
        reverse=True,
    )


def merge(
    discovered: Sequence[ProjectRecord],
    persisted: Sequence[ProjectRecord],
    now: Optional[Instant] = None,
) -> List[ProjectRecord]:
    """
    Merge a scan result with the stored records.

    Args:
        discovered: Records synthesized from the project folders.
        persisted:  Records loaded from the side-car store.
        now:        Clock used by the data-quality checks (default: now).

    Returns:
        New list of records, unique by id, sorted by start date descending.
    """
    if now is None:
        now = Instant.now()

    stored: Dict[str, ProjectRecord] = {}
    for record in persisted:
        stored.setdefault(record.id, record)

    merged: List[ProjectRecord] = []
    emitted: Set[str] = set()

    for record in discovered:
        if is_invalid_record(record, now):
            logger.debug("Dropping discovered record %r: invalid timestamps", record.id)
            continue
        if record.id in emitted:
            logger.debug("Dropping discovered record %r: duplicate id", record.id)
            continue

        counterpart = stored.pop(record.id, None)
        if counterpart is None:
            merged.append(record)
        elif is_invalid_record(counterpart, now):
            logger.debug("Replacing stored record %r: invalid timestamps", record.id)
            merged.append(record)
        elif _is_newer(record, counterpart):
            merged.append(_carry_store_fields(record, counterpart))
        else:
            merged.append(counterpart)
        emitted.add(record.id)

    for record in stored.values():
        if is_invalid_record(record, now):
            logger.debug("Dropping stored record %r: invalid timestamps", record.id)
            continue
        merged.append(record)

    return sort_by_start_date(merged)
