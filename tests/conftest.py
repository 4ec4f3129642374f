"""
Shared test fixtures for Kouji.

Pins the process timezone to JST, provides a fixed clock, record builders,
a throwaway project tree, a CLI runner and a Flask test client.
"""

import os
import time

import pytest

from kouji.projects.instant import Instant
from kouji.projects.models import ProjectRecord, SourceEntry

JST = 9 * 3600


def jst(year, month, day, hour=0, minute=0, second=0, nanos=0) -> Instant:
    return Instant.from_wall(year, month, day, hour, minute, second, nanos=nanos, offset=JST)


@pytest.fixture(autouse=True)
def local_tz():
    """Run every test with the local timezone set to JST (no DST)."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "JST-9"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture
def now():
    """Fixed clock: 2025-06-18 12:00 JST."""
    return jst(2025, 6, 18, 12)


@pytest.fixture
def make_record():
    """Factory for ProjectRecords with a source entry."""

    def _make(
        id="X1AAA",
        company_name="Acme",
        location_name="Nagoya",
        start_date=None,
        modified_time=None,
        **kwargs,
    ):
        if start_date is None:
            start_date = jst(2025, 5, 1)
        if modified_time is None:
            modified_time = jst(2025, 6, 1)
        entry = SourceEntry(
            name=f"{start_date.date_string()} {company_name} {location_name}",
            path=f"/projects/{company_name}-{location_name}",
            size=4096,
            is_directory=True,
            modified_time=modified_time,
        )
        return ProjectRecord(
            id=id,
            company_name=company_name,
            location_name=location_name,
            start_date=start_date,
            source_entry=entry,
            **kwargs,
        )

    return _make


PROJECT_FOLDERS = (
    "2025-0618 Acme Nagoya",
    "2024-0301 Beta Osaka",
    "2025-0901 Gamma Kobe",
)


@pytest.fixture
def project_tree(tmp_path):
    """
    A scan root with three project folders plus entries the scanner ignores.

    Folder mtimes are pinned to 2025-06-10 JST so they are valid against the
    ``now`` fixture.
    """
    root = tmp_path / "projects"
    root.mkdir()

    acme = root / PROJECT_FOLDERS[0]
    acme.mkdir()
    (acme / "drawing.pdf").write_text("pdf")
    (acme / "notes.txt").write_text("notes")
    (acme / "photos").mkdir()

    (root / PROJECT_FOLDERS[1]).mkdir()
    (root / PROJECT_FOLDERS[2]).mkdir()

    (root / "2025-0618 Acme").mkdir()
    (root / "misc").mkdir()
    (root / "2025-0618 Loose File.txt").write_text("not a folder")

    mtime = jst(2025, 6, 10).seconds
    for child in root.iterdir():
        os.utime(child, (mtime, mtime))

    return root


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def client():
    """Flask test client."""
    from kouji.api import create_app

    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()
