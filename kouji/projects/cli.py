"""Projects CLI sub-commands."""

from typing import Optional

import typer

app = typer.Typer(no_args_is_help=True)

_LIST_COLUMNS = ("id", "start_date", "status", "company_name", "location_name", "file_count")
_FOLDER_COLUMNS = ("name", "is_directory", "size", "modified_time")


def _fail(action: str, path: Optional[str], exc: Exception):
    """Report a scan or store failure and exit with status 1."""
    typer.echo(f"Cannot {action} {path or 'projects root'}: {exc}")
    raise typer.Exit(1)


def _parse_date_option(value: str, label: str):
    """Parse a command-line date, exiting with status 1 when it is not a date."""
    from kouji.projects.timeparse import UnparseableTimestamp, parse_timestamp

    try:
        return parse_timestamp(value)
    except UnparseableTimestamp:
        typer.echo(f"Invalid {label}: {value!r}")
        raise typer.Exit(1)


@app.command("list")
def list_cmd(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Folder to scan (default: paths.projects_root)"),
    output_format: str = typer.Option("human", "--format", "-f", help="Output format: human | json | markdown"),
):
    """Show the merged project list without writing anything."""
    from kouji.core.output import OutputFormat, format_table
    from kouji.projects.service import list_projects
    from kouji.projects.store import STORE_ERRORS, record_to_dict

    try:
        fmt = OutputFormat(output_format)
    except ValueError:
        typer.echo(f"Unknown format: {output_format}")
        raise typer.Exit(1)

    try:
        records = list_projects(path)
    except STORE_ERRORS as exc:
        _fail("scan", path, exc)

    rows = [record_to_dict(r) for r in records]
    if fmt == OutputFormat.JSON:
        typer.echo(format_table(rows, _LIST_COLUMNS, fmt))
        return

    for row, record in zip(rows, records):
        row["start_date"] = record.start_date.date_string() if record.start_date else None
    typer.echo(format_table(rows, _LIST_COLUMNS, fmt, title="Projects"))
    typer.echo(f"\n  {len(records)} project(s)")


@app.command()
def folders(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Folder to list (default: paths.projects_root)"),
    output_format: str = typer.Option("human", "--format", "-f", help="Output format: human | json | markdown"),
):
    """List every entry directly inside a folder, project or not."""
    from kouji.core.output import OutputFormat, format_table
    from kouji.projects.service import list_folders
    from kouji.projects.store import entry_to_dict

    try:
        fmt = OutputFormat(output_format)
    except ValueError:
        typer.echo(f"Unknown format: {output_format}")
        raise typer.Exit(1)

    try:
        listing = list_folders(path)
    except OSError as exc:
        _fail("list", path, exc)

    rows = [entry_to_dict(e) for e in listing.entries]
    typer.echo(format_table(rows, _FOLDER_COLUMNS, fmt, title=str(listing.path)))
    if fmt != OutputFormat.JSON:
        typer.echo(f"\n  {len(rows)} entr{'y' if len(rows) == 1 else 'ies'}")


@app.command()
def save(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Folder to scan (default: paths.projects_root)"),
):
    """Merge the scanned folders into the store file and write it."""
    from kouji.projects.service import save_projects
    from kouji.projects.store import STORE_ERRORS

    try:
        result = save_projects(path)
    except STORE_ERRORS as exc:
        _fail("save", path, exc)

    typer.echo(f"Saved {result.count} project(s) to {result.path}")


@app.command("set-dates")
def set_dates(
    project_id: str = typer.Argument(..., help="Stable project id (5 characters)"),
    start: str = typer.Argument(..., help="New start date, e.g. 2025-06-18"),
    end: str = typer.Argument(None, help="New end date (omit to clear)"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Folder holding the store"),
):
    """Set the start and end date of one stored project."""
    from kouji.projects.service import ProjectNotFoundError, update_project_dates
    from kouji.projects.store import STORE_ERRORS

    start_date = _parse_date_option(start, "start date")
    end_date = _parse_date_option(end, "end date") if end else None

    try:
        record = update_project_dates(project_id, start_date, end_date, root=path)
    except ProjectNotFoundError:
        typer.echo(f"Project {project_id} not found.")
        raise typer.Exit(1)
    except STORE_ERRORS as exc:
        _fail("update", path, exc)

    typer.echo(f"\n  {record.id}  {record.company_name} {record.location_name}")
    typer.echo(f"    Start:  {record.start_date}")
    typer.echo(f"    End:    {record.end_date or '-'}")
    typer.echo(f"    Status: {record.status.value}")


@app.command()
def cleanup(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Folder holding the store"),
):
    """Remove records with invalid timestamps from the store."""
    from kouji.projects.service import cleanup_invalid_records
    from kouji.projects.store import STORE_ERRORS

    try:
        result = cleanup_invalid_records(path)
    except STORE_ERRORS as exc:
        _fail("clean up", path, exc)

    typer.echo(f"\n  Store: {result.path}")
    typer.echo(f"    Before:  {result.projects_before}")
    typer.echo(f"    After:   {result.projects_after}")
    typer.echo(f"    Removed: {result.removed_count}")
