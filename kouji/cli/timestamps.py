"""Timestamp parsing CLI sub-commands."""

import typer

app = typer.Typer(no_args_is_help=True)


@app.command()
def parse(
    text: str = typer.Argument(..., help="String containing a date, e.g. '2025-0618 Acme Nagoya'"),
    output_format: str = typer.Option("human", "--format", "-f", help="Output format: human | json | markdown"),
):
    """Find the date/time inside TEXT and show what is left over."""
    from kouji.core.output import OutputFormat, format_result
    from kouji.projects.instant import format_offset
    from kouji.projects.timeparse import UnparseableTimestamp, parse_timestamp_and_rest

    try:
        fmt = OutputFormat(output_format)
    except ValueError:
        typer.echo(f"Unknown format: {output_format}")
        raise typer.Exit(1)

    try:
        instant, rest = parse_timestamp_and_rest(text)
    except UnparseableTimestamp as exc:
        typer.echo(str(exc))
        raise typer.Exit(1)

    result = {
        "original": text,
        "rfc3339": instant.isoformat(),
        "unix": instant.seconds,
        "rest": rest,
        "offset": format_offset(instant.offset),
    }
    typer.echo(format_result(result, fmt, title="Parsed timestamp"))


@app.command()
def formats():
    """List the supported date/time layouts in the order they are tried."""
    from kouji.projects.timeparse import supported_formats

    for fmt in supported_formats():
        typer.echo(
            f"  {fmt['name']:<16} {fmt['layout']:<26} "
            f"{fmt['example']:<38} {fmt['timezone']}"
        )
