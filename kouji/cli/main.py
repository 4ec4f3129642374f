"""
Kouji CLI - Main Entry Point

Unified Typer CLI that assembles all module sub-commands.

Usage:
    kouji version
    kouji serve
    kouji projects [command]
    kouji time [command]
"""

import typer

import kouji

app = typer.Typer(
    name="kouji",
    help="Construction project folder catalog.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show the kouji version."""
    typer.echo(f"kouji {kouji.__version__}")


@app.command()
def serve(
    port: int = typer.Option(None, "--port", "-p", help="Port number (default: server.port)"),
    host: str = typer.Option(None, "--host", "-h", help="Host address (default: server.host)"),
    debug: bool = typer.Option(False, "--debug", help="Use Flask dev server with auto-reload"),
    threads: int = typer.Option(4, "--threads", "-t", help="Waitress worker threads (production only)"),
):
    """Launch the JSON web API.

    Default: Waitress server on server.host:server.port from config.yaml.
    With --debug: Flask dev server with auto-reload.
    """
    from kouji.api import create_app
    from kouji.core.config import get_config_value

    _host = host or get_config_value("server", "host", default="127.0.0.1")
    _port = port or int(get_config_value("server", "port", default=8080))

    web = create_app()

    if debug:
        typer.echo(f"Starting Flask dev server at http://{_host}:{_port}")
        web.run(host=_host, port=_port, debug=True)
    else:
        from waitress import serve as waitress_serve

        typer.echo(f"Starting Waitress server on {_host}:{_port} ({threads} threads)")
        waitress_serve(web, host=_host, port=_port, threads=threads)


def _register_modules():
    """Register module CLI sub-apps."""
    module_registry = [
        ("kouji.projects.cli", "projects", "Project folders & the store file"),
        ("kouji.cli.timestamps", "time", "Flexible date/time parsing"),
    ]

    import importlib

    for module_path, name, help_text in module_registry:
        mod = importlib.import_module(module_path)
        app.add_typer(mod.app, name=name, help=help_text)


_register_modules()


def main():
    """Entry point for the kouji CLI."""
    app()


if __name__ == "__main__":
    main()
