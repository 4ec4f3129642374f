"""
Kouji - Construction project folder catalogue

Reconciles project folders found on disk with the side-car
``.inside.yaml`` record store.

Modules:
    core        - Shared services (config, logging, paths, output)
    projects    - Timestamp parsing, stable ids, data quality, status, merge
    api         - Flask web API
    cli         - Typer command line
"""

__version__ = "0.1.0"
