"""
Strata CLI Main Entry Point

Commands:
- ``strata discover``: scan a directory and print discovered services, groups and imports
- ``strata generators``: list registered generators and their capabilities
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table

from strata.config import get_settings, load_project_config
from strata.discovery import GeneratorCollection
from strata.exceptions import StrataError
from strata.generators import discover_generators, generator_capabilities, get_global_registry
from strata.logging import configure_logging

console = Console()


@click.group()
@click.version_option(package_name="strata", prog_name="strata")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to STRATA_LOG_LEVEL)",
)
def cli(log_level: Optional[str]):
    """
    Strata - discover service and group definitions in a directory tree.

    Each directory is offered to the configured generators in priority order.
    Directories matched by a .strataignore file are never visited.
    """
    configure_logging(log_level)


@cli.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--target",
    "-t",
    "targets",
    multiple=True,
    help="Only report services and groups with this name (repeatable)",
)
@click.option(
    "--generator",
    "-g",
    "generator_names",
    multiple=True,
    help="Generator to run, in priority order (repeatable). Defaults to all.",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    default=False,
    help="Output as JSON",
)
def discover(
    path: Optional[Path],
    targets: tuple[str, ...],
    generator_names: tuple[str, ...],
    output_json: bool,
):
    """Discover services, groups and imports under PATH.

    Examples:
        strata discover                     # Scan STRATA_ROOT_PATH (default: .)
        strata discover ./services -t api   # Only report 'api'
        strata discover -g manifest --json  # Run one generator, JSON output
    """
    settings = get_settings()
    root = path or settings.root_path

    try:
        project = load_project_config(root)
        discovery_config = project.discovery

        registry = get_global_registry()
        discover_generators(registry)
        generators = registry.create_all(generator_names or discovery_config.generators)

        collection = GeneratorCollection(
            generators,
            path=root,
            targets=targets or discovery_config.targets or settings.targets,
            ignore_filename=discovery_config.ignore_filename or settings.ignore_filename,
        )
        collection.generate()
    except StrataError as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        sys.exit(1)

    services = collection.services()
    groups = collection.groups()
    imports = collection.imports()

    if output_json:
        output = {
            "services": [
                {**_record_dict(s), "generator": collection.service_origins.get(s.name)}
                for s in services
            ],
            "groups": [
                {**_record_dict(g), "generator": collection.group_origins.get(g.name)}
                for g in groups
            ],
            "imports": imports,
        }
        click.echo(json.dumps(output, indent=2, default=str))
        return

    _render_records("Services", services, collection.service_origins)
    _render_records("Groups", groups, collection.group_origins)
    if imports:
        table = Table(title="Imports")
        table.add_column("Path", style="cyan")
        for item in imports:
            table.add_row(item)
        console.print(table)


@cli.command(name="generators")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    default=False,
    help="Output as JSON",
)
def generators_cmd(output_json: bool):
    """List registered generators in priority order."""
    registry = get_global_registry()
    discover_generators(registry)

    rows = [
        {"name": name, "capabilities": generator_capabilities(registry.create(name))}
        for name in registry.list_generators()
    ]

    if output_json:
        click.echo(json.dumps(rows, indent=2))
        return

    table = Table(title="Generators")
    table.add_column("Name", style="cyan")
    table.add_column("Capabilities")
    for row in rows:
        table.add_row(row["name"], ", ".join(row["capabilities"]) or "-")
    console.print(table)


def _record_dict(record: Any) -> dict[str, Any]:
    if hasattr(record, "to_dict"):
        return record.to_dict()
    return {"name": record.name}


def _render_records(title: str, records: list, origins: dict[str, str]) -> None:
    if not records:
        console.print(f"No {title.lower()} found")
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Generator")
    table.add_column("Source", style="dim")
    for record in records:
        source = getattr(record, "source_path", None)
        table.add_row(record.name, origins.get(record.name, "-"), str(source) if source else "-")
    console.print(table)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
