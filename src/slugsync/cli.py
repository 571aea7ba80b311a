"""
Command line interface for slug encoding and field synchronization.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .checks import validate_slug
from .config import ConfigError, SlugFieldConfig, load_config
from .fields import FormDocument, get_status_value, parse_date_value
from .sync import AutoUpdater, UpdateResult
from .util import SlugOptions, create_slug, generate_uuid_v4, write_form_snapshot

console = Console()
app = typer.Typer(help="Generate slugs and keep slug fields in step with their source fields.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("SLUGSYNC_LOG_LEVEL")
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_existing_file(value: Path) -> Path:
    """Ensure the path exists and return it absolute."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Path) -> SlugFieldConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _load_form_or_exit(path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[bold red]Form error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("fields", []), list):
        console.print("[bold red]Form error:[/] expected an object with a 'fields' list.")
        raise typer.Exit(code=1)
    return payload


def _print_update_result(result: UpdateResult) -> None:
    table = Table(title="Update Result")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    table.add_row("Outcome", result.outcome.value)
    table.add_row("Source", escape(result.source_value or ""))
    table.add_row("Old value", escape(result.old_value or ""))
    table.add_row("New value", escape(result.new_value or ""))
    if result.error:
        table.add_row("Note", escape(result.error))
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show slugsync version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]slugsync[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]slugsync[/] is ready. Try [cyan]slugsync encode \"Hello World\"[/].",
        )


@app.command()
def encode(
    text: str = typer.Argument(..., help="Text to turn into a slug."),
    separator: str = typer.Option("-", "--separator", "-s", help="Separator: '-' or '_'."),
    lowercase: bool = typer.Option(True, "--lowercase/--no-lowercase", help="Fold to lower case."),
) -> None:
    """
    Print the slug for TEXT.
    """
    try:
        options = SlugOptions(separator=separator, lowercase=lowercase)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--separator") from exc
    typer.echo(create_slug(text, options))


@app.command()
def uuid() -> None:
    """
    Print a random version-4 identifier.
    """
    typer.echo(generate_uuid_v4())


@app.command()
def date(
    text: str = typer.Argument(..., help="Date-like text, e.g. 'February 28th, 2025' or '2025-02-28'."),
) -> None:
    """
    Show how a date field value is re-expressed before slug encoding.
    """
    result = parse_date_value(text)
    if not result.success:
        console.print(f"[yellow]No date pattern matched;[/] value stays {escape(repr(text))}.")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{result.value}[/] ({result.format.value})")


@app.command()
def sync(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the slug field TOML configuration.",
        callback=_resolve_existing_file,
    ),
    form: Path = typer.Option(
        ...,
        "--form",
        "-f",
        help="Path to a JSON form snapshot.",
        callback=_resolve_existing_file,
    ),
    write: bool = typer.Option(
        False,
        "--write",
        "-w",
        help="Write the updated form snapshot back to disk.",
    ),
    existing: Optional[List[str]] = typer.Option(
        None,
        "--existing",
        help="Slugs already in use, for the duplicate check (multiple allowed).",
    ),
) -> None:
    """
    Run one synchronization pass over a form snapshot and validate the result.
    """
    field_config = _load_config_or_exit(config)
    document = FormDocument.from_dict(_load_form_or_exit(form))
    logger.info("Synchronizing %s -> %s", field_config.source_field, field_config.target_field)

    updater = AutoUpdater(field_config.auto_update, document)
    result = updater.perform_update()
    _print_update_result(result)
    if not result.success:
        console.print(f"[bold red]Update failed:[/] {escape(result.error or '')}")
        raise typer.Exit(code=1)

    options = field_config.options
    status = get_status_value(document, options.status_field) if options.status_field else None
    issues = validate_slug(result.new_value, options, status=status, existing_slugs=existing or ())
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        console.print(f"[bold {colour}]{issue.code}:[/] {escape(issue.message)}")

    if write and result.wrote:
        write_form_snapshot(form, document.to_dict())
        console.print(f"[green]Wrote {form}[/]")

    if any(issue.severity == "error" for issue in issues):
        raise typer.Exit(code=2)


@app.command("config-hash")
def config_hash(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the slug field TOML configuration.",
        callback=_resolve_existing_file,
    ),
) -> None:
    """
    Output the deterministic hash of a config file for change detection.
    """
    field_config = _load_config_or_exit(config)
    console.print(f"[bold green]{field_config.hash}[/]")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
