# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from studianta import configuration
from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _config_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("month_cell_limit", str(config["month_cell_limit"]))
    table.add_row(
        "recurring_interval_seconds", str(config["recurring_interval_seconds"])
    )
    table.add_row("sync_timeout_seconds", str(config["sync_timeout_seconds"]))
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (default location)",
    )
    return table


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_config_table())
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")
    console.print(f"Data directory: {configuration.DATA_PATH}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show the application header above views",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Minimum log level: DEBUG, INFO, WARNING, ERROR",
        ),
    ] = None,
    month_cell_limit: Annotated[
        Optional[int],
        typer.Option(
            "--month-cell-limit",
            help="Events listed per month cell before '+N more'",
        ),
    ] = None,
    recurring_interval_seconds: Annotated[
        Optional[int],
        typer.Option(
            "--recurring-interval-seconds",
            help="Seconds between recurring transaction checks",
        ),
    ] = None,
    sync_timeout_seconds: Annotated[
        Optional[int],
        typer.Option(
            "--sync-timeout-seconds",
            help="Seconds a calendar sync may take before giving up",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the default location",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    ):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    try:
        CONFIGURATION_REPO.update_config(
            data_path=data_path,
            remove_data_path=remove_data_path,
            show_header=show_header,
            log_level=log_level,
            month_cell_limit=month_cell_limit,
            recurring_interval_seconds=recurring_interval_seconds,
            sync_timeout_seconds=sync_timeout_seconds,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table("Updated Configuration"))
