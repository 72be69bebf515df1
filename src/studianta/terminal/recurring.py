# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from studianta.model.transaction import Transaction
from studianta.repository.configuration import CONFIGURATION_REPO
from studianta.repository.transaction import TRANSACTION_REPO
from studianta.service.recurring import RecurringTicker, materialize_from_repositories
from studianta.terminal.custom_typer import AliasedTyperGroup
from studianta.terminal.parse import parse_date

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


def _report(created: list[Transaction]) -> None:
    if not created:
        console.print("[dim]No recurring transactions due.[/dim]")
        return
    for transaction in created:
        console.print(
            f"[green]+[/green] {transaction['date']} {transaction['type']} "
            f"{transaction['category']} {transaction['amount']:,.2f}"
        )


@app.command("run, r")
def run(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--date",
            "-d",
            parser=parse_date,
            help="Materialize as of this date instead of today",
        ),
    ] = None,
) -> None:
    """Record the recurring transactions that are due."""
    _report(materialize_from_repositories(date))


@app.command("watch, w")
def watch(
    interval: Annotated[
        Optional[float],
        typer.Option(
            "--interval",
            "-i",
            min=1,
            help="Seconds between checks (defaults to recurring_interval_seconds)",
        ),
    ] = None,
) -> None:
    """Keep checking for due recurring transactions until interrupted."""
    if interval is None:
        interval = CONFIGURATION_REPO.get_config()["recurring_interval_seconds"]

    ticker = RecurringTicker(
        lambda: _report(materialize_from_repositories()),
        interval=interval,
        on_complete=TRANSACTION_REPO.invalidate,
    )
    console.print(f"Checking every {interval:g}s, press Ctrl+C to stop.")
    ticker.start()
    try:
        ticker.wait()
    except KeyboardInterrupt:
        console.print()
    finally:
        ticker.stop(timeout=interval)
    console.print(f"Stopped after {ticker.runs} runs ({ticker.failures} failed).")
