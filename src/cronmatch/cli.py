"""Command-line interface for cronmatch."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from .calendar import CalendarSnapshot, Clock, SystemClock
from .config import ConfigError
from .errors import CronError
from .logging import get_logger, setup_logging
from .matcher import empty_fields, expand_expression, should_run
from .settings import due_schedules, load_settings

logger = get_logger(__name__)

EXIT_NO_MATCH = 1
EXIT_ERROR = 2

DEFAULT_LOG_LEVEL = "warning"


def _snapshot(at: str | None, clock: Clock) -> CalendarSnapshot:
    if at is None:
        return CalendarSnapshot.from_datetime(clock.now())
    try:
        return CalendarSnapshot.from_datetime(datetime.fromisoformat(at))
    except ValueError:
        typer.echo(f"Error: invalid --at timestamp {at!r}", err=True)
        raise typer.Exit(EXIT_ERROR) from None


def create_app(clock: Clock | None = None) -> typer.Typer:
    clock = clock or SystemClock()
    app = typer.Typer(
        name="cronmatch",
        help="Check cron expressions against points in time.",
        add_completion=False,
        no_args_is_help=True,
    )

    @app.callback()
    def _root(
        ctx: typer.Context,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="debug, info, warning or error"),
        ] = None,
    ) -> None:
        # An explicit --log-level wins over the config file.
        ctx.obj = {"log_level": log_level}
        try:
            setup_logging(log_level or DEFAULT_LOG_LEVEL)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(EXIT_ERROR) from None

    @app.command(name="check")
    def check_cmd(
        expression: Annotated[str, typer.Argument(help="Cron expression, 5 or 6 fields")],
        at: Annotated[
            str | None,
            typer.Option("--at", help="ISO 8601 instant to test (default: now)"),
        ] = None,
        strict: Annotated[
            bool,
            typer.Option("--strict", help="Fail when a field matches no values"),
        ] = False,
    ) -> None:
        """Exit 0 when EXPRESSION fires at the instant, 1 when it does not."""
        snapshot = _snapshot(at, clock)
        try:
            if strict:
                empty = empty_fields(expression)
                if empty:
                    typer.echo(
                        f"Error: fields match no values: {', '.join(empty)}", err=True
                    )
                    raise typer.Exit(EXIT_ERROR)
            matched = should_run(expression, snapshot)
        except CronError as e:
            logger.warning("cli.check.invalid", expression=expression, error=str(e))
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(EXIT_ERROR) from None

        typer.echo("match" if matched else "no match")
        if not matched:
            raise typer.Exit(EXIT_NO_MATCH)

    @app.command(name="expand")
    def expand_cmd(
        expression: Annotated[str, typer.Argument(help="Cron expression, 5 or 6 fields")],
    ) -> None:
        """Print the values each field of EXPRESSION stands for."""
        try:
            fields = expand_expression(expression)
        except CronError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(EXIT_ERROR) from None

        width = max(len(name) for name in fields)
        for name, values in fields.items():
            rendered = ",".join(str(v) for v in values) if values else "(none)"
            typer.echo(f"{name.ljust(width)}  {rendered}")

    @app.command(name="due")
    def due_cmd(
        ctx: typer.Context,
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Config file path"),
        ] = None,
        at: Annotated[
            str | None,
            typer.Option("--at", help="ISO 8601 instant to test (default: now)"),
        ] = None,
    ) -> None:
        """List configured schedules that fire at the instant."""
        try:
            settings, _ = load_settings(config)
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(EXIT_ERROR) from None
        level = (ctx.obj or {}).get("log_level") or settings.logging.level
        setup_logging(level, settings.logging.format)

        snapshot = _snapshot(at, clock)
        due = due_schedules(settings, snapshot)
        logger.debug("cli.due.checked", schedules=len(settings.schedules), due=len(due))
        for entry in due:
            typer.echo(entry.id)

    return app


def main() -> None:
    create_app()()
