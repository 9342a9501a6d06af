"""CLI helpers for date range resolution."""

from datetime import date

import click

from billtrack.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = "--this-month, --this-year, --this-week, --last-month, --last-year, --last-week"


def period_options(command):
    """Attach the period flag options to a click command."""
    for flag, help_text in reversed(
        [
            ("--this-month", "Filter to current month"),
            ("--this-year", "Filter to current year"),
            ("--this-week", "Filter to current week"),
            ("--last-month", "Filter to previous month"),
            ("--last-year", "Filter to previous year"),
            ("--last-week", "Filter to previous week"),
        ]
    ):
        command = click.option(flag, is_flag=True, help=help_text)(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(f"Error: Only one period option ({PERIOD_OPTIONS}) can be specified at a time.", err=True)
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        period = next(name for name, is_set in period_flags.items() if is_set)
        return get_date_range(period)

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
