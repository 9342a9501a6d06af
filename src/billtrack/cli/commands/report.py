"""Period report command."""

import click
from billtrack.cli.commands.invoice import format_invoice_line, print_invoice_header
from billtrack.cli.date_filters import period_options, resolve_cli_date_range
from billtrack.cli.error_handling import handle_domain_error
from billtrack.domain.dashboard import DashboardService
from billtrack.utils.amount_parser import format_currency
from billtrack.utils.serialization import dumps


@click.command("report")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@period_options
@click.option("--details", is_flag=True, help="List the invoices in the period")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report(
    ctx,
    start_date,
    end_date,
    this_month,
    this_year,
    this_week,
    last_month,
    last_year,
    last_week,
    details,
    as_json,
):
    """Summarize invoices issued in a period.

    Defaults to the current month.

    Examples:
        billtrack report --last-month
        billtrack report --start-date 2024-01-01 --end-date 2024-03-31 --details
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "this-week": this_week,
            "last-month": last_month,
            "last-year": last_year,
            "last-week": last_week,
        },
    )

    service = DashboardService(ctx.obj["db"])
    try:
        summary = service.get_period_summary(start_date=start, end_date=end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(dumps(summary))
        return

    click.echo(f"Period:   {summary.start_date} to {summary.end_date}")
    click.echo(f"Invoices: {summary.invoice_count}")
    click.echo(f"Total:    {format_currency(summary.total_amount)}")
    click.echo(f"Settled:  {format_currency(summary.paid_amount)}")
    click.echo(f"Pending:  {format_currency(summary.pending_amount)}")

    if details:
        invoices = service.filters.get_invoices_issued_between(summary.start_date, summary.end_date)
        if invoices:
            click.echo()
            print_invoice_header()
            for joined in invoices:
                click.echo(format_invoice_line(joined))


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
