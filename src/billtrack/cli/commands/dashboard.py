"""Dashboard commands."""

import click
from billtrack.cli.commands.invoice import INVOICE_TYPES, format_invoice_line, print_invoice_header
from billtrack.cli.error_handling import handle_domain_error
from billtrack.domain.dashboard import DEFAULT_TOP_PARTNERS_LIMIT, DashboardService
from billtrack.domain.entities import EntityType
from billtrack.domain.filters import DEFAULT_UPCOMING_DAYS
from billtrack.utils.amount_parser import format_currency
from billtrack.utils.serialization import dumps

json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


def _print_invoices(invoices, empty_message: str) -> None:
    if not invoices:
        click.echo(empty_message)
        return
    print_invoice_header()
    for joined in invoices:
        click.echo(format_invoice_line(joined))


@click.group()
def dashboard_group():
    """Show dashboard figures."""
    pass


@dashboard_group.command("stats")
@json_option
@click.pass_context
def stats(ctx, as_json: bool):
    """Show amounts due, overdue and settled this month."""
    result = DashboardService(ctx.obj["db"]).get_dashboard_stats()
    if as_json:
        click.echo(dumps(result))
        return

    click.echo(f"Invoices:                {result.total_invoices}")
    click.echo()
    click.echo("Payables")
    click.echo(f"  Due next 7 days:       {format_currency(result.to_pay):>16}  ({result.next_week_payables})")
    click.echo(f"  Overdue:               {format_currency(result.overdue_payables):>16}")
    click.echo(f"  Paid this month:       {format_currency(result.paid):>16}")
    click.echo()
    click.echo("Receivables")
    click.echo(f"  Due next 7 days:       {format_currency(result.to_receive):>16}  ({result.next_week_receivables})")
    click.echo(f"  Overdue:               {format_currency(result.overdue_receivables):>16}")
    click.echo(f"  Received this month:   {format_currency(result.received):>16}")


@dashboard_group.command("top-partners")
@click.option("--limit", type=int, default=DEFAULT_TOP_PARTNERS_LIMIT, show_default=True, help="Number of partners")
@click.option("--type", "partner_type", type=click.Choice([t.value for t in EntityType]), help="Rank suppliers or clients only")
@json_option
@click.pass_context
def top_partners(ctx, limit: int, partner_type: str | None, as_json: bool):
    """Rank partners by amount invoiced over the last 90 days."""
    try:
        ranking = DashboardService(ctx.obj["db"]).get_top_partners(limit=limit, partner_type=partner_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(dumps(ranking))
        return
    if not ranking:
        click.echo("No invoices in the last 90 days.")
        return

    for position, entry in enumerate(ranking, start=1):
        click.echo(
            f"{position:>2}. {entry.name[:30]:<30} {entry.type:<9} "
            f"{format_currency(entry.total):>16} {entry.percentage:6.1f}%"
        )


@dashboard_group.command("categories")
@json_option
@click.pass_context
def categories(ctx, as_json: bool):
    """Show how the last 90 days of invoices split across categories."""
    distribution = DashboardService(ctx.obj["db"]).get_category_distribution()
    if as_json:
        click.echo(dumps(distribution))
        return
    if not distribution:
        click.echo("No invoices in the last 90 days.")
        return

    click.echo(f"{'Category':<20} {'Payable':>16} {'Receivable':>16} {'Share':>7}")
    click.echo("-" * 62)
    for entry in distribution:
        click.echo(
            f"{entry.name[:20]:<20} {format_currency(entry.total_payable):>16} "
            f"{format_currency(entry.total_receivable):>16} {entry.percentage:6.1f}%"
        )


@dashboard_group.command("upcoming")
@click.option("--days", type=int, default=DEFAULT_UPCOMING_DAYS, show_default=True, help="Look-ahead window in days")
@click.option("--type", "invoice_type", type=click.Choice(INVOICE_TYPES), help="Only this invoice type")
@json_option
@click.pass_context
def upcoming(ctx, days: int, invoice_type: str | None, as_json: bool):
    """List pending invoices coming due, soonest first."""
    try:
        invoices = DashboardService(ctx.obj["db"]).get_upcoming_invoices(days=days, invoice_type=invoice_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(dumps(invoices))
        return
    _print_invoices(invoices, f"No invoices due in the next {days} days.")


@dashboard_group.command("overdue")
@click.option("--type", "invoice_type", type=click.Choice(INVOICE_TYPES), help="Only this invoice type")
@json_option
@click.pass_context
def overdue(ctx, invoice_type: str | None, as_json: bool):
    """List pending invoices past their due date."""
    invoices = DashboardService(ctx.obj["db"]).get_overdue_invoices(invoice_type=invoice_type)
    if as_json:
        click.echo(dumps(invoices))
        return
    _print_invoices(invoices, "No overdue invoices.")


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard_group, name="dashboard")
