"""Invoice management commands."""

import click
from billtrack.cli.error_handling import handle_domain_error
from billtrack.cli.resolution import resolve_category, resolve_partner, resolve_user
from billtrack.domain.category import CategoryService
from billtrack.domain.entities import InvoiceType, InvoiceWithRelations
from billtrack.domain.filters import InvoiceFilterService
from billtrack.domain.invoice import InvoiceService
from billtrack.domain.partner import PartnerService
from billtrack.domain.status import classify_invoice
from billtrack.domain.user import UserService
from billtrack.utils.amount_parser import format_currency
from billtrack.utils.clock import to_naive_utc
from billtrack.utils.date_parser import parse_date

INVOICE_TYPES = [t.value for t in InvoiceType]


def _parse_date_option(ctx, label: str, value: str):
    try:
        return to_naive_utc(parse_date(value))
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def print_invoice_header() -> None:
    """Print the column header used by invoice listings."""
    click.echo("-" * 110)
    click.echo(
        f"{'ID':>4}  {'Type':<10} {'Number':<12} {'Partner':<25} {'Category':<16} "
        f"{'Due':<10} {'Amount':>16}  Status"
    )
    click.echo("-" * 110)


def format_invoice_line(joined: InvoiceWithRelations) -> str:
    """Format one invoice row with its current display status."""
    inv = joined.invoice
    display = classify_invoice(inv)
    status = display.value if inv.status.value == display.value else f"{display.value} ({inv.status.value})"
    return (
        f"{inv.id:>4}  {inv.invoice_type.value:<10} {inv.number[:12]:<12} "
        f"{joined.partner.name[:25]:<25} {joined.category.name[:16]:<16} "
        f"{inv.due_date:%Y-%m-%d} {format_currency(inv.amount):>16}  {status}"
    )


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("add")
@click.option("--type", "invoice_type", type=click.Choice(INVOICE_TYPES), required=True, help="Payable or receivable")
@click.option("--number", required=True, help="Invoice number")
@click.option("--partner", required=True, help="Partner ID, document number or name")
@click.option("--category", required=True, help="Category ID or name")
@click.option("--amount", required=True, help="Amount, e.g. 1234.56 or '1.234,56'")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD, DD/MM/YYYY, '+30', ...)")
@click.option("--issue-date", default="today", show_default=True, help="Issue date")
@click.option("--user", required=True, help="Username or ID of the user recording the invoice")
@click.option("--description", help="Description")
@click.option("--payment-method", help="Payment method")
@click.option("--notes", help="Notes")
@click.option("--xml", "attachment_xml", help="Reference to the XML attachment")
@click.option("--pdf", "attachment_pdf", help="Reference to the PDF attachment")
@click.pass_context
def add_invoice(ctx, invoice_type, number, partner, category, amount, due_date, issue_date, user, **optional):
    """Record a new pending invoice.

    Examples:
        billtrack invoice add --type payable --number NF-101 --partner "ACME Ltda" \\
            --category Services --amount "1.234,56" --due-date +15 --user maria
    """
    db = ctx.obj["db"]
    issue = _parse_date_option(ctx, "issue date", issue_date)
    due = _parse_date_option(ctx, "due date", due_date)
    try:
        invoice_id = InvoiceService(db).create_invoice(
            invoice_type=invoice_type,
            number=number,
            partner_id=resolve_partner(PartnerService(db), partner),
            category_id=resolve_category(CategoryService(db), category),
            issue_date=issue,
            due_date=due,
            amount=amount,
            created_by=resolve_user(UserService(db), user),
            **optional,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created invoice {number} (ID: {invoice_id})")


@invoice_group.command("list")
@click.option("--type", "invoice_type", type=click.Choice(INVOICE_TYPES), help="Only this invoice type")
@click.pass_context
def list_invoices(ctx, invoice_type: str | None):
    """List invoices with their current status."""
    invoices = InvoiceFilterService(ctx.obj["db"]).list_invoices(invoice_type)
    if not invoices:
        click.echo("No invoices found.")
        return

    print_invoice_header()
    for joined in invoices:
        click.echo(format_invoice_line(joined))


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show invoice details."""
    db = ctx.obj["db"]
    inv = InvoiceService(db).get_invoice(invoice_id)
    if inv is None:
        click.echo(f"Error: Invoice {invoice_id} not found", err=True)
        ctx.exit(1)

    partner = db.get_partner(inv.partner_id)
    category = db.get_category(inv.category_id)
    click.echo(f"ID:          {inv.id}")
    click.echo(f"Type:        {inv.invoice_type.value}")
    click.echo(f"Number:      {inv.number}")
    click.echo(f"Partner:     {partner.name if partner else f'(missing partner {inv.partner_id})'}")
    click.echo(f"Category:    {category.name if category else f'(missing category {inv.category_id})'}")
    click.echo(f"Issued:      {inv.issue_date:%Y-%m-%d}")
    click.echo(f"Due:         {inv.due_date:%Y-%m-%d}")
    click.echo(f"Amount:      {format_currency(inv.amount)}")
    click.echo(f"Status:      {classify_invoice(inv).value} ({inv.status.value})")
    if inv.transaction_date is not None:
        click.echo(f"Settled on:  {inv.transaction_date:%Y-%m-%d}")
    for label, value in (
        ("Method", inv.payment_method),
        ("Description", inv.description),
        ("Notes", inv.notes),
        ("XML", inv.attachment_xml),
        ("PDF", inv.attachment_pdf),
    ):
        if value:
            click.echo(f"{label + ':':<13}{value}")


@invoice_group.command("update")
@click.argument("invoice_id", type=int)
@click.option("--number", help="New invoice number")
@click.option("--partner", help="New partner")
@click.option("--category", help="New category")
@click.option("--amount", help="New amount")
@click.option("--due-date", help="New due date")
@click.option("--issue-date", help="New issue date")
@click.option("--description", help="New description")
@click.option("--payment-method", help="New payment method")
@click.option("--notes", help="New notes")
@click.pass_context
def update_invoice(ctx, invoice_id, partner, category, due_date, issue_date, **fields):
    """Update invoice fields."""
    db = ctx.obj["db"]
    changes = {key: value for key, value in fields.items() if value is not None}
    if due_date is not None:
        changes["due_date"] = _parse_date_option(ctx, "due date", due_date)
    if issue_date is not None:
        changes["issue_date"] = _parse_date_option(ctx, "issue date", issue_date)
    try:
        if partner is not None:
            changes["partner_id"] = resolve_partner(PartnerService(db), partner)
        if category is not None:
            changes["category_id"] = resolve_category(CategoryService(db), category)
        if not changes:
            click.echo("Nothing to update.")
            return
        InvoiceService(db).update_invoice(invoice_id, **changes)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated invoice {invoice_id}")


@invoice_group.command("pay")
@click.argument("invoice_id", type=int)
@click.option("--date", "transaction_date", help="Payment date (defaults to now)")
@click.option("--method", "payment_method", help="Payment method")
@click.pass_context
def pay_invoice(ctx, invoice_id: int, transaction_date: str | None, payment_method: str | None):
    """Record payment (payable) or receipt (receivable) of an invoice."""
    when = None
    if transaction_date is not None:
        when = _parse_date_option(ctx, "payment date", transaction_date)
    try:
        inv = InvoiceService(ctx.obj["db"]).record_payment(
            invoice_id, transaction_date=when, payment_method=payment_method
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Invoice {invoice_id} marked {inv.status.value}")


@invoice_group.command("cancel")
@click.argument("invoice_id", type=int)
@click.pass_context
def cancel_invoice(ctx, invoice_id: int):
    """Cancel a pending invoice."""
    try:
        InvoiceService(ctx.obj["db"]).cancel_invoice(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Invoice {invoice_id} canceled")


@invoice_group.command("delete")
@click.argument("invoice_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_invoice(ctx, invoice_id: int, yes: bool):
    """Delete an invoice."""
    if not yes and not click.confirm(f"Are you sure you want to delete invoice {invoice_id}?"):
        click.echo("Deletion cancelled.")
        return
    try:
        InvoiceService(ctx.obj["db"]).delete_invoice(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted invoice {invoice_id}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
