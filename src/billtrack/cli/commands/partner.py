"""Partner (supplier/client) management commands."""

import click
from billtrack.cli.error_handling import handle_domain_error
from billtrack.cli.resolution import resolve_partner
from billtrack.domain.entities import EntityType
from billtrack.domain.partner import PartnerService

ENTITY_TYPES = [t.value for t in EntityType]


def contact_options(command):
    """Attach the optional contact field options to a command."""
    for flag, help_text in reversed(
        [
            ("--email", "Contact email"),
            ("--phone", "Phone number"),
            ("--address", "Address"),
            ("--contact-name", "Contact person"),
            ("--bank-details", "Bank details"),
        ]
    ):
        command = click.option(flag, help=help_text)(command)
    return command


@click.group()
def partner_group():
    """Manage suppliers and clients."""
    pass


@partner_group.command("create")
@click.argument("name")
@click.option("--document", "document_number", required=True, help="Tax ID or other unique document number")
@click.option("--type", "entity_type", type=click.Choice(ENTITY_TYPES), default=EntityType.SUPPLIER.value, show_default=True)
@contact_options
@click.pass_context
def create_partner(ctx, name: str, document_number: str, entity_type: str, **contact):
    """Create a partner.

    Examples:
        billtrack partner create "ACME Ltda" --document 12.345.678/0001-90
        billtrack partner create "Big Client" --document 987 --type client
    """
    service = PartnerService(ctx.obj["db"])
    try:
        partner_id = service.create_partner(
            name=name, document_number=document_number, entity_type=entity_type, **contact
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {entity_type} '{name}' (ID: {partner_id})")


@partner_group.command("list")
@click.option("--type", "entity_type", type=click.Choice(ENTITY_TYPES), help="Only partners of this type")
@click.pass_context
def list_partners(ctx, entity_type: str | None):
    """List partners. Suppliers and clients include partners of type 'both'."""
    service = PartnerService(ctx.obj["db"])
    partners = service.list_partners(entity_type)
    if not partners:
        click.echo("No partners found.")
        return

    click.echo("\nPartners:")
    click.echo("-" * 80)
    for p in partners:
        click.echo(f"ID: {p.id:3d} | {p.name:30s} | {p.document_number:20s} | {p.entity_type.value}")


@partner_group.command("show")
@click.argument("partner")
@click.pass_context
def show_partner(ctx, partner: str):
    """Show partner details (ID, document number or name)."""
    service = PartnerService(ctx.obj["db"])
    try:
        p = service.get_partner(resolve_partner(service, partner))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"ID:        {p.id}")
    click.echo(f"Name:      {p.name}")
    click.echo(f"Document:  {p.document_number}")
    click.echo(f"Type:      {p.entity_type.value}")
    for label, value in (
        ("Email", p.email),
        ("Phone", p.phone),
        ("Address", p.address),
        ("Contact", p.contact_name),
        ("Bank", p.bank_details),
    ):
        if value:
            click.echo(f"{label + ':':<11}{value}")


@partner_group.command("update")
@click.argument("partner")
@click.option("--name", help="New name")
@click.option("--document", "document_number", help="New document number")
@click.option("--type", "entity_type", type=click.Choice(ENTITY_TYPES), help="New type")
@contact_options
@click.pass_context
def update_partner(ctx, partner: str, **fields):
    """Update partner fields."""
    service = PartnerService(ctx.obj["db"])
    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        click.echo("Nothing to update.")
        return
    try:
        updated = service.update_partner(resolve_partner(service, partner), **changes)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated partner '{updated.name}' (ID: {updated.id})")


@partner_group.command("delete")
@click.argument("partner")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_partner(ctx, partner: str, yes: bool):
    """Delete a partner.

    Invoices for the partner are kept but no longer appear in invoice lists
    or dashboards.
    """
    service = PartnerService(ctx.obj["db"])
    try:
        partner_id = resolve_partner(service, partner)
    except ValueError as e:
        handle_domain_error(ctx, e)

    partner_obj = service.get_partner(partner_id)
    if not yes and not click.confirm(f"Are you sure you want to delete partner '{partner_obj.name}' (ID: {partner_id})?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_partner(partner_id)
    click.echo(f"Deleted partner '{partner_obj.name}'")


def register_commands(cli):
    """Register partner commands with main CLI."""
    cli.add_command(partner_group, name="partner")
