"""Category management commands."""

import click
from billtrack.cli.error_handling import handle_domain_error
from billtrack.cli.resolution import resolve_category
from billtrack.domain.category import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])
    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'billtrack init-categories' to create the defaults.")
        return

    for cat in categories:
        description = f" - {cat.description}" if cat.description else ""
        click.echo(f"{cat.name} (ID: {cat.id}){description}")


@category_group.command("create")
@click.argument("name")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(ctx, name: str, description: str | None):
    """Create a category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(name=name, description=description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.pass_context
def update_category(ctx, category: str, name: str | None, description: str | None):
    """Rename a category or change its description."""
    service = CategoryService(ctx.obj["db"])
    try:
        updated = service.update_category(
            resolve_category(service, category), name=name, description=description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{updated.name}' (ID: {updated.id})")


@category_group.command("delete")
@click.argument("category")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = resolve_category(service, category)
    except ValueError as e:
        handle_domain_error(ctx, e)

    cat = service.get_category(category_id)
    if not yes and not click.confirm(f"Are you sure you want to delete category '{cat.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_category(category_id)
    click.echo(f"Deleted category '{cat.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
