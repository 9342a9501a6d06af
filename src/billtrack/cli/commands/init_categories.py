"""Initialize default categories."""

import click
from billtrack.domain.category import CategoryService, DEFAULT_CATEGORIES


@click.command("init-categories")
@click.option("--force", is_flag=True, help="Add missing defaults even if categories exist")
@click.pass_context
def init_categories(ctx, force: bool):
    """Initialize database with the default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    if service.list_categories() and not force:
        click.echo("Categories already exist. Use --force to add missing defaults.")
        return

    click.echo("Creating default categories...")
    created = service.seed_default_categories(DEFAULT_CATEGORIES)
    click.echo(f"Successfully created {len(created)} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
