"""User management commands."""

import click
from billtrack.cli.error_handling import handle_domain_error
from billtrack.cli.resolution import resolve_user
from billtrack.domain.entities import UserRole
from billtrack.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option("--name", required=True, help="Display name")
@click.option("--email", required=True, help="Email address")
@click.option("--role", type=click.Choice([r.value for r in UserRole]), default=UserRole.ORDINARY.value, show_default=True)
@click.password_option()
@click.pass_context
def create_user(ctx, username: str, name: str, email: str, role: str, password: str):
    """Create a user.

    Examples:
        billtrack user create maria --name "Maria Souza" --email maria@example.com
    """
    service = UserService(ctx.obj["db"])
    try:
        user_id = service.create_user(
            username=username, password=password, name=name, email=email, role=role
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{username}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])
    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 70)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.username:15s} | {u.name:20s} | {u.role.value}")


@user_group.command("delete")
@click.argument("user")
@click.pass_context
def delete_user(ctx, user: str):
    """Delete a user by username or ID."""
    service = UserService(ctx.obj["db"])
    try:
        user_id = resolve_user(service, user)
        service.delete_user(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted user {user_id}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
