"""CLI error handling helpers."""

import logging

import click

from billtrack.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with failure.

    The error class is logged at debug level so ``--verbose`` shows whether
    a lookup, a validation or a uniqueness check failed.
    """
    logger.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
