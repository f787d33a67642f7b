"""CLI error handling helpers."""

import click
import structlog

from fundtrack.domain.errors import AuthorizationError, DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Report a failed operation on stderr and exit with status 1.

    Role and ownership failures read "Not allowed: ..."; everything else
    reads "Error: ...".
    """
    logger.info("command_failed", command=ctx.info_name, error_type=type(error).__name__)
    prefix = "Not allowed" if isinstance(error, AuthorizationError) else "Error"
    click.echo(f"{prefix}: {error}", err=True)
    ctx.exit(1)
