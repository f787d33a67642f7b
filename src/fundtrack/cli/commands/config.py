"""Organization configuration commands."""

import click

from fundtrack.cli.runtime import get_app, run
from fundtrack.domain.payloads import ConfigPatch


@click.group()
def config_group():
    """Show or change the organization configuration."""
    pass


@config_group.command("show")
@click.pass_context
def show_config(ctx):
    """Show the current configuration."""
    app = get_app(ctx)

    async def _show():
        config = await app.config.load_config()
        if config is None:
            click.echo("No configuration found.")
            return
        click.echo(f"Organization: {config.organization_name or '-'}")
        click.echo(f"Currency:     {config.currency_name} ({config.currency_code}, {config.currency_symbol})")
        if config.logo_url:
            click.echo(f"Logo:         {config.logo_url}")

    run(ctx, _show())


@config_group.command("set")
@click.option("--currency-code", help="ISO currency code (e.g., MXN)")
@click.option("--currency-symbol", help="Currency symbol (e.g., $)")
@click.option("--currency-name", help="Currency display name")
@click.option("--organization", "organization_name", help="Organization name")
@click.option("--logo-url", help="Logo URL")
@click.pass_context
def set_config(ctx, currency_code, currency_symbol, currency_name, organization_name, logo_url):
    """Change configuration fields (administrators only).

    Examples:
        fundtrack config set --organization "Refugio Patitas"
        fundtrack config set --currency-code GTQ --currency-symbol Q --currency-name Quetzal
    """
    app = get_app(ctx)
    patch = ConfigPatch(
        currency_code=currency_code,
        currency_symbol=currency_symbol,
        currency_name=currency_name,
        organization_name=organization_name,
        logo_url=logo_url,
    )

    async def _set():
        await app.config.update_config(patch)
        click.echo("Configuration updated")

    run(ctx, _set())


def register_commands(cli):
    """Register configuration commands with main CLI."""
    cli.add_command(config_group, name="config")
