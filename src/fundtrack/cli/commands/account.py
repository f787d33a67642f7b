"""Account management commands."""

import click

from fundtrack.cli.arguments import balance_or_exit
from fundtrack.cli.runtime import get_app, run
from fundtrack.domain.entities import AccountType
from fundtrack.domain.payloads import AccountPatch, NewAccount

_ACCOUNT_TYPES = click.Choice([t.value for t in AccountType])


@click.group()
def account_group():
    """Manage bank, cash and digital accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=_ACCOUNT_TYPES, default=AccountType.BANK.value, show_default=True)
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.option("--color", default="#3B82F6", show_default=True, help="Display color")
@click.option("--number", "account_number", help="Account number")
@click.option("--bank", help="Bank name")
@click.pass_context
def create_account(ctx, name, account_type, balance, color, account_number, bank):
    """Create a new account.

    Examples:
        fundtrack account create "Petty cash" --type cash --balance 500
        fundtrack account create "Main" --bank "Banorte" --number 0123
    """
    app = get_app(ctx)
    form = NewAccount(
        name=name,
        account_type=AccountType(account_type),
        balance=balance_or_exit(ctx, balance),
        color=color,
        account_number=account_number,
        bank=bank,
    )

    async def _create():
        account = await app.accounts.create_account(form)
        click.echo(f"Created account '{account.name}' (ID: {account.id})")

    run(ctx, _create())


@account_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive accounts")
@click.pass_context
def list_accounts(ctx, show_all):
    """List accounts and the total balance of active ones."""
    app = get_app(ctx)

    async def _list():
        accounts = await app.accounts.load_accounts()
        if not show_all:
            accounts = app.accounts.active_accounts()
        if not accounts:
            click.echo("No accounts found.")
            return

        click.echo("\nAccounts:")
        click.echo("-" * 60)
        for acc in accounts:
            status = "" if acc.active else " (inactive)"
            balance = await app.format_currency(acc.balance)
            click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:7s} | {balance:>14s}{status}")
        click.echo("-" * 60)
        click.echo(f"Total balance: {await app.format_currency(app.accounts.total_balance())}")

    run(ctx, _list())


@account_group.command("update")
@click.argument("account_id", type=int)
@click.option("--name", help="New name")
@click.option("--type", "account_type", type=_ACCOUNT_TYPES, help="New type")
@click.option("--balance", help="New balance")
@click.option("--color", help="New display color")
@click.option("--number", "account_number", help="New account number")
@click.option("--bank", help="New bank name")
@click.pass_context
def update_account(ctx, account_id, name, account_type, balance, color, account_number, bank):
    """Update fields of an account."""
    app = get_app(ctx)
    patch = AccountPatch(
        name=name,
        account_type=AccountType(account_type) if account_type else None,
        balance=balance_or_exit(ctx, balance),
        color=color,
        account_number=account_number,
        bank=bank,
    )

    async def _update():
        account = await app.accounts.update_account(account_id, patch)
        click.echo(f"Updated account '{account.name}' (ID: {account.id})")

    run(ctx, _update())


@account_group.command("activate")
@click.argument("account_id", type=int)
@click.pass_context
def activate_account(ctx, account_id):
    """Mark an account as active."""
    app = get_app(ctx)

    async def _activate():
        account = await app.accounts.activate_account(account_id)
        click.echo(f"Account '{account.name}' is active")

    run(ctx, _activate())


@account_group.command("deactivate")
@click.argument("account_id", type=int)
@click.pass_context
def deactivate_account(ctx, account_id):
    """Mark an account as inactive; its history is kept."""
    app = get_app(ctx)

    async def _deactivate():
        account = await app.accounts.deactivate_account(account_id)
        click.echo(f"Account '{account.name}' is inactive")

    run(ctx, _deactivate())


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
