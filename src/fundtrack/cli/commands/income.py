"""Income ledger commands."""

import click

from fundtrack.cli.arguments import amount_or_exit, attachment_or_none, date_or_exit
from fundtrack.cli.date_filters import period_option, resolve_cli_date_range
from fundtrack.cli.runtime import AppContext, get_app, run
from fundtrack.domain.errors import AuthorizationError
from fundtrack.domain.identity import can_register_income
from fundtrack.domain.payloads import IncomeFilters, IncomePatch, NewIncome


async def _require_ledger_writer(app: AppContext) -> None:
    if not can_register_income(await app.users.current_user()):
        raise AuthorizationError("Only administrators and treasurers can manage income")


@click.group()
def income_group():
    """Register and manage income deposits."""
    pass


@income_group.command("add")
@click.option("--description", required=True, help="Deposit description")
@click.option("--amount", required=True, help="Amount (e.g., 1500.00)")
@click.option("--category", "category_id", required=True, type=int, help="Income category ID")
@click.option("--account", "account_id", required=True, type=int, help="Account receiving the deposit")
@click.option("--date", "deposit_date", default="today", show_default=True, help="Deposit date")
@click.option("--notes", help="Notes")
@click.option("--voucher", type=click.Path(exists=True, dir_okay=False), help="Voucher photo or PDF")
@click.pass_context
def add_income(ctx, description, amount, category_id, account_id, deposit_date, notes, voucher):
    """Register an income deposit.

    Examples:
        fundtrack income add --description "Donation" --amount 2000 --category 1 --account 1
    """
    app = get_app(ctx)
    form = NewIncome(
        description=description,
        amount=amount_or_exit(ctx, amount),
        category_id=category_id,
        account_id=account_id,
        deposit_date=date_or_exit(ctx, deposit_date),
        notes=notes,
        voucher=attachment_or_none(voucher),
    )

    async def _add():
        await _require_ledger_writer(app)
        record = await app.income.create_income(form)
        click.echo(f"Registered income {record.id} ({await app.format_currency(record.amount)})")
        if voucher and record.voucher_url is None:
            click.echo("Warning: voucher storage is unavailable; the income was saved without it")

    run(ctx, _add())


@income_group.command("list")
@click.option("--category", "category_id", type=int, help="Filter by category ID")
@click.option("--account", "account_id", type=int, help="Filter by account ID")
@click.option("--from", "start_date", help="Earliest deposit date (inclusive)")
@click.option("--to", "end_date", help="Latest deposit date (inclusive)")
@period_option
@click.pass_context
def list_income(ctx, category_id, account_id, start_date, end_date, period):
    """List income deposits, latest deposit date first."""
    app = get_app(ctx)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    filters = IncomeFilters(category_id=category_id, account_id=account_id, start_date=start, end_date=end)

    async def _list():
        records = await app.income.load_income(filters)
        if not records:
            click.echo("No income found.")
            return
        for record in records:
            category = record.category.name if record.category is not None else record.category_id
            account = record.account.name if record.account is not None else record.account_id
            amount = await app.format_currency(record.amount)
            click.echo(f"#{record.id:<4d} {record.deposit_date} | {amount:>14s} | {record.description} ({category} -> {account})")
        click.echo("-" * 60)
        click.echo(f"Total income: {await app.format_currency(app.income.total_income())}")

    run(ctx, _list())


@income_group.command("update")
@click.argument("income_id", type=int)
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--category", "category_id", type=int, help="New category ID")
@click.option("--account", "account_id", type=int, help="New account ID")
@click.option("--date", "deposit_date", help="New deposit date")
@click.option("--notes", help="New notes")
@click.pass_context
def update_income(ctx, income_id, description, amount, category_id, account_id, deposit_date, notes):
    """Update fields of an income record."""
    app = get_app(ctx)
    patch = IncomePatch(
        description=description,
        amount=amount_or_exit(ctx, amount),
        category_id=category_id,
        account_id=account_id,
        deposit_date=date_or_exit(ctx, deposit_date),
        notes=notes,
    )

    async def _update():
        await _require_ledger_writer(app)
        record = await app.income.update_income(income_id, patch)
        click.echo(f"Updated income {record.id}")

    run(ctx, _update())


@income_group.command("delete")
@click.argument("income_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_income(ctx, income_id, yes):
    """Permanently delete an income record."""
    app = get_app(ctx)
    if not yes and not click.confirm(f"Are you sure you want to delete income {income_id}?"):
        click.echo("Deletion cancelled.")
        return

    async def _delete():
        await _require_ledger_writer(app)
        await app.income.delete_income(income_id)
        click.echo(f"Deleted income {income_id}")

    run(ctx, _delete())


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
