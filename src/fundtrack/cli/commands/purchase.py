"""Purchase workflow commands."""

import click

from fundtrack.cli.arguments import amount_or_exit, attachment_or_none, date_or_exit
from fundtrack.cli.date_filters import period_option, resolve_cli_date_range
from fundtrack.cli.runtime import get_app, run
from fundtrack.domain.entities import Purchase, PurchaseState
from fundtrack.domain.payloads import NewPurchase, PurchaseEdit, PurchaseFilters


def _describe(purchase: Purchase, amount: str, verbose: bool = False) -> list[str]:
    category = purchase.category.name if purchase.category is not None else purchase.category_id
    lines = [
        f"#{purchase.id:<4d} {purchase.purchase_date} | {purchase.state.value:8s} | "
        f"{amount:>14s} | {purchase.description} ({category})"
    ]
    if verbose:
        if purchase.account is not None:
            lines.append(f"      Account: {purchase.account.name}")
        if purchase.submitter is not None:
            lines.append(f"      Submitted by: {purchase.submitter.full_name}")
        if purchase.reviewer is not None:
            lines.append(f"      Reviewed by: {purchase.reviewer.full_name} at {purchase.reviewed_at:%Y-%m-%d %H:%M}")
        if purchase.rejection_reason:
            lines.append(f"      Rejection reason: {purchase.rejection_reason}")
        if purchase.receipt_url:
            lines.append(f"      Receipt: {purchase.receipt_url}")
        if purchase.notes:
            lines.append(f"      Notes: {purchase.notes}")
    return lines


@click.group()
def purchase_group():
    """Submit and review purchases."""
    pass


@purchase_group.command("submit")
@click.option("--description", required=True, help="What was bought")
@click.option("--amount", required=True, help="Amount (e.g., 123.45)")
@click.option("--category", "category_id", required=True, type=int, help="Purchase category ID")
@click.option("--date", "purchase_date", default="today", show_default=True, help="Purchase date")
@click.option("--account", "account_id", type=int, help="Account ID (can be chosen by the approver)")
@click.option("--notes", help="Notes")
@click.option("--receipt", type=click.Path(exists=True, dir_okay=False), help="Receipt photo or PDF")
@click.pass_context
def submit_purchase(ctx, description, amount, category_id, purchase_date, account_id, notes, receipt):
    """Submit a purchase for approval.

    Examples:
        fundtrack purchase submit --description "Dog food" --amount 450 --category 1
        fundtrack purchase submit --description "Vaccines" --amount 1200.50 --category 2 --receipt invoice.jpg
    """
    app = get_app(ctx)
    form = NewPurchase(
        description=description,
        amount=amount_or_exit(ctx, amount),
        category_id=category_id,
        purchase_date=date_or_exit(ctx, purchase_date),
        account_id=account_id,
        notes=notes,
        receipt=attachment_or_none(receipt),
    )

    async def _submit():
        purchase = await app.purchases.submit_purchase(form)
        click.echo(f"Submitted purchase {purchase.id} ({await app.format_currency(purchase.amount)}), pending approval")
        if receipt and purchase.receipt_url is None:
            click.echo("Warning: receipt storage is unavailable; the purchase was saved without it")

    run(ctx, _submit())


@purchase_group.command("list")
@click.option("--state", type=click.Choice([s.value for s in PurchaseState]), help="Filter by state")
@click.option("--category", "category_id", type=int, help="Filter by category ID")
@click.option("--account", "account_id", type=int, help="Filter by account ID")
@click.option("--from", "start_date", help="Earliest purchase date (inclusive)")
@click.option("--to", "end_date", help="Latest purchase date (inclusive)")
@period_option
@click.option("--mine", is_flag=True, help="Only purchases I submitted")
@click.option("--verbose", "-v", is_flag=True, help="Show review details")
@click.pass_context
def list_purchases(ctx, state, category_id, account_id, start_date, end_date, period, mine, verbose):
    """List purchases, most recently submitted first."""
    app = get_app(ctx)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    filters = PurchaseFilters(
        state=PurchaseState(state) if state else None,
        category_id=category_id,
        account_id=account_id,
        start_date=start,
        end_date=end,
        mine_only=mine,
    )

    async def _list():
        purchases = await app.purchases.load_purchases(filters)
        if not purchases:
            click.echo("No purchases found.")
            return
        for purchase in purchases:
            for line in _describe(purchase, await app.format_currency(purchase.amount), verbose):
                click.echo(line)
        click.echo("-" * 60)
        click.echo(f"Pending: {len(app.purchases.pending_purchases())}")
        click.echo(f"Total approved: {await app.format_currency(app.purchases.total_approved_amount())}")
        mine_rejected = app.purchases.my_rejected_purchases()
        if mine_rejected:
            click.echo(f"You have {len(mine_rejected)} rejected purchase(s) to review.")

    run(ctx, _list())


@purchase_group.command("show")
@click.argument("purchase_id", type=int)
@click.pass_context
def show_purchase(ctx, purchase_id):
    """Show one purchase with its review details."""
    app = get_app(ctx)

    async def _show():
        purchase = await app.purchases.fetch_purchase(purchase_id)
        for line in _describe(purchase, await app.format_currency(purchase.amount), verbose=True):
            click.echo(line)

    run(ctx, _show())


@purchase_group.command("approve")
@click.argument("purchase_id", type=int)
@click.option("--account", "account_id", type=int, help="Account the purchase is paid from")
@click.pass_context
def approve_purchase(ctx, purchase_id, account_id):
    """Approve a pending purchase (administrators and treasurers)."""
    app = get_app(ctx)

    async def _approve():
        purchase = await app.purchases.approve_purchase(purchase_id, account_id)
        click.echo(f"Approved purchase {purchase.id}, paid from {purchase.account.name if purchase.account else purchase.account_id}")

    run(ctx, _approve())


@purchase_group.command("reject")
@click.argument("purchase_id", type=int)
@click.option("--reason", help="Why the purchase is rejected")
@click.pass_context
def reject_purchase(ctx, purchase_id, reason):
    """Reject a pending purchase (administrators and treasurers)."""
    app = get_app(ctx)

    async def _reject():
        purchase = await app.purchases.reject_purchase(purchase_id, reason)
        click.echo(f"Rejected purchase {purchase.id}: {purchase.rejection_reason}")

    run(ctx, _reject())


@purchase_group.command("edit")
@click.argument("purchase_id", type=int)
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--category", "category_id", type=int, help="New category ID")
@click.option("--date", "purchase_date", help="New purchase date")
@click.option("--notes", help="New notes")
@click.option("--receipt", type=click.Path(exists=True, dir_okay=False), help="Replacement receipt")
@click.pass_context
def edit_purchase(ctx, purchase_id, description, amount, category_id, purchase_date, notes, receipt):
    """Correct one of your rejected purchases."""
    app = get_app(ctx)
    edit = PurchaseEdit(
        description=description,
        amount=amount_or_exit(ctx, amount),
        category_id=category_id,
        purchase_date=date_or_exit(ctx, purchase_date),
        notes=notes,
        receipt=attachment_or_none(receipt),
    )

    async def _edit():
        purchase = await app.purchases.edit_rejected_purchase(purchase_id, edit)
        click.echo(f"Updated purchase {purchase.id}")

    run(ctx, _edit())


@purchase_group.command("resubmit")
@click.argument("purchase_id", type=int)
@click.pass_context
def resubmit_purchase(ctx, purchase_id):
    """Send one of your rejected purchases back for review."""
    app = get_app(ctx)

    async def _resubmit():
        purchase = await app.purchases.resubmit_purchase(purchase_id)
        click.echo(f"Purchase {purchase.id} is pending review again")

    run(ctx, _resubmit())


def register_commands(cli):
    """Register purchase commands with main CLI."""
    cli.add_command(purchase_group, name="purchase")
