"""Dashboard summary command."""

import click

from fundtrack.cli.runtime import get_app, run
from fundtrack.utils.date_parser import parse_date


@click.command("summary")
@click.option("--month", help="Any date within the month to summarize (default: today)")
@click.option("--recent", default=10, show_default=True, type=int, help="Number of recent movements")
@click.pass_context
def summary(ctx, month, recent):
    """Show balances, this month's income and spending, and recent movements.

    Examples:
        fundtrack summary
        fundtrack summary --month "last month"
    """
    app = get_app(ctx)
    today = None
    if month:
        try:
            today = parse_date(month)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    async def _summary():
        dashboard = await app.summary.load_dashboard(today)
        fmt = app.format_currency

        click.echo(f"Total balance:      {await fmt(dashboard.total_balance)}")
        click.echo(f"Income this month:  {await fmt(dashboard.income_this_month)}")
        click.echo(f"Spending this month: {await fmt(dashboard.spending_this_month)}")
        click.echo(f"Pending purchases:  {dashboard.pending_purchases}")

        if dashboard.balances_by_account:
            click.echo("\nBalances by account:")
            for entry in dashboard.balances_by_account:
                click.echo(f"  {entry.account:25s} {await fmt(entry.balance):>14s}")

        for title, totals in (
            ("Income by category", dashboard.income_by_category),
            ("Spending by category", dashboard.spending_by_category),
        ):
            if totals:
                click.echo(f"\n{title}:")
                for entry in totals:
                    click.echo(f"  {entry.category:25s} {await fmt(entry.total):>14s}")

        movements = dashboard.recent_movements[:recent]
        if movements:
            click.echo("\nRecent movements:")
            for m in movements:
                sign = "+" if m.kind == "income" else "-"
                state = f" [{m.state.value}]" if m.state is not None else ""
                click.echo(f"  {m.date} {sign}{await fmt(m.amount):>14s} {m.description}{state}")

    run(ctx, _summary())


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
