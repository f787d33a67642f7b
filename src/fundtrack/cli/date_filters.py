"""Date range options shared by the purchase and income listings.

Both listings filter inclusively on a single date column (``purchase_date``
or ``deposit_date``), so a range is either a named period or an explicit
``--from``/``--to`` pair, never both.
"""

from datetime import date

import click

from fundtrack.utils.date_parser import PERIODS, get_date_range, parse_date


def period_option(func):
    """Add a --period option naming a range relative to today."""
    return click.option(
        "--period",
        type=click.Choice(PERIODS),
        help="Named date range (cannot be combined with --from/--to)",
    )(func)


def _parse_bound(ctx: click.Context, value: str | None, label: str) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve the inclusive (start, end) range for a listing.

    Exits with status 1 when a period is mixed with explicit dates, when a
    date does not parse, or when the start falls after the end.
    """
    if period and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --from or --to.", err=True)
        ctx.exit(1)

    if period:
        return get_date_range(period)

    start = _parse_bound(ctx, start_date, "start")
    end = _parse_bound(ctx, end_date, "end")
    if start and end and start > end:
        click.echo(f"Error: --from ({start}) is after --to ({end}).", err=True)
        ctx.exit(1)
    return start, end
