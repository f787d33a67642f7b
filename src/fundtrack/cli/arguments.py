"""Shared argument parsing for CLI commands."""

from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click

from fundtrack.domain.payloads import Attachment
from fundtrack.utils.amount_parser import parse_amount
from fundtrack.utils.date_parser import parse_date


def amount_or_exit(ctx: click.Context, value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)


def attachment_or_none(path: Optional[str]) -> Optional[Attachment]:
    if path is None:
        return None
    return Attachment.from_path(Path(path))


def balance_or_exit(ctx: click.Context, value: Optional[str]) -> Optional[Decimal]:
    """Parse an account balance, which unlike an amount may be zero or negative."""
    if value is None:
        return None
    try:
        balance = Decimal(value.replace(",", "").strip())
    except InvalidOperation:
        click.echo(f"Error: Invalid balance: '{value}'", err=True)
        ctx.exit(1)
    if not balance.is_finite():
        click.echo(f"Error: Invalid balance: '{value}'", err=True)
        ctx.exit(1)
    return balance.quantize(Decimal("0.01"))
