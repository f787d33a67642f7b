"""Per-invocation application context for CLI commands."""

import asyncio
from typing import Awaitable, Optional, TypeVar

import click

from fundtrack.database.base import Database
from fundtrack.domain.account import AccountService
from fundtrack.domain.cache import ViewState
from fundtrack.domain.category import CategoryService
from fundtrack.domain.config import ConfigService
from fundtrack.domain.errors import DomainError
from fundtrack.domain.identity import SessionIdentityProvider
from fundtrack.domain.income import IncomeLedgerService
from fundtrack.domain.purchase import PurchaseWorkflowService
from fundtrack.domain.summary import SummaryService
from fundtrack.domain.user import UserService
from fundtrack.storage.base import BlobStore
from fundtrack.cli.error_handling import handle_domain_error

T = TypeVar("T")


class AppContext:
    """Services wired to one database, blob store and signed-in identity."""

    def __init__(self, db: Database, blob_store: Optional[BlobStore], user_id: Optional[int]):
        self.db = db
        self.blob_store = blob_store
        self.view_state = ViewState()
        self.identity = SessionIdentityProvider(user_id)

        self.accounts = AccountService(db, self.view_state.accounts)
        self.categories = CategoryService(db, self.view_state)
        self.users = UserService(db, self.view_state, self.identity)
        self.config = ConfigService(db, self.view_state, self.identity)
        self.purchases = PurchaseWorkflowService(db, self.view_state.purchases, self.identity, blob_store)
        self.income = IncomeLedgerService(db, self.view_state.income, self.identity, blob_store)
        self.summary = SummaryService(self.accounts, self.purchases, self.income)

    async def format_currency(self, amount) -> str:
        if self.config.config is None:
            await self.config.load_config()
        return self.config.format_currency(amount)


def get_app(ctx: click.Context) -> AppContext:
    return ctx.obj["app"]


def run(ctx: click.Context, coro: Awaitable[T]) -> T:
    """Run a coroutine for a command, reporting domain errors the CLI way."""
    try:
        return asyncio.run(coro)
    except DomainError as e:
        handle_domain_error(ctx, e)
