"""Account domain service."""

from decimal import Decimal
from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain import aggregates
from fundtrack.domain.cache import ViewStateCache
from fundtrack.domain.entities import Account
from fundtrack.domain.errors import ValidationError
from fundtrack.domain.payloads import AccountPatch, NewAccount

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, cache: ViewStateCache[Account]):
        """Initialize account service.

        Args:
            db: Database instance
            cache: Accounts view-state cache
        """
        self.db = db
        self.cache = cache

    async def load_accounts(self) -> list[Account]:
        """Replace the cached accounts with all stored accounts, ordered by name."""
        self.cache.loading = True
        try:
            accounts = await self.db.list_accounts()
        finally:
            self.cache.loading = False
        self.cache.replace_all(accounts)
        return accounts

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get a cached account by ID."""
        return self.cache.get(account_id)

    async def create_account(self, form: NewAccount) -> Account:
        """Create a new account.

        Raises:
            ValidationError: If the name is blank
        """
        if not form.name or not form.name.strip():
            raise ValidationError("Account name is required")

        account = await self.db.create_account(form)
        self.cache.append(account)
        logger.info("account_created", account_id=account.id, name=account.name)
        return account

    async def update_account(self, account_id: int, patch: AccountPatch) -> Account:
        """Apply a partial update to an account.

        Raises:
            ValidationError: If the new name is blank
            NotFoundError: If the account does not exist
        """
        if patch.name is not None and not patch.name.strip():
            raise ValidationError("Account name cannot be empty")

        account = await self.db.update_account(account_id, patch)
        self.cache.replace(account)
        return account

    async def activate_account(self, account_id: int) -> Account:
        return await self.update_account(account_id, AccountPatch(active=True))

    async def deactivate_account(self, account_id: int) -> Account:
        """Soft-delete an account by clearing its active flag."""
        return await self.update_account(account_id, AccountPatch(active=False))

    def active_accounts(self) -> list[Account]:
        return aggregates.active_accounts(self.cache.items)

    def total_balance(self) -> Decimal:
        """Sum of balances of active accounts."""
        return aggregates.total_balance(self.cache.items)
