"""Income ledger domain service."""

from decimal import Decimal
from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain import aggregates
from fundtrack.domain.attachments import VOUCHERS_BUCKET, upload_attachment
from fundtrack.domain.cache import ViewStateCache
from fundtrack.domain.entities import CategoryKind, IncomeRecord
from fundtrack.domain.errors import (
    AuthorizationError,
    ValidationError,
    account_not_found,
    category_not_found,
    not_signed_in,
)
from fundtrack.domain.identity import IdentityProvider
from fundtrack.domain.payloads import Attachment, IncomeFilters, IncomePatch, NewIncome
from fundtrack.storage.base import BlobStore

logger = structlog.get_logger(__name__)


class IncomeLedgerService:
    """Service for registering, editing and deleting income deposits.

    Role checks are the caller's job (see ``can_register_income``); the
    ledger only needs a signed-in identity to record the submitter.
    """

    def __init__(
        self,
        db: Database,
        cache: ViewStateCache[IncomeRecord],
        identity: IdentityProvider,
        blob_store: Optional[BlobStore] = None,
    ):
        self.db = db
        self.cache = cache
        self.identity = identity
        self.blob_store = blob_store

    async def load_income(self, filters: Optional[IncomeFilters] = None) -> list[IncomeRecord]:
        """Replace the cached collection with a fresh query result.

        Raises:
            StoreFailure: If the query fails (the cache is left as it was)
        """
        filters = filters or IncomeFilters()
        self.cache.loading = True
        try:
            records = await self.db.list_income(
                category_id=filters.category_id,
                account_id=filters.account_id,
                start_date=filters.start_date,
                end_date=filters.end_date,
            )
        finally:
            self.cache.loading = False

        self.cache.replace_all(records)
        return records

    def get_income(self, income_id: int) -> Optional[IncomeRecord]:
        """Get a cached income record by ID."""
        return self.cache.get(income_id)

    def total_income(self) -> Decimal:
        """Sum of all loaded income amounts."""
        return aggregates.total_income(self.cache.items)

    async def upload_voucher(self, voucher: Attachment) -> Optional[str]:
        return await upload_attachment(
            self.blob_store, VOUCHERS_BUCKET, self.identity.current_identity(), voucher
        )

    async def create_income(self, form: NewIncome) -> IncomeRecord:
        """Register an income deposit.

        Args:
            form: Income data; account and category are mandatory

        Returns:
            The stored income record

        Raises:
            AuthorizationError: If nobody is signed in
            ValidationError: If amount, account or category are invalid
            StorageFailure: If the voucher upload fails (nothing is stored)
            StoreFailure: If the store rejects the insert
        """
        user_id = self.identity.current_identity()
        if user_id is None:
            raise AuthorizationError(not_signed_in())

        description = (form.description or "").strip()
        if not description:
            raise ValidationError("Income description is required")
        self._validate_amount(form.amount)
        if form.deposit_date is None:
            raise ValidationError("Deposit date is required")
        if form.account_id is None:
            raise ValidationError("An account is required to register income")
        await self._require_account(form.account_id)
        await self._require_category(form.category_id)

        voucher_url = None
        if form.voucher is not None:
            voucher_url = await self.upload_voucher(form.voucher)

        record = await self.db.insert_income(
            description=description,
            amount=form.amount,
            category_id=form.category_id,
            account_id=form.account_id,
            deposit_date=form.deposit_date,
            submitted_by=user_id,
            voucher_url=voucher_url,
            notes=form.notes,
        )
        self.cache.prepend(record)
        logger.info("income_registered", income_id=record.id, user_id=user_id, amount=str(record.amount))
        return record

    async def update_income(self, income_id: int, patch: IncomePatch) -> IncomeRecord:
        """Apply a partial update to an income record.

        Raises:
            ValidationError: If a new amount, account or category is invalid
            NotFoundError: If the record does not exist
        """
        if patch.amount is not None:
            self._validate_amount(patch.amount)
        if patch.account_id is not None:
            await self._require_account(patch.account_id)
        if patch.category_id is not None:
            await self._require_category(patch.category_id)

        record = await self.db.update_income(income_id, patch)
        self.cache.replace(record)
        logger.info("income_updated", income_id=income_id)
        return record

    async def delete_income(self, income_id: int) -> None:
        """Permanently delete an income record.

        Raises:
            NotFoundError: If the record does not exist
        """
        await self.db.delete_income(income_id)
        self.cache.remove(income_id)
        logger.info("income_deleted", income_id=income_id)

    async def _require_account(self, account_id: int) -> None:
        if await self.db.get_account(account_id) is None:
            raise ValidationError(account_not_found(account_id))

    async def _require_category(self, category_id: Optional[int]) -> None:
        if category_id is None:
            raise ValidationError("Income category is required")
        if await self.db.get_category(CategoryKind.INCOME, category_id) is None:
            raise ValidationError(category_not_found(CategoryKind.INCOME.value, category_id))

    @staticmethod
    def _validate_amount(amount: Optional[Decimal]) -> None:
        if amount is None:
            raise ValidationError("Income amount is required")
        if Decimal(amount) <= 0:
            raise ValidationError("Income amount must be greater than zero")
