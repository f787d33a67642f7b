"""Purchase approval workflow.

A purchase is created ``pending``. Approvers (administrators and treasurers)
move it to ``approved`` (choosing the paying account) or ``rejected`` (with
a reason). The original submitter may edit a rejected purchase and send it
back to ``pending``. Nothing else is allowed.

Every successful store write is spliced into the purchases cache; a failed
write leaves the cache untouched.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain import aggregates
from fundtrack.domain.attachments import RECEIPTS_BUCKET, upload_attachment
from fundtrack.domain.cache import ViewStateCache
from fundtrack.domain.entities import CategoryKind, Purchase, PurchaseState, User
from fundtrack.domain.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    invalid_transition,
    not_signed_in,
    purchase_not_found,
)
from fundtrack.domain.identity import IdentityProvider, can_approve_purchases
from fundtrack.domain.payloads import (
    Attachment,
    NewPurchase,
    PurchaseDetails,
    PurchaseEdit,
    PurchaseFilters,
    PurchaseReview,
)
from fundtrack.storage.base import BlobStore

logger = structlog.get_logger(__name__)

# (from, to) -> operation. Editing a rejected purchase keeps it rejected.
ALLOWED_TRANSITIONS = {
    (PurchaseState.PENDING, PurchaseState.APPROVED): "approve",
    (PurchaseState.PENDING, PurchaseState.REJECTED): "reject",
    (PurchaseState.REJECTED, PurchaseState.PENDING): "resubmit",
    (PurchaseState.REJECTED, PurchaseState.REJECTED): "edit",
}


def check_transition(purchase: Purchase, target: PurchaseState, operation: str) -> None:
    """Raise InvalidTransitionError unless ``operation`` may move ``purchase`` to ``target``."""
    if ALLOWED_TRANSITIONS.get((purchase.state, target)) != operation:
        raise InvalidTransitionError(
            invalid_transition(purchase.id, purchase.state.value, target.value)
        )


class PurchaseWorkflowService:
    """Service owning the purchase state machine and its cache."""

    def __init__(
        self,
        db: Database,
        cache: ViewStateCache[Purchase],
        identity: IdentityProvider,
        blob_store: Optional[BlobStore] = None,
    ):
        """Initialize purchase workflow service.

        Args:
            db: Database instance
            cache: Purchases view-state cache
            identity: Provider of the acting user's identity
            blob_store: Optional blob store for receipt uploads
        """
        self.db = db
        self.cache = cache
        self.identity = identity
        self.blob_store = blob_store

    # Loading and lookup

    async def load_purchases(self, filters: Optional[PurchaseFilters] = None) -> list[Purchase]:
        """Replace the cached collection with a fresh query result.

        Purchases are ordered by creation time, most recent first.
        ``mine_only`` is ignored when nobody is signed in.

        Raises:
            StoreFailure: If the query fails (the cache is left as it was)
        """
        filters = filters or PurchaseFilters()
        submitted_by = None
        if filters.mine_only:
            submitted_by = self.identity.current_identity()

        self.cache.loading = True
        try:
            purchases = await self.db.list_purchases(
                state=filters.state,
                category_id=filters.category_id,
                account_id=filters.account_id,
                start_date=filters.start_date,
                end_date=filters.end_date,
                submitted_by=submitted_by,
            )
        finally:
            self.cache.loading = False

        self.cache.replace_all(purchases)
        return purchases

    def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        """Get a cached purchase by ID."""
        return self.cache.get(purchase_id)

    async def fetch_purchase(self, purchase_id: int) -> Purchase:
        """Read a purchase from the store, refreshing its cached copy.

        Raises:
            NotFoundError: If the purchase does not exist
        """
        purchase = await self.db.get_purchase(purchase_id)
        if purchase is None:
            raise NotFoundError(purchase_not_found(purchase_id))
        self.cache.replace(purchase)
        return purchase

    async def upload_receipt(self, receipt: Attachment) -> Optional[str]:
        """Upload a receipt for the current user and return its URL.

        Returns None when storage is misconfigured.
        """
        return await upload_attachment(
            self.blob_store, RECEIPTS_BUCKET, self.identity.current_identity(), receipt
        )

    # Transitions

    async def submit_purchase(self, form: NewPurchase) -> Purchase:
        """Create a pending purchase for the current user.

        Args:
            form: Purchase data; the account may be left for the approver

        Returns:
            The stored purchase

        Raises:
            AuthorizationError: If nobody is signed in
            ValidationError: If amount, category, date or account are invalid
            StorageFailure: If the receipt upload fails (nothing is stored)
            StoreFailure: If the store rejects the insert
        """
        user = await self._require_user()
        description = (form.description or "").strip()
        if not description:
            raise ValidationError("Purchase description is required")
        self._validate_amount(form.amount)
        if form.purchase_date is None:
            raise ValidationError("Purchase date is required")
        await self._require_category(form.category_id)
        if form.account_id is not None:
            await self._require_account(form.account_id)

        receipt_url = None
        if form.receipt is not None:
            receipt_url = await self.upload_receipt(form.receipt)

        purchase = await self.db.insert_purchase(
            PurchaseDetails(
                description=description,
                amount=form.amount,
                category_id=form.category_id,
                purchase_date=form.purchase_date,
                receipt_url=receipt_url,
                notes=form.notes,
            ),
            account_id=form.account_id,
            submitted_by=user.id,
            state=PurchaseState.PENDING,
        )
        self.cache.prepend(purchase)
        logger.info("purchase_submitted", purchase_id=purchase.id, user_id=user.id, amount=str(purchase.amount))
        return purchase

    async def approve_purchase(self, purchase_id: int, account_id: Optional[int]) -> Purchase:
        """Approve a pending purchase, charging it to ``account_id``.

        Raises:
            ValidationError: If no account is given or it does not exist
            AuthorizationError: If the caller may not approve purchases
            InvalidTransitionError: If the purchase is not pending
            NotFoundError: If the purchase does not exist
        """
        if not account_id:
            raise ValidationError("An account must be selected to approve the purchase")

        reviewer = await self._require_approver()
        purchase = await self._current(purchase_id)
        check_transition(purchase, PurchaseState.APPROVED, "approve")
        await self._require_account(account_id)

        updated = await self.db.update_purchase_review(
            purchase_id,
            PurchaseReview(
                state=PurchaseState.APPROVED,
                reviewed_by=reviewer.id,
                reviewed_at=datetime.now(UTC),
                rejection_reason=None,
                account_id=account_id,
            ),
        )
        self._splice(updated)
        logger.info("purchase_approved", purchase_id=purchase_id, reviewer_id=reviewer.id, account_id=account_id)
        return updated

    async def reject_purchase(self, purchase_id: int, reason: Optional[str]) -> Purchase:
        """Reject a pending purchase with a reason.

        Raises:
            ValidationError: If the reason is missing or blank
            AuthorizationError: If the caller may not review purchases
            InvalidTransitionError: If the purchase is not pending
            NotFoundError: If the purchase does not exist
        """
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required to reject the purchase")

        reviewer = await self._require_approver()
        purchase = await self._current(purchase_id)
        check_transition(purchase, PurchaseState.REJECTED, "reject")

        updated = await self.db.update_purchase_review(
            purchase_id,
            PurchaseReview(
                state=PurchaseState.REJECTED,
                reviewed_by=reviewer.id,
                reviewed_at=datetime.now(UTC),
                rejection_reason=reason,
            ),
        )
        self._splice(updated)
        logger.info("purchase_rejected", purchase_id=purchase_id, reviewer_id=reviewer.id)
        return updated

    async def edit_rejected_purchase(self, purchase_id: int, edit: PurchaseEdit) -> Purchase:
        """Let the submitter correct a rejected purchase.

        Fields left as None keep their previous value. A new receipt replaces
        the old one unless storage is degraded, in which case the old URL is
        kept. The purchase stays rejected.

        Raises:
            InvalidTransitionError: If the purchase is not rejected
            AuthorizationError: If the caller did not submit the purchase
        """
        user = await self._require_user()
        purchase = await self._current(purchase_id)
        check_transition(purchase, PurchaseState.REJECTED, "edit")
        self._require_submitter(purchase, user, "edit")

        if edit.amount is not None:
            self._validate_amount(edit.amount)
        if edit.category_id is not None and edit.category_id != purchase.category_id:
            await self._require_category(edit.category_id)

        receipt_url = purchase.receipt_url
        if edit.receipt is not None:
            new_url = await self.upload_receipt(edit.receipt)
            if new_url:
                receipt_url = new_url

        updated = await self.db.update_purchase_details(
            purchase_id,
            PurchaseDetails(
                description=(edit.description or "").strip() or purchase.description,
                amount=edit.amount if edit.amount is not None else purchase.amount,
                category_id=edit.category_id if edit.category_id is not None else purchase.category_id,
                purchase_date=edit.purchase_date or purchase.purchase_date,
                receipt_url=receipt_url,
                notes=edit.notes if edit.notes is not None else purchase.notes,
            ),
        )
        self._splice(updated)
        logger.info("purchase_edited", purchase_id=purchase_id, user_id=user.id)
        return updated

    async def resubmit_purchase(self, purchase_id: int) -> Purchase:
        """Send a rejected purchase back for review.

        Clears reviewer, review timestamp and rejection reason.

        Raises:
            InvalidTransitionError: If the purchase is not rejected
            AuthorizationError: If the caller did not submit the purchase
        """
        user = await self._require_user()
        purchase = await self._current(purchase_id)
        check_transition(purchase, PurchaseState.PENDING, "resubmit")
        self._require_submitter(purchase, user, "resubmit")

        updated = await self.db.update_purchase_review(
            purchase_id,
            PurchaseReview(
                state=PurchaseState.PENDING,
                reviewed_by=None,
                reviewed_at=None,
                rejection_reason=None,
            ),
        )
        self._splice(updated)
        logger.info("purchase_resubmitted", purchase_id=purchase_id, user_id=user.id)
        return updated

    # Derived views

    def pending_purchases(self) -> list[Purchase]:
        return aggregates.pending_purchases(self.cache.items)

    def approved_purchases(self) -> list[Purchase]:
        return aggregates.approved_purchases(self.cache.items)

    def rejected_purchases(self) -> list[Purchase]:
        return aggregates.rejected_purchases(self.cache.items)

    def my_rejected_purchases(self) -> list[Purchase]:
        return aggregates.my_rejected_purchases(self.cache.items, self.identity.current_identity())

    def total_approved_amount(self) -> Decimal:
        return aggregates.total_approved_amount(self.cache.items)

    # Helpers

    async def _require_user(self) -> User:
        user_id = self.identity.current_identity()
        if user_id is None:
            raise AuthorizationError(not_signed_in())
        user = await self.db.get_user(user_id)
        if user is None or not user.active:
            raise AuthorizationError(f"User {user_id} is not an active user")
        return user

    async def _require_approver(self) -> User:
        user = await self._require_user()
        if not can_approve_purchases(user):
            raise AuthorizationError("Only administrators and treasurers can review purchases")
        return user

    @staticmethod
    def _require_submitter(purchase: Purchase, user: User, action: str) -> None:
        if purchase.submitted_by != user.id:
            raise AuthorizationError(f"You can only {action} your own purchases")

    async def _current(self, purchase_id: int) -> Purchase:
        """Current purchase state, from the cache or else the store."""
        purchase = self.cache.get(purchase_id)
        if purchase is None:
            purchase = await self.db.get_purchase(purchase_id)
        if purchase is None:
            raise NotFoundError(purchase_not_found(purchase_id))
        return purchase

    async def _require_category(self, category_id: Optional[int]) -> None:
        if category_id is None:
            raise ValidationError("Purchase category is required")
        if await self.db.get_category(CategoryKind.PURCHASE, category_id) is None:
            raise ValidationError(category_not_found(CategoryKind.PURCHASE.value, category_id))

    async def _require_account(self, account_id: int) -> None:
        if await self.db.get_account(account_id) is None:
            raise ValidationError(account_not_found(account_id))

    @staticmethod
    def _validate_amount(amount: Optional[Decimal]) -> None:
        if amount is None:
            raise ValidationError("Purchase amount is required")
        if Decimal(amount) <= 0:
            raise ValidationError("Purchase amount must be greater than zero")

    def _splice(self, purchase: Purchase) -> None:
        self.cache.replace(purchase)
