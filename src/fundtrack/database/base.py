"""Abstract database interface.

This is the contract the domain services need from the relational store.
Every write returns the authoritative row (with generated identifier,
timestamps and joined rows) so callers can splice it into their caches.
Implementations raise ``StoreFailure`` when the store rejects an operation
and ``NotFoundError`` when an update or delete targets a missing row.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from fundtrack.domain.entities import (
    Account,
    Category,
    CategoryKind,
    IncomeRecord,
    Invitation,
    Purchase,
    PurchaseState,
    Role,
    SystemConfig,
    User,
)
from fundtrack.domain.payloads import (
    AccountPatch,
    CategoryPatch,
    ConfigPatch,
    IncomePatch,
    NewAccount,
    NewCategory,
    NewUser,
    PurchaseDetails,
    PurchaseReview,
    UserPatch,
)


class Database(ABC):
    """Abstract database interface for fundtrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and seed the configuration row."""
        pass

    # Account operations
    @abstractmethod
    async def create_account(self, account: NewAccount) -> Account:
        """Create a new account."""
        pass

    @abstractmethod
    async def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    async def list_accounts(self) -> list[Account]:
        """List all accounts ordered by name."""
        pass

    @abstractmethod
    async def update_account(self, account_id: int, patch: AccountPatch) -> Account:
        """Apply a partial update to an account."""
        pass

    # Category operations
    @abstractmethod
    async def create_category(self, kind: CategoryKind, category: NewCategory) -> Category:
        """Create a category in the given namespace."""
        pass

    @abstractmethod
    async def get_category(self, kind: CategoryKind, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    async def list_categories(self, kind: CategoryKind) -> list[Category]:
        """List categories of one kind ordered by name."""
        pass

    @abstractmethod
    async def update_category(
        self, kind: CategoryKind, category_id: int, patch: CategoryPatch
    ) -> Category:
        """Apply a partial update to a category."""
        pass

    @abstractmethod
    async def set_category_active(
        self, kind: CategoryKind, category_id: int, active: bool, expected: bool
    ) -> Category:
        """Set the active flag if it still equals ``expected``.

        Raises:
            ConflictError: If the stored flag no longer equals ``expected``
        """
        pass

    # User operations
    @abstractmethod
    async def create_user(self, user: NewUser, user_id: Optional[int] = None) -> User:
        """Create a user profile, optionally with the identity provider's ID."""
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List users ordered by first name."""
        pass

    @abstractmethod
    async def update_user(self, user_id: int, patch: UserPatch) -> User:
        """Apply a partial update to a user."""
        pass

    # Invitation operations
    @abstractmethod
    async def create_invitation(
        self, email: str, role: Role, token: str, invited_by: int, expires_at: datetime
    ) -> Invitation:
        """Create an invitation."""
        pass

    @abstractmethod
    async def get_invitation_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token."""
        pass

    @abstractmethod
    async def list_invitations(self) -> list[Invitation]:
        """List invitations, newest first."""
        pass

    @abstractmethod
    async def mark_invitation_used(self, invitation_id: int) -> Invitation:
        """Flag an invitation as used."""
        pass

    @abstractmethod
    async def delete_invitation(self, invitation_id: int) -> None:
        """Delete an invitation."""
        pass

    # Purchase operations
    @abstractmethod
    async def insert_purchase(
        self,
        details: PurchaseDetails,
        account_id: Optional[int],
        submitted_by: int,
        state: PurchaseState,
    ) -> Purchase:
        """Insert a purchase row."""
        pass

    @abstractmethod
    async def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        """Get purchase by ID."""
        pass

    @abstractmethod
    async def list_purchases(
        self,
        state: Optional[PurchaseState] = None,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        submitted_by: Optional[int] = None,
    ) -> list[Purchase]:
        """List purchases with optional filters.

        Args:
            state: Optional workflow state filter
            category_id: Optional category ID filter
            account_id: Optional account ID filter
            start_date: Optional inclusive lower bound on purchase date
            end_date: Optional inclusive upper bound on purchase date
            submitted_by: Optional submitter filter

        Returns:
            Purchases ordered by creation time, most recent first
        """
        pass

    @abstractmethod
    async def update_purchase_review(self, purchase_id: int, review: PurchaseReview) -> Purchase:
        """Write state and review fields of a purchase."""
        pass

    @abstractmethod
    async def update_purchase_details(self, purchase_id: int, details: PurchaseDetails) -> Purchase:
        """Write the editable content fields of a purchase."""
        pass

    # Income operations
    @abstractmethod
    async def insert_income(
        self,
        description: str,
        amount: Decimal,
        category_id: int,
        account_id: int,
        deposit_date: date,
        submitted_by: int,
        voucher_url: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> IncomeRecord:
        """Insert an income record."""
        pass

    @abstractmethod
    async def get_income(self, income_id: int) -> Optional[IncomeRecord]:
        """Get income record by ID."""
        pass

    @abstractmethod
    async def list_income(
        self,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[IncomeRecord]:
        """List income records, latest deposit date first."""
        pass

    @abstractmethod
    async def update_income(self, income_id: int, patch: IncomePatch) -> IncomeRecord:
        """Apply a partial update to an income record."""
        pass

    @abstractmethod
    async def delete_income(self, income_id: int) -> None:
        """Delete an income record."""
        pass

    # Configuration operations
    @abstractmethod
    async def get_config(self) -> Optional[SystemConfig]:
        """Get the system configuration row."""
        pass

    @abstractmethod
    async def update_config(self, patch: ConfigPatch, updated_by: Optional[int]) -> SystemConfig:
        """Apply a partial update to the system configuration."""
        pass
