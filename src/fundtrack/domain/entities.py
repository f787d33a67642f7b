"""Domain model entities for fundtrack.

These are pure data classes representing business concepts, independent of
database schema. Rows coming back from the store are always converted into
these frozen entities before they reach services or caches.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User roles; the role drives authorization, not data shape."""

    ADMINISTRATOR = "administrator"
    TREASURER = "treasurer"
    PURCHASE_MANAGER = "purchase_manager"


class PurchaseState(str, Enum):
    """Approval workflow states of a purchase."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AccountType(str, Enum):
    """Kind of holding an account represents."""

    BANK = "bank"
    CASH = "cash"
    DIGITAL = "digital"


class CategoryKind(str, Enum):
    """Independent category namespaces."""

    PURCHASE = "purchase"
    INCOME = "income"


@dataclass(frozen=True)
class User:
    """User profile domain entity."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: Role
    active: bool
    created_at: datetime
    updated_at: datetime
    avatar_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Invitation:
    """Invitation for a new user to join with a given role."""

    id: int
    email: str
    role: Role
    token: str
    invited_by: int
    used: bool
    expires_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank, cash or digital account domain entity.

    The balance is a stored value maintained outside this application; it is
    never derived from purchases or income.
    """

    id: int
    name: str
    account_type: AccountType
    balance: Decimal
    active: bool
    color: str
    created_at: datetime
    updated_at: datetime
    account_number: Optional[str] = None
    bank: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Purchase or income category domain entity."""

    id: int
    kind: CategoryKind
    name: str
    icon: str
    color: str
    active: bool
    created_at: datetime
    description: Optional[str] = None


@dataclass(frozen=True)
class Purchase:
    """Purchase domain entity, a spend request subject to approval."""

    id: int
    description: str
    amount: Decimal
    category_id: int
    account_id: Optional[int]
    purchase_date: date
    state: PurchaseState
    submitted_by: int
    created_at: datetime
    updated_at: datetime
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    # Joined rows
    category: Optional[Category] = None
    account: Optional[Account] = None
    submitter: Optional[User] = None
    reviewer: Optional[User] = None


@dataclass(frozen=True)
class IncomeRecord:
    """Income domain entity, a deposit into an account."""

    id: int
    description: str
    amount: Decimal
    category_id: int
    account_id: int
    deposit_date: date
    submitted_by: int
    created_at: datetime
    updated_at: datetime
    voucher_url: Optional[str] = None
    notes: Optional[str] = None
    # Joined rows
    category: Optional[Category] = None
    account: Optional[Account] = None
    submitter: Optional[User] = None


@dataclass(frozen=True)
class SystemConfig:
    """Organization-wide settings, including the single display currency."""

    id: int
    currency_code: str
    currency_symbol: str
    currency_name: str
    organization_name: str
    updated_at: datetime
    logo_url: Optional[str] = None
    updated_by: Optional[int] = None
