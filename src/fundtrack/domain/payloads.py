"""Typed input, patch and filter structures.

Partial updates are expressed with explicit per-entity patch classes. A
field left as ``None`` means "leave unchanged", so the store layer only ever
receives declared, typed fields.
"""

import mimetypes
from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from fundtrack.domain.entities import AccountType, PurchaseState, Role


@dataclass(frozen=True)
class Attachment:
    """An uploaded file (receipt photo, voucher PDF) held in memory."""

    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        suffix = Path(self.filename).suffix
        return suffix[1:].lower() if suffix else "bin"

    @classmethod
    def from_path(cls, path: str | Path) -> "Attachment":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, content=path.read_bytes(), content_type=content_type)


@dataclass(frozen=True)
class NewPurchase:
    """Form data for submitting a purchase."""

    description: str
    amount: Decimal
    category_id: int
    purchase_date: date
    account_id: Optional[int] = None
    notes: Optional[str] = None
    receipt: Optional[Attachment] = None


@dataclass(frozen=True)
class PurchaseEdit:
    """Changes a submitter may make to a rejected purchase."""

    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category_id: Optional[int] = None
    purchase_date: Optional[date] = None
    notes: Optional[str] = None
    receipt: Optional[Attachment] = None


@dataclass(frozen=True)
class PurchaseDetails:
    """Complete set of editable purchase content, as written to the store."""

    description: str
    amount: Decimal
    category_id: int
    purchase_date: date
    receipt_url: Optional[str]
    notes: Optional[str]


@dataclass(frozen=True)
class PurchaseReview:
    """Review fields written on every state transition.

    All fields are written as given, so ``None`` clears them. ``account_id``
    is the one exception: ``None`` leaves the stored account untouched.
    """

    state: PurchaseState
    reviewed_by: Optional[int]
    reviewed_at: Optional[datetime]
    rejection_reason: Optional[str]
    account_id: Optional[int] = None


@dataclass(frozen=True)
class NewIncome:
    """Form data for registering an income deposit."""

    description: str
    amount: Decimal
    category_id: int
    account_id: int
    deposit_date: date
    notes: Optional[str] = None
    voucher: Optional[Attachment] = None


@dataclass(frozen=True)
class IncomePatch:
    """Partial update of an income record."""

    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None
    deposit_date: Optional[date] = None
    notes: Optional[str] = None
    voucher_url: Optional[str] = None


@dataclass(frozen=True)
class NewAccount:
    """Form data for creating an account."""

    name: str
    account_type: AccountType
    balance: Decimal = Decimal("0")
    color: str = "#3B82F6"
    account_number: Optional[str] = None
    bank: Optional[str] = None


@dataclass(frozen=True)
class AccountPatch:
    """Partial update of an account."""

    name: Optional[str] = None
    account_type: Optional[AccountType] = None
    balance: Optional[Decimal] = None
    color: Optional[str] = None
    account_number: Optional[str] = None
    bank: Optional[str] = None
    active: Optional[bool] = None


@dataclass(frozen=True)
class NewCategory:
    """Form data for creating a category."""

    name: str
    icon: str = "pi pi-tag"
    color: str = "#6B7280"
    description: Optional[str] = None


@dataclass(frozen=True)
class CategoryPatch:
    """Partial update of a category."""

    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class NewUser:
    """Profile data for a newly authenticated identity."""

    email: str
    first_name: str
    last_name: str
    role: Role


@dataclass(frozen=True)
class UserPatch:
    """Partial update of a user profile."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[Role] = None
    active: Optional[bool] = None
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class ConfigPatch:
    """Partial update of the system configuration."""

    currency_code: Optional[str] = None
    currency_symbol: Optional[str] = None
    currency_name: Optional[str] = None
    organization_name: Optional[str] = None
    logo_url: Optional[str] = None


@dataclass(frozen=True)
class PurchaseFilters:
    """Filters for loading purchases.

    Date bounds are inclusive and compared against the purchase date.
    """

    state: Optional[PurchaseState] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    mine_only: bool = False


@dataclass(frozen=True)
class IncomeFilters:
    """Filters for loading income records (inclusive deposit date range)."""

    category_id: Optional[int] = None
    account_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def patch_values(patch) -> dict:
    """Return the fields of a patch that were actually supplied."""
    return {
        f.name: getattr(patch, f.name)
        for f in fields(patch)
        if getattr(patch, f.name) is not None
    }
