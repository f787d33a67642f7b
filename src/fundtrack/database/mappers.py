"""Mapper functions to convert between domain models and SQLAlchemy models.

Joined rows (category, account, submitter, reviewer) are mapped into the
embedded entities of purchases and income records.
"""

from decimal import Decimal
from typing import Optional

from fundtrack.domain import entities as domain
from fundtrack.database.models import (
    Account as ORMAccount,
    Income as ORMIncome,
    IncomeCategory as ORMIncomeCategory,
    Invitation as ORMInvitation,
    Purchase as ORMPurchase,
    PurchaseCategory as ORMPurchaseCategory,
    SystemConfig as ORMSystemConfig,
    User as ORMUser,
)


def _money(value) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"))


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        role=domain.Role(orm_user.role),
        active=orm_user.active,
        avatar_url=orm_user.avatar_url,
        created_at=orm_user.created_at,
        updated_at=orm_user.updated_at,
    )


def _optional_user(orm_user: Optional[ORMUser]) -> Optional[domain.User]:
    return user_to_domain(orm_user) if orm_user is not None else None


def invitation_to_domain(orm_invitation: ORMInvitation) -> domain.Invitation:
    """Convert SQLAlchemy Invitation model to domain Invitation entity."""
    return domain.Invitation(
        id=orm_invitation.id,
        email=orm_invitation.email,
        role=domain.Role(orm_invitation.role),
        token=orm_invitation.token,
        invited_by=orm_invitation.invited_by,
        used=orm_invitation.used,
        expires_at=orm_invitation.expires_at,
        created_at=orm_invitation.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        account_number=orm_account.account_number,
        bank=orm_account.bank,
        balance=_money(orm_account.balance),
        active=orm_account.active,
        color=orm_account.color,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def category_to_domain(
    orm_category: ORMPurchaseCategory | ORMIncomeCategory, kind: domain.CategoryKind
) -> domain.Category:
    """Convert either SQLAlchemy category model to a domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        kind=kind,
        name=orm_category.name,
        description=orm_category.description,
        icon=orm_category.icon,
        color=orm_category.color,
        active=orm_category.active,
        created_at=orm_category.created_at,
    )


def purchase_to_domain(orm_purchase: ORMPurchase) -> domain.Purchase:
    """Convert SQLAlchemy Purchase model (with joins) to domain Purchase entity."""
    return domain.Purchase(
        id=orm_purchase.id,
        description=orm_purchase.description,
        amount=_money(orm_purchase.amount),
        category_id=orm_purchase.category_id,
        account_id=orm_purchase.account_id,
        purchase_date=orm_purchase.purchase_date,
        receipt_url=orm_purchase.receipt_url,
        notes=orm_purchase.notes,
        state=domain.PurchaseState(orm_purchase.state),
        submitted_by=orm_purchase.submitted_by,
        reviewed_by=orm_purchase.reviewed_by,
        reviewed_at=orm_purchase.reviewed_at,
        rejection_reason=orm_purchase.rejection_reason,
        created_at=orm_purchase.created_at,
        updated_at=orm_purchase.updated_at,
        category=(
            category_to_domain(orm_purchase.category, domain.CategoryKind.PURCHASE)
            if orm_purchase.category is not None
            else None
        ),
        account=account_to_domain(orm_purchase.account) if orm_purchase.account is not None else None,
        submitter=_optional_user(orm_purchase.submitter),
        reviewer=_optional_user(orm_purchase.reviewer),
    )


def income_to_domain(orm_income: ORMIncome) -> domain.IncomeRecord:
    """Convert SQLAlchemy Income model (with joins) to domain IncomeRecord entity."""
    return domain.IncomeRecord(
        id=orm_income.id,
        description=orm_income.description,
        amount=_money(orm_income.amount),
        category_id=orm_income.category_id,
        account_id=orm_income.account_id,
        deposit_date=orm_income.deposit_date,
        voucher_url=orm_income.voucher_url,
        notes=orm_income.notes,
        submitted_by=orm_income.submitted_by,
        created_at=orm_income.created_at,
        updated_at=orm_income.updated_at,
        category=(
            category_to_domain(orm_income.category, domain.CategoryKind.INCOME)
            if orm_income.category is not None
            else None
        ),
        account=account_to_domain(orm_income.account) if orm_income.account is not None else None,
        submitter=_optional_user(orm_income.submitter),
    )


def config_to_domain(orm_config: ORMSystemConfig) -> domain.SystemConfig:
    """Convert SQLAlchemy SystemConfig model to domain SystemConfig entity."""
    return domain.SystemConfig(
        id=orm_config.id,
        currency_code=orm_config.currency_code,
        currency_symbol=orm_config.currency_symbol,
        currency_name=orm_config.currency_name,
        organization_name=orm_config.organization_name,
        logo_url=orm_config.logo_url,
        updated_at=orm_config.updated_at,
        updated_by=orm_config.updated_by,
    )
