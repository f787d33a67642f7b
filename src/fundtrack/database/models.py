"""SQLAlchemy models for the fundtrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User profile model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    role = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class Invitation(Base):
    """Invitation model."""

    __tablename__ = "invitations"

    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False)
    token = Column(String, unique=True, nullable=False)
    invited_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    used = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


class Account(Base):
    """Bank, cash or digital account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    account_number = Column(String, nullable=True)
    bank = Column(String, nullable=True)
    balance = Column(Numeric(14, 2), default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    color = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class CategoryColumns:
    """Columns shared by both category tables."""

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    icon = Column(String, nullable=False)
    color = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


class PurchaseCategory(CategoryColumns, Base):
    """Purchase category model."""

    __tablename__ = "purchase_categories"


class IncomeCategory(CategoryColumns, Base):
    """Income category model."""

    __tablename__ = "income_categories"


class Purchase(Base):
    """Purchase model."""

    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("purchase_categories.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    purchase_date = Column(Date, nullable=False)
    receipt_url = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    state = Column(String, nullable=False, default="pending")
    submitted_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    rejection_reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    category = relationship("PurchaseCategory", lazy="joined")
    account = relationship("Account", lazy="joined")
    submitter = relationship("User", foreign_keys=[submitted_by], lazy="joined")
    reviewer = relationship("User", foreign_keys=[reviewed_by], lazy="joined")


class Income(Base):
    """Income record model."""

    __tablename__ = "income"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("income_categories.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    deposit_date = Column(Date, nullable=False)
    voucher_url = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    submitted_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    category = relationship("IncomeCategory", lazy="joined")
    account = relationship("Account", lazy="joined")
    submitter = relationship("User", lazy="joined")


class SystemConfig(Base):
    """Single-row system configuration model."""

    __tablename__ = "system_config"

    id = Column(Integer, primary_key=True)
    currency_code = Column(String, nullable=False, default="MXN")
    currency_symbol = Column(String, nullable=False, default="$")
    currency_name = Column(String, nullable=False, default="Peso Mexicano")
    organization_name = Column(String, nullable=False, default="")
    logo_url = Column(String, nullable=True)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
