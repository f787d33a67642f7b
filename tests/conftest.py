"""Shared pytest fixtures for fundtrack tests."""

import os
import tempfile
from decimal import Decimal
from types import SimpleNamespace

import pytest
import pytest_asyncio

from fundtrack.cli.runtime import AppContext
from fundtrack.database.factories import create_sqlite_database
from fundtrack.domain.entities import AccountType, CategoryKind, Role
from fundtrack.domain.payloads import NewAccount, NewCategory, NewUser
from fundtrack.storage.base import BlobStore
from fundtrack.storage.local import LocalBlobStore


class FailingBlobStore(BlobStore):
    """Blob store whose uploads always raise ``error``."""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def upload(self, bucket, path, data, content_type=None):
        self.calls += 1
        raise self.error

    def public_url(self, bucket, path):
        return f"https://files.example.org/{bucket}/{path}"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def blob_store(tmp_path):
    """Local blob store with both buckets created."""
    store = LocalBlobStore(tmp_path / "storage", base_url="https://files.example.org")
    store.create_bucket("receipts")
    store.create_bucket("vouchers")
    return store


@pytest_asyncio.fixture
async def users(temp_db):
    """One active user per role."""
    admin = await temp_db.create_user(
        NewUser(email="ana@example.org", first_name="Ana", last_name="Ruiz", role=Role.ADMINISTRATOR)
    )
    treasurer = await temp_db.create_user(
        NewUser(email="tomas@example.org", first_name="Tomas", last_name="Vega", role=Role.TREASURER)
    )
    manager = await temp_db.create_user(
        NewUser(email="lucia@example.org", first_name="Lucia", last_name="Paz", role=Role.PURCHASE_MANAGER)
    )
    other_manager = await temp_db.create_user(
        NewUser(email="mario@example.org", first_name="Mario", last_name="Soto", role=Role.PURCHASE_MANAGER)
    )
    return SimpleNamespace(admin=admin, treasurer=treasurer, manager=manager, other_manager=other_manager)


@pytest_asyncio.fixture
async def accounts(temp_db):
    """A bank account and a cash box."""
    bank = await temp_db.create_account(
        NewAccount(name="Main Bank", account_type=AccountType.BANK, balance=Decimal("1000.00"), bank="Banorte")
    )
    cash = await temp_db.create_account(
        NewAccount(name="Petty Cash", account_type=AccountType.CASH, balance=Decimal("250.00"))
    )
    return SimpleNamespace(bank=bank, cash=cash)


@pytest_asyncio.fixture
async def categories(temp_db):
    """Purchase and income categories."""
    food = await temp_db.create_category(CategoryKind.PURCHASE, NewCategory(name="Food"))
    vet = await temp_db.create_category(CategoryKind.PURCHASE, NewCategory(name="Veterinary"))
    donations = await temp_db.create_category(CategoryKind.INCOME, NewCategory(name="Donations"))
    events = await temp_db.create_category(CategoryKind.INCOME, NewCategory(name="Events"))
    return SimpleNamespace(food=food, vet=vet, donations=donations, events=events)


@pytest.fixture
def app_for(temp_db):
    """Build the wired services for a signed-in user (or nobody)."""

    def _make(user=None, blob_store=None) -> AppContext:
        return AppContext(temp_db, blob_store, user.id if user is not None else None)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
