"""Pytest configuration and shared fixtures for daybook tests.

Every test gets its own throwaway SQLite database so repository and workflow
tests never touch the real application data.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from daybook.infra.database import create_session_factory
from daybook.infra.repositories import (
    SQLModelBankAccountRepository,
    SQLModelEntryRepository,
    SQLModelLedgerService,
)
from daybook.models import BankAccount, Entry, ModeOfPay, PayStatus, PayType

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories get in production."""
    return create_session_factory(db_engine)


@pytest.fixture
def entry_repo(session_factory) -> SQLModelEntryRepository:
    return SQLModelEntryRepository(session_factory)


@pytest.fixture
def bank_account_repo(session_factory) -> SQLModelBankAccountRepository:
    return SQLModelBankAccountRepository(session_factory)


@pytest.fixture
def ledger_service(session_factory) -> SQLModelLedgerService:
    return SQLModelLedgerService(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def bank_account_factory(bank_account_repo):
    """Factory for creating persisted bank accounts."""

    def _create_account(
        account_name: str = "Operating",
        bank_name: str = "Test Bank",
        balance: str = "0.00",
        tenant: str | None = "acme",
    ) -> BankAccount:
        return bank_account_repo.create(
            BankAccount(
                bank_name=bank_name,
                account_name=account_name,
                shortform=account_name[:3].upper(),
                balance=Decimal(balance),
                tenant=tenant,
            )
        )

    return _create_account


@pytest.fixture
def entry_factory(entry_repo):
    """Factory for creating persisted entries.

    Returns:
        Callable: Function that creates and persists Entry instances
    """

    def _create_entry(
        amount: str = "100.00",
        payment_type: PayType = PayType.INCOMING,
        pay_status: PayStatus | None = PayStatus.PAID,
        mode_of_pay: ModeOfPay = ModeOfPay.CASH,
        description: str | None = "Test entry",
        created_at: datetime | None = None,
        tenant: str = "acme",
        bank_account_id: int | None = None,
        affects_bank_balance: bool = False,
        **extra,
    ) -> Entry:
        return entry_repo.create(
            Entry(
                amount=Decimal(amount),
                payment_type=payment_type,
                pay_status=pay_status,
                mode_of_pay=mode_of_pay,
                description=description,
                created_at=created_at or datetime.now(),
                tenant=tenant,
                bank_account_id=bank_account_id,
                affects_bank_balance=affects_bank_balance,
                **extra,
            )
        )

    return _create_entry
