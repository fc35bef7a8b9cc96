"""SQLModel implementation of the bank account store."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...errors import AccountNotFound
from ...models.bank import BankAccount, BankTransaction
from ._errors import store_errors


class SQLModelBankAccountRepository:
    """SQLModel-based bank account repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get(self, account_id: int) -> BankAccount:
        with store_errors("get bank account"), self.session_factory() as session:
            account = session.get(BankAccount, account_id)
            if account is None:
                raise AccountNotFound(account_id)
            session.expunge(account)
            return account

    def list(self, *, tenant: Optional[str] = None) -> list[BankAccount]:
        """List accounts ordered by name."""
        with store_errors("list bank accounts"), self.session_factory() as session:
            statement = select(BankAccount)
            if tenant is not None:
                statement = statement.where(BankAccount.tenant == tenant)
            statement = statement.order_by(BankAccount.account_name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, account: BankAccount) -> BankAccount:
        """Create a new account."""
        with store_errors("create bank account"), self.session_factory() as session:
            session.add(account)
            session.commit()
            session.refresh(account)
            session.expunge(account)
            return account

    def transactions_for(self, account_id: int) -> list[BankTransaction]:
        """Return the account's transactions, newest first."""
        with store_errors("list bank transactions"), self.session_factory() as session:
            statement = (
                select(BankTransaction)
                .where(BankTransaction.bank_account_id == account_id)
                .order_by(BankTransaction.created_at.desc(), BankTransaction.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def find_by_reference(self, reference: str) -> list[BankTransaction]:
        """Return every transaction carrying ``reference``."""
        with store_errors("find bank transactions"), self.session_factory() as session:
            statement = (
                select(BankTransaction)
                .where(BankTransaction.reference == reference)
                .order_by(BankTransaction.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
