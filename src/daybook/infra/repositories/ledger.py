"""SQLModel implementation of the bank ledger service."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable

from sqlmodel import Session

from ...domain.repositories.ledger import LedgerRequest
from ...errors import AccountNotFound, ValidationError
from ...logging_config import get_logger
from ...models.bank import BankAccount, BankTransaction
from ...models.enums import TransactionStatus, TransactionType
from ._errors import store_errors

logger = get_logger(__name__)


class SQLModelLedgerService:
    """Records deposits/withdrawals and moves the account balance in one session.

    References are stored as given; nothing here rejects a second transaction
    with the same reference.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def deposit(self, request: LedgerRequest) -> BankTransaction:
        return self._record(request, TransactionType.DEPOSIT)

    def withdraw(self, request: LedgerRequest) -> BankTransaction:
        return self._record(request, TransactionType.WITHDRAW)

    def _record(self, request: LedgerRequest, transaction_type: TransactionType) -> BankTransaction:
        amount = Decimal(str(request.amount))
        if amount <= 0:
            raise ValidationError("Ledger amount must be positive")

        with store_errors(f"ledger {transaction_type.value}"), self.session_factory() as session:
            account = session.get(BankAccount, request.account_id)
            if account is None:
                raise AccountNotFound(request.account_id)
            if request.tenant and account.tenant and request.tenant != account.tenant:
                raise ValidationError(
                    f"Account {account.id} belongs to tenant {account.tenant!r}, not {request.tenant!r}"
                )

            txn = BankTransaction(
                bank_account_id=account.id,
                transaction_type=transaction_type,
                amount=amount,
                reference=request.reference,
                description=request.description,
                status=TransactionStatus.COMPLETED,
                tenant=request.tenant or account.tenant,
            )
            balance = Decimal(str(account.balance or 0))
            if transaction_type is TransactionType.DEPOSIT:
                account.balance = balance + amount
            else:
                account.balance = balance - amount
            account.updated_at = datetime.now()

            session.add(account)
            session.add(txn)
            session.commit()
            session.refresh(txn)
            session.expunge(txn)

        logger.info(
            f"Ledger {transaction_type.value} recorded",
            extra={
                "account_id": request.account_id,
                "amount": str(amount),
                "reference": request.reference,
            },
        )
        return txn
