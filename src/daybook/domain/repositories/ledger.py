"""Ledger service protocol and request payload."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from ...models.bank import BankTransaction


@dataclass(frozen=True, slots=True)
class LedgerRequest:
    """Payload shared by deposit and withdraw calls."""

    account_id: int
    amount: Decimal
    description: str
    reference: str
    tenant: Optional[str] = None


class LedgerService(Protocol):
    """Bank ledger that records transactions and moves account balances."""

    def deposit(self, request: LedgerRequest) -> BankTransaction:
        """Record money coming into ``request.account_id``."""
        ...

    def withdraw(self, request: LedgerRequest) -> BankTransaction:
        """Record money leaving ``request.account_id``."""
        ...
