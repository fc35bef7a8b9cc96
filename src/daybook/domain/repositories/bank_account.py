"""Bank account store protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.bank import BankAccount, BankTransaction


class BankAccountStore(Protocol):
    """Read access to bank accounts and their transactions."""

    def get(self, account_id: int) -> BankAccount:
        """Return one account or raise ``AccountNotFound``."""
        ...

    def list(self, *, tenant: Optional[str] = None) -> list[BankAccount]:
        """List accounts, optionally scoped to one tenant."""
        ...

    def create(self, account: BankAccount) -> BankAccount:
        """Create a new account."""
        ...

    def transactions_for(self, account_id: int) -> list[BankTransaction]:
        """Return the account's transactions, newest first."""
        ...

    def find_by_reference(self, reference: str) -> list[BankTransaction]:
        """Return every transaction carrying ``reference``."""
        ...
