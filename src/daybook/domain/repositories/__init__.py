"""Repository protocol definitions for domain layer."""

from .bank_account import BankAccountStore
from .entry import EntryStore
from .ledger import LedgerRequest, LedgerService

__all__ = [
    "BankAccountStore",
    "EntryStore",
    "LedgerRequest",
    "LedgerService",
]
