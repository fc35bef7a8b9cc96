"""Concrete store implementations using SQLModel."""

from .bank_account import SQLModelBankAccountRepository
from .entry import SQLModelEntryRepository
from .ledger import SQLModelLedgerService

__all__ = [
    "SQLModelBankAccountRepository",
    "SQLModelEntryRepository",
    "SQLModelLedgerService",
]
