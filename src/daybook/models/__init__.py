"""SQLModel table exports and shared enums."""

from .bank import BankAccount, BankTransaction
from .directory import Client, Nurse
from .entry import Entry
from .enums import (
    ModeOfPay,
    PaymentCategory,
    PayStatus,
    PayType,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "BankAccount",
    "BankTransaction",
    "Client",
    "Entry",
    "ModeOfPay",
    "Nurse",
    "PaymentCategory",
    "PayStatus",
    "PayType",
    "TransactionStatus",
    "TransactionType",
]
