"""Enumerations shared by entries and the bank ledger."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class PayType(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class PayStatus(str, Enum):
    PAID = "paid"
    UNPAID = "un_paid"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            if key == "unpaid":
                return cls.UNPAID
            for member in cls:
                if member.value == key:
                    return member
        return None

    @classmethod
    def parse(cls, value) -> Optional[PayStatus]:
        """Lenient lookup: ``None`` for missing or unrecognised values."""

        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ModeOfPay(str, Enum):
    CASH = "cash"
    UPI = "upi"
    OTHERS = "others"
    ACCOUNT_TRANSFER = "account_transfer"


class PaymentCategory(str, Enum):
    """Known values for ``Entry.payment_type_specific``."""

    CLIENT_PAYMENT = "client_payment"
    NURSE_PAYMENT = "nurse_payment"
    SALARY = "salary"
    RENT = "rent"
    UTILITIES = "utilities"
    SUPPLIES = "supplies"
    COMMISSION = "commission"
    REFUND = "refund"
    OTHER = "other"


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"
    CHEQUE = "cheque"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
