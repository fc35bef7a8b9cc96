"""Bank account and bank transaction models for the ledger store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .enums import TransactionStatus, TransactionType


class BankAccount(SQLModel, table=True):
    """Bank account whose balance is maintained by the ledger service."""

    __tablename__: ClassVar[str] = "bank_account"

    id: Optional[int] = Field(default=None, primary_key=True)
    bank_name: str = Field(nullable=False, max_length=128)
    account_name: str = Field(nullable=False, max_length=128)
    shortform: str = Field(default="", max_length=32)
    account_number: Optional[str] = Field(default=None, max_length=64)
    ifsc: Optional[str] = Field(default=None, max_length=16)
    branch: Optional[str] = Field(default=None, max_length=128)
    balance: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    tenant: Optional[str] = Field(default=None, max_length=64, index=True)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False
    )
    updated_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False
    )

    transactions: list["BankTransaction"] = Relationship(
        back_populates="account",
        sa_relationship=relationship("BankTransaction", back_populates="account"),
    )


class BankTransaction(SQLModel, table=True):
    """A money movement recorded against one bank account."""

    __tablename__: ClassVar[str] = "bank_transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    bank_account_id: int = Field(foreign_key="bank_account.id", nullable=False, index=True)
    transaction_type: TransactionType = Field(nullable=False)
    amount: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    from_account_id: Optional[int] = Field(default=None)
    to_account_id: Optional[int] = Field(default=None)
    cheque_number: Optional[str] = Field(default=None, max_length=32)
    # Daybook-originated rows use "DAYBOOK-<entry id>"; not unique by design of the remote ledger.
    reference: Optional[str] = Field(default=None, max_length=64, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    status: TransactionStatus = Field(default=TransactionStatus.COMPLETED, nullable=False)
    tenant: Optional[str] = Field(default=None, max_length=64)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False, index=True
    )

    account: "BankAccount | None" = Relationship(
        back_populates="transactions",
        sa_relationship=relationship("BankAccount", back_populates="transactions"),
    )
