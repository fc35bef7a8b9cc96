"""SQLModel definition for daybook entries."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .enums import ModeOfPay, PayStatus, PayType


class Entry(SQLModel, table=True):
    """A single financial movement owned by one tenant."""

    __tablename__: ClassVar[str] = "entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Stored naive in local time.
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False, index=True
    )
    tenant: str = Field(nullable=False, index=True, max_length=64)
    id_in_out: str = Field(default="", max_length=64, description="Voucher reference")
    amount: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    payment_type: PayType = Field(nullable=False, index=True)
    # Legacy rows carry NULL here; see effective_pay_status.
    pay_status: Optional[PayStatus] = Field(default=PayStatus.PAID)
    mode_of_pay: ModeOfPay = Field(default=ModeOfPay.CASH, nullable=False)
    description: Optional[str] = Field(default=None, max_length=255)
    payment_description: Optional[str] = Field(default=None, max_length=255)
    payment_type_specific: Optional[str] = Field(default=None, max_length=64, index=True)

    # The ledger lives in a separate store, so no FK constraint here.
    bank_account_id: Optional[int] = Field(default=None, index=True)
    affects_bank_balance: bool = Field(default=False, nullable=False)

    nurse_id: Optional[str] = Field(default=None, max_length=64, index=True)
    client_id: Optional[str] = Field(default=None, max_length=64, index=True)
    custom_paid_date: Optional[date] = Field(default=None)

    @property
    def effective_pay_status(self) -> Optional[PayStatus]:
        """Payment status with legacy ``None`` read as paid.

        Unrecognised stored values give ``None``.
        """

        if self.pay_status is None:
            return PayStatus.PAID
        return PayStatus.parse(self.pay_status)

