"""Small conversions shared by the entry services."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

ZERO = Decimal("0.00")


def text_of(value: Any) -> str:
    """Plain string for enum members, ``""`` for ``None``."""

    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def money(value: Any) -> Decimal:
    """Best-effort Decimal for summing; unparseable or non-finite values count as zero."""

    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ZERO
    return value if value.is_finite() else ZERO


def amount_text(value: Any) -> str:
    """Render an amount the way users type it: ``500``, ``500.5``, ``12.25``."""

    amount = money(value)
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal(1)))
    return format(amount.normalize(), "f")


def align(moment: datetime, reference: datetime) -> datetime:
    """Return ``moment`` comparable with ``reference``.

    Naive values are taken to be UTC when the other side is timezone-aware.
    """

    if (moment.tzinfo is None) == (reference.tzinfo is None):
        return moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc).astimezone(reference.tzinfo)
    return moment.astimezone(timezone.utc).replace(tzinfo=None)
