"""Dashboard totals over rolling time windows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ..models.entry import Entry
from ..models.enums import PayType
from ._values import ZERO, align, money, text_of

WEEK_DAYS = 7
MONTH_DAYS = 30


@dataclass
class Totals:
    incoming: Decimal = field(default=ZERO)
    outgoing: Decimal = field(default=ZERO)

    @property
    def net(self) -> Decimal:
        return self.incoming - self.outgoing

    def add(self, entry: Entry) -> None:
        kind = text_of(entry.payment_type)
        if kind == PayType.INCOMING.value:
            self.incoming += money(entry.amount)
        elif kind == PayType.OUTGOING.value:
            self.outgoing += money(entry.amount)

    def as_dict(self) -> dict[str, Decimal]:
        return {"incoming": self.incoming, "outgoing": self.outgoing, "net": self.net}


@dataclass
class Summary:
    today: Totals = field(default_factory=Totals)
    week: Totals = field(default_factory=Totals)
    month: Totals = field(default_factory=Totals)

    def as_dict(self) -> dict[str, dict[str, Decimal]]:
        return {
            "today": self.today.as_dict(),
            "week": self.week.as_dict(),
            "month": self.month.as_dict(),
        }


@dataclass(frozen=True)
class Window:
    """Inclusive ``[start, end]`` interval."""

    start: datetime
    end: datetime

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def windows_for(now: datetime) -> dict[str, Window]:
    """The today/week/month windows anchored at ``now``."""

    day_start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    day_end = datetime.combine(now.date(), time.max, tzinfo=now.tzinfo)
    return {
        "today": Window(day_start, day_end),
        "week": Window(now - timedelta(days=WEEK_DAYS), now),
        "month": Window(now - timedelta(days=MONTH_DAYS), now),
    }


def aggregate(entries: Iterable[Entry], now: Optional[datetime] = None) -> Summary:
    """Sum incoming/outgoing amounts by ``created_at`` into each window.

    An entry lands in every window that contains it; ``custom_paid_date`` is
    not consulted.
    """

    moment = now or datetime.now()
    windows = windows_for(moment)
    summary = Summary()
    for entry in entries:
        if entry.created_at is None:
            continue
        created = align(entry.created_at, moment)
        if created in windows["today"]:
            summary.today.add(entry)
        if created in windows["week"]:
            summary.week.add(entry)
        if created in windows["month"]:
            summary.month.add(entry)
    return summary
