"""Period reports over an entry collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..models.entry import Entry
from ..models.enums import PayType
from ._values import ZERO, money, text_of


@dataclass
class ProfitLossReport:
    start: date
    end: date
    revenue: Decimal
    expenses: Decimal
    entries: list[Entry] = field(default_factory=list)

    @property
    def net_income(self) -> Decimal:
        return self.revenue - self.expenses


@dataclass
class CashFlowReport:
    start: date
    end: date
    inflows: Decimal
    outflows: Decimal
    by_mode: dict[str, dict[str, Decimal]] = field(default_factory=dict)
    entries: list[Entry] = field(default_factory=list)

    @property
    def net_cash_flow(self) -> Decimal:
        return self.inflows - self.outflows


def entries_between(entries: Iterable[Entry], start: date, end: date) -> list[Entry]:
    """Entries whose ``created_at`` day falls in ``[start, end]``."""

    return [e for e in entries if start <= e.created_at.date() <= end]


def _totals(entries: Iterable[Entry]) -> tuple[Decimal, Decimal]:
    incoming = outgoing = ZERO
    for entry in entries:
        if text_of(entry.payment_type) == PayType.INCOMING.value:
            incoming += money(entry.amount)
        else:
            outgoing += money(entry.amount)
    return incoming, outgoing


def profit_loss(entries: Iterable[Entry], start: date, end: date) -> ProfitLossReport:
    """Incoming entries count as revenue, outgoing as expenses."""

    relevant = entries_between(entries, start, end)
    revenue, expenses = _totals(relevant)
    return ProfitLossReport(start=start, end=end, revenue=revenue, expenses=expenses, entries=relevant)


def cash_flow(entries: Iterable[Entry], start: date, end: date) -> CashFlowReport:
    """Inflows/outflows for the period, also split by mode of payment."""

    relevant = entries_between(entries, start, end)
    inflows, outflows = _totals(relevant)

    by_mode: dict[str, dict[str, Decimal]] = {}
    for entry in relevant:
        bucket = by_mode.setdefault(text_of(entry.mode_of_pay) or "unknown", {"in": ZERO, "out": ZERO})
        key = "in" if text_of(entry.payment_type) == PayType.INCOMING.value else "out"
        bucket[key] += money(entry.amount)

    return CashFlowReport(
        start=start,
        end=end,
        inflows=inflows,
        outflows=outflows,
        by_mode=by_mode,
        entries=relevant,
    )


def breakdown_by_category(entries: Iterable[Entry]) -> list[dict[str, object]]:
    """Roll up outgoing totals by ``payment_type_specific``, largest first."""

    totals: dict[str, Decimal] = {}
    for entry in entries:
        if text_of(entry.payment_type) != PayType.OUTGOING.value:
            continue
        name = entry.payment_type_specific or "uncategorized"
        totals[name] = totals.get(name, ZERO) + money(entry.amount)

    breakdown = [{"category": name, "amount": amount} for name, amount in totals.items()]
    breakdown.sort(key=lambda row: row["amount"], reverse=True)
    return breakdown
