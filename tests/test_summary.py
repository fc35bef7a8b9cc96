from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from daybook.models import PayType
from daybook.services.summary import aggregate, windows_for
from tests.factories import make_entry

NOON = datetime(2024, 6, 15, 12, 0)


def test_yesterday_late_entry_counts_for_week_and_month_only():
    entry = make_entry(1, amount="250.00", created_at=datetime(2024, 6, 14, 23, 59))

    summary = aggregate([entry], NOON)

    assert summary.today.incoming == Decimal("0")
    assert summary.week.incoming == Decimal("250.00")
    assert summary.month.incoming == Decimal("250.00")


def test_today_covers_whole_calendar_day():
    early = make_entry(1, amount="10.00", created_at=datetime(2024, 6, 15, 0, 0))
    late = make_entry(2, amount="5.00", created_at=datetime(2024, 6, 15, 23, 30))

    summary = aggregate([early, late], NOON)

    assert summary.today.incoming == Decimal("15.00")
    # The later entry is after `now`, so the rolling windows exclude it.
    assert summary.week.incoming == Decimal("10.00")


def test_net_is_incoming_minus_outgoing():
    rows = [
        make_entry(1, amount="1000.00", payment_type=PayType.INCOMING, created_at=NOON - timedelta(hours=1)),
        make_entry(2, amount="400.00", payment_type=PayType.OUTGOING, created_at=NOON - timedelta(days=3)),
        make_entry(3, amount="50.00", payment_type=PayType.OUTGOING, created_at=NOON - timedelta(days=20)),
    ]

    summary = aggregate(rows, NOON)

    assert summary.today.as_dict() == {
        "incoming": Decimal("1000.00"),
        "outgoing": Decimal("0.00"),
        "net": Decimal("1000.00"),
    }
    assert summary.week.net == Decimal("600.00")
    assert summary.month.outgoing == Decimal("450.00")
    assert summary.month.net == Decimal("550.00")


def test_old_entries_contribute_nothing():
    rows = [make_entry(1, amount="99.00", created_at=NOON - timedelta(days=31))]
    summary = aggregate(rows, NOON)
    assert summary.month.incoming == Decimal("0")
    assert summary.as_dict()["week"]["net"] == Decimal("0")


def test_window_bounds_are_inclusive():
    windows = windows_for(NOON)
    assert NOON - timedelta(days=7) in windows["week"]
    assert NOON - timedelta(days=30) in windows["month"]
    assert NOON - timedelta(days=30, seconds=1) not in windows["month"]


def test_month_totals_match_the_in_window_subset():
    rows = [
        make_entry(i, amount=f"{i}.25", created_at=NOON - timedelta(days=i * 3))
        for i in range(1, 20)
    ]
    window = windows_for(NOON)["month"]
    inside = [e for e in rows if e.created_at in window]

    assert aggregate(rows, NOON).month.incoming == aggregate(inside, NOON).month.incoming


def test_recomputes_after_adding_and_removing_entries():
    rows = [make_entry(1, amount="10.00", created_at=NOON)]
    before = aggregate(rows, NOON)
    rows.append(make_entry(2, amount="5.00", payment_type=PayType.OUTGOING, created_at=NOON))
    after = aggregate(rows, NOON)
    rows.pop(0)
    removed = aggregate(rows, NOON)

    assert before.today.net == Decimal("10.00")
    assert after.today.net == Decimal("5.00")
    assert removed.today.net == Decimal("-5.00")


def test_aware_timestamps_are_aligned_with_naive_now():
    aware = make_entry(1, amount="8.00", created_at=datetime(2024, 6, 15, 9, 0, tzinfo=timezone.utc))
    assert aggregate([aware], NOON).today.incoming == Decimal("8.00")


def test_malformed_entries_do_not_break_totals():
    garbage = make_entry(1, amount="10.00", created_at=NOON)
    garbage.amount = "oops"
    undated = make_entry(2, amount="30.00")
    undated.created_at = None
    aware = make_entry(3, amount="20.00", created_at=datetime(2024, 6, 15, 11, tzinfo=timezone.utc))

    summary = aggregate([garbage, undated, aware], NOON)

    assert summary.today.incoming == Decimal("20.00")
    assert summary.month.incoming == Decimal("20.00")
    assert summary.today.outgoing == Decimal("0")
